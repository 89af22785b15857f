"""
Tests for Collision records and Collection aggregates.

Uses small hand-built collisions; no files required.
"""

import dataclasses

import numpy as np
import pandas as pd
import pytest

from lxcat_xs.data import Collection, Collision, CrossSectionPoint, ProcessType


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _collision(process, species, pairs, **kwargs):
    return Collision(
        process=process,
        species=species,
        data=tuple(CrossSectionPoint(e, v) for e, v in pairs),
        **kwargs,
    )


@pytest.fixture
def collection():
    return Collection([
        _collision(ProcessType.ELASTIC, 'Ar',
                   [(0.0, 7.5e-20), (1.0, 1.0e-20), (10.0, 1.5e-19), (100.0, 1.0e-20)],
                   mass_ratio=1.36e-5),
        _collision(ProcessType.EXCITATION, 'Ar',
                   [(11.55, 0.0), (12.0, 7.3e-22), (20.0, 5.0e-21), (100.0, 2.0e-21)],
                   threshold=11.55),
        _collision(ProcessType.IONIZATION, 'Ar',
                   [(15.76, 0.0), (20.0, 2.0e-21), (100.0, 2.8e-20)],
                   threshold=15.76),
        _collision(ProcessType.EXCITATION, 'N2',
                   [(6.17, 0.0), (10.0, 1.0e-20), (50.0, 4.0e-21)],
                   threshold=6.17, info={'SPECIES': 'e / N2'}),
    ])


ENERGIES = [0.0, 0.5, 5.0, 11.55, 12.0, 15.0, 19.0, 50.0, 100.0, 1e4]


# ===================================================================
# Collision
# ===================================================================

class TestCollision:

    def test_describe(self):
        c = _collision(ProcessType.EXCITATION, 'Ar', [(11.55, 0.0), (12.0, 1e-21)], threshold=11.55)
        assert c.describe() == "Cross section of Ar excitation. Threshold: 11.55"

    @pytest.mark.parametrize("threshold, text", [
        (0.0, "0"),
        (100.0, "100"),
        (15.76, "15.76"),
        (1e-05, "1e-05"),
    ])
    def test_describe_threshold_format(self, threshold, text):
        c = _collision(ProcessType.IONIZATION, 'Ar', [(200.0, 1e-21)], threshold=threshold)
        assert c.describe() == f"Cross section of Ar ionization. Threshold: {text}"

    def test_empty_data_rejected(self):
        with pytest.raises(ValueError):
            _collision(ProcessType.ELASTIC, 'Ar', [])

    def test_frozen(self, collection):
        with pytest.raises(dataclasses.FrozenInstanceError):
            collection[0].threshold = 3.0

    def test_info_read_only(self, collection):
        with pytest.raises(TypeError):
            collection[3].info['SPECIES'] = 'changed'
        assert collection[3].info['SPECIES'] == 'e / N2'

    def test_info_copied_from_source(self):
        source = {'KEY': 'value'}
        c = _collision(ProcessType.ELASTIC, 'Ar', [(1.0, 1.0)], info=source)
        source['KEY'] = 'changed'
        assert c.info['KEY'] == 'value'

    def test_arrays_read_only(self, collection):
        energies = collection[0].energies
        np.testing.assert_array_equal(energies, [0.0, 1.0, 10.0, 100.0])
        with pytest.raises(ValueError):
            energies[0] = 5.0

    def test_max_and_range(self, collection):
        assert collection[0].max_cross_section == 1.5e-19
        assert collection[2].energy_range == (15.76, 100.0)

    def test_process_from_keyword(self):
        c = _collision('IONIZATION', 'Ar', [(1.0, 1.0)])
        assert c.process is ProcessType.IONIZATION

    def test_process_type_helpers(self):
        assert ProcessType.from_keyword('ROTATION') is ProcessType.ROTATION
        assert ProcessType.from_keyword('rotation') is None
        assert ProcessType.IONIZATION.has_threshold
        assert not ProcessType.ATTACHMENT.has_threshold


# ===================================================================
# Aggregates
# ===================================================================

class TestAggregates:

    @pytest.mark.parametrize("energy", ENERGIES)
    def test_total_is_sum_of_parts(self, collection, energy):
        expected = sum(c.cross_section_at(energy) for c in collection)
        assert collection.total_cross_section_at(energy) == pytest.approx(expected, rel=1e-12)

    def test_total_array(self, collection):
        energies = np.array(ENERGIES)
        totals = collection.total_cross_section_at(energies)
        expected = [collection.total_cross_section_at(e) for e in ENERGIES]
        np.testing.assert_allclose(totals, expected, rtol=1e-12)

    def test_total_of_kind(self, collection):
        energy = 30.0
        excitation = collection.total_cross_section_of_kind_at(ProcessType.EXCITATION, energy)
        assert excitation == pytest.approx(
            collection[1].cross_section_at(energy) + collection[3].cross_section_at(energy)
        )
        assert collection.total_cross_section_of_kind_at(ProcessType.ATTACHMENT, energy) == 0.0

    def test_kinds_add_up_to_total(self, collection):
        for energy in ENERGIES:
            by_kind = sum(
                collection.total_cross_section_of_kind_at(p, energy) for p in ProcessType
            )
            assert by_kind == pytest.approx(collection.total_cross_section_at(energy))

    def test_total_of_kind_accepts_keyword(self, collection):
        assert collection.total_cross_section_of_kind_at('IONIZATION', 100.0) == pytest.approx(2.8e-20)

    def test_surplus(self, collection):
        assert collection.surplus_cross_section() == pytest.approx(
            1.5e-19 + 5.0e-21 + 2.8e-20 + 1.0e-20
        )

    def test_surplus_bounds_total(self, collection):
        surplus = collection.surplus_cross_section()
        totals = collection.total_cross_section_at(np.logspace(-3, 4, 200))
        assert np.all(totals <= surplus)

    def test_empty_collection(self):
        empty = Collection()
        assert empty.total_cross_section_at(10.0) == 0.0
        assert empty.surplus_cross_section() == 0.0
        assert len(empty) == 0


# ===================================================================
# Sequence behaviour and selection
# ===================================================================

class TestSequence:

    def test_order_and_indexing(self, collection):
        assert len(collection) == 4
        assert collection[-1].species == 'N2'
        assert [c.process for c in collection][:2] == [ProcessType.ELASTIC, ProcessType.EXCITATION]

    def test_slice_returns_collection(self, collection):
        head = collection[:2]
        assert isinstance(head, Collection)
        assert len(head) == 2

    def test_immutable(self, collection):
        with pytest.raises(TypeError):
            collection[0] = collection[1]
        with pytest.raises(AttributeError):
            collection.append(collection[0])

    def test_of_kind(self, collection):
        excitation = collection.of_kind(ProcessType.EXCITATION)
        assert [c.species for c in excitation] == ['Ar', 'N2']

    def test_for_species(self, collection):
        assert len(collection.for_species('Ar')) == 3
        assert len(collection.for_species('He')) == 0

    def test_species(self, collection):
        assert collection.species == ['Ar', 'N2']

    def test_equality(self, collection):
        assert collection == Collection(list(collection))
        assert collection != collection[:3]


# ===================================================================
# Tabular views
# ===================================================================

class TestDataFrames:

    def test_to_dataframe(self, collection):
        df = collection.to_dataframe()
        assert isinstance(df, pd.DataFrame)
        assert list(df.columns) == ['block', 'species', 'process', 'threshold', 'energy', 'cross_section']
        assert len(df) == sum(len(c.data) for c in collection)
        ionization = df[df['process'] == 'IONIZATION']
        assert ionization['energy'].tolist() == [15.76, 20.0, 100.0]
        assert (ionization['block'] == 2).all()

    def test_to_dataframe_empty(self):
        df = Collection().to_dataframe()
        assert len(df) == 0
        assert 'cross_section' in df.columns

    def test_summary(self, collection):
        summary = collection.summary()
        assert len(summary) == 4
        row = summary.iloc[0]
        assert row['process'] == 'ELASTIC'
        assert row['mass_ratio'] == pytest.approx(1.36e-5)
        assert row['n_points'] == 4
        assert row['energy_max'] == 100.0
        assert row['max_cross_section'] == pytest.approx(1.5e-19)
