"""
Collision Collection
====================

Ordered, immutable catalog of the collisions loaded from one LXCat file, with
the aggregate quantities a transport code needs every step:

- total cross section at an energy (does a collision happen?)
- total cross section of one process type (which kind of collision?)
- surplus cross section, an energy-independent majorant for null-collision
  Monte Carlo sampling

Also provides a tabular view (pandas) for inspection.

Key Classes:
    Collection: Sequence of Collision records in file order.
"""

from collections.abc import Sequence
from typing import Iterable, List, Union

import numpy as np
import pandas as pd

from lxcat_xs.data.collision import Collision, ProcessType


class Collection(Sequence):
    """
    Ordered collection of collision processes.

    Collisions are kept in file order with no de-duplication: two blocks for
    the same (species, process) are two entries.  The collection cannot be
    modified after construction.

    Example:
        >>> collection = load_collection('Ar.txt')
        >>> collection.total_cross_section_at(20.0)
        >>> collection.total_cross_section_of_kind_at(ProcessType.IONIZATION, 20.0)
        >>> collection.surplus_cross_section()
    """

    __slots__ = ('_collisions',)

    def __init__(self, collisions: Iterable[Collision] = ()):
        self._collisions = tuple(collisions)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return Collection(self._collisions[index])
        return self._collisions[index]

    def __len__(self) -> int:
        return len(self._collisions)

    def __iter__(self):
        return iter(self._collisions)

    def __eq__(self, other):
        if not isinstance(other, Collection):
            return NotImplemented
        return self._collisions == other._collisions

    def __hash__(self):
        return hash(self._collisions)

    def __repr__(self) -> str:
        return f"Collection({len(self)} collisions, species={self.species})"

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------

    def total_cross_section_at(
        self, energy: Union[float, np.ndarray]
    ) -> Union[float, np.ndarray]:
        """Sum of all cross sections [m^2] at ``energy`` [eV]."""
        return self._sum_at(self._collisions, energy)

    def total_cross_section_of_kind_at(
        self, process: ProcessType, energy: Union[float, np.ndarray]
    ) -> Union[float, np.ndarray]:
        """Sum of cross sections [m^2] of one process type at ``energy`` [eV]."""
        process = ProcessType(process)
        return self._sum_at([c for c in self._collisions if c.process is process], energy)

    def surplus_cross_section(self) -> float:
        """
        Sum over all processes of the largest tabulated cross section [m^2].

        An upper bound of ``total_cross_section_at`` at any energy; usable as
        the majorant in null-collision sampling and to bound the mean free
        path from below.
        """
        return float(sum(c.max_cross_section for c in self._collisions))

    @staticmethod
    def _sum_at(collisions, energy):
        total = np.zeros(np.shape(energy), dtype=float)
        for collision in collisions:
            total = total + collision.cross_section_at(energy)
        if total.ndim == 0:
            return float(total)
        return total

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def of_kind(self, process: ProcessType) -> 'Collection':
        """Collisions of one process type, in file order."""
        process = ProcessType(process)
        return Collection(c for c in self._collisions if c.process is process)

    def for_species(self, species: str) -> 'Collection':
        """Collisions with the given target species, in file order."""
        return Collection(c for c in self._collisions if c.species == species)

    @property
    def species(self) -> List[str]:
        """Distinct target species in order of first appearance."""
        return list(dict.fromkeys(c.species for c in self._collisions))

    # ------------------------------------------------------------------
    # Tabular views
    # ------------------------------------------------------------------

    def to_dataframe(self) -> pd.DataFrame:
        """
        Long-format table with one row per tabulated point.

        Returns:
            DataFrame with columns: block, species, process, threshold,
            energy, cross_section
        """
        frames = [
            pd.DataFrame({
                'block': i,
                'species': c.species,
                'process': c.process.value,
                'threshold': c.threshold,
                'energy': c.energies,
                'cross_section': c.values,
            })
            for i, c in enumerate(self._collisions)
        ]
        if not frames:
            return pd.DataFrame(
                columns=['block', 'species', 'process', 'threshold', 'energy', 'cross_section']
            )
        return pd.concat(frames, ignore_index=True)

    def summary(self) -> pd.DataFrame:
        """
        One row per collision.

        Returns:
            DataFrame with columns: species, process, threshold, mass_ratio,
            n_points, energy_min, energy_max, max_cross_section
        """
        rows = []
        for c in self._collisions:
            energy_min, energy_max = c.energy_range
            rows.append({
                'species': c.species,
                'process': c.process.value,
                'threshold': c.threshold,
                'mass_ratio': c.mass_ratio,
                'n_points': len(c.data),
                'energy_min': energy_min,
                'energy_max': energy_max,
                'max_cross_section': c.max_cross_section,
            })
        return pd.DataFrame(rows, columns=[
            'species', 'process', 'threshold', 'mass_ratio',
            'n_points', 'energy_min', 'energy_max', 'max_cross_section',
        ])
