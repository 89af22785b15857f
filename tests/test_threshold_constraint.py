"""
Tests for the reaction threshold constraint.

Covers filtering at and below threshold, the synthetic zero point,
pass-through for processes without a threshold, and empty-table errors.
"""

import unittest

from lxcat_xs.data.collision import CrossSectionPoint, ProcessType
from lxcat_xs.errors import EmptyCrossSectionError, StructuralError
from lxcat_xs.physics.threshold_constraint import ThresholdConstraint, enforce_threshold


def _points(*pairs):
    return [CrossSectionPoint(e, v) for e, v in pairs]


# ===================================================================
# Threshold-bearing processes
# ===================================================================

class TestThresholdProcesses(unittest.TestCase):
    """EXCITATION, IONIZATION and ROTATION tables are truncated at threshold."""

    def test_points_at_and_below_threshold_dropped(self):
        raw = _points((5.0, 1.0), (10.0, 2.0), (12.0, 3.0), (20.0, 4.0))
        result = enforce_threshold(ProcessType.IONIZATION, raw, threshold=10.0)
        self.assertEqual(result[0], CrossSectionPoint(10.0, 0.0))
        for point in result[1:]:
            self.assertGreater(point.energy, 10.0)
        self.assertEqual(len(result), 3)

    def test_zero_prepended_when_first_value_nonzero(self):
        raw = _points((12.0, 3.0), (20.0, 4.0))
        result = enforce_threshold(ProcessType.EXCITATION, raw, threshold=11.5)
        self.assertEqual(result, (
            CrossSectionPoint(11.5, 0.0),
            CrossSectionPoint(12.0, 3.0),
            CrossSectionPoint(20.0, 4.0),
        ))

    def test_no_prepend_when_first_value_zero(self):
        raw = _points((12.0, 0.0), (20.0, 4.0))
        result = enforce_threshold(ProcessType.EXCITATION, raw, threshold=11.5)
        self.assertEqual(result, tuple(raw))

    def test_rotation_uses_threshold(self):
        raw = _points((0.001, 0.0), (0.01, 1e-21))
        result = enforce_threshold(ProcessType.ROTATION, raw, threshold=0.001)
        self.assertEqual(result[0], CrossSectionPoint(0.001, 0.0))
        self.assertEqual(result[1], CrossSectionPoint(0.01, 1e-21))

    def test_all_points_below_threshold_raises(self):
        raw = _points((1.0, 1.0), (2.0, 2.0))
        with self.assertRaises(EmptyCrossSectionError) as cm:
            enforce_threshold(ProcessType.IONIZATION, raw, threshold=2.0)
        self.assertEqual(cm.exception.process, 'IONIZATION')
        self.assertIsInstance(cm.exception, StructuralError)
        self.assertIsInstance(cm.exception, ValueError)

    def test_first_value_is_zero_after_normalization(self):
        raw = _points((15.0, 5.0), (16.0, 6.0), (30.0, 7.0))
        for process in (ProcessType.EXCITATION, ProcessType.IONIZATION, ProcessType.ROTATION):
            result = enforce_threshold(process, raw, threshold=15.5)
            self.assertEqual(result[0].value, 0.0)


# ===================================================================
# Processes without threshold
# ===================================================================

class TestNoThresholdProcesses(unittest.TestCase):

    def test_pass_through_unchanged(self):
        raw = _points((0.0, 7.5e-20), (1.0, 1e-20), (10.0, 1.5e-19))
        for process in (ProcessType.ELASTIC, ProcessType.EFFECTIVE, ProcessType.ATTACHMENT):
            result = enforce_threshold(process, raw, threshold=5.0)
            self.assertEqual(result, tuple(raw))

    def test_empty_table_raises(self):
        with self.assertRaises(EmptyCrossSectionError):
            enforce_threshold(ProcessType.ELASTIC, [], threshold=0.0)


# ===================================================================
# ThresholdConstraint object
# ===================================================================

class TestThresholdConstraintClass(unittest.TestCase):

    def test_callable_matches_function(self):
        raw = _points((10.0, 1.0), (20.0, 2.0))
        constraint = ThresholdConstraint(ProcessType.IONIZATION, 15.0)
        self.assertEqual(constraint(raw), enforce_threshold(ProcessType.IONIZATION, raw, 15.0))

    def test_accepts_keyword_string(self):
        constraint = ThresholdConstraint('EXCITATION', 1.0)
        self.assertIs(constraint.process, ProcessType.EXCITATION)

    def test_accepts_plain_tuples(self):
        result = ThresholdConstraint(ProcessType.IONIZATION, 1.0)([(2.0, 3.0)])
        self.assertEqual(result, (CrossSectionPoint(1.0, 0.0), CrossSectionPoint(2.0, 3.0)))


if __name__ == '__main__':
    unittest.main()
