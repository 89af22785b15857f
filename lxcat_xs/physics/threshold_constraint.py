"""
Threshold Constraint Module
============================

Enforces reaction threshold behavior on tabulated cross sections.
"""

import logging
from typing import Iterable, Tuple

from lxcat_xs.data.collision import CrossSectionPoint, ProcessType
from lxcat_xs.errors import EmptyCrossSectionError

logger = logging.getLogger(__name__)


class ThresholdConstraint:
    """
    Enforces threshold: sigma(E) = 0 for E <= E_threshold.

    Physical Meaning:
        Excitation, ionization and rotational excitation need a minimum
        electron energy. At and below threshold the process is energetically
        impossible, so tabulated points there are dropped and the table is
        anchored with a zero at the threshold itself.

    Elastic, effective and attachment processes have no threshold and pass
    through unchanged.
    """

    def __init__(self, process: ProcessType, threshold: float = 0.0):
        """
        Initialize threshold constraint.

        Args:
            process: Process type of the table
            threshold: Threshold energy [eV]; ignored for processes without one
        """
        self.process = ProcessType(process)
        self.threshold = float(threshold)

    def __call__(self, points: Iterable[CrossSectionPoint]) -> Tuple[CrossSectionPoint, ...]:
        """
        Apply the constraint.

        Args:
            points: Raw (energy, value) table, ordered by energy

        Returns:
            Normalized table

        Raises:
            EmptyCrossSectionError: If no point survives
        """
        points = [CrossSectionPoint(*p) for p in points]

        if not self.process.has_threshold:
            if not points:
                raise EmptyCrossSectionError(
                    "Cross-section table is empty",
                    process=self.process.value,
                )
            return tuple(points)

        kept = [p for p in points if p.energy > self.threshold]
        if not kept:
            raise EmptyCrossSectionError(
                f"No cross-section points above threshold {self.threshold} eV "
                f"({len(points)} tabulated)",
                process=self.process.value,
            )

        dropped = len(points) - len(kept)
        if dropped:
            logger.debug(f"{self.process.value}: dropped {dropped} points at or below "
                         f"threshold {self.threshold} eV")

        if kept[0].value != 0.0:
            kept.insert(0, CrossSectionPoint(self.threshold, 0.0))
        return tuple(kept)


def enforce_threshold(
    process: ProcessType,
    points: Iterable[CrossSectionPoint],
    threshold: float = 0.0,
) -> Tuple[CrossSectionPoint, ...]:
    """Normalize ``points`` so the cross section is zero at and below threshold.

    See :class:`ThresholdConstraint`.
    """
    return ThresholdConstraint(process, threshold)(points)
