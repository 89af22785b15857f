"""
Collision Data Model
====================

Immutable records for electron collision processes read from LXCat/BOLSIG
cross-section files.

Units:
    Energy: eV
    Cross section: m^2

Key Classes:
    ProcessType: Closed enumeration of the six LXCat process blocks.
    CrossSectionPoint: One (energy, value) pair of a tabulated cross section.
    Collision: One parsed process block with its metadata and point table.
"""

from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from types import MappingProxyType
from typing import Mapping, NamedTuple, Optional, Tuple, Union

import numpy as np

from lxcat_xs.physics.interpolation import cross_section_at, points_to_arrays


class ProcessType(str, Enum):
    """LXCat process keyword. The value is the exact header token."""

    ELASTIC = 'ELASTIC'
    EFFECTIVE = 'EFFECTIVE'
    EXCITATION = 'EXCITATION'
    ATTACHMENT = 'ATTACHMENT'
    IONIZATION = 'IONIZATION'
    ROTATION = 'ROTATION'

    @classmethod
    def from_keyword(cls, token: str) -> Optional['ProcessType']:
        """Return the process for an exact (case-sensitive) keyword, else None."""
        try:
            return cls(token)
        except ValueError:
            return None

    @property
    def has_threshold(self) -> bool:
        """True for processes with a reaction threshold."""
        return self in THRESHOLD_PROCESSES

    def __str__(self) -> str:
        return self.value


THRESHOLD_PROCESSES = frozenset({
    ProcessType.EXCITATION,
    ProcessType.IONIZATION,
    ProcessType.ROTATION,
})


class CrossSectionPoint(NamedTuple):
    """Cross section value [m^2] at electron energy [eV]."""

    energy: float
    value: float


def _freeze_info(info: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    return MappingProxyType(dict(info or {}))


@dataclass(frozen=True)
class Collision:
    """
    One electron collision process from an LXCat block.

    Which scalar fields are meaningful depends on ``process``:

    - ELASTIC, EFFECTIVE: ``mass_ratio`` (electron to target mass ratio)
    - EXCITATION: ``threshold`` and ``stat_weight_ratio``
      (upper to lower statistical weight)
    - IONIZATION: ``threshold``
    - ROTATION: ``lower_energy``, ``lower_stat_weight``, ``upper_energy``,
      ``upper_stat_weight`` (``threshold`` stays 0)
    - ATTACHMENT: none

    Attributes:
        process: Process type of the block
        species: Target species token (e.g. 'Ar', 'N2')
        data: Tabulated cross section, ordered by increasing energy
        info: Free-form ``key: value`` metadata of the block (read-only)

    Example:
        >>> c = Collision(ProcessType.IONIZATION, 'Ar',
        ...               data=(CrossSectionPoint(15.76, 0.0),
        ...                     CrossSectionPoint(20.0, 1.0e-20)),
        ...               threshold=15.76)
        >>> c.describe()
        'Cross section of Ar ionization. Threshold: 15.76'
    """

    process: ProcessType
    species: str
    data: Tuple[CrossSectionPoint, ...]
    mass_ratio: float = 0.0
    threshold: float = 0.0
    stat_weight_ratio: float = 1.0
    lower_energy: float = 0.0
    lower_stat_weight: float = 0.0
    upper_energy: float = 0.0
    upper_stat_weight: float = 0.0
    info: Mapping[str, str] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        # frozen dataclass: bypass __setattr__ for normalisation
        object.__setattr__(self, 'process', ProcessType(self.process))
        data = tuple(CrossSectionPoint(float(e), float(v)) for e, v in self.data)
        if not data:
            raise ValueError(
                f"Collision {self.species} {self.process.value} needs at least one data point"
            )
        object.__setattr__(self, 'data', data)
        object.__setattr__(self, 'info', _freeze_info(self.info))

    @cached_property
    def energies(self) -> np.ndarray:
        """Read-only array of tabulated energies [eV]."""
        return self._arrays[0]

    @cached_property
    def values(self) -> np.ndarray:
        """Read-only array of tabulated cross sections [m^2]."""
        return self._arrays[1]

    @cached_property
    def _arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        energies, values = points_to_arrays(self.data)
        energies.flags.writeable = False
        values.flags.writeable = False
        return energies, values

    @property
    def max_cross_section(self) -> float:
        """Largest tabulated cross section value [m^2]."""
        return float(self.values.max())

    @property
    def energy_range(self) -> Tuple[float, float]:
        """(first, last) tabulated energy [eV]."""
        return self.data[0].energy, self.data[-1].energy

    def cross_section_at(
        self, energy: Union[float, np.ndarray]
    ) -> Union[float, np.ndarray]:
        """
        Cross section [m^2] at the given energy [eV].

        Linear interpolation of the piecewise linear table. Below the first or
        beyond the last point the cross section is held constant at the
        corresponding boundary value.
        """
        return cross_section_at(self.energies, self.values, energy)

    def describe(self) -> str:
        # shortest round-trip form, integral values without '.0'
        threshold = repr(float(self.threshold))
        if threshold.endswith('.0'):
            threshold = threshold[:-2]
        return (
            f"Cross section of {self.species} {self.process.value.lower()}. "
            f"Threshold: {threshold}"
        )

    def __str__(self) -> str:
        return self.describe()
