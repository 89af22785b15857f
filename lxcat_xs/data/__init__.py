"""
Collision Data Module
=====================

In-memory model of electron collision cross sections.

Key Components:
    ProcessType: The six LXCat process blocks
    CrossSectionPoint: (energy [eV], cross section [m^2]) pair
    Collision: One process with metadata and its tabulated cross section
    Collection: Ordered catalog of collisions with aggregate queries
"""

from lxcat_xs.data.collision import (
    ProcessType,
    CrossSectionPoint,
    Collision,
    THRESHOLD_PROCESSES,
)
from lxcat_xs.data.collection import Collection

__all__ = [
    "ProcessType",
    "CrossSectionPoint",
    "Collision",
    "Collection",
    "THRESHOLD_PROCESSES",
]
