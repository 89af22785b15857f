"""
LXCat-XS: Electron Collision Cross Sections for Plasma Simulation
==================================================================

Loads electron-impact cross sections in the LXCat/BOLSIG text format and
evaluates them at arbitrary electron energies, as input data for Monte Carlo
collision codes and Boltzmann solvers.

Units:
    Energy: eV
    Cross section: m^2

Modules:
    data: Collision data model and Collection aggregates
    physics: Interpolation engine and threshold constraint
    ingest: LXCat/BOLSIG file reader
    visualization: Cross-section plots (matplotlib, imported on demand)

Example:
    >>> from lxcat_xs import load_collection, ProcessType
    >>> collection = load_collection('data/Ar_Biagi.txt')
    >>> collection.total_cross_section_at(20.0)
    >>> collection.total_cross_section_of_kind_at(ProcessType.IONIZATION, 20.0)
    >>> collection.surplus_cross_section()

License: MIT
"""

__version__ = "0.1.0"

from lxcat_xs import data, physics, ingest
from lxcat_xs.data import Collection, Collision, CrossSectionPoint, ProcessType
from lxcat_xs.errors import (
    LXCatFormatError,
    MalformedNumberError,
    StructuralError,
    TruncatedBlockError,
    EmptyCrossSectionError,
)
from lxcat_xs.ingest import LXCatReader, LXCatReaderConfig, load_collection


def __getattr__(name):
    """Lazy import for matplotlib-dependent modules."""
    if name == "visualization":
        import importlib
        return importlib.import_module("lxcat_xs.visualization")
    if name == "CrossSectionFigure":
        from lxcat_xs.visualization import CrossSectionFigure
        return CrossSectionFigure
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "data",
    "physics",
    "ingest",
    "visualization",
    "Collection",
    "Collision",
    "CrossSectionPoint",
    "ProcessType",
    "LXCatReader",
    "LXCatReaderConfig",
    "load_collection",
    "LXCatFormatError",
    "MalformedNumberError",
    "StructuralError",
    "TruncatedBlockError",
    "EmptyCrossSectionError",
    "CrossSectionFigure",
]
