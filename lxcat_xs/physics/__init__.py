"""
Cross-Section Physics Module
============================

Energy-indexed evaluation of tabulated cross sections and the physical
constraints applied to them at load time.

Key Components:
    cross_section_at: Piecewise-linear interpolation with flat extrapolation
    ThresholdConstraint: Enforces sigma(E) = 0 at and below reaction threshold
    enforce_threshold: Functional form of ThresholdConstraint

Physics Constraints:
    1. Thresholds: sigma(E) = 0 for E <= E_threshold
    2. Flat extrapolation: sigma is held at its boundary values outside the
       tabulated energy range
"""

from lxcat_xs.physics.interpolation import cross_section_at, points_to_arrays


def __getattr__(name):
    """Lazy import for modules that depend on the data model."""
    if name == "ThresholdConstraint":
        from lxcat_xs.physics.threshold_constraint import ThresholdConstraint
        return ThresholdConstraint
    if name == "enforce_threshold":
        from lxcat_xs.physics.threshold_constraint import enforce_threshold
        return enforce_threshold
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "cross_section_at",
    "points_to_arrays",
    "ThresholdConstraint",
    "enforce_threshold",
]
