"""
Piecewise-Linear Cross-Section Interpolation
============================================

Evaluates a tabulated cross section sigma(E) at arbitrary electron energies.

Between two tabulated points the cross section is linear in energy. Outside
the tabulated range it is held constant at the boundary value (flat
extrapolation), never extending the linear trend: cross sections are measured
over a finite range only.

Each query is a binary search over the energy grid, O(log n).

Usage:
    >>> energies = np.array([10.0, 16.0, 32.0, 500.0])
    >>> values = np.array([0.0, 1.0, 2.0, 7.0])
    >>> cross_section_at(energies, values, 266.0)
    4.5
    >>> cross_section_at(energies, values, 600.0)
    7.0
"""

from typing import Iterable, Tuple, Union

import numpy as np


def points_to_arrays(points: Iterable[Tuple[float, float]]) -> Tuple[np.ndarray, np.ndarray]:
    """Split a sequence of (energy, value) pairs into two float arrays."""
    table = np.asarray(list(points), dtype=float).reshape(-1, 2)
    return np.ascontiguousarray(table[:, 0]), np.ascontiguousarray(table[:, 1])


def cross_section_at(
    energies: np.ndarray,
    values: np.ndarray,
    energy: Union[float, np.ndarray],
) -> Union[float, np.ndarray]:
    """Interpolate a tabulated cross section at ``energy``.

    Parameters
    ----------
    energies : ndarray, shape (n,)
        Tabulated energies [eV], strictly increasing, n >= 1.
    values : ndarray, shape (n,)
        Cross sections [m^2] at ``energies``.
    energy : float or ndarray
        Query energy (or energies) [eV].

    Returns
    -------
    float or ndarray
        ``values[0]`` at and below ``energies[0]``, ``values[-1]`` at and
        above ``energies[-1]``, linear interpolation in between.  A scalar
        query returns a Python float.

    Raises
    ------
    ValueError
        If the table is empty or the arrays differ in length.
    """
    energies = np.asarray(energies, dtype=float)
    values = np.asarray(values, dtype=float)
    if energies.size == 0:
        raise ValueError("Cannot interpolate an empty cross-section table")
    if energies.shape != values.shape:
        raise ValueError(
            f"Energy and value arrays differ in shape: {energies.shape} vs {values.shape}"
        )

    query = np.asarray(energy, dtype=float)

    # np.interp binary-searches the grid and holds the end values constant
    # outside [energies[0], energies[-1]].
    result = np.interp(query, energies, values, left=values[0], right=values[-1])

    if np.ndim(result) == 0:
        return float(result)
    return result
