"""
Cross-Section Figure Class
==========================

Log-log plots of electron collision cross sections loaded from LXCat files.

Features:
    - Tabulated points of individual collisions (as loaded, after the
      threshold constraint)
    - Interpolated total cross section of a collection, optionally restricted
      to one process type
    - Surplus (majorant) cross section as a horizontal reference line
    - PNG / PDF / SVG export

Example:
    >>> from lxcat_xs import load_collection
    >>> from lxcat_xs.visualization import CrossSectionFigure
    >>>
    >>> collection = load_collection('data/Ar_Biagi.txt')
    >>> fig = CrossSectionFigure(title='e + Ar')
    >>> fig.add_collection(collection)
    >>> fig.add_total(collection)
    >>> fig.add_surplus(collection)
    >>> fig.add_legend()
    >>> fig.save('ar_cross_sections.png', dpi=200)
"""

import logging
from pathlib import Path
from typing import Optional, Tuple, Union

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from matplotlib.axes import Axes

from lxcat_xs.data.collection import Collection
from lxcat_xs.data.collision import Collision, ProcessType

logger = logging.getLogger(__name__)


class CrossSectionFigure:
    """
    Cross-section visualization for one or more collision processes.

    Attributes:
        title: Figure title
        fig: Matplotlib Figure object
        ax: Matplotlib Axes object
    """

    # Default color palette for multiple series
    DEFAULT_COLORS = [
        '#1f77b4',  # Blue
        '#ff7f0e',  # Orange
        '#2ca02c',  # Green
        '#d62728',  # Red
        '#9467bd',  # Purple
        '#8c564b',  # Brown
        '#e377c2',  # Pink
        '#7f7f7f',  # Gray
        '#bcbd22',  # Olive
        '#17becf',  # Cyan
    ]

    # Line style per process type
    PROCESS_STYLES = {
        ProcessType.ELASTIC: '-',
        ProcessType.EFFECTIVE: '-',
        ProcessType.EXCITATION: '--',
        ProcessType.IONIZATION: '-.',
        ProcessType.ATTACHMENT: ':',
        ProcessType.ROTATION: (0, (3, 1, 1, 1, 1, 1)),
    }

    def __init__(
        self,
        title: Optional[str] = None,
        figsize: Tuple[float, float] = (10, 6),
        log_x: bool = True,
        log_y: bool = True,
        grid: bool = True,
        grid_alpha: float = 0.3,
    ):
        """
        Initialize cross-section figure.

        Args:
            title: Figure title
            figsize: Figure size in inches (width, height)
            log_x: Use logarithmic energy axis
            log_y: Use logarithmic cross-section axis
            grid: Show grid lines
            grid_alpha: Grid transparency
        """
        self.title = title
        self.log_x = log_x
        self.log_y = log_y

        self.fig, self.ax = plt.subplots(figsize=figsize)

        if log_x:
            self.ax.set_xscale('log')
        if log_y:
            self.ax.set_yscale('log')
        if grid:
            self.ax.grid(True, alpha=grid_alpha, which='both')

        self.ax.set_xlabel('Energy (eV)', fontsize=12, fontweight='bold')
        self.ax.set_ylabel('Cross Section (m$^2$)', fontsize=12, fontweight='bold')
        if title:
            self.ax.set_title(title, fontsize=14, fontweight='bold')

        self._series_count = 0

    def _get_next_color(self) -> str:
        """Get next color from palette."""
        color = self.DEFAULT_COLORS[self._series_count % len(self.DEFAULT_COLORS)]
        self._series_count += 1
        return color

    def _clean_data(self, energies: np.ndarray, xs: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """Drop points a log axis cannot show."""
        energies = np.asarray(energies, dtype=float)
        xs = np.asarray(xs, dtype=float)
        mask = np.isfinite(energies) & np.isfinite(xs)
        if self.log_x:
            mask &= energies > 0
        if self.log_y:
            mask &= xs > 0
        return energies[mask], xs[mask]

    def _energy_grid(self, collection: Collection, n_points: int) -> np.ndarray:
        lows = [c.energy_range[0] for c in collection]
        highs = [c.energy_range[1] for c in collection]
        emin, emax = min(lows), max(highs)
        if self.log_x:
            emin = min((e for e in lows if e > 0), default=1e-3)
            return np.logspace(np.log10(emin), np.log10(emax), n_points)
        return np.linspace(emin, emax, n_points)

    # =========================================================================
    # DATA ADDITION METHODS
    # =========================================================================

    def add_collision(
        self,
        collision: Collision,
        label: Optional[str] = None,
        color: Optional[str] = None,
        linewidth: float = 1.5,
        marker: Optional[str] = None,
        **kwargs,
    ) -> 'CrossSectionFigure':
        """
        Add the tabulated cross section of one collision.

        Args:
            collision: Collision to plot
            label: Legend label. Defaults to "<species> <process>".
            color: Line color. Auto-assigned if None.
            linewidth: Line width
            marker: Point marker (None draws the line only)
            **kwargs: Additional arguments passed to ax.plot()

        Returns:
            self for method chaining
        """
        energies, xs = self._clean_data(collision.energies, collision.values)
        if energies.size == 0:
            logger.warning(f"Nothing to plot for {collision}")
            return self

        if label is None:
            label = f"{collision.species} {collision.process.value.lower()}"
        if color is None:
            color = self._get_next_color()
        kwargs.setdefault('linestyle', self.PROCESS_STYLES[collision.process])

        self.ax.plot(energies, xs, color=color, linewidth=linewidth,
                     marker=marker, label=label, **kwargs)
        return self

    def add_collection(
        self,
        collection: Collection,
        process: Optional[ProcessType] = None,
        **kwargs,
    ) -> 'CrossSectionFigure':
        """
        Add every collision of a collection (optionally one process type).

        Returns:
            self for method chaining
        """
        if process is not None:
            collection = collection.of_kind(process)
        for collision in collection:
            self.add_collision(collision, **kwargs)
        return self

    def add_total(
        self,
        collection: Collection,
        energies: Optional[np.ndarray] = None,
        process: Optional[ProcessType] = None,
        n_points: int = 400,
        label: Optional[str] = None,
        color: str = 'black',
        linewidth: float = 2.5,
        **kwargs,
    ) -> 'CrossSectionFigure':
        """
        Add the interpolated total cross section of a collection.

        Args:
            collection: Collisions to sum
            energies: Evaluation energies [eV]. Defaults to a grid spanning
                all tabulated energies.
            process: Restrict the sum to one process type
            n_points: Size of the default energy grid
            label: Legend label
            color: Line color
            linewidth: Line width
            **kwargs: Additional arguments passed to ax.plot()

        Returns:
            self for method chaining
        """
        if len(collection) == 0:
            logger.warning("Empty collection; total cross section not plotted")
            return self

        if energies is None:
            energies = self._energy_grid(collection, n_points)
        if process is None:
            xs = collection.total_cross_section_at(energies)
            label = label or 'Total'
        else:
            xs = collection.total_cross_section_of_kind_at(process, energies)
            label = label or f"Total {ProcessType(process).value.lower()}"

        energies, xs = self._clean_data(energies, xs)
        self.ax.plot(energies, xs, color=color, linewidth=linewidth, label=label, **kwargs)
        return self

    def add_surplus(
        self,
        collection: Collection,
        label: str = 'Surplus',
        color: str = 'gray',
        linestyle: str = '--',
        **kwargs,
    ) -> 'CrossSectionFigure':
        """Add the surplus (majorant) cross section as a horizontal line."""
        self.ax.axhline(collection.surplus_cross_section(), color=color,
                        linestyle=linestyle, label=label, **kwargs)
        return self

    # =========================================================================
    # LAYOUT METHODS
    # =========================================================================

    def add_legend(
        self,
        loc: str = 'best',
        fontsize: int = 10,
        framealpha: float = 0.9,
        **kwargs,
    ) -> 'CrossSectionFigure':
        """Add legend to the figure."""
        self.ax.legend(loc=loc, fontsize=fontsize, framealpha=framealpha, **kwargs)
        return self

    def set_energy_range(self, energy_min: float, energy_max: float) -> 'CrossSectionFigure':
        """Set the energy axis range (eV)."""
        self.ax.set_xlim(energy_min, energy_max)
        return self

    def set_xs_range(self, xs_min: float, xs_max: float) -> 'CrossSectionFigure':
        """Set the cross-section axis range (m^2)."""
        self.ax.set_ylim(xs_min, xs_max)
        return self

    # =========================================================================
    # OUTPUT METHODS
    # =========================================================================

    def show(self) -> None:
        """Display the figure."""
        self.fig.tight_layout()
        plt.show()

    def save(
        self,
        filepath: Union[str, Path],
        dpi: int = 300,
        bbox_inches: str = 'tight',
        **kwargs,
    ) -> 'CrossSectionFigure':
        """
        Save figure to file (format from the extension).

        Returns:
            self for method chaining
        """
        self.fig.tight_layout()
        self.fig.savefig(filepath, dpi=dpi, bbox_inches=bbox_inches, **kwargs)
        logger.info(f"Figure saved to {filepath}")
        return self

    def get_figure(self) -> Tuple[Figure, Axes]:
        """Get the matplotlib Figure and Axes objects."""
        return self.fig, self.ax

    def close(self) -> None:
        """Close the figure and free resources."""
        plt.close(self.fig)


def plot_collection(
    collection: Collection,
    process: Optional[ProcessType] = None,
    total: bool = True,
    surplus: bool = False,
    title: Optional[str] = None,
    save_path: Optional[Union[str, Path]] = None,
    **kwargs,
) -> CrossSectionFigure:
    """
    Quick plot of a collection.

    Args:
        collection: Loaded collisions
        process: Plot only this process type
        total: Overlay the interpolated total cross section
        surplus: Overlay the surplus cross section
        title: Figure title. Defaults to the species list.
        save_path: Path to save figure (optional)
        **kwargs: Additional arguments for CrossSectionFigure

    Returns:
        CrossSectionFigure object
    """
    if title is None:
        title = ', '.join(collection.species)
    fig = CrossSectionFigure(title=title, **kwargs)
    fig.add_collection(collection, process=process)
    if total:
        fig.add_total(collection, process=process)
    if surplus:
        fig.add_surplus(collection)
    fig.add_legend()

    if save_path is not None:
        fig.save(save_path)
    return fig
