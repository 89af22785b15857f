"""
LXCat-XS Visualization Module
=============================

Main Classes:
    CrossSectionFigure: Log-log figure of collision cross sections
    plot_collection: One-call plot of a loaded collection

Example:
    >>> from lxcat_xs.visualization import plot_collection
    >>> fig = plot_collection(collection, surplus=True, save_path='xs.png')
"""

from .cross_section_figure import CrossSectionFigure, plot_collection

__all__ = ['CrossSectionFigure', 'plot_collection']
