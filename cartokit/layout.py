#
#    Copyright (C) 2024-2025 The University of Sydney, Australia
#
#    This program is free software; you can redistribute it and/or modify it under
#    the terms of the GNU General Public License, version 2, as published by
#    the Free Software Foundation.
#
#    This program is distributed in the hope that it will be useful, but WITHOUT
#    ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or
#    FITNESS FOR A PARTICULAR PURPOSE.  See the GNU General Public License
#    for more details.
#
#    You should have received a copy of the GNU General Public License along
#    with this program; if not, write to Free Software Foundation, Inc.,
#    51 Franklin Street, Fifth Floor, Boston, MA  02110-1301, USA.
#
"""Arrange several maps in one figure and save figures to image files."""
import logging
import math
import os

import matplotlib.pyplot as plt

from .plot import ChoroplethMap
from .projection import resolve_projection

logger = logging.getLogger("cartokit")


def arrange(maps, ncols=2, figsize=None, titles=None, projection=None, dpi=None):
    """Draw several maps side by side in a grid.

    Parameters
    ----------
    maps : list of ChoroplethMap or callable
        Each item is either a :class:`ChoroplethMap` (drawn with
        :meth:`ChoroplethMap.plot`) or a function which takes an axes and draws on it.
    ncols : int
        Number of columns in the grid.
    figsize : (float, float), optional
        Figure size in inches. Defaults to 5 x 3 inches per panel.
    titles : list of str, optional
        Panel titles.
    projection : optional
        Projection for the panels drawn by callables. Plain matplotlib axes if None.

    Returns
    -------
    fig : matplotlib.figure.Figure
    axes : list of axes
    """
    n = len(maps)
    if n == 0:
        raise ValueError("There are no maps to arrange.")
    if titles is not None and len(titles) != n:
        raise ValueError(f"Expecting {n} titles, got {len(titles)}.")
    ncols = max(1, min(ncols, n))
    nrows = math.ceil(n / ncols)
    if figsize is None:
        figsize = (5 * ncols, 3 * nrows)
    fig = plt.figure(figsize=figsize, dpi=dpi)

    axes = []
    for i, item in enumerate(maps):
        subplot = (nrows, ncols, i + 1)
        if isinstance(item, ChoroplethMap):
            ax = item.create_axes(fig=fig, subplot=subplot)
            item.plot(ax=ax)
        elif callable(item):
            if projection is not None:
                ax = fig.add_subplot(
                    *subplot, projection=resolve_projection(projection)
                )
            else:
                ax = fig.add_subplot(*subplot)
            item(ax)
        else:
            raise TypeError(
                f"Expecting a ChoroplethMap or a callable, but got {type(item)}."
            )
        if titles is not None:
            ax.set_title(titles[i])
        axes.append(ax)
    logger.debug(f"Arranged {n} map(s) in a {nrows} x {ncols} grid.")
    return fig, axes


def save_figure(fig, path, dpi=None, transparent=False, close=True):
    """Save `fig` as an image. The format follows the file extension.

    Returns
    -------
    str
        The path written.
    """
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)
    fig.savefig(path, dpi=dpi, bbox_inches="tight", transparent=transparent)
    logger.info(f"The map has been saved to {path}.")
    if close:
        plt.close(fig)
    return path
