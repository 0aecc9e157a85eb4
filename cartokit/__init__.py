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
"""cartokit: choropleth maps with sensible cartographic defaults.

Load boundaries, reproject them, flatten them into a vertex table, and draw
choropleth maps with colour palettes, classification schemes, legends,
graticules, scale bars, north arrows and basemaps.
"""
from .utils.log_utils import setup_logging
from .utils.version import get_distribution_version

__version__ = get_distribution_version()

setup_logging()
del setup_logging

from . import adornments, basemap, palettes
from .io import drop_regions, join_attributes, load_boundaries
from .layout import arrange, save_figure
from .mapping.cartopy_plot import CartopyPlotEngine
from .mapping.matplotlib_plot import MatplotlibPlotEngine
from .mapping.plot_engine import PlotEngine
from .palettes import build_norm, classify, get_colormap
from .plot import ChoroplethMap, plot_choropleth
from .projection import list_projections, reproject, resolve_projection
from .tabular import defortify, fortify

__all__ = [
    # modules
    "adornments",
    "basemap",
    "palettes",
    # main classes
    "ChoroplethMap",
    # other classes
    "PlotEngine",
    "CartopyPlotEngine",
    "MatplotlibPlotEngine",
    # functions
    "arrange",
    "build_norm",
    "classify",
    "defortify",
    "drop_regions",
    "fortify",
    "get_colormap",
    "join_attributes",
    "list_projections",
    "load_boundaries",
    "plot_choropleth",
    "reproject",
    "resolve_projection",
    "save_figure",
]
