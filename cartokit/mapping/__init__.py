# This submodule contains the engines which draw layers onto map axes.
# The PlotEngine abstract base class is defined in plot_engine.py.
# There are different PlotEngine subclasses, CartopyPlotEngine and MatplotlibPlotEngine,
# for projected cartopy GeoAxes and for plain matplotlib axes.
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
from .cartopy_plot import CartopyPlotEngine
from .graticule import make_graticule
from .matplotlib_plot import MatplotlibPlotEngine
from .plot_engine import PlotEngine

__all__ = [
    "CartopyPlotEngine",
    "MatplotlibPlotEngine",
    "PlotEngine",
    "make_graticule",
]
