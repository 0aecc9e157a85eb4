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
import logging

import pyproj
from geopandas.geodataframe import GeoDataFrame

from ..projection import ensure_crs
from .graticule import WEB_MERCATOR_MAX_LATITUDE, make_graticule
from .plot_engine import PlotEngine

logger = logging.getLogger("cartokit")


class MatplotlibPlotEngine(PlotEngine):
    """Plot on plain matplotlib axes, in the coordinates of the layer itself.

    Layers are reprojected into the projection given to :meth:`create_axes`
    by the caller (see :class:`cartokit.plot.ChoroplethMap`). This engine is
    needed for basemap tiles, which come in Web Mercator.
    """

    def __init__(self):
        pass

    def create_axes(self, fig, projection=None, subplot=111):
        if isinstance(subplot, tuple):
            ax = fig.add_subplot(*subplot)
        else:
            ax = fig.add_subplot(subplot)
        ax.set_aspect("equal")
        return ax

    def data_crs(self, ax, gdf: GeoDataFrame):
        return ensure_crs(gdf).crs

    def plot_geo_data_frame(self, ax, gdf: GeoDataFrame, **kwargs):
        """Plot geometries in a GeoDataFrame object onto matplotlib axes"""
        if "transform" in kwargs.keys():
            logger.warning(
                "'transform' keyword argument is ignored by MatplotlibPlotEngine."
            )
            kwargs.pop("transform")
        return gdf.plot(ax=ax, **kwargs)

    def plot_graticule(
        self,
        ax,
        spacing=30,
        color="0.6",
        linewidth=0.4,
        linestyle="dotted",
        crs=None,
        **kwargs,
    ):
        """Draw meridians and parallels, projected into `crs` (the CRS of the data on the axes)

        Returns
        -------
        matplotlib.axes.Axes
        """
        max_latitude = 90.0
        if crs is not None:
            operation = pyproj.CRS.from_user_input(crs).coordinate_operation
            if operation is not None and "Mercator" in operation.method_name:
                # the poles are at infinity
                max_latitude = WEB_MERCATOR_MAX_LATITUDE
        graticule = make_graticule(spacing, max_latitude=max_latitude)
        if crs is not None:
            graticule = graticule.to_crs(crs)
        # keep the current view, the graticule spans the whole globe
        xlim, ylim = ax.get_xlim(), ax.get_ylim()
        has_data = ax.has_data()
        graticule.plot(
            ax=ax,
            color=color,
            linewidth=linewidth,
            linestyle=linestyle,
            **kwargs,
        )
        if has_data:
            ax.set_xlim(xlim)
            ax.set_ylim(ylim)
        return ax
