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

import cartopy.crs as ccrs
import matplotlib.ticker as mticker
import numpy as np
from geopandas.geodataframe import GeoDataFrame

from ..projection import reproject, resolve_projection
from .plot_engine import PlotEngine

logger = logging.getLogger("cartokit")

DEFAULT_CARTOPY_PROJECTION = ccrs.PlateCarree()


class CartopyPlotEngine(PlotEngine):
    """Use Cartopy for map plotting"""

    def __init__(self):
        pass

    def create_axes(self, fig, projection, subplot=111):
        """Add a Cartopy GeoAxes to `fig`

        Parameters
        ----------
        fig : matplotlib.figure.Figure
        projection : str, int or cartopy.crs.CRS
            Anything :func:`cartokit.projection.resolve_projection` accepts.
        subplot : int or tuple
            Subplot specification, e.g. 111 or (2, 2, 1).
        """
        crs = resolve_projection(projection)
        if isinstance(subplot, tuple):
            return fig.add_subplot(*subplot, projection=crs)
        return fig.add_subplot(subplot, projection=crs)

    def data_crs(self, ax, gdf: GeoDataFrame):
        return getattr(ax, "projection", DEFAULT_CARTOPY_PROJECTION)

    def plot_geo_data_frame(self, ax, gdf: GeoDataFrame, **kwargs):
        """Use Cartopy to plot geometries in a GeoDataFrame object onto a map

        Parameters
        ----------
        ax : cartopy.mpl.geoaxes.GeoAxes
            Cartopy GeoAxes instance
        gdf : GeoDataFrame
            GeoPandas GeoDataFrame object

        """
        if hasattr(ax, "projection"):
            if "transform" in kwargs.keys():
                logger.warning(
                    "'transform' keyword argument is ignored by CartopyPlotEngine."
                )
                kwargs.pop("transform")
            # features which can not be projected are dropped
            gdf = reproject(gdf, ax.projection)
        else:
            logger.warning(
                "The ax.projection does not exist. You must set projection to plot Cartopy maps, such as ax = plt.subplot(111, projection=cartopy.crs.Robinson())"
            )

        return gdf.plot(ax=ax, **kwargs)

    def plot_graticule(
        self,
        ax,
        spacing=30,
        color="0.6",
        linewidth=0.4,
        linestyle="dotted",
        draw_labels=False,
        **kwargs,
    ):
        """Use Cartopy to draw meridians and parallels every `spacing` degrees

        Returns
        -------
        cartopy.mpl.gridliner.Gridliner
        """
        if np.isscalar(spacing):
            dlon = dlat = spacing
        else:
            dlon, dlat = spacing
        gl = ax.gridlines(
            crs=DEFAULT_CARTOPY_PROJECTION,
            draw_labels=draw_labels,
            color=color,
            linewidth=linewidth,
            linestyle=linestyle,
            **kwargs,
        )
        gl.xlocator = mticker.FixedLocator(np.arange(-180, 180 + dlon, dlon))
        gl.ylocator = mticker.FixedLocator(np.arange(-90, 90 + dlat, dlat))
        return gl
