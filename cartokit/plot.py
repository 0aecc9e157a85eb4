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
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import pyproj
from matplotlib.cm import ScalarMappable
from matplotlib.colors import BoundaryNorm
from matplotlib.patches import Patch

from . import adornments, basemap
from .config import load_style
from .decorators import append_docstring, validate_column
from .mapping.cartopy_plot import CartopyPlotEngine
from .mapping.matplotlib_plot import MatplotlibPlotEngine
from .palettes import (
    build_norm,
    categorical_colors,
    classify,
    get_colormap,
)
from .projection import WGS84, reproject, resolve_projection

logger = logging.getLogger("cartokit")

PLOT_DOCSTRING = """

        Parameters
        ----------
        ax :
            Cartopy GeoAxes (with :class:`CartopyPlotEngine`) or matplotlib Axes
            (with :class:`MatplotlibPlotEngine`), e.g. from :meth:`ChoroplethMap.create_axes`.
        {}
        Returns
        -------
        ax
        """


# class index of each region in a classified choropleth
CLASS_COLUMN = "_cartokit_class"

SIDE_LEGENDS = {
    "right": dict(loc="center left", bbox_to_anchor=(1.02, 0.5)),
    "left": dict(loc="center right", bbox_to_anchor=(-0.02, 0.5)),
    "top": dict(loc="lower center", bbox_to_anchor=(0.5, 1.02)),
    "bottom": dict(loc="upper center", bbox_to_anchor=(0.5, -0.02)),
}


def _format_number(v):
    if abs(v) >= 1000:
        return f"{v:,.0f}"
    return f"{v:.3g}"


def class_labels(boundaries):
    """return "low - high" legend labels for consecutive class boundaries"""
    return [
        f"{_format_number(lo)} - {_format_number(hi)}"
        for lo, hi in zip(boundaries[:-1], boundaries[1:])
    ]


class ChoroplethMap(object):
    """Draw choropleth maps of one boundaries layer.

    A choropleth map shades each region by the value of one attribute, e.g.
    the population estimate of every country. The map also knows how to
    draw outlines, graticules, legends, a scale bar, a north arrow and a
    basemap, so that these can be layered onto the same axes.

    For example:

    .. code-block:: python
        :linenos:

        world = cartokit.load_boundaries("ne_110m_admin_0_countries.shp")
        world = cartokit.drop_regions(world, "CONTINENT", "Antarctica")

        cmap = cartokit.ChoroplethMap(world, column="POP_EST", projection="robinson")
        ax = cmap.create_axes()
        cmap.plot_choropleth(ax, scheme="quantiles", k=5, cmap="YlGnBu")
        cmap.plot_graticule(ax)
        cmap.add_north_arrow(ax)

    With the default :class:`CartopyPlotEngine`, the layer keeps its own
    CRS and is projected onto the cartopy axes when drawn. With
    :class:`MatplotlibPlotEngine`, the layer is reprojected once into
    ``projection`` and drawn on plain matplotlib axes, which is what
    basemap tiles need (use ``projection="web mercator"``).
    """

    def __init__(
        self,
        gdf,
        column=None,
        projection=None,
        plot_engine=None,
        style=None,
    ):
        if isinstance(style, dict):
            self.style = load_style(**style)
        else:
            self.style = load_style(style)
        self.gdf = gdf
        if self.gdf.crs is None:
            logger.warning("The layer has no CRS. Assuming WGS84 (EPSG:4326).")
            self.gdf = self.gdf.set_crs(WGS84)
        self.column = column
        self.projection = resolve_projection(
            projection if projection is not None else self.style["projection"]
        )
        self._plot_engine = (
            plot_engine if plot_engine is not None else CartopyPlotEngine()
        )
        self._projected = None

    @property
    def plot_engine(self):
        return self._plot_engine

    @property
    def layer(self):
        """The layer as it is handed to the plot engine."""
        if isinstance(self._plot_engine, MatplotlibPlotEngine):
            if self._projected is None:
                self._projected = reproject(self.gdf, self.projection)
            return self._projected
        return self.gdf

    def create_axes(self, fig=None, subplot=111):
        """Create map axes for this map's engine and projection. A new figure is made if `fig` is None."""
        if fig is None:
            fig = plt.figure(figsize=self.style["figsize"], dpi=self.style["dpi"])
        return self._plot_engine.create_axes(fig, self.projection, subplot=subplot)

    def _data_crs(self, ax):
        return self._plot_engine.data_crs(ax, self.layer)

    def _line_style(self, edgecolor, linewidth, linestyle):
        return dict(
            edgecolor=edgecolor if edgecolor is not None else self.style["edgecolor"],
            linewidth=linewidth if linewidth is not None else self.style["linewidth"],
            linestyle=linestyle if linestyle is not None else self.style["linestyle"],
        )

    @validate_column
    def plot_choropleth(
        self,
        ax,
        column=None,
        cmap=None,
        scheme=None,
        k=5,
        bins=None,
        log=False,
        center=None,
        vmin=None,
        vmax=None,
        reverse=False,
        missing_color=None,
        edgecolor=None,
        linewidth=None,
        linestyle=None,
        alpha=None,
        legend=True,
        legend_kwds=None,
        **kwargs,
    ):
        """Fill every region with the colour of its `column` value.

        Numeric columns use `cmap` (a sequential palette by default) on a
        continuous scale with a colourbar, or on classes from a mapclassify
        `scheme` with a legend entry per class. Other columns are treated as
        categories, each with a colour from a qualitative palette. Regions with
        no value are filled with `missing_color` and labelled "Missing".

        Parameters
        ----------
        ax :
            Map axes.
        column : str
            Attribute to map. Defaults to the map's own `column`.
        cmap : str, list of colours or Colormap
            See :func:`cartokit.palettes.get_colormap`.
        scheme : str, optional
            Classification scheme, e.g. "quantiles", "equal_interval", "natural_breaks".
        k : int
            Number of classes.
        bins : list of float, optional
            Class upper bounds for the "user_defined" scheme.
        log : bool
            Use a logarithmic colour scale.
        center : float, optional
            Midpoint of a diverging colour scale.
        legend : bool
            Draw a legend or colourbar.
        legend_kwds : dict, optional
            Passed to :meth:`add_legend`, e.g. {"location": "bottom", "title": "Population"}.

        Returns
        -------
        ax
        """
        missing_color = (
            missing_color if missing_color is not None else self.style["missing_color"]
        )
        alpha = alpha if alpha is not None else self.style["alpha"]
        line_style = self._line_style(edgecolor, linewidth, linestyle)
        legend_kwds = dict(legend_kwds or {})
        legend_kwds.setdefault("title", column)

        layer = self.layer
        values = layer[column]
        missing = values.isna().to_numpy()
        present = layer[~missing]

        mappable = None
        handles = []
        if len(present) == 0:
            logger.warning(f"The column '{column}' has no values. Nothing to shade.")
        elif pd.api.types.is_numeric_dtype(values) and not pd.api.types.is_bool_dtype(
            values
        ):
            data = present[column].to_numpy(dtype=float)
            if scheme is not None:
                classifier = classify(data, scheme, k=k, bins=bins)
                # mapclassify classes are closed on the right, so regions are
                # coloured by class index rather than by value
                n_classes = len(classifier.bins)
                colours = get_colormap(
                    cmap if cmap is not None else self.style["cmap"],
                    n=n_classes,
                    reverse=reverse,
                )
                norm = BoundaryNorm(np.arange(n_classes + 1) - 0.5, colours.N)
                present = present.assign(
                    **{CLASS_COLUMN: np.asarray(classifier.yb)}
                )
                plot_column = CLASS_COLUMN
                edges = np.concatenate([[data.min()], classifier.bins])
                for i, label in enumerate(class_labels(edges)):
                    handles.append(
                        Patch(
                            facecolor=colours(i),
                            edgecolor=line_style["edgecolor"],
                            label=label,
                        )
                    )
            else:
                colours = get_colormap(
                    cmap if cmap is not None else self.style["cmap"], reverse=reverse
                )
                norm = build_norm(
                    data, vmin=vmin, vmax=vmax, log=log, center=center
                )
                mappable = ScalarMappable(norm=norm, cmap=colours)
                mappable.set_array(data)
                plot_column = column
            self._plot_engine.plot_geo_data_frame(
                ax,
                present,
                column=plot_column,
                cmap=colours,
                norm=norm,
                alpha=alpha,
                legend=False,
                **line_style,
                **kwargs,
            )
        else:
            if isinstance(values.dtype, pd.CategoricalDtype):
                categories = [c for c in values.cat.categories if (values == c).any()]
            else:
                categories = sorted(present[column].unique(), key=str)
            colours = categorical_colors(
                categories,
                cmap if cmap is not None else self.style["categorical_cmap"],
            )
            for category, colour in colours.items():
                self._plot_engine.plot_geo_data_frame(
                    ax,
                    present[present[column] == category],
                    facecolor=colour,
                    alpha=alpha,
                    **line_style,
                    **kwargs,
                )
                handles.append(
                    Patch(
                        facecolor=colour,
                        edgecolor=line_style["edgecolor"],
                        label=str(category),
                    )
                )

        if missing.any():
            self._plot_engine.plot_geo_data_frame(
                ax,
                layer[missing],
                facecolor=missing_color,
                alpha=alpha,
                **line_style,
            )
            handles.append(
                Patch(
                    facecolor=missing_color,
                    edgecolor=line_style["edgecolor"],
                    label="Missing",
                )
            )

        if legend:
            if mappable is not None:
                self.add_legend(ax, mappable=mappable, **legend_kwds)
                if handles:
                    # the "Missing" patch goes in the corner of the map
                    ax.legend(handles=handles, loc="lower left", fontsize="small")
            elif handles:
                self.add_legend(ax, handles=handles, **legend_kwds)
        return ax

    @append_docstring(
        PLOT_DOCSTRING.format(
            """color : str
            Line colour.
        linewidth : float
        linestyle : str or tuple
            "solid", "dashed", "dotted", "dashdot" or a dash tuple such as (0, (5, 2)).
        """
        )
    )
    def plot_boundaries(
        self, ax, color=None, linewidth=None, linestyle=None, **kwargs
    ):
        """Draw the region outlines without filling them."""
        line_style = self._line_style(color, linewidth, linestyle)
        if "facecolor" not in kwargs.keys():
            kwargs["facecolor"] = "none"
        self._plot_engine.plot_geo_data_frame(ax, self.layer, **line_style, **kwargs)
        return ax

    @append_docstring(
        PLOT_DOCSTRING.format(
            """spacing : float or (float, float)
            Degrees between graticule lines.
        """
        )
    )
    def plot_graticule(self, ax, spacing=None, **kwargs):
        """Draw lines of longitude and latitude."""
        spacing = spacing if spacing is not None else self.style["graticule_spacing"]
        kwargs.setdefault("color", self.style["graticule_color"])
        kwargs.setdefault("linewidth", self.style["graticule_linewidth"])
        kwargs.setdefault("linestyle", self.style["graticule_linestyle"])
        if isinstance(self._plot_engine, MatplotlibPlotEngine):
            kwargs["crs"] = self._data_crs(ax)
        self._plot_engine.plot_graticule(ax, spacing=spacing, **kwargs)
        return ax

    def add_legend(
        self, ax, mappable=None, handles=None, location=None, title=None, **kwargs
    ):
        """Add a colourbar (for a `mappable`) or a legend (for patch `handles`) to the map.

        Parameters
        ----------
        location : str
            "right", "left", "top", "bottom" put the legend outside the map;
            "none" draws nothing; any other value is a matplotlib legend ``loc``,
            such as "lower left", inside the map.
        title : str, optional
            Legend title or colourbar label.

        Returns
        -------
        matplotlib.colorbar.Colorbar, matplotlib.legend.Legend or None
        """
        location = location if location is not None else self.style["legend_location"]
        if location == "none":
            return None
        if mappable is not None:
            if location not in SIDE_LEGENDS:
                logger.warning(
                    f"A colourbar can not be placed at '{location}'. Using 'right' instead."
                )
                location = "right"
            kwargs.setdefault("shrink", 0.6)
            kwargs.setdefault("pad", 0.04)
            return ax.figure.colorbar(
                mappable, ax=ax, location=location, label=title, **kwargs
            )
        if not handles:
            logger.debug("No legend entries. Nothing to add.")
            return None
        if location in SIDE_LEGENDS:
            placement = dict(SIDE_LEGENDS[location])
            if location in ("top", "bottom"):
                placement["ncol"] = min(len(handles), 5)
        else:
            placement = dict(loc=location)
        placement.update(kwargs)
        placement.setdefault("frameon", False)
        return ax.legend(handles=handles, title=title, **placement)

    def add_scale_bar(
        self, ax, length=None, location=(0.05, 0.05), segments=4, **kwargs
    ):
        """Add a scale bar. See :func:`cartokit.adornments.add_scale_bar`."""
        return adornments.add_scale_bar(
            ax,
            length=length,
            location=location,
            segments=segments,
            crs=self._data_crs(ax),
            **kwargs,
        )

    def add_north_arrow(self, ax, location=(0.92, 0.88), **kwargs):
        """Add a north arrow. See :func:`cartokit.adornments.add_north_arrow`."""
        return adornments.add_north_arrow(
            ax, location=location, crs=self._data_crs(ax), **kwargs
        )

    def add_basemap(
        self, ax, source=None, zoom="auto", alpha=1.0, strict=False, **kwargs
    ):
        """Add web map tiles underneath the data. Needs :class:`MatplotlibPlotEngine`.

        See :func:`cartokit.basemap.add_basemap`.
        """
        if not isinstance(self._plot_engine, MatplotlibPlotEngine):
            raise NotImplementedError(
                f"Adding a basemap has not been implemented for {self._plot_engine.__class__} yet. Use MatplotlibPlotEngine instead."
            )
        return basemap.add_basemap(
            ax,
            crs=self._data_crs(ax),
            source=source if source is not None else self.style["basemap_source"],
            zoom=zoom,
            alpha=alpha,
            strict=strict,
            **kwargs,
        )

    def set_extent(self, ax, extent):
        """Zoom the map to (min_lon, max_lon, min_lat, max_lat)."""
        if isinstance(self._plot_engine, CartopyPlotEngine):
            ax.set_extent(extent, crs=ccrs.PlateCarree())
            return ax
        transformer = pyproj.Transformer.from_crs(
            WGS84, self._data_crs(ax), always_xy=True
        )
        lons = np.linspace(extent[0], extent[1], 21)
        lats = np.linspace(extent[2], extent[3], 21)
        lon_grid, lat_grid = np.meshgrid(lons, lats)
        x, y = transformer.transform(lon_grid.ravel(), lat_grid.ravel())
        ax.set_xlim(np.nanmin(x), np.nanmax(x))
        ax.set_ylim(np.nanmin(y), np.nanmax(y))
        return ax

    def plot(
        self,
        ax=None,
        column=None,
        title=None,
        extent=None,
        boundaries=False,
        graticule=False,
        scale_bar=False,
        north_arrow=False,
        basemap=False,
        basemap_source=None,
        **kwargs,
    ):
        """Draw a finished map in one go: the choropleth plus the requested adornments.

        Keyword arguments not listed here go to :meth:`plot_choropleth`.

        Returns
        -------
        ax
        """
        if ax is None:
            ax = self.create_axes()
        self.plot_choropleth(ax, column=column, **kwargs)
        if boundaries:
            self.plot_boundaries(ax)
        if extent is not None:
            self.set_extent(ax, extent)
        if graticule:
            self.plot_graticule(ax)
        if basemap:
            # tiles are drawn for the final extent
            self.add_basemap(ax, source=basemap_source)
        if scale_bar:
            self.add_scale_bar(ax)
        if north_arrow:
            self.add_north_arrow(ax)
        if title:
            ax.set_title(title)
        return ax


def plot_choropleth(
    gdf, column, projection=None, ax=None, plot_engine=None, style=None, **kwargs
):
    """Draw a choropleth map of `gdf` in one call. See :meth:`ChoroplethMap.plot`."""
    choropleth = ChoroplethMap(
        gdf, column=column, projection=projection, plot_engine=plot_engine, style=style
    )
    return choropleth.plot(ax=ax, **kwargs)
