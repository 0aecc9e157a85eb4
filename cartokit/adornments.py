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
"""Scale bars and north arrows.

Both are placed in axes coordinates (0, 0 is the lower left corner of the
map) and measured in the data CRS of the axes, so they stay truthful on
projected maps: the scale bar length is a geodesic distance and the north
arrow points to true north at the centre of the map.
"""
import logging
import math

import numpy as np
import pyproj
from matplotlib import patheffects
from matplotlib.patches import Rectangle

logger = logging.getLogger("cartokit")

GEOD = pyproj.Geod(ellps="WGS84")
KM_PER_MILE = 1.609344


def _data_crs(ax, crs):
    if crs is not None:
        return crs
    return getattr(ax, "projection", None)


def _to_lonlat(crs):
    return pyproj.Transformer.from_crs(crs, "EPSG:4326", always_xy=True)


def _from_lonlat(crs):
    return pyproj.Transformer.from_crs("EPSG:4326", crs, always_xy=True)


def nice_scale_length(max_length):
    """Return the largest 1, 2 or 5 times a power of ten which is not larger than `max_length`."""
    if not max_length > 0:
        raise ValueError(f"The maximum scale length must be positive: {max_length}")
    exponent = math.floor(math.log10(max_length))
    for mantissa in (5, 2, 1):
        candidate = mantissa * 10.0**exponent
        if candidate <= max_length * (1 + 1e-9):
            return candidate
    return 10.0**exponent


def add_scale_bar(
    ax,
    length=None,
    location=(0.05, 0.05),
    segments=4,
    units="km",
    crs=None,
    height=0.012,
    colors=("black", "white"),
    fontsize=8,
    zorder=20,
):
    """Draw a segmented scale bar.

    Parameters
    ----------
    ax : matplotlib.axes.Axes or cartopy.mpl.geoaxes.GeoAxes
        The map axes. Set the map extent before adding the scale bar.
    length : float, optional
        Length of the bar in `units`. By default about a fifth of the map width, rounded.
    location : (float, float)
        Lower left corner of the bar in axes coordinates.
    segments : int
        Number of alternating segments.
    units : {"km", "mi"}
    crs : optional
        CRS of the axes data coordinates. Defaults to `ax.projection` for cartopy axes.
    height : float
        Bar height as a fraction of the axes height.

    Returns
    -------
    list of matplotlib artists
    """
    if units not in ("km", "mi"):
        raise ValueError(f"Unsupported scale bar units: {units}")
    if segments < 1:
        raise ValueError("A scale bar needs at least one segment.")
    crs = _data_crs(ax, crs)
    if crs is None:
        raise ValueError(
            "Unable to measure distances on axes without a CRS. Pass `crs` or use cartopy GeoAxes."
        )
    unit_metres = 1000.0 if units == "km" else KM_PER_MILE * 1000.0

    x0, x1 = ax.get_xlim()
    y0, y1 = ax.get_ylim()
    xs = x0 + location[0] * (x1 - x0)
    ys = y0 + location[1] * (y1 - y0)
    to_lonlat = _to_lonlat(crs)
    from_lonlat = _from_lonlat(crs)
    lon0, lat0 = to_lonlat.transform(xs, ys)
    if not (np.isfinite(lon0) and np.isfinite(lat0)):
        raise ValueError(
            "The scale bar location is outside the projected globe. Try another `location`."
        )

    if length is None:
        lon_ref, lat_ref = to_lonlat.transform(xs + 0.2 * (x1 - x0), ys)
        _, _, dist = GEOD.inv(lon0, lat0, lon_ref, lat_ref)
        length = nice_scale_length(dist / unit_metres)
        logger.debug(f"Scale bar length chosen: {length} {units}")

    total_metres = length * unit_metres
    xs_segments = [xs]
    for i in range(1, segments + 1):
        lon, lat, _ = GEOD.fwd(lon0, lat0, 90.0, total_metres * i / segments)
        x, _ = from_lonlat.transform(lon, lat)
        xs_segments.append(x)

    bar_height = height * (y1 - y0)
    artists = []
    for i in range(segments):
        rect = Rectangle(
            (xs_segments[i], ys),
            xs_segments[i + 1] - xs_segments[i],
            bar_height,
            facecolor=colors[i % len(colors)],
            edgecolor=colors[0],
            linewidth=0.6,
            transform=ax.transData,
            zorder=zorder,
        )
        ax.add_patch(rect)
        artists.append(rect)

    halo = [patheffects.withStroke(linewidth=2, foreground="white")]
    for x, label in ((xs_segments[0], "0"), (xs_segments[-1], f"{length:g} {units}")):
        text = ax.text(
            x,
            ys + bar_height * 1.6,
            label,
            ha="center",
            va="bottom",
            fontsize=fontsize,
            transform=ax.transData,
            path_effects=halo,
            zorder=zorder + 1,
        )
        artists.append(text)
    return artists


def north_direction(ax, crs=None):
    """Return the unit vector (dx, dy), in display space, which points to true north at the centre of the map."""
    crs = _data_crs(ax, crs)
    if crs is None:
        return 0.0, 1.0
    x0, x1 = ax.get_xlim()
    y0, y1 = ax.get_ylim()
    xc, yc = 0.5 * (x0 + x1), 0.5 * (y0 + y1)
    lon, lat = _to_lonlat(crs).transform(xc, yc)
    if not (np.isfinite(lon) and np.isfinite(lat)):
        return 0.0, 1.0
    step = 1.0 if lat < 89.0 else -1.0
    xn, yn = _from_lonlat(crs).transform(lon, lat + step)
    if not (np.isfinite(xn) and np.isfinite(yn)):
        return 0.0, 1.0
    (px, py), (qx, qy) = ax.transData.transform([(xc, yc), (xn, yn)])
    dx, dy = (qx - px) * step, (qy - py) * step
    norm = math.hypot(dx, dy)
    if norm == 0:
        return 0.0, 1.0
    return dx / norm, dy / norm


def add_north_arrow(
    ax,
    location=(0.92, 0.88),
    size=0.08,
    label="N",
    crs=None,
    color="black",
    fontsize=10,
    zorder=20,
):
    """Draw an arrow pointing to true north.

    Parameters
    ----------
    ax : matplotlib.axes.Axes or cartopy.mpl.geoaxes.GeoAxes
    location : (float, float)
        Centre of the arrow in axes coordinates.
    size : float
        Arrow length as a fraction of the shorter side of the axes.
    label : str
        Text drawn at the arrow head.
    crs : optional
        CRS of the axes data coordinates. Defaults to `ax.projection` for cartopy axes.
        Without a CRS the arrow points straight up.

    Returns
    -------
    list of matplotlib artists
    """
    dx, dy = north_direction(ax, crs=crs)
    bbox = ax.get_window_extent()
    half = 0.5 * size * min(bbox.width, bbox.height)
    centre = ax.transAxes.transform(location)
    to_axes = ax.transAxes.inverted()
    tail = to_axes.transform((centre[0] - half * dx, centre[1] - half * dy))
    head = to_axes.transform((centre[0] + half * dx, centre[1] + half * dy))
    text_pos = to_axes.transform(
        (centre[0] + 1.5 * half * dx, centre[1] + 1.5 * half * dy)
    )

    arrow = ax.annotate(
        "",
        xy=tuple(head),
        xytext=tuple(tail),
        xycoords="axes fraction",
        textcoords="axes fraction",
        arrowprops=dict(arrowstyle="-|>", color=color, linewidth=2, mutation_scale=15),
        zorder=zorder,
    )
    text = ax.text(
        text_pos[0],
        text_pos[1],
        label,
        transform=ax.transAxes,
        ha="center",
        va="center",
        fontsize=fontsize,
        fontweight="bold",
        color=color,
        zorder=zorder + 1,
    )
    return [arrow, text]
