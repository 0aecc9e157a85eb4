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
"""Web map tiles drawn underneath the data, with contextily."""
import logging

import contextily
import xyzservices
import xyzservices.providers as xyz

from .exceptions import UnknownBasemapProvider

logger = logging.getLogger("cartokit")

DEFAULT_PROVIDER = "CartoDB.Positron"


def list_providers():
    """return the names of all known tile providers, such as "CartoDB.Positron" """
    return sorted(xyz.flatten().keys())


def resolve_provider(source=DEFAULT_PROVIDER):
    """Return a tile provider.

    Parameters
    ----------
    source : str or xyzservices.TileProvider
        A provider name such as "OpenStreetMap.Mapnik" (case-insensitive), a
        tile URL with {x}, {y} and {z} placeholders, or a TileProvider.

    Raises
    ------
    UnknownBasemapProvider
    """
    if isinstance(source, xyzservices.TileProvider):
        return source
    if not isinstance(source, str):
        raise UnknownBasemapProvider(source)
    if "{z}" in source and "{x}" in source and "{y}" in source:
        return source
    try:
        return xyz.query_name(source)
    except ValueError as e:
        raise UnknownBasemapProvider(source) from e


def add_basemap(
    ax,
    crs,
    source=DEFAULT_PROVIDER,
    zoom="auto",
    alpha=1.0,
    attribution=None,
    strict=False,
    zorder=0,
):
    """Draw web map tiles under the data already on `ax`.

    The axes must be plain matplotlib axes whose data is in `crs`; Web
    Mercator (EPSG:3857) avoids warping the tiles.

    Parameters
    ----------
    ax : matplotlib.axes.Axes
    crs : str or pyproj.CRS
        CRS of the axes data coordinates.
    source : str or xyzservices.TileProvider
        See :func:`resolve_provider`.
    zoom : int or "auto"
    alpha : float
    attribution : str or False, optional
        Override the provider attribution. False removes it.
    strict : bool, default False
        Raise if the tiles can not be fetched, instead of logging a warning.

    Returns
    -------
    bool
        True if the basemap was drawn.
    """
    provider = resolve_provider(source)
    if crs is None:
        raise ValueError("A CRS is needed to place basemap tiles.")
    try:
        contextily.add_basemap(
            ax,
            crs=crs,
            source=provider,
            zoom=zoom,
            alpha=alpha,
            attribution=attribution,
            zorder=zorder,
        )
    except Exception as e:
        if strict:
            raise
        logger.warning(f"Unable to add the basemap ({source}): {e}")
        return False
    logger.debug(f"Added basemap {source} with zoom={zoom}.")
    return True
