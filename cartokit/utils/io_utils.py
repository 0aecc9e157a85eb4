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

"""
Tools to read geometry data from input files and output them as `Shapely`
geometries held in a `geopandas.GeoSeries`. These geometries can be plotted
directly with cartokit's `ChoroplethMap` object.
"""

import geopandas as gpd
from shapely.geometry.base import BaseGeometry

__all__ = [
    "get_geometries",
    "get_valid_geometries",
]


def get_geometries(filename, buffer=None):
    """Read a file and return feature geometries.

    Parameters
    ----------
    filename : str, geopandas.GeoDataFrame, geopandas.GeoSeries, shapely geometry or iterable of shapely geometries
        Path to the file to be read, or geometries already in memory.
    buffer : float, optional
        If given, buffer every geometry by this distance.

    Returns
    -------
    geometries : geopandas.GeoSeries
        `shapely` geometries that define the feature geometry held in the
        file.
    """

    def buffer_func(geoms, buffer=None):
        if buffer is not None:
            geoms = geoms.buffer(buffer)
        return geoms

    if isinstance(filename, gpd.GeoDataFrame):
        return buffer_func(filename.geometry, buffer)
    if isinstance(filename, gpd.GeoSeries):
        return buffer_func(filename, buffer)
    if isinstance(filename, BaseGeometry):
        return buffer_func(gpd.GeoSeries([filename]), buffer)
    if not isinstance(filename, (str, bytes)):
        try:
            # materialise first, generators can only be read once
            items = list(filename)
        except TypeError:
            # Not an iterable, probably a path-like object
            items = None
        if items and isinstance(items[0], BaseGeometry):
            # Iterable of geometries
            return buffer_func(gpd.GeoSeries(items), buffer)
    # If it gets to this line, `filename` should actually be a filename
    gdf = gpd.read_file(filename)
    return buffer_func(gdf.geometry, buffer)


def get_valid_geometries(filename):
    """Read a file and return valid feature geometries.

    Invalid polygons (self-intersecting rings and the like) are repaired with
    a zero-width buffer.

    Parameters
    ----------
    filename : str
        Path to the file to be read.

    Returns
    -------
    geometries : geopandas.GeoSeries
        Valid `shapely` geometries that define the feature geometry held in the
        file.
    """
    return get_geometries(filename, buffer=0.0)
