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
"""Load country (or any other) boundaries and attach attribute tables to them."""
import logging
import os

import geopandas as gpd
import pandas as pd

from .exceptions import ColumnNotFound
from .utils.io_utils import get_geometries

logger = logging.getLogger("cartokit")


def load_boundaries(source, layer=None, columns=None, bbox=None):
    """Load a boundaries layer as a `geopandas.GeoDataFrame`.

    Parameters
    ----------
    source : str, os.PathLike, geopandas.GeoDataFrame, geopandas.GeoSeries, shapely geometry or iterable of shapely geometries
        A shapefile (or any vector file GeoPandas can read), or geometries already in memory.
    layer : str or int, optional
        Layer to read from multi-layer sources such as GeoPackages.
    columns : list of str, optional
        Attribute columns to keep. The geometry column is always kept.
    bbox : tuple, optional
        (minx, miny, maxx, maxy) filter applied while reading a file.

    Returns
    -------
    gdf : geopandas.GeoDataFrame
    """
    if isinstance(source, gpd.GeoDataFrame):
        gdf = source.copy()
    elif isinstance(source, (str, os.PathLike)):
        kwargs = {}
        if layer is not None:
            kwargs["layer"] = layer
        if bbox is not None:
            kwargs["bbox"] = tuple(bbox)
        gdf = gpd.read_file(source, **kwargs)
        logger.debug(f"Read {len(gdf)} features from {source}.")
    elif source is not None:
        gdf = gpd.GeoDataFrame(geometry=get_geometries(source))
    else:
        raise ValueError("The `source` parameter must not be None.")

    if gdf.crs is None:
        logger.warning(
            "The boundaries have no coordinate reference system. WGS84 (EPSG:4326) will be assumed when reprojecting."
        )

    if columns is not None:
        for c in columns:
            if c not in gdf.columns:
                raise ColumnNotFound(c, gdf.columns)
        keep = [c for c in columns if c != gdf.geometry.name] + [gdf.geometry.name]
        gdf = gdf[keep]
    return gdf


def join_attributes(gdf, table, left_on, right_on=None, how="left"):
    """Merge an attribute table into the boundaries.

    Parameters
    ----------
    gdf : geopandas.GeoDataFrame
        The boundaries layer.
    table : pandas.DataFrame or str
        The attribute table, or the path to a CSV file.
    left_on : str
        Key column in `gdf`.
    right_on : str, optional
        Key column in `table`. Defaults to `left_on`.
    how : str, default "left"
        Join type, see `pandas.DataFrame.merge`.

    Returns
    -------
    gdf : geopandas.GeoDataFrame
    """
    if right_on is None:
        right_on = left_on
    if not isinstance(table, pd.DataFrame):
        table = pd.read_csv(table)
    if left_on not in gdf.columns:
        raise ColumnNotFound(left_on, gdf.columns)
    if right_on not in table.columns:
        raise ColumnNotFound(right_on, table.columns)

    merged = gdf.merge(table, left_on=left_on, right_on=right_on, how=how)
    unmatched = int((~gdf[left_on].isin(table[right_on])).sum())
    if unmatched > 0:
        logger.info(f"{unmatched} feature(s) have no match in the attribute table.")
    return gpd.GeoDataFrame(merged, geometry=gdf.geometry.name, crs=gdf.crs)


def drop_regions(gdf, column, values):
    """Return a copy of `gdf` without the rows whose `column` is in `values`."""
    if column not in gdf.columns:
        raise ColumnNotFound(column, gdf.columns)
    if isinstance(values, str):
        values = [values]
    return gdf[~gdf[column].isin(list(values))].copy()
