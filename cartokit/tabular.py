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
"""Flatten boundaries into a table with one row per vertex, and back.

The vertex table is what "fortifying" a spatial layer produces: every polygon
ring (a "piece") becomes a run of rows sharing a ``group`` identifier, and
every attribute of the source feature is repeated on each of its vertices.

=========  ===============================================================
column     meaning
=========  ===============================================================
long       x coordinate in the layer CRS
lat        y coordinate in the layer CRS
order      1-based position of the vertex within its piece
hole       True for interior rings
piece      1-based ring number within the feature
group      "<id>.<piece>"
id         feature identifier (row index or ``id_column``) as a string
=========  ===============================================================
"""
import logging

import geopandas as gpd
import numpy as np
import pandas as pd
from shapely.geometry import MultiPolygon, Polygon

from .exceptions import ColumnNotFound

logger = logging.getLogger("cartokit")

VERTEX_COLUMNS = ["long", "lat", "order", "hole", "piece", "group", "id"]

__all__ = ["fortify", "defortify", "VERTEX_COLUMNS"]


def _flatten_multi_geoms(geom):
    """Split Multi geometries and GeometryCollections into their single-part components."""
    if geom is None or geom.is_empty:
        return []
    if hasattr(geom, "geoms"):
        components = []
        for part in geom.geoms:
            components.extend(_flatten_multi_geoms(part))
        return components
    return [geom]


def _rings(geom):
    """yield (coordinates, is_hole) for every ring or line of a single-part geometry"""
    if geom.geom_type == "Polygon":
        yield np.asarray(geom.exterior.coords)[:, :2], False
        for interior in geom.interiors:
            yield np.asarray(interior.coords)[:, :2], True
    else:
        # LineString, LinearRing and Point
        yield np.asarray(geom.coords)[:, :2], False


def fortify(gdf, id_column=None):
    """Convert a layer into a `pandas.DataFrame` with one row per vertex.

    Parameters
    ----------
    gdf : geopandas.GeoDataFrame
        The layer to flatten. Polygons, lines and points are supported.
    id_column : str, optional
        Attribute column used as the feature identifier. The row index is used if not given.

    Returns
    -------
    table : pandas.DataFrame
        The columns listed in :data:`VERTEX_COLUMNS` followed by the feature attributes.
    """
    if id_column is not None and id_column not in gdf.columns:
        raise ColumnNotFound(id_column, gdf.columns)

    if id_column is None:
        ids = [str(i) for i in gdf.index]
    else:
        ids = [str(i) for i in gdf[id_column]]

    coords, order, hole, piece, group, fid, source_row = [], [], [], [], [], [], []
    for row, (feature_id, geom) in enumerate(zip(ids, gdf.geometry)):
        n_piece = 0
        for part in _flatten_multi_geoms(geom):
            for xy, is_hole in _rings(part):
                n_piece += 1
                n = len(xy)
                coords.append(xy)
                order.append(np.arange(1, n + 1))
                hole.append(np.full(n, is_hole))
                piece.append(np.full(n, n_piece))
                group.extend([f"{feature_id}.{n_piece}"] * n)
                fid.extend([feature_id] * n)
                source_row.append(np.full(n, row))
        if n_piece == 0:
            logger.debug(f"Feature {feature_id} has no geometry and is skipped.")

    if coords:
        xy = np.concatenate(coords)
        table = pd.DataFrame(
            {
                "long": xy[:, 0],
                "lat": xy[:, 1],
                "order": np.concatenate(order).astype(int),
                "hole": np.concatenate(hole).astype(bool),
                "piece": np.concatenate(piece).astype(int),
                "group": group,
                "id": fid,
            }
        )
        rows = np.concatenate(source_row)
    else:
        table = pd.DataFrame({c: [] for c in VERTEX_COLUMNS})
        rows = np.array([], dtype=int)

    attributes = pd.DataFrame(gdf.drop(columns=gdf.geometry.name))
    clashes = [c for c in attributes.columns if c in VERTEX_COLUMNS]
    if clashes:
        logger.debug(f"Renaming attribute columns {clashes} to avoid vertex columns.")
        attributes = attributes.rename(columns={c: f"{c}_attr" for c in clashes})
    attributes = attributes.iloc[rows].reset_index(drop=True)

    return pd.concat([table, attributes], axis=1)


def _is_ring(xy):
    return len(xy) >= 4 and np.array_equal(xy[0], xy[-1])


def defortify(table, crs=None):
    """Rebuild a polygon `geopandas.GeoDataFrame` from a vertex table made by :func:`fortify`.

    Pieces flagged as holes become interior rings of the closest preceding
    exterior piece of the same feature. Attribute columns are taken from the
    first vertex of each feature. Only polygon rings are rebuilt: pieces which
    came from lines or points are skipped with a warning, and so are features
    left with no rings.
    """
    required = ("long", "lat", "order", "hole", "piece", "id")
    missing = [c for c in required if c not in table.columns]
    if missing:
        raise ColumnNotFound(missing[0], table.columns)

    attribute_columns = [c for c in table.columns if c not in VERTEX_COLUMNS]
    records = []
    geometries = []
    for feature_id, feature in table.groupby("id", sort=False):
        polygons = []
        ordered = feature.sort_values(["piece", "order"])
        for n_piece, ring in ordered.groupby("piece", sort=True):
            xy = ring[["long", "lat"]].to_numpy()
            if not _is_ring(xy):
                logger.warning(
                    f"Piece {n_piece} of feature {feature_id} is not a closed ring and is skipped."
                )
                continue
            if bool(ring["hole"].iloc[0]):
                if not polygons:
                    logger.warning(
                        f"Feature {feature_id} has a hole without an exterior ring."
                    )
                    continue
                polygons[-1][1].append(xy)
            else:
                polygons.append((xy, []))
        if not polygons:
            logger.warning(f"Feature {feature_id} has no polygon rings and is skipped.")
            continue
        shapes = [Polygon(shell, holes) for shell, holes in polygons]
        if len(shapes) == 1:
            geometries.append(shapes[0])
        else:
            geometries.append(MultiPolygon(shapes))
        record = {"id": feature_id}
        record.update(feature[attribute_columns].iloc[0].to_dict())
        records.append(record)

    return gpd.GeoDataFrame(
        pd.DataFrame(records, columns=["id"] + attribute_columns),
        geometry=geometries,
        crs=crs,
    )
