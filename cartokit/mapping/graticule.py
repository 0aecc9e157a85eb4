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
import geopandas as gpd
import numpy as np
from shapely.geometry import LineString

WEB_MERCATOR_MAX_LATITUDE = 85.0511


def make_graticule(spacing=30, resolution=1.0, max_latitude=90.0):
    """Build meridians and parallels every `spacing` degrees as a `geopandas.GeoDataFrame` in WGS84.

    Parameters
    ----------
    spacing : float or (float, float)
        Spacing in degrees, or (longitude spacing, latitude spacing).
    resolution : float
        Distance in degrees between the vertices of each line, so that lines curve when projected.
    max_latitude : float
        Meridians run from -max_latitude to max_latitude.

    Returns
    -------
    geopandas.GeoDataFrame
        With a "kind" column, "meridian" or "parallel", and a "degrees" column.
    """
    if np.isscalar(spacing):
        dlon = dlat = float(spacing)
    else:
        dlon, dlat = (float(s) for s in spacing)
    if dlon <= 0 or dlat <= 0 or resolution <= 0:
        raise ValueError("The graticule spacing and resolution must be positive.")

    lats = np.arange(-max_latitude, max_latitude + resolution / 2, resolution)
    lats = np.clip(lats, -max_latitude, max_latitude)
    lons = np.arange(-180.0, 180.0 + resolution / 2, resolution)
    lons = np.clip(lons, -180.0, 180.0)

    kinds, degrees, lines = [], [], []
    for lon in np.arange(-180.0, 180.0 + dlon / 2, dlon):
        lon = min(lon, 180.0)
        kinds.append("meridian")
        degrees.append(lon)
        lines.append(LineString(np.column_stack([np.full(lats.shape, lon), lats])))
    for lat in np.arange(-90.0 + dlat, 90.0, dlat):
        if abs(lat) > max_latitude:
            continue
        kinds.append("parallel")
        degrees.append(lat)
        lines.append(LineString(np.column_stack([lons, np.full(lons.shape, lat)])))

    return gpd.GeoDataFrame(
        {"kind": kinds, "degrees": degrees}, geometry=lines, crs="EPSG:4326"
    )
