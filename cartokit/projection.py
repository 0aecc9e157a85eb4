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
"""Resolve map projections and reproject boundaries layers.

Projections can be given by name (see :func:`list_projections`), as an EPSG
code, a PROJ string, a `pyproj.CRS` or a `cartopy.crs.CRS`. Names are
matched case-insensitively and ignore spaces, dashes and underscores, so
"Winkel Tripel", "winkel-tripel" and "winkeltripel" are the same projection.
"""
import logging
import re

import cartopy.crs as ccrs
import numpy as np
import pyproj
import shapely.geometry as sgeom
from pyproj.exceptions import CRSError

from .exceptions import MissingCRS, UnknownProjection

logger = logging.getLogger("cartokit")

WGS84 = "EPSG:4326"
WEB_MERCATOR = "EPSG:3857"


class ProjProjection(ccrs.Projection):
    """A cartopy projection built from any PROJ definition cartopy has no class for, e.g. Winkel Tripel.

    The map boundary is the rectangle which encloses the projected globe.
    """

    def __init__(self, crs):
        crs = pyproj.CRS.from_user_input(crs)
        super().__init__(crs)
        if getattr(self, "bounds", None) is None:
            self.bounds = _projected_globe_bounds(crs)

    @property
    def boundary(self):
        x0, x1, y0, y1 = self.bounds
        return sgeom.LineString(
            [(x0, y0), (x0, y1), (x1, y1), (x1, y0), (x0, y0)]
        )

    @property
    def x_limits(self):
        return self.bounds[0], self.bounds[1]

    @property
    def y_limits(self):
        return self.bounds[2], self.bounds[3]

    @property
    def threshold(self):
        x0, x1, y0, y1 = self.bounds
        return min(x1 - x0, y1 - y0) / 1e4


def _projected_globe_bounds(crs):
    lons, lats = np.meshgrid(np.linspace(-180, 180, 181), np.linspace(-90, 90, 91))
    transformer = pyproj.Transformer.from_crs(WGS84, crs, always_xy=True)
    x, y = transformer.transform(lons.ravel(), lats.ravel())
    x = np.asarray(x)
    y = np.asarray(y)
    ok = np.isfinite(x) & np.isfinite(y)
    if not ok.any():
        raise UnknownProjection(crs.to_string())
    return (
        float(x[ok].min()),
        float(x[ok].max()),
        float(y[ok].min()),
        float(y[ok].max()),
    )


def _winkel_tripel(central_longitude=0.0, **kwargs):
    return ProjProjection(
        f"+proj=wintri +lon_0={central_longitude} +datum=WGS84 +units=m +no_defs"
    )


def _web_mercator(**kwargs):
    return ccrs.Mercator.GOOGLE


def _with_centre(cls, *keys):
    def factory(central_longitude=0.0, central_latitude=0.0, **kwargs):
        params = {"central_longitude": central_longitude}
        if "central_latitude" in keys:
            params["central_latitude"] = central_latitude
        for k in keys:
            if k in kwargs and k != "central_latitude":
                params[k] = kwargs[k]
        return cls(**params)

    return factory


PROJECTIONS = {
    "platecarree": _with_centre(ccrs.PlateCarree),
    "robinson": _with_centre(ccrs.Robinson),
    "mollweide": _with_centre(ccrs.Mollweide),
    "winkeltripel": _winkel_tripel,
    "equalearth": _with_centre(ccrs.EqualEarth),
    "eckertiv": _with_centre(ccrs.EckertIV),
    "orthographic": _with_centre(ccrs.Orthographic, "central_latitude"),
    "mercator": _with_centre(ccrs.Mercator),
    "webmercator": _web_mercator,
    "lambertazimuthalequalarea": _with_centre(
        ccrs.LambertAzimuthalEqualArea, "central_latitude"
    ),
    "albersequalarea": _with_centre(
        ccrs.AlbersEqualArea, "central_latitude", "standard_parallels"
    ),
    "interruptedgoodehomolosine": _with_centre(ccrs.InterruptedGoodeHomolosine),
}

# alternative spellings
ALIASES = {
    "longlat": "platecarree",
    "lonlat": "platecarree",
    "equirectangular": "platecarree",
    "wgs84": "platecarree",
    "wintri": "winkeltripel",
    "robin": "robinson",
    "moll": "mollweide",
    "ortho": "orthographic",
    "pseudomercator": "webmercator",
    "laea": "lambertazimuthalequalarea",
    "aea": "albersequalarea",
    "goode": "interruptedgoodehomolosine",
}


def _normalise_name(name: str) -> str:
    return re.sub(r"[\s_\-]+", "", name).lower()


def list_projections():
    """return the names of the projections that can be given by name"""
    return list(PROJECTIONS.keys())


def resolve_projection(projection, **kwargs) -> ccrs.CRS:
    """Turn a projection name, EPSG code, PROJ string or CRS object into a cartopy CRS.

    Parameters
    ----------
    projection : str, int, pyproj.CRS or cartopy.crs.CRS
        The projection.
    **kwargs :
        Projection parameters for named projections, such as ``central_longitude``
        and ``central_latitude``.

    Returns
    -------
    cartopy.crs.CRS

    Raises
    ------
    UnknownProjection
        If the projection can not be resolved.
    """
    if isinstance(projection, ccrs.CRS):
        return projection
    if isinstance(projection, str):
        key = _normalise_name(projection)
        key = ALIASES.get(key, key)
        if key in PROJECTIONS:
            return PROJECTIONS[key](**kwargs)
    if projection is None or isinstance(projection, bool):
        raise UnknownProjection(projection)

    try:
        crs = pyproj.CRS.from_user_input(projection)
    except CRSError as e:
        raise UnknownProjection(projection) from e

    if crs.is_geographic:
        return ccrs.PlateCarree(
            central_longitude=kwargs.get("central_longitude", 0.0)
        )
    epsg = crs.to_epsg()
    if epsg == 3857:
        return ccrs.Mercator.GOOGLE
    if epsg is not None:
        try:
            return ccrs.epsg(epsg)
        except ValueError:
            logger.debug(f"cartopy can not build EPSG:{epsg}, falling back to PROJ.")
    return ProjProjection(crs)


def reproject(gdf, projection, **kwargs):
    """Return a copy of `gdf` in the given projection.

    A layer without a CRS is assumed to be in WGS84 longitude/latitude.
    Features which can not be projected (e.g. the far side of the globe in an
    orthographic projection) are dropped.
    """
    crs = resolve_projection(projection, **kwargs)
    if gdf.crs is None:
        logger.warning("The layer has no CRS. Assuming WGS84 (EPSG:4326).")
        gdf = gdf.set_crs(WGS84)
    projected = gdf.to_crs(to_pyproj(crs))
    keep = ~(projected.geometry.isna() | projected.geometry.is_empty)
    bounds = projected.geometry.bounds
    keep &= np.isfinite(bounds.to_numpy()).all(axis=1)
    if not keep.all():
        logger.warning(
            f"{int((~keep).sum())} feature(s) could not be projected and were dropped."
        )
        projected = projected[keep]
    return projected


def to_pyproj(crs):
    """Return `crs` as a `pyproj.CRS`. Web Mercator comes back as EPSG:3857, which tile servers use."""
    if crs is ccrs.Mercator.GOOGLE:
        return pyproj.CRS.from_user_input(WEB_MERCATOR)
    return pyproj.CRS.from_user_input(crs)


def ensure_crs(gdf):
    """Return `gdf` unchanged, or raise MissingCRS if it has no CRS."""
    if gdf.crs is None:
        raise MissingCRS()
    return gdf

