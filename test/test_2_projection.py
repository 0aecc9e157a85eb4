import cartopy.crs as ccrs
import numpy as np
import pytest

import cartokit
from cartokit.exceptions import MissingCRS, UnknownProjection
from cartokit.projection import (
    ProjProjection,
    ensure_crs,
    resolve_projection,
)

# ========================================= <cartokit.projection> =========================================


@pytest.mark.parametrize(
    "name, cls",
    [
        ("robinson", ccrs.Robinson),
        ("Robinson", ccrs.Robinson),
        ("robin", ccrs.Robinson),
        ("Mollweide", ccrs.Mollweide),
        ("equal earth", ccrs.EqualEarth),
        ("Eckert-IV", ccrs.EckertIV),
        ("long_lat", ccrs.PlateCarree),
        ("orthographic", ccrs.Orthographic),
        ("interrupted goode homolosine", ccrs.InterruptedGoodeHomolosine),
    ],
)
def test_resolve_projection_by_name(name, cls):
    assert isinstance(resolve_projection(name), cls)


def test_every_listed_projection_resolves():
    for name in cartokit.list_projections():
        crs = resolve_projection(name)
        assert isinstance(crs, ccrs.Projection), name


def test_winkel_tripel():
    crs = resolve_projection("Winkel Tripel")
    assert isinstance(crs, ProjProjection)
    x0, x1 = crs.x_limits
    y0, y1 = crs.y_limits
    assert np.isfinite([x0, x1, y0, y1]).all()
    assert x1 > 1.5e7 and x0 < -1.5e7
    assert crs.boundary.is_closed


def test_central_longitude():
    crs = resolve_projection("robinson", central_longitude=150)
    assert crs.proj4_params["lon_0"] == 150


def test_resolve_projection_from_codes():
    assert isinstance(resolve_projection(4326), ccrs.PlateCarree)
    assert isinstance(resolve_projection("EPSG:4326"), ccrs.PlateCarree)
    assert resolve_projection("EPSG:3857") is ccrs.Mercator.GOOGLE
    assert isinstance(resolve_projection("+proj=robin +lon_0=0 +datum=WGS84"), ccrs.Projection)
    crs = ccrs.Mollweide()
    assert resolve_projection(crs) is crs


@pytest.mark.parametrize("bad", ["not a projection", None, True])
def test_unknown_projection(bad):
    with pytest.raises(UnknownProjection):
        resolve_projection(bad)


def test_reproject(world):
    projected = cartokit.reproject(world, "mollweide")
    assert projected.crs.is_projected
    assert len(projected) == len(world)
    # metres, not degrees
    assert projected.total_bounds[2] > 1e6
    # the input is left alone
    assert world.crs.to_epsg() == 4326


def test_reproject_without_crs(world_without_crs):
    assert world_without_crs.crs is None
    projected = cartokit.reproject(world_without_crs, "robinson")
    assert projected.crs is not None
    assert len(projected) == len(world_without_crs)


def test_reproject_drops_far_side(world):
    projected = cartokit.reproject(
        world, "orthographic", central_longitude=0, central_latitude=0
    )
    assert "Archipelago" not in projected["name"].values
    assert "Atlantis" in projected["name"].values
    assert np.isfinite(projected.total_bounds).all()


def test_ensure_crs(world, world_without_crs):
    assert ensure_crs(world) is world
    with pytest.raises(MissingCRS):
        ensure_crs(world_without_crs)
