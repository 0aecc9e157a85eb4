import matplotlib

matplotlib.use("Agg")

import geopandas as gpd
import matplotlib.pyplot as plt
import numpy as np
import pytest
from shapely.geometry import MultiPolygon, Polygon, box

## ==========================

# A small synthetic world: one plain polygon, one polygon with a hole, one
# multipolygon, one region without a population estimate and a large one.
n_vertices = 35  # 5 per ring: Atlantis 1 ring, Borealia 2, Archipelago 2, Terra Nullius 1, Meridia 1


def _polygon_with_hole():
    return Polygon(
        box(10, 40, 50, 70).exterior.coords,
        [box(20, 50, 30, 60).exterior.coords],
    )


@pytest.fixture
def world():
    return gpd.GeoDataFrame(
        {
            "name": ["Atlantis", "Borealia", "Archipelago", "Terra Nullius", "Meridia"],
            "continent": ["Ocean", "Europe", "Asia", "Antarctica", "Asia"],
            "pop_est": [1_000_000.0, 5_000_000.0, 250_000.0, np.nan, 30_000_000.0],
        },
        geometry=[
            box(-60, -30, -20, 10),
            _polygon_with_hole(),
            MultiPolygon([box(100, -10, 110, 0), box(115, -5, 125, 5)]),
            box(-20, -80, 20, -65),
            box(60, 10, 90, 35),
        ],
        crs="EPSG:4326",
    )


@pytest.fixture
def world_shapefile(world, tmp_path):
    path = tmp_path / "world.shp"
    world.to_file(path)
    return str(path)


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


@pytest.fixture
def world_without_crs(world):
    return gpd.GeoDataFrame(
        world.drop(columns="geometry"), geometry=list(world.geometry)
    )
