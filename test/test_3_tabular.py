import geopandas as gpd
import pandas as pd
import pytest
from shapely.geometry import LineString, Point, Polygon

import cartokit
from cartokit.exceptions import ColumnNotFound
from cartokit.tabular import VERTEX_COLUMNS
from conftest import n_vertices

# ========================================= <cartokit.tabular> =========================================


def test_fortify_shape(world):
    table = cartokit.fortify(world)
    assert isinstance(table, pd.DataFrame)
    assert len(table) == n_vertices
    assert list(table.columns[: len(VERTEX_COLUMNS)]) == VERTEX_COLUMNS
    # attributes are merged onto every vertex
    assert {"name", "continent", "pop_est"}.issubset(table.columns)
    assert "geometry" not in table.columns


def test_fortify_pieces_and_holes(world):
    table = cartokit.fortify(world, id_column="name")

    borealia = table[table["id"] == "Borealia"]
    assert len(borealia) == 10
    assert sorted(borealia["group"].unique()) == ["Borealia.1", "Borealia.2"]
    assert not borealia.loc[borealia["piece"] == 1, "hole"].any()
    assert borealia.loc[borealia["piece"] == 2, "hole"].all()

    archipelago = table[table["id"] == "Archipelago"]
    assert sorted(archipelago["piece"].unique()) == [1, 2]
    assert not archipelago["hole"].any()
    assert (archipelago["continent"] == "Asia").all()


def test_fortify_order(world):
    table = cartokit.fortify(world)
    first = table[table["group"] == "0.1"]
    assert list(first["order"]) == [1, 2, 3, 4, 5]
    # rings are closed
    assert first.iloc[0][["long", "lat"]].tolist() == first.iloc[-1][["long", "lat"]].tolist()


def test_fortify_index_ids(world):
    table = cartokit.fortify(world)
    assert set(table["id"]) == {"0", "1", "2", "3", "4"}


def test_fortify_unknown_id_column(world):
    with pytest.raises(ColumnNotFound):
        cartokit.fortify(world, id_column="iso_a3")


def test_fortify_lines_points_and_empty(world):
    gdf = gpd.GeoDataFrame(
        {"id": ["a", "b", "c"]},
        geometry=[LineString([(0, 0), (1, 1), (2, 0)]), Point(3, 3), Polygon()],
    )
    table = cartokit.fortify(gdf)
    assert len(table) == 4
    # the attribute named like a vertex column is kept under another name
    assert "id_attr" in table.columns
    assert list(table["id_attr"]) == ["a", "a", "a", "b"]


def test_fortify_projected(world):
    table = cartokit.fortify(cartokit.reproject(world, "robinson"))
    assert table["long"].abs().max() > 1e6


def test_defortify(world):
    table = cartokit.fortify(world, id_column="name")
    rebuilt = cartokit.defortify(table)
    assert list(rebuilt["id"]) == list(world["name"])
    assert rebuilt.geometry.area.sum() == pytest.approx(
        sum(g.area for g in world.geometry)
    )
    borealia = rebuilt[rebuilt["id"] == "Borealia"].geometry.iloc[0]
    assert len(borealia.interiors) == 1
    assert rebuilt[rebuilt["id"] == "Archipelago"].geometry.iloc[0].geom_type == "MultiPolygon"
    assert "continent" in rebuilt.columns


def test_defortify_needs_vertex_columns():
    with pytest.raises(ColumnNotFound):
        cartokit.defortify(pd.DataFrame({"long": [0.0], "lat": [0.0]}))


def test_defortify_skips_lines_and_points(world):
    gdf = gpd.GeoDataFrame(
        {"name": ["line", "point", "square"]},
        geometry=[
            LineString([(0, 0), (1, 1), (2, 0)]),
            Point(3, 3),
            Polygon([(0, 0), (1, 0), (1, 1), (0, 1)]),
        ],
    )
    rebuilt = cartokit.defortify(cartokit.fortify(gdf, id_column="name"))
    assert list(rebuilt["id"]) == ["square"]
    assert rebuilt.geometry.iloc[0].area == pytest.approx(1.0)
