import os

import pandas as pd
import pytest
from conftest import n_vertices

from cartokit.__main__ import main

# ========================================= <cartokit command line> =========================================


def test_no_arguments(capsys):
    with pytest.raises(SystemExit) as e:
        main([])
    assert e.value.code == 1
    assert "subcommands" in capsys.readouterr().err


def test_version(capsys):
    with pytest.raises(SystemExit) as e:
        main(["-v"])
    assert e.value.code == 0
    assert capsys.readouterr().out.strip() != ""


def test_bad_option():
    with pytest.raises(SystemExit) as e:
        main(["list", "everything"])
    assert e.value.code == 1


def test_list_schemes(capsys):
    main(["list", "schemes"])
    out = capsys.readouterr().out
    assert "Schemes:" in out
    assert "quantiles" in out
    assert "natural_breaks" in out


def test_list_palettes(capsys):
    main(["list", "palettes", "-k", "diverging"])
    out = capsys.readouterr().out
    assert "RdBu" in out
    assert "YlOrRd" not in out


def test_reproject(world_shapefile, tmp_path, capsys):
    import geopandas as gpd

    output = str(tmp_path / "world_moll.gpkg")
    main(["reproject", world_shapefile, output, "-p", "mollweide"])
    assert "Done!" in capsys.readouterr().out
    projected = gpd.read_file(output)
    assert len(projected) == 5
    assert projected.total_bounds[2] > 1e6


def test_fortify(world_shapefile, tmp_path, capsys):
    output = str(tmp_path / "world.csv")
    main(["fortify", world_shapefile, output, "--id-column", "name"])
    assert f"{n_vertices} vertices from 5 features" in capsys.readouterr().out
    table = pd.read_csv(output)
    assert len(table) == n_vertices
    assert list(table.columns[:7]) == ["long", "lat", "order", "hole", "piece", "group", "id"]
    assert set(table["id"]) == {"Atlantis", "Borealia", "Archipelago", "Terra Nullius", "Meridia"}


def test_choropleth(world_shapefile, tmp_path, capsys):
    output = str(tmp_path / "maps" / "pop.png")
    main(
        [
            "choropleth",
            world_shapefile,
            output,
            "-c",
            "pop_est",
            "-s",
            "quantiles",
            "-k",
            "3",
            "--drop",
            "continent=Antarctica",
            "--graticule",
            "--north-arrow",
            "--title",
            "Population",
            "--dpi",
            "50",
        ]
    )
    assert "Done!" in capsys.readouterr().out
    assert os.path.getsize(output) > 0


def test_choropleth_with_join(world_shapefile, tmp_path):
    table = tmp_path / "gdp.csv"
    pd.DataFrame(
        {"name": ["Atlantis", "Borealia", "Meridia"], "gdp": [1.5, 2.5, 0.5]}
    ).to_csv(table, index=False)
    output = str(tmp_path / "gdp.png")
    main(
        [
            "map",
            world_shapefile,
            output,
            "-c",
            "gdp",
            "--join",
            str(table),
            "--on",
            "name",
            "-p",
            "equal earth",
            "--dpi",
            "50",
        ]
    )
    assert os.path.exists(output)


def test_choropleth_bad_drop(world_shapefile, tmp_path):
    with pytest.raises(SystemExit):
        main(["choropleth", world_shapefile, str(tmp_path / "x.png"), "-c", "pop_est", "--drop", "Antarctica"])
