import cartopy.crs as ccrs
import geopandas as gpd
import matplotlib.pyplot as plt
import numpy as np
import pytest
from cartopy.mpl.geoaxes import GeoAxes
from matplotlib.colorbar import Colorbar
from shapely.geometry import box

import cartokit
from cartokit import ChoroplethMap, MatplotlibPlotEngine
from cartokit.exceptions import ColumnNotFound

# ========================================= <cartokit.ChoroplethMap> =========================================

""" 
Tests for drawing choropleth maps. Every plotting method is called on both
cartopy GeoAxes (CartopyPlotEngine) and plain matplotlib axes
(MatplotlibPlotEngine) where it applies:

    - plot_choropleth (continuous, classified, categorical, missing values)
    - plot_boundaries
    - plot_graticule
    - add_legend
    - add_scale_bar
    - add_north_arrow
    - add_basemap
    - plot
"""


@pytest.fixture
def cartopy_map(world):
    return ChoroplethMap(world, column="pop_est", projection="robinson")


@pytest.fixture
def matplotlib_map(world):
    return ChoroplethMap(
        world,
        column="pop_est",
        projection="web mercator",
        plot_engine=MatplotlibPlotEngine(),
    )


def _legend_labels(ax):
    legend = ax.get_legend()
    assert legend is not None
    return [t.get_text() for t in legend.get_texts()]


def test_create_axes(cartopy_map, matplotlib_map):
    ax = cartopy_map.create_axes()
    assert isinstance(ax, GeoAxes)
    assert isinstance(ax.projection, ccrs.Robinson)

    ax = matplotlib_map.create_axes()
    assert not isinstance(ax, GeoAxes)


def test_layer(cartopy_map, matplotlib_map, world):
    assert cartopy_map.layer.crs == world.crs
    assert matplotlib_map.layer.crs.to_epsg() == 3857


def test_continuous_choropleth(cartopy_map):
    ax = cartopy_map.create_axes()
    cartopy_map.plot_choropleth(ax, cmap="YlGnBu")
    # the colourbar has its own axes
    assert len(ax.figure.axes) == 2
    assert len(ax.collections) >= 2
    # Terra Nullius has no population estimate
    assert _legend_labels(ax) == ["Missing"]


def test_classified_choropleth(cartopy_map):
    ax = cartopy_map.create_axes()
    cartopy_map.plot_choropleth(
        ax, scheme="quantiles", k=2, legend_kwds={"location": "bottom", "title": "Population"}
    )
    labels = _legend_labels(ax)
    assert len(labels) == 3
    assert labels[-1] == "Missing"
    assert labels[0].startswith("250,000 - ")
    assert ax.get_legend().get_title().get_text() == "Population"
    assert len(ax.figure.axes) == 1


def test_categorical_choropleth(cartopy_map):
    ax = cartopy_map.create_axes()
    cartopy_map.plot_choropleth(ax, column="continent", cmap="Set2")
    assert _legend_labels(ax) == ["Antarctica", "Asia", "Europe", "Ocean"]


def test_choropleth_without_legend(cartopy_map):
    ax = cartopy_map.create_axes()
    cartopy_map.plot_choropleth(ax, scheme="equal_interval", legend=False)
    assert ax.get_legend() is None


def test_legend_location_inside(cartopy_map):
    ax = cartopy_map.create_axes()
    cartopy_map.plot_choropleth(
        ax, column="continent", legend_kwds={"location": "lower left"}
    )
    assert ax.get_legend() is not None


def test_legend_location_none(cartopy_map):
    ax = cartopy_map.create_axes()
    cartopy_map.plot_choropleth(ax, legend_kwds={"location": "none"})
    assert len(ax.figure.axes) == 1


def test_add_legend_colourbar(cartopy_map):
    from matplotlib.cm import ScalarMappable

    ax = cartopy_map.create_axes()
    cbar = cartopy_map.add_legend(
        ax, mappable=ScalarMappable(cmap="viridis"), location="bottom", title="x"
    )
    assert isinstance(cbar, Colorbar)


def test_unknown_column(cartopy_map, world):
    ax = cartopy_map.create_axes()
    with pytest.raises(ColumnNotFound):
        cartopy_map.plot_choropleth(ax, column="gdp")
    no_column = ChoroplethMap(world)
    with pytest.raises(ValueError):
        no_column.plot_choropleth(no_column.create_axes())


def test_matplotlib_engine_choropleth(matplotlib_map):
    ax = matplotlib_map.create_axes()
    matplotlib_map.plot_choropleth(ax, scheme="natural_breaks", k=3, linestyle="dashed")
    assert len(ax.collections) >= 2
    x0, x1 = ax.get_xlim()
    # Web Mercator metres
    assert x1 - x0 > 1e6


def test_plot_boundaries(cartopy_map, matplotlib_map):
    for choropleth in (cartopy_map, matplotlib_map):
        ax = choropleth.create_axes()
        n = len(ax.collections)
        choropleth.plot_boundaries(ax, color="0.2", linewidth=0.8, linestyle=(0, (5, 2)))
        assert len(ax.collections) == n + 1


def test_plot_graticule(cartopy_map, matplotlib_map):
    ax = cartopy_map.create_axes()
    assert cartopy_map.plot_graticule(ax, spacing=20) is ax

    ax = matplotlib_map.create_axes()
    matplotlib_map.plot_choropleth(ax)
    xlim = ax.get_xlim()
    n = len(ax.collections)
    matplotlib_map.plot_graticule(ax, spacing=(30, 15))
    assert len(ax.collections) == n + 1
    # the view is not widened to the whole globe
    assert ax.get_xlim() == xlim


def test_scale_bar_and_north_arrow(cartopy_map):
    ax = cartopy_map.create_axes()
    cartopy_map.plot_choropleth(ax)
    artists = cartopy_map.add_scale_bar(ax, location=(0.3, 0.5), segments=3)
    # three segments and two labels
    assert len(artists) == 5
    assert artists[-1].get_text().endswith(" km")
    arrow, text = cartopy_map.add_north_arrow(ax)
    assert text.get_text() == "N"


def test_basemap(matplotlib_map, monkeypatch):
    calls = []

    def fake_add_basemap(ax, **kwargs):
        calls.append(kwargs)

    monkeypatch.setattr(cartokit.basemap.contextily, "add_basemap", fake_add_basemap)
    ax = matplotlib_map.plot(basemap=True, basemap_source="OpenStreetMap.Mapnik")
    assert len(calls) == 1
    assert calls[0]["crs"].to_epsg() == 3857
    assert calls[0]["source"].name == "OpenStreetMap.Mapnik"
    assert ax is not None


def test_basemap_needs_matplotlib_engine(cartopy_map):
    ax = cartopy_map.create_axes()
    with pytest.raises(NotImplementedError):
        cartopy_map.add_basemap(ax)


def test_set_extent(cartopy_map, matplotlib_map):
    ax = cartopy_map.create_axes()
    cartopy_map.plot_choropleth(ax)
    cartopy_map.set_extent(ax, (-70, 0, -40, 20))

    ax = matplotlib_map.create_axes()
    matplotlib_map.plot_choropleth(ax)
    matplotlib_map.set_extent(ax, (-70, 0, -40, 20))
    x0, x1 = ax.get_xlim()
    assert x0 == pytest.approx(-70 * 111319.49, rel=1e-3)
    assert x1 == pytest.approx(0.0, abs=1.0)


def test_plot_everything(cartopy_map):
    ax = cartopy_map.plot(
        scheme="quantiles",
        k=3,
        cmap="OrRd",
        extent=(-70, 100, -60, 75),
        graticule=True,
        boundaries=True,
        scale_bar=True,
        north_arrow=True,
        title="Population",
    )
    assert ax.get_title() == "Population"


def test_plot_choropleth_function(world):
    ax = cartokit.plot_choropleth(world, "continent", projection="mollweide")
    assert isinstance(ax.projection, ccrs.Mollweide)


def test_style_overrides(world):
    choropleth = ChoroplethMap(world, column="pop_est", style={"cmap": "Greens", "legend_location": "none"})
    assert choropleth.style["cmap"] == "Greens"
    ax = choropleth.plot()
    assert len(ax.figure.axes) == 1


def test_column_passed_by_position(cartopy_map):
    ax = cartopy_map.create_axes()
    cartopy_map.plot_choropleth(ax, "continent")
    assert _legend_labels(ax) == ["Antarctica", "Asia", "Europe", "Ocean"]
    with pytest.raises(ColumnNotFound):
        cartopy_map.plot_choropleth(ax, "gdp")


def _row_of_squares(values):
    return gpd.GeoDataFrame(
        {"value": values},
        geometry=[box(10 * i, 0, 10 * i + 8, 8) for i in range(len(values))],
        crs="EPSG:4326",
    )


def _fills_and_legend_colours(values, **kwargs):
    choropleth = ChoroplethMap(
        _row_of_squares(values),
        column="value",
        projection="EPSG:4326",
        plot_engine=MatplotlibPlotEngine(),
    )
    ax = choropleth.create_axes()
    choropleth.plot_choropleth(ax, legend_kwds={"location": "lower left"}, **kwargs)
    collection = ax.collections[0]
    collection.update_scalarmappable()
    legend_colours = [h.get_facecolor() for h in ax.get_legend().legend_handles]
    return collection.get_facecolor(), legend_colours


@pytest.mark.parametrize(
    "values, kwargs, classes",
    [
        # 2 and 4 sit exactly on the bounds
        ([1.0, 2.0, 3.0, 4.0], dict(scheme="user_defined", bins=[2, 4]), [0, 0, 1, 1]),
        # the median, 3, is the first bound
        ([1.0, 2.0, 3.0, 4.0, 5.0], dict(scheme="quantiles", k=2), [0, 0, 0, 1, 1]),
        # class maxima are the bounds
        (
            [1.0, 2.0, 3.0, 10.0, 11.0, 12.0, 50.0, 51.0],
            dict(scheme="natural_breaks", k=3),
            [0, 0, 0, 1, 1, 1, 2, 2],
        ),
        (
            [1.0, 2.0, 3.0, 10.0, 11.0, 12.0, 50.0, 51.0],
            dict(scheme="fisher_jenks", k=3),
            [0, 0, 0, 1, 1, 1, 2, 2],
        ),
    ],
)
def test_classified_fill_matches_legend(values, kwargs, classes):
    fills, legend_colours = _fills_and_legend_colours(values, **kwargs)
    assert len(fills) == len(values)
    assert len(legend_colours) == max(classes) + 1
    for fill, c in zip(fills, classes):
        np.testing.assert_allclose(fill, legend_colours[c])
    # neighbouring classes are told apart
    assert not np.allclose(legend_colours[0], legend_colours[-1])
