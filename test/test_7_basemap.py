import matplotlib.pyplot as plt
import pytest
import xyzservices

import cartokit
from cartokit import basemap
from cartokit.exceptions import UnknownBasemapProvider

# ========================================= <cartokit.basemap> =========================================

""" 
No tiles are downloaded here: contextily.add_basemap is replaced with a fake.
"""


def test_resolve_provider():
    provider = basemap.resolve_provider("CartoDB.Positron")
    assert isinstance(provider, xyzservices.TileProvider)
    assert provider.name == "CartoDB.Positron"
    assert basemap.resolve_provider(provider) is provider
    url = "https://tiles.example.org/{z}/{x}/{y}.png"
    assert basemap.resolve_provider(url) == url


@pytest.mark.parametrize("source", ["NoSuch.Provider", 42])
def test_unknown_provider(source):
    with pytest.raises(UnknownBasemapProvider):
        basemap.resolve_provider(source)


def test_list_providers():
    providers = basemap.list_providers()
    assert "OpenStreetMap.Mapnik" in providers
    assert basemap.DEFAULT_PROVIDER in providers


def test_add_basemap(monkeypatch):
    calls = []
    monkeypatch.setattr(
        basemap.contextily, "add_basemap", lambda ax, **kwargs: calls.append(kwargs)
    )
    fig, ax = plt.subplots()
    assert basemap.add_basemap(ax, crs="EPSG:3857", zoom=3, alpha=0.5)
    assert calls[0]["zoom"] == 3
    assert calls[0]["alpha"] == 0.5
    assert calls[0]["source"].name == basemap.DEFAULT_PROVIDER


def test_add_basemap_failure(monkeypatch):
    def offline(ax, **kwargs):
        raise ConnectionError("no network")

    monkeypatch.setattr(basemap.contextily, "add_basemap", offline)
    fig, ax = plt.subplots()
    assert basemap.add_basemap(ax, crs="EPSG:3857") is False
    with pytest.raises(ConnectionError):
        basemap.add_basemap(ax, crs="EPSG:3857", strict=True)


def test_add_basemap_needs_crs():
    fig, ax = plt.subplots()
    with pytest.raises(ValueError):
        basemap.add_basemap(ax, crs=None)


def test_choropleth_with_basemap(world, monkeypatch):
    calls = []
    monkeypatch.setattr(
        basemap.contextily, "add_basemap", lambda ax, **kwargs: calls.append(kwargs)
    )
    choropleth = cartokit.ChoroplethMap(
        world,
        column="continent",
        projection="EPSG:3857",
        plot_engine=cartokit.MatplotlibPlotEngine(),
    )
    ax = choropleth.plot(basemap=True, alpha=0.7)
    assert len(calls) == 1
    assert ax.get_legend() is not None
