import pytest

## ==========================

def test_numpy_import():
    import numpy
    return


def test_cartopy_import():
    import cartopy


def test_geopandas_import():
    import geopandas
    print("\t\t You have geopandas version {}".format(geopandas.__version__))


def test_mapclassify_import():
    import mapclassify


def test_contextily_import():
    import contextily


def test_cartokit_modules():
    import cartokit
    from cartokit import plot
    from cartokit import palettes
    from cartokit import projection
    from cartokit import tabular
    from cartokit import mapping
