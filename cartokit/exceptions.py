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


class UnknownProjection(Exception):
    """raise this exception when a projection name, EPSG code or PROJ string can not be resolved."""

    def __init__(self, projection):
        self.projection = projection
        super().__init__(
            f"Unable to resolve the projection '{projection}'. Use one of the names from `cartokit list projections`, an EPSG code or a PROJ string."
        )


class ColumnNotFound(Exception):
    """raise this exception when an attribute column does not exist in the layer."""

    def __init__(self, column, available=()):
        self.column = column
        self.available = list(available)
        super().__init__(
            f"The column '{column}' does not exist. Available columns: {', '.join(str(c) for c in self.available)}"
        )


class UnknownClassificationScheme(Exception):
    """raise this exception when the classification scheme is not supported."""

    def __init__(self, scheme):
        self.scheme = scheme
        super().__init__(
            f"Unknown classification scheme '{scheme}'. Use one of the names from `cartokit list schemes`."
        )


class UnknownBasemapProvider(Exception):
    """raise this exception when the basemap tile provider is unknown."""

    def __init__(self, provider):
        self.provider = provider
        super().__init__(
            f"Unknown basemap provider '{provider}'. Use one of the names from `cartokit list providers`, such as 'CartoDB.Positron'."
        )


class MissingCRS(Exception):
    """raise this exception when a layer has no coordinate reference system."""

    def __init__(self):
        super().__init__(
            "The layer has no coordinate reference system. Set one with `gdf.set_crs(...)` first."
        )
