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
import inspect
import logging
from functools import wraps

from .exceptions import ColumnNotFound

logger = logging.getLogger("cartokit")


def append_docstring(docstring_to_add):
    """append text to the end of the function's __doc__

    Parameters
    ----------
    docstring_to_add : str
        the text to append to the function's __doc__
    """

    def inner(func_pointer):
        if func_pointer.__doc__:
            func_pointer.__doc__ += docstring_to_add
        else:
            func_pointer.__doc__ = docstring_to_add

        @wraps(func_pointer)
        def wrapper(*args, **kwargs):
            return func_pointer(*args, **kwargs)

        return wrapper

    return inner


def validate_column(func_pointer):
    """check if the `column` argument (or the map's own column) exists in the layer.
    If not, raise ColumnNotFound exception"""
    signature = inspect.signature(func_pointer)

    @wraps(func_pointer)
    def wrapper(self, *args, **kwargs):
        bound = signature.bind(self, *args, **kwargs)
        column = bound.arguments.get("column")
        if column is None:
            column = self.column
        if column is None:
            raise ValueError(
                "No attribute column to plot. Pass `column` or set `ChoroplethMap.column` first."
            )
        if column not in self.gdf.columns:
            raise ColumnNotFound(column, self.gdf.columns)
        bound.arguments["column"] = column
        return func_pointer(*bound.args, **bound.kwargs)

    return wrapper
