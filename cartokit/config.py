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
"""Default map style and loading of user style files.

A style file is a YAML mapping whose keys override :data:`DEFAULT_STYLE`, e.g.

.. code-block:: yaml

    cmap: YlGnBu
    edgecolor: "0.3"
    linewidth: 0.2
    legend_location: bottom

The ``CARTOKIT_STYLE`` environment variable names a style file to use when
no path is given.
"""
import copy
import logging
import os

import yaml

logger = logging.getLogger("cartokit")

DEFAULT_STYLE = {
    "figsize": [10, 6],
    "dpi": 120,
    "projection": "robinson",
    "cmap": "YlOrRd",
    "categorical_cmap": "Set2",
    "edgecolor": "white",
    "linewidth": 0.3,
    "linestyle": "solid",
    "missing_color": "lightgrey",
    "alpha": 1.0,
    "legend_location": "right",
    "graticule_spacing": 30,
    "graticule_color": "0.6",
    "graticule_linewidth": 0.4,
    "graticule_linestyle": "dotted",
    "basemap_source": "CartoDB.Positron",
}


def load_style(path=None, **overrides):
    """Return the map style, merging a YAML style file and keyword overrides over the defaults.

    Parameters
    ----------
    path : str, optional
        Path to a YAML style file. Falls back to the ``CARTOKIT_STYLE`` environment variable.
    **overrides :
        Style keys which take precedence over the file. ``None`` values are ignored.

    Returns
    -------
    dict
    """
    style = copy.deepcopy(DEFAULT_STYLE)
    if path is None:
        path = os.environ.get("CARTOKIT_STYLE")
    if path:
        with open(path, "rt") as f:
            user_style = yaml.safe_load(f.read()) or {}
        if not isinstance(user_style, dict):
            raise ValueError(f"The style file {path} must contain a YAML mapping.")
        unknown = set(user_style) - set(DEFAULT_STYLE)
        if unknown:
            logger.warning(
                f"Unknown style keys in {path} are ignored: {', '.join(sorted(unknown))}"
            )
        style.update({k: v for k, v in user_style.items() if k in DEFAULT_STYLE})
        logger.debug(f"Loaded map style from {path}.")
    style.update({k: v for k, v in overrides.items() if v is not None})
    return style
