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
"""Colour scales for choropleth maps.

Sequential palettes suit ordered data that runs from low to high,
diverging palettes suit data with a meaningful midpoint, and qualitative
palettes suit categories. Numeric data can be shown on a continuous scale or
classified into a few classes with mapclassify.
"""
import logging
import os

import mapclassify
import matplotlib
import numpy as np
from matplotlib.colors import (
    BoundaryNorm,
    Colormap,
    LinearSegmentedColormap,
    ListedColormap,
    LogNorm,
    Normalize,
    TwoSlopeNorm,
    to_hex,
)

from .cpt import get_cmap_from_gmt_cpt
from .exceptions import UnknownClassificationScheme

logger = logging.getLogger("cartokit")

PALETTES = {
    "sequential": [
        "Blues", "BuGn", "BuPu", "GnBu", "Greens", "Greys", "Oranges", "OrRd",
        "PuBu", "PuBuGn", "PuRd", "Purples", "RdPu", "Reds", "YlGn", "YlGnBu",
        "YlOrBr", "YlOrRd", "viridis", "plasma", "inferno", "magma", "cividis",
    ],
    "diverging": [
        "BrBG", "PiYG", "PRGn", "PuOr", "RdBu", "RdGy", "RdYlBu", "RdYlGn",
        "Spectral", "coolwarm", "bwr", "seismic",
    ],
    "qualitative": [
        "Accent", "Dark2", "Paired", "Pastel1", "Pastel2", "Set1", "Set2",
        "Set3", "tab10", "tab20",
    ],
}  # fmt: skip

# scheme name -> (mapclassify class, takes k)
SCHEMES = {
    "quantiles": (mapclassify.Quantiles, True),
    "equal_interval": (mapclassify.EqualInterval, True),
    "natural_breaks": (mapclassify.NaturalBreaks, True),
    "fisher_jenks": (mapclassify.FisherJenks, True),
    "std_mean": (mapclassify.StdMean, False),
    "maximum_breaks": (mapclassify.MaximumBreaks, True),
    "headtail_breaks": (mapclassify.HeadTailBreaks, False),
    "percentiles": (mapclassify.Percentiles, False),
    "user_defined": (mapclassify.UserDefined, False),
}

SCHEME_ALIASES = {
    "quantile": "quantiles",
    "q": "quantiles",
    "equalinterval": "equal_interval",
    "equal": "equal_interval",
    "jenks": "natural_breaks",
    "naturalbreaks": "natural_breaks",
    "fisherjenks": "fisher_jenks",
    "std": "std_mean",
    "stdmean": "std_mean",
    "maximumbreaks": "maximum_breaks",
    "headtailbreaks": "headtail_breaks",
    "userdefined": "user_defined",
    "manual": "user_defined",
}


def list_palettes(kind=None):
    """return the palette names of one kind ("sequential", "diverging" or "qualitative"), or all of them"""
    if kind is None:
        return [name for names in PALETTES.values() for name in names]
    if kind not in PALETTES:
        raise ValueError(
            f"Unknown palette kind '{kind}'. Use one of {', '.join(PALETTES)}."
        )
    return list(PALETTES[kind])


def list_schemes():
    """return the supported classification scheme names"""
    return list(SCHEMES.keys())


def get_colormap(cmap, n=None, reverse=False):
    """Resolve a colour map.

    Parameters
    ----------
    cmap : str, list of colours or matplotlib.colors.Colormap
        A matplotlib/ColorBrewer colour map name, the path to a GMT .cpt file,
        a list of colours to interpolate between, or a colour map object.
    n : int, optional
        Resample the colour map to `n` discrete colours.
    reverse : bool, default False
        Flip the colour map.

    Returns
    -------
    matplotlib.colors.Colormap
    """
    if isinstance(cmap, Colormap):
        resolved = cmap
    elif isinstance(cmap, (list, tuple)):
        resolved = LinearSegmentedColormap.from_list("custom", list(cmap))
    elif isinstance(cmap, (str, os.PathLike)) and (
        str(cmap).lower().endswith(".cpt") or os.path.isfile(cmap)
    ):
        resolved = get_cmap_from_gmt_cpt(cmap)
    else:
        try:
            resolved = matplotlib.colormaps[cmap]
        except KeyError as e:
            raise ValueError(f"Unknown colour map '{cmap}'.") from e

    if n is not None:
        resolved = resolved.resampled(int(n))
    if reverse:
        resolved = resolved.reversed()
    return resolved


def categorical_colors(categories, cmap="Set2"):
    """Assign one colour (hex string) to each category, in the order given."""
    cmap = get_colormap(cmap)
    n = len(categories)
    if n == 0:
        return {}
    if isinstance(cmap, ListedColormap) and cmap.N >= n:
        colours = [cmap(i) for i in range(n)]
    else:
        if isinstance(cmap, ListedColormap):
            logger.warning(
                f"The palette has {cmap.N} colours but there are {n} categories. Colours will be interpolated."
            )
        colours = [cmap(x) for x in np.linspace(0, 1, n)]
    return {c: to_hex(colour) for c, colour in zip(categories, colours)}


def _normalise_scheme(scheme):
    key = str(scheme).strip().lower().replace("-", "_").replace(" ", "_")
    key = SCHEME_ALIASES.get(key.replace("_", ""), key)
    if key not in SCHEMES:
        raise UnknownClassificationScheme(scheme)
    return key


def classify(values, scheme, k=5, bins=None, **kwargs):
    """Classify numeric values with mapclassify.

    Parameters
    ----------
    values : array-like
        The values to classify. NaNs are ignored.
    scheme : str
        One of :func:`list_schemes` (or an alias such as "jenks" or "quantile").
    k : int, default 5
        Number of classes, for schemes which take one.
    bins : list of float, optional
        Upper class bounds for the "user_defined" scheme.

    Returns
    -------
    mapclassify classifier
    """
    key = _normalise_scheme(scheme)
    y = np.asarray(values, dtype=float)
    y = y[~np.isnan(y)]
    if y.size == 0:
        raise ValueError("There are no values to classify.")
    cls, takes_k = SCHEMES[key]
    if key == "user_defined":
        if bins is None:
            raise ValueError("The 'user_defined' scheme needs `bins`.")
        return cls(y, bins=list(bins))
    if takes_k:
        k = min(int(k), len(np.unique(y)))
        return cls(y, k=k, **kwargs)
    return cls(y, **kwargs)


def class_boundaries(values, classifier):
    """return the class boundaries, from the minimum value to the upper bound of each class.

    Classes are closed on the right: a value equal to a bound belongs to the class below it.
    """
    y = np.asarray(values, dtype=float)
    y = y[~np.isnan(y)]
    return np.concatenate([[y.min()], np.asarray(classifier.bins, dtype=float)])


def build_norm(
    values,
    scheme=None,
    k=5,
    bins=None,
    vmin=None,
    vmax=None,
    log=False,
    center=None,
    ncolors=256,
):
    """Build the matplotlib normalisation which maps data values onto a colour map.

    * a `BoundaryNorm` for classified data (`scheme` given),
    * a `LogNorm` if `log` is True,
    * a `TwoSlopeNorm` centred on `center` for diverging data,
    * a linear `Normalize` otherwise.
    """
    y = np.asarray(values, dtype=float)
    finite = y[np.isfinite(y)]
    if vmin is None:
        vmin = float(finite.min()) if finite.size else 0.0
    if vmax is None:
        vmax = float(finite.max()) if finite.size else 1.0

    if scheme is not None:
        classifier = classify(finite, scheme, k=k, bins=bins)
        boundaries = class_boundaries(finite, classifier)
        # BoundaryNorm bins are closed on the left, so every upper bound is
        # nudged up to keep values on a bound in the class below
        boundaries[1:] = np.nextafter(boundaries[1:], np.inf)
        boundaries = np.unique(boundaries)
        if len(boundaries) < 2:
            boundaries = np.array([vmin, vmax if vmax > vmin else vmin + 1.0])
        return BoundaryNorm(boundaries, ncolors=ncolors, extend="neither")
    if log:
        positive = finite[finite > 0]
        if positive.size == 0:
            raise ValueError("A logarithmic colour scale needs positive values.")
        if vmin <= 0:
            vmin = float(positive.min())
        return LogNorm(vmin=vmin, vmax=vmax)
    if center is not None:
        if not vmin < center < vmax:
            span = max(abs(vmin - center), abs(vmax - center)) or 1.0
            vmin, vmax = center - span, center + span
        return TwoSlopeNorm(vcenter=center, vmin=vmin, vmax=vmax)
    return Normalize(vmin=vmin, vmax=vmax)
