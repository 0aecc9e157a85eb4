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
"""Read GMT colour palette tables (.cpt files) as matplotlib colour maps."""
from matplotlib.colors import LinearSegmentedColormap, hsv_to_rgb, to_rgb


def _to_rgb(components, color_model="RGB"):
    """convert three colour components from a cpt file into RGB values in a closed interval [0, 1]"""
    a, b, c = (float(x) for x in components)
    if color_model == "HSV":
        return list(hsv_to_rgb([a / 360.0, b, c]))
    return [a / 255.0, b / 255.0, c / 255.0]


def _parse_colour(text, color_model="RGB"):
    """parse a colour written as "r/g/b" (or "h-s-v" in HSV files), a single grey level or a colour name such as "white" """
    if text[:1].isalpha():
        return list(to_rgb(text))
    for sep in ("/", "-"):
        if sep in text:
            return _to_rgb(text.split(sep), color_model=color_model)
    return _to_rgb([text] * 3, color_model="RGB")


def parse_old_cpt_row(row, color_model="RGB"):
    """parse one row of text from a cpt file in old format, such as the four rows below from a cpt file

    0	210	0	0	10	210	0	0
    10	230	40	0	20	230	40	0
    20	245	60	0	30	245	60	0
    30	255	98	0	40	255	98	0

    Parameters
    ----------
    row : a list of strings
        A list of strings representing a line from a cpt file in old format.
    color_model : str, optional
        The color model to use, either "RGB" or "HSV". Default is "RGB".

    Returns
    -------
    tuple of list of float and list of list of float
        The two z-values of the slice and their colours.
    """
    values = [float(row[0]), float(row[4])]
    colors = [
        _to_rgb(row[1:4], color_model=color_model),
        _to_rgb(row[5:8], color_model=color_model),
    ]
    return values, colors


def parse_new_cpt_row(row, color_model="RGB"):
    """parse one row of text from a cpt file in new format, such as the rows below

    0               64/0/64         0.052632        64/0/192        L
    0.052632        64/0/192        0.105263        0/64/255        L
    """
    values = [float(row[0]), float(row[2])]
    colors = [
        _parse_colour(row[1], color_model=color_model),
        _parse_colour(row[3], color_model=color_model),
    ]
    return values, colors


def read_cpt(cpt_file):
    """Read a cpt file.

    Returns
    -------
    values : list of float
    colors : list of list of float
    special : dict
        Background ("B"), foreground ("F") and no-data ("N") colours, when the file sets them.
    """
    values = []
    colors = []
    special = {}
    color_model = "RGB"
    with open(cpt_file, "r") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            if line.startswith("#"):
                if "COLOR_MODEL" in line and "HSV" in line.upper():
                    color_model = "HSV"
                continue
            vals = line.split()
            if vals[0] in ("B", "F", "N"):
                if len(vals) >= 4:
                    special[vals[0]] = _to_rgb(vals[1:4], color_model=color_model)
                elif len(vals) >= 2:
                    special[vals[0]] = _parse_colour(vals[1], color_model=color_model)
                continue
            if len(vals) in (8, 9):
                vs, cs = parse_old_cpt_row(vals, color_model=color_model)
            elif len(vals) in (4, 5):
                vs, cs = parse_new_cpt_row(vals, color_model=color_model)
            else:
                continue
            values.extend(vs)
            colors.extend(cs)
    return values, colors, special


def get_cmap_from_gmt_cpt(cpt_file, name="cpt-cmap"):
    """given a gmt cpt file path, return a `matplotlib.colors.LinearSegmentedColormap` object.

    Parameters
    ----------
    cpt_file : str
        The path to the gmt cpt file.

    Returns
    -------
    matplotlib.colors.LinearSegmentedColormap
        A matplotlib colormap object.
    """
    values, colors, special = read_cpt(cpt_file)
    if len(values) < 2 or values[-1] == values[0]:
        raise ValueError(f"No valid colour data found in cpt file: {cpt_file}")

    colour_list = [
        ((v - values[0]) / (values[-1] - values[0]), c) for v, c in zip(values, colors)
    ]
    cmap = LinearSegmentedColormap.from_list(name, colour_list)
    if "B" in special:
        cmap.set_under(special["B"])
    if "F" in special:
        cmap.set_over(special["F"])
    if "N" in special:
        cmap.set_bad(special["N"])
    return cmap
