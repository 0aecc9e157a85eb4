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

import argparse
import logging

import matplotlib.pyplot as plt

from ..basemap import DEFAULT_PROVIDER
from ..config import load_style
from ..io import drop_regions, join_attributes, load_boundaries
from ..layout import save_figure
from ..mapping.matplotlib_plot import MatplotlibPlotEngine
from ..plot import ChoroplethMap

logger = logging.getLogger("cartokit")

help_str = "Render a choropleth map of one attribute of a vector file to an image file."

__description__ = f"""{help_str}

Example usage: 
    - cartokit choropleth ne_110m_admin_0_countries.shp pop.png -c POP_EST -s quantiles -k 5
    - cartokit choropleth countries.shp continents.png -c CONTINENT --cmap Set2 --graticule
    - cartokit choropleth countries.shp europe.png -c POP_EST --basemap --extent -25 45 34 72
    - cartokit choropleth countries.shp gdp.png -c gdp --join gdp.csv --on ISO_A3
"""


def _key_value(text):
    if "=" not in text:
        raise argparse.ArgumentTypeError(f"Expecting COLUMN=VALUE, got '{text}'.")
    key, value = text.split("=", 1)
    return key, value


def add_parser(subparser):
    """add 'choropleth' command line argument parser"""
    choropleth_cmd = subparser.add_parser(
        "choropleth",
        aliases=("map",),
        help=help_str,
        add_help=True,
        description=__description__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    choropleth_cmd.set_defaults(func=run_choropleth)
    choropleth_cmd.add_argument(
        metavar="INPUT_FILE", help="input vector file", dest="input_file"
    )
    choropleth_cmd.add_argument(
        metavar="OUTPUT_FILE", help="output image file, e.g. map.png", dest="output_file"
    )
    choropleth_cmd.add_argument(
        "-c", "--column", type=str, dest="column", required=True
    )
    choropleth_cmd.add_argument(
        "-p",
        "--projection",
        type=str,
        dest="projection",
        default=None,
        help="projection name, EPSG code or PROJ string (default: robinson)",
    )
    choropleth_cmd.add_argument(
        "-s",
        "--scheme",
        type=str,
        dest="scheme",
        default=None,
        help="classification scheme, e.g. quantiles, equal_interval, natural_breaks",
    )
    choropleth_cmd.add_argument("-k", type=int, dest="k", default=5)
    choropleth_cmd.add_argument("--cmap", type=str, dest="cmap", default=None)
    choropleth_cmd.add_argument("--reverse", action="store_true", dest="reverse")
    choropleth_cmd.add_argument("--log", action="store_true", dest="log")
    choropleth_cmd.add_argument("--center", type=float, dest="center", default=None)
    choropleth_cmd.add_argument(
        "--legend-location", type=str, dest="legend_location", default=None
    )
    choropleth_cmd.add_argument("--title", type=str, dest="title", default=None)
    choropleth_cmd.add_argument("--graticule", action="store_true", dest="graticule")
    choropleth_cmd.add_argument("--scale-bar", action="store_true", dest="scale_bar")
    choropleth_cmd.add_argument(
        "--north-arrow", action="store_true", dest="north_arrow"
    )
    choropleth_cmd.add_argument(
        "--basemap",
        nargs="?",
        const=DEFAULT_PROVIDER,
        default=None,
        dest="basemap",
        help=f"draw web map tiles underneath (default provider: {DEFAULT_PROVIDER}). Implies Web Mercator.",
    )
    choropleth_cmd.add_argument(
        "--extent",
        type=float,
        nargs=4,
        metavar=("MIN_LON", "MAX_LON", "MIN_LAT", "MAX_LAT"),
        dest="extent",
        default=None,
    )
    choropleth_cmd.add_argument(
        "--drop",
        type=_key_value,
        action="append",
        dest="drop",
        default=[],
        metavar="COLUMN=VALUE",
        help="drop regions, e.g. --drop CONTINENT=Antarctica",
    )
    choropleth_cmd.add_argument(
        "--join", type=str, dest="join", default=None, help="CSV attribute table"
    )
    choropleth_cmd.add_argument(
        "--on", type=str, dest="on", default=None, help="key column for --join"
    )
    choropleth_cmd.add_argument("--style", type=str, dest="style", default=None)
    choropleth_cmd.add_argument("--dpi", type=int, dest="dpi", default=None)


def run_choropleth(args):
    plt.switch_backend("Agg")

    gdf = load_boundaries(args.input_file)
    if args.join:
        if not args.on:
            raise ValueError("--join needs --on to name the key column.")
        gdf = join_attributes(gdf, args.join, left_on=args.on)
    for column, value in args.drop:
        gdf = drop_regions(gdf, column, value)

    style = load_style(args.style, legend_location=args.legend_location, dpi=args.dpi)
    plot_engine = None
    projection = args.projection
    if args.basemap:
        plot_engine = MatplotlibPlotEngine()
        if projection is None:
            projection = "web mercator"

    choropleth = ChoroplethMap(
        gdf,
        column=args.column,
        projection=projection,
        plot_engine=plot_engine,
        style=style,
    )
    ax = choropleth.plot(
        scheme=args.scheme,
        k=args.k,
        cmap=args.cmap,
        reverse=args.reverse,
        log=args.log,
        center=args.center,
        title=args.title,
        extent=args.extent,
        graticule=args.graticule,
        scale_bar=args.scale_bar,
        north_arrow=args.north_arrow,
        basemap=bool(args.basemap),
        basemap_source=args.basemap,
    )
    save_figure(ax.figure, args.output_file, dpi=style["dpi"])
    print(f"Done! The map has been saved to {args.output_file}.")
