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

from ..io import load_boundaries
from ..projection import reproject

logger = logging.getLogger("cartokit")

help_str = "Reproject a vector file (e.g. a shapefile) and save the result."

__description__ = f"""{help_str}

Example usage: 
    - cartokit reproject ne_110m_admin_0_countries.shp world_robinson.gpkg -p robinson
    - cartokit reproject countries.shp countries_3035.shp -p EPSG:3035
"""


def add_parser(subparser):
    """add 'reproject' command line argument parser"""
    reproject_cmd = subparser.add_parser(
        "reproject",
        help=help_str,
        add_help=True,
        description=__description__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    reproject_cmd.set_defaults(func=run_reproject)
    reproject_cmd.add_argument(
        metavar="INPUT_FILE", help="input vector file", dest="input_file"
    )
    reproject_cmd.add_argument(
        metavar="OUTPUT_FILE", help="output vector file", dest="output_file"
    )
    reproject_cmd.add_argument(
        "-p",
        "--projection",
        type=str,
        dest="projection",
        required=True,
        help="projection name, EPSG code or PROJ string",
    )
    reproject_cmd.add_argument(
        "--central-longitude",
        type=float,
        dest="central_longitude",
        default=None,
    )


def run_reproject(args):
    gdf = load_boundaries(args.input_file)
    kwargs = {}
    if args.central_longitude is not None:
        kwargs["central_longitude"] = args.central_longitude
    projected = reproject(gdf, args.projection, **kwargs)
    projected.to_file(args.output_file)
    print(f"Done! The reprojected layer has been saved to {args.output_file}.")
