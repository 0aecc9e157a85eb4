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
from ..tabular import fortify

logger = logging.getLogger("cartokit")

help_str = "Flatten the polygons in a vector file into a CSV table with one row per vertex."

__description__ = f"""{help_str}

The table has the columns long, lat, order, hole, piece, group and id, followed
by the attributes of each feature.

Example usage: 
    - cartokit fortify ne_110m_admin_0_countries.shp world.csv --id-column ISO_A3
    - cartokit fortify countries.shp world_robinson.csv -p robinson
"""


def add_parser(subparser):
    """add 'fortify' command line argument parser"""
    fortify_cmd = subparser.add_parser(
        "fortify",
        help=help_str,
        add_help=True,
        description=__description__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    fortify_cmd.set_defaults(func=run_fortify)
    fortify_cmd.add_argument(
        metavar="INPUT_FILE", help="input vector file", dest="input_file"
    )
    fortify_cmd.add_argument(
        metavar="OUTPUT_FILE", help="output CSV file", dest="output_file"
    )
    fortify_cmd.add_argument(
        "--id-column", type=str, dest="id_column", default=None
    )
    fortify_cmd.add_argument(
        "-p",
        "--projection",
        type=str,
        dest="projection",
        default=None,
        help="reproject before flattening",
    )


def run_fortify(args):
    gdf = load_boundaries(args.input_file)
    if args.projection:
        gdf = reproject(gdf, args.projection)
    table = fortify(gdf, id_column=args.id_column)
    table.to_csv(args.output_file, index=False)
    print(
        f"Done! {len(table)} vertices from {len(gdf)} features have been saved to {args.output_file}."
    )
