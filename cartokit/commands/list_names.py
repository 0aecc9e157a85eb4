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

from ..basemap import list_providers
from ..palettes import list_palettes, list_schemes
from ..projection import list_projections

logger = logging.getLogger("cartokit")

help_str = "Show the names of supported projections, classification schemes, palettes or basemap providers."

__description__ = f"""{help_str}

Example usage: 
    - cartokit list
    - cartokit list schemes
    - cartokit list palettes -k diverging
"""

WHAT = ("projections", "schemes", "palettes", "providers")


def add_parser(subparser):
    """add 'list' command line argument parser"""
    list_cmd = subparser.add_parser(
        "list",
        help=help_str,
        add_help=True,
        description=__description__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    list_cmd.set_defaults(func=run_list_names)
    list_cmd.add_argument("what", nargs="?", choices=WHAT, default="projections")
    list_cmd.add_argument(
        "-k",
        "--kind",
        type=str,
        dest="kind",
        choices=("sequential", "diverging", "qualitative"),
        help="palette kind (only for 'palettes')",
    )


def get_names(what, kind=None):
    """return the names listed by `cartokit list <what>`"""
    if what == "projections":
        return list_projections()
    if what == "schemes":
        return list_schemes()
    if what == "palettes":
        return list_palettes(kind)
    if what == "providers":
        return list_providers()
    raise ValueError(f"Unable to list '{what}'.")


def run_list_names(args):
    print()
    print(f"{args.what.capitalize()}:")
    for n in get_names(args.what, args.kind):
        print(f"    {n}")
    print()
