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
import sys

from cartokit import __version__

from .commands import choropleth, fortify, list_names, reproject


class ArgParser(argparse.ArgumentParser):
    def error(self, message):
        sys.stderr.write(f"error: {message}\n")
        self.print_help()
        sys.exit(1)


def build_parser():
    parser = ArgParser(
        prog="cartokit",
        description="Make choropleth maps from vector boundaries.",
    )

    parser.add_argument("-v", "--version", action="store_true")

    # sub-commands
    subparser = parser.add_subparsers(
        dest="command",
        title="subcommands",
        description="valid subcommands",
    )
    # add "list" sub-command
    list_names.add_parser(subparser)

    # add "reproject" sub-command
    reproject.add_parser(subparser)

    # add "fortify" sub-command
    fortify.add_parser(subparser)

    # add "choropleth" sub-command
    choropleth.add_parser(subparser)

    return parser


def main(argv=None):
    parser = build_parser()

    if argv is None:
        argv = sys.argv[1:]
    if len(argv) == 0:
        parser.print_help(sys.stderr)
        sys.exit(1)

    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        sys.exit(0)

    if not hasattr(args, "func"):
        parser.print_help(sys.stderr)
        sys.exit(1)

    args.func(args)


if __name__ == "__main__":
    main()
