#!/usr/bin/env python3

"""
cli.py

Command line entry point: sniff one delimited file and print its dialect and
column types.

Usage:
    csv-explorer data.csv
    csv-explorer -v data.csv.gz
"""

import argparse
import logging
import sys

from .inference.errors import SniffError
from .inference.sniffer import Sniffer
from .report import render_report


def build_parser():
    parser = argparse.ArgumentParser(
        prog="csv-explorer",
        description="Infer the dialect and column types of a delimited text file.",
    )
    parser.add_argument("path", help="file to sniff (.gz, .bz2 and .xz are read transparently)")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="log each sniffing stage"
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )

    try:
        metadata = Sniffer().sniff_path(args.path)
    except SniffError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    sys.stdout.write(render_report(metadata))
    return 0


if __name__ == "__main__":
    sys.exit(main())
