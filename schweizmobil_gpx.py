#!/usr/bin/env python3
"""
Download hiking and snowshoe routes from schweizmobil.ch as GPX tracks.

Usage:
    python schweizmobil_gpx.py national 1                 # -> via-alpina.gpx
    python schweizmobil_gpx.py local 123 tracks/          # into a directory
    python schweizmobil_gpx.py regional 42 out.gpx --map  # plus an HTML preview
"""

import argparse
import logging
import sys
from typing import List, Optional

from schweizmobil import RouteExporter, RouteIdentifier, RouteType, SchweizmobilError
from schweizmobil.config import LOG_FORMAT

logger = logging.getLogger("schweizmobil.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schweizmobil-gpx",
        description="Download a SwitzerlandMobility route and save it as GPX",
    )
    parser.add_argument("route_type", metavar="route_type",
                        help=f"Route category: <{RouteType.tokens()}>")
    parser.add_argument("route_nr", help="Route number, digits only")
    parser.add_argument("output", nargs="?",
                        help="Output file or directory (default: <route name>.gpx)")
    parser.add_argument("--no-title", action="store_true",
                        help="Skip the title lookup and name the track <route_type>-<route_nr>")
    parser.add_argument("--map", action="store_true",
                        help="Also write an HTML map preview next to the GPX file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format=LOG_FORMAT)

    try:
        identifier = RouteIdentifier.parse(args.route_type, args.route_nr)
        result = RouteExporter().export(
            identifier,
            output=args.output,
            use_title=not args.no_title,
            with_map=args.map,
        )
    except SchweizmobilError as e:
        logger.error(f"error: {e}")
        return 1
    except OSError as e:
        logger.error(f"error: could not write output: {e}")
        return 1

    print(f'Route "{result.route_name}" saved to {result.output_path}')
    if result.map_path:
        print(f"Map preview saved to {result.map_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
