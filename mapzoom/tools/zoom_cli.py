"""Compute Mercator spans, regions and zoom levels from the command line."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict

import yaml

from mapzoom.config import ConfigurationBundle, configure_logging, load_configuration
from mapzoom.core import (
    Coordinate,
    CoordinateRegion,
    CoordinateSpan,
    ViewportSize,
    clamp_zoom_level,
    region_for_zoom,
    span_for_zoom,
    zoom_level_for_region,
)
from mapzoom.utils.geo import latitude_to_pixel_y, longitude_to_pixel_x

logger = logging.getLogger(__name__)


def _viewport(args: argparse.Namespace, bundle: ConfigurationBundle) -> ViewportSize:
    width = args.width if args.width is not None else bundle.map.width
    height = args.height if args.height is not None else bundle.map.height
    return ViewportSize(width, height)


def _span_command(args: argparse.Namespace, bundle: ConfigurationBundle) -> Dict[str, Any]:
    zoom = clamp_zoom_level(args.zoom, bundle.max_zoom_level)
    span = span_for_zoom(
        Coordinate(args.lat, args.lon),
        zoom,
        _viewport(args, bundle),
        single_precision=bundle.projection.single_precision,
    )
    return {"zoom_level": zoom, "span": asdict(span)}


def _region_command(args: argparse.Namespace, bundle: ConfigurationBundle) -> Dict[str, Any]:
    zoom = clamp_zoom_level(args.zoom, bundle.max_zoom_level)
    region = region_for_zoom(
        Coordinate(args.lat, args.lon),
        zoom,
        _viewport(args, bundle),
        single_precision=bundle.projection.single_precision,
        longitude_wrap=bundle.projection.longitude_wrap,
    )
    return {"zoom_level": zoom, "region": asdict(region)}


def _zoom_command(args: argparse.Namespace, bundle: ConfigurationBundle) -> Dict[str, Any]:
    region = CoordinateRegion(
        Coordinate(args.lat, args.lon),
        CoordinateSpan(args.lat_delta, args.lon_delta),
    )
    zoom = zoom_level_for_region(region, _viewport(args, bundle), bundle.max_zoom_level)
    return {"zoom_level": zoom}


def _pixel_command(args: argparse.Namespace, bundle: ConfigurationBundle) -> Dict[str, Any]:
    return {
        "pixel_x": longitude_to_pixel_x(args.lon),
        "pixel_y": latitude_to_pixel_y(args.lat, bundle.projection.single_precision),
    }


COMMANDS = {
    "span": _span_command,
    "region": _region_command,
    "zoom": _zoom_command,
    "pixel": _pixel_command,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mapzoom", description=__doc__)
    parser.add_argument(
        "--settings",
        type=Path,
        default=None,
        help="Directory containing settings.yaml (default: $MAPZOOM_SETTINGS_DIR or ./settings)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_center(sub: argparse.ArgumentParser) -> None:
        sub.add_argument("--lat", type=float, required=True, help="Center latitude in degrees.")
        sub.add_argument("--lon", type=float, required=True, help="Center longitude in degrees.")

    def add_viewport(sub: argparse.ArgumentParser) -> None:
        sub.add_argument("--width", type=float, default=None, help="Viewport width in pixels.")
        sub.add_argument("--height", type=float, default=None, help="Viewport height in pixels.")

    span = subparsers.add_parser("span", help="Span visible at a zoom level.")
    add_center(span)
    span.add_argument("--zoom", type=int, required=True, help="Zoom level.")
    add_viewport(span)

    region = subparsers.add_parser("region", help="Region shown when centering at a zoom level.")
    add_center(region)
    region.add_argument("--zoom", type=int, required=True, help="Zoom level.")
    add_viewport(region)

    zoom = subparsers.add_parser("zoom", help="Zoom level of a displayed region.")
    add_center(zoom)
    zoom.add_argument("--lat-delta", type=float, required=True, help="Latitude span in degrees.")
    zoom.add_argument("--lon-delta", type=float, required=True, help="Longitude span in degrees.")
    add_viewport(zoom)

    pixel = subparsers.add_parser("pixel", help="Project a coordinate into Mercator pixel space.")
    add_center(pixel)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        bundle = load_configuration(args.settings)
    except ValueError as exc:
        raise SystemExit(f"Invalid configuration: {exc}")
    configure_logging(bundle)

    try:
        result = COMMANDS[args.command](args, bundle)
    except ValueError as exc:
        raise SystemExit(f"Error: {exc}")
    logger.debug("%s -> %s", args.command, result)
    yaml.safe_dump(result, sys.stdout, sort_keys=False)


if __name__ == "__main__":  # pragma: no cover
    main(sys.argv[1:])
