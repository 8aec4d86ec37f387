"""
Scribble CLI - Main entry point.

Filter a restaurant dataset by a ring, replay a recorded drawing gesture
against a map viewport, or look up a postal code.
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import cv2
import yaml

from scribble_data.loader import load_restaurants
from scribble_data.schemas import Restaurant
from scribble_zone.config import ScribbleConfig
from scribble_zone.geometry.detector import filter_restaurants
from scribble_zone.geometry.shapes import GeoPoint, GeoRing
from scribble_zone.logging import LogEvent, StructuredLogger, create_logger
from scribble_zone.maps.geocoding import PostalCodeGeocoder
from scribble_zone.maps.viewport import MercatorViewport
from scribble_zone.rendering.surface import FrameSurface
from scribble_zone.view import MapViewBuilder


def load_yaml_config(config_path: str) -> Dict[str, Any]:
    """
    Load a YAML file into a dict.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If YAML is invalid or not a mapping
    """
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"File not found: {config_path}")

    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {config_path}: {e}")

    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at top level of {config_path}")
    return data


def parse_point(value: str) -> GeoPoint:
    """Parse "LNG,LAT"."""
    try:
        lng, lat = (float(part) for part in value.split(','))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected LNG,LAT, got {value!r}")
    return GeoPoint(lng=lng, lat=lat)


def default_output_path(application_name: str) -> Path:
    """./runs/<application>/<timestamp>/overlay.png"""
    folder = Path("runs") / application_name / datetime.now().strftime('%Y%m%d_%H%M%S')
    folder.mkdir(parents=True, exist_ok=True)
    return folder / "overlay.png"


def print_restaurants(restaurants: Iterable[Restaurant]) -> None:
    for r in restaurants:
        print(json.dumps({
            'id': r.id,
            'name': r.name,
            'longitude': r.longitude,
            'latitude': r.latitude,
        }))


def run_filter(args: argparse.Namespace, config: ScribbleConfig, logger: StructuredLogger) -> None:
    ring_points: List[GeoPoint] = list(args.point or [])
    if args.ring_file:
        data = load_yaml_config(args.ring_file)
        ring_points.extend(GeoPoint.coerce(p) for p in data.get("ring", []))

    restaurants = load_restaurants(args.dataset, logger=logger)
    print_restaurants(filter_restaurants(restaurants, GeoRing(points=tuple(ring_points))))


def run_replay(args: argparse.Namespace, config: ScribbleConfig, logger: StructuredLogger) -> None:
    gesture = load_yaml_config(args.gesture)
    samples = gesture.get("samples") or []
    if not samples:
        raise ValueError(f"No samples in {args.gesture}")

    viewport = MercatorViewport.from_config(config.map)
    camera = gesture.get("viewport") or {}
    if "width" in camera or "height" in camera:
        viewport.resize(camera.get("width", viewport.width), camera.get("height", viewport.height))
    if "center" in camera or "zoom" in camera:
        viewport.jump_to(GeoPoint.coerce(camera.get("center", viewport.center)), camera.get("zoom"))
    if "bearing" in camera:
        viewport.rotate_to(camera["bearing"])

    surface = FrameSurface(width=viewport.width, height=viewport.height)
    view = (
        MapViewBuilder()
        .with_config(config)
        .with_surface(surface)
        .with_restaurants(load_restaurants(args.dataset, logger=logger))
        .with_logger(logger)
        .with_map(viewport)
        .build()
    )

    view.set_drawing_mode(True)
    first, *rest = samples
    view.pointer_down(*first)
    for x, y in rest:
        view.pointer_move(x, y)
    ring = view.pointer_up()

    output = Path(args.output) if args.output else default_output_path("replay")
    output.parent.mkdir(parents=True, exist_ok=True)
    cv2.imwrite(str(output), surface.frame)

    print(json.dumps({
        'phase': view.phase.value,
        'ring': [p.to_tuple() for p in ring] if ring else [],
        'visible': len(view.filtered_restaurants),
        'overlay': str(output),
    }))
    print_restaurants(view.filtered_restaurants)


def run_geocode(args: argparse.Namespace, config: ScribbleConfig, logger: StructuredLogger) -> None:
    with PostalCodeGeocoder(config.geocoder, logger=logger) as geocoder:
        result = geocoder.lookup(args.postal_code)

    if result.ok:
        print(json.dumps({'ok': True, 'lng': result.coordinates.lng, 'lat': result.coordinates.lat}))
    else:
        print(json.dumps({'ok': False, 'reason': result.reason}))


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Scribble CLI - geofence a restaurant dataset",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Restaurants inside a ring given on the command line
  scribble-cli filter restaurants.csv --point=-74,40.7 --point=-73,40.7 --point=-73,41

  # Restaurants inside a ring stored as YAML (ring: [[lng, lat], ...])
  scribble-cli filter restaurants.csv --ring-file ring.yaml

  # Replay a recorded gesture (samples: [[x, y], ...]) and save the overlay
  scribble-cli replay restaurants.csv gesture.yaml --output overlay.png

  # Postal code lookup
  scribble-cli geocode 08901
"""
    )

    parser.add_argument(
        "--config",
        default=None,
        help="Path to scribble YAML config (default: built-in defaults)"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level for structured logs on stderr (default: WARNING)"
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    filter_cmd = subparsers.add_parser('filter', help='Filter dataset by a ring')
    filter_cmd.add_argument('dataset', help='Path to restaurant CSV')
    filter_cmd.add_argument('--ring-file', help='YAML file with ring: [[lng, lat], ...]')
    filter_cmd.add_argument(
        '--point',
        action='append',
        type=parse_point,
        help='Ring vertex as LNG,LAT (repeatable)'
    )

    replay_cmd = subparsers.add_parser('replay', help='Replay a drawing gesture')
    replay_cmd.add_argument('dataset', help='Path to restaurant CSV')
    replay_cmd.add_argument('gesture', help='YAML file with samples: [[x, y], ...]')
    replay_cmd.add_argument('--output', help='Overlay PNG path (default: ./runs/replay/<ts>/)')

    geocode_cmd = subparsers.add_parser('geocode', help='Look up a postal code')
    geocode_cmd.add_argument('postal_code', help='Postal code')

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    logger = create_logger("cli", level=getattr(logging, args.log_level))

    try:
        config = ScribbleConfig.from_yaml(args.config) if args.config else ScribbleConfig()

        if args.command == 'filter':
            run_filter(args, config, logger)
        elif args.command == 'replay':
            run_replay(args, config, logger)
        elif args.command == 'geocode':
            run_geocode(args, config, logger)

    except (OSError, ValueError, TypeError) as e:
        logger.error(
            event=LogEvent.COMMAND_FAILED,
            message=f"{args.command} failed",
            metadata={'command': args.command},
            exc_info=e
        )
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
