#!/usr/bin/env python3
"""
Route Replay - Main Entry Point

Replays one or more timestamped GPS tracks in synchronized virtual time.

Usage:
    python main.py route.json             # Replay a route file
    python main.py --demo                 # Replay a generated two-track route
    python main.py route.json --speed 4   # Start at 4x speed
    python main.py --demo --camera ahead  # Follow the first track
"""
import argparse
import logging
import sys

from dotenv import load_dotenv
from PyQt5 import QtWidgets

# Load environment variables from .env file
load_dotenv()

from replay.camera import CameraMode
from replay.config import ReplayConfig
from replay.coordinator import TimelineCoordinator
from replay.errors import ConfigurationError, ValidationError
from replay.route import load_route_file, synthetic_route
from replay.tick import QtTickSource
from ui.main_window import ReplayWindow

logger = logging.getLogger("route_replay")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Replay timestamped GPS tracks on a map.")
    parser.add_argument("route", nargs="?", help="JSON route file (list of points or track_id -> points)")
    parser.add_argument("--demo", action="store_true", help="replay a generated multi-track route")
    parser.add_argument("--speed", type=float, help="initial speed multiplier")
    parser.add_argument("--fps", type=int, choices=[30, 60], help="tick rate")
    parser.add_argument("--camera", choices=[m.value for m in CameraMode], help="camera follow mode")
    args = parser.parse_args(argv)
    if not args.route and not args.demo:
        parser.error("a route file or --demo is required")
    return args


def build_config(args) -> ReplayConfig:
    """Environment config with command line overrides applied."""
    config = ReplayConfig.from_env()
    overrides = {}
    if args.speed is not None:
        overrides["initial_speed"] = args.speed
    if args.fps is not None:
        overrides["fps"] = args.fps
    if args.camera is not None:
        overrides["camera_mode"] = CameraMode(args.camera)
    if overrides:
        config = ReplayConfig(**{**config.__dict__, **overrides})
    return config


def main(argv=None):
    """
    Entry point for the route replay viewer.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])
    """
    args = parse_args(argv)

    try:
        config = build_config(args)
    except ConfigurationError as e:
        print(f"❌ Invalid configuration: {e}")
        return 1

    logging.basicConfig(
        level=config.log_level,
        format='[%(levelname)s] %(name)s: %(message)s',
        stream=sys.stdout
    )

    if args.demo:
        route = synthetic_route()
        logger.info(f"Using generated demo route with {len(route)} tracks")
    else:
        try:
            route = load_route_file(args.route)
        except ValidationError as e:
            print(f"❌ {e}")
            return 1

    app = QtWidgets.QApplication(sys.argv[:1])
    window = ReplayWindow()

    tick_source = QtTickSource(fps=config.fps)
    coordinator = TimelineCoordinator(
        tick_source,
        renderer=window.map_canvas,
        camera=window.map_canvas,
        camera_mode=config.camera_mode,
        initial_speed=config.initial_speed,
        show_paths=config.show_paths,
        auto_fit=config.auto_fit,
    )
    window.attach(coordinator)

    if not coordinator.set_route(route):
        print("❌ Route could not be loaded, see log for details")
        return 1

    window.show()
    print(f"✅ Route loaded: {len(coordinator.track_ids)} track(s), "
          f"{coordinator.get_duration_ms() / 1000:.1f}s")

    result = app.exec_()

    coordinator.destroy()
    return result


if __name__ == "__main__":
    sys.exit(main())
