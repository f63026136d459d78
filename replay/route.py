"""
Route input handling: normalise and validate tracks before playback.

Accepted input forms:
  - a sequence of points (single track, id "main")
  - a mapping of track id -> sequence of points (multi track)

A point is either a RoutePoint or a dict:
  {"lat": float, "lng": float, "t": int, "heading": float?, "elevation": float?}
"""
import json
import logging
from collections.abc import Mapping
from typing import Any, Dict, List, Sequence

import numpy as np

from replay.errors import ValidationError
from replay.model import RoutePoint, TrackEntry

logger = logging.getLogger(__name__)

SINGLE_TRACK_ID = "main"


def _optional_float(value):
    return None if value is None else float(value)


def to_route_point(raw: Any) -> RoutePoint:
    if isinstance(raw, RoutePoint):
        return raw
    if not isinstance(raw, Mapping):
        raise ValidationError(f"Route point must be a mapping, got {type(raw).__name__}")
    try:
        return RoutePoint(
            lat=float(raw["lat"]),
            lng=float(raw["lng"]),
            t=int(raw["t"]),
            heading=_optional_float(raw.get("heading")),
            elevation=_optional_float(raw.get("elevation", raw.get("elev"))),
        )
    except KeyError as e:
        raise ValidationError(f"Route point is missing field {e.args[0]!r}") from e
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Route point has a non-numeric field: {e}") from e


def build_track(track_id: str, raw_points: Any) -> TrackEntry:
    """
    Convert raw points into a TrackEntry sorted by time.

    Raises:
        ValidationError: If the points are not a sequence or fewer than 2
    """
    if isinstance(raw_points, (str, bytes)) or not isinstance(raw_points, Sequence):
        raise ValidationError(f"Track {track_id!r} must be a sequence of points")
    if len(raw_points) < 2:
        raise ValidationError(f"Track {track_id!r} needs at least two points")

    points = sorted((to_route_point(p) for p in raw_points), key=lambda p: p.t)
    return TrackEntry(track_id, tuple(points))


def load_tracks(route_input: Any) -> Dict[str, TrackEntry]:
    """
    Validate route input and return its tracks keyed by track id.

    In multi-track input, invalid tracks are skipped with a warning as long
    as at least one valid track remains.

    Raises:
        ValidationError: If the input as a whole is unusable
    """
    if route_input is None:
        raise ValidationError("Route input is missing")

    if isinstance(route_input, str):
        raise ValidationError("URL route loading is not supported")

    if isinstance(route_input, Mapping):
        if not route_input:
            raise ValidationError("Multi-track route cannot be empty")

        tracks: Dict[str, TrackEntry] = {}
        for track_id, raw_points in route_input.items():
            try:
                tracks[str(track_id)] = build_track(str(track_id), raw_points)
            except ValidationError as e:
                logger.warning(f"Skipping invalid track {track_id!r}: {e}")

        if not tracks:
            raise ValidationError("No valid tracks found")
        return tracks

    if isinstance(route_input, Sequence):
        if len(route_input) < 2:
            raise ValidationError("Single track needs at least two points")
        return {SINGLE_TRACK_ID: build_track(SINGLE_TRACK_ID, route_input)}

    raise ValidationError(f"Unsupported route input type: {type(route_input).__name__}")


def load_route_file(path) -> Any:
    """
    Read route input from a local JSON file.

    The document holds either a list of point objects or an object mapping
    track ids to such lists. Validation is left to ``load_tracks``.

    Raises:
        ValidationError: If the file cannot be read or is not valid JSON
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise ValidationError(f"Could not read route file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ValidationError(f"Route file {path} is not valid JSON: {e}") from e


def synthetic_route(
    track_count: int = 2,
    points_per_track: int = 40,
    duration_ms: int = 60_000,
    offset_ms: int = 10_000,
    start_ms: int = 1_700_000_000_000,
    center=(35.681, 139.767),
    radius_deg: float = 0.01,
) -> Dict[str, List[Dict[str, Any]]]:
    """
    Build a deterministic multi-track demo route.

    Each track drives a loop around ``center`` with its own radius and starts
    ``offset_ms`` after the previous one, so the tracks overlap in time.
    Headings are left out so they get derived from segment bearings.

    Returns:
        Mapping of track id -> list of point dicts, ready for ``load_tracks``
    """
    route: Dict[str, List[Dict[str, Any]]] = {}
    angles = np.linspace(0.0, 2 * np.pi, points_per_track)
    offsets = np.linspace(0, duration_ms, points_per_track).round().astype(int)

    for i in range(track_count):
        r = radius_deg * (1.0 + 0.35 * i)
        lats = center[0] + r * np.cos(angles)
        lngs = center[1] + r * np.sin(angles)
        times = start_ms + i * offset_ms + offsets

        route[f"track-{i + 1}"] = [
            {"lat": float(lat), "lng": float(lng), "t": int(t)}
            for lat, lng, t in zip(lats, lngs, times)
        ]
    return route
