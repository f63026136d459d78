"""
Time-based interpolation of a position and heading along one sorted track.

Pure functions only: nothing here holds state between calls.
"""
from typing import Callable, Optional, Sequence

from replay.errors import InterpolationError
from replay.geometry import compute_bearing, same_position
from replay.model import InterpolatedPoint, RoutePoint, TimeWindow

BearingFn = Callable[[RoutePoint, RoutePoint], float]


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def interpolate_heading(h1: float, h2: float, t: float) -> float:
    """
    Interpolate between two headings along the shortest arc.

    An exact 180° difference is walked in the direction of ``h2 - h1``,
    so (0, 180, 0.5) and (180, 0, 0.5) both give 90.
    """
    delta = h2 - h1
    if delta > 180:
        delta -= 360
    elif delta < -180:
        delta += 360
    return (h1 + delta * t + 360) % 360


def _segment_bearing(a: RoutePoint, b: RoutePoint, bearing: Optional[BearingFn]) -> Optional[float]:
    if bearing is None or same_position(a, b):
        return None
    return bearing(a, b)


def interpolate(
    track: Sequence[RoutePoint],
    absolute_time_ms: float,
    window: TimeWindow,
    bearing: Optional[BearingFn] = compute_bearing,
) -> Optional[InterpolatedPoint]:
    """
    Find the position, heading and progress on ``track`` at ``absolute_time_ms``.

    Times outside the window clamp to the first/last point. Headings missing
    from the data are derived from segment bearings when ``bearing`` is given,
    otherwise left as None.

    Args:
        track: Points sorted ascending by ``t``
        absolute_time_ms: Target time in absolute milliseconds
        window: The track's own time window
        bearing: Optional ``(from, to) -> degrees`` function

    Returns:
        InterpolatedPoint, or None only when the track has no points

    Raises:
        InterpolationError: If no segment brackets the target time
    """
    if not track:
        return None

    duration = window.duration_ms

    # Before (or at) the start: sit on the first point
    if absolute_time_ms <= window.start_ms:
        first = track[0]
        heading = first.heading
        if heading is None and len(track) > 1:
            heading = _segment_bearing(track[0], track[1], bearing)
        # A zero-length track counts as complete as soon as it begins
        progress = 1.0 if duration == 0 and absolute_time_ms >= window.start_ms else 0.0
        return InterpolatedPoint(first.lat, first.lng, heading, progress)

    # After (or at) the end: sit on the last point
    if absolute_time_ms >= window.end_ms:
        last = track[-1]
        heading = last.heading
        if heading is None and len(track) > 1:
            heading = _segment_bearing(track[-2], last, bearing)
        return InterpolatedPoint(last.lat, last.lng, heading, 1.0)

    p1 = p2 = None
    for a, b in zip(track, track[1:]):
        if a.t == b.t:
            # Zero-duration segment only matches its exact timestamp
            if absolute_time_ms == a.t:
                p1, p2 = a, b
                break
            continue
        if a.t <= absolute_time_ms <= b.t:
            p1, p2 = a, b
            break

    if p1 is None or p2 is None:
        raise InterpolationError(absolute_time_ms)

    segment_ms = p2.t - p1.t
    t = (absolute_time_ms - p1.t) / segment_ms if segment_ms > 0 else 1.0

    lat = lerp(p1.lat, p2.lat, t)
    lng = lerp(p1.lng, p2.lng, t)

    if segment_ms > 0 and p1.heading is not None and p2.heading is not None:
        heading = interpolate_heading(p1.heading, p2.heading, t)
    elif p1.heading is not None or segment_ms == 0:
        heading = p1.heading
    else:
        heading = _segment_bearing(p1, p2, bearing)

    progress = (absolute_time_ms - window.start_ms) / duration if duration > 0 else 1.0
    progress = min(1.0, max(0.0, progress))

    return InterpolatedPoint(lat, lng, heading, progress)
