# replay/path_buffer.py
from typing import Dict, List, Optional, Sequence

from replay.model import InterpolatedPoint, LatLng, RoutePoint


class PathBuffer:
    """
    Remembers the last path point handed to the renderer for each track.

    During playback, consecutive ticks often land on the same coordinates
    (paused tracks, tracks that already finished). Only genuinely new
    positions are passed on, so a path-drawing renderer does not fill up
    with coincident points.
    """

    def __init__(self):
        self._last_points: Dict[str, LatLng] = {}

    def add_point(self, track_id: str, pos: LatLng) -> bool:
        """
        Record a new path point for a track.

        Returns:
            True if the point differs from the previous one and should be drawn
        """
        if self._last_points.get(track_id) == pos:
            return False
        self._last_points[track_id] = pos
        return True

    def reset(self, track_id: Optional[str] = None) -> None:
        if track_id is None:
            self._last_points.clear()
        else:
            self._last_points.pop(track_id, None)

    def rebuild(
        self,
        track_id: str,
        points: Sequence[RoutePoint],
        absolute_time_ms: float,
        current: Optional[InterpolatedPoint],
    ) -> List[LatLng]:
        """
        Reconstruct the path a track has drawn up to ``absolute_time_ms``.

        The path holds every route point at or before the target time,
        followed by the interpolated point when it lies strictly after the
        last of them at a different position. A single-point path is
        doubled so it can still be drawn as a line.
        """
        self.reset(track_id)
        if not points or absolute_time_ms < points[0].t:
            return []

        reached = [p for p in points if p.t <= absolute_time_ms]
        path = [p.position for p in reached]

        if current is not None:
            pos = current.position
            if (not path or path[-1] != pos) and absolute_time_ms > reached[-1].t:
                path.append(pos)

        if len(path) == 1:
            path.append(path[0])

        if path:
            self._last_points[track_id] = path[-1]
        return path
