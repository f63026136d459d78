# replay/model.py
from dataclasses import dataclass, field
from typing import Optional, Tuple, Iterable


@dataclass(frozen=True)
class LatLng:
    lat: float
    lng: float


@dataclass(frozen=True)
class RoutePoint:
    lat: float          # degrees
    lng: float          # degrees
    t: int              # absolute epoch milliseconds
    heading: Optional[float] = None     # 0–360, clockwise from north
    elevation: Optional[float] = None   # metres

    @property
    def position(self) -> LatLng:
        return LatLng(self.lat, self.lng)


@dataclass(frozen=True)
class TimeWindow:
    """
    Start/end of a track, or of the union of all tracks.

    Times are absolute milliseconds. The global window is not the sum of
    the track windows: tracks may overlap or be offset from each other.
    """
    start_ms: float
    end_ms: float

    @property
    def duration_ms(self) -> float:
        return max(0, self.end_ms - self.start_ms)

    @classmethod
    def for_points(cls, points) -> "TimeWindow":
        """Window spanning a track sorted ascending by ``t``."""
        return cls(points[0].t, points[-1].t)

    @classmethod
    def union(cls, windows: Iterable["TimeWindow"]) -> "TimeWindow":
        windows = list(windows)
        return cls(
            min(w.start_ms for w in windows),
            max(w.end_ms for w in windows),
        )


@dataclass(frozen=True)
class Bounds:
    south_west: LatLng
    north_east: LatLng

    @classmethod
    def from_points(cls, points: Iterable[RoutePoint]) -> Optional["Bounds"]:
        points = list(points)
        if not points:
            return None
        lats = [p.lat for p in points]
        lngs = [p.lng for p in points]
        return cls(LatLng(min(lats), min(lngs)), LatLng(max(lats), max(lngs)))

    @property
    def center(self) -> LatLng:
        return LatLng(
            (self.south_west.lat + self.north_east.lat) / 2,
            (self.south_west.lng + self.north_east.lng) / 2,
        )


@dataclass(frozen=True)
class TrackEntry:
    """One loaded track: its sorted points together with their time window."""
    track_id: str
    points: Tuple[RoutePoint, ...]
    window: TimeWindow = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "window", TimeWindow.for_points(self.points))


@dataclass(frozen=True)
class InterpolatedPoint:
    lat: float
    lng: float
    heading: Optional[float]
    progress: float     # 0–1 within the track's own window

    @property
    def position(self) -> LatLng:
        return LatLng(self.lat, self.lng)


@dataclass(frozen=True)
class PlaybackState:
    virtual_time_ms: float
    speed_multiplier: float
    running: bool
