"""
Route replay core: interpolation, playback clock and timeline coordination.
"""
from replay.model import (
    RoutePoint,
    LatLng,
    TimeWindow,
    Bounds,
    TrackEntry,
    InterpolatedPoint,
    PlaybackState,
)
from replay.errors import (
    ReplayError,
    ValidationError,
    InterpolationError,
    ConfigurationError,
)
from replay.interpolator import interpolate, interpolate_heading
from replay.clock import Clock, ClockState
from replay.camera import CameraMode, CameraOptions
from replay.events import EventKind, PlaybackEvents
from replay.coordinator import TimelineCoordinator

__all__ = [
    'RoutePoint', 'LatLng', 'TimeWindow', 'Bounds', 'TrackEntry',
    'InterpolatedPoint', 'PlaybackState',
    'ReplayError', 'ValidationError', 'InterpolationError', 'ConfigurationError',
    'interpolate', 'interpolate_heading',
    'Clock', 'ClockState',
    'CameraMode', 'CameraOptions',
    'EventKind', 'PlaybackEvents',
    'TimelineCoordinator',
]
