"""
Shared fixtures: a deterministic tick source and recording capabilities.
"""
import pytest
from PyQt5 import QtCore

from replay.events import EventKind
from replay.model import RoutePoint


@pytest.fixture(scope="session", autouse=True)
def qt_core_app():
    app = QtCore.QCoreApplication.instance() or QtCore.QCoreApplication([])
    yield app


class FakeTickSource:
    """Tick source whose wall clock only moves when the test advances it."""

    def __init__(self, start_ms: float = 0.0):
        self.wall_ms = start_ms
        self.callbacks = []

    def now(self) -> float:
        return self.wall_ms

    def register_tick(self, callback):
        self.callbacks.append(callback)

        def unregister():
            if callback in self.callbacks:
                self.callbacks.remove(callback)

        return unregister

    def tick(self):
        for callback in list(self.callbacks):
            callback(self.wall_ms)

    def advance(self, ms: float, steps: int = 1):
        """Move the wall clock forward by ``ms`` in ``steps`` ticks."""
        for _ in range(steps):
            self.wall_ms += ms / steps
            self.tick()

    def force_tick(self, callback):
        """Deliver a tick to a callback even if it has deregistered."""
        callback(self.wall_ms)


class RecordingRenderer:
    """Renderer capability that records every call it receives."""

    def __init__(self):
        self.calls = []
        self.markers = {}
        self.paths = {}

    def update_marker(self, track_id, position, heading=None):
        self.calls.append(("update_marker", track_id, position, heading))
        if position is None:
            self.markers.pop(track_id, None)
        else:
            self.markers[track_id] = (position, heading)

    def remove_marker(self, track_id):
        self.calls.append(("remove_marker", track_id))
        self.markers.pop(track_id, None)

    def remove_all_markers(self):
        self.calls.append(("remove_all_markers",))
        self.markers.clear()

    def add_path_point(self, track_id, position):
        self.calls.append(("add_path_point", track_id, position))
        self.paths.setdefault(track_id, []).append(position)

    def set_path(self, track_id, points):
        self.calls.append(("set_path", track_id, list(points)))
        self.paths[track_id] = list(points)

    def reset_path(self, track_id):
        self.calls.append(("reset_path", track_id))
        self.paths[track_id] = []

    def calls_named(self, name):
        return [c for c in self.calls if c[0] == name]


class RecordingCamera:
    def __init__(self):
        self.calls = []

    def pan_to(self, position):
        self.calls.append(("pan_to", position))

    def move_camera(self, center, heading, tilt, zoom):
        self.calls.append(("move_camera", center, heading, tilt, zoom))

    def fit_bounds(self, bounds):
        self.calls.append(("fit_bounds", bounds))


class EventRecorder:
    """Collects every event a coordinator emits, in order."""

    def __init__(self, coordinator):
        self.events = []
        for kind in EventKind:
            coordinator.on(kind, self.events.append)

    def of(self, kind):
        return [e for e in self.events if e.kind is kind]

    def clear(self):
        self.events.clear()


@pytest.fixture
def tick_source():
    return FakeTickSource(start_ms=10_000)


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture
def camera():
    return RecordingCamera()


def rp(t, lat, lng, heading=None):
    return RoutePoint(lat=lat, lng=lng, t=t, heading=heading)


@pytest.fixture
def route():
    return [
        rp(1000, 35.0, 135.0, 0),
        rp(2000, 35.1, 135.1, 90),
        rp(3000, 35.0, 135.2, 180),
        rp(4000, 34.9, 135.1, 270),
    ]


@pytest.fixture
def offset_tracks():
    """Two tracks: A spans 0..1000, B spans 500..1500."""
    return {
        "A": [rp(0, 0.0, 0.0), rp(1000, 1.0, 1.0)],
        "B": [rp(500, 10.0, 10.0), rp(1500, 11.0, 11.0)],
    }
