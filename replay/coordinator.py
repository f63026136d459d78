"""
Timeline coordinator: drives the clock and synchronises every track on one
shared global timeline.

Per tick:
    Clock -> virtual time -> absolute time (global start + virtual time)
          -> interpolate each track -> renderer + frame event
"""
import logging
from typing import Any, Callable, Dict, List, Optional

from replay.camera import CameraFollower, CameraMode, CameraOptions
from replay.clock import Clock
from replay.errors import InterpolationError, ValidationError
from replay.events import (
    EventKind,
    ErrorEvent,
    FinishEvent,
    FrameEvent,
    PauseEvent,
    PlaybackEvents,
    SeekEvent,
    StartEvent,
)
from replay.geometry import compute_bearing
from replay.interpolator import interpolate
from replay.model import Bounds, InterpolatedPoint, PlaybackState, TimeWindow, TrackEntry
from replay.path_buffer import PathBuffer
from replay.route import load_tracks

logger = logging.getLogger(__name__)


class TimelineCoordinator:
    """
    Owns the loaded tracks and exposes the public playback API.

    Commands: play(), pause(), stop(), seek(ms), set_speed(multiplier),
    set_route(input), set_camera_mode(mode), destroy().

    Events are delivered through ``self.events`` (a PlaybackEvents QObject)
    or ``on(kind, callback)``. Every command except ``set_route`` is a no-op
    until a valid route has been loaded.

    The renderer must provide:
        update_marker(track_id, position | None, heading)
        remove_marker(track_id)
        remove_all_markers()
        add_path_point(track_id, position)
        set_path(track_id, points)
        reset_path(track_id)
    """

    def __init__(
        self,
        tick_source,
        renderer,
        route: Any = None,
        camera=None,
        camera_mode: CameraMode = CameraMode.CENTER,
        camera_options: Optional[CameraOptions] = None,
        initial_speed: float = 1.0,
        show_paths: bool = True,
        auto_fit: bool = True,
        bearing: Optional[Callable] = compute_bearing,
    ):
        """
        Args:
            tick_source: Host tick source (see replay.tick.TickSource)
            renderer: Renderer capability receiving markers and paths
            route: Optional initial route input, loaded immediately
            camera: Optional camera capability for follow mode / auto-fit
            camera_mode: Initial camera follow mode
            camera_options: Tilt/zoom used by the 'ahead' camera mode
            initial_speed: Starting playback speed multiplier
            show_paths: Whether to draw the travelled path of each track
            auto_fit: Fit the camera to the route bounds on load
            bearing: ``(from, to) -> degrees`` used when headings are missing,
                or None to leave such headings undefined
        """
        self.events = PlaybackEvents()
        self.renderer = renderer
        self.show_paths = show_paths
        self.auto_fit = auto_fit
        self.bearing = bearing

        self._clock = Clock(tick_source, initial_speed=initial_speed)
        self._camera = CameraFollower(camera, camera_mode, camera_options)
        self._paths = PathBuffer()

        self._tracks: Dict[str, TrackEntry] = {}
        self._global_window: Optional[TimeWindow] = None
        self._current_time_ms = 0.0
        self._initialized = False
        self._finished = False
        self._destroyed = False
        self._last_input: Any = None
        # Bumped whenever the timeline jumps (route, seek, stop, destroy)
        self._generation = 0

        if route is not None:
            self.set_route(route)

    # ==========================================================================
    # Queries
    # ==========================================================================

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def is_playing(self) -> bool:
        return self._clock.is_running

    @property
    def current_time_ms(self) -> float:
        return self._current_time_ms

    @property
    def track_ids(self) -> List[str]:
        return list(self._tracks)

    @property
    def global_window(self) -> Optional[TimeWindow]:
        return self._global_window

    @property
    def state(self) -> PlaybackState:
        return PlaybackState(self._current_time_ms, self._clock.speed, self._clock.is_running)

    @property
    def camera_mode(self) -> CameraMode:
        return self._camera.mode

    def track_window(self, track_id: str) -> Optional[TimeWindow]:
        entry = self._tracks.get(track_id)
        return entry.window if entry else None

    def get_duration_ms(self) -> float:
        return self._global_window.duration_ms if self._global_window else 0

    def on(self, kind: EventKind, callback: Callable) -> None:
        """Connect ``callback`` to one event kind; it receives that kind's payload."""
        self.events.signal_for(kind).connect(callback)

    # ==========================================================================
    # Commands
    # ==========================================================================

    def set_route(self, route_input: Any) -> bool:
        """
        Replace all tracks and reset playback to time zero.

        Invalid input is reported through the ``error`` event and leaves the
        previously loaded route (if any) untouched.

        Returns:
            True if the route was loaded
        """
        if self._destroyed:
            return False
        self._last_input = route_input

        try:
            tracks = load_tracks(route_input)
        except ValidationError as e:
            logger.error(f"Route rejected: {e}")
            self.events.emit(ErrorEvent(e))
            return False

        self._generation += 1
        self._clock.stop()
        self.renderer.remove_all_markers()
        self._reset_paths()

        self._tracks = tracks
        self._global_window = TimeWindow.union(entry.window for entry in tracks.values())
        self._current_time_ms = 0.0
        self._finished = False
        self._initialized = True

        logger.info(
            f"Route loaded: {len(tracks)} track(s), "
            f"start={self._global_window.start_ms}, end={self._global_window.end_ms}, "
            f"duration={self._global_window.duration_ms}ms"
        )

        points = self._render_at(self._global_window.start_ms)
        self._follow_camera(points)
        if self.auto_fit:
            self._camera.fit_bounds(
                Bounds.from_points(p for entry in tracks.values() for p in entry.points)
            )

        # Announce the new duration to listeners
        self.events.emit(SeekEvent(0.0))
        return True

    def play(self) -> None:
        if self._destroyed:
            return
        if not self._initialized:
            if self._last_input is None or not self.set_route(self._last_input):
                return
        if self.get_duration_ms() <= 0:
            logger.warning("Route has zero duration, nothing to play")
            return
        if self._clock.is_running:
            return

        # Replaying after the end restarts from the beginning
        if self._current_time_ms >= self.get_duration_ms():
            self.seek(0)

        self._finished = False
        self._clock.start(self._handle_tick)
        self.events.emit(StartEvent())

    def pause(self) -> None:
        if not self._initialized:
            return
        self._clock.pause()
        self.events.emit(PauseEvent())

    def stop(self) -> None:
        if not self._initialized:
            return
        self._generation += 1
        self._clock.stop()
        self._current_time_ms = 0.0
        self._finished = False
        self._reset_paths()

        points = self._render_at(self._global_window.start_ms)
        self._follow_camera(points)
        self.events.emit(SeekEvent(0.0))

    def seek(self, time_ms: float) -> None:
        """
        Jump to ``time_ms`` (relative to the global start).

        Play/pause state is left as it is: seeking while paused stays paused,
        seeking while playing keeps playing from the new position.
        """
        if not self._initialized:
            return

        clamped = max(0.0, min(float(time_ms), self.get_duration_ms()))
        self._generation += 1
        self._clock.set_current_time(clamped)
        self._current_time_ms = clamped
        self._finished = False

        absolute = self._global_window.start_ms + clamped
        points = self._render_at(absolute)
        self._follow_camera(points)

        if self.show_paths:
            for entry in self._tracks.values():
                path = self._paths.rebuild(entry.track_id, entry.points, absolute, points.get(entry.track_id))
                self.renderer.set_path(entry.track_id, path)

        self.events.emit(SeekEvent(clamped))

    def set_speed(self, multiplier: float) -> None:
        if not self._initialized:
            return
        self._clock.set_speed(multiplier)

    def set_camera_mode(self, mode: CameraMode, **overrides) -> None:
        """
        Change the camera follow mode and re-apply it at the current time.

        Keyword overrides (default_tilt, zoom_level) replace
        the matching camera options.
        """
        if not self._initialized:
            return
        self._camera.set_mode(mode, **overrides)
        absolute = self._global_window.start_ms + self._current_time_ms
        self._follow_camera({
            entry.track_id: self._interpolate(entry, absolute) for entry in self._tracks.values()
        })

    def destroy(self) -> None:
        if self._destroyed:
            return
        self._generation += 1
        self._clock.destroy()
        self.renderer.remove_all_markers()
        self._reset_paths()

        self._tracks = {}
        self._global_window = None
        self._initialized = False
        self._destroyed = True
        self._last_input = None
        logger.info("Timeline coordinator destroyed")

    # ==========================================================================
    # Tick handling
    # ==========================================================================

    def _handle_tick(self, virtual_time_ms: float) -> None:
        if not self._initialized or self._finished:
            return

        duration = self.get_duration_ms()
        clamped = max(0.0, min(virtual_time_ms, duration))
        self._current_time_ms = clamped
        absolute = self._global_window.start_ms + clamped
        generation = self._generation

        points: Dict[str, Optional[InterpolatedPoint]] = {}
        for entry in list(self._tracks.values()):
            point = self._interpolate(entry, absolute)
            points[entry.track_id] = point
            if point is None:
                self.renderer.remove_marker(entry.track_id)
                continue

            pos = point.position
            self.renderer.update_marker(entry.track_id, pos, point.heading)

            if self.show_paths and absolute > self._global_window.start_ms:
                if self._paths.add_point(entry.track_id, pos):
                    self.renderer.add_path_point(entry.track_id, pos)

            self.events.emit(FrameEvent(entry.track_id, pos, point.heading, point.progress))
            if self._generation != generation:
                # A frame listener moved or replaced the timeline
                return

        self._follow_camera(points)

        if clamped >= duration:
            self._finish()

    def _finish(self) -> None:
        self._finished = True
        self._clock.pause()
        self._render_at(self._global_window.end_ms)
        logger.info("Playback finished")
        self.events.emit(FinishEvent())

    # ==========================================================================
    # Helpers
    # ==========================================================================

    def _interpolate(self, entry: TrackEntry, absolute_time_ms: float) -> Optional[InterpolatedPoint]:
        try:
            return interpolate(entry.points, absolute_time_ms, entry.window, self.bearing)
        except InterpolationError as e:
            logger.error(f"Interpolation failed for track {entry.track_id!r}: {e}", exc_info=True)
            return None

    def _render_at(self, absolute_time_ms: float) -> Dict[str, Optional[InterpolatedPoint]]:
        """Move every track's marker to its position at an absolute time."""
        points = {}
        for entry in self._tracks.values():
            point = self._interpolate(entry, absolute_time_ms)
            points[entry.track_id] = point
            if point is None:
                self.renderer.remove_marker(entry.track_id)
            else:
                self.renderer.update_marker(entry.track_id, point.position, point.heading)
        return points

    def _follow_camera(self, points: Dict[str, Optional[InterpolatedPoint]]) -> None:
        # Always follows the first track in load order
        if points:
            self._camera.follow(next(iter(points.values())))

    def _reset_paths(self) -> None:
        self._paths.reset()
        if self.show_paths:
            for track_id in self._tracks:
                self.renderer.reset_path(track_id)
