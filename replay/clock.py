"""
Playback clock: maps elapsed wall-clock time onto virtual timeline time.
"""
import logging
import math
from enum import Enum
from typing import Callable, Optional

from replay.model import PlaybackState

logger = logging.getLogger(__name__)


class ClockState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"


class Clock:
    """
    Virtual timeline clock driven by a host tick source.

    Each tick advances virtual time by the wall-clock delta since the
    previous tick, scaled by the speed multiplier. The clock knows nothing
    about tracks; it only reports the new virtual time to ``on_tick``.
    """

    def __init__(self, tick_source, initial_speed: float = 1.0):
        """
        Args:
            tick_source: Object with ``now()`` and ``register_tick(cb)``
            initial_speed: Starting speed multiplier (must be > 0)
        """
        self._tick_source = tick_source
        self._state = ClockState.IDLE
        self._on_tick: Optional[Callable[[float], None]] = None
        self._unregister: Optional[Callable[[], None]] = None
        self._destroyed = False

        self._last_tick_wall_time = 0.0
        self._virtual_time_ms = 0.0

        if not math.isfinite(initial_speed) or initial_speed <= 0:
            logger.warning(f"Clock speed must be positive, got {initial_speed}. Using 1.")
            initial_speed = 1.0
        self._speed = float(initial_speed)

    # ------------------ Accessors ------------------ #

    @property
    def state(self) -> ClockState:
        return self._state

    @property
    def speed(self) -> float:
        return self._speed

    @property
    def is_running(self) -> bool:
        return self._state is ClockState.RUNNING

    def is_paused(self) -> bool:
        return not self.is_running

    def get_current_time(self) -> float:
        return self._virtual_time_ms

    def snapshot(self) -> PlaybackState:
        return PlaybackState(self._virtual_time_ms, self._speed, self.is_running)

    # ------------------ Control ------------------ #

    def start(self, on_tick: Callable[[float], None]) -> None:
        if self.is_running:
            return
        if self._destroyed:
            logger.warning("Clock.start() called after destroy(), ignoring")
            return

        self._on_tick = on_tick
        self._last_tick_wall_time = self._tick_source.now()
        self._state = ClockState.RUNNING
        self._unregister = self._tick_source.register_tick(self._tick)
        logger.info(f"Clock started at {self._virtual_time_ms:.0f}ms ({self._speed}x)")

    def pause(self) -> None:
        if not self.is_running:
            return
        self._state = ClockState.PAUSED
        self._release_tick_source()
        logger.info(f"Clock paused at {self._virtual_time_ms:.0f}ms")

    def stop(self) -> None:
        self.pause()
        self._virtual_time_ms = 0.0
        self._on_tick = None
        self._state = ClockState.IDLE
        logger.debug("Clock stopped (timeline reset)")

    def destroy(self) -> None:
        self.stop()
        self._release_tick_source()
        self._tick_source = None
        self._destroyed = True
        logger.debug("Clock destroyed")

    def set_speed(self, multiplier: float) -> bool:
        """
        Change the speed multiplier from this instant on.

        Returns:
            False if the multiplier was rejected (not a finite number > 0)
        """
        if not math.isfinite(multiplier) or multiplier <= 0:
            logger.warning(f"Clock speed must be positive, ignoring set_speed({multiplier})")
            return False
        if multiplier != self._speed:
            self._speed = float(multiplier)
            logger.info(f"Clock speed set to {multiplier}x")
            if self.is_running:
                # Re-anchor so the new speed applies without a time jump
                self._last_tick_wall_time = self._tick_source.now()
        return True

    def set_current_time(self, ms: float) -> None:
        self._virtual_time_ms = max(0.0, float(ms))
        if self.is_running:
            self._last_tick_wall_time = self._tick_source.now()

    # ------------------ Tick ------------------ #

    def _tick(self, wall_now: float) -> None:
        if not self.is_running:
            return

        wall_delta = wall_now - self._last_tick_wall_time
        self._last_tick_wall_time = wall_now
        self._virtual_time_ms += wall_delta * self._speed

        if self._on_tick is not None:
            self._on_tick(self._virtual_time_ms)

    def _release_tick_source(self) -> None:
        if self._unregister is not None:
            self._unregister()
            self._unregister = None
