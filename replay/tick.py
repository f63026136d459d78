"""
Tick sources that drive the playback clock once per displayed frame.
"""
import logging
from typing import Callable, List, Protocol

from PyQt5 import QtCore

logger = logging.getLogger(__name__)

TickCallback = Callable[[float], None]


class TickSource(Protocol):
    """
    Host-provided periodic callback.

    ``register_tick(cb)`` starts calling ``cb(wall_now_ms)`` once per frame
    and returns a function that deregisters it. ``now()`` reads the same
    wall clock the ticks are stamped with.
    """

    def now(self) -> float: ...

    def register_tick(self, callback: TickCallback) -> Callable[[], None]: ...


class QtTickSource(QtCore.QObject):
    """
    QTimer based tick source running on the Qt event loop thread.

    Callbacks are invoked sequentially from the timer's timeout signal, so
    everything they touch stays on the GUI thread.
    """

    def __init__(self, fps: int = 60, parent=None):
        """
        Args:
            fps: Target frames per second (30 or 60)
            parent: Parent QObject
        """
        super().__init__(parent)
        self.fps = fps
        self._callbacks: List[TickCallback] = []

        self._elapsed = QtCore.QElapsedTimer()
        self._elapsed.start()

        self._timer = QtCore.QTimer(self)
        self._timer.setTimerType(QtCore.Qt.PreciseTimer)
        self._timer.setInterval(int(round(1000 / fps)))
        self._timer.timeout.connect(self._on_timeout)

    def now(self) -> float:
        return self._elapsed.nsecsElapsed() / 1_000_000

    def register_tick(self, callback: TickCallback) -> Callable[[], None]:
        self._callbacks.append(callback)
        if not self._timer.isActive():
            self._timer.start()
            logger.debug(f"Tick timer started at {self.fps} fps")

        def unregister():
            if callback in self._callbacks:
                self._callbacks.remove(callback)
            if not self._callbacks and self._timer.isActive():
                self._timer.stop()
                logger.debug("Tick timer stopped")

        return unregister

    def _on_timeout(self):
        wall_now = self.now()
        # Copy: a callback may deregister itself mid-iteration
        for callback in list(self._callbacks):
            callback(wall_now)
