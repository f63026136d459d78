"""
Playback events.

Every event kind has its own payload dataclass and its own Qt signal, so a
listener connected to ``frame`` always receives a FrameEvent.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from PyQt5 import QtCore

from replay.model import LatLng


class EventKind(Enum):
    START = "start"
    PAUSE = "pause"
    SEEK = "seek"
    FRAME = "frame"
    FINISH = "finish"
    ERROR = "error"


@dataclass(frozen=True)
class StartEvent:
    kind = EventKind.START


@dataclass(frozen=True)
class PauseEvent:
    kind = EventKind.PAUSE


@dataclass(frozen=True)
class SeekEvent:
    time_ms: float      # relative to the global start
    kind = EventKind.SEEK


@dataclass(frozen=True)
class FrameEvent:
    track_id: str
    pos: LatLng
    heading: Optional[float]
    progress: float     # track-relative, 0–1
    kind = EventKind.FRAME


@dataclass(frozen=True)
class FinishEvent:
    kind = EventKind.FINISH


@dataclass(frozen=True)
class ErrorEvent:
    error: Exception
    kind = EventKind.ERROR


PlaybackEvent = Union[StartEvent, PauseEvent, SeekEvent, FrameEvent, FinishEvent, ErrorEvent]


class PlaybackEvents(QtCore.QObject):
    """
    Signals emitted by the timeline coordinator.

    Signals:
        started(StartEvent)
        paused(PauseEvent)
        seeked(SeekEvent)
        frame(FrameEvent) - once per track per tick
        finished(FinishEvent)
        error(ErrorEvent)
    """

    started = QtCore.pyqtSignal(object)
    paused = QtCore.pyqtSignal(object)
    seeked = QtCore.pyqtSignal(object)
    frame = QtCore.pyqtSignal(object)
    finished = QtCore.pyqtSignal(object)
    error = QtCore.pyqtSignal(object)

    def signal_for(self, kind: EventKind):
        return {
            EventKind.START: self.started,
            EventKind.PAUSE: self.paused,
            EventKind.SEEK: self.seeked,
            EventKind.FRAME: self.frame,
            EventKind.FINISH: self.finished,
            EventKind.ERROR: self.error,
        }[kind]

    def emit(self, event: PlaybackEvent) -> None:
        self.signal_for(event.kind).emit(event)
