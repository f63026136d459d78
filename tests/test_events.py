from replay.events import (
    EventKind,
    ErrorEvent,
    FrameEvent,
    PlaybackEvents,
    SeekEvent,
    StartEvent,
)
from replay.model import LatLng


def test_each_kind_has_its_own_signal():
    events = PlaybackEvents()
    received = {kind: [] for kind in EventKind}
    for kind in EventKind:
        events.signal_for(kind).connect(received[kind].append)

    frame = FrameEvent("a", LatLng(1, 2), None, 0.5)
    events.emit(frame)
    events.emit(SeekEvent(100))
    events.emit(StartEvent())

    assert received[EventKind.FRAME] == [frame]
    assert received[EventKind.SEEK] == [SeekEvent(100)]
    assert received[EventKind.START] == [StartEvent()]
    assert received[EventKind.FINISH] == []


def test_payload_kinds():
    error = ValueError("boom")
    assert ErrorEvent(error).kind is EventKind.ERROR
    assert ErrorEvent(error).error is error
    assert FrameEvent("a", LatLng(0, 0), 1.0, 1.0).kind is EventKind.FRAME
