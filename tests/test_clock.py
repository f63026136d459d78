import pytest

from replay.clock import Clock, ClockState


@pytest.fixture
def clock(tick_source):
    return Clock(tick_source)


def test_starts_idle(clock):
    assert clock.state is ClockState.IDLE
    assert clock.is_paused()
    assert clock.get_current_time() == 0


def test_advances_linearly(clock, tick_source):
    seen = []
    clock.start(seen.append)
    tick_source.advance(1000, steps=60)
    assert clock.get_current_time() == pytest.approx(1000)
    assert seen[-1] == pytest.approx(1000)
    assert len(seen) == 60


def test_speed_scales_virtual_time(clock, tick_source):
    clock.set_speed(2)
    clock.start(lambda _ms: None)
    tick_source.advance(100)
    assert clock.get_current_time() == pytest.approx(200)


def test_speed_change_while_running_reanchors(clock, tick_source):
    clock.start(lambda _ms: None)
    tick_source.advance(100)
    # Wall time passes without a tick, then the speed changes
    tick_source.wall_ms += 50
    clock.set_speed(4)
    tick_source.advance(10)
    assert clock.get_current_time() == pytest.approx(100 + 40)


def test_rejects_non_positive_speed(clock):
    assert clock.set_speed(0) is False
    assert clock.set_speed(-2) is False
    assert clock.speed == 1


def test_invalid_initial_speed_falls_back_to_one(tick_source):
    assert Clock(tick_source, initial_speed=0).speed == 1


def test_start_is_idempotent(clock, tick_source):
    clock.start(lambda _ms: None)
    clock.start(lambda _ms: None)
    assert len(tick_source.callbacks) == 1


def test_pause_preserves_time_and_deregisters(clock, tick_source):
    clock.start(lambda _ms: None)
    tick_source.advance(300)
    clock.pause()
    assert clock.state is ClockState.PAUSED
    assert tick_source.callbacks == []
    tick_source.wall_ms += 1000
    assert clock.get_current_time() == pytest.approx(300)


def test_pause_when_not_running_is_noop(clock):
    clock.pause()
    assert clock.state is ClockState.IDLE


def test_resume_does_not_count_paused_time(clock, tick_source):
    clock.start(lambda _ms: None)
    tick_source.advance(100)
    clock.pause()
    tick_source.wall_ms += 5000
    clock.start(lambda _ms: None)
    tick_source.advance(100)
    assert clock.get_current_time() == pytest.approx(200)


def test_late_tick_after_pause_is_ignored(clock, tick_source):
    seen = []
    clock.start(seen.append)
    tick_source.advance(100)
    clock.pause()
    tick_source.wall_ms += 100
    tick_source.force_tick(clock._tick)
    assert clock.get_current_time() == pytest.approx(100)
    assert len(seen) == 1


def test_stop_resets_time(clock, tick_source):
    seen = []
    clock.start(seen.append)
    tick_source.advance(500)
    clock.stop()
    assert clock.state is ClockState.IDLE
    assert clock.get_current_time() == 0
    assert tick_source.callbacks == []


def test_set_current_time_clamps_and_reanchors(clock, tick_source):
    clock.set_current_time(-50)
    assert clock.get_current_time() == 0

    clock.start(lambda _ms: None)
    tick_source.wall_ms += 400
    clock.set_current_time(1000)
    tick_source.advance(10)
    assert clock.get_current_time() == pytest.approx(1010)


def test_snapshot(clock, tick_source):
    clock.set_speed(3)
    clock.start(lambda _ms: None)
    tick_source.advance(10)
    state = clock.snapshot()
    assert state.virtual_time_ms == pytest.approx(30)
    assert state.speed_multiplier == 3
    assert state.running is True


def test_destroy_releases_tick_source(clock, tick_source):
    clock.start(lambda _ms: None)
    clock.destroy()
    assert tick_source.callbacks == []
    clock.start(lambda _ms: None)
    assert not clock.is_running


@pytest.mark.parametrize("speed", [float("nan"), float("inf")])
def test_rejects_non_finite_speed(clock, tick_source, speed):
    assert clock.set_speed(speed) is False
    assert clock.speed == 1
    assert Clock(tick_source, initial_speed=speed).speed == 1
