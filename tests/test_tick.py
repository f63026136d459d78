from replay.tick import QtTickSource


def test_timer_runs_only_while_registered():
    source = QtTickSource(fps=30)
    assert source._timer.interval() == 33
    unregister_a = source.register_tick(lambda _now: None)
    unregister_b = source.register_tick(lambda _now: None)
    assert source._timer.isActive()

    unregister_a()
    assert source._timer.isActive()
    unregister_b()
    assert not source._timer.isActive()


def test_timeout_calls_callbacks_with_wall_time():
    source = QtTickSource()
    seen = []
    unregister = source.register_tick(seen.append)
    source._on_timeout()
    unregister()
    source._on_timeout()

    assert len(seen) == 1
    assert 0 <= seen[0] <= source.now()
