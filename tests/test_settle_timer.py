import pytest

from tilemerge.utils.settle_timer import SettleTimer


def test_settle_timer_fires_once_after_full_delay():
    timer = SettleTimer()
    calls = []
    timer.schedule(0.1, lambda: calls.append("done"))

    assert timer.pending
    assert not timer.advance(0.04)
    assert not timer.advance(0.04)
    assert calls == []
    assert timer.advance(0.04)
    assert calls == ["done"]
    assert not timer.pending
    assert not timer.advance(1.0)
    assert calls == ["done"]
    assert timer.fired == 1


def test_settle_timer_rejects_second_schedule_while_pending():
    timer = SettleTimer()
    timer.schedule(0.1, lambda: None)
    with pytest.raises(RuntimeError):
        timer.schedule(0.1, lambda: None)


def test_settle_timer_reset_drops_continuation():
    timer = SettleTimer()
    calls = []
    timer.schedule(0.1, lambda: calls.append(1))
    timer.reset()
    assert not timer.advance(1.0)
    assert calls == []
    assert timer.remaining == 0.0


def test_zero_delay_fires_on_next_advance():
    timer = SettleTimer()
    calls = []
    timer.schedule(0.0, lambda: calls.append(1))
    assert timer.advance(0.0)
    assert calls == [1]
