import pytest

from core.timer import Timer


def test_counts_down_in_whole_seconds():
    timer = Timer()
    timer.start(30)
    assert timer.remaining() == 30
    timer.update(0.5)
    assert timer.remaining() == 30
    timer.update(0.5)
    assert timer.remaining() == 29
    assert not timer.is_expired()


def test_expires_and_clamps():
    timer = Timer()
    timer.start(10)
    timer.update(100)
    assert timer.is_expired()
    assert timer.remaining() == 0
    assert timer.fill() == 0.0


def test_fill_fraction():
    timer = Timer()
    timer.start(30)
    timer.update(15)
    assert timer.fill() == pytest.approx(0.5)


def test_stop_freezes():
    timer = Timer()
    timer.start(30)
    timer.update(5)
    timer.stop()
    timer.update(10)
    assert timer.remaining() == 25
    assert not timer.is_running()


def test_idle_timer_never_expires():
    timer = Timer()
    timer.update(10)
    assert not timer.is_expired()
    assert timer.fill() == 0.0


def test_rejects_non_positive_limit():
    with pytest.raises(ValueError):
        Timer().start(0)
