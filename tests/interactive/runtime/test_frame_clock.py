import pytest

from shapegrid.interactive.runtime.frame_clock import DeltaClock


class _FakeNow:
    def __init__(self, t: float = 0.0) -> None:
        self.t = t

    def __call__(self) -> float:
        return self.t


def test_delta_clock_returns_elapsed_since_last_call():
    now = _FakeNow(10.0)
    clock = DeltaClock(now=now)

    now.t = 10.016
    assert clock.delta() == pytest.approx(0.016)
    now.t = 10.05
    assert clock.delta() == pytest.approx(0.034)


def test_delta_clock_clamps_long_pauses():
    now = _FakeNow(0.0)
    clock = DeltaClock(max_delta=0.1, now=now)
    now.t = 5.0
    assert clock.delta() == pytest.approx(0.1)


def test_delta_clock_never_goes_negative():
    now = _FakeNow(1.0)
    clock = DeltaClock(now=now)
    now.t = 0.5
    assert clock.delta() == 0.0


def test_delta_clock_reset_restarts_from_now():
    now = _FakeNow(0.0)
    clock = DeltaClock(now=now)
    now.t = 0.2
    clock.reset()
    now.t = 0.21
    assert clock.delta() == pytest.approx(0.01)


def test_delta_clock_rejects_non_positive_max_delta():
    with pytest.raises(ValueError):
        DeltaClock(max_delta=0.0)
