import pytest

from dockhand.errors import ReadinessTimeoutError
from dockhand.utils.wait import wait_until


class FakeClock:
    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


class Probe:
    def __init__(self, results):
        self.results = list(results)
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return self.results.pop(0) if self.results else False


def test_returns_on_first_success():
    clock = FakeClock()
    probe = Probe([True, True])

    attempts = wait_until(probe, timeout=30, interval=3, sleep=clock.sleep, clock=clock)

    assert attempts == 1
    assert probe.calls == 1
    assert clock.sleeps == []


def test_stops_calling_after_success():
    clock = FakeClock()
    probe = Probe([False, False, True, True])

    attempts = wait_until(probe, timeout=30, interval=3, sleep=clock.sleep, clock=clock)

    assert attempts == 3
    assert probe.calls == 3
    assert clock.sleeps == [3, 3]


def test_times_out_after_bound():
    clock = FakeClock()
    probe = Probe([])

    with pytest.raises(ReadinessTimeoutError):
        wait_until(probe, timeout=9, interval=3, sleep=clock.sleep, clock=clock)

    assert probe.calls == 4
    assert clock.now == 9


def test_zero_timeout_still_probes_once():
    clock = FakeClock()
    probe = Probe([])

    with pytest.raises(ReadinessTimeoutError):
        wait_until(probe, timeout=0, interval=3, sleep=clock.sleep, clock=clock)

    assert probe.calls == 1
