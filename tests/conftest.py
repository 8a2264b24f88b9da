"""
Shared fixtures and helpers for the samplerkit tests.
"""

import threading

import pytest

from samplerkit.engine.stats_engine import StatsEngine
from samplerkit.samplers.base_sampler import BaseSampler, SamplerError


class FakeSampler(BaseSampler):
    """Sampler with a configurable kind that can be told to fail."""

    def __init__(self, kind, name: str, fail: bool = False, requires_engine: bool = False):
        super().__init__()
        self._kind = kind
        self.name = name
        self.fail = fail
        self.requires_engine = requires_engine
        self.calls = 0

    @property
    def kind(self):
        return self._kind

    @property
    def id(self) -> str:
        return self.name

    def poll(self) -> None:
        self.calls += 1
        if self.requires_engine and self.stats_engine is None:
            raise SamplerError(f"{self.name} has no stats engine")
        if self.fail:
            raise SamplerError(f"{self.name} exploded")


class SteppedSleep:
    """
    Replacement for time.sleep that blocks until the test releases it,
    so the background loop can be advanced one cycle at a time.
    """

    def __init__(self):
        self.durations = []
        self._permits = 0
        self._cond = threading.Condition()

    def __call__(self, seconds: float) -> None:
        with self._cond:
            self.durations.append(seconds)
            self._cond.notify_all()
            self._cond.wait_for(lambda: self._permits > 0)
            self._permits -= 1

    def release(self, n: int = 1) -> None:
        with self._cond:
            self._permits += n
            self._cond.notify_all()

    def wait_for_calls(self, n: int, timeout: float = 5.0) -> bool:
        with self._cond:
            return self._cond.wait_for(lambda: len(self.durations) >= n, timeout)


@pytest.fixture
def stepped_sleep():
    return SteppedSleep()


@pytest.fixture
def engine(stepped_sleep):
    """Stats engine whose background thread only advances on request."""
    return StatsEngine(sleep=stepped_sleep)
