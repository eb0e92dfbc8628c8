import sqlite3
from typing import Callable

import pytest

from healthdash.core.timer import PomodoroTimer
from healthdash.core.timer_store import TimerStore


class FakeClock:
    """Wall clock in epoch milliseconds that only moves when told to."""

    def __init__(self, now_ms: int = 1_700_000_000_000) -> None:
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, seconds: float) -> None:
        self.now_ms += int(seconds * 1000)


class ManualScheduler:
    """Records start/stop calls; ticks are fired by the test."""

    def __init__(self) -> None:
        self._callback: Callable[[], None] | None = None
        self.starts = 0

    @property
    def is_running(self) -> bool:
        return self._callback is not None

    def start(self, callback: Callable[[], None]) -> None:
        assert self._callback is None, "scheduler started twice without stop"
        self._callback = callback
        self.starts += 1

    def stop(self) -> None:
        self._callback = None

    def fire(self) -> None:
        if self._callback is not None:
            self._callback()


class DictStore:
    def __init__(self) -> None:
        self.data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def remove(self, key: str) -> None:
        self.data.pop(key, None)


class BrokenStore:
    def get(self, key: str) -> str | None:
        raise sqlite3.OperationalError("unable to open database file")

    def set(self, key: str, value: str) -> None:
        raise sqlite3.OperationalError("database is locked")

    def remove(self, key: str) -> None:
        raise OSError("disk unavailable")


class QuotaStore(DictStore):
    """Reads work; every write or remove fails with a non-database error."""

    def set(self, key: str, value: str) -> None:
        raise RuntimeError("quota exceeded")

    def remove(self, key: str) -> None:
        raise RuntimeError("quota exceeded")


def run_for(clock: FakeClock, scheduler: ManualScheduler, seconds: float, step: float = 0.1) -> None:
    """Advance the clock in scheduler-sized steps, ticking after each one."""
    steps = int(round(seconds / step))
    for _ in range(steps):
        clock.advance(step)
        scheduler.fire()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def backend() -> DictStore:
    return DictStore()


@pytest.fixture
def make_timer(clock, scheduler, backend):
    def factory(new_scheduler: bool = False) -> PomodoroTimer:
        return PomodoroTimer(
            store=TimerStore(backend),
            scheduler=ManualScheduler() if new_scheduler else scheduler,
            clock=clock,
        )

    return factory
