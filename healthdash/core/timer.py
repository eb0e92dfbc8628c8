from __future__ import annotations

"""Focus/break interval timer.

The engine keeps an absolute wall-clock ``end_time`` for the running phase and
derives ``remaining_seconds`` from it on every tick, so a suspended process
never loses time. The live fields are mirrored to a :class:`TimerStore` on
every transition and read back once, at construction, to recover a countdown
that was still running when the process went away.
"""

import logging
import time
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Callable

from PyQt6.QtCore import QObject, pyqtSignal

from healthdash.core.scheduler import QtTickScheduler, TickScheduler

if TYPE_CHECKING:
    from healthdash.core.timer_store import TimerStore


logger = logging.getLogger(__name__)

WORK_MINUTES_RANGE = (1, 60)
BREAK_MINUTES_RANGE = (1, 30)


class TimerPhase(str, Enum):
    IDLE = "idle"
    WORK = "work"
    BREAK = "break"


@dataclass(frozen=True)
class TimerConfig:
    work_minutes: int = 25
    break_minutes: int = 5
    auto_repeat: bool = False

    def validate(self) -> dict[str, str]:
        """Return field errors; an empty dict means the config is usable."""
        errors: dict[str, str] = {}
        low, high = WORK_MINUTES_RANGE
        if not _is_int(self.work_minutes) or not low <= self.work_minutes <= high:
            errors["work_minutes"] = f"Work duration must be between {low} and {high} minutes"
        low, high = BREAK_MINUTES_RANGE
        if not _is_int(self.break_minutes) or not low <= self.break_minutes <= high:
            errors["break_minutes"] = f"Break duration must be between {low} and {high} minutes"
        return errors

    def phase_seconds(self, phase: TimerPhase) -> int:
        if phase == TimerPhase.WORK:
            return self.work_minutes * 60
        if phase == TimerPhase.BREAK:
            return self.break_minutes * 60
        return 0

    def to_dict(self) -> dict[str, object]:
        return {
            "work_minutes": self.work_minutes,
            "break_minutes": self.break_minutes,
            "auto_repeat": self.auto_repeat,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TimerConfig":
        config = cls(
            work_minutes=data["work_minutes"],
            break_minutes=data["break_minutes"],
            auto_repeat=data["auto_repeat"],
        )
        if not isinstance(config.auto_repeat, bool) or config.validate():
            raise ValueError(f"Invalid timer config: {data!r}")
        return config


DEFAULT_CONFIG = TimerConfig()


@dataclass(frozen=True)
class TimerState:
    is_active: bool
    is_paused: bool
    phase: TimerPhase
    total_seconds: int
    remaining_seconds: int
    end_time: int | None
    config: TimerConfig

    @property
    def is_counting(self) -> bool:
        return self.is_active and not self.is_paused

    @property
    def progress(self) -> float:
        """Elapsed fraction of the current phase, for the countdown ring."""
        if self.total_seconds <= 0:
            return 0.0
        elapsed = self.total_seconds - self.remaining_seconds
        return max(0.0, min(1.0, elapsed / self.total_seconds))

    @property
    def remaining_text(self) -> str:
        minutes, seconds = divmod(max(0, self.remaining_seconds), 60)
        return f"{minutes:02d}:{seconds:02d}"


def idle_state(config: TimerConfig = DEFAULT_CONFIG) -> TimerState:
    return TimerState(
        is_active=False,
        is_paused=False,
        phase=TimerPhase.IDLE,
        total_seconds=0,
        remaining_seconds=0,
        end_time=None,
        config=config,
    )


def wall_clock_ms() -> int:
    return int(time.time() * 1000)


def seconds_until(end_time: int, now: int) -> int:
    """Whole seconds left until ``end_time``, rounded up, never negative."""
    remaining_ms = end_time - now
    if remaining_ms <= 0:
        return 0
    return -(-remaining_ms // 1000)


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class PomodoroTimer(QObject):
    """Work/break countdown with persistence and restart recovery.

    ``state_changed`` carries the new :class:`TimerState` after every visible
    change. ``completed`` carries the phase that just ran out and fires before
    the engine moves on, so listeners still see which phase ended.
    """

    state_changed = pyqtSignal(object)
    completed = pyqtSignal(str)

    def __init__(
        self,
        store: TimerStore | None = None,
        scheduler: TickScheduler | None = None,
        clock: Callable[[], int] = wall_clock_ms,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._store = store
        self._scheduler = scheduler if scheduler is not None else QtTickScheduler(parent=self)
        self._clock = clock
        self._state = self._recover()
        self._sync_loop()

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def is_ticking(self) -> bool:
        return self._scheduler.is_running

    def start(self, config: TimerConfig) -> None:
        now = self._clock()
        total = config.phase_seconds(TimerPhase.WORK)
        state = TimerState(
            is_active=True,
            is_paused=False,
            phase=TimerPhase.WORK,
            total_seconds=total,
            remaining_seconds=total,
            end_time=now + total * 1000,
            config=config,
        )
        logger.debug("Starting %d min work phase (auto_repeat=%s)", config.work_minutes, config.auto_repeat)
        if self._store:
            self._store.save_config(config)
            self._store.save_live(state.end_time, state.phase, state.total_seconds)
        self._set_state(state, restart_loop=True)

    def pause(self) -> None:
        state = self._state
        if not state.is_counting:
            logger.debug("pause() ignored in %s state", state.phase.value)
            return
        remaining = seconds_until(state.end_time, self._clock())
        if self._store:
            self._store.clear_end_time()
        self._set_state(replace(state, is_paused=True, end_time=None, remaining_seconds=remaining))

    def resume(self) -> None:
        state = self._state
        if not (state.is_active and state.is_paused):
            logger.debug("resume() ignored in %s state", state.phase.value)
            return
        end_time = self._clock() + state.remaining_seconds * 1000
        if self._store:
            self._store.save_live(end_time, state.phase, state.total_seconds)
        self._set_state(replace(state, is_paused=False, end_time=end_time), restart_loop=True)

    def reset(self) -> None:
        self._scheduler.stop()
        if self._store:
            self._store.clear_live()
        self._set_state(idle_state(self._state.config))

    def skip(self) -> None:
        """Jump to the next phase now; ignores ``auto_repeat`` and never counts as completion."""
        if not self._state.is_active:
            logger.debug("skip() ignored while idle")
            return
        self._advance_phase(self._clock())

    def tick(self) -> None:
        state = self._state
        if not state.is_counting or state.end_time is None:
            return
        now = self._clock()
        if state.end_time > now:
            remaining = seconds_until(state.end_time, now)
            if remaining != state.remaining_seconds:
                self._set_state(replace(state, remaining_seconds=remaining))
            return

        logger.info("%s phase completed", state.phase.value)
        self.completed.emit(state.phase.value)
        if self._state is not state:
            # a completion listener already changed the timer
            return

        if state.config.auto_repeat:
            self._advance_phase(now)
            return
        if self._store:
            self._store.clear_live()
        self._set_state(
            replace(
                state,
                is_active=False,
                is_paused=False,
                phase=TimerPhase.IDLE,
                remaining_seconds=0,
                end_time=None,
            )
        )

    def _advance_phase(self, now: int) -> None:
        state = self._state
        next_phase = TimerPhase.BREAK if state.phase == TimerPhase.WORK else TimerPhase.WORK
        total = state.config.phase_seconds(next_phase)
        end_time = now + total * 1000
        if self._store:
            self._store.save_live(end_time, next_phase, total)
        self._set_state(
            replace(
                state,
                is_active=True,
                is_paused=False,
                phase=next_phase,
                total_seconds=total,
                remaining_seconds=total,
                end_time=end_time,
            )
        )

    def _recover(self) -> TimerState:
        if not self._store:
            return idle_state()
        config = self._store.load_config() or DEFAULT_CONFIG
        end_time = self._store.load_end_time()
        phase = self._store.load_phase()
        total = self._store.load_total_seconds()

        if end_time is not None and phase in (TimerPhase.WORK, TimerPhase.BREAK) and total:
            now = self._clock()
            if end_time > now:
                # a record that ends further out than a whole phase is capped to one
                end_time = min(end_time, now + total * 1000)
                remaining = seconds_until(end_time, now)
                logger.info("Recovered %s phase with %d s left", phase.value, remaining)
                return TimerState(
                    is_active=True,
                    is_paused=False,
                    phase=phase,
                    total_seconds=total,
                    remaining_seconds=remaining,
                    end_time=end_time,
                    config=config,
                )
            logger.info("Discarding timer that expired %d s ago", (now - end_time) // 1000)

        if end_time is not None or phase is not None or total is not None:
            self._store.clear_live()
        return idle_state(config)

    def _set_state(self, state: TimerState, restart_loop: bool = False) -> None:
        self._state = state
        self._sync_loop(restart_loop)
        self.state_changed.emit(state)

    def _sync_loop(self, restart: bool = False) -> None:
        counting = self._state.is_counting
        if restart or not counting:
            self._scheduler.stop()
        if counting and not self._scheduler.is_running:
            self._scheduler.start(self.tick)
