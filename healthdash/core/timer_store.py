from __future__ import annotations

"""Durable projection of the timer: four independent keys in a key-value store."""

import json
import logging
from typing import Protocol

from healthdash.core.timer import TimerConfig, TimerPhase


logger = logging.getLogger(__name__)

CONFIG_KEY = "pomodoro_config"
END_TIME_KEY = "pomodoro_end_time"
PHASE_KEY = "pomodoro_phase"
TOTAL_SECONDS_KEY = "pomodoro_total_seconds"


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class TimerStore:
    """Reads and writes the timer record; never raises on store failure.

    With ``backend=None`` (no store available) every write is dropped and every
    read returns ``None``, which leaves the engine running purely in memory.
    """

    def __init__(self, backend: KeyValueStore | None) -> None:
        self._backend = backend

    def load_config(self) -> TimerConfig | None:
        raw = self._get(CONFIG_KEY)
        if raw is None:
            return None
        try:
            data = json.loads(raw)
            return TimerConfig.from_dict(data)
        except (TypeError, KeyError, ValueError) as exc:
            logger.warning("Ignoring malformed %s: %s", CONFIG_KEY, exc)
            return None

    def load_end_time(self) -> int | None:
        return self._get_int(END_TIME_KEY)

    def load_phase(self) -> TimerPhase | None:
        raw = self._get(PHASE_KEY)
        if raw is None:
            return None
        try:
            return TimerPhase(raw)
        except ValueError:
            logger.warning("Ignoring malformed %s: %r", PHASE_KEY, raw)
            return None

    def load_total_seconds(self) -> int | None:
        value = self._get_int(TOTAL_SECONDS_KEY)
        if value is not None and value <= 0:
            logger.warning("Ignoring non-positive %s: %d", TOTAL_SECONDS_KEY, value)
            return None
        return value

    def save_config(self, config: TimerConfig) -> None:
        self._set(CONFIG_KEY, json.dumps(config.to_dict()))

    def save_live(self, end_time: int, phase: TimerPhase, total_seconds: int) -> None:
        self._set(END_TIME_KEY, str(int(end_time)))
        self._set(PHASE_KEY, phase.value)
        self._set(TOTAL_SECONDS_KEY, str(int(total_seconds)))

    def clear_end_time(self) -> None:
        self._remove(END_TIME_KEY)

    def clear_live(self) -> None:
        """Forget the running countdown.

        ``pomodoro_config`` is left in place on purpose: it is the last-used
        configuration, and the configuration form is prefilled from it.
        """
        for key in (END_TIME_KEY, PHASE_KEY, TOTAL_SECONDS_KEY):
            self._remove(key)

    def _get(self, key: str) -> str | None:
        if self._backend is None:
            return None
        try:
            return self._backend.get(key)
        except Exception as exc:  # any backend failure degrades to in-memory
            logger.warning("Timer store read of %s failed: %s", key, exc)
            return None

    def _get_int(self, key: str) -> int | None:
        raw = self._get(key)
        if raw is None:
            return None
        try:
            return int(raw)
        except (TypeError, ValueError):
            logger.warning("Ignoring malformed %s: %r", key, raw)
            return None

    def _set(self, key: str, value: str) -> None:
        if self._backend is None:
            return
        try:
            self._backend.set(key, value)
        except Exception as exc:
            logger.warning("Timer store write of %s failed: %s", key, exc)

    def _remove(self, key: str) -> None:
        if self._backend is None:
            return
        try:
            self._backend.remove(key)
        except Exception as exc:
            logger.warning("Timer store remove of %s failed: %s", key, exc)
