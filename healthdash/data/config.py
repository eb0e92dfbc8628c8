from __future__ import annotations

"""Application configuration file and shared constants."""

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path

from healthdash.core.timer import (
    BREAK_MINUTES_RANGE,
    DEFAULT_CONFIG,
    WORK_MINUTES_RANGE,
    TimerConfig,
)


logger = logging.getLogger(__name__)

APP_NAME = "HealthDash"
APP_DATA_DIR = Path.home() / ".local" / "share" / "healthdash"
CONFIG_FILE = APP_DATA_DIR / "config.json"
DB_FILE = APP_DATA_DIR / "healthdash.db"

TICK_INTERVAL_MS = 100
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class AppConfig:
    """Settings read once at startup."""

    db_path: str = str(DB_FILE)
    log_level: str = "INFO"
    tick_interval_ms: int = TICK_INTERVAL_MS

    # Fallback values for the timer form when nothing has been stored yet
    default_work_minutes: int = DEFAULT_CONFIG.work_minutes
    default_break_minutes: int = DEFAULT_CONFIG.break_minutes
    default_auto_repeat: bool = DEFAULT_CONFIG.auto_repeat

    sound_enabled: bool = True

    def default_timer_config(self) -> TimerConfig:
        config = TimerConfig(
            work_minutes=self.default_work_minutes,
            break_minutes=self.default_break_minutes,
            auto_repeat=self.default_auto_repeat,
        )
        if config.validate():
            return DEFAULT_CONFIG
        return config

    def save(self, path: str | Path = CONFIG_FILE) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(asdict(self), f, indent=2)

    @classmethod
    def load(cls, path: str | Path = CONFIG_FILE) -> "AppConfig":
        """Load configuration from file, or defaults if missing or invalid."""
        path = Path(path)
        if not path.exists():
            return cls()
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable config %s: %s", path, exc)
            return cls()
        if not isinstance(data, dict):
            return cls()

        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning("Ignoring unknown config keys: %s", ", ".join(sorted(unknown)))
        try:
            config = cls(**{k: v for k, v in data.items() if k in known})
        except TypeError:
            return cls()
        return config._normalized()

    def _normalized(self) -> "AppConfig":
        if str(self.log_level).upper() not in LOG_LEVELS:
            self.log_level = "INFO"
        self.log_level = str(self.log_level).upper()
        if not isinstance(self.tick_interval_ms, int) or self.tick_interval_ms <= 0:
            self.tick_interval_ms = TICK_INTERVAL_MS
        if self.default_work_minutes not in range(WORK_MINUTES_RANGE[0], WORK_MINUTES_RANGE[1] + 1):
            self.default_work_minutes = DEFAULT_CONFIG.work_minutes
        if self.default_break_minutes not in range(BREAK_MINUTES_RANGE[0], BREAK_MINUTES_RANGE[1] + 1):
            self.default_break_minutes = DEFAULT_CONFIG.break_minutes
        self.default_auto_repeat = bool(self.default_auto_repeat)
        self.sound_enabled = bool(self.sound_enabled)
        return self
