from __future__ import annotations

"""Entry point for the HealthDash desktop dashboard.

Sets up logging and configuration, opens the SQLite store, recovers the focus
timer from its persisted record and shows the main window.
"""

import logging
import sqlite3
import sys
from pathlib import Path

from PyQt6.QtWidgets import QApplication

from healthdash.core.app_state import AppState
from healthdash.core.scheduler import QtTickScheduler
from healthdash.core.timer import PomodoroTimer
from healthdash.core.timer_store import TimerStore
from healthdash.data.config import CONFIG_FILE, AppConfig
from healthdash.data.storage import Storage
from healthdash.ui.main_window import MainWindow


logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)


def open_storage(db_path: str | Path) -> Storage | None:
    """Open the database, or ``None`` so the app runs without persistence."""
    try:
        storage = Storage(db_path)
        storage.init_db()
    except (sqlite3.Error, OSError) as exc:
        logger.warning("Storage at %s unavailable, running in memory: %s", db_path, exc)
        return None
    return storage


def main() -> int:
    config = AppConfig.load(CONFIG_FILE)
    setup_logging(config.log_level)

    app = QApplication(sys.argv)

    storage = open_storage(config.db_path)
    app_state = AppState()
    if storage is not None:
        app_state.load_from_storage(storage, sound_enabled=config.sound_enabled)

    timer_store = TimerStore(storage)
    timer = PomodoroTimer(
        store=timer_store,
        scheduler=QtTickScheduler(config.tick_interval_ms),
    )
    initial_config = timer_store.load_config() or config.default_timer_config()

    window = MainWindow(app_state=app_state, timer=timer, initial_config=initial_config)
    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
