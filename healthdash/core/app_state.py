from __future__ import annotations

import logging
from typing import Any

from PyQt6.QtCore import QObject, pyqtSignal

from healthdash.core.theme import ThemeMode, resolve_mode
from healthdash.data.storage import Storage, TodoRow


logger = logging.getLogger(__name__)

DEFAULT_USER_NAME = "User"
DEFAULT_HEALTH = 100


class AppState(QObject):
    state_changed = pyqtSignal()
    theme_changed = pyqtSignal(object)
    settings_changed = pyqtSignal(str, object)
    todos_changed = pyqtSignal()

    def __init__(self) -> None:
        super().__init__()
        self.user_name: str = DEFAULT_USER_NAME
        self.health_status: int = DEFAULT_HEALTH
        self.theme: ThemeMode = resolve_mode(DEFAULT_HEALTH)
        self.sound_enabled: bool = True
        self.todos: list[TodoRow] = []
        self._storage: Storage | None = None

    def load_from_storage(self, storage: Storage, sound_enabled: bool = True) -> None:
        self._storage = storage
        self.user_name = str(storage.get_setting("user_name", DEFAULT_USER_NAME) or DEFAULT_USER_NAME)
        health = storage.get_setting("health_status", DEFAULT_HEALTH)
        self.health_status = self._clamp_health(health)
        self.theme = resolve_mode(self.health_status)
        self.sound_enabled = bool(storage.get_setting("sound_enabled", sound_enabled))
        self.todos = storage.list_todos()
        self.state_changed.emit()
        self.theme_changed.emit(self.theme)
        self.todos_changed.emit()

    def set_user_name(self, name: str) -> None:
        clean = name.strip()
        if not clean:
            raise ValueError("Name cannot be empty")
        self.user_name = clean
        self._save_setting("user_name", clean)

    def set_health_status(self, value: int) -> None:
        if not isinstance(value, int) or not 0 <= value <= 100:
            raise ValueError("Health status must be between 0 and 100")
        self.health_status = value
        self._save_setting("health_status", value)
        new_theme = resolve_mode(value)
        if new_theme.mode != self.theme.mode:
            logger.info("Theme mode %s -> %s", self.theme.mode.value, new_theme.mode.value)
        self.theme = new_theme
        self.theme_changed.emit(new_theme)

    def set_sound_enabled(self, enabled: bool) -> None:
        self.sound_enabled = bool(enabled)
        self._save_setting("sound_enabled", self.sound_enabled)

    def add_todo(self, text: str) -> bool:
        if not self._storage:
            return False
        try:
            self._storage.create_todo(text)
        except ValueError as exc:
            logger.debug("Rejected todo: %s", exc)
            return False
        self._reload_todos()
        return True

    def remove_todo(self, todo_id: str) -> None:
        if not self._storage:
            return
        self._storage.delete_todo(todo_id)
        self._reload_todos()

    def toggle_todo(self, todo_id: str, completed: bool) -> None:
        if not self._storage:
            return
        self._storage.set_todo_completed(todo_id, completed)
        self._reload_todos()

    def clear_completed_todos(self) -> None:
        if not self._storage:
            return
        self._storage.clear_completed_todos()
        self._reload_todos()

    def _reload_todos(self) -> None:
        self.todos = self._storage.list_todos()
        self.todos_changed.emit()
        self.state_changed.emit()

    def _save_setting(self, key: str, value: Any) -> None:
        if self._storage:
            self._storage.set_setting(key, value)
        self.settings_changed.emit(key, value)
        self.state_changed.emit()

    def _clamp_health(self, value: Any) -> int:
        try:
            return max(0, min(100, int(value)))
        except (TypeError, ValueError):
            return DEFAULT_HEALTH
