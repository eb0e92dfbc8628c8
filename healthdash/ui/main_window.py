from __future__ import annotations

import logging
from datetime import datetime

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import (
    QApplication,
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QPushButton,
    QSlider,
    QVBoxLayout,
    QWidget,
)

from healthdash.core.app_state import AppState
from healthdash.core.theme import Mode, ThemeMode, pick_greeting
from healthdash.core.timer import PomodoroTimer, TimerConfig, TimerState
from healthdash.ui.audio_player import AudioCuePlayer
from healthdash.ui.countdown_ring import CountdownRing
from healthdash.ui.styles import apply_theme
from healthdash.ui.timer_dialog import TimerConfigDialog


logger = logging.getLogger(__name__)

TODO_ID_ROLE = Qt.ItemDataRole.UserRole


class MainWindow(QMainWindow):
    def __init__(self, app_state: AppState, timer: PomodoroTimer, initial_config: TimerConfig) -> None:
        super().__init__()
        self.setWindowTitle("HealthDash")
        self.resize(1000, 640)

        self.app_state = app_state
        self.timer = timer
        self.last_config = initial_config
        self._greeting_mode: Mode | None = None
        self.audio = AudioCuePlayer(timer, app_state, parent=self)

        self._build_ui()
        self._connect_signals()

        self.clock_timer = QTimer(self)
        self.clock_timer.setInterval(1000)
        self.clock_timer.timeout.connect(self._update_clock)
        self.clock_timer.start()

        self._update_clock()
        self._on_theme_changed(self.app_state.theme)
        self._refresh_todos()
        self._on_timer_state(self.timer.state)

    def _build_ui(self) -> None:
        central = QWidget(self)
        self.setCentralWidget(central)
        root_layout = QHBoxLayout(central)

        left = QFrame()
        left.setObjectName("Panel")
        left_layout = QVBoxLayout(left)
        self.greeting_label = QLabel()
        self.greeting_label.setObjectName("Greeting")
        self.greeting_label.setWordWrap(True)
        self.clock_label = QLabel()
        self.clock_label.setObjectName("Clock")
        left_layout.addWidget(self.greeting_label)
        left_layout.addWidget(self.clock_label)

        todo_row = QHBoxLayout()
        self.todo_input = QLineEdit()
        self.todo_input.setPlaceholderText("Add a task...")
        self.add_todo_btn = QPushButton("Add")
        todo_row.addWidget(self.todo_input, 1)
        todo_row.addWidget(self.add_todo_btn)
        left_layout.addLayout(todo_row)

        self.todo_list = QListWidget()
        left_layout.addWidget(self.todo_list, 1)
        todo_actions = QHBoxLayout()
        self.delete_todo_btn = QPushButton("Delete")
        self.clear_done_btn = QPushButton("Clear completed")
        todo_actions.addWidget(self.delete_todo_btn)
        todo_actions.addWidget(self.clear_done_btn)
        todo_actions.addStretch()
        left_layout.addLayout(todo_actions)

        right = QFrame()
        right.setObjectName("Panel")
        right_layout = QVBoxLayout(right)
        self.ring = CountdownRing()
        right_layout.addWidget(self.ring, 1)

        controls = QHBoxLayout()
        self.start_btn = QPushButton("Start")
        self.start_btn.setObjectName("PrimaryButton")
        self.pause_btn = QPushButton("Pause")
        self.resume_btn = QPushButton("Resume")
        self.skip_btn = QPushButton("Skip")
        self.reset_btn = QPushButton("Reset")
        for button in (self.start_btn, self.pause_btn, self.resume_btn, self.skip_btn, self.reset_btn):
            controls.addWidget(button)
        right_layout.addLayout(controls)

        health_row = QHBoxLayout()
        self.health_slider = QSlider(Qt.Orientation.Horizontal)
        self.health_slider.setRange(0, 100)
        self.health_slider.setValue(self.app_state.health_status)
        self.health_value = QLabel()
        self.health_value.setObjectName("MutedText")
        health_row.addWidget(QLabel("Health:"))
        health_row.addWidget(self.health_slider, 1)
        health_row.addWidget(self.health_value)
        right_layout.addLayout(health_row)

        root_layout.addWidget(left, 3)
        root_layout.addWidget(right, 2)

        space_action = QAction(self)
        space_action.setShortcut(QKeySequence(Qt.Key.Key_Space))
        space_action.triggered.connect(self._space_toggle)
        self.addAction(space_action)

    def _connect_signals(self) -> None:
        self.start_btn.clicked.connect(self.open_timer_dialog)
        self.pause_btn.clicked.connect(self.timer.pause)
        self.resume_btn.clicked.connect(self.timer.resume)
        self.skip_btn.clicked.connect(self.timer.skip)
        self.reset_btn.clicked.connect(self.timer.reset)
        self.timer.state_changed.connect(self._on_timer_state)
        self.timer.completed.connect(self._on_phase_completed)

        self.add_todo_btn.clicked.connect(self._add_todo)
        self.todo_input.returnPressed.connect(self._add_todo)
        self.todo_list.itemChanged.connect(self._on_todo_item_changed)
        self.delete_todo_btn.clicked.connect(self._delete_selected_todo)
        self.clear_done_btn.clicked.connect(self.app_state.clear_completed_todos)
        self.app_state.todos_changed.connect(self._refresh_todos)

        self.health_slider.valueChanged.connect(self.app_state.set_health_status)
        self.app_state.theme_changed.connect(self._on_theme_changed)

    def open_timer_dialog(self) -> None:
        dialog = TimerConfigDialog(self.last_config, parent=self)
        if dialog.exec() != TimerConfigDialog.DialogCode.Accepted:
            return
        config = dialog.config()
        self.last_config = config
        self.timer.start(config)

    def _space_toggle(self) -> None:
        state = self.timer.state
        if not state.is_active:
            self.open_timer_dialog()
        elif state.is_paused:
            self.timer.resume()
        else:
            self.timer.pause()

    def _on_timer_state(self, state: TimerState) -> None:
        self.ring.set_state(state)
        self.start_btn.setEnabled(True)
        self.pause_btn.setEnabled(state.is_counting)
        self.resume_btn.setEnabled(state.is_active and state.is_paused)
        self.skip_btn.setEnabled(state.is_active)
        self.reset_btn.setEnabled(state.is_active)
        title = "HealthDash"
        if state.is_active:
            title = f"{state.remaining_text} · {state.phase.value} · HealthDash"
        self.setWindowTitle(title)

    def _on_phase_completed(self, previous_phase: str) -> None:
        logger.info("Phase %s finished", previous_phase)
        self.statusBar().showMessage(f"{previous_phase.capitalize()} phase finished", 5000)

    def _on_theme_changed(self, theme: ThemeMode) -> None:
        app = QApplication.instance()
        if app is not None:
            apply_theme(app, theme)
        self.ring.set_mode(theme.mode)
        self.health_value.setText(f"{theme.health_status}% · {theme.mode.value}")
        if theme.mode != self._greeting_mode:
            self._greeting_mode = theme.mode
            self.greeting_label.setText(pick_greeting(theme, self.app_state.user_name, datetime.now().hour))

    def _update_clock(self) -> None:
        self.clock_label.setText(datetime.now().strftime("%H:%M"))

    def _add_todo(self) -> None:
        if self.app_state.add_todo(self.todo_input.text()):
            self.todo_input.clear()

    def _delete_selected_todo(self) -> None:
        item = self.todo_list.currentItem()
        if item is not None:
            self.app_state.remove_todo(item.data(TODO_ID_ROLE))

    def _on_todo_item_changed(self, item: QListWidgetItem) -> None:
        completed = item.checkState() == Qt.CheckState.Checked
        self.app_state.toggle_todo(item.data(TODO_ID_ROLE), completed)

    def _refresh_todos(self) -> None:
        self.todo_list.blockSignals(True)
        self.todo_list.clear()
        for todo in self.app_state.todos:
            item = QListWidgetItem(todo.text, self.todo_list)
            item.setData(TODO_ID_ROLE, todo.id)
            item.setFlags(item.flags() | Qt.ItemFlag.ItemIsUserCheckable)
            item.setCheckState(Qt.CheckState.Checked if todo.completed else Qt.CheckState.Unchecked)
        self.todo_list.blockSignals(False)

    def closeEvent(self, event) -> None:  # noqa: N802
        # The running countdown is already persisted; it is recovered on next launch
        self.audio.stop()
        self.clock_timer.stop()
        event.accept()
