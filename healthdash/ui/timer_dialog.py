from __future__ import annotations

from PyQt6.QtWidgets import (
    QCheckBox,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QLabel,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from healthdash.core.timer import BREAK_MINUTES_RANGE, WORK_MINUTES_RANGE, TimerConfig


class TimerConfigDialog(QDialog):
    """Collects a work/break configuration; ``config()`` is only valid after accept."""

    def __init__(self, initial: TimerConfig, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Pomodoro Timer")
        self.setModal(True)

        # Ranges are wider than the valid bounds so validation can report them
        self.work_spin = QSpinBox()
        self.work_spin.setRange(0, 999)
        self.work_spin.setSuffix(" min")
        self.work_spin.setValue(initial.work_minutes)

        self.break_spin = QSpinBox()
        self.break_spin.setRange(0, 999)
        self.break_spin.setSuffix(" min")
        self.break_spin.setValue(initial.break_minutes)

        self.auto_repeat_check = QCheckBox("Repeat work/break cycle")
        self.auto_repeat_check.setChecked(initial.auto_repeat)

        self.work_error = QLabel()
        self.break_error = QLabel()
        for label in (self.work_error, self.break_error):
            label.setObjectName("MutedText")
            label.setVisible(False)

        form = QFormLayout()
        form.addRow(f"Work ({WORK_MINUTES_RANGE[0]}-{WORK_MINUTES_RANGE[1]}):", self.work_spin)
        form.addRow("", self.work_error)
        form.addRow(f"Break ({BREAK_MINUTES_RANGE[0]}-{BREAK_MINUTES_RANGE[1]}):", self.break_spin)
        form.addRow("", self.break_error)
        form.addRow("", self.auto_repeat_check)

        buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel)
        buttons.button(QDialogButtonBox.StandardButton.Ok).setText("Start")
        buttons.accepted.connect(self._on_accept)
        buttons.rejected.connect(self.reject)

        layout = QVBoxLayout(self)
        layout.addLayout(form)
        layout.addWidget(buttons)

    def config(self) -> TimerConfig:
        return TimerConfig(
            work_minutes=self.work_spin.value(),
            break_minutes=self.break_spin.value(),
            auto_repeat=self.auto_repeat_check.isChecked(),
        )

    def _on_accept(self) -> None:
        errors = self.config().validate()
        self._show_error(self.work_error, errors.get("work_minutes"))
        self._show_error(self.break_error, errors.get("break_minutes"))
        if not errors:
            self.accept()

    @staticmethod
    def _show_error(label: QLabel, message: str | None) -> None:
        label.setText(message or "")
        label.setVisible(bool(message))
