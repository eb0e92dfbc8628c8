from __future__ import annotations

from PyQt6.QtCore import QRectF, Qt
from PyQt6.QtGui import QColor, QFont, QPainter, QPen
from PyQt6.QtWidgets import QWidget

from healthdash.core.theme import Mode
from healthdash.core.timer import TimerPhase, TimerState, idle_state


RING_COLORS = {
    Mode.PEACEFUL: QColor("#22c55e"),
    Mode.GLITCH: QColor("#eab308"),
    Mode.NIGHTMARE: QColor("#ef4444"),
}

PHASE_LABELS = {
    TimerPhase.IDLE: "Ready",
    TimerPhase.WORK: "Focus",
    TimerPhase.BREAK: "Break",
}


class CountdownRing(QWidget):
    """Paints a snapshot; never talks back to the engine."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setMinimumSize(220, 220)
        self._state: TimerState = idle_state()
        self._mode = Mode.PEACEFUL
        self._stroke = 12

    def set_mode(self, mode: Mode) -> None:
        self._mode = mode
        self.update()

    def set_state(self, state: TimerState) -> None:
        self._state = state
        self.update()

    def paintEvent(self, event) -> None:  # noqa: N802
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        side = min(self.width(), self.height()) - self._stroke * 2
        rect = QRectF(
            (self.width() - side) / 2,
            (self.height() - side) / 2,
            side,
            side,
        )

        painter.setPen(QPen(QColor(255, 255, 255, 26), self._stroke))
        painter.drawEllipse(rect)

        color = RING_COLORS[self._mode]
        if self._state.is_paused:
            color = QColor(color)
            color.setAlpha(120)
        pen = QPen(color, self._stroke, Qt.PenStyle.SolidLine, Qt.PenCapStyle.RoundCap)
        painter.setPen(pen)
        # Arc shrinks clockwise from 12 o'clock as the phase elapses
        span = int(-360 * 16 * (1.0 - self._state.progress)) if self._state.is_active else 0
        painter.drawArc(rect, 90 * 16, span)

        painter.setPen(self.palette().windowText().color())
        time_font = QFont(self.font())
        time_font.setPointSize(max(12, int(side / 7)))
        time_font.setBold(True)
        painter.setFont(time_font)
        painter.drawText(rect, Qt.AlignmentFlag.AlignCenter, self._state.remaining_text)

        label_font = QFont(self.font())
        label_font.setPointSize(max(8, int(side / 18)))
        painter.setFont(label_font)
        label_rect = QRectF(rect.left(), rect.center().y() + side / 8, rect.width(), side / 6)
        label = PHASE_LABELS[self._state.phase]
        if self._state.is_paused:
            label = f"{label} (paused)"
        painter.drawText(label_rect, Qt.AlignmentFlag.AlignCenter, label)
        painter.end()
