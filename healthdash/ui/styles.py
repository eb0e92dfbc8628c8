from __future__ import annotations

from string import Template

from PyQt6.QtWidgets import QApplication

from healthdash.core.theme import Mode, ThemeMode


PALETTES: dict[Mode, dict[str, str]] = {
    Mode.PEACEFUL: {
        "background": "#f4f1ee",
        "panel": "#f6e4d6",
        "text": "#333333",
        "muted": "#867b71",
        "accent": "#22c55e",
        "accent_hover": "#16a34a",
        "input": "#fff7f1",
        "font": "Roboto",
    },
    Mode.GLITCH: {
        "background": "#3b3b3b",
        "panel": "#4a4a48",
        "text": "#cccccc",
        "muted": "#9a9a9a",
        "accent": "#eab308",
        "accent_hover": "#ca8a04",
        "input": "#2f2f2f",
        "font": "Roboto",
    },
    Mode.NIGHTMARE: {
        "background": "#120606",
        "panel": "#2a0b0b",
        "text": "#ff0000",
        "muted": "#a33b3b",
        "accent": "#ef4444",
        "accent_hover": "#b91c1c",
        "input": "#1c0808",
        "font": "Creepster",
    },
}

THEME_QSS = Template(
    """
QWidget {
    background: $background;
    color: $text;
    font-family: "$font";
    font-size: 13px;
}

QLabel, QCheckBox {
    background: transparent;
}

QFrame#Panel {
    background: $panel;
    border: none;
    border-radius: 16px;
}

QLabel#Greeting {
    font-size: 24px;
    font-weight: 700;
}

QLabel#Clock {
    font-size: 42px;
    font-weight: 700;
}

QLabel#MutedText {
    color: $muted;
}

QPushButton {
    border: none;
    background: $panel;
    border-radius: 16px;
    padding: 8px 14px;
    font-weight: 600;
}

QPushButton:disabled {
    color: $muted;
}

QPushButton#PrimaryButton {
    background: $accent;
    color: #ffffff;
    border-radius: 22px;
    padding: 10px 24px;
}

QPushButton#PrimaryButton:hover {
    background: $accent_hover;
}

QLineEdit, QSpinBox {
    background: $input;
    border: none;
    border-radius: 16px;
    padding: 7px 10px;
}

QListWidget {
    background: $input;
    border: none;
    border-radius: 12px;
    padding: 6px;
}

QSlider::sub-page:horizontal {
    background: $accent;
    border-radius: 4px;
}
"""
)


def stylesheet_for(theme: ThemeMode) -> str:
    return THEME_QSS.substitute(PALETTES[theme.mode])


def apply_theme(app: QApplication, theme: ThemeMode) -> None:
    app.setStyleSheet(stylesheet_for(theme))
