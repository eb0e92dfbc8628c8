from __future__ import annotations

"""Health score to theme mode resolution and greeting text."""

import random
from dataclasses import dataclass, replace
from enum import Enum


class Mode(str, Enum):
    PEACEFUL = "peaceful"
    GLITCH = "glitch"
    NIGHTMARE = "nightmare"


PEACEFUL_THRESHOLD = 80
GLITCH_THRESHOLD = 40

MOTIVATIONAL_GREETINGS = (
    "Ready to conquer the day, {name}?",
    "Shine brighter than ever today, {name}.",
    "Trust yourself and move forward, {name}.",
    "Small wins lead to great joy, {name}.",
    "Today's effort shapes tomorrow's you, {name}.",
    "Be brave today, {name}. You've got this.",
    "Take a breath and move at your own pace, {name}.",
    "Today is a fresh start, {name}.",
    "Small steps lead to great places, {name}.",
    "Celebrate your small wins today, {name}.",
    "Stay confident, {name}. You can do anything.",
    "Paint today with your colors, {name}.",
)


@dataclass(frozen=True)
class ThemeMode:
    mode: Mode
    health_status: int
    font_family: str
    background_dim: float
    text_glitch: bool
    show_horror_overlay: bool
    greeting_template: str
    sound_enabled: bool


PEACEFUL_MODE = ThemeMode(
    mode=Mode.PEACEFUL,
    health_status=100,
    font_family="Roboto",
    background_dim=0.0,
    text_glitch=False,
    show_horror_overlay=False,
    greeting_template="Good {time_of_day}, {name}",
    sound_enabled=False,
)

GLITCH_MODE = ThemeMode(
    mode=Mode.GLITCH,
    health_status=60,
    font_family="Roboto",
    background_dim=0.5,
    text_glitch=True,
    show_horror_overlay=True,
    greeting_template="Good {time_of_day}, {name}",
    sound_enabled=False,
)

NIGHTMARE_MODE = ThemeMode(
    mode=Mode.NIGHTMARE,
    health_status=20,
    font_family="Creepster",
    background_dim=0.7,
    text_glitch=True,
    show_horror_overlay=True,
    greeting_template="SYSTEM FAILURE... RUN {name}...",
    sound_enabled=True,
)


def resolve_mode(health_status: int) -> ThemeMode:
    if health_status >= PEACEFUL_THRESHOLD:
        return replace(PEACEFUL_MODE, health_status=health_status)
    if health_status >= GLITCH_THRESHOLD:
        return replace(GLITCH_MODE, health_status=health_status)
    return replace(NIGHTMARE_MODE, health_status=health_status)


def time_of_day(hour: int) -> str:
    if 5 <= hour < 12:
        return "morning"
    if 12 <= hour < 18:
        return "afternoon"
    return "evening"


def format_greeting(template: str, name: str, hour: int = 12) -> str:
    return template.replace("{name}", name).replace("{time_of_day}", time_of_day(hour))


def pick_greeting(theme: ThemeMode, name: str, hour: int, rng: random.Random | None = None) -> str:
    """Nightmare keeps its fixed template; calmer modes rotate motivational lines."""
    if theme.mode == Mode.NIGHTMARE:
        return format_greeting(theme.greeting_template, name, hour)
    rng = rng or random
    return format_greeting(rng.choice(MOTIVATIONAL_GREETINGS), name, hour)
