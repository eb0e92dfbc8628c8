from __future__ import annotations

"""What should be audible for a given timer snapshot and theme mode."""

from enum import Enum

from healthdash.core.theme import Mode
from healthdash.core.timer import TimerState


FAST_TICK_THRESHOLD_SEC = 60

TICK_SOUND = "audio/tick.wav"
FAST_TICK_SOUND = "audio/fast_tick.wav"
PEACEFUL_ALARM = "audio/alarm_peaceful.wav"
NIGHTMARE_ALARM = "audio/alarm_nightmare.wav"

TICK_VOLUME = 0.2
FAST_TICK_VOLUME = 0.3
ALARM_VOLUME = 0.5


class AudioCue(str, Enum):
    SILENT = "silent"
    TICK = "tick"
    FAST_TICK = "fast_tick"


def ticking_cue(mode: Mode, state: TimerState, sound_enabled: bool) -> AudioCue:
    # Ticking only belongs to nightmare mode, and only while counting down
    if not sound_enabled or mode != Mode.NIGHTMARE or not state.is_counting:
        return AudioCue.SILENT
    if state.remaining_seconds <= FAST_TICK_THRESHOLD_SEC:
        return AudioCue.FAST_TICK
    return AudioCue.TICK


def cue_sound(cue: AudioCue) -> tuple[str, float] | None:
    if cue == AudioCue.TICK:
        return TICK_SOUND, TICK_VOLUME
    if cue == AudioCue.FAST_TICK:
        return FAST_TICK_SOUND, FAST_TICK_VOLUME
    return None


def alarm_for(mode: Mode) -> str:
    return NIGHTMARE_ALARM if mode == Mode.NIGHTMARE else PEACEFUL_ALARM
