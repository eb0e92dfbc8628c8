from __future__ import annotations

from PyQt6.QtCore import QObject
from PyQt6.QtMultimedia import QSoundEffect

from healthdash.core.app_state import AppState
from healthdash.core.assets import load_sound
from healthdash.core.audio import ALARM_VOLUME, AudioCue, alarm_for, cue_sound, ticking_cue
from healthdash.core.timer import PomodoroTimer, TimerState


class AudioCuePlayer(QObject):
    """Plays ticking and alarm sounds for the timer; reads state, never mutates it."""

    def __init__(self, timer: PomodoroTimer, app_state: AppState, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._timer = timer
        self._app_state = app_state
        self._cue = AudioCue.SILENT
        self._loop: QSoundEffect | None = None

        timer.state_changed.connect(self._on_state_changed)
        timer.completed.connect(self._on_completed)
        app_state.theme_changed.connect(lambda _theme: self._on_state_changed(self._timer.state))
        app_state.settings_changed.connect(lambda _key, _value: self._on_state_changed(self._timer.state))

    def _on_state_changed(self, state: TimerState) -> None:
        cue = ticking_cue(self._app_state.theme.mode, state, self._app_state.sound_enabled)
        if cue == self._cue:
            return
        self._cue = cue
        if self._loop is not None:
            self._loop.stop()
            self._loop = None

        sound = cue_sound(cue)
        if sound is None:
            return
        relative, volume = sound
        effect = load_sound(relative)
        if effect is None:
            return
        effect.setLoopCount(QSoundEffect.Loop.Infinite.value)
        effect.setVolume(volume)
        effect.play()
        self._loop = effect

    def _on_completed(self, _previous_phase: str) -> None:
        if not self._app_state.sound_enabled:
            return
        alarm = load_sound(alarm_for(self._app_state.theme.mode))
        if alarm is None:
            return
        alarm.setLoopCount(1)
        alarm.setVolume(ALARM_VOLUME)
        alarm.play()

    def stop(self) -> None:
        if self._loop is not None:
            self._loop.stop()
            self._loop = None
        self._cue = AudioCue.SILENT
