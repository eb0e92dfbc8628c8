from __future__ import annotations

"""Sound asset lookup with an in-memory cache."""

import logging
from pathlib import Path

from PyQt6.QtCore import QUrl
from PyQt6.QtMultimedia import QSoundEffect


logger = logging.getLogger(__name__)

ASSETS_DIR = Path(__file__).resolve().parents[2] / "assets"
_SOUND_CACHE: dict[str, QSoundEffect | None] = {}


def get_asset_path(relative: str) -> Path:
    return ASSETS_DIR / relative


def load_sound(relative: str) -> QSoundEffect | None:
    """Return a cached ``QSoundEffect``, or ``None`` when the file is missing."""
    if relative in _SOUND_CACHE:
        return _SOUND_CACHE[relative]

    path = get_asset_path(relative)
    if not path.exists():
        logger.info("Sound asset %s not found; cue stays silent", relative)
        _SOUND_CACHE[relative] = None
        return None

    effect = QSoundEffect()
    effect.setSource(QUrl.fromLocalFile(str(path)))
    _SOUND_CACHE[relative] = effect
    return effect
