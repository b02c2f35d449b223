"""Timer preferences with pluggable key-value persistence.

Only two values are stored: the speech length and the alert type.
They are stored at::

    ~/.debatetimer/settings.json

Usage::

    store = JsonSettingsStore()
    config = TimerConfig.load(store)
    config.end_minutes = 7
    config.save(store)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any


logger = logging.getLogger(__name__)

APP_DATA_DIR = Path.home() / ".debatetimer"
SETTINGS_PATH = APP_DATA_DIR / "settings.json"

END_MINUTES_CHOICES = (5, 7)
DEFAULT_END_MINUTES = 5

END_MINUTES_KEY = "end"
SIGNAL_MODE_KEY = "signal"


class SignalMode(Enum):
    FLASH = "flash"
    VIBRATE = "vibrate"
    SOUND = "sound"

    @property
    def label(self) -> str:
        return self.value.capitalize()


# ── stores ────────────────────────────────────────────────────────────────


class SettingsStore:
    """Minimal key-value interface the preferences are persisted through."""

    def get(self, key: str, default: Any = None) -> Any:
        raise NotImplementedError

    def set(self, key: str, value: Any) -> None:
        raise NotImplementedError


class MemorySettingsStore(SettingsStore):
    """Dict-backed store; nothing survives the process."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value


class JsonSettingsStore(SettingsStore):
    """Store backed by a single JSON object on disk.

    The file is re-read on every ``get`` and rewritten on every ``set``;
    with two keys there is nothing worth caching.  A failed write is
    logged and dropped; the caller keeps its in-memory values.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path or SETTINGS_PATH

    def get(self, key: str, default: Any = None) -> Any:
        return self._read().get(key, default)

    def set(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value
        path = self.path
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not save settings to %s: %s", path, exc)

    def _read(self) -> dict[str, Any]:
        path = self.path
        if not path.exists():
            return {}
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Could not read settings from %s: %s", path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring malformed settings file %s", path)
            return {}
        return data


# ── config ────────────────────────────────────────────────────────────────


@dataclass
class TimerConfig:
    """The user's timer preferences, shared by the controller and the UI."""

    end_minutes: int = DEFAULT_END_MINUTES
    signal_mode: SignalMode = SignalMode.FLASH

    @classmethod
    def load(cls, store: SettingsStore) -> TimerConfig:
        """Read both preferences, falling back to defaults for bad values."""
        end = store.get(END_MINUTES_KEY, DEFAULT_END_MINUTES)
        # JSON hands back 5.0 or true for hand-edited files; only ints count
        if not isinstance(end, int) or isinstance(end, bool) or end not in END_MINUTES_CHOICES:
            logger.warning("Unsupported speech length %r, using default", end)
            end = DEFAULT_END_MINUTES

        raw_mode = store.get(SIGNAL_MODE_KEY, SignalMode.FLASH.value)
        try:
            mode = SignalMode(raw_mode)
        except ValueError:
            logger.warning("Unknown alert type %r, using default", raw_mode)
            mode = SignalMode.FLASH

        return cls(end_minutes=end, signal_mode=mode)

    def save(self, store: SettingsStore) -> None:
        store.set(END_MINUTES_KEY, self.end_minutes)
        store.set(SIGNAL_MODE_KEY, self.signal_mode.value)
