"""Alert sound synthesis and playback using numpy + QSoundEffect.

All sounds are generated programmatically as WAV files using sine-wave
synthesis with ADSR envelopes.  Files are cached to disk so subsequent
app launches are instant.

Sound names
-----------
- ``chime`` : bright three-ping cue, played for Sound alerts
- ``buzz``  : low pulsing hum, stands in for a vibration motor

If the cache directory cannot be written the affected sounds are simply
not loaded, and the channels that use them report themselves unavailable.
"""

from __future__ import annotations

import io
import logging
import wave
from pathlib import Path
from typing import Callable

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect

from ..settings import APP_DATA_DIR


logger = logging.getLogger(__name__)

# ── paths ────────────────────────────────────────────────────────────────

SOUNDS_DIR = APP_DATA_DIR / "sounds"

SOUND_NAMES = (
    "chime",
    "buzz",
)

SAMPLE_RATE = 44100

# Alerts always play at full volume
ALERT_VOLUME = 1.0


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _make_envelope(
    length: int,
    attack: int = 200,
    decay: int = 400,
    sustain_level: float = 0.7,
    release: int = 800,
) -> np.ndarray:
    """ADSR envelope (all durations in samples)."""
    env = np.ones(length, dtype=np.float64)
    a = min(attack, length)
    if a > 0:
        env[:a] = np.linspace(0.0, 1.0, a)
    d_end = min(a + decay, length)
    if decay > 0 and d_end > a:
        env[a:d_end] = np.linspace(1.0, sustain_level, d_end - a)
    s_end = max(length - release, d_end)
    if s_end > d_end:
        env[d_end:s_end] = sustain_level
    if release > 0 and s_end < length:
        env[s_end:] = np.linspace(sustain_level, 0.0, length - s_end)
    return env


def _sine(freq: float, duration_s: float) -> np.ndarray:
    """Pure sine wave at *freq* Hz for *duration_s* seconds."""
    t = np.linspace(0, duration_s, int(SAMPLE_RATE * duration_s), endpoint=False)
    return np.sin(2 * np.pi * freq * t)


def _silence(duration_s: float) -> np.ndarray:
    return np.zeros(int(SAMPLE_RATE * duration_s))


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """Convert a float64 numpy array (-1..1) to 16-bit PCM WAV bytes."""
    samples = np.clip(samples, -1.0, 1.0)
    int_samples = (samples * 32767).astype(np.int16)

    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(int_samples.tobytes())
    return buf.getvalue()


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND GENERATORS
# ═══════════════════════════════════════════════════════════════════════════


def _generate_chime() -> bytes:
    """Three quick pings on E6 with a ringing last note.

    Loud and high enough to cut through a speaker mid-sentence.
    """
    freq = 1318.51  # E6
    parts: list[np.ndarray] = []
    for i in range(3):
        held = 0.30 if i == 2 else 0.09
        tone = _sine(freq, held) * 0.55 + _sine(freq * 2, held) * 0.12
        env = _make_envelope(
            len(tone), attack=60, decay=300, sustain_level=0.45,
            release=int(len(tone) * 0.6),
        )
        parts.append(tone * env)
        if i < 2:
            parts.append(_silence(0.06))
    parts.append(_silence(0.05))
    return _to_wav_bytes(np.concatenate(parts))


def _generate_buzz() -> bytes:
    """Two short 150 Hz pulses, roughly what a phone's motor sounds like."""
    pulse_dur = 0.18
    pulse = _sine(150.0, pulse_dur) * 0.7 + _sine(300.0, pulse_dur) * 0.15
    # Amplitude wobble gives the rattling texture of a vibration motor
    wobble = 0.75 + 0.25 * _sine(25.0, pulse_dur)
    env = _make_envelope(len(pulse), attack=300, decay=600, sustain_level=0.8, release=900)
    pulse = pulse * wobble * env
    return _to_wav_bytes(np.concatenate([pulse, _silence(0.08), pulse, _silence(0.05)]))


_GENERATORS: dict[str, Callable[[], bytes]] = {
    "chime": _generate_chime,
    "buzz": _generate_buzz,
}


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND MANAGER
# ═══════════════════════════════════════════════════════════════════════════


class SoundManager(QObject):
    """Manages sound synthesis, caching, and playback.

    Usage::

        mgr = SoundManager(parent=self)
        if mgr.has_sound("chime"):
            mgr.play("chime")
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
    ) -> None:
        super().__init__(parent)
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._effects: dict[str, QSoundEffect] = {}

        self._ensure_wav_files()
        self._load_effects()

    # ── public API ────────────────────────────────────────────────────

    def has_sound(self, name: str) -> bool:
        return name in self._effects

    def play(self, name: str) -> None:
        """Play a sound by name.  No-op if the name is unknown or not loaded."""
        effect = self._effects.get(name)
        if effect is not None:
            effect.play()

    # ── internal ──────────────────────────────────────────────────────

    def _ensure_wav_files(self) -> None:
        """Generate any missing WAV files to the cache directory."""
        try:
            self._sounds_dir.mkdir(parents=True, exist_ok=True)
            for name, gen_fn in _GENERATORS.items():
                path = self._sounds_dir / f"{name}.wav"
                if not path.exists():
                    path.write_bytes(gen_fn())
        except OSError as exc:
            logger.warning("Could not write alert sounds to %s: %s", self._sounds_dir, exc)

    def _load_effects(self) -> None:
        """Create QSoundEffect instances from cached WAV files."""
        for name in SOUND_NAMES:
            path = self._sounds_dir / f"{name}.wav"
            if path.is_file():
                effect = QSoundEffect(self)
                effect.setSource(QUrl.fromLocalFile(str(path)))
                effect.setVolume(ALERT_VOLUME)
                self._effects[name] = effect
