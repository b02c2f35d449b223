"""Hardware-facing alert channels.

Each channel is a small class whose base implementation is a silent
no-op, so an alert always reaches every channel and simply does nothing
where the hardware is missing.  Query ``available`` to find out whether
a channel actually does something on this machine.

Channels
--------
Torch          Camera flash LED (Linux LED class device under sysfs).
Haptics        Vibration.  Desktop hardware has no motor, so the
               default real implementation plays a low buzz instead.
Chime          Audible alert sound.
IdleInhibitor  Keeps the screen from blanking while the app is open.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from ..audio.sounds import SoundManager


logger = logging.getLogger(__name__)

LEDS_DIR = Path("/sys/class/leds")
_TORCH_NAME_HINTS = ("flash", "torch")


# ── torch ─────────────────────────────────────────────────────────────────


class Torch:
    """No torch: ``set_on`` does nothing."""

    available = False

    def set_on(self, on: bool) -> None:
        pass


class SysfsTorch(Torch):
    """Flash LED exposed by the Linux LED class (``/sys/class/leds/<name>``).

    Writing ``max_brightness`` to ``brightness`` turns it on, ``0`` turns
    it off.  On most phones the node is root-owned unless a udev rule
    grants access; a failed write is logged and otherwise ignored.
    """

    available = True

    def __init__(self, led_dir: Path) -> None:
        self._led_dir = led_dir
        self._max_brightness = self._read_max_brightness()
        self._failed = False

    @property
    def name(self) -> str:
        return self._led_dir.name

    def set_on(self, on: bool) -> None:
        value = self._max_brightness if on else 0
        try:
            (self._led_dir / "brightness").write_text(f"{value}\n")
        except OSError as exc:
            # Log the first failure only; a flash fires up to 6 writes/alert
            if not self._failed:
                logger.warning("Torch could not be used: %s", exc)
            self._failed = True
        else:
            self._failed = False

    def _read_max_brightness(self) -> int:
        try:
            return int((self._led_dir / "max_brightness").read_text().strip())
        except (OSError, ValueError):
            return 1


def find_torch(leds_dir: Path | None = None) -> Torch:
    """Return a torch for the first flash-like LED, or the no-op torch."""
    root = leds_dir or LEDS_DIR
    if root.is_dir():
        for led_dir in sorted(root.iterdir()):
            name = led_dir.name.lower()
            if any(hint in name for hint in _TORCH_NAME_HINTS):
                if (led_dir / "brightness").exists():
                    logger.info("Using torch LED %s", led_dir.name)
                    return SysfsTorch(led_dir)
    logger.info("Torch is not available on this device")
    return Torch()


# ── haptics ───────────────────────────────────────────────────────────────


class Haptics:
    """No vibration hardware."""

    available = False

    def vibrate(self) -> None:
        pass


class SoundHaptics(Haptics):
    """Render a vibration as the synthesised ``buzz`` sound."""

    def __init__(self, sounds: SoundManager) -> None:
        self._sounds = sounds

    @property
    def available(self) -> bool:
        return self._sounds.has_sound("buzz")

    def vibrate(self) -> None:
        self._sounds.play("buzz")


# ── chime ─────────────────────────────────────────────────────────────────


class Chime:
    """No audio output."""

    available = False

    def play(self) -> None:
        pass


class SoundChime(Chime):
    def __init__(self, sounds: SoundManager) -> None:
        self._sounds = sounds

    @property
    def available(self) -> bool:
        return self._sounds.has_sound("chime")

    def play(self) -> None:
        self._sounds.play("chime")


# ── bundle ────────────────────────────────────────────────────────────────


@dataclass
class AlertDevices:
    """The three alert channels.  Defaults to all no-op."""

    torch: Torch = field(default_factory=Torch)
    haptics: Haptics = field(default_factory=Haptics)
    chime: Chime = field(default_factory=Chime)

    def describe(self) -> str:
        parts = [
            f"{name}={'yes' if getattr(self, name).available else 'no'}"
            for name in ("torch", "haptics", "chime")
        ]
        return ", ".join(parts)


def detect_devices(sounds: SoundManager, *, leds_dir: Path | None = None) -> AlertDevices:
    devices = AlertDevices(
        torch=find_torch(leds_dir),
        haptics=SoundHaptics(sounds),
        chime=SoundChime(sounds),
    )
    logger.info("Alert channels: %s", devices.describe())
    return devices


# ── screen idle suppression ──────────────────────────────────────────────

_SCREENSAVER_SERVICE = "org.freedesktop.ScreenSaver"
_SCREENSAVER_PATH = "/org/freedesktop/ScreenSaver"


class IdleInhibitor:
    """Ask the desktop session not to blank the screen.

    Uses the freedesktop ScreenSaver D-Bus interface.  Where there is no
    session bus (macOS, Windows, headless CI) ``enable`` logs and returns.
    """

    def __init__(self, app_name: str = "Debate Timer") -> None:
        self._app_name = app_name
        self._cookie: int | None = None

    @property
    def active(self) -> bool:
        return self._cookie is not None

    def enable(self, reason: str = "Timing a speech") -> None:
        if self._cookie is not None:
            return
        iface = self._interface()
        if iface is None:
            return
        reply = iface.call("Inhibit", self._app_name, reason)
        args = reply.arguments()
        if reply.errorName() or not args:
            logger.warning("Could not suppress screen idle: %s", reply.errorMessage())
            return
        self._cookie = int(args[0])
        logger.debug("Screen idle suppressed (cookie %d)", self._cookie)

    def disable(self) -> None:
        if self._cookie is None:
            return
        iface = self._interface()
        if iface is not None:
            from PyQt6.QtCore import QMetaType
            from PyQt6.QtDBus import QDBusArgument

            # UnInhibit takes a uint32; a bare int would marshal as int64
            iface.call("UnInhibit", QDBusArgument(self._cookie, QMetaType.Type.UInt.value))
        self._cookie = None

    def _interface(self):
        try:
            from PyQt6.QtDBus import QDBusConnection, QDBusInterface
        except ImportError:
            logger.info("QtDBus is not available; screen may sleep")
            return None
        bus = QDBusConnection.sessionBus()
        if not bus.isConnected():
            logger.info("No D-Bus session bus; screen may sleep")
            return None
        iface = QDBusInterface(
            _SCREENSAVER_SERVICE, _SCREENSAVER_PATH, _SCREENSAVER_SERVICE, bus,
        )
        if not iface.isValid():
            logger.info("No screensaver service on the session bus")
            return None
        return iface
