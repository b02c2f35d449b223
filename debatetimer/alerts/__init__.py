"""Alert channels and sequencing."""

from .devices import (
    AlertDevices,
    Torch,
    SysfsTorch,
    Haptics,
    SoundHaptics,
    Chime,
    SoundChime,
    IdleInhibitor,
    find_torch,
    detect_devices,
)
from .dispatcher import AlertDispatcher, DeferredScheduler

__all__ = [
    "AlertDevices",
    "Torch",
    "SysfsTorch",
    "Haptics",
    "SoundHaptics",
    "Chime",
    "SoundChime",
    "IdleInhibitor",
    "find_torch",
    "detect_devices",
    "AlertDispatcher",
    "DeferredScheduler",
]
