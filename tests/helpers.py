"""Shared test helpers for Debate Timer."""

from debatetimer.alerts.devices import AlertDevices, Chime, Haptics, Torch
from debatetimer.timer.engine import TimerController


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class FakeClock:
    """Manually advanced stand-in for ``time.monotonic``."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingTorch(Torch):
    available = True

    def __init__(self):
        self.calls: list[bool] = []

    def set_on(self, on: bool) -> None:
        self.calls.append(on)

    @property
    def flashes(self) -> int:
        return self.calls.count(True)


class RecordingHaptics(Haptics):
    available = True

    def __init__(self):
        self.count = 0

    def vibrate(self) -> None:
        self.count += 1


class RecordingChime(Chime):
    available = True

    def __init__(self):
        self.count = 0

    def play(self) -> None:
        self.count += 1


class FakeSounds:
    """Duck-typed SoundManager that records what was played."""

    def __init__(self, names=("chime", "buzz")):
        self.names = set(names)
        self.played: list[str] = []

    def has_sound(self, name: str) -> bool:
        return name in self.names

    def play(self, name: str) -> None:
        self.played.append(name)


class RecordingInhibitor:
    def __init__(self):
        self.enabled = 0
        self.disabled = 0

    def enable(self, reason: str = "") -> None:
        self.enabled += 1

    def disable(self) -> None:
        self.disabled += 1


def recording_devices() -> AlertDevices:
    return AlertDevices(
        torch=RecordingTorch(),
        haptics=RecordingHaptics(),
        chime=RecordingChime(),
    )


def tick_at(controller: TimerController, clock: FakeClock, elapsed: float) -> None:
    """Tick as if *elapsed* seconds have passed since the session started."""
    clock.now = controller.start_instant + elapsed
    controller.tick()


def run_until(
    controller: TimerController,
    clock: FakeClock,
    until: float,
    *,
    start: float = 0.0,
) -> None:
    """Tick every 0.1 s from *start* to *until* (inclusive) or until stopped."""
    origin = controller.start_instant
    step = round(start * 10)
    while step <= round(until * 10):
        if not controller.is_running:
            return
        clock.now = origin + step / 10
        controller.tick()
        step += 1
