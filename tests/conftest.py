"""Shared pytest fixtures for Debate Timer tests."""

import os
import sys

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from PyQt6.QtWidgets import QApplication

from debatetimer.alerts.dispatcher import AlertDispatcher
from debatetimer.settings import TimerConfig
from debatetimer.timer.engine import TimerController

from helpers import FakeClock, recording_devices


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep every test away from the real ~/.debatetimer directory."""
    monkeypatch.setattr("debatetimer.settings.SETTINGS_PATH", tmp_path / "settings.json")
    yield


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def config():
    """Default preferences: 5 minutes, Flash."""
    return TimerConfig()


@pytest.fixture
def devices():
    return recording_devices()


@pytest.fixture
def dispatcher(qapp, config, devices):
    return AlertDispatcher(config, devices)


@pytest.fixture
def controller(qapp, config, dispatcher, clock):
    """Fresh TimerController driven by a fake clock."""
    ctrl = TimerController(config, dispatcher, clock=clock)
    yield ctrl
    ctrl.stop()
    dispatcher.cancel_pending()
