"""Shared pytest fixtures for JudoTimer tests."""

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from judotimer.timer.engine import TimerEngine

from helpers import ManualScheduler, RecordingSoundSignal


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def settings_path(tmp_path, monkeypatch):
    """Keep every test away from the real settings file."""
    path = tmp_path / "settings.json"
    monkeypatch.setattr("judotimer.settings.SETTINGS_PATH", path)
    monkeypatch.setattr("judotimer.settings.APP_SUPPORT_DIR", tmp_path)
    yield path


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def sounds(scheduler):
    return RecordingSoundSignal(clock=scheduler)


@pytest.fixture
def engine(qapp, scheduler, sounds):
    """Fresh TimerEngine on a virtual clock with recorded sounds."""
    return TimerEngine(parent=None, sounds=sounds, scheduler=scheduler)
