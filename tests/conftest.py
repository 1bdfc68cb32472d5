"""Shared pytest fixtures for CircuitTimer tests."""

import os
import sys
import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtCore import QCoreApplication

from circuittimer.database.db import configure_engine, init_db
from circuittimer.timer.engine import TimerEngine
from circuittimer.timer.orchestrator import WorkoutOrchestrator

from helpers import FakeClock


@pytest.fixture(scope="session")
def qapp():
    """A single QCoreApplication instance shared across the entire test run."""
    app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def engine(clock):
    """TimerEngine on the fake clock."""
    return TimerEngine(clock)


@pytest.fixture
def orchestrator(qapp, clock):
    """Fresh WorkoutOrchestrator on the fake clock with DB logging on."""
    return WorkoutOrchestrator(parent=None, clock=clock, db_enabled=True)


@pytest.fixture
def orchestrator_no_db(qapp, clock):
    """Fresh WorkoutOrchestrator with DB disabled (pure state-machine tests)."""
    return WorkoutOrchestrator(parent=None, clock=clock, db_enabled=False)
