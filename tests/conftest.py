"""
conftest.py
-----------
Shared pytest configuration and fixtures for SkyClimb tests.

Contains:
- Headless pygame setup (dummy video/audio drivers)
- Common fixtures used across multiple test modules
- Pytest configuration and hooks
"""

import os
import sys
from unittest.mock import MagicMock

import pytest

# Add src directory to Python path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

# pygame must never open a real window or audio device under test
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from skyclimb.core.debug.debug_logger import LoggerConfig  # noqa: E402
from skyclimb.core.runtime.sim_config import SimulationConfig  # noqa: E402
from skyclimb.core.runtime.simulation import Simulation  # noqa: E402
from skyclimb.core.services.event_manager import EventManager  # noqa: E402


@pytest.fixture(autouse=True)
def quiet_logger(monkeypatch):
    """Keep test output free of console diagnostics."""
    monkeypatch.setattr(LoggerConfig, "ENABLE_LOGGING", False)


@pytest.fixture
def config():
    """Default simulation configuration."""
    return SimulationConfig()


@pytest.fixture
def events():
    """Real event manager, for tests that assert on delivered events."""
    return EventManager()


@pytest.fixture
def mock_event_manager():
    """Mock for EventManager."""
    event_manager = MagicMock()
    event_manager.subscribe = MagicMock()
    event_manager.dispatch = MagicMock()
    event_manager.unsubscribe = MagicMock()
    return event_manager


@pytest.fixture
def make_sim():
    """
    Factory for simulations that always releases the process-wide run slot.

    Usage:
        sim = make_sim(events=my_events)
    """
    created = []

    def _make(config=None, events=None):
        sim = Simulation(config, events=events)
        created.append(sim)
        return sim

    yield _make

    for sim in created:
        if not sim.is_busy:
            sim.stop()


@pytest.fixture
def running_sim(make_sim):
    """A started simulation with default settings."""
    sim = make_sim()
    sim.start()
    return sim


@pytest.fixture
def midpoint_random(monkeypatch):
    """
    Make platform draws deterministic: every uniform draw lands on the
    midpoint of its range and moving platforms always start to the right.
    """
    monkeypatch.setattr("random.uniform", lambda a, b: (a + b) / 2)
    monkeypatch.setattr("random.choice", lambda seq: seq[-1])


# Pytest configuration
def pytest_configure(config):
    """Custom pytest configuration."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")


def pytest_collection_modifyitems(config, items):
    """Add the unit marker to everything not marked integration."""
    for item in items:
        if "integration" not in item.keywords:
            item.add_marker(pytest.mark.unit)
