"""
Basic test fixtures for the weather clash test suite.

Provides random sources, an event manager and sample weather and stats.
"""

import sys
import os
import numpy as np
import pytest

# Add the project root to the Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from weatherclash.core.data.game_enums import WeatherCondition
from weatherclash.core.events.event_manager import EventManager
from tests.test_utils import TestDataBuilder


@pytest.fixture
def rng():
    """Create a seeded numpy generator for testing."""
    return np.random.default_rng(1234)


@pytest.fixture
def event_manager():
    """Create an event manager for testing."""
    return EventManager()


@pytest.fixture
def clear_hot_observation():
    """Hot clear-sky weather (Fire)."""
    return TestDataBuilder.observation(
        temperature=32.0, humidity=20.0, pressure=1010.0, wind_speed=3.0,
        clouds=0.0, condition=WeatherCondition.CLEAR, visibility=10000.0,
    )


@pytest.fixture
def storm_observation():
    """Thunderstorm weather (Lightning)."""
    return TestDataBuilder.observation(
        temperature=24.0, humidity=85.0, pressure=1002.0, wind_speed=12.0,
        clouds=90.0, condition=WeatherCondition.THUNDERSTORM, visibility=4000.0,
    )


@pytest.fixture
def neutral_stats():
    """Plain Shadow stats with no elemental advantage against each other."""
    return TestDataBuilder.stats()
