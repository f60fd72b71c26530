"""
Core services exports.

Provides the event system, configuration loading and input handling.
"""

from skyclimb.core.services.config_manager import load_config
from skyclimb.core.services.event_manager import (
    EventManager,
    BaseEvent,
    RunStartedEvent,
    DifficultyChangedEvent,
    GameOverEvent,
)
from skyclimb.core.services.input_manager import InputManager

__all__ = [
    # Config
    'load_config',
    # Events
    'EventManager',
    'BaseEvent',
    'RunStartedEvent',
    'DifficultyChangedEvent',
    'GameOverEvent',
    # Input
    'InputManager',
]
