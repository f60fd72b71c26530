"""Entity types."""

from enum import Enum


class Facing(Enum):
    """Horizontal direction the player sprite faces."""
    LEFT = "left"
    RIGHT = "right"


class PlatformKind(Enum):
    """
    Platform behaviour.

    STATIC platforms never move; MOVING platforms oscillate horizontally
    around the x they were spawned at.
    """
    STATIC = "static"
    MOVING = "moving"
