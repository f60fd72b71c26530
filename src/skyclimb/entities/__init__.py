"""
Entity module exports.

Exports:
    PlayerEntity   - The climbing player body
    PlatformEntity - Static or moving platform
    Facing         - LEFT / RIGHT
    PlatformKind   - STATIC / MOVING
"""

from skyclimb.entities.entity_types import Facing, PlatformKind
from skyclimb.entities.player import PlayerEntity, PlayerView
from skyclimb.entities.platform import PlatformEntity, PlatformView

__all__ = [
    'Facing',
    'PlatformKind',
    'PlayerEntity',
    'PlayerView',
    'PlatformEntity',
    'PlatformView',
]
