"""
World progression exports.

Provides the camera/world mapper and the difficulty ladder.
"""

from skyclimb.systems.world.camera import CameraMapper, WorldState
from skyclimb.systems.world.difficulty_curve import DifficultyCurve

__all__ = [
    'CameraMapper',
    'WorldState',
    'DifficultyCurve',
]
