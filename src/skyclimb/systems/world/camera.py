"""
camera.py
---------
World/camera mapping, distance ratchet and the elimination rule.

Coordinate System
-----------------
World y is unbounded and decreases upward. The camera offset is the
vertical translation from world space to the fixed viewport:

    screen_y = world_y + offset

WorldState is owned by the camera: the simulation reads it, only the
camera mutates it.
"""

import math
from dataclasses import dataclass

from skyclimb.core.debug.debug_logger import DebugLogger


@dataclass
class WorldState:
    """Run progress. Distance is in meters, everything else in world pixels."""
    distance: int = 0
    camera_offset: float = 0.0
    speed_multiplier: float = 1.0
    highest_y: float = 0.0
    climbing_started: bool = False


class CameraMapper:
    """Tracks the player upward and keeps the run's progress markers."""

    def __init__(self, canvas_cfg, world_cfg, fall_limit: float):
        self.viewport_height = canvas_cfg.height
        self.midpoint_y = canvas_cfg.midpoint_y
        self.distance_scale = world_cfg.distance_scale
        self.fall_limit = fall_limit
        self.state = WorldState()

    def reset(self, spawn_y: float, base_multiplier: float):
        self.state = WorldState(speed_multiplier=base_multiplier, highest_y=spawn_y)

    # ===========================================================
    # Coordinate Mapping
    # ===========================================================
    def to_screen_y(self, world_y: float) -> float:
        return world_y + self.state.camera_offset

    def to_world_y(self, screen_y: float) -> float:
        return screen_y - self.state.camera_offset

    def is_below_view(self, world_y: float, margin: float) -> bool:
        """True if world_y sits more than margin below the viewport bottom."""
        return self.to_screen_y(world_y) > self.viewport_height + margin

    @property
    def view_bottom_y(self) -> float:
        """World y of the bottom edge of the viewport."""
        return self.to_world_y(self.viewport_height)

    # ===========================================================
    # Per-tick Updates
    # ===========================================================
    def follow(self, player_y: float):
        """Move the camera while the player is above the midpoint and ratchet distance."""
        if player_y >= self.midpoint_y:
            return

        self.state.camera_offset = self.midpoint_y - player_y
        meters = math.floor(self.state.camera_offset / self.distance_scale)
        if meters > self.state.distance:
            self.state.distance = meters

    def track_progress(self, player_y: float, landed: bool):
        """Tighten the highest-point marker and latch the climb on the first landing."""
        if player_y < self.state.highest_y:
            self.state.highest_y = player_y

        if landed and not self.state.climbing_started:
            self.state.climbing_started = True
            DebugLogger.state("Climbing started", category="camera")

    def set_multiplier(self, multiplier: float):
        self.state.speed_multiplier = multiplier

    def fall_distance(self, player_y: float) -> float:
        return player_y - self.state.highest_y

    def is_eliminated(self, player_y: float) -> bool:
        """Game over once climbing started and the player fell too far below the best point."""
        if not self.state.climbing_started:
            return False
        return self.fall_distance(player_y) > self.fall_limit
