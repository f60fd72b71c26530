"""
player.py
---------
Player entity: a box that falls, bounces off platforms and wraps around
the horizontal edges of the world.

Coordinate System
-----------------
World coordinates with y growing downward. (x, y) is the top-left corner,
so the feet of the player sit at y + height.
"""

from dataclasses import dataclass

from skyclimb.entities.entity_types import Facing


@dataclass(frozen=True)
class PlayerView:
    """Read-only copy of the player handed to renderers."""
    x: float
    y: float
    width: float
    height: float
    vx: float
    vy: float
    facing: Facing
    grounded: bool


class PlayerEntity:
    """Mutable player body. Owned by one Simulation, mutated by the physics phase only."""

    __slots__ = ("x", "y", "vx", "vy", "width", "height", "facing", "grounded")

    def __init__(self, x: float, y: float, width: float, height: float):
        self.x = float(x)
        self.y = float(y)
        self.vx = 0.0
        self.vy = 0.0
        self.width = width
        self.height = height
        self.facing = Facing.RIGHT
        self.grounded = False

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def right(self) -> float:
        return self.x + self.width

    def snapshot(self) -> PlayerView:
        return PlayerView(
            x=self.x, y=self.y, width=self.width, height=self.height,
            vx=self.vx, vy=self.vy, facing=self.facing, grounded=self.grounded,
        )

    def __repr__(self):
        return (f"PlayerEntity(x={self.x:.1f}, y={self.y:.1f}, "
                f"vx={self.vx:.1f}, vy={self.vy:.1f}, grounded={self.grounded})")
