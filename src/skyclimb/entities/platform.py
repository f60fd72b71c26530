"""
platform.py
-----------
Platform entity. Static platforms are plain rectangles; moving platforms
carry their own oscillation state and advance it once per tick.
"""

from dataclasses import dataclass

from skyclimb.entities.entity_types import PlatformKind


@dataclass(frozen=True)
class PlatformView:
    """Read-only copy of a platform handed to renderers."""
    x: float
    y: float
    width: float
    height: float
    kind: PlatformKind


class PlatformEntity:
    """
    A single platform. Identity is the object itself; the registry keeps
    no external keys.
    """

    __slots__ = ("x", "y", "width", "height", "kind",
                 "speed", "direction", "origin_x", "move_range")

    def __init__(self, x: float, y: float, width: float, height: float,
                 kind: PlatformKind = PlatformKind.STATIC,
                 speed: float = 0.0, direction: int = 1, move_range: float = 0.0):
        if direction not in (-1, 1):
            raise ValueError(f"direction must be -1 or 1, got {direction}")

        self.x = float(x)
        self.y = float(y)
        self.width = width
        self.height = height
        self.kind = kind
        self.speed = speed
        self.direction = direction
        self.origin_x = self.x
        self.move_range = move_range

    @property
    def is_moving(self) -> bool:
        return self.kind is PlatformKind.MOVING

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def right(self) -> float:
        return self.x + self.width

    # ===========================================================
    # Kinematics
    # ===========================================================
    def update(self, world_width: float):
        """Advance one tick of horizontal oscillation (moving kind only)."""
        if not self.is_moving:
            return

        self.x += self.speed * self.direction

        if abs(self.x - self.origin_x) > self.move_range:
            self.direction = -self.direction

        # Keep inside the playable width, pointing back inward
        if self.x < 0:
            self.x = 0.0
            self.direction = 1
        elif self.x + self.width > world_width:
            self.x = world_width - self.width
            self.direction = -1

    def snapshot(self) -> PlatformView:
        return PlatformView(self.x, self.y, self.width, self.height, self.kind)

    def __repr__(self):
        return f"PlatformEntity({self.kind.value}, x={self.x:.1f}, y={self.y:.1f})"
