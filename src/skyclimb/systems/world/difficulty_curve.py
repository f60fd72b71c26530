"""
difficulty_curve.py
-------------------
Maps climbed distance to a speed multiplier through a milestone ladder,
and derives the platform spawn mix from that multiplier.

The multiplier changes generation policy only; physics constants never
scale with difficulty.
"""

import random
from typing import Optional

from skyclimb.core.debug.debug_logger import DebugLogger


class DifficultyCurve:
    """Monotonic step function over distance."""

    def __init__(self, cfg):
        """
        Args:
            cfg (DifficultyConfig): milestones, multipliers and moving-platform gate.
        """
        self.milestones = tuple(cfg.milestones)
        self.multipliers = tuple(cfg.speed_multipliers)
        self.moving_threshold = cfg.moving_threshold
        self.moving_chance = cfg.moving_chance

    @property
    def base_multiplier(self) -> float:
        return self.multipliers[0]

    # ===========================================================
    # Ladder Lookup
    # ===========================================================
    def level_for(self, distance: float) -> int:
        """Index into the multiplier list for this distance (0 = base)."""
        for i in range(len(self.milestones) - 1, -1, -1):
            if distance >= self.milestones[i]:
                return i + 1
        return 0

    def multiplier_for(self, distance: float) -> float:
        return self.multipliers[self.level_for(distance)]

    def next_milestone(self, distance: float) -> Optional[float]:
        """Next threshold still ahead of distance, or None at the top."""
        level = self.level_for(distance)
        if level >= len(self.milestones):
            return None
        return self.milestones[level]

    # ===========================================================
    # Spawn Policy
    # ===========================================================
    def moving_allowed(self, multiplier: float) -> bool:
        return multiplier >= self.moving_threshold

    def roll_moving(self, multiplier: float) -> bool:
        """Decide whether the next generated platform is a moving one."""
        if not self.moving_allowed(multiplier):
            return False
        moving = random.random() < self.moving_chance
        if moving:
            DebugLogger.trace(f"Moving platform rolled at x{multiplier:.1f}", category="difficulty")
        return moving
