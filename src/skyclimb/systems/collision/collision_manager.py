"""
collision_manager.py
--------------------
Landing detection between the player and live platforms.

Platforms are one-way: the player passes through them from below and only
lands while falling onto the top edge. Every live platform is tested every
tick; at the entity counts involved (about 15-20) a spatial index would cost
more than it saves.
"""

from skyclimb.core.debug.debug_logger import DebugLogger


class CollisionManager:
    """Detects landings and applies the automatic bounce."""

    def __init__(self, jump_force: float):
        self.jump_force = jump_force
        self.landings = 0
        DebugLogger.init_entry("CollisionManager Initialized")

    # ===========================================================
    # Detection
    # ===========================================================
    @staticmethod
    def check_landing(player, platform) -> bool:
        """
        Return True if the player lands on the platform this tick.

        The pre-step bottom edge is rebuilt from the current vy, so this
        must run after the physics step of the same tick.
        """
        if player.vy <= 0:
            return False

        bottom = player.y + player.height
        was_above = bottom - player.vy <= platform.y
        is_now_on = platform.y <= bottom <= platform.y + platform.height
        horizontal_overlap = (player.x + player.width > platform.x and
                              player.x < platform.x + platform.width)

        return was_above and is_now_on and horizontal_overlap

    # ===========================================================
    # Response
    # ===========================================================
    def land(self, player, platform_y: float):
        """Snap the player onto the platform top and bounce."""
        player.y = platform_y - player.height
        player.vy = -self.jump_force
        player.grounded = True
        self.landings += 1

    def resolve(self, player, platforms):
        """
        Test the player against every platform and land on the first hit.

        Returns:
            PlatformEntity | None: The platform landed on, if any
        """
        for platform in platforms:
            if self.check_landing(player, platform):
                self.land(player, platform.y)
                DebugLogger.trace(
                    f"Landed on {platform!r} (landing #{self.landings})",
                    category="collision"
                )
                return platform
        return None

    def reset(self):
        self.landings = 0
