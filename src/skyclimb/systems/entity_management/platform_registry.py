"""
platform_registry.py
--------------------
Owns every live platform of a run: initial seeding, endless generation
above the current top, recycling of platforms that scrolled off-screen and
rejection of near-duplicate spawns.

Responsibilities
----------------
- Seed the starting platform and the first stack above it.
- Keep at least `min_live` platforms alive after every evict/top-up pass.
- Never commit a platform within the dedup tolerance of a live one.
- Advance moving platforms once per tick.
"""

import random

from skyclimb.core.debug.debug_logger import DebugLogger
from skyclimb.entities.entity_types import PlatformKind
from skyclimb.entities.platform import PlatformEntity


class PlatformRegistry:
    """
    Unordered collection of live platforms plus the generator that feeds it.

    The registry is the only writer of its platform list. Callers get a
    tuple copy through `platforms` and must not mutate the entities.
    """

    # ===========================================================
    # Initialization
    # ===========================================================
    def __init__(self, platform_cfg, world_width: float, difficulty):
        """
        Args:
            platform_cfg (PlatformConfig): sizes, gaps, counts and tolerances.
            world_width (float): Playable width for x draws and moving bounds.
            difficulty (DifficultyCurve): Decides the static/moving mix.
        """
        self.cfg = platform_cfg
        self.world_width = world_width
        self.difficulty = difficulty
        self._platforms = []

        self._spawn_stats = {
            "total_spawned": 0,
            "moving_spawned": 0,
            "rejected_duplicates": 0,
            "total_evicted": 0,
            "empty_recoveries": 0,
            "shortfalls": 0,
        }

        DebugLogger.init_entry("PlatformRegistry Initialized")

    # ===========================================================
    # Queries
    # ===========================================================
    @property
    def platforms(self) -> tuple:
        return tuple(self._platforms)

    def __len__(self):
        return len(self._platforms)

    def __iter__(self):
        return iter(tuple(self._platforms))

    def topmost(self):
        """Platform with the smallest y, or None when the registry is empty."""
        if not self._platforms:
            return None
        return min(self._platforms, key=lambda p: p.y)

    def is_duplicate(self, x: float, y: float) -> bool:
        """True if a live platform sits within the tolerance on both axes."""
        tol = self.cfg.dedup_tolerance
        for platform in self._platforms:
            if abs(platform.x - x) <= tol and abs(platform.y - y) <= tol:
                return True
        return False

    # ===========================================================
    # Seeding
    # ===========================================================
    def seed(self):
        """Replace the registry with the starting platform and the first stack."""
        self._platforms.clear()

        start_x = self.world_width / 2 - self.cfg.width / 2
        self._try_commit(start_x, self.cfg.initial_y, PlatformKind.STATIC)

        last_y = self.cfg.initial_y
        for _ in range(self.cfg.initial_count):
            last_y -= self._draw_gap()
            # The first stack is always static
            self._try_commit(self._draw_x(), last_y, PlatformKind.STATIC)

        DebugLogger.system(
            f"Seeded {len(self._platforms)} platforms up to y={last_y:.0f}",
            category="platform_spawn"
        )

    # ===========================================================
    # Generation
    # ===========================================================
    def _draw_gap(self) -> float:
        return random.uniform(self.cfg.min_gap, self.cfg.max_gap)

    def _draw_x(self) -> float:
        return random.uniform(0, self.world_width - self.cfg.width)

    def _try_commit(self, x: float, y: float, kind: PlatformKind):
        """Create and register a platform unless it would duplicate a live one."""
        if self.is_duplicate(x, y):
            self._spawn_stats["rejected_duplicates"] += 1
            DebugLogger.trace(
                f"Rejected duplicate platform at ({x:.0f}, {y:.0f})",
                category="platform_spawn"
            )
            return None

        if kind is PlatformKind.MOVING:
            platform = PlatformEntity(
                x, y, self.cfg.width, self.cfg.height,
                kind=PlatformKind.MOVING,
                speed=self.cfg.moving_speed,
                direction=random.choice((-1, 1)),
                move_range=self.cfg.moving_range,
            )
            self._spawn_stats["moving_spawned"] += 1
        else:
            platform = PlatformEntity(x, y, self.cfg.width, self.cfg.height)

        self._platforms.append(platform)
        self._spawn_stats["total_spawned"] += 1
        return platform

    def propose(self, speed_multiplier: float, anchor_y: float = None):
        """
        Propose one platform a gap above the current top and commit it if free.

        Args:
            speed_multiplier: Current difficulty, gates moving platforms.
            anchor_y: Fallback anchor when the registry is empty.

        Returns:
            PlatformEntity | None: The committed platform, or None if rejected
        """
        top = self.topmost()
        if top is not None:
            base_y = top.y
        elif anchor_y is not None:
            base_y = anchor_y
        else:
            base_y = self.cfg.initial_y

        y = base_y - self._draw_gap()
        x = self._draw_x()
        kind = PlatformKind.MOVING if self.difficulty.roll_moving(speed_multiplier) else PlatformKind.STATIC

        platform = self._try_commit(x, y, kind)
        if platform is not None:
            DebugLogger.trace(f"Spawned {platform!r}", category="platform_spawn")
        return platform

    def top_up(self, speed_multiplier: float, fallback_anchor_y: float) -> int:
        """
        Generate until the live count reaches the minimum.

        A rejected proposal is simply retried; the attempt budget bounds the
        pass, and any shortfall is picked up by the next tick's pass.

        Returns:
            int: Number of platforms added
        """
        if not self._platforms:
            self._spawn_stats["empty_recoveries"] += 1
            DebugLogger.warn(
                f"Registry empty at top-up, anchoring at y={fallback_anchor_y:.0f}",
                category="platform_spawn"
            )

        missing = self.cfg.min_live - len(self._platforms)
        if missing <= 0:
            return 0

        added = 0
        attempts = missing * self.cfg.max_spawn_attempts
        while len(self._platforms) < self.cfg.min_live and attempts > 0:
            attempts -= 1
            if self.propose(speed_multiplier, anchor_y=fallback_anchor_y) is not None:
                added += 1

        if len(self._platforms) < self.cfg.min_live:
            self._spawn_stats["shortfalls"] += 1
            DebugLogger.warn(
                f"Top-up short by {self.cfg.min_live - len(self._platforms)} platform(s)",
                category="platform_spawn", throttle_key="top_up_shortfall"
            )

        return added

    # ===========================================================
    # Update Loop
    # ===========================================================
    def update_platforms(self):
        """Advance moving platforms by one tick."""
        for platform in self._platforms:
            platform.update(self.world_width)

    # ===========================================================
    # Cleanup
    # ===========================================================
    def evict(self, is_offscreen) -> int:
        """
        Remove every platform for which is_offscreen(platform) is true.

        Compacts the list in place in a single pass.

        Returns:
            int: Number of platforms removed
        """
        if not self._platforms:
            return 0

        total_before = len(self._platforms)
        i = 0
        for platform in self._platforms:
            if not is_offscreen(platform):
                self._platforms[i] = platform
                i += 1

        del self._platforms[i:]
        removed = total_before - i

        if removed > 0:
            self._spawn_stats["total_evicted"] += removed
            DebugLogger.state(
                f"Evicted {removed} platform(s), {i} live",
                category="platform_cleanup"
            )
        return removed

    # ===========================================================
    # Statistics & Reset
    # ===========================================================
    def get_spawn_stats(self) -> dict:
        stats = self._spawn_stats.copy()
        stats["live"] = len(self._platforms)
        stats["live_moving"] = sum(1 for p in self._platforms if p.is_moving)
        return stats

    def reset(self):
        """Drop all platforms and statistics for a new run."""
        self._platforms.clear()
        for key in self._spawn_stats:
            self._spawn_stats[key] = 0
