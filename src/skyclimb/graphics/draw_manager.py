"""
draw_manager.py
---------------
Paints simulation snapshots onto a pygame surface.

Responsibilities:
- Sky gradient background (cached)
- Platforms (static green, moving orange with stripes) and the player
- HUD text, start screen and game-over overlay with leaderboard rows

The renderer only reads FrameSnapshot values; it never touches the
simulation itself.
"""

import pygame

from skyclimb.core.debug.debug_logger import DebugLogger
from skyclimb.entities.entity_types import Facing, PlatformKind


# ===========================================================
# Palette
# ===========================================================

SKY_TOP = (135, 206, 235)
SKY_BOTTOM = (224, 246, 255)
PLATFORM_STATIC = (76, 175, 80)
PLATFORM_STATIC_EDGE = (56, 142, 60)
PLATFORM_MOVING = (255, 165, 0)
PLATFORM_MOVING_EDGE = (255, 140, 0)
PLAYER_FILL = (255, 107, 107)
PLAYER_EDGE = (255, 51, 51)
EYE_WHITE = (255, 255, 255)
EYE_PUPIL = (0, 0, 0)
TEXT = (33, 33, 33)
OVERLAY = (0, 0, 0, 160)
OVERLAY_TEXT = (255, 255, 255)


class DrawManager:
    """Stateless apart from cached background and fonts."""

    # ===========================================================
    # Initialization
    # ===========================================================
    def __init__(self, width: int, height: int):
        self.width = int(width)
        self.height = int(height)
        self._background = None
        self._fonts = {}
        DebugLogger.init_entry("DrawManager")

    def _font(self, size: int):
        if size not in self._fonts:
            if not pygame.font.get_init():
                pygame.font.init()
            self._fonts[size] = pygame.font.SysFont(None, size)
        return self._fonts[size]

    def _build_background(self) -> pygame.Surface:
        surface = pygame.Surface((self.width, self.height))
        span = max(self.height - 1, 1)
        for row in range(self.height):
            t = row / span
            color = tuple(int(a + (b - a) * t) for a, b in zip(SKY_TOP, SKY_BOTTOM))
            pygame.draw.line(surface, color, (0, row), (self.width, row))
        return surface

    # ===========================================================
    # World Rendering
    # ===========================================================
    def draw_world(self, surface: pygame.Surface, snapshot) -> int:
        """
        Draw background, platforms and player with the camera offset applied.

        Returns:
            int: Number of platforms drawn (those inside the viewport)
        """
        if self._background is None:
            self._background = self._build_background()
        surface.blit(self._background, (0, 0))

        offset = snapshot.camera_offset
        drawn = 0
        for platform in snapshot.platforms:
            screen_y = platform.y + offset
            if screen_y + platform.height < 0 or screen_y > self.height:
                continue
            self._draw_platform(surface, platform, screen_y)
            drawn += 1

        self._draw_player(surface, snapshot.player, snapshot.player.y + offset)
        DebugLogger.trace(f"Drew {drawn} platforms", category="render")
        return drawn

    @staticmethod
    def _draw_platform(surface, platform, screen_y: float):
        rect = pygame.Rect(round(platform.x), round(screen_y), round(platform.width), round(platform.height))
        if platform.kind is PlatformKind.MOVING:
            pygame.draw.rect(surface, PLATFORM_MOVING, rect)
            pygame.draw.rect(surface, PLATFORM_MOVING_EDGE, rect, width=2)
            for i in range(0, rect.width, 10):
                pygame.draw.rect(surface, PLATFORM_MOVING_EDGE, (rect.x + i, rect.y + 2, 5, 2))
        else:
            pygame.draw.rect(surface, PLATFORM_STATIC, rect)
            pygame.draw.rect(surface, PLATFORM_STATIC_EDGE, rect, width=2)

    @staticmethod
    def _draw_player(surface, player, screen_y: float):
        rect = pygame.Rect(round(player.x), round(screen_y), round(player.width), round(player.height))
        pygame.draw.rect(surface, PLAYER_FILL, rect)
        pygame.draw.rect(surface, PLAYER_EDGE, rect, width=2)

        # Pupils lean toward the facing direction
        lean = -1 if player.facing is Facing.LEFT else 1
        for eye_x in (8, 18):
            pygame.draw.rect(surface, EYE_WHITE, (rect.x + eye_x, rect.y + 8, 6, 6))
            pygame.draw.rect(surface, EYE_PUPIL, (rect.x + eye_x + 2 + lean, rect.y + 10, 3, 3))

    # ===========================================================
    # HUD & Overlays
    # ===========================================================
    def draw_hud(self, surface: pygame.Surface, snapshot):
        font = self._font(28)
        distance = font.render(f"{snapshot.distance}m", True, TEXT)
        speed = font.render(f"Speed: {snapshot.speed_multiplier:.1f}x", True, TEXT)
        surface.blit(distance, (12, 10))
        surface.blit(speed, (self.width - speed.get_width() - 12, 10))

        small = self._font(20)
        if snapshot.next_milestone is None:
            goal = f"Level {snapshot.level + 1}  (max)"
        else:
            goal = f"Level {snapshot.level + 1}  next: {snapshot.next_milestone:g}m"
        surface.blit(small.render(goal, True, TEXT), (12, 12 + distance.get_height()))

    def _draw_overlay(self, surface, lines, top: int):
        shade = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        shade.fill(OVERLAY)
        surface.blit(shade, (0, 0))

        y = top
        for text, size in lines:
            rendered = self._font(size).render(text, True, OVERLAY_TEXT)
            surface.blit(rendered, ((self.width - rendered.get_width()) // 2, y))
            y += rendered.get_height() + 10

    def draw_start_screen(self, surface: pygame.Surface):
        self._draw_overlay(surface, [
            ("SkyClimb", 56),
            ("Arrows / A-D or hold left/right half", 22),
            ("Press Enter or click to start", 26),
        ], top=self.height // 3)

    def draw_game_over(self, surface: pygame.Surface, distance: int, scores=None, loading=False):
        """
        Args:
            distance: Final score in meters.
            scores: Leaderboard rows, [] when unavailable, None to hide the board.
            loading: Show a loading line instead of rows.
        """
        lines = [("Game Over", 56), (f"Distance: {distance}m", 32)]

        if loading:
            lines.append(("Loading leaderboard...", 22))
        elif scores is not None:
            if not scores:
                lines.append(("Leaderboard unavailable", 22))
            for rank, entry in enumerate(scores, start=1):
                lines.append((f"#{rank}  {entry.initial:<3}  {entry.score}m", 24))

        lines.append(("Press Enter or click to restart", 24))
        self._draw_overlay(surface, lines, top=self.height // 5)
