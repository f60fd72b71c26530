"""
player_physics.py
-----------------
Per-tick player integration: intent to velocity, gravity, Euler step and
horizontal wraparound.

Responsibilities
----------------
- Translate the directional intent into a horizontal velocity.
- Accumulate gravity up to the terminal fall speed.
- Move the player and teleport it across the world edges.

All values are per tick, not per second: one call is one simulation step.
"""

from skyclimb.core.debug.debug_logger import DebugLogger
from skyclimb.core.runtime.move_intent import MoveIntent
from skyclimb.entities.entity_types import Facing


def apply_intent(player, intent: MoveIntent, move_speed: float):
    """
    Set vx directly from the intent (no acceleration).

    Left wins when both directions are held.
    """
    if intent.move_left:
        player.vx = -move_speed
        player.facing = Facing.LEFT
    elif intent.move_right:
        player.vx = move_speed
        player.facing = Facing.RIGHT
    else:
        player.vx = 0.0


def apply_gravity(player, gravity: float, max_fall_speed: float):
    """Accumulate gravity and clamp to terminal velocity."""
    player.vy += gravity
    if player.vy > max_fall_speed:
        player.vy = max_fall_speed


def wrap_horizontal(player, world_width: float) -> bool:
    """
    Teleport a player that left the world fully to the opposite edge.

    Returns:
        bool: True if the player wrapped this tick
    """
    if player.x < -player.width:
        player.x = world_width
    elif player.x > world_width:
        player.x = -player.width
    else:
        return False

    DebugLogger.trace(f"Player wrapped to x={player.x:.0f}", category="physics")
    return True


def update_player(player, intent: MoveIntent, cfg, world_width: float):
    """
    Run one physics step on the player.

    Args:
        player (PlayerEntity): The body to integrate.
        intent (MoveIntent): Controls sampled for this tick.
        cfg (PlayerConfig): Movement constants.
        world_width (float): Playable width used for wraparound.
    """
    apply_intent(player, intent, cfg.move_speed)
    apply_gravity(player, cfg.gravity, cfg.max_fall_speed)

    player.x += player.vx
    player.y += player.vy

    wrap_horizontal(player, world_width)

    # Landing sets this again during collision resolution
    player.grounded = False
