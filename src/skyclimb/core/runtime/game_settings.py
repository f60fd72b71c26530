"""
game_settings.py
----------------
Centralized constants for all game systems.

These are the defaults; a run can override them through a JSON file
(see sim_config.load_simulation_config).
"""


# ===========================================================
# Display & Performance
# ===========================================================

class Display:
    """Canvas (world width / viewport) configuration."""
    WIDTH: int = 375
    HEIGHT: int = 667
    FPS: int = 60
    CAPTION: str = "SkyClimb"


# ===========================================================
# Physics & Timing
# ===========================================================

class Physics:
    """Fixed-step timing for the interactive runner."""
    UPDATE_RATE: int = 60
    FIXED_DT: float = 1 / UPDATE_RATE
    MAX_FRAME_TIME: float = 0.1


# ===========================================================
# Player Defaults
# ===========================================================

class PlayerSettings:
    """Player body and movement (per-tick units)."""
    WIDTH: int = 30
    HEIGHT: int = 30
    JUMP_FORCE: float = 12.0
    MOVE_SPEED: float = 5.0
    GRAVITY: float = 0.5
    MAX_FALL_SPEED: float = 15.0
    SPAWN_OFFSET_Y: int = 100   # spawn this far above the canvas bottom


# ===========================================================
# Platform Generation
# ===========================================================

class PlatformSettings:
    """Platform size, spacing and recycling."""
    WIDTH: int = 80
    HEIGHT: int = 12
    MIN_GAP: float = 60.0
    MAX_GAP: float = 120.0
    INITIAL_Y: float = 600.0
    INITIAL_COUNT: int = 15
    MIN_LIVE: int = 15
    DEDUP_TOLERANCE: float = 10.0
    MAX_SPAWN_ATTEMPTS: int = 8   # per missing platform, per pass

    MOVING_SPEED: float = 2.0
    MOVING_RANGE: float = 100.0


# ===========================================================
# Difficulty Ladder
# ===========================================================

class DifficultySettings:
    """Distance milestones and the speed multipliers they unlock."""
    MILESTONES = (500, 1000, 1500, 2000, 2500)
    SPEED_MULTIPLIERS = (1.0, 1.3, 1.6, 2.0, 2.5, 3.0)
    MOVING_THRESHOLD: float = 1.6
    MOVING_CHANCE: float = 0.3


# ===========================================================
# Bounds & Margins
# ===========================================================

class Bounds:
    """Margins for camera, cleanup and elimination."""
    PLATFORM_CLEANUP_MARGIN: int = 100
    DISTANCE_SCALE: float = 10.0      # camera pixels per meter
    FALL_LIMIT: float = Display.HEIGHT


# ===========================================================
# Leaderboard
# ===========================================================

class Leaderboard:
    """Remote leaderboard collaborator."""
    ENABLED: bool = True
    API_URL: str = ""
    PLACEHOLDER_URL: str = "YOUR_GOOGLE_APPS_SCRIPT_URL_HERE"
    TIMEOUT: float = 5.0
    TOP_N: int = 10
