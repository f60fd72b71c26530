"""
skyclimb
--------
Endless vertical platform climber: a headless simulation core plus a thin
pygame front end.

Exports:
    Simulation       - Caller-owned run with a reentrancy-guarded tick()
    SimulationConfig - Immutable constants for one run
    MoveIntent       - Per-tick horizontal controls
    TickResult       - Distance, multiplier and game-over flag of a tick
    FrameSnapshot    - Read-only view for renderers
    LoopState        - IDLE / RUNNING / GAME_OVER
"""

from skyclimb.core.runtime.move_intent import MoveIntent
from skyclimb.core.runtime.sim_config import SimulationConfig, load_simulation_config
from skyclimb.core.runtime.simulation import Simulation, TickResult, FrameSnapshot, LoopState

__version__ = "0.1.0"

__all__ = [
    'Simulation',
    'SimulationConfig',
    'load_simulation_config',
    'MoveIntent',
    'TickResult',
    'FrameSnapshot',
    'LoopState',
]
