"""
Runtime exports.

Provides the simulation loop, its configuration and the per-tick intent.
The pygame MainLoop is not re-exported so importing the runtime never
opens a window.
"""

from skyclimb.core.runtime.move_intent import MoveIntent, IDLE_INTENT
from skyclimb.core.runtime.sim_config import SimulationConfig, load_simulation_config
from skyclimb.core.runtime.simulation import (
    Simulation,
    TickResult,
    FrameSnapshot,
    LoopState,
    active_simulation,
)

__all__ = [
    'MoveIntent',
    'IDLE_INTENT',
    'SimulationConfig',
    'load_simulation_config',
    'Simulation',
    'TickResult',
    'FrameSnapshot',
    'LoopState',
    'active_simulation',
]
