"""
simulation.py
-------------
The simulation loop: one explicit, caller-owned instance per run that
advances the world one discrete tick at a time.

Tick order
----------
1. Physics      - player integration from intent, moving platforms advance
2. Collisions   - landing test against every live platform
3. Camera       - offset and distance ratchet
4. Progress     - highest-point marker and climbing latch
5. Eviction     - platforms below the viewport are dropped
6. Generation   - registry topped up to the minimum live count
7. Difficulty   - multiplier recomputed from distance
8. Termination  - elimination check

Ownership
---------
Each phase writes only its own state: physics/collision the player, the
registry its platforms, the camera the WorldState. The Simulation only
sequences them, so no phase observes another one half-way.

Concurrency
-----------
A tick that starts while another tick of the same instance is still
executing is rejected, never queued. Only one simulation may be running
per process; starting a second one raises SimulationActiveError.
"""

import threading
import weakref
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Tuple

from skyclimb.core.debug.debug_logger import DebugLogger
from skyclimb.core.errors import ReentrantTickError, SimulationActiveError
from skyclimb.core.runtime.move_intent import MoveIntent, IDLE_INTENT
from skyclimb.core.runtime.sim_config import SimulationConfig
from skyclimb.core.services.event_manager import (
    EventManager, RunStartedEvent, DifficultyChangedEvent, GameOverEvent,
)
from skyclimb.entities.player import PlayerEntity, PlayerView
from skyclimb.systems.collision.collision_manager import CollisionManager
from skyclimb.systems.entity_management.platform_registry import PlatformRegistry
from skyclimb.systems.physics.player_physics import update_player
from skyclimb.systems.world.camera import CameraMapper, WorldState
from skyclimb.systems.world.difficulty_curve import DifficultyCurve


class LoopState(Enum):
    """Lifecycle of a simulation instance."""
    IDLE = auto()       # Prepared or stopped, ticks are no-ops
    RUNNING = auto()    # Ticks advance the world
    GAME_OVER = auto()  # Run ended, waiting for restart


@dataclass(frozen=True)
class TickResult:
    """Outcome of one tick call. accepted is False when nothing was stepped."""
    distance: int
    speed_multiplier: float
    game_over: bool
    accepted: bool = True


@dataclass(frozen=True)
class FrameSnapshot:
    """Read-only view of a simulation for renderers and HUDs."""
    player: PlayerView
    platforms: Tuple
    camera_offset: float
    distance: int
    speed_multiplier: float
    state: LoopState
    tick: int
    level: int = 0
    next_milestone: Optional[float] = None   # None once the top of the ladder is reached


# ===========================================================
# Process-wide Run Slot
# ===========================================================

_SLOT_LOCK = threading.Lock()
_running_ref = None


def _claim_slot(sim: "Simulation"):
    """Reserve the single running slot for sim, or raise if another simulation holds it."""
    global _running_ref
    with _SLOT_LOCK:
        holder = _running_ref() if _running_ref is not None else None
        if holder is not None and holder is not sim:
            raise SimulationActiveError(
                f"Simulation #{id(holder):x} is already running; stop it before starting another"
            )
        _running_ref = weakref.ref(sim)


def _release_slot(sim: "Simulation"):
    global _running_ref
    with _SLOT_LOCK:
        holder = _running_ref() if _running_ref is not None else None
        if holder is None or holder is sim:
            _running_ref = None


def active_simulation() -> Optional["Simulation"]:
    """The simulation currently holding the running slot, if any."""
    with _SLOT_LOCK:
        return _running_ref() if _running_ref is not None else None


# ===========================================================
# Simulation
# ===========================================================

class Simulation:
    """
    Owns the player, the platform registry and the world state of a run.

    Usage:
        sim = Simulation()
        sim.start()
        while True:
            result = sim.tick(MoveIntent(move_left=True))
            if result.game_over:
                break
        sim.stop()
    """

    def __init__(self, config: Optional[SimulationConfig] = None,
                 events: Optional[EventManager] = None):
        self.config = config or SimulationConfig()
        self.events = events or EventManager()

        self.difficulty = DifficultyCurve(self.config.difficulty)
        self.registry = PlatformRegistry(self.config.platform, self.config.canvas.width, self.difficulty)
        self.collisions = CollisionManager(self.config.player.jump_force)
        self.camera = CameraMapper(self.config.canvas, self.config.world, self.config.fall_limit)

        self.player: Optional[PlayerEntity] = None
        self.state = LoopState.IDLE
        self.tick_count = 0
        self.rejected_ticks = 0
        self.run_id = 0

        self._busy = threading.Lock()
        self._pending_events = []

        self._reset_run()
        DebugLogger.init_entry("Simulation Initialized")

    # ===========================================================
    # Properties
    # ===========================================================
    @property
    def world(self) -> WorldState:
        return self.camera.state

    @property
    def is_running(self) -> bool:
        return self.state is LoopState.RUNNING

    @property
    def is_busy(self) -> bool:
        return self._busy.locked()

    # ===========================================================
    # Lifecycle
    # ===========================================================
    def start(self):
        """
        Begin a fresh run (also used to restart after game over).

        Raises:
            SimulationActiveError: another simulation is running in this process.
            ReentrantTickError: a tick of this instance is executing.
        """
        if not self._busy.acquire(blocking=False):
            raise ReentrantTickError("Cannot start a run while a tick is executing")

        try:
            _claim_slot(self)
            self.run_id += 1
            self._reset_run()
            self.state = LoopState.RUNNING
            DebugLogger.bind_clock(self._clock_reading)
        finally:
            self._busy.release()

        DebugLogger.state(f"Run #{self.run_id} started", category="simulation")
        self.events.dispatch(RunStartedEvent(self.run_id))

    def restart(self):
        self.start()

    def stop(self):
        """
        Move to IDLE between ticks and give up the running slot.

        Raises:
            ReentrantTickError: a tick of this instance is executing.
        """
        if not self._busy.acquire(blocking=False):
            raise ReentrantTickError("Cannot stop a run while a tick is executing")

        try:
            was_running = self.state is LoopState.RUNNING
            self.state = LoopState.IDLE
            _release_slot(self)
            DebugLogger.unbind_clock(self._clock_reading)
        finally:
            self._busy.release()

        if was_running:
            DebugLogger.state(f"Run #{self.run_id} stopped", category="simulation")

    def _clock_reading(self):
        return self.run_id, self.tick_count

    def _reset_run(self):
        cfg = self.config
        self.player = PlayerEntity(
            cfg.canvas.width / 2 - cfg.player.width / 2,
            cfg.canvas.height - cfg.player.spawn_offset_y,
            cfg.player.width,
            cfg.player.height,
        )

        self.registry.reset()
        self.registry.seed()
        self.collisions.reset()
        self.camera.reset(self.player.y, self.difficulty.base_multiplier)

        self.tick_count = 0
        self.rejected_ticks = 0
        self._pending_events.clear()

    # ===========================================================
    # Tick
    # ===========================================================
    def tick(self, intent: MoveIntent = IDLE_INTENT, strict: bool = False) -> TickResult:
        """
        Advance the world by exactly one step.

        Args:
            intent: Controls sampled for this step.
            strict: Raise ReentrantTickError instead of returning a
                rejected result when the instance is already ticking.

        Returns:
            TickResult: accepted=False when the call was rejected or the
            simulation is not running; state is then left untouched.
        """
        if not self._busy.acquire(blocking=False):
            self.rejected_ticks += 1
            DebugLogger.warn(
                "Rejected overlapping tick", category="simulation", throttle_key="reentrant_tick"
            )
            if strict:
                raise ReentrantTickError("A tick is already executing on this simulation")
            return self._result(accepted=False)

        try:
            if self.state is not LoopState.RUNNING:
                return self._result(accepted=False)
            self._step(intent)
            result = self._result()
        finally:
            self._busy.release()

        self._flush_events()
        return result

    def _step(self, intent: MoveIntent):
        cfg = self.config
        player = self.player
        world = self.camera.state

        # 1. Physics
        update_player(player, intent, cfg.player, cfg.canvas.width)
        self.registry.update_platforms()

        # 2. Collisions
        landed_on = self.collisions.resolve(player, self.registry.platforms)

        # 3. Camera
        self.camera.follow(player.y)

        # 4. Progress markers
        self.camera.track_progress(player.y, landed_on is not None)

        # 5. Eviction
        margin = cfg.platform.cleanup_margin
        self.registry.evict(lambda p: self.camera.is_below_view(p.y, margin))

        # 6. Generation
        self.registry.top_up(world.speed_multiplier, self.camera.view_bottom_y)

        # 7. Difficulty
        old_multiplier = world.speed_multiplier
        new_multiplier = self.difficulty.multiplier_for(world.distance)
        if new_multiplier != old_multiplier:
            self.camera.set_multiplier(new_multiplier)
            DebugLogger.state(
                f"Speed x{old_multiplier:.1f} -> x{new_multiplier:.1f} at {world.distance}m",
                category="difficulty"
            )
            self._pending_events.append(
                DifficultyChangedEvent(
                    old_multiplier, new_multiplier, world.distance,
                    self.difficulty.level_for(world.distance),
                )
            )

        self.tick_count += 1

        # 8. Termination
        if self.camera.is_eliminated(player.y):
            self._end_run()

    def _end_run(self):
        self.state = LoopState.GAME_OVER
        _release_slot(self)
        DebugLogger.state(
            f"Run #{self.run_id} over at {self.world.distance}m after {self.tick_count} ticks",
            category="simulation"
        )
        self._pending_events.append(GameOverEvent(self.world.distance, self.tick_count))
        DebugLogger.unbind_clock(self._clock_reading)

    def _flush_events(self):
        # Dispatched after the busy flag is released so subscribers may restart the run
        events, self._pending_events = self._pending_events, []
        for event in events:
            self.events.dispatch(event)

    def _result(self, accepted: bool = True) -> TickResult:
        world = self.camera.state
        return TickResult(
            distance=world.distance,
            speed_multiplier=world.speed_multiplier,
            game_over=self.state is LoopState.GAME_OVER,
            accepted=accepted,
        )

    # ===========================================================
    # Read-only Views
    # ===========================================================
    def snapshot(self) -> FrameSnapshot:
        world = self.camera.state
        return FrameSnapshot(
            player=self.player.snapshot(),
            platforms=tuple(p.snapshot() for p in self.registry.platforms),
            camera_offset=world.camera_offset,
            distance=world.distance,
            speed_multiplier=world.speed_multiplier,
            state=self.state,
            tick=self.tick_count,
            level=self.difficulty.level_for(world.distance),
            next_milestone=self.difficulty.next_milestone(world.distance),
        )

    def __repr__(self):
        return (f"Simulation(run={self.run_id}, state={self.state.name}, "
                f"tick={self.tick_count}, distance={self.world.distance})")
