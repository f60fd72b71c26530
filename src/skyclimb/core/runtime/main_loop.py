"""
main_loop.py
------------
Interactive pygame runner around one Simulation.

Responsibilities:
- Initialize pygame and the window
- Feed input snapshots to the simulation at a fixed timestep
- Render every frame and switch between start / playing / game-over screens
- Ask the leaderboard for the top list when a run ends, without blocking
"""

import queue

import pygame

from skyclimb.core.debug.debug_logger import DebugLogger
from skyclimb.core.runtime.game_settings import Display, Physics
from skyclimb.core.runtime.simulation import Simulation, LoopState
from skyclimb.core.services.event_manager import GameOverEvent
from skyclimb.core.services.input_manager import InputManager
from skyclimb.graphics.draw_manager import DrawManager


class MainLoop:
    """
    Core runtime controller.

    Implements a fixed timestep for the simulation with variable rendering.
    """

    # ===========================================================
    # Initialization
    # ===========================================================
    def __init__(self, simulation: Simulation, leaderboard=None):
        DebugLogger.section("Initializing MainLoop")

        self.sim = simulation
        self.leaderboard = leaderboard

        canvas = simulation.config.canvas
        self.width = int(canvas.width)
        self.height = int(canvas.height)

        self._init_pygame()
        self.input = InputManager(self.width)
        self.draw_manager = DrawManager(self.width, self.height)

        self.running = True
        self.final_distance = 0
        self.scores = None
        self.scores_loading = False
        self._score_results = queue.Queue()

        self.sim.events.subscribe(GameOverEvent, self._on_game_over)

    def _init_pygame(self):
        pygame.init()
        pygame.font.init()
        self.screen = pygame.display.set_mode((self.width, self.height))
        pygame.display.set_caption(Display.CAPTION)
        self.clock = pygame.time.Clock()

        DebugLogger.init_entry("Pygame")
        DebugLogger.init_sub(f"Window {self.width}x{self.height}")

    # ===========================================================
    # Main Loop
    # ===========================================================
    def run(self):
        """Execute main loop until quit."""
        DebugLogger.section("Game Loop")

        fixed_dt = Physics.FIXED_DT
        accumulator = 0.0

        try:
            while self.running:
                frame_time = self.clock.tick(Display.FPS) / 1000.0
                frame_time = min(frame_time, Physics.MAX_FRAME_TIME)
                accumulator += frame_time

                self._handle_events()
                self._handle_menu_actions()

                # Fixed timestep: one tick per step, input sampled each step
                while accumulator >= fixed_dt:
                    if self.sim.is_running:
                        self.sim.tick(self.input.intent())
                    accumulator -= fixed_dt

                self._collect_scores()
                self._draw()
                self.input.end_frame()
        finally:
            self.sim.stop()
            pygame.quit()
            DebugLogger.system("Pygame terminated")

    # ===========================================================
    # Event Handling
    # ===========================================================
    def _handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
                DebugLogger.action("Quit signal received")
                break
            self.input.handle_event(event)

    def _handle_menu_actions(self):
        if self.input.action_pressed("quit"):
            self.running = False
            return

        if self.sim.state is LoopState.RUNNING:
            return

        if self.input.action_pressed("start") or self.input.pointer_pressed():
            self.scores = None
            self.scores_loading = False
            self.input.release_pointer()
            self.sim.start()

    # ===========================================================
    # Leaderboard
    # ===========================================================
    def _on_game_over(self, event: GameOverEvent):
        self.final_distance = event.distance
        if self.leaderboard is None:
            return
        self.scores_loading = True
        run_id = self.sim.run_id
        self.leaderboard.load_scores_async(lambda scores: self._score_results.put((run_id, scores)))

    def _collect_scores(self):
        """Take finished fetches; results of an earlier run are dropped."""
        while True:
            try:
                run_id, scores = self._score_results.get_nowait()
            except queue.Empty:
                return
            if run_id != self.sim.run_id:
                DebugLogger.trace(f"Dropped leaderboard result of run #{run_id}", category="leaderboard")
                continue
            self.scores = scores
            self.scores_loading = False

    # ===========================================================
    # Rendering
    # ===========================================================
    def _draw(self):
        snapshot = self.sim.snapshot()
        self.draw_manager.draw_world(self.screen, snapshot)

        if snapshot.state is LoopState.RUNNING:
            self.draw_manager.draw_hud(self.screen, snapshot)
        elif snapshot.state is LoopState.GAME_OVER:
            self.draw_manager.draw_game_over(
                self.screen, self.final_distance, self.scores, loading=self.scores_loading
            )
        else:
            self.draw_manager.draw_start_screen(self.screen)

        pygame.display.flip()
