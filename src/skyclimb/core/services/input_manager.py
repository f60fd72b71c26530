"""
input_manager.py
----------------
Turns pygame keyboard, mouse and touch events into the per-tick
MoveIntent consumed by the simulation.

Provides:
- Held-key tracking for left/right movement
- Pointer steering: holding the mouse or a finger on the left half of the
  viewport moves left, on the right half moves right
- Edge-detected menu actions (start, quit)
"""

import pygame

from skyclimb.core.debug.debug_logger import DebugLogger
from skyclimb.core.runtime.move_intent import MoveIntent


# ===========================================================
# Default Key Bindings
# ===========================================================

DEFAULT_KEY_BINDINGS = {
    "move_left": [pygame.K_LEFT, pygame.K_a],
    "move_right": [pygame.K_RIGHT, pygame.K_d],
    "start": [pygame.K_RETURN, pygame.K_SPACE],
    "quit": [pygame.K_ESCAPE],
}


class InputManager:
    """
    Event-driven input state.

    Usage:
        for event in pygame.event.get():
            input_manager.handle_event(event)

        sim.tick(input_manager.intent())

        if input_manager.action_pressed("start"):
            sim.restart()

        input_manager.end_frame()
    """

    def __init__(self, viewport_width: float, key_bindings=None):
        """
        Args:
            viewport_width: Width used to split the screen into left/right halves.
            key_bindings: Custom {action: [keys]} (DEFAULT_KEY_BINDINGS if None)
        """
        self.viewport_width = viewport_width
        self.key_bindings = key_bindings or DEFAULT_KEY_BINDINGS

        self._held_keys = set()
        self._pressed_keys = set()

        self.pointer_down = False
        self.pointer_x = None
        self._pointer_pressed = False

        DebugLogger.init_entry("InputManager")

    # ===========================================================
    # Event Intake
    # ===========================================================
    def handle_event(self, event) -> bool:
        """
        Update input state from one pygame event.

        Returns:
            bool: True if the event was consumed
        """
        if event.type == pygame.KEYDOWN:
            self._held_keys.add(event.key)
            self._pressed_keys.add(event.key)
            return True

        if event.type == pygame.KEYUP:
            self._held_keys.discard(event.key)
            return True

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self._press_pointer(event.pos[0])
            return True

        if event.type == pygame.MOUSEMOTION and self.pointer_down:
            self.pointer_x = event.pos[0]
            return True

        if event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.release_pointer()
            return True

        if event.type == pygame.FINGERDOWN:
            self._press_pointer(event.x * self.viewport_width)
            return True

        if event.type == pygame.FINGERMOTION:
            self.pointer_x = event.x * self.viewport_width
            return True

        if event.type == pygame.FINGERUP:
            self.release_pointer()
            return True

        if event.type == pygame.WINDOWLEAVE:
            self.release_pointer()
            return True

        return False

    def _press_pointer(self, x: float):
        self.pointer_down = True
        self.pointer_x = x
        self._pointer_pressed = True
        DebugLogger.trace(f"Pointer down at x={x:.0f}", category="input")

    def release_pointer(self):
        self.pointer_down = False
        self.pointer_x = None

    def end_frame(self):
        """Clear edge-triggered state. Call once per rendered frame."""
        self._pressed_keys.clear()
        self._pointer_pressed = False

    def reset(self):
        self._held_keys.clear()
        self.end_frame()
        self.release_pointer()

    # ===========================================================
    # Queries
    # ===========================================================
    def action_held(self, action: str) -> bool:
        return any(key in self._held_keys for key in self.key_bindings.get(action, ()))

    def action_pressed(self, action: str) -> bool:
        return any(key in self._pressed_keys for key in self.key_bindings.get(action, ()))

    def pointer_pressed(self) -> bool:
        """True on the frame a mouse button or finger went down."""
        return self._pointer_pressed

    def intent(self) -> MoveIntent:
        """Sample the current controls as a MoveIntent snapshot."""
        move_left = self.action_held("move_left")
        move_right = self.action_held("move_right")

        if self.pointer_down and self.pointer_x is not None:
            if self.pointer_x < self.viewport_width / 2:
                move_left = True
            else:
                move_right = True

        return MoveIntent(move_left=move_left, move_right=move_right)
