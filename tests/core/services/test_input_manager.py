"""
test_input_manager.py
---------------------
Tests for turning pygame events into MoveIntent snapshots.
"""

import pygame
import pytest

from skyclimb.core.runtime.move_intent import MoveIntent
from skyclimb.core.services.input_manager import InputManager


@pytest.fixture
def input_manager():
    return InputManager(viewport_width=375)


def key(event_type, k):
    return pygame.event.Event(event_type, key=k)


def test_idle_intent_by_default(input_manager):
    assert input_manager.intent() == MoveIntent(False, False)


def test_held_keys_drive_intent(input_manager):
    input_manager.handle_event(key(pygame.KEYDOWN, pygame.K_LEFT))
    assert input_manager.intent() == MoveIntent(True, False)

    input_manager.handle_event(key(pygame.KEYUP, pygame.K_LEFT))
    input_manager.handle_event(key(pygame.KEYDOWN, pygame.K_d))
    assert input_manager.intent() == MoveIntent(False, True)


def test_both_directions_reported(input_manager):
    input_manager.handle_event(key(pygame.KEYDOWN, pygame.K_a))
    input_manager.handle_event(key(pygame.KEYDOWN, pygame.K_RIGHT))
    assert input_manager.intent() == MoveIntent(True, True)


def test_pointer_halves(input_manager):
    input_manager.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(50, 300)))
    assert input_manager.intent() == MoveIntent(True, False)

    input_manager.handle_event(pygame.event.Event(pygame.MOUSEMOTION, pos=(300, 300), rel=(250, 0), buttons=(1, 0, 0)))
    assert input_manager.intent() == MoveIntent(False, True)

    input_manager.handle_event(pygame.event.Event(pygame.MOUSEBUTTONUP, button=1, pos=(300, 300)))
    assert input_manager.intent() == MoveIntent(False, False)


def test_touch_uses_normalized_coordinates(input_manager):
    input_manager.handle_event(pygame.event.Event(pygame.FINGERDOWN, x=0.9, y=0.5, finger_id=0, touch_id=0))
    assert input_manager.pointer_x == pytest.approx(337.5)
    assert input_manager.intent() == MoveIntent(False, True)

    input_manager.handle_event(pygame.event.Event(pygame.FINGERUP, x=0.9, y=0.5, finger_id=0, touch_id=0))
    assert not input_manager.pointer_down


def test_pressed_actions_are_edge_triggered(input_manager):
    input_manager.handle_event(key(pygame.KEYDOWN, pygame.K_RETURN))
    assert input_manager.action_pressed("start")
    input_manager.end_frame()
    assert not input_manager.action_pressed("start")
    assert input_manager.action_held("start")


def test_window_leave_releases_pointer(input_manager):
    input_manager.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(50, 300)))
    input_manager.handle_event(pygame.event.Event(pygame.WINDOWLEAVE))
    assert input_manager.intent() == MoveIntent(False, False)


def test_unrelated_events_not_consumed(input_manager):
    assert not input_manager.handle_event(pygame.event.Event(pygame.USEREVENT))
