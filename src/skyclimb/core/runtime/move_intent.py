"""
move_intent.py
--------------
Per-tick directional intent sampled by the input collaborator.
"""

from typing import NamedTuple


class MoveIntent(NamedTuple):
    """
    Snapshot of the horizontal controls at the start of a tick.

    Both flags may be set at once; physics resolves that tie in favour
    of moving left.
    """
    move_left: bool = False
    move_right: bool = False


IDLE_INTENT = MoveIntent()
