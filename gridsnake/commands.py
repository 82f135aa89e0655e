"""
commands.py — Abstract input events.

The controller translates raw pygame events into these; the App only ever
sees Commands, so it can be driven without a window.
"""

from enum import Enum, auto


class Command(Enum):
    KILL = auto()        # Ctrl+C / window close: terminate from any screen
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    ENTER = auto()       # select
    SPACE = auto()       # toggle
    HOME = auto()
    END = auto()
    NEXT = auto()        # Tab
    PREV = auto()        # Shift+Tab
    ESC = auto()
    P = auto()
    Q = auto()
    R = auto()
    M = auto()
    FOCUS_LOST = auto()
    RESIZE = auto()
