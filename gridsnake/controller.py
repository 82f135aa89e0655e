"""
controller.py — Controller layer.

Opens the resizable pygame window and runs the loop that feeds the App.
Key presses, window close, focus loss and resizes become Commands through
command_for_event(); everything else is blocked at the event queue.

Each pass renders one frame, then either fires the tick whose deadline
has passed or waits for the next event, for no longer than the App says is
left before that deadline. With no game running the wait has no timeout.
"""

import logging
import math
from typing import Optional

import pygame

from .app import App
from .commands import Command
from .config import APP_NAME, HEIGHT, WIDTH
from .settings import GlyphConfig
from .view import GameView

log = logging.getLogger(__name__)

KEYMAP = {
    pygame.K_UP: Command.UP, pygame.K_w: Command.UP, pygame.K_k: Command.UP,
    pygame.K_DOWN: Command.DOWN, pygame.K_s: Command.DOWN, pygame.K_j: Command.DOWN,
    pygame.K_LEFT: Command.LEFT, pygame.K_a: Command.LEFT, pygame.K_h: Command.LEFT,
    pygame.K_RIGHT: Command.RIGHT, pygame.K_d: Command.RIGHT, pygame.K_l: Command.RIGHT,
    pygame.K_RETURN: Command.ENTER, pygame.K_KP_ENTER: Command.ENTER,
    pygame.K_SPACE: Command.SPACE,
    pygame.K_HOME: Command.HOME,
    pygame.K_END: Command.END,
    pygame.K_ESCAPE: Command.ESC,
    pygame.K_p: Command.P,
    pygame.K_q: Command.Q,
    pygame.K_r: Command.R,
    pygame.K_m: Command.M,
}

_HANDLED_EVENTS = [pygame.QUIT, pygame.KEYDOWN, pygame.WINDOWFOCUSLOST, pygame.VIDEORESIZE]


def command_for_key(key: int, mod: int = 0) -> Optional[Command]:
    if key == pygame.K_c and mod & pygame.KMOD_CTRL:
        return Command.KILL
    if mod & (pygame.KMOD_CTRL | pygame.KMOD_ALT | pygame.KMOD_META):
        return None
    if key == pygame.K_TAB:
        return Command.PREV if mod & pygame.KMOD_SHIFT else Command.NEXT
    return KEYMAP.get(key)


def command_for_event(event: pygame.event.Event) -> Optional[Command]:
    if event.type == pygame.QUIT:
        return Command.KILL
    if event.type == pygame.KEYDOWN:
        return command_for_key(event.key, event.mod)
    if event.type == pygame.WINDOWFOCUSLOST:
        return Command.FOCUS_LOST
    if event.type == pygame.VIDEORESIZE:
        return Command.RESIZE
    return None


class GameController:
    """
    Owns the main loop.
    Glues App <-> View without them knowing about each other.
    """

    def __init__(self, app: App, glyphs: GlyphConfig):
        pygame.init()
        self.screen = pygame.display.set_mode((WIDTH, HEIGHT), pygame.RESIZABLE)
        pygame.display.set_caption(APP_NAME)
        pygame.event.set_blocked(None)
        pygame.event.set_allowed(_HANDLED_EVENTS)
        self.app = app
        self.view = GameView(self.screen, glyphs)

    # ── Public entry point ────────────────────────────────────────
    def run(self) -> None:
        """Run until the App asks to quit."""
        try:
            while not self.app.quitting:
                self.view.render(self.app)
                self._step()
        finally:
            pygame.quit()

    # ── Loop body ─────────────────────────────────────────────────
    def _step(self) -> None:
        remaining = self.app.time_until_tick()
        if remaining is not None and remaining <= 0:
            self.app.tick()
            return
        # wait(0) blocks until the next event
        timeout = 0 if remaining is None else max(1, math.ceil(remaining * 1000))
        event = pygame.event.wait(timeout)
        if event.type == pygame.NOEVENT:
            return
        cmd = command_for_event(event)
        if cmd is not None:
            self.app.handle(cmd)
