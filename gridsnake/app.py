"""
app.py — Screen state machine.

Owns the current screen (menu / playing / paused / over), the live
GameSession if any, and the Globals context (config, options, high scores)
that is threaded through every transition. Receives Commands and tick
signals from the controller; knows nothing about pygame.

Transitions:
    menu    --play-->              playing   (new session, options saved)
    playing --pause / focus lost--> paused
    playing --session ends-->       over      (high score updated)
    paused  --resume-->             playing
    paused|over --restart-->        playing   (same options)
    paused|over --main menu-->      menu
    any     --quit / kill-->        (exit)
"""

import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, Optional, Union

from . import options as opts
from .commands import Command
from .config import STATE_MENU, STATE_OVER, STATE_PAUSED, STATE_PLAYING
from .highscores import HighScoreTable
from .model import Direction, GameSession
from .options import OptKey, Options
from .settings import Config
from .storage import SaveError

log = logging.getLogger(__name__)

DIRECTIONS = {
    Command.UP: Direction.NORTH,
    Command.DOWN: Direction.SOUTH,
    Command.LEFT: Direction.WEST,
    Command.RIGHT: Direction.EAST,
}


@dataclass
class Globals:
    config: Config
    options: Options
    high_scores: HighScoreTable


# ─────────────────────────── MainMenu ────────────────────────────
PLAY = "play"
QUIT = "quit"


class MainMenu:
    """Play button, the four options, Quit button."""

    ITEMS: list[Union[str, OptKey]] = [PLAY, *OptKey, QUIT]

    def __init__(self, options: Options):
        self.options = options
        self.index = 0

    @property
    def selection(self) -> Union[str, OptKey]:
        return self.ITEMS[self.index]

    def handle(self, cmd: Command) -> Optional[str]:
        """Apply a command; returns PLAY or QUIT when the user chose one."""
        sel = self.selection
        last = len(self.ITEMS) - 1
        if cmd is Command.Q or (cmd is Command.ENTER and sel == QUIT):
            return QUIT
        if cmd is Command.P or (cmd is Command.ENTER and sel == PLAY):
            return PLAY
        if cmd is Command.HOME:
            self.index = 0
        elif cmd is Command.END:
            self.index = last
        elif cmd is Command.UP:
            self.index = max(0, self.index - 1)
        elif cmd is Command.DOWN:
            self.index = min(last, self.index + 1)
        elif cmd is Command.NEXT:
            self.index = (self.index + 1) % len(self.ITEMS)
        elif cmd is Command.PREV:
            self.index = (self.index - 1) % len(self.ITEMS)
        elif isinstance(sel, OptKey):
            self.options = self._adjust(cmd, sel)
        return None

    def _adjust(self, cmd: Command, key: OptKey) -> Options:
        if cmd is Command.LEFT:
            return opts.decrease(self.options, key)
        if cmd is Command.RIGHT:
            return opts.increase(self.options, key)
        if cmd in (Command.SPACE, Command.ENTER):
            return opts.toggle(self.options, key)
        return self.options


# ────────────────────────── PauseMenu ────────────────────────────
RESUME = "Resume"
RESTART = "Restart"
MAIN_MENU = "Main Menu"
EXIT = "Quit"


class PauseMenu:
    ITEMS = [RESUME, RESTART, MAIN_MENU, EXIT]
    SHORTCUTS = {Command.ESC: RESUME, Command.P: RESUME, Command.R: RESTART,
                 Command.M: MAIN_MENU, Command.Q: EXIT}
    KEYS = {RESUME: "Esc", RESTART: "r", MAIN_MENU: "m", EXIT: "q"}

    def __init__(self):
        self.index = 0

    @property
    def selection(self) -> str:
        return self.ITEMS[self.index]

    def handle(self, cmd: Command) -> Optional[str]:
        if cmd in self.SHORTCUTS:
            return self.SHORTCUTS[cmd]
        if cmd is Command.ENTER:
            return self.selection
        last = len(self.ITEMS) - 1
        if cmd is Command.UP:
            self.index = max(0, self.index - 1)
        elif cmd is Command.DOWN:
            self.index = min(last, self.index + 1)
        elif cmd is Command.NEXT:
            self.index = (self.index + 1) % len(self.ITEMS)
        elif cmd is Command.PREV:
            self.index = (self.index - 1) % len(self.ITEMS)
        elif cmd is Command.HOME:
            self.index = 0
        elif cmd is Command.END:
            self.index = last
        return None


# ───────────────────────────── App ───────────────────────────────
class App:
    def __init__(
        self,
        globals_: Globals,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.monotonic,
        notice: Optional[str] = None,
    ):
        self.globals = globals_
        self._rng = rng
        self._clock = clock
        self.state: str = STATE_MENU
        self.menu = MainMenu(globals_.options)
        self.pause_menu: Optional[PauseMenu] = None
        self.session: Optional[GameSession] = None
        self.quitting = False
        self.new_high_score = False
        self.notice = notice

    # ── Public API ───────────────────────────────────────────────
    @property
    def high_score(self) -> int:
        """Best score for the options currently on screen."""
        options = self.session.options if self.session else self.menu.options
        return self.globals.high_scores.get(options)

    def time_until_tick(self) -> Optional[float]:
        if self.state != STATE_PLAYING:
            return None
        return self.session.time_until_tick(self._clock())

    def tick(self) -> None:
        if self.state != STATE_PLAYING:
            return
        self.session.on_tick()
        if not self.session.alive:
            self._game_over()

    def handle(self, cmd: Command) -> None:
        if cmd is Command.KILL:
            self.quit()
            return
        if cmd is Command.RESIZE:
            return
        if self.state == STATE_MENU:
            self._handle_menu(cmd)
        elif self.state == STATE_PLAYING:
            self._handle_playing(cmd)
        elif self.state == STATE_PAUSED:
            self._handle_paused(cmd)
        elif self.state == STATE_OVER:
            self._handle_over(cmd)

    def quit(self) -> None:
        self.quitting = True

    # ── Per-state handlers ───────────────────────────────────────
    def _handle_menu(self, cmd: Command) -> None:
        choice = self.menu.handle(cmd)
        if choice == PLAY:
            self._start()
        elif choice == QUIT:
            self.quit()

    def _handle_playing(self, cmd: Command) -> None:
        if cmd in DIRECTIONS:
            self.session.request_direction(DIRECTIONS[cmd])
        elif cmd in (Command.ESC, Command.P, Command.FOCUS_LOST):
            self.session.pause()
            self.pause_menu = PauseMenu()
            self._enter(STATE_PAUSED)

    def _handle_paused(self, cmd: Command) -> None:
        choice = self.pause_menu.handle(cmd)
        if choice == RESUME:
            self.session.resume()
            self.pause_menu = None
            self._enter(STATE_PLAYING)
        elif choice == RESTART:
            self._restart()
        elif choice == MAIN_MENU:
            self._to_menu()
        elif choice == EXIT:
            self.quit()

    def _handle_over(self, cmd: Command) -> None:
        if cmd is Command.R:
            self._restart()
        elif cmd is Command.M:
            self._to_menu()
        elif cmd is Command.Q:
            self.quit()

    # ── Transitions ──────────────────────────────────────────────
    def _enter(self, state: str) -> None:
        log.debug("Screen %s -> %s", self.state, state)
        self.state = state
        self.notice = None

    def _start(self) -> None:
        options = self.menu.options
        self.globals.options = options
        self.session = GameSession(options, self._rng)
        self._enter(STATE_PLAYING)
        try:
            self.globals.config.save_options(options)
        except SaveError as exc:
            log.warning("%s", exc)
            self.notice = str(exc)

    def _restart(self) -> None:
        self.session.restart()
        self.pause_menu = None
        self.new_high_score = False
        self._enter(STATE_PLAYING)

    def _to_menu(self) -> None:
        self.session = None
        self.pause_menu = None
        self.new_high_score = False
        self.menu = MainMenu(self.globals.options)
        self._enter(STATE_MENU)

    def _game_over(self) -> None:
        session = self.session
        self._enter(STATE_OVER)
        self.new_high_score = self.globals.high_scores.record(session.options, session.score)
        if not self.new_high_score:
            return
        log.info("New high score %d for %r", session.score, session.options)
        try:
            self.globals.config.save_high_scores(self.globals.high_scores)
        except SaveError as exc:
            log.warning("%s", exc)
            self.notice = str(exc)
