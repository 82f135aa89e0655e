"""
view.py — View layer.

Draws the App as an 80x24 grid of character cells in the pygame window,
one monospace glyph per cell, the way a terminal would show it.

Composition and drawing are split:
    compose(app, glyphs)   — build a Frame (pure data, testable headless)
    GameView(screen, ...)  — blit a Frame onto a pygame surface

Public API:
    GameView(screen, glyphs) — bind to a pygame surface
    view.render(app)         — draw the current frame
"""

import logging
from typing import Union

import pygame

from . import options as opts
from .app import App, MainMenu, PauseMenu, PLAY, QUIT
from .config import (
    BG, CELL_H, CELL_W, DISPLAY_COLS, DISPLAY_ROWS, FG, FONT_NAMES, FONT_SIZE,
    KEY_COL, NOTICE_COL, SELECTION_COL,
    STATE_MENU, STATE_OVER, STATE_PAUSED,
)
from .model import Full
from .options import OptKey
from .settings import Glyph, GlyphConfig

log = logging.getLogger(__name__)

Color = Union[str, tuple, None]

SOLID_BORDER = "┌┐└┘─│"
DOTTED_BORDER = "····⋯⋮"


# ─────────────────────────── Frame ───────────────────────────────
class Frame:
    """A grid of (symbol, colour) cells."""

    def __init__(self, cols: int = DISPLAY_COLS, rows: int = DISPLAY_ROWS):
        self.cols = cols
        self.rows = rows
        self.cells: list[list[tuple[str, Color]]] = [
            [(" ", None)] * cols for _ in range(rows)
        ]

    def put(self, x: int, y: int, symbol: str, color: Color = None) -> None:
        if 0 <= x < self.cols and 0 <= y < self.rows:
            self.cells[y][x] = (symbol, color)

    def text(self, x: int, y: int, text: str, color: Color = None) -> int:
        for i, ch in enumerate(text):
            self.put(x + i, y, ch, color)
        return x + len(text)

    def centered(self, y: int, text: str, color: Color = None) -> int:
        x = max(0, (self.cols - len(text)) // 2)
        self.text(x, y, text, color)
        return x

    def box(self, x: int, y: int, w: int, h: int, title: str = "",
            dotted: bool = False) -> None:
        tl, tr, bl, br, hz, vt = DOTTED_BORDER if dotted else SOLID_BORDER
        right, bottom = x + w - 1, y + h - 1
        for i in range(x + 1, right):
            self.put(i, y, hz)
            self.put(i, bottom, hz)
        for j in range(y + 1, bottom):
            self.put(x, j, vt)
            self.put(right, j, vt)
            self.text(x + 1, j, " " * (w - 2))
        self.put(x, y, tl)
        self.put(right, y, tr)
        self.put(x, bottom, bl)
        self.put(right, bottom, br)
        if title:
            self.text(x + (w - len(title)) // 2, y, title)

    def line(self, y: int) -> str:
        return "".join(symbol for symbol, _ in self.cells[y])

    def __str__(self):
        return "\n".join(self.line(y).rstrip() for y in range(self.rows))


# ───────────────────────── Composition ───────────────────────────
def compose(app: App, glyphs: GlyphConfig) -> Frame:
    frame = Frame()
    if app.state == STATE_MENU:
        _compose_menu(frame, app.menu, app.high_score)
        if app.notice:
            frame.text(1, frame.rows - 1, app.notice[: frame.cols - 2], NOTICE_COL)
    else:
        _compose_game(frame, app, glyphs)
    return frame


def _key_hint(frame: Frame, x: int, y: int, parts: list[tuple[str, str]],
              color: Color = None) -> int:
    for label, key in parts:
        x = frame.text(x, y, label, color)
        x = frame.text(x, y, key, KEY_COL)
    return x


def _compose_menu(frame: Frame, menu: MainMenu, high_score: int) -> None:
    frame.centered(1, "G R I D S N A K E", SELECTION_COL)
    frame.centered(3, "Eat the fruit. Don't hit yourself, the walls or the rocks.")
    frame.centered(4, "Move: arrows / wasd / hjkl    Pause: Esc")
    frame.centered(5, "Menus: arrows, Tab, Home/End, Enter; Space toggles")

    for row, item, label, key in ((8, PLAY, "[Play (", "p"), (17, QUIT, "[Quit (", "q")):
        selected = menu.selection == item
        color = SELECTION_COL if selected else None
        x = frame.centered(row, f"{label}{key})]", color)
        frame.put(x + len(label), row, key, KEY_COL)
        if selected:
            frame.put(x - 2, row, "»", SELECTION_COL)

    label_w, value_w = 10, 10
    width = 2 + 2 + 2 + label_w + 2 + value_w
    x0 = (frame.cols - width) // 2
    frame.box(x0, 10, width, len(OptKey) + 2, " Options: ")
    for i, key in enumerate(OptKey):
        selected = menu.selection == key
        color = SELECTION_COL if selected else None
        pointer = "» " if selected else "  "
        value = opts.display_value(menu.options, key)
        row = f"{pointer}{key.value:<{label_w}}  {value:<{value_w}}"
        frame.text(x0 + 2, 11 + i, row, color)

    frame.centered(19, f"High score for these options: {high_score}")


def _compose_game(frame: Frame, app: App, glyphs: GlyphConfig) -> None:
    session = app.session
    level = session.level.snapshot()

    header = f" Score: {session.score}"
    best = f"High score: {app.high_score} "
    frame.text(0, 0, header.ljust(frame.cols - len(best)) + best, SELECTION_COL)
    if app.notice:
        frame.text(len(header) + 2, 0, app.notice[: frame.cols - len(header) - 3], NOTICE_COL)

    # rows 1..21 hold the level box, 22..23 the status lines
    x0 = (frame.cols - (level.width + 2)) // 2
    y0 = 1 + (frame.rows - 3 - (level.height + 2)) // 2
    frame.box(x0, y0, level.width + 2, level.height + 2, dotted=level.wraparound)

    def cell(pos, glyph: Glyph) -> None:
        frame.put(x0 + 1 + pos.x, y0 + 1 + pos.y, glyph.symbol, glyph.color)

    for pos in level.snake[1:]:
        cell(pos, glyphs.body)
    for pos in level.fruits:
        cell(pos, glyphs.fruit)
    for pos in level.obstacles:
        cell(pos, glyphs.obstacle)
    # head last so a collision marker overwrites whatever was hit
    cell(level.snake[0], glyphs.head(level.direction))
    if level.collision is not None:
        cell(level.collision, glyphs.collision)

    if app.state == STATE_PAUSED:
        _compose_pause(frame, app.pause_menu)
    elif app.state == STATE_OVER:
        title = "LEVEL FULL" if isinstance(session.outcome, Full) else "GAME OVER"
        status = f" — {title} — Score: {session.score}"
        if app.new_high_score:
            status += "  ★ NEW HIGH SCORE ★"
        frame.text(0, frame.rows - 2, status)
        x = _key_hint(frame, 0, frame.rows - 1, [
            (" Choose One: Restart (", "r"), (") — Main Menu (", "m"),
            (") — Quit (", "q"),
        ])
        frame.text(x, frame.rows - 1, ")")


def _compose_pause(frame: Frame, menu: PauseMenu) -> None:
    width, height = 19, 6
    x0 = (frame.cols - width) // 2
    y0 = (frame.rows - height) // 2
    frame.box(x0, y0, width, height, " PAUSED ")
    for i, item in enumerate(PauseMenu.ITEMS):
        selected = menu.selection == item
        color = SELECTION_COL if selected else None
        x = frame.text(x0 + 2, y0 + 1 + i, ("» " if selected else "  ") + item + " (", color)
        x = frame.text(x, y0 + 1 + i, PauseMenu.KEYS[item], KEY_COL)
        frame.text(x, y0 + 1 + i, ")", color)


# ─────────────────────────── GameView ────────────────────────────
class GameView:
    """Renders the complete frame for the App's current screen."""

    def __init__(self, screen: pygame.Surface, glyphs: GlyphConfig):
        self.screen = screen
        self.glyphs = glyphs
        self.font = pygame.font.SysFont(FONT_NAMES, FONT_SIZE)
        self._colors: dict[Color, pygame.Color] = {}
        self._glyph_cache: dict[tuple[str, Color], pygame.Surface] = {}

    def render(self, app: App) -> None:
        self.draw(compose(app, self.glyphs))

    def draw(self, frame: Frame) -> None:
        surface = pygame.display.get_surface() or self.screen
        surface.fill(BG)
        sw, sh = surface.get_size()
        ox = max(0, (sw - frame.cols * CELL_W) // 2)
        oy = max(0, (sh - frame.rows * CELL_H) // 2)
        for y, row in enumerate(frame.cells):
            for x, (symbol, color) in enumerate(row):
                if symbol == " ":
                    continue
                glyph = self._glyph(symbol, color)
                rect = glyph.get_rect(center=(ox + x * CELL_W + CELL_W // 2,
                                              oy + y * CELL_H + CELL_H // 2))
                surface.blit(glyph, rect)
        pygame.display.flip()

    # ── Helpers ──────────────────────────────────────────────────
    def _glyph(self, symbol: str, color: Color) -> pygame.Surface:
        key = (symbol, color)
        if key not in self._glyph_cache:
            self._glyph_cache[key] = self.font.render(symbol, True, self._color(color))
        return self._glyph_cache[key]

    def _color(self, color: Color) -> pygame.Color:
        if color not in self._colors:
            self._colors[color] = self._parse_color(color)
        return self._colors[color]

    @staticmethod
    def _parse_color(color: Color) -> pygame.Color:
        if color is None:
            return pygame.Color(FG)
        try:
            return pygame.Color(color)
        except ValueError:
            log.warning("Unknown colour %r; using the default", color)
            return pygame.Color(FG)
