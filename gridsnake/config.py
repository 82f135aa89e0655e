"""
config.py — Shared constants for the entire application.
No logic, no imports from internal modules.
"""

APP_NAME = "gridsnake"

# ── Window & glyph grid ───────────────────────────────────────────
DISPLAY_COLS, DISPLAY_ROWS = 80, 24
CELL_W, CELL_H = 12, 22
WIDTH, HEIGHT = DISPLAY_COLS * CELL_W, DISPLAY_ROWS * CELL_H
FONT_NAMES = "dejavusansmono,menlo,consolas,couriernew,courier"
FONT_SIZE = 18

# ── Timing ────────────────────────────────────────────────────────
TICK_PERIOD = 0.2        # seconds between snake moves

# ── Level presets (width, height) ─────────────────────────────────
LEVEL_SIZES = {
    "small":  (38, 8),
    "medium": (53, 12),
    "large":  (76, 19),
}

# ── Gameplay ──────────────────────────────────────────────────────
MIN_FRUITS = 1
MAX_FRUITS = 10
OBSTACLE_DENSITY = 0.03    # share of the level's cells that become obstacles
FORWARDS_CLEARANCE = 7     # obstacle-free cells from the start cell forwards, start included
BACKWARDS_CLEARANCE = 3    # obstacle-free cells from the start cell backwards, start included

# ── Glyphs (overridable through the [glyphs] config table) ────────
SNAKE_HEAD_NORTH_SYMBOL = "v"
SNAKE_HEAD_SOUTH_SYMBOL = "^"
SNAKE_HEAD_EAST_SYMBOL = "<"
SNAKE_HEAD_WEST_SYMBOL = ">"
SNAKE_BODY_SYMBOL = "⚬"
FRUIT_SYMBOL = "●"
OBSTACLE_SYMBOL = "█"
COLLISION_SYMBOL = "×"

# ── Colors ────────────────────────────────────────────────────────
BG = (10, 10, 15)
FG = (210, 210, 220)
SNAKE_COL = "green"
FRUIT_COL = "lightcoral"
OBSTACLE_COL = "gray"
COLLISION_COL = "red"
KEY_COL = (255, 228, 77)
SELECTION_COL = (0, 255, 136)
NOTICE_COL = (255, 120, 0)

# ── Game States ───────────────────────────────────────────────────
STATE_MENU    = "menu"
STATE_PLAYING = "playing"
STATE_PAUSED  = "paused"
STATE_OVER    = "over"
