"""
model.py — Model layer.

Owns ALL game state and rules. Zero rendering, zero input handling.
Exposes a clean API for the App (screen state machine) to read/write.

Classes:
    Coordinate   — (x, y) grid cell value
    Direction    — compass direction with a unit vector and an opposite
    Bounds       — level dimensions plus the wraparound flag
    Snake        — ordered body (head first) and current heading
    Level        — snake, obstacles and fruits; resolves one tick
    GameSession  — a Level plus score, tick timer, pause and restart
"""

import logging
import random
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, NamedTuple, Optional, Union

from .config import (
    BACKWARDS_CLEARANCE, FORWARDS_CLEARANCE, OBSTACLE_DENSITY,
    TICK_PERIOD,
)
from .options import Options

log = logging.getLogger(__name__)


# ──────────────────────────── Geometry ───────────────────────────
class Coordinate(NamedTuple):
    x: int
    y: int


class Direction(Enum):
    NORTH = (0, -1)
    SOUTH = (0, 1)
    EAST = (1, 0)
    WEST = (-1, 0)

    @property
    def x(self) -> int:
        return self.value[0]

    @property
    def y(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> "Direction":
        return Direction((-self.x, -self.y))

    def is_opposite(self, other: "Direction") -> bool:
        return other is self.opposite


def step(coord: Coordinate, direction: Direction, width: int, height: int,
         wraparound: bool) -> Optional[Coordinate]:
    """
    Return the neighbour of ``coord`` in ``direction``.

    Off-grid neighbours wrap to the opposite edge when ``wraparound`` is set;
    otherwise the result is None, which callers treat as a border collision.
    """
    x, y = coord.x + direction.x, coord.y + direction.y
    if 0 <= x < width and 0 <= y < height:
        return Coordinate(x, y)
    if not wraparound:
        return None
    return Coordinate(x % width, y % height)


@dataclass(frozen=True)
class Bounds:
    width: int
    height: int
    wrap: bool = False

    def step(self, coord: Coordinate, direction: Direction) -> Optional[Coordinate]:
        return step(coord, direction, self.width, self.height, self.wrap)

    def cells(self) -> Iterator[Coordinate]:
        for y in range(self.height):
            for x in range(self.width):
                yield Coordinate(x, y)

    @property
    def area(self) -> int:
        return self.width * self.height


# ──────────────────────── Random placement ───────────────────────
class InsufficientSpace(Exception):
    """Fewer free cells remain than were requested."""

    def __init__(self, requested: int, available: int):
        super().__init__(f"cannot place {requested} cell(s): only {available} free")
        self.requested = requested
        self.available = available


def place(count: int, excluded: Iterable[Coordinate], width: int, height: int,
          rng: Optional[random.Random] = None) -> set[Coordinate]:
    """Pick ``count`` distinct free cells uniformly, without replacement."""
    excluded = set(excluded)
    free = [c for c in Bounds(width, height).cells() if c not in excluded]
    if len(free) < count:
        raise InsufficientSpace(count, len(free))
    return set((rng or random).sample(free, count))


def place_up_to(count: int, excluded: Iterable[Coordinate], bounds: Bounds,
                rng: Optional[random.Random] = None) -> set[Coordinate]:
    """Like place(), but settle for as many cells as are free."""
    excluded = set(excluded)
    try:
        return place(count, excluded, bounds.width, bounds.height, rng)
    except InsufficientSpace as exc:
        log.warning("%s; placing %d instead", exc, exc.available)
        return place(exc.available, excluded, bounds.width, bounds.height, rng)


# ──────────────────────────── Snake ──────────────────────────────
class Snake:
    """
    Body cells (head first) and the direction of the last move.
    No rendering. No input handling. No collision rules.
    """

    def __init__(self, head: Coordinate, direction: Direction,
                 segments: Iterable[Coordinate] = ()):
        self.body: deque[Coordinate] = deque([head, *segments])
        self.direction: Direction = direction
        self._cells: set[Coordinate] = set(self.body)
        if len(self._cells) != len(self.body):
            raise ValueError("snake segments must be distinct")

    # ── Accessors ────────────────────────────────────────────────
    @property
    def head(self) -> Coordinate:
        return self.body[0]

    @property
    def tail(self) -> Coordinate:
        return self.body[-1]

    def __len__(self) -> int:
        return len(self.body)

    # ── Queries ──────────────────────────────────────────────────
    def heading(self, request: Optional[Direction] = None) -> Direction:
        """The direction of the next move; reversals are ignored."""
        if request is None or request.is_opposite(self.direction):
            return self.direction
        return request

    def advance(self, request: Optional[Direction], bounds: Bounds) -> Optional[Coordinate]:
        """Cell the head would move into. Does not move the snake."""
        return bounds.step(self.head, self.heading(request))

    def occupies(self, coord: Coordinate) -> bool:
        return coord in self._cells

    # ── Commands ─────────────────────────────────────────────────
    def grow_into(self, new_head: Coordinate, direction: Optional[Direction] = None) -> None:
        self.body.appendleft(new_head)
        self._cells.add(new_head)
        if direction is not None:
            self.direction = direction

    def move_into(self, new_head: Coordinate, direction: Optional[Direction] = None) -> None:
        self._cells.discard(self.body.pop())
        self.grow_into(new_head, direction)


# ───────────────────────── Tick outcomes ─────────────────────────
class CollisionCause(Enum):
    SELF = "self"
    OBSTACLE = "obstacle"
    BORDER = "border"


@dataclass(frozen=True)
class Moved:
    pass


@dataclass(frozen=True)
class Ate:
    fruits: frozenset


@dataclass(frozen=True)
class Collided:
    cause: CollisionCause


@dataclass(frozen=True)
class Full:
    """The snake grew and no cell is left for a fruit."""


TickOutcome = Union[Moved, Ate, Collided, Full]


@dataclass(frozen=True)
class LevelSnapshot:
    """Read-only view of a Level handed to the render layer."""
    width: int
    height: int
    wraparound: bool
    snake: tuple
    direction: Direction
    fruits: frozenset
    obstacles: frozenset
    collision: Optional[Coordinate]


# ──────────────────────────── Level ──────────────────────────────
class Level:
    """
    One playfield. Obstacles are fixed for its lifetime; fruits are topped
    back up to ``fruit_count`` after every one eaten, space permitting.
    """

    def __init__(
        self,
        bounds: Bounds,
        snake: Snake,
        obstacles: Iterable[Coordinate] = (),
        fruit_count: int = 1,
        fruits: Optional[Iterable[Coordinate]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.bounds = bounds
        self.snake = snake
        self.obstacles: frozenset[Coordinate] = frozenset(obstacles)
        self.fruit_count = fruit_count
        self.collision: Optional[Coordinate] = None
        self._rng = rng
        if fruits is None:
            self.fruits: set[Coordinate] = set()
            self._replenish()
        else:
            self.fruits = set(fruits)

    @classmethod
    def from_options(cls, options: Options, rng: Optional[random.Random] = None) -> "Level":
        width, height = options.level_size.dimensions
        bounds = Bounds(width, height, options.wraparound)
        start = Coordinate(width // 2, height // 2)
        snake = Snake(start, Direction.EAST)
        obstacles: set[Coordinate] = set()
        if options.obstacles:
            count = int(bounds.area * OBSTACLE_DENSITY)
            clearance = start_clearance(bounds, start, snake.direction)
            obstacles = place_up_to(count, clearance, bounds, rng)
        return cls(bounds, snake, obstacles, options.fruits, rng=rng)

    @property
    def width(self) -> int:
        return self.bounds.width

    @property
    def height(self) -> int:
        return self.bounds.height

    @property
    def wraparound(self) -> bool:
        return self.bounds.wrap

    def tick(self, request: Optional[Direction] = None) -> TickOutcome:
        """Advance the snake one cell and classify what happened."""
        direction = self.snake.heading(request)
        new_head = self.snake.advance(request, self.bounds)

        if new_head is None:
            self.collision = self.snake.head
            return Collided(CollisionCause.BORDER)

        if new_head in self.fruits:
            self.snake.grow_into(new_head, direction)
            self.fruits.discard(new_head)
            self._replenish()
            if not self.fruits:
                return Full()
            return Ate(frozenset(self.fruits))

        # The tail cell is vacated by this same move.
        if self.snake.occupies(new_head) and new_head != self.snake.tail:
            self.collision = new_head
            return Collided(CollisionCause.SELF)

        if new_head in self.obstacles:
            self.collision = new_head
            return Collided(CollisionCause.OBSTACLE)

        self.snake.move_into(new_head, direction)
        return Moved()

    def snapshot(self) -> LevelSnapshot:
        return LevelSnapshot(
            width=self.width,
            height=self.height,
            wraparound=self.wraparound,
            snake=tuple(self.snake.body),
            direction=self.snake.direction,
            fruits=frozenset(self.fruits),
            obstacles=self.obstacles,
            collision=self.collision,
        )

    # ── Private helpers ──────────────────────────────────────────
    def _replenish(self) -> None:
        missing = self.fruit_count - len(self.fruits)
        if missing <= 0:
            return
        occupied = set(self.obstacles) | set(self.snake.body) | self.fruits
        self.fruits |= place_up_to(missing, occupied, self.bounds, self._rng)


def start_clearance(bounds: Bounds, start: Coordinate, direction: Direction) -> set[Coordinate]:
    """
    Cells kept free of obstacles along the starting heading: FORWARDS_CLEARANCE
    cells ahead and BACKWARDS_CLEARANCE behind, both counting the start cell.
    """
    cleared = {start}
    for heading, reach in ((direction, FORWARDS_CLEARANCE),
                           (direction.opposite, BACKWARDS_CLEARANCE)):
        pos: Optional[Coordinate] = start
        for _ in range(reach - 1):
            pos = bounds.step(pos, heading)
            if pos is None:
                break
            cleared.add(pos)
    return cleared


# ───────────────────────── GameSession ───────────────────────────
class GameSession:
    """
    One playthrough. The App calls on_tick() whenever the deadline reported
    by time_until_tick() passes; direction requests in between are buffered
    and only the last valid one is applied.
    """

    def __init__(self, options: Options, rng: Optional[random.Random] = None,
                 level: Optional[Level] = None):
        self.options = options
        self._rng = rng
        self.level: Level = level if level is not None else Level.from_options(options, rng)
        self._reset_counters()

    # ── Public API ───────────────────────────────────────────────
    def request_direction(self, direction: Direction) -> None:
        """Buffer a turn for the next tick (dropped if it would reverse)."""
        if direction.is_opposite(self.level.snake.direction):
            return
        self.pending = direction

    def on_tick(self) -> Optional[TickOutcome]:
        if not self.alive or self.paused:
            return None
        outcome = self.level.tick(self.pending)
        self.pending = None
        self.ticks += 1
        self.next_tick = None
        if isinstance(outcome, (Ate, Full)):
            self.score += 1
        if isinstance(outcome, (Collided, Full)):
            self.alive = False
            self.outcome = outcome
            log.debug("Session ended after %d ticks: %r, score %d",
                      self.ticks, outcome, self.score)
        return outcome

    def pause(self) -> None:
        self.paused = True
        self.next_tick = None

    def resume(self) -> None:
        self.paused = False
        self.next_tick = None

    def restart(self) -> None:
        self.level = Level.from_options(self.options, self._rng)
        self._reset_counters()

    def time_until_tick(self, now: float) -> Optional[float]:
        """Seconds until the next tick is due, or None while no ticks run."""
        if not self.alive or self.paused:
            return None
        if self.next_tick is None:
            self.next_tick = now + TICK_PERIOD
        return max(0.0, self.next_tick - now)

    # ── Private helpers ──────────────────────────────────────────
    def _reset_counters(self) -> None:
        self.score: int = 0
        self.ticks: int = 0
        self.alive: bool = True
        self.paused: bool = False
        self.pending: Optional[Direction] = None
        self.outcome: Optional[TickOutcome] = None
        self.next_tick: Optional[float] = None
