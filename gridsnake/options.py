"""
options.py — The four game settings and the menu operations on them.

Options is an immutable value: the menu derives a new one on every
adjustment, and its equality/hash is the high-score bucket key.

OptKey tags each setting with its kind (flag, bounded integer or preset) and
the module-level increase/decrease/toggle/display_value functions dispatch on
that tag.
"""

import dataclasses
import logging
from dataclasses import dataclass
from enum import Enum

from .config import LEVEL_SIZES, MAX_FRUITS, MIN_FRUITS

log = logging.getLogger(__name__)


class LevelSize(Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"

    @property
    def dimensions(self) -> tuple[int, int]:
        return LEVEL_SIZES[self.value]

    @property
    def label(self) -> str:
        return self.value.capitalize()


_SIZES = list(LevelSize)


@dataclass(frozen=True)
class Options:
    wraparound: bool = False
    obstacles: bool = False
    fruits: int = 1
    level_size: LevelSize = LevelSize.LARGE

    def __post_init__(self):
        if not MIN_FRUITS <= self.fruits <= MAX_FRUITS:
            raise ValueError(
                f"fruit count must be between {MIN_FRUITS} and {MAX_FRUITS}, got {self.fruits}"
            )

    def to_dict(self) -> dict:
        return {
            "wraparound": self.wraparound,
            "obstacles": self.obstacles,
            "fruits": self.fruits,
            "level-size": self.level_size.value,
        }

    @classmethod
    def from_dict(cls, data: dict, defaults: "Options | None" = None,
                  strict: bool = False) -> "Options":
        """
        Build Options from a parsed JSON/TOML table.

        Each field is validated on its own: a missing or invalid value falls
        back to the corresponding field of ``defaults`` (logged when invalid),
        so one bad entry never discards the others.

        With ``strict`` set, an invalid value raises ValueError instead;
        missing fields still take their defaults.
        """
        def invalid(message: str, *args) -> None:
            if strict:
                raise ValueError(message % args)
            log.warning(message, *args)

        if defaults is None:
            defaults = cls()
        if not isinstance(data, dict):
            if strict:
                raise ValueError(f"options must be a table, got {data!r}")
            log.warning("Ignoring options: expected a table, got %r", data)
            return defaults
        unknown = set(data) - {"wraparound", "obstacles", "fruits", "level-size"}
        if unknown:
            log.warning("Ignoring unknown option fields: %s", ", ".join(sorted(unknown)))

        fields = {}
        for name in ("wraparound", "obstacles"):
            value = data.get(name, getattr(defaults, name))
            if isinstance(value, bool):
                fields[name] = value
            else:
                invalid("Invalid value for option %r: %r", name, value)

        fruits = data.get("fruits", defaults.fruits)
        if isinstance(fruits, int) and not isinstance(fruits, bool) and MIN_FRUITS <= fruits <= MAX_FRUITS:
            fields["fruits"] = fruits
        else:
            invalid("Invalid value for option 'fruits': %r", fruits)

        size = data.get("level-size", defaults.level_size.value)
        try:
            fields["level_size"] = LevelSize(size)
        except ValueError:
            invalid("Invalid value for option 'level-size': %r", size)

        return dataclasses.replace(defaults, **fields)


# ─────────────────────── menu option model ───────────────────────
class OptKey(Enum):
    WRAPAROUND = "Wraparound"
    OBSTACLES = "Obstacles"
    FRUITS = "Fruits"
    LEVEL_SIZE = "Level Size"

    @property
    def kind(self) -> str:
        if self in (OptKey.WRAPAROUND, OptKey.OBSTACLES):
            return "flag"
        if self is OptKey.FRUITS:
            return "count"
        return "preset"

    @property
    def field(self) -> str:
        return self.name.lower()


def can_increase(options: Options, key: OptKey) -> bool:
    value = getattr(options, key.field)
    if key.kind == "flag":
        return not value
    if key.kind == "count":
        return value < MAX_FRUITS
    return _SIZES.index(value) < len(_SIZES) - 1


def can_decrease(options: Options, key: OptKey) -> bool:
    value = getattr(options, key.field)
    if key.kind == "flag":
        return value
    if key.kind == "count":
        return value > MIN_FRUITS
    return _SIZES.index(value) > 0


def increase(options: Options, key: OptKey) -> Options:
    if not can_increase(options, key):
        return options
    value = getattr(options, key.field)
    if key.kind == "flag":
        value = True
    elif key.kind == "count":
        value += 1
    else:
        value = _SIZES[_SIZES.index(value) + 1]
    return dataclasses.replace(options, **{key.field: value})


def decrease(options: Options, key: OptKey) -> Options:
    if not can_decrease(options, key):
        return options
    value = getattr(options, key.field)
    if key.kind == "flag":
        value = False
    elif key.kind == "count":
        value -= 1
    else:
        value = _SIZES[_SIZES.index(value) - 1]
    return dataclasses.replace(options, **{key.field: value})


def toggle(options: Options, key: OptKey) -> Options:
    """Flip a flag; counts and presets ignore the toggle key."""
    if key.kind != "flag":
        return options
    return dataclasses.replace(options, **{key.field: not getattr(options, key.field)})


def display_value(options: Options, key: OptKey) -> str:
    value = getattr(options, key.field)
    if key.kind == "flag":
        return "[✓]" if value else "[ ]"
    left = "◀" if can_decrease(options, key) else "◁"
    right = "▶" if can_increase(options, key) else "▷"
    text = str(value) if key.kind == "count" else value.label
    return f"{left} {text:^6} {right}"
