"""
settings.py — The TOML configuration file.

    [options]            defaults used until options have been saved
    [files]              options-file, high-scores-dir, ignore-errors
    [glyphs]             symbol (and optional colour) for each cell kind

Also the single place that decides whether a persistence failure is reported
or swallowed (``files.ignore-errors``).
"""

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

import appdirs

from . import storage
from .config import (
    APP_NAME, COLLISION_COL, COLLISION_SYMBOL, FRUIT_COL, FRUIT_SYMBOL,
    OBSTACLE_COL, OBSTACLE_SYMBOL, SNAKE_BODY_SYMBOL, SNAKE_COL,
    SNAKE_HEAD_EAST_SYMBOL, SNAKE_HEAD_NORTH_SYMBOL, SNAKE_HEAD_SOUTH_SYMBOL,
    SNAKE_HEAD_WEST_SYMBOL,
)
from .highscores import HighScoreTable
from .model import Direction
from .options import Options

log = logging.getLogger(__name__)


class ConfigError(Exception):
    pass


def default_config_path() -> Path:
    return Path(appdirs.user_config_dir(APP_NAME, appauthor=False)) / "config.toml"


# ─────────────────────────── Glyphs ──────────────────────────────
@dataclass(frozen=True)
class Glyph:
    symbol: str
    color: Optional[str] = None

    @classmethod
    def parse(cls, value, default: "Glyph", where: str) -> "Glyph":
        if isinstance(value, str):
            return cls(_check_symbol(value, where), default.color)
        if isinstance(value, dict):
            _reject_unknown(value, {"symbol", "color"}, where)
            symbol = value.get("symbol", default.symbol)
            color = value.get("color", default.color)
            if color is not None and not isinstance(color, str):
                raise ConfigError(f"{where}.color: expected a string, got {color!r}")
            return cls(_check_symbol(symbol, f"{where}.symbol"), color)
        raise ConfigError(f"{where}: expected a string or table, got {value!r}")


def _check_symbol(symbol, where: str) -> str:
    if not isinstance(symbol, str) or len(symbol) != 1:
        raise ConfigError(f"{where}: expected a single character, got {symbol!r}")
    if not symbol.isprintable() or symbol.isspace():
        raise ConfigError(f"{where}: {symbol!r} is not a visible character")
    return symbol


@dataclass(frozen=True)
class GlyphConfig:
    head_north: Glyph = Glyph(SNAKE_HEAD_NORTH_SYMBOL, SNAKE_COL)
    head_south: Glyph = Glyph(SNAKE_HEAD_SOUTH_SYMBOL, SNAKE_COL)
    head_east: Glyph = Glyph(SNAKE_HEAD_EAST_SYMBOL, SNAKE_COL)
    head_west: Glyph = Glyph(SNAKE_HEAD_WEST_SYMBOL, SNAKE_COL)
    body: Glyph = Glyph(SNAKE_BODY_SYMBOL, SNAKE_COL)
    fruit: Glyph = Glyph(FRUIT_SYMBOL, FRUIT_COL)
    obstacle: Glyph = Glyph(OBSTACLE_SYMBOL, OBSTACLE_COL)
    collision: Glyph = Glyph(COLLISION_SYMBOL, COLLISION_COL)

    def head(self, direction: Direction) -> Glyph:
        return getattr(self, f"head_{direction.name.lower()}")

    @classmethod
    def from_dict(cls, data: dict) -> "GlyphConfig":
        _reject_unknown(data, {"snake-head", "snake-body", "fruit", "obstacle", "collision"},
                        "glyphs")
        default = cls()
        fields = {}
        heads = data.get("snake-head", {})
        if not isinstance(heads, dict):
            raise ConfigError(f"glyphs.snake-head: expected a table, got {heads!r}")
        _reject_unknown(heads, {"north", "south", "east", "west"}, "glyphs.snake-head")
        for name, value in heads.items():
            attr = f"head_{name}"
            fields[attr] = Glyph.parse(value, getattr(default, attr), f"glyphs.snake-head.{name}")
        for key, attr in (("snake-body", "body"), ("fruit", "fruit"),
                          ("obstacle", "obstacle"), ("collision", "collision")):
            if key in data:
                fields[attr] = Glyph.parse(data[key], getattr(default, attr), f"glyphs.{key}")
        return cls(**fields)


# ─────────────────────────── [files] ─────────────────────────────
@dataclass(frozen=True)
class FileConfig:
    # None disables saving/loading options altogether
    options_file: Optional[Path] = field(default_factory=storage.default_options_path)
    high_scores_dir: Optional[Path] = None
    ignore_errors: bool = False

    @property
    def high_scores_file(self) -> Path:
        if self.high_scores_dir is None:
            return storage.default_high_scores_path()
        return self.high_scores_dir / storage.HIGH_SCORES_FILE_NAME

    @classmethod
    def from_dict(cls, data: dict) -> "FileConfig":
        _reject_unknown(data, {"options-file", "high-scores-dir", "ignore-errors"}, "files")
        fields = {}
        if "options-file" in data:
            fields["options_file"] = _options_file(data["options-file"])
        if "high-scores-dir" in data:
            fields["high_scores_dir"] = _path(data["high-scores-dir"], "files.high-scores-dir")
        if "ignore-errors" in data:
            if not isinstance(data["ignore-errors"], bool):
                raise ConfigError("files.ignore-errors: expected a boolean")
            fields["ignore_errors"] = data["ignore-errors"]
        return cls(**fields)


def _options_file(value: Union[str, bool]) -> Optional[Path]:
    if value is True:
        return storage.default_options_path()
    if value is False:
        return None
    return _path(value, "files.options-file")


def _path(value, where: str) -> Path:
    if not isinstance(value, str):
        raise ConfigError(f"{where}: expected a path string, got {value!r}")
    return Path(value).expanduser()


def _reject_unknown(data: dict, known: set, where: str) -> None:
    unknown = set(data) - known
    if unknown:
        raise ConfigError(f"{where}: unknown key(s): {', '.join(sorted(unknown))}")


# ─────────────────────────── Config ──────────────────────────────
@dataclass(frozen=True)
class Config:
    options: Options = Options()
    files: FileConfig = field(default_factory=FileConfig)
    glyphs: GlyphConfig = GlyphConfig()

    @classmethod
    def load(cls, path: Path, allow_missing: bool = False) -> "Config":
        try:
            with open(path, "rb") as fp:
                data = tomllib.load(fp)
        except FileNotFoundError:
            if allow_missing:
                log.debug("No config file at %s; using defaults", path)
                return cls()
            raise ConfigError(f"Config file not found: {path}") from None
        except OSError as exc:
            raise ConfigError(f"Failed to read config file {path}: {exc}") from exc
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Failed to parse config file {path}: {exc}") from exc
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        _reject_unknown(data, {"options", "files", "glyphs"}, "config")
        for table in ("options", "files", "glyphs"):
            if not isinstance(data.get(table, {}), dict):
                raise ConfigError(f"{table}: expected a table")
        return cls(
            options=Options.from_dict(data.get("options", {})),
            files=FileConfig.from_dict(data.get("files", {})),
            glyphs=GlyphConfig.from_dict(data.get("glyphs", {})),
        )

    # ── Persistence with ignore-errors applied ───────────────────
    def load_options(self) -> Options:
        if self.files.options_file is None:
            return self.options
        try:
            saved = storage.load_options(self.files.options_file, self.options)
        except storage.LoadError:
            if not self.files.ignore_errors:
                raise
            return self.options
        return saved if saved is not None else self.options

    def save_options(self, options: Options) -> None:
        if self.files.options_file is None:
            return
        try:
            storage.save_options(self.files.options_file, options)
        except storage.SaveError:
            if not self.files.ignore_errors:
                raise

    def load_high_scores(self) -> HighScoreTable:
        try:
            return storage.load_high_scores(self.files.high_scores_file)
        except storage.LoadError:
            if not self.files.ignore_errors:
                raise
            return HighScoreTable()

    def save_high_scores(self, table: HighScoreTable) -> None:
        try:
            storage.save_high_scores(self.files.high_scores_file, table)
        except storage.SaveError:
            if not self.files.ignore_errors:
                raise
