"""Tests for the TOML configuration file."""

import appdirs
import pytest

from gridsnake import storage
from gridsnake.highscores import HighScoreTable
from gridsnake.model import Direction
from gridsnake.options import LevelSize, Options
from gridsnake.settings import (
    Config, ConfigError, FileConfig, Glyph, GlyphConfig, default_config_path,
)

CONFIG_TOML = """
[options]
wraparound = true
fruits = 3
level-size = "small"

[files]
options-file = false
high-scores-dir = "~/scores"
ignore-errors = true

[glyphs]
fruit = "@"
obstacle = { symbol = "#", color = "#808080" }

[glyphs.snake-head]
north = "A"
"""


class TestConfigFile:
    def test_load(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        path = tmp_path / "config.toml"
        path.write_text(CONFIG_TOML, encoding="utf-8")
        config = Config.load(path)
        assert config.options == Options(wraparound=True, fruits=3, level_size=LevelSize.SMALL)
        assert config.files.options_file is None
        assert config.files.high_scores_dir == tmp_path / "scores"
        assert config.files.ignore_errors
        assert config.glyphs.fruit == Glyph("@", "lightcoral")
        assert config.glyphs.obstacle == Glyph("#", "#808080")
        assert config.glyphs.head(Direction.NORTH).symbol == "A"
        assert config.glyphs.head(Direction.EAST).symbol == "<"

    def test_missing_default_file(self, tmp_path):
        assert Config.load(tmp_path / "nope.toml", allow_missing=True) == Config()

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            Config.load(tmp_path / "nope.toml")

    def test_bad_toml(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("[options\n")
        with pytest.raises(ConfigError, match="parse"):
            Config.load(path)

    @pytest.mark.parametrize("data, match", [
        ({"colours": {}}, "unknown"),
        ({"files": {"options-dir": "x"}}, "unknown"),
        ({"files": {"ignore-errors": "yes"}}, "boolean"),
        ({"glyphs": {"fruit": "ab"}}, "single character"),
        ({"glyphs": {"fruit": " "}}, "visible"),
        ({"glyphs": {"snake-head": {"up": "^"}}}, "unknown"),
        ({"glyphs": {"fruit": {"symbol": "*", "color": 3}}}, "color"),
        ({"options": 5}, "table"),
    ])
    def test_invalid(self, data, match):
        with pytest.raises(ConfigError, match=match):
            Config.from_dict(data)

    def test_options_file_true_means_default(self):
        config = Config.from_dict({"files": {"options-file": True}})
        assert config.files.options_file == storage.default_options_path()

    def test_bad_option_value_falls_back(self):
        config = Config.from_dict({"options": {"fruits": 0, "obstacles": True}})
        assert config.options == Options(obstacles=True)


class TestPersistenceThroughConfig:
    def test_options_fall_back_to_config_defaults(self, config):
        assert config.load_options() == config.options

    def test_options_round_trip(self, config):
        options = Options(fruits=6)
        config.save_options(options)
        assert config.load_options() == options

    def test_options_file_disabled(self, tmp_path):
        config = Config(options=Options(fruits=2), files=FileConfig(options_file=None))
        config.save_options(Options(fruits=9))
        assert config.load_options() == Options(fruits=2)

    def test_load_errors_propagate(self, config):
        config.files.options_file.write_text("garbage")
        with pytest.raises(storage.LoadError):
            config.load_options()

    def test_ignore_errors(self, tmp_path):
        (tmp_path / "options.json").write_text("garbage")
        (tmp_path / "highscores.json").write_text("garbage")
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        config = Config(
            options=Options(fruits=4),
            files=FileConfig(options_file=tmp_path / "options.json",
                             high_scores_dir=tmp_path, ignore_errors=True),
        )
        assert config.load_options() == Options(fruits=4)
        assert config.load_high_scores() == HighScoreTable()
        unwritable = Config(files=FileConfig(options_file=blocker / "o.json",
                                             high_scores_dir=blocker, ignore_errors=True))
        unwritable.save_options(Options())
        unwritable.save_high_scores(HighScoreTable({Options(): 1}))

    def test_high_scores_round_trip(self, config):
        table = HighScoreTable({Options(obstacles=True): 11})
        config.save_high_scores(table)
        assert config.load_high_scores() == table


def test_glyph_defaults():
    glyphs = GlyphConfig()
    assert glyphs.head(Direction.WEST).symbol == ">"
    assert glyphs.body.symbol == "⚬"
    assert glyphs.collision.symbol == "×"


def test_config_file_lives_in_user_config_dir(monkeypatch, tmp_path):
    monkeypatch.setattr(appdirs, "user_config_dir", lambda *args, **kwargs: str(tmp_path))
    assert default_config_path() == tmp_path / "config.toml"
