"""Tests for Options and the menu option model."""

import logging

import pytest

from gridsnake import options as opts
from gridsnake.options import LevelSize, OptKey, Options


class TestOptions:
    def test_defaults(self):
        options = Options()
        assert options == Options(False, False, 1, LevelSize.LARGE)

    def test_hashable_by_value(self):
        scores = {Options(fruits=3): 7}
        assert scores[Options(fruits=3)] == 7

    @pytest.mark.parametrize("fruits", [0, 11, -1])
    def test_fruit_range(self, fruits):
        with pytest.raises(ValueError):
            Options(fruits=fruits)

    def test_dict_round_trip(self):
        options = Options(True, True, 4, LevelSize.MEDIUM)
        assert options.to_dict() == {
            "wraparound": True, "obstacles": True, "fruits": 4, "level-size": "medium",
        }
        assert Options.from_dict(options.to_dict()) == options

    def test_missing_fields_use_defaults(self):
        defaults = Options(fruits=5, level_size=LevelSize.SMALL)
        assert Options.from_dict({"wraparound": True}, defaults) == Options(
            wraparound=True, fruits=5, level_size=LevelSize.SMALL,
        )

    def test_invalid_field_falls_back_alone(self, caplog):
        data = {"wraparound": True, "fruits": 42, "level-size": "huge", "obstacles": "yes"}
        with caplog.at_level(logging.WARNING):
            options = Options.from_dict(data)
        assert options == Options(wraparound=True)
        assert "fruits" in caplog.text
        assert "level-size" in caplog.text

    def test_bool_is_not_a_fruit_count(self):
        assert Options.from_dict({"fruits": True}).fruits == 1

    def test_non_table(self):
        assert Options.from_dict(["nope"]) == Options()

    @pytest.mark.parametrize("data", [
        {"fruits": 99},
        {"fruits": True},
        {"level-size": "huge"},
        {"obstacles": "yes"},
        ["nope"],
    ])
    def test_strict_rejects_invalid(self, data):
        with pytest.raises(ValueError):
            Options.from_dict(data, strict=True)

    def test_strict_keeps_missing_defaults(self):
        assert Options.from_dict({"fruits": 5}, strict=True) == Options(fruits=5)


class TestAdjust:
    def test_flag(self):
        options = Options()
        assert opts.increase(options, OptKey.WRAPAROUND).wraparound
        assert not opts.decrease(options, OptKey.OBSTACLES).obstacles
        assert opts.toggle(options, OptKey.OBSTACLES).obstacles
        assert not opts.toggle(Options(obstacles=True), OptKey.OBSTACLES).obstacles

    def test_fruit_count_is_clamped(self):
        assert opts.increase(Options(fruits=3), OptKey.FRUITS).fruits == 4
        assert opts.increase(Options(fruits=10), OptKey.FRUITS).fruits == 10
        assert opts.decrease(Options(fruits=1), OptKey.FRUITS).fruits == 1

    def test_level_size_steps(self):
        small = Options(level_size=LevelSize.SMALL)
        assert opts.increase(small, OptKey.LEVEL_SIZE).level_size is LevelSize.MEDIUM
        assert opts.decrease(small, OptKey.LEVEL_SIZE) == small
        assert opts.increase(Options(), OptKey.LEVEL_SIZE) == Options()

    def test_toggle_ignored_for_non_flags(self):
        options = Options(fruits=2)
        assert opts.toggle(options, OptKey.FRUITS) == options
        assert opts.toggle(options, OptKey.LEVEL_SIZE) == options

    def test_display_value(self):
        assert opts.display_value(Options(), OptKey.WRAPAROUND) == "[ ]"
        assert opts.display_value(Options(obstacles=True), OptKey.OBSTACLES) == "[✓]"
        assert opts.display_value(Options(fruits=1), OptKey.FRUITS) == "◁   1    ▶"
        assert opts.display_value(Options(), OptKey.LEVEL_SIZE) == "◀ Large  ▷"
