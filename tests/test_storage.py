"""Tests for options and high score files."""

import json
import sys
from pathlib import Path

import appdirs
import pytest

from gridsnake import storage
from gridsnake.highscores import HighScoreTable
from gridsnake.options import LevelSize, Options


class TestOptionsFile:
    def test_missing_file(self, tmp_path):
        assert storage.load_options(tmp_path / "options.json") is None

    def test_save_then_load(self, tmp_path):
        path = tmp_path / "nested" / "options.json"
        options = Options(True, True, 7, LevelSize.SMALL)
        storage.save_options(path, options)
        assert json.loads(path.read_text()) == options.to_dict()
        assert storage.load_options(path) == options

    def test_partial_file_uses_defaults(self, tmp_path):
        path = tmp_path / "options.json"
        path.write_text('{"fruits": 99, "obstacles": true}')
        defaults = Options(fruits=3)
        assert storage.load_options(path, defaults) == Options(obstacles=True, fruits=3)

    @pytest.mark.parametrize("content", ["{not json", "[1, 2]"])
    def test_unreadable(self, tmp_path, content):
        path = tmp_path / "options.json"
        path.write_text(content)
        with pytest.raises(storage.LoadError) as exc_info:
            storage.load_options(path)
        assert exc_info.value.what == "options"

    def test_unwritable(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        with pytest.raises(storage.SaveError):
            storage.save_options(blocker / "options.json", Options())


class TestHighScoresFile:
    def test_missing_file(self, tmp_path):
        assert storage.load_high_scores(tmp_path / "highscores.json") == HighScoreTable()

    def test_save_then_load(self, tmp_path):
        path = tmp_path / "highscores.json"
        table = HighScoreTable({Options(): 3, Options(wraparound=True): 8})
        storage.save_high_scores(path, table)
        assert storage.load_high_scores(path) == table

    def test_malformed(self, tmp_path):
        path = tmp_path / "highscores.json"
        path.write_text('{"score": 3}')
        with pytest.raises(storage.LoadError) as exc_info:
            storage.load_high_scores(path)
        assert exc_info.value.what == "high scores"

    def test_invalid_options_reject_the_file(self, tmp_path):
        path = tmp_path / "highscores.json"
        path.write_text(json.dumps([{"options": {"fruits": 99}, "score": 50}]))
        with pytest.raises(storage.LoadError):
            storage.load_high_scores(path)


def test_data_files_live_in_user_data_dir():
    base = Path(appdirs.user_data_dir("gridsnake", appauthor=False))
    assert storage.data_dir() == base
    assert storage.default_options_path() == base / "options.json"
    assert storage.default_high_scores_path() == base / "highscores.json"


@pytest.mark.skipif(not sys.platform.startswith("linux"), reason="XDG paths are Linux-only")
def test_data_dir_honours_xdg(monkeypatch, tmp_path):
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
    assert storage.default_options_path() == tmp_path / "gridsnake" / "options.json"
    assert storage.default_high_scores_path() == tmp_path / "gridsnake" / "highscores.json"
