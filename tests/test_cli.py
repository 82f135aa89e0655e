"""Tests for the command-line entry point."""

import json

import appdirs
import pytest

import gridsnake.controller
from gridsnake import __version__, cli
from gridsnake.options import Options
from gridsnake.settings import Config, FileConfig


class FakeController:
    instances = []

    def __init__(self, app, glyphs):
        self.app = app
        self.glyphs = glyphs
        self.ran = False
        FakeController.instances.append(self)

    def run(self):
        self.ran = True


@pytest.fixture
def fake_controller(monkeypatch, tmp_path):
    monkeypatch.setattr(appdirs, "user_config_dir", lambda *args, **kwargs: str(tmp_path / "config"))
    monkeypatch.setattr(appdirs, "user_data_dir", lambda *args, **kwargs: str(tmp_path / "data"))
    monkeypatch.setattr(gridsnake.controller, "GameController", FakeController)
    FakeController.instances = []
    return FakeController


def test_version(capsys):
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["--version"])
    assert exc_info.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_missing_explicit_config(tmp_path, capsys):
    assert cli.main(["-c", str(tmp_path / "missing.toml")]) == 1
    assert "not found" in capsys.readouterr().err


def test_invalid_config(tmp_path, capsys):
    path = tmp_path / "config.toml"
    path.write_text("[files]\nignore-errors = 1\n")
    assert cli.main(["--config", str(path)]) == 1
    assert "ignore-errors" in capsys.readouterr().err


def test_runs_with_defaults(fake_controller):
    assert cli.main([]) == 0
    (controller,) = fake_controller.instances
    assert controller.ran
    assert controller.app.globals.options == Options()
    assert controller.app.notice is None


def test_runs_with_config_and_saved_options(fake_controller, tmp_path):
    options_path = tmp_path / "opts.json"
    options_path.write_text(json.dumps(Options(fruits=4).to_dict()))
    config_path = tmp_path / "config.toml"
    config_path.write_text(
        f'[files]\noptions-file = "{options_path}"\n\n[glyphs]\nfruit = "@"\n'
    )
    assert cli.main(["-c", str(config_path), "-v"]) == 0
    (controller,) = fake_controller.instances
    assert controller.app.menu.options == Options(fruits=4)
    assert controller.glyphs.fruit.symbol == "@"


class TestLoadGlobals:
    def test_unreadable_files_become_notice(self, tmp_path):
        (tmp_path / "options.json").write_text("{")
        (tmp_path / "highscores.json").write_text("[{}]")
        config = Config(
            options=Options(fruits=2),
            files=FileConfig(options_file=tmp_path / "options.json", high_scores_dir=tmp_path),
        )
        globals_, notice = cli.load_globals(config)
        assert globals_.options == Options(fruits=2)
        assert len(globals_.high_scores) == 0
        assert "options" in notice
        assert "high scores" in notice

    def test_clean_load(self, config):
        globals_, notice = cli.load_globals(config)
        assert globals_.options == config.options
        assert notice is None
