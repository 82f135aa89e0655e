import random

import pytest

from gridsnake.app import App, Globals
from gridsnake.highscores import HighScoreTable
from gridsnake.model import Bounds, Coordinate, Direction, Level, Snake
from gridsnake.settings import Config, FileConfig


@pytest.fixture
def rng():
    return random.Random(0x0123456789ABCDEF)


@pytest.fixture
def config(tmp_path):
    return Config(files=FileConfig(
        options_file=tmp_path / "options.json",
        high_scores_dir=tmp_path,
    ))


@pytest.fixture
def app(config, rng):
    globals_ = Globals(config, config.options, HighScoreTable())
    return App(globals_, rng=rng, clock=lambda: 100.0)


def make_level(width, height, cells, direction=Direction.EAST, fruits=(),
               obstacles=(), wrap=False, fruit_count=None, rng=None):
    """Level with a hand-placed snake (head first), fruits and obstacles."""
    head, *segments = [Coordinate(*c) for c in cells]
    fruits = {Coordinate(*c) for c in fruits}
    return Level(
        Bounds(width, height, wrap),
        Snake(head, direction, segments),
        obstacles={Coordinate(*c) for c in obstacles},
        fruit_count=len(fruits) if fruit_count is None else fruit_count,
        fruits=fruits,
        rng=rng,
    )
