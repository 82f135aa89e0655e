"""
storage.py — JSON files for saved options and high scores.

Missing files are not errors: they load as defaults. Anything else that goes
wrong is raised as LoadError / SaveError for the App to report; gameplay
never depends on these succeeding.
"""

import json
import logging
from pathlib import Path

import appdirs

from .config import APP_NAME
from .highscores import HighScoreTable
from .options import Options

log = logging.getLogger(__name__)

OPTIONS_FILE_NAME = "options.json"
HIGH_SCORES_FILE_NAME = "highscores.json"


class StorageError(Exception):
    def __init__(self, message: str, what: str):
        super().__init__(message)
        self.what = what


class LoadError(StorageError):
    pass


class SaveError(StorageError):
    pass


def data_dir() -> Path:
    return Path(appdirs.user_data_dir(APP_NAME, appauthor=False))


def default_options_path() -> Path:
    return data_dir() / OPTIONS_FILE_NAME


def default_high_scores_path() -> Path:
    return data_dir() / HIGH_SCORES_FILE_NAME


# ── Generic helpers ───────────────────────────────────────────────
def _read_json(path: Path, what: str):
    try:
        with open(path, encoding="utf-8") as fp:
            return json.load(fp)
    except FileNotFoundError:
        return None
    except (OSError, ValueError) as exc:
        raise LoadError(f"Failed to read {what} from {path}: {exc}", what) from exc


def _write_json(path: Path, data, what: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as fp:
            json.dump(data, fp)
            fp.write("\n")
    except OSError as exc:
        raise SaveError(f"Failed to save {what} to {path}: {exc}", what) from exc
    log.debug("Saved %s to %s", what, path)


# ── Options ───────────────────────────────────────────────────────
def load_options(path: Path, defaults: Options | None = None) -> Options | None:
    """Saved options, or None when nothing has been saved yet."""
    data = _read_json(path, "options")
    if data is None:
        return None
    if not isinstance(data, dict):
        raise LoadError(f"Failed to read options from {path}: expected a JSON object", "options")
    return Options.from_dict(data, defaults)


def save_options(path: Path, options: Options) -> None:
    _write_json(path, options.to_dict(), "options")


# ── High scores ───────────────────────────────────────────────────
def load_high_scores(path: Path) -> HighScoreTable:
    data = _read_json(path, "high scores")
    if data is None:
        return HighScoreTable()
    try:
        return HighScoreTable.from_json(data)
    except ValueError as exc:
        raise LoadError(f"Failed to read high scores from {path}: {exc}", "high scores") from exc


def save_high_scores(path: Path, table: HighScoreTable) -> None:
    _write_json(path, table.to_json(), "high scores")
