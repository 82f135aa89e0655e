"""
highscores.py — Best score per Options combination.

Process-wide state owned by the App context: read when the menu is shown,
raised at game over. Persistence lives in storage.py.
"""

from typing import Iterator

from .options import Options


class HighScoreTable:
    def __init__(self, scores: dict[Options, int] | None = None):
        self._scores: dict[Options, int] = dict(scores or {})

    def get(self, options: Options) -> int:
        return self._scores.get(options, 0)

    def record(self, options: Options, score: int) -> bool:
        """Store ``score`` if it beats the current best. Returns True if it did."""
        if score <= self.get(options):
            return False
        self._scores[options] = score
        return True

    def items(self) -> Iterator[tuple[Options, int]]:
        return iter(self._scores.items())

    def __len__(self) -> int:
        return len(self._scores)

    def __eq__(self, other):
        return isinstance(other, HighScoreTable) and self._scores == other._scores

    def __repr__(self):
        return f"HighScoreTable({self._scores!r})"

    # ── JSON shape ───────────────────────────────────────────────
    def to_json(self) -> list[dict]:
        return [
            {"options": options.to_dict(), "score": score}
            for options, score in self._scores.items()
        ]

    @classmethod
    def from_json(cls, data: list) -> "HighScoreTable":
        if not isinstance(data, list):
            raise ValueError("high scores must be a JSON array")
        table = cls()
        for entry in data:
            if not isinstance(entry, dict) or not isinstance(entry.get("options"), dict):
                raise ValueError(f"malformed high score entry: {entry!r}")
            score = entry.get("score")
            if not isinstance(score, int) or isinstance(score, bool) or score < 0:
                raise ValueError(f"invalid high score: {score!r}")
            table.record(Options.from_dict(entry["options"], strict=True), score)
        return table
