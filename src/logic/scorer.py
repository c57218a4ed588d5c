# src/logic/scorer.py

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union

from src.hardware.config.notes import NoteId


class _Missed:
    """Sentinel for a melody position the player never played."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSED"

    def __str__(self) -> str:
        return "missed"


MISSED = _Missed()

Played = Union[NoteId, _Missed]


@dataclass(frozen=True)
class ScoreRecord:
    position: int      # 1-based
    expected: NoteId
    played: Played
    correct: bool


@dataclass(frozen=True)
class ScoreSummary:
    records: Tuple[ScoreRecord, ...]
    correct: int
    total: int

    @property
    def percent(self) -> int:
        if self.total == 0:
            return 0
        return int(round(self.correct / self.total * 100))

    def headline(self) -> str:
        return f"Score: {self.correct}/{self.total} ({self.percent}%)"


def score_round(melody: Sequence[NoteId], player_input: Sequence[NoteId]) -> ScoreSummary:
    """
    Compare what the player played against the melody, position by position.

    Always returns one record per melody note. Positions the player did not
    reach are recorded as MISSED and count as wrong. Extra inputs past the
    melody length are ignored.
    """
    records: List[ScoreRecord] = []
    for i, expected in enumerate(melody):
        played: Played = player_input[i] if i < len(player_input) else MISSED
        records.append(
            ScoreRecord(
                position=i + 1,
                expected=expected,
                played=played,
                correct=played == expected,
            )
        )

    correct = sum(1 for r in records if r.correct)
    return ScoreSummary(records=tuple(records), correct=correct, total=len(melody))
