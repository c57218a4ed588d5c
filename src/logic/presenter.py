# src/logic/presenter.py
"""
Presentation sink: where highlights, prompts and results go.

The core only emits fire-and-forget calls on a Presenter. ConsolePresenter
prints them to the terminal; a GUI would implement the same methods.
"""

from __future__ import annotations

from typing import Optional, Protocol, Set

from src.hardware.config.notes import ALL_NOTES, NoteId
from src.logic.scorer import ScoreSummary


class Presenter(Protocol):
    def highlight(self, note: NoteId) -> None: ...

    def unhighlight(self, note: NoteId) -> None: ...

    def show_overlay(self, message: str, color: str) -> None: ...

    def hide_overlay(self) -> None: ...

    def show_game_prompt(self) -> None: ...

    def hide_game_prompt(self) -> None: ...

    def show_results(self, summary: ScoreSummary) -> None: ...

    def hide_results(self) -> None: ...


def format_results(summary: ScoreSummary) -> list:
    """
    Results screen as plain text lines:

        Score: 3/5 (60%)
        Correct  Note 1: Expected C4, You played C4
        Wrong    Note 3: Expected E4, You played A4
    """
    lines = [summary.headline()]
    for r in summary.records:
        label = "Correct" if r.correct else "Wrong"
        lines.append(f"{label:<8} Note {r.position}: Expected {r.expected}, You played {r.played}")
    return lines


class ConsolePresenter:
    """
    Prints presentation signals to stdout.

    - Highlights are only printed in debug mode (they are very chatty),
      but the lit keys are always tracked so render_keys() can show them.
    - Prompts / results are always printed.
    """

    def __init__(self, debug: bool = False) -> None:
        self.debug = debug
        self.lit: Set[NoteId] = set()
        self.overlay: Optional[str] = None
        self.prompt_open = False
        self.results_open = False

    def highlight(self, note: NoteId) -> None:
        self.lit.add(note)
        if self.debug:
            print(f"[UI] {self.render_keys()}")

    def unhighlight(self, note: NoteId) -> None:
        self.lit.discard(note)
        if self.debug:
            print(f"[UI] {self.render_keys()}")

    def render_keys(self) -> str:
        return " ".join(f"[{n}]" if n in self.lit else f" {n} " for n in ALL_NOTES)

    def show_overlay(self, message: str, color: str) -> None:
        self.overlay = message
        print(f"[Game] {message}")

    def hide_overlay(self) -> None:
        self.overlay = None

    def show_game_prompt(self) -> None:
        self.prompt_open = True
        print("[Game] Listen & Repeat: type 'start' to play, 'close' to dismiss.")

    def hide_game_prompt(self) -> None:
        self.prompt_open = False

    def show_results(self, summary: ScoreSummary) -> None:
        self.results_open = True
        for line in format_results(summary):
            print(f"[Game] {line}")
        print("[Game] Type 'again' to play another round, 'close' to dismiss.")

    def hide_results(self) -> None:
        self.results_open = False
