# src/hardware/config/notes.py
"""
Central definition of the playable notes and their synthesis frequencies.

- Which notes exist (NoteId enum, one per semitone from C4 to B4).
- What frequency each note is synthesized at (NOTE_FREQUENCIES).
"""

from enum import Enum
from typing import Dict, List


class NoteId(Enum):
    """
    Logical note identifiers.

    The value is the display name used by the presentation layer.
    """
    C4 = "C4"
    CS4 = "C#4"
    D4 = "D4"
    DS4 = "D#4"
    E4 = "E4"
    F4 = "F4"
    FS4 = "F#4"
    G4 = "G4"
    GS4 = "G#4"
    A4 = "A4"
    AS4 = "A#4"
    B4 = "B4"

    def __str__(self) -> str:
        return self.value


ALL_NOTES: List[NoteId] = list(NoteId)

NOTE_FREQUENCIES: Dict[NoteId, float] = {
    NoteId.C4: 261.63,
    NoteId.CS4: 277.18,
    NoteId.D4: 293.66,
    NoteId.DS4: 311.13,
    NoteId.E4: 329.63,
    NoteId.F4: 349.23,
    NoteId.FS4: 369.99,
    NoteId.G4: 392.00,
    NoteId.GS4: 415.30,
    NoteId.A4: 440.00,
    NoteId.AS4: 466.16,
    NoteId.B4: 493.88,
}


def validate_frequencies(table: Dict[NoteId, float]) -> None:
    """
    Make sure every NoteId has a positive frequency.

    Raises ValueError on a missing or non-positive entry, so a broken table
    fails at import time instead of producing a silent voice later.
    """
    missing = [n for n in ALL_NOTES if n not in table]
    if missing:
        names = ", ".join(str(n) for n in missing)
        raise ValueError(f"No frequency defined for: {names}")

    for note, freq in table.items():
        if freq <= 0:
            raise ValueError(f"Frequency for {note} must be positive, got {freq}")


def note_frequency(note: NoteId) -> float:
    return NOTE_FREQUENCIES[note]


validate_frequencies(NOTE_FREQUENCIES)
