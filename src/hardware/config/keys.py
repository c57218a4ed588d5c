# src/hardware/config/keys.py
"""
Central definition of the physical inputs and the notes they play.

- What a physical input is (PhysicalInput: keyboard key or mouse button).
- Which input plays which note (DEFAULT_INPUT_MAP).

The layout follows a Makey Makey board: its pads show up as keyboard keys,
and the two extra pads arrive as left / right mouse buttons.
"""

from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from src.hardware.config.notes import NoteId


SOURCE_KEYBOARD = "keyboard"
SOURCE_MOUSE = "mouse"

VALID_SOURCES = (SOURCE_KEYBOARD, SOURCE_MOUSE)


@dataclass(frozen=True)
class PhysicalInput:
    """
    One physical input (a key on the keyboard or a mouse button).

    Attributes:
        source: "keyboard" or "mouse".
        code: Key name ("=", "arrowleft", ...), always lower-case,
              or mouse button index as a string.
    """
    source: str
    code: str

    def __post_init__(self) -> None:
        if self.source == SOURCE_KEYBOARD and self.code != self.code.lower():
            object.__setattr__(self, "code", self.code.lower())

    def __str__(self) -> str:
        return f"{self.source}:{self.code}"


def key(code: str) -> PhysicalInput:
    """Build a keyboard input."""
    return PhysicalInput(SOURCE_KEYBOARD, code)


def mouse(button: int) -> PhysicalInput:
    """Build a mouse button input (0 = left, 1 = middle, 2 = right)."""
    return PhysicalInput(SOURCE_MOUSE, str(int(button)))


DEFAULT_INPUT_MAP: Dict[PhysicalInput, NoteId] = {
    key("="): NoteId.C4,
    key(";"): NoteId.CS4,
    key("["): NoteId.D4,
    key("]"): NoteId.DS4,
    key("`"): NoteId.E4,
    key("\\"): NoteId.F4,
    key("arrowup"): NoteId.FS4,
    key("arrowdown"): NoteId.G4,
    key("arrowright"): NoteId.GS4,
    key("arrowleft"): NoteId.A4,
    mouse(0): NoteId.AS4,
    mouse(2): NoteId.B4,
}


class InputMap:
    """
    Validated, read-only lookup from PhysicalInput to NoteId.

    Construction fails with ValueError if an entry has an unknown source
    or does not map to a NoteId. lookup() returns None for unmapped inputs.
    """

    def __init__(self, mapping: Mapping[PhysicalInput, NoteId] = DEFAULT_INPUT_MAP) -> None:
        table: Dict[PhysicalInput, NoteId] = {}
        for physical, note in mapping.items():
            if not isinstance(physical, PhysicalInput):
                raise ValueError(f"Input map key must be PhysicalInput, got {physical!r}")
            if physical.source not in VALID_SOURCES:
                raise ValueError(f"Unknown input source '{physical.source}' for {physical}")
            if not isinstance(note, NoteId):
                raise ValueError(f"Input {physical} maps to {note!r}, which is not a NoteId")
            table[physical] = note
        self._table = table

    def lookup(self, physical: PhysicalInput) -> Optional[NoteId]:
        return self._table.get(physical)

    def __contains__(self, physical: object) -> bool:
        return physical in self._table

    def __len__(self) -> int:
        return len(self._table)

    def inputs_for(self, note: NoteId) -> list:
        """All inputs bound to `note` (the startup help prints these)."""
        return [p for p, n in self._table.items() if n == note]
