from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from src.hardware.config.keys import PhysicalInput


class EventType(Enum):
    PRESS = auto()
    RELEASE = auto()
    START_GAME = auto()    # keyboard: start (answer to the game prompt)
    PLAY_AGAIN = auto()    # keyboard: again (from the results screen)
    CLOSE = auto()         # keyboard: close (dismiss prompt / results)
    TOGGLE_WAVE = auto()   # keyboard: wave (same as the C4 + D4 combo, no wait)
    QUIT = auto()


@dataclass
class InputEvent:
    type: EventType

    # For PRESS / RELEASE events
    input: Optional[PhysicalInput] = None

    # Source tag ("keyboard" / "mouse" / "terminal"...), optional
    source: Optional[str] = None
