# src/hardware/input/keyboard_input.py

import sys
import select
from typing import List, Optional

from src.hardware.config.keys import PhysicalInput, key, mouse
from src.logic.input_event import InputEvent, EventType


COMMAND_EVENTS = {
    "start": EventType.START_GAME,
    "again": EventType.PLAY_AGAIN,
    "close": EventType.CLOSE,
    "wave": EventType.TOGGLE_WAVE,
    "quit": EventType.QUIT,
    "exit": EventType.QUIT,
}


def parse_input_name(name: str) -> Optional[PhysicalInput]:
    """
    "mouse0" / "mouse2" → mouse button, anything else → keyboard key.
    """
    name = name.strip().lower()
    if not name:
        return None
    if name.startswith("mouse") and name[5:].isdigit():
        return mouse(int(name[5:]))
    return key(name)


class KeyboardInput:
    """
    Reads commands from stdin (non-blocking) and converts them into InputEvent objects.

    A terminal cannot report real key-down / key-up, so held inputs are
    spelled out as commands. This is the development / debugging input
    source; a GUI front end would emit the same events.

    Supported commands (case-insensitive, several per line separated by ","):

        down <input>   - PRESS the input and keep it held
        up <input>     - RELEASE the input
        tap <input>    - PRESS then RELEASE

            <input> is a key name ("=", ";", "[", "]", "`", "\\",
            "arrowup", "arrowdown", "arrowright", "arrowleft")
            or a mouse button ("mouse0", "mouse2").

        start          - start a Listen & Repeat round
        again          - play another round from the results screen
        close          - dismiss the prompt / results
        wave           - flip sine / square right away
        quit           - leave the program

    Example: hold the game combo with "down arrowleft, down mouse2",
    wait three seconds, then "up arrowleft, up mouse2".
    """

    def __init__(self, stream=None) -> None:
        self.stream = stream if stream is not None else sys.stdin

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def poll(self) -> List[InputEvent]:
        """
        Check stdin once (non-blocking) and return the InputEvent(s) of one
        line, if any. Returns [] when nothing is pending.
        """
        ready, _, _ = select.select([self.stream], [], [], 0.0)
        if not ready:
            return []

        line = self.stream.readline()
        if not line:
            return []

        return parse_line(line)


def parse_line(line: str) -> List[InputEvent]:
    events: List[InputEvent] = []

    for chunk in line.split(","):
        parts = chunk.strip().split()
        if not parts:
            continue

        cmd = parts[0].lower()

        if cmd in COMMAND_EVENTS:
            events.append(InputEvent(type=COMMAND_EVENTS[cmd], source="terminal"))
            continue

        if cmd in ("down", "up", "tap") and len(parts) >= 2:
            physical = parse_input_name(parts[1])
            if physical is None:
                print(f"[KB] Missing input name in '{chunk.strip()}'")
                continue

            if cmd in ("down", "tap"):
                events.append(InputEvent(type=EventType.PRESS, input=physical, source=physical.source))
            if cmd in ("up", "tap"):
                events.append(InputEvent(type=EventType.RELEASE, input=physical, source=physical.source))
            continue

        if cmd == "help":
            print_help()
            continue

        print(f"[KB] Unknown command '{chunk.strip()}', type 'help'")

    return events


def print_help() -> None:
    print("Commands:")
    print("  down <input>  /  up <input>  /  tap <input>")
    print("      inputs: =  ;  [  ]  `  \\  arrowup arrowdown arrowright arrowleft mouse0 mouse2")
    print("  start | again | close | wave | quit")
    print("  Several commands per line: down = , down [")
