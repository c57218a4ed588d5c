"""Unit tests for the terminal command parser."""

import io

from src.hardware.config.keys import key, mouse
from src.hardware.input.keyboard_input import parse_input_name, parse_line
from src.logic.input_event import EventType


def test_down_and_up() -> None:
    events = parse_line("down =, up arrowLeft\n")

    assert [(e.type, e.input) for e in events] == [
        (EventType.PRESS, key("=")),
        (EventType.RELEASE, key("arrowleft")),
    ]
    assert events[0].source == "keyboard"


def test_tap_emits_press_then_release() -> None:
    events = parse_line("tap mouse2")
    assert [e.type for e in events] == [EventType.PRESS, EventType.RELEASE]
    assert all(e.input == mouse(2) for e in events)
    assert events[0].source == "mouse"


def test_commands() -> None:
    events = parse_line("START, again, close, wave, quit")
    assert [e.type for e in events] == [
        EventType.START_GAME,
        EventType.PLAY_AGAIN,
        EventType.CLOSE,
        EventType.TOGGLE_WAVE,
        EventType.QUIT,
    ]


def test_unknown_and_blank_input(capsys) -> None:
    assert parse_line("   ") == []
    assert parse_line("jump 3") == []
    assert "Unknown command" in capsys.readouterr().out


def test_input_names() -> None:
    assert parse_input_name("mouse0") == mouse(0)
    assert parse_input_name("MOUSE") == key("mouse")
    assert parse_input_name("\\") == key("\\")
    assert parse_input_name("  ") is None


def test_parse_line_reads_backslash_key() -> None:
    stream = io.StringIO("down \\\n")
    events = parse_line(stream.readline())
    assert events[0].input == key("\\")
