"""Unit tests for InputController aggregation."""

from src.hardware.config.keys import key
from src.logic.input_controller import InputController
from src.logic.input_event import EventType, InputEvent


class _Source:
    def __init__(self, events):
        self.events = events

    def poll(self):
        return list(self.events)


class _BrokenSource:
    def poll(self):
        raise OSError("device unplugged")


def test_events_from_all_sources_in_order() -> None:
    a = _Source([InputEvent(EventType.PRESS, input=key("="))])
    b = _Source([InputEvent(EventType.START_GAME)])
    controller = InputController(use_keyboard=False, sources=[a, b])

    assert [e.type for e in controller.poll()] == [EventType.PRESS, EventType.START_GAME]


def test_failing_source_is_skipped(capsys) -> None:
    good = _Source([InputEvent(EventType.QUIT)])
    controller = InputController(use_keyboard=False, sources=[_BrokenSource(), good])

    assert [e.type for e in controller.poll()] == [EventType.QUIT]
    assert "device unplugged" in capsys.readouterr().out
