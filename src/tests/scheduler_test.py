"""Unit tests for the delayed-callback scheduler and the step sequencer."""

from src.logic.sequencer import StepSequencer, TimedStep


def test_callbacks_run_only_when_due(scheduler, advance) -> None:
    ran = []
    scheduler.call_later(1.0, lambda: ran.append("a"))

    advance(0.999)
    assert ran == []

    advance(0.001)
    assert ran == ["a"]


def test_callbacks_run_in_due_order_then_insertion_order(scheduler, advance) -> None:
    ran = []
    scheduler.call_later(2.0, lambda: ran.append("late"))
    scheduler.call_later(1.0, lambda: ran.append("first"))
    scheduler.call_later(1.0, lambda: ran.append("second"))

    advance(5.0)
    assert ran == ["first", "second", "late"]


def test_cancelled_callback_never_runs(scheduler, advance) -> None:
    ran = []
    handle = scheduler.call_later(1.0, lambda: ran.append("x"))
    handle.cancel()
    handle.cancel()

    advance(2.0)
    assert ran == []
    assert handle.cancelled
    assert not handle.pending


def test_chained_callbacks_are_timed_from_their_due_time(scheduler, clock, advance) -> None:
    times = []

    def first() -> None:
        times.append(scheduler.now())
        scheduler.call_later(0.5, lambda: times.append(scheduler.now()))

    scheduler.call_later(1.0, first)

    # One late frame covers both callbacks
    advance(3.0)
    assert times == [1.0, 1.5]
    assert scheduler.now() == clock()


def test_pending_count_and_clear(scheduler) -> None:
    scheduler.call_later(1.0, lambda: None)
    scheduler.call_later(2.0, lambda: None)
    assert scheduler.pending_count() == 2
    assert scheduler.next_due() == 1.0

    scheduler.clear()
    assert scheduler.pending_count() == 0
    assert scheduler.next_due() is None


def test_sequencer_runs_steps_one_after_another(scheduler, advance) -> None:
    log = []
    done = []
    seq = StepSequencer(
        scheduler,
        [
            TimedStep(1.0, lambda: log.append(("a", scheduler.now()))),
            TimedStep(0.5, lambda: log.append(("b", scheduler.now()))),
            TimedStep(0.25, lambda: log.append(("c", scheduler.now()))),
        ],
        on_done=lambda: done.append(True),
    )
    seq.start()

    # Only the first step is queued up front
    assert scheduler.pending_count() == 1

    advance(1.2)
    assert log == [("a", 1.0)]
    assert seq.running

    advance(10.0)
    assert log == [("a", 1.0), ("b", 1.5), ("c", 1.75)]
    assert done == [True]
    assert seq.finished


def test_sequencer_start_is_idempotent(scheduler, advance) -> None:
    log = []
    seq = StepSequencer(scheduler, [TimedStep(1.0, lambda: log.append(1))])
    seq.start()
    seq.start()

    advance(2.0)
    assert log == [1]


def test_sequencer_debug_prints_step_labels(scheduler, advance, capsys) -> None:
    seq = StepSequencer(
        scheduler,
        [TimedStep(1.0, lambda: None, "on C4"), TimedStep(0.5, lambda: None)],
        debug=True,
    )
    seq.start()
    advance(2.0)

    out = capsys.readouterr().out
    assert "[Sequencer] step 1/2: on C4" in out
    assert "step 2/2" not in out
