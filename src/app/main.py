from __future__ import annotations

import argparse
import signal
import time

from src.hardware.audio.audio_engine import NullAudioSink
from src.hardware.config.keys import SOURCE_MOUSE, InputMap
from src.hardware.config.notes import ALL_NOTES
from src.hardware.input.keyboard_input import print_help

from src.logic.input_controller import InputController
from src.logic.instrument import Instrument
from src.logic.presenter import ConsolePresenter
from src.logic.scheduler import Scheduler


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Pi-ano Listen & Repeat")
    parser.add_argument("--debug", action="store_true", help="print every note / combo / router event")
    parser.add_argument("--no-audio", action="store_true", help="run without a sound device")
    parser.add_argument("--fps", type=float, default=60.0, help="main loop frame rate (default: 60)")
    args = parser.parse_args(argv)

    if args.fps <= 0:
        parser.error("--fps must be positive")

    return args


def open_audio(no_audio: bool, debug: bool):
    """
    Open the simpleaudio sink, or fall back to a silent sink when audio is
    disabled or the device / library is unavailable.
    """
    if no_audio:
        print("[Main] Audio disabled (--no-audio)")
        return NullAudioSink(debug=debug)

    try:
        from src.hardware.audio.simpleaudio_sink import SimpleAudioSink

        return SimpleAudioSink(debug=debug)
    except Exception as e:
        print("[Main] Audio unavailable, running silent:", e)
        return NullAudioSink(debug=debug)


def main(argv=None) -> None:
    """Main entry point for the Pi-ano Listen & Repeat application."""
    args = parse_args(argv)

    # ------------------------------------------------------------------
    # Engines
    # ------------------------------------------------------------------
    audio = open_audio(args.no_audio, args.debug)
    presenter = ConsolePresenter(debug=args.debug)
    scheduler = Scheduler(time_fn=time.monotonic)

    instrument = Instrument(
        sink=audio,
        presenter=presenter,
        scheduler=scheduler,
        debug=args.debug,
    )

    # ------------------------------------------------------------------
    # Signal handling
    # ------------------------------------------------------------------
    # Treat SIGINT (Ctrl+C) / SIGTERM as KeyboardInterrupt so both paths
    # trigger the same cleanup logic.
    def handle_signal(signum, frame):
        print(f"\n[Main] Received signal {signum}, requesting shutdown...")
        raise KeyboardInterrupt()

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    input_controller = InputController(use_keyboard=True)

    print_startup_help(instrument.input_map)

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------
    frame_sec = 1.0 / args.fps
    try:
        while not instrument.quit_requested:
            events = input_controller.poll()

            try:
                instrument.handle_events(events)
                instrument.update(time.monotonic())
            except Exception as e:
                print("[Main] frame error:", e)

            time.sleep(frame_sec)

    except KeyboardInterrupt:
        print("\n[Main] KeyboardInterrupt / termination signal: shutting down...")

    finally:
        # Best-effort cleanup: fade out voices, then close the device.
        try:
            instrument.shutdown()
            time.sleep(0.1)  # let release tails finish
        except Exception:
            pass

        try:
            audio.close()
        except Exception:
            pass

        print("[Main] Cleanup done. Bye.")


def print_startup_help(input_map: InputMap) -> None:
    """Print a quick reference for inputs and combos."""
    print("=== Pi-ano Listen & Repeat ===\n")
    print_help()
    print()
    print("Note layout:")
    for note in ALL_NOTES:
        names = [
            f"mouse{p.code}" if p.source == SOURCE_MOUSE else p.code
            for p in input_map.inputs_for(note)
        ]
        print(f"  {str(note):<4} {', '.join(names) or '-'}")
    print()
    print("Combos (hold for 3 seconds):")
    print("  arrowleft + mouse2   - open the Listen & Repeat prompt")
    print("  C4 (=) + D4 ([)      - switch sine / square")
    print()
    print("Press Ctrl+C in the terminal to quit.\n")


if __name__ == "__main__":
    main()
