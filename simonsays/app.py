"""Command-line entry point: boots the game and runs its main loop."""

from __future__ import annotations

import argparse
import logging
import random
from typing import Optional, Sequence

from .config import BoardPins, Pin, pins_for
from .fsm import StateType
from .game import Game, Hardware
from .hardware import Level, ManualClock, MonotonicClock, PinBank, PinMode, PreferenceStore

logger = logging.getLogger(__name__)

DEBOUNCE_DELAY = 50
LONG_PRESS_DELAY = 7000
RESTART_DELAY = 100
STARTUP_DELAY = 1000


class RestartRequested(Exception):
    """Raised when a short press of the reset button asks for a restart."""


class ResetButton:
    """The reset button.

    A short press restarts the system; holding it for longer than the
    long-press delay while the game is idle resets the high score.
    """

    def __init__(
        self,
        game: Game,
        pins: PinBank,
        clock,
        pin: Pin,
        debounce_delay: int = DEBOUNCE_DELAY,
        long_press_delay: int = LONG_PRESS_DELAY,
    ) -> None:
        self._game = game
        self._pins = pins
        self._clock = clock
        self.pin = pin
        self.debounce_delay = debounce_delay
        self.long_press_delay = long_press_delay
        self._last_state = Level.HIGH
        self._last_change = 0
        self._pressed = False
        self._press_start = 0

    @property
    def is_pressed(self) -> bool:
        """True while a debounced press is being tracked."""
        return self._pressed

    def check(self) -> None:
        """Sample the button once; raises RestartRequested on a short press."""
        current = self._pins.read(self.pin)

        if current != self._last_state:
            self._last_change = self._clock.millis()
            self._last_state = current

        if self._clock.millis() - self._last_change <= self.debounce_delay:
            return

        if current == Level.LOW and not self._pressed:
            self._pressed = True
            self._press_start = self._clock.millis()
            logger.info("Reset button pressed...")
        elif current == Level.LOW and self._pressed:
            held = self._clock.millis() - self._press_start
            if held > self.long_press_delay and self._game.current_state() is StateType.INITIAL:
                logger.info("Long press detected - resetting high score!")
                self._game.reset_high_score()
                self._pressed = False
        elif current == Level.HIGH and self._pressed:
            held = self._clock.millis() - self._press_start
            self._pressed = False
            if held < self.long_press_delay:
                logger.info("Short press - restarting system...")
                self._clock.delay(RESTART_DELAY)
                raise RestartRequested()


def _boot(hardware: Hardware) -> tuple[Game, ResetButton]:
    board: BoardPins = hardware.board
    hardware.pins.set_mode(board.reset_button, PinMode.INPUT_PULLUP)
    game = Game(hardware)
    if not game.setup():
        logger.error("Game setup failed!")
    return game, ResetButton(game, hardware.pins, hardware.clock, board.reset_button)


def _run(hardware: Hardware, iterations: Optional[int]) -> None:
    game, reset = _boot(hardware)
    done = 0
    while iterations is None or done < iterations:
        done += 1
        try:
            reset.check()
        except RestartRequested:
            game, reset = _boot(hardware)
            continue
        game.loop()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="simonsays", description="Run the Simon memory game.")
    parser.add_argument("--board", default="arduino_nano_esp32", help="board pin layout to use")
    parser.add_argument("--preferences", help="JSON file that keeps the high score")
    parser.add_argument(
        "--iterations", type=int, help="stop after this many passes of the main loop"
    )
    parser.add_argument(
        "--instant", action="store_true", help="let delays pass instantly instead of waiting"
    )
    parser.add_argument("--seed", type=int, help="seed for the colour sequence")
    parser.add_argument("-v", "--verbose", action="store_true", help="log what the game does")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Boot the game and run its main loop."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        board = pins_for(args.board)
    except ValueError as exc:
        parser.error(str(exc))
    if args.iterations is not None and args.iterations < 0:
        parser.error("--iterations must not be negative")
    try:
        preferences = PreferenceStore(args.preferences)
    except (ValueError, TypeError, OSError) as exc:
        parser.error(f"cannot read preferences: {exc}")

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    clock = ManualClock() if args.instant else MonotonicClock()
    hardware = Hardware(
        board=board,
        clock=clock,
        preferences=preferences,
        rng=random.Random(args.seed),
    )
    clock.delay(STARTUP_DELAY)

    try:
        _run(hardware, args.iterations)
    except KeyboardInterrupt:
        logger.info("Interrupted")
    return 0