"""Simulated board peripherals: clock, digital pins, tone output, preferences."""

from __future__ import annotations

import json
import logging
import os
import tempfile
import time
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from pathlib import Path
from typing import Optional, Union

from .config import BoardPins, Pin

logger = logging.getLogger(__name__)

UINT32_MAX = 0xFFFFFFFF


class Level(IntEnum):
    """Digital pin level."""

    LOW = 0
    HIGH = 1


class PinMode(Enum):
    """Configuration of a digital pin."""

    INPUT = "input"
    OUTPUT = "output"
    INPUT_PULLUP = "input_pullup"


class MonotonicClock:
    """Wall clock measured in milliseconds since the clock was created."""

    def __init__(self) -> None:
        self._start = time.monotonic()

    def millis(self) -> int:
        return int((time.monotonic() - self._start) * 1000)

    def delay(self, ms: int) -> None:
        if ms > 0:
            time.sleep(ms / 1000)


class ManualClock:
    """Clock that only moves when told to; delays advance it instantly."""

    def __init__(self, start: int = 0) -> None:
        self._now = start

    def millis(self) -> int:
        return self._now

    def delay(self, ms: int) -> None:
        self.advance(ms)

    def advance(self, ms: int) -> None:
        if ms < 0:
            raise ValueError("cannot move a clock backwards")
        self._now += ms


class PinBank:
    """In-memory digital pins.

    A pin configured with a pull-up reads HIGH until something drives it;
    any other pin reads LOW until written.
    """

    def __init__(self) -> None:
        self._modes: dict[Pin, PinMode] = {}
        self._levels: dict[Pin, Level] = {}

    def set_mode(self, pin: Pin, mode: PinMode) -> None:
        self._modes[pin] = mode

    def mode(self, pin: Pin) -> Optional[PinMode]:
        return self._modes.get(pin)

    def read(self, pin: Pin) -> Level:
        if pin in self._levels:
            return self._levels[pin]
        return Level.HIGH if self._modes.get(pin) is PinMode.INPUT_PULLUP else Level.LOW

    def write(self, pin: Pin, level: Union[Level, int, bool]) -> None:
        self._levels[pin] = Level.HIGH if level else Level.LOW


@dataclass(frozen=True)
class ToneEvent:
    """One request to sound a frequency; a duration of 0 means until stopped."""

    pin: Pin
    frequency: int
    duration: int


@dataclass
class ToneOutput:
    """Square-wave tone generator that records what it was asked to play."""

    tones: list[ToneEvent] = field(default_factory=list)
    active: dict[Pin, int] = field(default_factory=dict)
    stops: int = 0

    def tone(self, pin: Pin, frequency: int, duration: int = 0) -> None:
        if duration < 0:
            raise ValueError("tone duration must not be negative")
        self.tones.append(ToneEvent(pin, int(frequency), int(duration)))
        self.active[pin] = int(frequency)

    def no_tone(self, pin: Pin) -> None:
        self.active.pop(pin, None)
        self.stops += 1

    @property
    def frequencies(self) -> list[int]:
        return [event.frequency for event in self.tones]


class PreferenceStore:
    """Unsigned 32-bit values stored by key, optionally persisted to a JSON file."""

    def __init__(self, path: Union[str, os.PathLike, None] = None) -> None:
        self._path = Path(path) if path is not None else None
        self._values: dict[str, int] = {}
        if self._path is not None and self._path.exists():
            data = json.loads(self._path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise ValueError(f"{self._path}: expected a JSON object")
            self._values = {str(k): self._check(v) for k, v in data.items()}

    @staticmethod
    def _check(value: object) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"expected an integer, got {value!r}")
        if not 0 <= value <= UINT32_MAX:
            raise ValueError(f"{value} does not fit in an unsigned 32-bit integer")
        return value

    def get_uint(self, key: str, default: int = 0) -> int:
        return self._values.get(key, default)

    def put_uint(self, key: str, value: int) -> None:
        self._values[key] = self._check(value)
        self._save()

    def _save(self) -> None:
        if self._path is None:
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self._path.parent, prefix=".prefs-")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(self._values, handle, sort_keys=True)
            os.replace(tmp, self._path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise


class Board:
    """On-board LEDs: the built-in LED and an active-low RGB LED, where present."""

    def __init__(self, pins: PinBank, board: BoardPins) -> None:
        self._pins = pins
        self._board = board

    def _rgb(self) -> tuple[Pin, ...]:
        b = self._board
        return tuple(p for p in (b.led_red, b.led_green, b.led_blue) if p is not None)

    def setup(self) -> None:
        outputs = self._rgb() + (
            (self._board.led_builtin,) if self._board.led_builtin is not None else ()
        )
        if not outputs:
            return
        logger.info("Setting up board %s...", self._board.name.upper())
        for pin in outputs:
            self._pins.set_mode(pin, PinMode.OUTPUT)

    def turn_off_builtin_led(self) -> None:
        if self._board.led_builtin is None:
            return
        logger.info("Turning off built-in LED...")
        self._pins.write(self._board.led_builtin, Level.LOW)

    def set_rgb_led_color(self, red: bool, green: bool, blue: bool) -> None:
        if not self._board.has_rgb_led:
            return
        b = self._board
        for pin, on in ((b.led_red, red), (b.led_green, green), (b.led_blue, blue)):
            self._pins.write(pin, Level.LOW if on else Level.HIGH)

    def turn_off_rgb_leds(self) -> None:
        if not self._board.has_rgb_led:
            return
        logger.info("Turning off RGB LEDs...")
        for pin in self._rgb():
            self._pins.write(pin, Level.HIGH)