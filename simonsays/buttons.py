"""Debounced colour buttons and the tracker of which one is pressed or tapped."""

from __future__ import annotations

from typing import Callable, Optional

from .config import BUTTONS_DEBOUNCE_DELAY, BoardPins, Pin
from .hardware import Level, PinBank, PinMode
from .types import Color


class Button:
    """One push button wired to ground, read through a pull-up."""

    def __init__(self, name: str, color: Color, pin: Pin) -> None:
        self.name = name
        self.color = color
        self.pin = pin
        self.is_pressed = False
        self.is_tapped = False
        self._last_state = False
        self._last_debounce_time = 0

    def __repr__(self) -> str:
        return f"Button({self.name!r}, {self.color.name}, pin={self.pin!r})"

    def set_pressed(self, value: bool) -> None:
        if self.is_pressed == value:
            return
        self.is_pressed = value
        if value:
            self.is_tapped = False

    def set_tapped(self, value: bool) -> None:
        self.is_tapped = value

    def read(self, pins: PinBank) -> bool:
        """True while the button is held down (the pin is pulled low)."""
        return pins.read(self.pin) == Level.LOW

    def update_state(self, pins: PinBank, now: int) -> None:
        """Sample the pin at time ``now`` (ms) and update the debounced state."""
        reading = self.read(pins)
        if reading != self._last_state:
            self._last_debounce_time = now
            self._last_state = reading

        if now - self._last_debounce_time > BUTTONS_DEBOUNCE_DELAY:
            if reading and not self.is_pressed:
                self.is_pressed = True
                self.is_tapped = False
            elif not reading and self.is_pressed:
                self.is_pressed = False
                self.is_tapped = True

    def reset(self) -> None:
        self.is_pressed = False
        self.is_tapped = False
        self._last_state = False
        self._last_debounce_time = 0


ButtonCallback = Callable[[Button], None]


class Buttons:
    """The four colour buttons; reports presses and releases to callbacks."""

    def __init__(
        self,
        pins: PinBank,
        clock,
        board: BoardPins,
        on_pressed: Optional[ButtonCallback] = None,
        on_released: Optional[ButtonCallback] = None,
    ) -> None:
        self._pins = pins
        self._clock = clock
        self.red = Button("red", Color.RED, board.red_button)
        self.green = Button("green", Color.GREEN, board.green_button)
        self.blue = Button("blue", Color.BLUE, board.blue_button)
        self.yellow = Button("yellow", Color.YELLOW, board.yellow_button)
        self.on_pressed = on_pressed
        self.on_released = on_released
        self.pressed_button: Optional[Button] = None
        self.tapped_button: Optional[Button] = None
        self._paused = False

    @property
    def all(self) -> tuple[Button, Button, Button, Button]:
        return (self.red, self.green, self.blue, self.yellow)

    @property
    def paused(self) -> bool:
        return self._paused

    def setup(self) -> None:
        for button in self.all:
            self._pins.set_mode(button.pin, PinMode.INPUT_PULLUP)
            button.reset()
        self.pressed_button = None
        self.tapped_button = None

    def loop(self) -> None:
        if not self._paused:
            self._process()

    def pause(self) -> None:
        self._paused = True
        self.pressed_button = None
        self.tapped_button = None

    def resume(self) -> None:
        self._paused = False

    def is_pressed(self) -> bool:
        return self.pressed_button is not None and self.pressed_button.is_pressed

    def is_tapped(self) -> bool:
        return self.tapped_button is not None and self.tapped_button.is_tapped

    def pressed_color(self) -> Color:
        return self.pressed_button.color if self.pressed_button else Color.NONE

    def tapped_color(self) -> Color:
        return self.tapped_button.color if self.tapped_button else Color.NONE

    def _process(self) -> None:
        now = self._clock.millis()
        for button in self.all:
            button.update_state(self._pins, now)

        for button in self.all:
            if button.is_pressed and self.pressed_button is not button:
                if self.pressed_button is not None:
                    self.pressed_button.set_pressed(False)
                self.pressed_button = button
                self.tapped_button = None
                if self.on_pressed is not None:
                    self.on_pressed(button)

            if button.is_tapped and self.pressed_button is button:
                self.pressed_button = None
                self.tapped_button = button
                if self.on_released is not None:
                    self.on_released(button)
                button.set_tapped(False)