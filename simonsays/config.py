"""Game configuration: pin assignments per board and tuning constants."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

Pin = Union[int, str]

# OLED display
SCREEN_WIDTH = 128
SCREEN_HEIGHT = 64
OLED_RESET = -1
SCREEN_ADDRESS = 0x3C

# Buttons
BUTTONS_TAP_DURATION = 50
BUTTONS_DEBOUNCE_DELAY = 50
BUTTONS_MIN_READINGS_COUNT = 5
IN_SEQUENCE_TIMEOUT = 5000

# Buzzer
BUZZER_DEBUG = True
SUCCESS_TONE_DURATION = 64
ERROR_TONE_DURATION = 1500

# Game
MAX_SEQUENCE_LENGTH = 100


@dataclass(frozen=True)
class BoardPins:
    """Pin assignment for one supported board."""

    name: str
    led_pin: Pin
    led_count: int
    buzzer: Pin
    reset_button: Pin
    red_button: Pin
    green_button: Pin
    blue_button: Pin
    yellow_button: Pin
    led_red: Optional[Pin] = None
    led_green: Optional[Pin] = None
    led_blue: Optional[Pin] = None
    led_builtin: Optional[Pin] = None

    @property
    def has_rgb_led(self) -> bool:
        return None not in (self.led_red, self.led_green, self.led_blue)

    @property
    def buttons(self) -> tuple[Pin, Pin, Pin, Pin]:
        """Button pins in red, green, blue, yellow order."""
        return (self.red_button, self.green_button, self.blue_button, self.yellow_button)


_BOARDS = {
    "arduino_nano_esp32": BoardPins(
        name="arduino_nano_esp32",
        led_pin=6,
        led_count=24,
        buzzer="D2",
        reset_button="D7",
        red_button="D3",
        green_button="D4",
        blue_button="D5",
        yellow_button="A7",
        led_red="LED_RED",
        led_green="LED_GREEN",
        led_blue="LED_BLUE",
        led_builtin="LED_BUILTIN",
    ),
    "xiao_esp32_c6": BoardPins(
        name="xiao_esp32_c6",
        led_pin="D10",
        led_count=24,
        buzzer="D8",
        reset_button="D7",
        red_button="D0",
        green_button="D1",
        blue_button="D2",
        yellow_button="D3",
    ),
}


def pins_for(board: str) -> BoardPins:
    """Return the pin assignment of a supported board, by name."""
    key = board.strip().lower().replace("-", "_")
    try:
        return _BOARDS[key]
    except KeyError:
        supported = ", ".join(sorted(_BOARDS))
        raise ValueError(f"unsupported board {board!r}; expected one of: {supported}") from None