import pytest

from simonsays.buttons import Button, Buttons
from simonsays.config import BUTTONS_DEBOUNCE_DELAY, pins_for
from simonsays.hardware import Level, ManualClock, PinBank, PinMode
from simonsays.types import Color


@pytest.fixture
def board():
    return pins_for("xiao_esp32_c6")


@pytest.fixture
def rig(board):
    pins = PinBank()
    clock = ManualClock()
    pressed, released = [], []
    buttons = Buttons(pins, clock, board, on_pressed=pressed.append, on_released=released.append)
    buttons.setup()
    return pins, clock, buttons, pressed, released


def _settle(clock, buttons):
    buttons.loop()
    clock.advance(BUTTONS_DEBOUNCE_DELAY + 1)
    buttons.loop()


def test_setup_configures_pullups(board):
    pins = PinBank()
    buttons = Buttons(pins, ManualClock(), board)
    buttons.setup()
    for pin in board.buttons:
        assert pins.mode(pin) is PinMode.INPUT_PULLUP
    assert buttons.pressed_color() is Color.NONE


def test_button_reads_low_as_pressed():
    pins = PinBank()
    button = Button("red", Color.RED, "D0")
    pins.write("D0", Level.LOW)
    assert button.read(pins) is True
    pins.write("D0", Level.HIGH)
    assert button.read(pins) is False


def test_button_debounce_boundary():
    pins = PinBank()
    button = Button("red", Color.RED, "D0")
    pins.write("D0", Level.LOW)
    button.update_state(pins, 1000)
    button.update_state(pins, 1000 + BUTTONS_DEBOUNCE_DELAY)
    assert button.is_pressed is False
    button.update_state(pins, 1000 + BUTTONS_DEBOUNCE_DELAY + 1)
    assert button.is_pressed is True


def test_button_release_becomes_tap():
    pins = PinBank()
    button = Button("blue", Color.BLUE, "D2")
    pins.write("D2", Level.LOW)
    button.update_state(pins, 0)
    button.update_state(pins, 100)
    pins.write("D2", Level.HIGH)
    button.update_state(pins, 200)
    assert button.is_pressed is True
    button.update_state(pins, 300)
    assert (button.is_pressed, button.is_tapped) == (False, True)
    button.reset()
    assert (button.is_pressed, button.is_tapped) == (False, False)


def test_set_pressed_clears_tap():
    button = Button("green", Color.GREEN, "D1")
    button.set_tapped(True)
    button.set_pressed(True)
    assert button.is_tapped is False
    button.set_pressed(False)
    assert button.is_tapped is False


def test_press_and_release_fire_callbacks(rig, board):
    pins, clock, buttons, pressed, released = rig
    pins.write(board.red_button, Level.LOW)
    _settle(clock, buttons)
    assert [b.color for b in pressed] == [Color.RED]
    assert buttons.is_pressed() is True
    assert buttons.pressed_color() is Color.RED

    pins.write(board.red_button, Level.HIGH)
    _settle(clock, buttons)
    assert [b.color for b in released] == [Color.RED]
    assert buttons.pressed_color() is Color.NONE
    assert buttons.tapped_color() is Color.RED
    # The tap is consumed once reported.
    assert buttons.is_tapped() is False


def test_idle_buttons_report_nothing(rig):
    _, clock, buttons, pressed, released = rig
    _settle(clock, buttons)
    assert pressed == [] and released == []
    assert buttons.is_pressed() is False


def test_pause_ignores_input(rig, board):
    pins, clock, buttons, pressed, _ = rig
    buttons.pause()
    pins.write(board.yellow_button, Level.LOW)
    _settle(clock, buttons)
    assert buttons.paused is True
    assert pressed == []
    buttons.resume()
    _settle(clock, buttons)
    assert [b.color for b in pressed] == [Color.YELLOW]


def test_pause_clears_tracked_buttons(rig, board):
    pins, clock, buttons, _, _ = rig
    pins.write(board.green_button, Level.LOW)
    _settle(clock, buttons)
    assert buttons.pressed_color() is Color.GREEN
    buttons.pause()
    assert buttons.pressed_color() is Color.NONE
    assert buttons.tapped_color() is Color.NONE