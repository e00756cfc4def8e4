"""The Simon game: sequence play, user input, scoring and celebrations."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from . import fireworks
from .buttons import Button, Buttons
from .buzzer import Buzzer
from .config import (
    ERROR_TONE_DURATION,
    IN_SEQUENCE_TIMEOUT,
    MAX_SEQUENCE_LENGTH,
    SCREEN_ADDRESS,
    BoardPins,
    pins_for,
)
from .display import TextDisplay
from .fsm import EventType, StateMachine, StateType, state_type_to_string
from .hardware import Board, MonotonicClock, PinBank, PreferenceStore, ToneOutput
from .leds import Leds, PixelStrip, WipeDirection
from .types import Color, Note, color_to_note, color_to_string, next_color, pack_rgb

logger = logging.getLogger(__name__)

HIGH_SCORE_KEY = "high_score"

STR_SIMON = "Simon"
STR_AMPERSAND = "&"
STR_PRESS_BUTTON = "Premi un"
STR_BUTTON_TO = "tasto per"
STR_START = "iniziare!"
STR_RECORD = "Record"
STR_CURRENT = "attuale:"
STR_READY = "Pronti"
STR_START_GAME = "Partenza"
STR_GO = "Via!"
STR_PRESS_THE = "Premi il"
STR_RIGHT_BUTTON = "tasto giusto!"
STR_GREAT = "Bravo!"
STR_ROUND = "Round: "
STR_YOU_LOST = "Hai perso!"
STR_NEW = "Nuovo"
STR_RECORD_EXCL = "Record!"
STR_TESTING = "Testing"
STR_CELEBRATION = "Celebration"
STR_EFFECTS = "Effects!"
STR_TOTAL_VICTORY = "Vittoria"
STR_TOTAL = "Totale!"
STR_SEQUENCE = "Sequenza"
STR_MAXIMUM = "Massima!"
STR_RESET_RECORD = "Resetto"
STR_RECORD_RESET = "Record..."
STR_RECORD_CLEARED = "Record"
STR_CLEARED = "Cancellato!"

RAINBOW_INTERVAL = 15000
CELEBRATION_STEPS = 30
CELEBRATION_STEP_MS = 150


@dataclass
class Hardware:
    """Everything the game drives; a missing preference store means no persistence."""

    board: BoardPins = field(default_factory=lambda: pins_for("arduino_nano_esp32"))
    clock: Any = field(default_factory=MonotonicClock)
    pins: PinBank = field(default_factory=PinBank)
    tones: ToneOutput = field(default_factory=ToneOutput)
    preferences: Optional[PreferenceStore] = field(default_factory=PreferenceStore)
    display: TextDisplay = field(default_factory=TextDisplay)
    strip: Optional[PixelStrip] = None
    rng: random.Random = field(default_factory=random.Random)

    def __post_init__(self) -> None:
        if self.strip is None:
            self.strip = PixelStrip(self.board.led_count)


class Game:
    """Runs the game on the given hardware; call setup() once, then loop() forever."""

    def __init__(self, hardware: Optional[Hardware] = None) -> None:
        hw = hardware if hardware is not None else Hardware()
        self.hardware = hw
        self._clock = hw.clock
        self._rng = hw.rng
        self.display = hw.display
        self.leds = Leds(hw.strip, hw.clock)
        self.buttons = Buttons(hw.pins, hw.clock, hw.board)
        self.buzzer = Buzzer(hw.board.buzzer, hw.tones, hw.clock, hw.pins)
        self.board = Board(hw.pins, hw.board)
        self.fsm = StateMachine()
        self.high_score = 0
        self.sequence: list[Color] = []
        self.button_index = 0
        self._preferences: Optional[PreferenceStore] = None
        self._state_start_time = 0
        self._button_timer = 0
        self._last_rainbow_time = 0
        self._enter_handlers: dict[StateType, Callable[[], None]] = {
            StateType.INITIAL: self._enter_initial,
            StateType.GAME_START: self._enter_game_start,
            StateType.PLAYING_SEQUENCE: self._enter_playing_sequence,
            StateType.PLAYING_USER: self._enter_playing_user,
            StateType.PLAYING_WIN: self._enter_playing_win,
            StateType.PLAYING_LOSE: self._enter_playing_lose,
        }

    # -- setup and main loop ------------------------------------------------

    def setup(self) -> bool:
        """Initialise every peripheral, play the intro and start the state machine."""
        d = self.display
        logger.info("Init board..")
        self.board.setup()
        self.board.turn_off_builtin_led()
        self.board.turn_off_rgb_leds()

        logger.info("Init SSD1306 display at 0x%02X...", SCREEN_ADDRESS)
        if not d.begin():
            logger.warning("Display failed; continuing without display functionality")
            self.board.set_rgb_led_color(True, False, False)
            self._clock.delay(2000)
            self.board.turn_off_rgb_leds()

        d.clear_display()
        d.set_text_size(1)
        d.set_cursor(0, 0)
        d.display()
        self._clock.delay(100)

        d.println("Init Preferences..")
        d.display()
        if self.hardware.preferences is None:
            d.println("error!")
            logger.warning("Preferences initialization failed, high score will not persist")
            self.high_score = 0
            self._clock.delay(1000)
        else:
            self._preferences = self.hardware.preferences
            self.high_score = self._preferences.get_uint(HIGH_SCORE_KEY, 0)
            d.println("ok")
        d.display()
        self._clock.delay(500)

        for label, start in (
            ("Init leds..", self.leds.setup),
            ("Init buttons..", self.buttons.setup),
            ("Init buzzer..", self.buzzer.setup),
        ):
            d.println(label)
            d.display()
            start()
            d.println("ok")
            d.display()
            self._clock.delay(500)

        self._display_welcome_message()
        self.buzzer.play_initial_sound()

        self.leds.rainbow()
        self.leds.clear_now()
        for first, rgb in (
            (0, pack_rgb(255, 0, 0)),
            (6, pack_rgb(0, 255, 0)),
            (12, pack_rgb(0, 0, 255)),
            (18, pack_rgb(255, 255, 0)),
        ):
            self.leds.wipe(rgb, WipeDirection.FROM_START, 50, first, 6)
        self._clock.delay(1000)

        self.leds.clear_now()
        d.clear_display()
        d.display()

        self.buttons.on_pressed = self._on_button_pressed
        self.buttons.on_released = self._on_button_released
        self.fsm.set_enter_callback(self._on_state_enter)
        self.fsm.set_exit_callback(self._on_state_exit)
        self.fsm.reset()
        self.fsm.start()
        return True

    def loop(self) -> None:
        """One pass of the main loop: poll buttons, then run the current state."""
        self.buttons.loop()
        state = self.fsm.state
        if state is StateType.INITIAL:
            self._loop_initial()
        elif state is StateType.PLAYING_USER:
            self._loop_playing_user()

    def current_state(self) -> StateType:
        return self.fsm.state

    # -- helpers ---------------------------------------------------------------

    def _save_high_score(self) -> None:
        if self._preferences is not None:
            self._preferences.put_uint(HIGH_SCORE_KEY, self.high_score)

    def _show_text(self, *rows: object) -> None:
        d = self.display
        d.clear_display()
        d.set_text_size(2)
        d.set_cursor(0, 0)
        for row in rows:
            d.println(row)
        d.display()

    def _display_welcome_message(self) -> None:
        d = self.display
        d.clear_display()
        d.set_text_size(2)
        d.set_cursor(0, 0)
        d.display()
        for text, y in ((STR_SIMON, 0), (STR_AMPERSAND, 16), (STR_SIMON, 32)):
            width, _ = d.text_bounds(text)
            d.set_cursor((d.width - width) // 2, y)
            d.println(text)
        d.display()

    # -- callbacks -------------------------------------------------------------

    def _on_state_enter(self, state: StateType) -> None:
        logger.info("==> Entering State: '%s'", state_type_to_string(state))
        self._state_start_time = self._clock.millis()
        handler = self._enter_handlers.get(state)
        if handler is None:
            logger.warning("Unknown state entered.")
            return
        handler()

    def _on_state_exit(self, state: StateType) -> None:
        logger.info("<== Exiting State: '%s'", state_type_to_string(state))

    def _on_button_pressed(self, button: Button) -> None:
        logger.info(
            "%s | Button pressed: %s", state_type_to_string(self.fsm.state), button.name
        )
        self.buzzer.tone_start(color_to_note(button.color), 0)
        self.leds.show_color(button.color, 0)

    def _on_button_released(self, button: Button) -> None:
        state = self.fsm.state
        logger.info("%s | Button released: %s", state_type_to_string(state), button.name)

        if state is StateType.INITIAL:
            self.buzzer.stop()
            self.leds.clear_now()
            self._clock.delay(500)
            self.fsm.dispatch(EventType.GAME_START)
        elif state is StateType.PLAYING_USER:
            self._button_timer = self._clock.millis()
            self.buzzer.stop()
            self.leds.clear_now()
            logger.debug(
                "Button index: %d, sequence size: %d", self.button_index, len(self.sequence)
            )
            if button.color == self.sequence[self.button_index]:
                if self.button_index == len(self.sequence) - 1:
                    self.fsm.dispatch(EventType.PLAYING_WIN)
                    return
                self.button_index += 1
                self._clock.delay(16)
            else:
                self.fsm.dispatch(EventType.PLAYING_LOSE)

    # -- per-state loop work ---------------------------------------------------

    def _loop_initial(self) -> None:
        elapsed = (self._clock.millis() - self._state_start_time) // 1000
        switch_time = 5
        if elapsed % switch_time == 0:
            d = self.display
            d.clear_display()
            d.set_cursor(0, 0)
            d.set_text_size(2)
            if elapsed % (switch_time * 2) == 0:
                d.println()
                d.println(STR_PRESS_BUTTON)
                d.println(STR_BUTTON_TO)
                d.println(STR_START)
            else:
                d.println(STR_RECORD)
                d.println(STR_CURRENT)
                d.println(self.high_score)
            d.display()

        if self._clock.millis() - self._last_rainbow_time > RAINBOW_INTERVAL:
            self.leds.rainbow(2, 2)
            self.leds.clear_now()
            self._last_rainbow_time = self._clock.millis()

    def _loop_playing_user(self) -> None:
        if self._clock.millis() - self._button_timer > IN_SEQUENCE_TIMEOUT:
            self.fsm.dispatch(EventType.PLAYING_LOSE)

    # -- state entry -----------------------------------------------------------

    def _enter_initial(self) -> None:
        self.sequence.clear()
        self.button_index = 0

    def _enter_game_start(self) -> None:
        d = self.display
        d.clear_display()
        d.set_text_size(2)
        d.set_cursor(0, 0)
        d.display()
        self.buzzer.play_countdown_sound()
        self._clock.delay(1000)

        for text in (STR_READY, STR_START_GAME):
            self.buzzer.play_countdown_sound()
            d.println(text)
            d.display()
            self._clock.delay(1000)

        self.buzzer.tone_start(Note.C6, 500)
        d.println(STR_GO)
        d.display()
        self._clock.delay(1000)

        self.button_index = 0
        self.sequence.clear()
        self.fsm.dispatch(EventType.PLAYING_SEQUENCE)

    def _enter_playing_sequence(self) -> None:
        if len(self.sequence) >= MAX_SEQUENCE_LENGTH:
            self._show_text(STR_TOTAL_VICTORY, STR_TOTAL, STR_SEQUENCE, STR_MAXIMUM)
            self._clock.delay(3000)
            self.high_score = MAX_SEQUENCE_LENGTH
            self._save_high_score()
            self.fsm.dispatch(EventType.INITIAL_STATE)
            return

        self.button_index = 0
        self.sequence.append(next_color(self._rng))

        self.leds.clear_now()
        self.display.clear_display()
        self.display.display()
        self._clock.delay(500)

        for color in self.sequence:
            self.buzzer.tone_start(color_to_note(color), 500)
            self.leds.show_color(color, 0)
            self._show_text(color_to_string(color))
            self._clock.delay(700)
            self.leds.clear_now()
            self._clock.delay(100)

        self.fsm.dispatch(EventType.PLAYING_USER)

    def _enter_playing_user(self) -> None:
        self.leds.clear_now()
        self._show_text(STR_PRESS_THE, STR_RIGHT_BUTTON)
        self._button_timer = self._clock.millis()

    def _enter_playing_win(self) -> None:
        self._clock.delay(500)
        self.leds.clear_now()
        self._show_text(STR_GREAT)

        self.buzzer.play_round_win_sound()
        self.leds.rainbow(2, 1)
        self.leds.clear_now()
        self._clock.delay(500)

        self.display.print(STR_ROUND)
        self.display.println(len(self.sequence))
        self.display.display()
        self._clock.delay(500)

        self.fsm.dispatch(EventType.PLAYING_SEQUENCE)

    def _enter_playing_lose(self) -> None:
        self.leds.clear_now()
        self.buzzer.play_error_sound()
        self.leds.fill_all(Color.RED)
        self._clock.delay(ERROR_TONE_DURATION)
        self.leds.clear_now()

        self._show_text(STR_YOU_LOST)
        self._clock.delay(2000)

        if len(self.sequence) > self.high_score:
            self.high_score = len(self.sequence)
            self._save_high_score()
            self._show_text(STR_NEW, STR_RECORD_EXCL, self.high_score)
            self._synchronized_celebration()

        self.fsm.dispatch(EventType.INITIAL_STATE)

    # -- celebrations ----------------------------------------------------------

    def _synchronized_celebration(self) -> None:
        self.buzzer.play_new_high_score_sound()
        flashes = {2: Color.RED, 3: Color.BLUE, 4: Color.GREEN, 5: Color.YELLOW}
        for step in range(CELEBRATION_STEPS):
            phase = step % 6
            if phase in flashes:
                self.leds.fill_all(flashes[phase])
            else:
                self.leds.rainbow(1, 1)

            fireworks.draw_fireworks(self.display, step, self._rng)
            self._clock.delay(CELEBRATION_STEP_MS)

            if step % 2 == 1:
                self.leds.clear_now()
                self._clock.delay(30)

        fireworks.draw_final_fireworks(self.display, self._rng)
        self._clock.delay(1000)
        self.leds.clear_now()

    def test_celebration_effects(self) -> None:
        """Run the new-record celebration on demand."""
        logger.info("Testing celebration effects!")
        self._show_text(STR_TESTING, STR_CELEBRATION, STR_EFFECTS)
        self._synchronized_celebration()
        logger.info("Celebration test complete!")
        self._clock.delay(1000)
        self.display.clear_display()
        self.display.display()

    def reset_high_score(self) -> None:
        """Set the high score back to zero, with on-screen and LED feedback."""
        logger.info("Resetting high score!")
        self.high_score = 0
        self._save_high_score()

        self._show_text(STR_RESET_RECORD, STR_RECORD_RESET)
        self._clock.delay(1500)
        self._show_text(STR_RECORD_CLEARED, STR_CLEARED)

        for _ in range(3):
            self.leds.fill_all(Color.RED)
            self._clock.delay(200)
            self.leds.clear_now()
            self._clock.delay(200)

        self._clock.delay(2000)
        self.display.clear_display()
        self.display.display()
        logger.info("High score reset complete!")