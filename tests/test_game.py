import random

from simonsays.config import IN_SEQUENCE_TIMEOUT, MAX_SEQUENCE_LENGTH
from simonsays.display import TextDisplay
from simonsays.fsm import StateType
from simonsays.game import (
    HIGH_SCORE_KEY,
    STR_BUTTON_TO,
    STR_CURRENT,
    STR_PRESS_BUTTON,
    STR_PRESS_THE,
    STR_RECORD,
    STR_START,
    Game,
    Hardware,
)
from simonsays.hardware import Level, ManualClock, PreferenceStore, ToneEvent
from simonsays.leds import DEFAULT_BRIGHTNESS
from simonsays.melody import PACMAN
from simonsays.types import Color, Note, color_to_note

_DEFAULT = object()


def make_game(preferences=_DEFAULT, available=True, seed=1):
    prefs = PreferenceStore() if preferences is _DEFAULT else preferences
    hw = Hardware(
        clock=ManualClock(),
        preferences=prefs,
        display=TextDisplay(available=available),
        rng=random.Random(seed),
    )
    game = Game(hw)
    assert game.setup() is True
    return game, hw


def pin_of(game, color):
    return next(b.pin for b in game.buttons.all if b.color is color)


def press(game, hw, color):
    hw.pins.write(pin_of(game, color), Level.LOW)
    game.loop()
    hw.clock.advance(60)
    game.loop()


def release(game, hw, color):
    hw.pins.write(pin_of(game, color), Level.HIGH)
    game.loop()
    hw.clock.advance(60)
    game.loop()


def tap(game, hw, color):
    press(game, hw, color)
    release(game, hw, color)


def wrong_color(color):
    return next(c for c in (Color.RED, Color.GREEN, Color.BLUE, Color.YELLOW) if c != color)


def test_setup_enters_initial_state():
    game, _ = make_game()
    assert game.current_state() is StateType.INITIAL
    assert game.sequence == []


def test_setup_plays_intro_arpeggio():
    _, hw = make_game()
    assert hw.tones.frequencies[:7] == [
        Note.C5, Note.E5, Note.G5, Note.C5, Note.E5, Note.G5, Note.C6,
    ]


def test_setup_leaves_leds_dark_and_dimmed():
    _, hw = make_game()
    assert all(p == 0 for p in hw.strip.shown)
    assert hw.strip.brightness == DEFAULT_BRIGHTNESS


def test_missing_display_costs_two_seconds():
    _, with_display = make_game()
    _, without = make_game(available=False)
    assert without.clock.millis() - with_display.clock.millis() == 2000


def test_setup_loads_stored_high_score():
    store = PreferenceStore()
    store.put_uint(HIGH_SCORE_KEY, 7)
    game, _ = make_game(preferences=store)
    assert game.high_score == 7


def test_setup_without_preferences_starts_at_zero():
    game, _ = make_game(preferences=None)
    assert game.high_score == 0


def test_initial_loop_shows_start_prompt():
    game, _ = make_game()
    game.loop()
    assert game.display.lines() == [STR_PRESS_BUTTON, STR_BUTTON_TO, STR_START]


def test_initial_loop_alternates_to_record():
    store = PreferenceStore()
    store.put_uint(HIGH_SCORE_KEY, 7)
    game, hw = make_game(preferences=store)
    hw.clock.advance(5000)
    game.loop()
    assert game.display.lines() == [STR_RECORD, STR_CURRENT, "7"]


def test_press_gives_tone_feedback():
    game, hw = make_game()
    press(game, hw, Color.GREEN)
    assert hw.tones.active[hw.board.buzzer] == color_to_note(Color.GREEN)
    assert any(hw.strip.shown)


def test_tap_starts_game_and_waits_for_user():
    game, hw = make_game()
    tap(game, hw, Color.RED)
    assert game.current_state() is StateType.PLAYING_USER
    assert len(game.sequence) == 1
    assert game.display.lines()[0] == STR_PRESS_THE
    assert ToneEvent(hw.board.buzzer, Note.C6, 500) in hw.tones.tones


def test_correct_tap_extends_sequence():
    game, hw = make_game()
    tap(game, hw, Color.RED)
    first = game.sequence[0]
    tap(game, hw, first)
    assert game.current_state() is StateType.PLAYING_USER
    assert len(game.sequence) == 2
    assert game.sequence[0] == first
    assert game.button_index == 0


def test_wrong_tap_loses_and_records_score():
    store = PreferenceStore()
    game, hw = make_game(preferences=store)
    tap(game, hw, Color.RED)
    tap(game, hw, wrong_color(game.sequence[0]))
    assert game.current_state() is StateType.INITIAL
    assert game.high_score == 1
    assert store.get_uint(HIGH_SCORE_KEY) == 1
    assert game.sequence == []
    assert Note.GS5 in hw.tones.frequencies


def test_lose_without_record_skips_celebration():
    store = PreferenceStore()
    store.put_uint(HIGH_SCORE_KEY, 5)
    game, hw = make_game(preferences=store)
    tap(game, hw, Color.RED)
    tap(game, hw, wrong_color(game.sequence[0]))
    assert game.high_score == 5
    assert Note.GS5 not in hw.tones.frequencies
    assert Note.A2 in hw.tones.frequencies


def test_timeout_loses():
    game, hw = make_game()
    tap(game, hw, Color.BLUE)
    hw.clock.advance(IN_SEQUENCE_TIMEOUT + 1)
    game.loop()
    assert game.current_state() is StateType.INITIAL
    assert game.high_score == 1


def test_maximum_sequence_sets_high_score():
    store = PreferenceStore()
    game, hw = make_game(preferences=store)
    tap(game, hw, Color.RED)
    game.sequence[:] = [Color.RED] * MAX_SEQUENCE_LENGTH
    game.button_index = MAX_SEQUENCE_LENGTH - 1
    tap(game, hw, Color.RED)
    assert game.high_score == MAX_SEQUENCE_LENGTH
    assert store.get_uint(HIGH_SCORE_KEY) == MAX_SEQUENCE_LENGTH


def test_reset_high_score():
    store = PreferenceStore()
    store.put_uint(HIGH_SCORE_KEY, 9)
    game, _ = make_game(preferences=store)
    game.reset_high_score()
    assert game.high_score == 0
    assert store.get_uint(HIGH_SCORE_KEY) == 0
    assert game.display.lines() == []


def test_celebration_effects_play_melody():
    game, hw = make_game()
    before = len(hw.tones.tones)
    game.test_celebration_effects()
    played = hw.tones.frequencies[before:]
    assert played[: len(PACMAN)] == [note for note, _ in PACMAN]
    assert game.display.lines() == []
    assert all(p == 0 for p in hw.strip.shown)