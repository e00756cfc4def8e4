"""Sound effects played on a piezo buzzer."""

from __future__ import annotations

from .config import ERROR_TONE_DURATION, SUCCESS_TONE_DURATION, Pin
from .hardware import PinBank, PinMode, ToneOutput
from .melody import play_melody
from .types import Note

_ARPEGGIO = (Note.C5, Note.E5, Note.G5, Note.C5, Note.E5, Note.G5, Note.C6)


class Buzzer:
    """Plays tones and the game's sound effects on one pin."""

    def __init__(self, pin: Pin, output: ToneOutput, clock, pins: PinBank) -> None:
        self.pin = pin
        self._output = output
        self._clock = clock
        self._pins = pins

    def setup(self) -> None:
        self._pins.set_mode(self.pin, PinMode.OUTPUT)

    def tone_start(self, note: int, duration: int = 0) -> None:
        """Start a note; a duration of 0 plays until stop() is called."""
        self._output.tone(self.pin, note, duration)

    def single_tone(self, note: int, duration: int) -> None:
        """Play a note for the given time, waiting until it is done."""
        self.tone_start(note)
        self._clock.delay(duration)
        self.stop()

    def stop(self) -> None:
        self._output.no_tone(self.pin)

    def _arpeggio(self, duration: int, pause: int) -> None:
        for position, note in enumerate(_ARPEGGIO):
            if position:
                self._clock.delay(pause)
            self.single_tone(note, duration)

    def play_initial_sound(self) -> None:
        self._arpeggio(80, 30)

    def play_countdown_sound(self) -> None:
        self.single_tone(Note.C5, 100)

    def play_error_sound(self) -> None:
        self.tone_start(Note.A2, ERROR_TONE_DURATION)

    def success(self) -> None:
        for note in (Note.E5, Note.G5, Note.E6, Note.D6, Note.G6):
            self.single_tone(note, SUCCESS_TONE_DURATION)

    def play_round_win_sound(self) -> None:
        self._arpeggio(60, 20)

    def play_new_high_score_sound(self) -> None:
        play_melody(self._output, self._clock, self.pin)