"""The high-score melody and how to play it."""

from __future__ import annotations

from typing import Iterable

from .config import Pin
from .types import Note

TEMPO = 105

# Pairs of (note, divider): 4 is a quarter note, 8 an eighth and so on;
# a negative divider marks a dotted note, half as long again.
PACMAN: tuple[tuple[Note, int], ...] = (
    (Note.B4, 16), (Note.B5, 16), (Note.FS5, 16), (Note.DS5, 16),
    (Note.B5, 32), (Note.FS5, -16), (Note.DS5, 8), (Note.C5, 16),
    (Note.C6, 16), (Note.G6, 16), (Note.E6, 16), (Note.C6, 32),
    (Note.G6, -16), (Note.E6, 8),
    (Note.B4, 16), (Note.B5, 16), (Note.FS5, 16), (Note.DS5, 16),
    (Note.B5, 32), (Note.FS5, -16), (Note.DS5, 8), (Note.DS5, 32),
    (Note.E5, 32), (Note.F5, 32), (Note.F5, 32), (Note.FS5, 32),
    (Note.G5, 32), (Note.G5, 32), (Note.GS5, 32), (Note.A5, 16),
    (Note.B5, 8),
)


def whole_note_ms(tempo: int) -> int:
    """Length of a whole note in milliseconds at the given beats per minute."""
    if tempo <= 0:
        raise ValueError("tempo must be positive")
    return (60000 * 4) // tempo


def note_durations(melody: Iterable[tuple[int, int]], tempo: int) -> list[int]:
    """Duration in milliseconds of each note of a melody.

    A divider of zero repeats the previous note's duration.
    """
    whole = whole_note_ms(tempo)
    durations: list[int] = []
    current = 0
    for _, divider in melody:
        if divider > 0:
            current = whole // divider
        elif divider < 0:
            current = int((whole // abs(divider)) * 1.5)
        durations.append(current)
    return durations


def play_melody(output, clock, pin: Pin) -> None:
    """Play the high-score melody, sounding each note for 90% of its length."""
    for (note, _), duration in zip(PACMAN, note_durations(PACMAN, TEMPO)):
        output.tone(pin, note, int(duration * 0.9))
        clock.delay(duration)
        output.no_tone(pin)