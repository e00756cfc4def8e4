import pytest

from simonsays.hardware import ManualClock, ToneOutput
from simonsays.melody import PACMAN, TEMPO, note_durations, play_melody, whole_note_ms
from simonsays.types import Note


def test_whole_note_at_sixty_bpm():
    assert whole_note_ms(60) == 4000


def test_whole_note_rejects_bad_tempo():
    with pytest.raises(ValueError):
        whole_note_ms(0)


def test_one_duration_per_note():
    assert len(note_durations(PACMAN, TEMPO)) == len(PACMAN)


def test_dotted_note_is_longer():
    plain = note_durations([(Note.C4, 16)], TEMPO)[0]
    dotted = note_durations([(Note.C4, -16)], TEMPO)[0]
    assert plain < dotted < 2 * plain


def test_shorter_divider_gives_longer_note():
    durations = note_durations([(Note.C4, 8), (Note.C4, 16), (Note.C4, 32)], TEMPO)
    assert durations == sorted(durations, reverse=True)


def test_zero_divider_repeats_previous_duration():
    durations = note_durations([(Note.C4, 4), (Note.D4, 0)], 60)
    assert durations == [1000, 1000]


def test_play_melody_plays_every_note_and_stops():
    out, clock = ToneOutput(), ManualClock()
    play_melody(out, clock, "D2")
    assert out.frequencies == [int(note) for note, _ in PACMAN]
    assert out.active == {}
    assert out.stops == len(PACMAN)


def test_play_melody_takes_the_melody_length():
    out, clock = ToneOutput(), ManualClock()
    play_melody(out, clock, "D2")
    durations = note_durations(PACMAN, TEMPO)
    assert clock.millis() == sum(durations)
    assert all(event.duration < d for event, d in zip(out.tones, durations))