# simonsays

A Simon memory game. The game lights up a growing sequence of colours and
plays a note for each one; the player repeats the sequence on four coloured
buttons. Every correct round adds one colour. A wrong button, or no button
within five seconds, ends the game. The longest sequence reached is kept as
the high score.

All of the devices the game drives — LED ring, buttons, buzzer, display,
clock and preference storage — are plain Python objects held in memory, so
the whole game can be run and tested on an ordinary computer.

## Installing

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## The command

```
simonsays
```

boots the game (intro sound, rainbow and colour wipes) and then runs its main
loop until interrupted with Ctrl-C. Options:

- `--board NAME` – pin layout to use: `arduino_nano_esp32` (the default) or
  `xiao_esp32_c6`.
- `--preferences FILE` – JSON file in which the high score is kept between
  runs. Without it the high score lives only in memory.
- `--iterations N` – stop after N passes of the main loop.
- `--instant` – let every delay pass instantly instead of waiting in real
  time.
- `--seed N` – seed for the random colour sequence.
- `-v`, `--verbose` – log what the game does.

The main loop also watches the reset button: a short press restarts the
game from boot, and holding it for more than seven seconds while the game is
on its start screen resets the high score to zero.

## Driving the game from Python

```python
import random

from simonsays.fsm import StateType
from simonsays.game import Game, Hardware
from simonsays.hardware import Level, ManualClock

hw = Hardware(clock=ManualClock(), rng=random.Random(1))
game = Game(hw)
game.setup()
assert game.current_state() is StateType.INITIAL

# press and release the red button; buttons are debounced over 50 ms
red = hw.board.red_button
for level in (Level.LOW, Level.HIGH):
    hw.pins.write(red, level)
    game.loop()
    hw.clock.advance(60)
    game.loop()

# the countdown and the first sequence have played; it is the player's turn
assert game.current_state() is StateType.PLAYING_USER
print(game.sequence)
```

With a `ManualClock` every delay advances the clock instead of sleeping, so a
whole game runs instantly. `hw.display.lines()` gives the text currently on
the screen, `hw.strip.shown` the last frame sent to the LEDs and
`hw.tones.tones` every tone that was played.

## Modules

- `simonsays.types` – the game colours (`Color`), note frequencies (`Note`),
  `pack_rgb`, `color_to_string`, `color_to_rgb`, `color_to_note` and
  `next_color`.
- `simonsays.color` – `ColorRGB`, an 8-bit RGB value with `from_rgb` and
  `to_rgb`.
- `simonsays.config` – board pin layouts (`BoardPins`, `pins_for`) and the
  game's limits and timings.
- `simonsays.hardware` – `MonotonicClock`, `ManualClock`, `PinBank`,
  `ToneOutput`, `PreferenceStore` (optionally backed by a JSON file) and
  `Board` for the on-board LEDs.
- `simonsays.buttons` – debounced `Button` and the four-button `Buttons`
  group with press and release callbacks.
- `simonsays.buzzer` – `Buzzer` and its sound effects; the high-score tune
  is in `simonsays.melody` (`play_melody`, `note_durations`,
  `whole_note_ms`).
- `simonsays.leds` – `PixelStrip`, `color_hsv`, `gamma32` and `Leds`, with
  colour segments, fills, wipes (`WipeDirection`) and rainbow cycles.
- `simonsays.display` – `TextDisplay`, a monochrome text-and-pixel screen;
  `simonsays.fireworks` draws the new-record animation on it.
- `simonsays.fsm` – `StateMachine`, `StateType`, `EventType` and their names.
- `simonsays.game` – `Game` and the `Hardware` bundle it runs on.
- `simonsays.app` – the command (`main`), `ResetButton` and
  `RestartRequested`.

## Game flow

1. **Initial** – the screen alternates every five seconds between "Premi un
   tasto per iniziare!" and the current record; a rainbow runs every fifteen
   seconds. Releasing any button starts a game.
2. **Game start** – a three-step countdown.
3. **Playing sequence** – one random colour is added and the whole sequence
   is shown with its notes.
4. **Playing user** – the player repeats the sequence.
5. **Win** – "Bravo!", a short tune and rainbow, then the next sequence.
6. **Lose** – an error tone and red LEDs; a new high score is saved and
   celebrated with a melody, flashing LEDs and fireworks, then the game
   returns to the initial state.

Reaching a sequence of 100 colours is a total victory: the high score is set
to 100 and the game returns to the initial state.

## What it does not do

Every device is simulated. The package does not talk to real pins, LEDs, a
buzzer or an OLED screen, and the command neither draws the display in the
terminal, plays sound through the speakers nor reads the keyboard. Run as a
command, nothing presses the buttons, so the game stays on its start screen;
to play, drive the pins from Python as shown above.