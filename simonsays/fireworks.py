"""Firework animations drawn on the display when a new record is set."""

from __future__ import annotations

import math
import random
from typing import Optional

from .display import TextDisplay

RECORD_SHORT = "RECORD!"
NEW_RECORD = "NUOVO RECORD!"


def _source(rng: Optional[random.Random]):
    return rng if rng is not None else random


def _in_bounds(display: TextDisplay, x: int, y: int) -> bool:
    return 0 <= x < display.width and 0 <= y < display.height


def _polar(center_x: int, center_y: int, radius: float, angle: int) -> tuple[int, int]:
    rad = angle * math.pi / 180
    return (
        int(center_x + radius * math.cos(rad)),
        int(center_y + radius * math.sin(rad)),
    )


def draw_single_firework(
    display: TextDisplay,
    center_x: int,
    center_y: int,
    stage: int,
    rng: Optional[random.Random] = None,
) -> None:
    """Draw one firework at one of its eight stages (0-7) into the buffer."""
    if stage in (0, 1):
        for i in range(stage * 10):
            display.draw_pixel(center_x, center_y + 20 - i)
    elif stage in (2, 3):
        radius = (stage - 1) * 3
        for angle in range(0, 360, 45):
            x, y = _polar(center_x, center_y, radius, angle)
            if _in_bounds(display, x, y):
                display.draw_pixel(x, y)
    elif stage in (4, 5, 6):
        radius = (stage - 2) * 4
        for angle in range(0, 360, 30):
            x, y = _polar(center_x, center_y, radius, angle)
            if _in_bounds(display, x, y):
                display.draw_line(center_x, center_y, x, y)
    elif stage == 7:
        source = _source(rng)
        for _ in range(6):
            x = center_x + source.randrange(-15, 15)
            y = center_y + source.randrange(-15, 15)
            if _in_bounds(display, x, y):
                display.draw_pixel(x, y)


def draw_fireworks(
    display: TextDisplay, step: int, rng: Optional[random.Random] = None
) -> None:
    """Draw and show one frame of the celebration: two fireworks and sparkles."""
    source = _source(rng)
    display.clear_display()
    draw_single_firework(display, 32, 32, step % 8, source)
    draw_single_firework(display, 96, 32, (step + 4) % 8, source)
    for _ in range(8):
        x = source.randrange(0, display.width)
        y = source.randrange(0, display.height)
        display.draw_pixel(x, y)
    display.set_text_size(1)
    display.set_cursor(40, 0)
    display.print(RECORD_SHORT)
    display.display()


def draw_final_fireworks(display: TextDisplay, rng: Optional[random.Random] = None) -> None:
    """Draw and show the closing burst of four large fireworks."""
    source = _source(rng)
    display.clear_display()
    for fw in range(4):
        center_x = 20 + fw * 25
        center_y = 20 + source.randrange(-10, 20)
        for angle in range(0, 360, 15):
            x, y = _polar(center_x, center_y, 15, angle)
            if _in_bounds(display, x, y):
                display.draw_line(center_x, center_y, x, y)
    display.set_text_size(1)
    display.set_cursor(30, 50)
    display.print(NEW_RECORD)
    display.display()