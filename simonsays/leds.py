"""The NeoPixel ring: a simulated pixel strip and the game's lighting effects."""

from __future__ import annotations

from enum import Enum

from .types import Color, color_to_rgb

SEGMENT_LENGTH = 6
DEFAULT_BRIGHTNESS = 50

_SEGMENT_START = {
    Color.RED: 0,
    Color.GREEN: 6,
    Color.BLUE: 12,
    Color.YELLOW: 18,
}

_GAMMA = tuple(int(((i / 255) ** 2.6) * 255 + 0.5) for i in range(256))


class WipeDirection(Enum):
    """Order in which a colour wipe lights the pixels."""

    FROM_START = "start"
    FROM_CENTER = "center"
    FROM_EDGES = "edges"


def color_hsv(hue: int, saturation: int = 255, value: int = 255) -> int:
    """Packed 0xRRGGBB colour for a 16-bit hue and 8-bit saturation and value."""
    hue = ((hue & 0xFFFF) * 1530 + 32768) // 65536
    if hue < 510:
        b = 0
        if hue < 255:
            r, g = 255, hue
        else:
            r, g = 510 - hue, 255
    elif hue < 1020:
        r = 0
        if hue < 765:
            g, b = 255, hue - 510
        else:
            g, b = 1020 - hue, 255
    elif hue < 1530:
        g = 0
        if hue < 1275:
            r, b = hue - 1020, 255
        else:
            r, b = 255, 1530 - hue
    else:
        r, g, b = 255, 0, 0

    saturation &= 0xFF
    value &= 0xFF
    v1 = 1 + value
    s1 = 1 + saturation
    s2 = 255 - saturation

    def channel(c: int) -> int:
        return (((c * s1) >> 8) + s2) * v1

    return (
        ((channel(r) & 0xFF00) << 8)
        | (channel(g) & 0xFF00)
        | (channel(b) >> 8)
    )


def gamma32(color: int) -> int:
    """Apply gamma correction to each 8-bit component of a packed colour."""
    r = _GAMMA[(color >> 16) & 0xFF]
    g = _GAMMA[(color >> 8) & 0xFF]
    b = _GAMMA[color & 0xFF]
    return (r << 16) | (g << 8) | b


class PixelStrip:
    """An addressable RGB strip held in memory.

    Pixel values are stored as set; brightness is applied to the frame
    produced by show().
    """

    def __init__(self, count: int) -> None:
        if count < 0:
            raise ValueError("pixel count must not be negative")
        self._pixels = [0] * count
        self.brightness = 255
        self.begun = False
        self.shown: tuple[int, ...] = (0,) * count
        self.show_count = 0

    @property
    def num_pixels(self) -> int:
        return len(self._pixels)

    @property
    def pixels(self) -> tuple[int, ...]:
        return tuple(self._pixels)

    def begin(self) -> None:
        self.begun = True

    def set_brightness(self, brightness: int) -> None:
        if not 0 <= brightness <= 255:
            raise ValueError("brightness must be between 0 and 255")
        self.brightness = brightness

    def set_pixel_color(self, index: int, color: int) -> None:
        """Set one pixel; indices outside the strip are ignored."""
        if 0 <= index < len(self._pixels):
            self._pixels[index] = color & 0xFFFFFF

    def fill(self, color: int = 0, first: int = 0, count: int = 0) -> None:
        """Fill ``count`` pixels from ``first``; a count of 0 fills to the end."""
        n = len(self._pixels)
        if first < 0 or first >= n:
            return
        end = n if count <= 0 else min(first + count, n)
        for index in range(first, end):
            self._pixels[index] = color & 0xFFFFFF

    def clear(self) -> None:
        self._pixels = [0] * len(self._pixels)

    def rainbow(self, first_hue: int) -> None:
        """Spread one gamma-corrected colour wheel along the strip from ``first_hue``."""
        n = len(self._pixels)
        for index in range(n):
            hue = (first_hue + (index * 65536) // n) & 0xFFFF
            self._pixels[index] = gamma32(color_hsv(hue, 255, 255))

    def show(self) -> None:
        """Latch the current pixels, scaled by brightness, into the shown frame."""
        if self.brightness == 255:
            self.shown = tuple(self._pixels)
        else:
            scale = self.brightness + 1
            self.shown = tuple(
                (((c >> 16) & 0xFF) * scale >> 8) << 16
                | (((c >> 8) & 0xFF) * scale >> 8) << 8
                | ((c & 0xFF) * scale >> 8)
                for c in self._pixels
            )
        self.show_count += 1


class Leds:
    """Lighting effects for the game, drawn on a pixel strip."""

    def __init__(self, strip: PixelStrip, clock) -> None:
        self.strip = strip
        self._clock = clock

    def setup(self) -> None:
        self.strip.begin()
        self.strip.show()
        self.strip.set_brightness(DEFAULT_BRIGHTNESS)

    def show_color(self, color: Color, wait: int = 0) -> None:
        """Light the six-pixel segment of a game colour; NONE lights nothing."""
        first = _SEGMENT_START.get(color)
        if first is None:
            return
        rgb = color_to_rgb(color)
        if wait > 0:
            self.wipe(rgb, WipeDirection.FROM_CENTER, wait, first, SEGMENT_LENGTH)
        else:
            self.fill(rgb, first, SEGMENT_LENGTH)

    def fill(self, color: int, first_pixel: int = 0, count: int = 0) -> None:
        """Fill and show; a count of 0, or one past the end, fills to the end."""
        n = self.strip.num_pixels
        if first_pixel < 0 or first_pixel >= n:
            raise IndexError("first pixel exceeds strip length")
        if count <= 0 or first_pixel + count > n:
            count = n - first_pixel
        self.strip.fill(color, first_pixel, count)
        self.show()

    def fill_all(self, color: Color) -> None:
        self.fill(color_to_rgb(color), 0, self.strip.num_pixels)

    def clear(self) -> None:
        self.strip.clear()

    def clear_now(self) -> None:
        self.clear()
        self.show()

    def show(self) -> None:
        self.strip.show()

    def rainbow(self, wait: int = 2, count: int = 2) -> None:
        """Cycle the colour wheel round the strip ``count`` times."""
        for first_hue in range(0, count * 65536, 256):
            self.strip.rainbow(first_hue)
            self.strip.show()
            self._clock.delay(wait)

    def wipe(
        self,
        color: int,
        direction: WipeDirection = WipeDirection.FROM_START,
        wait: int = 0,
        first_pixel: int = 0,
        count: int = 0,
    ) -> None:
        """Light pixels one step at a time, pausing ``wait`` ms between steps."""
        self._check_range(first_pixel, count)
        if direction is WipeDirection.FROM_START:
            steps = ([index] for index in range(first_pixel, first_pixel + count))
        elif direction is WipeDirection.FROM_CENTER:
            steps = self._center_steps(first_pixel, count)
        else:
            steps = (
                [first_pixel + i, first_pixel + count - 1 - i] for i in range(count)
            )

        for indices in steps:
            for index in indices:
                self.strip.set_pixel_color(index, color)
            if wait > 0:
                self.show()
                self._clock.delay(wait)

        if wait <= 0:
            self.show()

    @staticmethod
    def _center_steps(first_pixel: int, count: int):
        center = first_pixel + count // 2 - 1
        for i in range(count // 2):
            yield [center] if i == 0 else [center - i, center + i]

    def _check_range(self, first_pixel: int, count: int) -> None:
        n = self.strip.num_pixels
        if first_pixel < 0 or first_pixel >= n:
            raise IndexError("first pixel exceeds strip length")
        if count < 0 or first_pixel + count > n:
            raise IndexError("first pixel + count exceeds strip length")