"""A monochrome text-and-pixel display held in memory."""

from __future__ import annotations

from .config import SCREEN_HEIGHT, SCREEN_WIDTH

CHAR_WIDTH = 6
CHAR_HEIGHT = 8


class TextDisplay:
    """Monochrome screen with a text cursor and a pixel buffer.

    Drawing goes to a buffer; display() copies the buffer to what is shown.
    """

    def __init__(
        self,
        width: int = SCREEN_WIDTH,
        height: int = SCREEN_HEIGHT,
        available: bool = True,
    ) -> None:
        self.width = width
        self.height = height
        self._available = available
        self.text_size = 1
        self.cursor = (0, 0)
        self._pixels: set[tuple[int, int]] = set()
        self._chars: dict[tuple[int, int], tuple[str, int]] = {}
        self.shown_pixels: frozenset[tuple[int, int]] = frozenset()
        self._shown_chars: dict[tuple[int, int], tuple[str, int]] = {}
        self.frame_count = 0

    def begin(self) -> bool:
        """Start the display; False when no display is attached."""
        return self._available

    def clear_display(self) -> None:
        """Blank the buffer; the cursor stays where it was."""
        self._pixels.clear()
        self._chars.clear()

    def set_text_size(self, size: int) -> None:
        self.text_size = max(1, int(size))

    def set_cursor(self, x: int, y: int) -> None:
        self.cursor = (int(x), int(y))

    def text_bounds(self, text: object) -> tuple[int, int]:
        """Width and height in pixels of text at the current size."""
        rows = str(text).split("\n")
        longest = max(len(row) for row in rows)
        if longest == 0:
            return (0, 0)
        return (
            longest * CHAR_WIDTH * self.text_size,
            len(rows) * CHAR_HEIGHT * self.text_size,
        )

    def print(self, text: object = "") -> None:
        """Write text at the cursor, wrapping at the right edge."""
        size = self.text_size
        cw, ch = CHAR_WIDTH * size, CHAR_HEIGHT * size
        x, y = self.cursor
        for char in str(text):
            if char == "\n":
                x, y = 0, y + ch
                continue
            if char == "\r":
                continue
            if x + cw > self.width:
                x, y = 0, y + ch
            self._chars[(x, y)] = (char, size)
            x += cw
        self.cursor = (x, y)

    def println(self, text: object = "") -> None:
        self.print(f"{text}\n")

    def draw_pixel(self, x: int, y: int) -> None:
        """Set one pixel; points off the screen are ignored."""
        if 0 <= x < self.width and 0 <= y < self.height:
            self._pixels.add((int(x), int(y)))

    def draw_line(self, x0: int, y0: int, x1: int, y1: int) -> None:
        """Draw a straight line between two points, both included."""
        x0, y0, x1, y1 = int(x0), int(y0), int(x1), int(y1)
        dx, dy = abs(x1 - x0), -abs(y1 - y0)
        sx = 1 if x0 < x1 else -1
        sy = 1 if y0 < y1 else -1
        err = dx + dy
        while True:
            self.draw_pixel(x0, y0)
            if x0 == x1 and y0 == y1:
                break
            e2 = 2 * err
            if e2 >= dy:
                err += dy
                x0 += sx
            if e2 <= dx:
                err += dx
                y0 += sy

    def display(self) -> None:
        """Show the buffer."""
        self.shown_pixels = frozenset(self._pixels)
        self._shown_chars = dict(self._chars)
        self.frame_count += 1

    def lines(self) -> list[str]:
        """Rows of text currently shown, top to bottom."""
        rows: dict[int, list[tuple[int, str, int]]] = {}
        for (x, y), (char, size) in self._shown_chars.items():
            rows.setdefault(y, []).append((x, char, size))
        result = []
        for y in sorted(rows):
            cells = sorted(rows[y])
            parts = []
            end = cells[0][0]
            for x, char, size in cells:
                cw = CHAR_WIDTH * size
                if x > end:
                    parts.append(" " * ((x - end) // cw))
                parts.append(char)
                end = x + cw
            result.append("".join(parts))
        return result