"""An RGB colour value with 8-bit components."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ColorRGB:
    """Red, green and blue components, each kept to 8 bits."""

    r: int = 0
    g: int = 0
    b: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "r", self.r & 0xFF)
        object.__setattr__(self, "g", self.g & 0xFF)
        object.__setattr__(self, "b", self.b & 0xFF)

    @classmethod
    def from_rgb(cls, rgb: int) -> "ColorRGB":
        """Build a colour from a packed 0xRRGGBB value."""
        return cls((rgb >> 16) & 0xFF, (rgb >> 8) & 0xFF, rgb & 0xFF)

    def to_rgb(self) -> int:
        """Packed 0xRRGGBB value of this colour."""
        return (self.r << 16) | (self.g << 8) | self.b

    def __str__(self) -> str:
        return f"ColorRGB(R: {self.r}, G: {self.g}, B: {self.b})"