"""
Color model - RGBA color value for animated properties

Mutable like most UI color properties, so the color interpolator copies the
start value when a binding is created.
"""

from dataclasses import dataclass
from typing import Tuple
from utils.colors import clamp_channel


@dataclass
class Color:
    """
    RGBA color with 0-255 channels

    Channels are clamped on construction so a Color is always valid.

    Examples:
        color = Color.from_rgb(255, 0, 0)
        r, g, b = color.to_rgb()
        faded = color.with_alpha(128)
    """

    r: int = 0
    g: int = 0
    b: int = 0
    a: int = 255

    def __post_init__(self):
        self.r = clamp_channel(self.r)
        self.g = clamp_channel(self.g)
        self.b = clamp_channel(self.b)
        self.a = clamp_channel(self.a)

    # === CONSTRUCTORS ===

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int, a: int = 255) -> 'Color':
        return cls(r, g, b, a)

    # === CONVERSIONS ===

    def to_rgb(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def to_rgba(self) -> Tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)

    def with_alpha(self, a: int) -> 'Color':
        return Color(self.r, self.g, self.b, a)

    def copy(self) -> 'Color':
        return Color(self.r, self.g, self.b, self.a)

    @staticmethod
    def black() -> 'Color':
        return Color.from_rgb(0, 0, 0)

    @staticmethod
    def white() -> 'Color':
        return Color.from_rgb(255, 255, 255)

    @staticmethod
    def red() -> 'Color':
        return Color.from_rgb(255, 0, 0)

    @staticmethod
    def green() -> 'Color':
        return Color.from_rgb(0, 255, 0)

    @staticmethod
    def blue() -> 'Color':
        return Color.from_rgb(0, 0, 255)

    def __str__(self) -> str:
        if self.a == 255:
            return f"Color(RGB={self.to_rgb()})"
        return f"Color(RGBA={self.to_rgba()})"
