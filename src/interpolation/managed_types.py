"""
Default interpolators

int, float, Color, str and numeric tuples. Registered into the process-wide
registry by register_default_interpolators().
"""

import sys
from fractions import Fraction
from typing import Tuple

from interpolation.base import ManagedType, lerp
from models.color import Color


def lerp_int(start: int, end: int, progress: float) -> int:
    """
    Integer interpolation in exact arithmetic, rounded to the nearest integer

    Integers of any size keep exact endpoints (no float conversion).
    """
    return start + round((end - start) * Fraction(progress))


class IntManagedType(ManagedType):
    """Integers: linear interpolation rounded to the nearest integer"""
    value_type = int

    def value_at(self, start: int, end: int, progress: float) -> int:
        return lerp_int(start, end, progress)


class FloatManagedType(ManagedType):
    """Floats: plain linear interpolation"""
    value_type = float

    def value_at(self, start: float, end: float, progress: float) -> float:
        return float(lerp(start, end, progress))


class ColorManagedType(ManagedType):
    """
    Colors: each RGBA channel interpolated independently

    Channels are clamped back into 0-255 by Color, so overshooting curves
    saturate instead of producing invalid colors.
    """
    value_type = Color

    def copy(self, value: Color) -> Color:
        return value.copy()

    def value_at(self, start: Color, end: Color, progress: float) -> Color:
        return Color(
            lerp(start.r, end.r, progress),
            lerp(start.g, end.g, progress),
            lerp(start.b, end.b, progress),
            lerp(start.a, end.a, progress),
        )


class StringManagedType(ManagedType):
    """
    Strings: length and characters morph from start to end

    The result length is interpolated between the two lengths. Each
    character is interpolated by code point; positions past the end of a
    string act as 'a'. Spaces in the destination are kept as spaces so
    words stay separated while the text morphs.
    """
    value_type = str

    FILL_CHAR = 'a'

    def value_at(self, start: str, end: str, progress: float) -> str:
        length = max(0, lerp_int(len(start), len(end), progress))

        chars = []
        for i in range(length):
            start_char = start[i] if i < len(start) else self.FILL_CHAR
            end_char = end[i] if i < len(end) else self.FILL_CHAR

            if end_char == ' ':
                chars.append(' ')
                continue

            code = lerp_int(ord(start_char), ord(end_char), progress)
            chars.append(chr(max(0, min(sys.maxunicode, code))))

        return ''.join(chars)


class TupleManagedType(ManagedType):
    """
    Numeric tuples (positions, sizes): element-wise interpolation

    Integer elements stay integers (rounded), everything else becomes float.
    Both tuples must have the same length.
    """
    value_type = tuple

    def value_at(self, start: Tuple, end: Tuple, progress: float) -> Tuple:
        if len(start) != len(end):
            raise ValueError(
                f"Cannot interpolate tuples of different lengths ({len(start)} vs {len(end)})"
            )

        values = []
        for s, e in zip(start, end):
            if type(s) is int and type(e) is int:
                values.append(lerp_int(s, e, progress))
            else:
                values.append(float(lerp(s, e, progress)))
        return tuple(values)
