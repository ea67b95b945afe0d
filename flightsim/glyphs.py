"""Stroke font for the head-up display.

Every glyph is a handful of line segments laid out in a unit cell, where
(0, 0) is the bottom-left corner and (1, 1) the top-right corner. Segments
are returned as ``((x1, y1), (x2, y2))`` pairs in display coordinates.
"""

from __future__ import annotations

Point = tuple[float, float]
Segment = tuple[Point, Point]

_GLYPHS: dict[str, tuple[tuple[float, float, float, float], ...]] = {
    "0": (
        (0.1, 0.1, 0.1, 0.9),
        (0.9, 0.9, 0.1, 0.9),
        (0.9, 0.9, 0.9, 0.1),
        (0.1, 0.1, 0.9, 0.1),
        (0.1, 0.6, 0.9, 0.4),
    ),
    "1": ((0.8, 0.9, 0.8, 0.1),),
    "2": (
        (0.1, 0.7, 0.1, 0.9),
        (0.9, 0.9, 0.1, 0.9),
        (0.9, 0.3, 0.9, 0.1),
        (0.9, 0.9, 0.9, 0.7),
        (0.1, 0.1, 0.9, 0.1),
        (0.1, 0.1, 0.9, 0.7),
    ),
    "3": (
        (0.1, 0.8, 0.1, 0.9),
        (0.9, 0.9, 0.1, 0.9),
        (0.9, 0.9, 0.9, 0.6),
        (0.6, 0.5, 0.9, 0.6),
        (0.6, 0.5, 0.9, 0.4),
        (0.9, 0.1, 0.9, 0.4),
        (0.9, 0.1, 0.1, 0.1),
        (0.1, 0.1, 0.1, 0.2),
    ),
    "4": (
        (0.7, 0.7, 0.7, 0.1),
        (0.1, 0.4, 0.9, 0.4),
        (0.1, 0.4, 0.6, 0.9),
    ),
    "5": (
        (0.9, 0.9, 0.1, 0.9),
        (0.1, 0.6, 0.1, 0.9),
        (0.1, 0.6, 0.9, 0.6),
        (0.9, 0.1, 0.9, 0.6),
        (0.9, 0.1, 0.1, 0.1),
    ),
    "6": (
        (0.1, 0.1, 0.1, 0.7),
        (0.1, 0.1, 0.9, 0.1),
        (0.9, 0.5, 0.9, 0.1),
        (0.9, 0.5, 0.1, 0.5),
        (0.9, 0.9, 0.1, 0.7),
    ),
    "7": (
        (0.9, 0.9, 0.5, 0.4),
        (0.5, 0.1, 0.5, 0.4),
        (0.9, 0.9, 0.1, 0.9),
        (0.1, 0.7, 0.1, 0.9),
    ),
    "8": (
        (0.1, 0.1, 0.1, 0.4),
        (0.1, 0.6, 0.1, 0.9),
        (0.9, 0.9, 0.1, 0.9),
        (0.9, 0.4, 0.9, 0.1),
        (0.9, 0.9, 0.9, 0.6),
        (0.1, 0.1, 0.9, 0.1),
        (0.1, 0.6, 0.9, 0.4),
        (0.1, 0.4, 0.9, 0.6),
    ),
    "9": (
        (0.9, 0.9, 0.9, 0.3),
        (0.9, 0.9, 0.1, 0.9),
        (0.1, 0.5, 0.1, 0.9),
        (0.1, 0.5, 0.9, 0.5),
        (0.1, 0.1, 0.9, 0.3),
    ),
    "A": (
        (0.1, 0.1, 0.1, 0.7),
        (0.3, 0.9, 0.1, 0.7),
        (0.3, 0.9, 0.7, 0.9),
        (0.9, 0.7, 0.7, 0.9),
        (0.9, 0.7, 0.9, 0.1),
        (0.1, 0.5, 0.9, 0.5),
    ),
    "C": (
        (0.1, 0.7, 0.1, 0.3),
        (0.3, 0.1, 0.1, 0.3),
        (0.3, 0.1, 0.9, 0.1),
        (0.3, 0.9, 0.1, 0.7),
        (0.3, 0.9, 0.9, 0.9),
    ),
    "D": (
        (0.1, 0.1, 0.1, 0.9),
        (0.7, 0.9, 0.1, 0.9),
        (0.9, 0.7, 0.7, 0.9),
        (0.9, 0.7, 0.9, 0.3),
        (0.7, 0.1, 0.9, 0.3),
        (0.7, 0.1, 0.1, 0.1),
    ),
    "E": (
        (0.1, 0.1, 0.1, 0.9),
        (0.9, 0.9, 0.1, 0.9),
        (0.9, 0.1, 0.1, 0.1),
        (0.9, 0.5, 0.1, 0.5),
    ),
    "F": (
        (0.1, 0.1, 0.1, 0.9),
        (0.9, 0.9, 0.1, 0.9),
        (0.9, 0.5, 0.1, 0.5),
    ),
    "H": (
        (0.1, 0.1, 0.1, 0.9),
        (0.9, 0.1, 0.9, 0.9),
        (0.9, 0.5, 0.1, 0.5),
    ),
    "I": (
        (0.3, 0.1, 0.7, 0.1),
        (0.3, 0.9, 0.7, 0.9),
        (0.5, 0.9, 0.5, 0.1),
    ),
    "M": (
        (0.1, 0.1, 0.1, 0.9),
        (0.9, 0.1, 0.9, 0.9),
        (0.1, 0.9, 0.5, 0.1),
        (0.9, 0.9, 0.5, 0.1),
    ),
    "N": (
        (0.1, 0.1, 0.1, 0.9),
        (0.9, 0.1, 0.9, 0.9),
        (0.9, 0.1, 0.1, 0.9),
    ),
    "O": (
        (0.1, 0.7, 0.1, 0.3),
        (0.3, 0.1, 0.1, 0.3),
        (0.3, 0.1, 0.7, 0.1),
        (0.9, 0.3, 0.7, 0.1),
        (0.9, 0.3, 0.9, 0.7),
        (0.3, 0.9, 0.1, 0.7),
        (0.3, 0.9, 0.7, 0.9),
        (0.9, 0.7, 0.7, 0.9),
    ),
    "P": (
        (0.1, 0.1, 0.1, 0.9),
        (0.8, 0.9, 0.1, 0.9),
        (0.8, 0.5, 0.1, 0.5),
        (0.8, 0.5, 0.9, 0.7),
        (0.8, 0.9, 0.9, 0.7),
    ),
    "R": (
        (0.1, 0.1, 0.1, 0.9),
        (0.8, 0.9, 0.1, 0.9),
        (0.8, 0.5, 0.1, 0.5),
        (0.8, 0.5, 0.9, 0.7),
        (0.8, 0.9, 0.9, 0.7),
        (0.5, 0.5, 0.9, 0.1),
    ),
    "S": (
        (0.2, 0.9, 0.9, 0.9),
        (0.2, 0.9, 0.1, 0.7),
        (0.2, 0.5, 0.1, 0.7),
        (0.2, 0.5, 0.8, 0.5),
        (0.9, 0.3, 0.8, 0.5),
        (0.9, 0.3, 0.8, 0.1),
        (0.1, 0.1, 0.8, 0.1),
    ),
    "T": (
        (0.1, 0.9, 0.9, 0.9),
        (0.5, 0.9, 0.5, 0.1),
    ),
    "U": (
        (0.1, 0.9, 0.1, 0.3),
        (0.3, 0.1, 0.1, 0.3),
        (0.3, 0.1, 0.7, 0.1),
        (0.9, 0.3, 0.7, 0.1),
        (0.9, 0.3, 0.9, 0.9),
    ),
    "X": (
        (0.1, 0.1, 0.9, 0.9),
        (0.9, 0.1, 0.1, 0.9),
    ),
    "Y": (
        (0.5, 0.5, 0.5, 0.1),
        (0.5, 0.5, 0.9, 0.9),
        (0.5, 0.5, 0.1, 0.9),
    ),
    "/": ((0.1, 0.1, 0.9, 0.9),),
    "?": (
        (0.1, 0.7, 0.1, 0.9),
        (0.9, 0.9, 0.1, 0.9),
        (0.9, 0.9, 0.9, 0.7),
        (0.5, 0.5, 0.9, 0.7),
        (0.5, 0.5, 0.5, 0.4),
        (0.5, 0.1, 0.5, 0.2),
    ),
}


def _place(u: float, v: float, left: float, right: float, top: float, bottom: float) -> Point:
    return (u * right + left * (1 - u), v * top + bottom * (1 - v))


def glyph_segments(char, left, right, top, bottom) -> list[Segment]:
    """Segments drawing ``char`` inside the given cell.

    Characters without a glyph (space, lower case, ...) draw nothing.
    """
    if len(char) != 1:
        raise ValueError(f"expected a single character, got {char!r}")
    return [
        (_place(x1, y1, left, right, top, bottom), _place(x2, y2, left, right, top, bottom))
        for x1, y1, x2, y2 in _GLYPHS.get(char, ())
    ]


def string_segments(text, left, y_center, width, height) -> list[Segment]:
    """Segments drawing ``text`` left to right, each character ``width`` wide."""
    top = y_center + height / 2
    bottom = y_center - height / 2
    segments: list[Segment] = []
    for position, char in enumerate(text):
        cell_left = left + position * width
        segments.extend(glyph_segments(char, cell_left, cell_left + width, top, bottom))
    return segments


def number_segments(value, x_right, y_center, width, height, signed=False) -> list[Segment]:
    """Segments drawing an integer right-aligned at ``x_right``.

    ``value`` is truncated towards zero. Negative values are drawn with a
    leading minus when ``signed`` is true and as zero otherwise.
    """
    value = int(value)
    negative = value < 0 and signed
    if value < 0:
        value = -value if signed else 0
    top = y_center + height / 2
    bottom = y_center - height / 2
    segments: list[Segment] = []
    x = x_right
    while True:
        value, digit = divmod(value, 10)
        segments.extend(glyph_segments(str(digit), x - width, x, top, bottom))
        x -= width
        if value == 0:
            break
    if negative:
        segments.append(((x - 0.9 * width, y_center), (x - 0.1 * width, y_center)))
    return segments