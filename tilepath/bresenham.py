"""Stepping along a straight line between two grid points."""

from __future__ import annotations

import math
import struct

from .base import Point


def _f32(value: float) -> float:
    """Round a number to single precision."""
    return struct.unpack("f", struct.pack("f", value))[0]


def _round_half_away(value: float) -> int:
    magnitude = math.floor(abs(value) + 0.5)
    return int(magnitude) if value >= 0 else -int(magnitude)


class Bresenham:
    """A line walker that advances one unit along its major axis per step.

    When the line is steeper than 45 degrees the coordinates are swapped
    (``xy_change`` is set) so that x is always the major axis.
    """

    def __init__(self, start: Point, end: Point) -> None:
        if abs(end.x - start.x) >= abs(end.y - start.y):
            self.xy_change = False
        else:
            start = Point(start.y, start.x)
            end = Point(end.y, end.x)
            self.xy_change = True
        if end.x == start.x or end.y == start.y:
            self.steep: tuple[int, float, int] = (0, 1.0, start.y)
        else:
            dy = end.y - start.y
            dx = end.x - start.x
            self.steep = (dy, _f32(dx), dx * start.y - dy * start.x)
        self.x_step = 1 if end.x > start.x else -1
        self.start = start
        self.end = end

    def is_over(self) -> bool:
        """Whether the walker has reached the end column."""
        return self.start.x == self.end.x

    def y(self, x: int) -> int:
        """The rounded y coordinate of the line at ``x``."""
        dy, dx, offset = self.steep
        value = _f32(_f32(x * dy + offset) / dx)
        return _round_half_away(value)

    def step(self) -> None:
        """Advance one unit along the major axis."""
        x = self.start.x + self.x_step
        self.start = Point(x, self.y(x))

    def __repr__(self) -> str:
        return (
            f"Bresenham(start={self.start!r}, end={self.end!r}, "
            f"x_step={self.x_step}, steep={self.steep!r}, xy_change={self.xy_change})"
        )