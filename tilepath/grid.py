"""Tile grid helpers: directions, tile flags and neighbour lookups."""

from __future__ import annotations

from enum import IntEnum
from itertools import product

from .base import Point

CENTER_MASK = 0b1111
SIDE_MASK = 0b11
RIGHT_INDEX = 4
RIGHT_MASK = 0b110000
DOWN_INDEX = 6
DOWN_MASK = 0b11000000


class Location(IntEnum):
    """One of the four diagonal quarters around a tile."""

    UP_LEFT = 0
    UP_RIGHT = 1
    DOWN_LEFT = 2
    DOWN_RIGHT = 3


class TileFlagType(IntEnum):
    """Which part of a tile flag byte is addressed."""

    CENTER = 1
    RIGHT = 2
    DOWN = 4


class Direction(IntEnum):
    """The eight directions around a tile; also indices into neighbour lists."""

    LEFT = 0
    RIGHT = 1
    UP = 2
    DOWN = 3
    UP_LEFT = 4
    UP_RIGHT = 5
    DOWN_LEFT = 6
    DOWN_RIGHT = 7


def sort_by_dist(p: Point, points: list[Point]) -> None:
    """Sort ``points`` in place from nearest to farthest from ``p``."""

    def dist(q: Point) -> int:
        dx = q.x - p.x
        dy = q.y - p.y
        return dx * dx + dy * dy

    points.sort(key=dist)


def get_round(p: Point, d: Location, width: int, height: int) -> list[Point]:
    """The tile ``p`` and the in-bounds tiles of the 2x2 block toward ``d``.

    Tiles come row by row, so the first is the minimum corner and the last
    the maximum corner.
    """
    d = Location(d)
    if d in (Location.UP_LEFT, Location.DOWN_LEFT):
        xs = [p.x - 1, p.x] if p.x > 0 else [p.x]
    else:
        xs = [p.x, p.x + 1] if p.x + 1 < width else [p.x]
    if d in (Location.UP_LEFT, Location.UP_RIGHT):
        ys = [p.y - 1, p.y] if p.y > 0 else [p.y]
    else:
        ys = [p.y, p.y + 1] if p.y + 1 < height else [p.y]
    return [Point(x, y) for y, x in product(ys, xs)]


def get_4d_neighbors(tile_index: int, width: int, amount: int) -> list[int | None]:
    """Left, right, up and down neighbours of a tile; None where out of bounds."""
    arr: list[int | None] = [None] * 4
    if tile_index >= amount + width:
        return arr
    x = tile_index % width
    if x > 0:
        arr[Direction.LEFT] = tile_index - 1
    if x < width - 1:
        arr[Direction.RIGHT] = tile_index + 1
    if tile_index >= width:
        arr[Direction.UP] = tile_index - width
    if tile_index + width < amount:
        arr[Direction.DOWN] = tile_index + width
    return arr


def get_8d_neighbors(tile_index: int, width: int, amount: int) -> list[int | None]:
    """The eight neighbours of a tile, indexed by Direction; None where out of bounds.

    A tile in the row just below the map gets only its upward neighbours.
    """
    arr: list[int | None] = [None] * 8
    if tile_index >= amount + width:
        return arr
    x = tile_index % width
    has_left = x > 0
    has_right = x < width - 1
    below = tile_index >= amount
    if not below:
        if has_left:
            arr[Direction.LEFT] = tile_index - 1
        if has_right:
            arr[Direction.RIGHT] = tile_index + 1
    if tile_index >= width:
        up = tile_index - width
        arr[Direction.UP] = up
        if has_left:
            arr[Direction.UP_LEFT] = up - 1
        if has_right:
            arr[Direction.UP_RIGHT] = up + 1
    if not below and tile_index + width < amount:
        down = tile_index + width
        arr[Direction.DOWN] = down
        if has_left:
            arr[Direction.DOWN_LEFT] = down - 1
        if has_right:
            arr[Direction.DOWN_RIGHT] = down + 1
    return arr


def get_xy(width: int, index: int) -> Point:
    """The column and row of a tile index."""
    return Point(index % width, index // width)