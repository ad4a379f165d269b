"""A compact interface over tile maps and path finding for embedding hosts."""

from __future__ import annotations

from enum import IntEnum

from .base import Aabb, Point
from .finder import AStar, ResultKind
from .flagmap import FlagTileMap
from .grid import Direction, TileFlagType, sort_by_dist
from .normal import Entry, make_neighbors
from .path import filter_path, smooth_path
from .path import trace_line as _trace_line
from .tilemap import TileMap

CELL_LEN = 100
OBLIQUE_LEN = 144


class FlagKind(IntEnum):
    """Which part of a tile flag is read or written; ALL means the whole byte."""

    ALL = 0
    CENTER = 1
    RIGHT = 2
    DOWN = 4


class Facing(IntEnum):
    """The side toward which a search around a tile starts growing."""

    LEFT = 0
    RIGHT = 1
    UP = 2
    DOWN = 3


class GridMap:
    """A tile map with fixed step costs and a list holding the last result."""

    def __init__(self, width: int, height: int) -> None:
        self.inner = TileMap(width, height, CELL_LEN, OBLIQUE_LEN)
        self.result: list[Point] = []

    @property
    def width(self) -> int:
        return self.inner.width

    @property
    def height(self) -> int:
        return self.inner.height

    def set_node_flag(self, index: int, flag_type: FlagKind, value: int) -> int:
        """Write a tile's flag, or one part of it, and return the old value."""
        flag_type = FlagKind(flag_type)
        if flag_type is FlagKind.ALL:
            return self.inner.set_node_flag(index, value)
        return self.inner.set_node_flag_type(index, TileFlagType(flag_type), value)

    def get_node_flag(self, index: int, flag_type: FlagKind) -> int:
        """Read a tile's flag, or one part of it."""
        flag_type = FlagKind(flag_type)
        if flag_type is FlagKind.ALL:
            return self.inner.get_node_flag(index)
        return self.inner.get_node_flag_type(index, TileFlagType(flag_type))

    def set_range_flag(self, x1: int, y1: int, x2: int, y2: int, value: int) -> None:
        """Set the whole flag of every tile with x1 <= x < x2 and y1 <= y < y2."""
        self.inner.set_range_flag(Aabb(Point(x1, y1), Point(x2, y2)), value)

    def find_round(
        self, index: int, count: int, spacing: int, d: Facing, flag: int
    ) -> tuple[Aabb, list[Point]]:
        """Free tiles around ``index``, found ring by ring starting toward ``d``."""
        aabb, points = self.inner.find_round(
            index, count, spacing, Direction(Facing(d)), flag
        )
        self.result = points
        return aabb, list(points)

    def find_round_and_sort_by_dist(
        self,
        index: int,
        count: int,
        spacing: int,
        d: Facing,
        flag: int,
        target_x: int,
        target_y: int,
    ) -> tuple[Aabb, list[Point]]:
        """Like ``find_round``, with the tiles ordered nearest first to the target."""
        aabb, points = self.inner.find_round(
            index, count, spacing, Direction(Facing(d)), flag
        )
        sort_by_dist(Point(target_x, target_y), points)
        self.result = points
        return aabb, list(points)

    def trace_line(
        self,
        start_x: int,
        start_y: int,
        end_x: int,
        end_y: int,
        center_flag: int,
        side_flag: int,
    ) -> Point | None:
        """None when the straight line is walkable, else the last walkable point."""
        flag_map = FlagTileMap(self.inner, center_flag, side_flag)
        return _trace_line(flag_map, Point(start_x, start_y), Point(end_x, end_y))


class PathFinder:
    """A* search over grid maps of one size."""

    def __init__(self, width: int, height: int, node_number: int) -> None:
        self.inner: AStar[Entry] = AStar(width * height, node_number, Entry)

    def find_path(
        self,
        tile_map: GridMap,
        max_number: int,
        start: int,
        end: int,
        center_flag: int,
        side_flag: int,
    ) -> int:
        """Search from ``start`` to ``end``.

        Returns ``end`` when it was reached, otherwise the node the search got
        closest to (or stopped at, when ``max_number`` was exceeded).
        """
        flag_map = FlagTileMap(tile_map.inner, center_flag, side_flag)
        outcome = self.inner.find(start, end, max_number, flag_map, make_neighbors)
        if outcome.kind is ResultKind.FOUND:
            return end
        return outcome.node

    def result(
        self, node: int, tile_map: GridMap, center_flag: int, side_flag: int
    ) -> list[Point]:
        """The smoothed path from ``node`` back to the start of the last search."""
        flag_map = FlagTileMap(tile_map.inner, center_flag, side_flag)
        points = list(
            smooth_path(
                filter_path(self.inner.result_iter(node), tile_map.inner.width),
                flag_map,
            )
        )
        tile_map.result = points
        return list(points)