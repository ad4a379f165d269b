"""A view of a tile map that reads obstacles through a pair of flag masks."""

from __future__ import annotations

from typing import Iterator

from .base import Aabb, Point
from .grid import (
    CENTER_MASK,
    DOWN_INDEX,
    RIGHT_INDEX,
    SIDE_MASK,
    Direction,
    get_8d_neighbors,
    get_xy,
)
from .normal import Map
from .tilemap import TileMap

_RIGHT_SIDE = (Direction.UP_RIGHT, Direction.RIGHT, Direction.DOWN_RIGHT)
_LEFT_SIDE = (Direction.UP_LEFT, Direction.LEFT, Direction.DOWN_LEFT)
_DOWN_SIDE = (Direction.DOWN_LEFT, Direction.DOWN, Direction.DOWN_RIGHT)
_UP_SIDE = (Direction.UP_LEFT, Direction.UP, Direction.UP_RIGHT)


class FlagTileMap(Map):
    """A searchable tile map as seen by one kind of walker.

    A tile's centre is an obstacle when it shares no bit with ``center_flag``;
    its right or down edge is a wall when the edge bits share none with
    ``side_flag``. A diagonal step is allowed only when both straight steps
    it cuts across are allowed.
    """

    def __init__(self, map: TileMap, center_flag: int, side_flag: int) -> None:
        self.map = map
        self.center_flag = center_flag & CENTER_MASK
        self.side_flag = side_flag & SIDE_MASK

    def get_obstacle(self, index: int) -> tuple[bool, bool, bool]:
        """Whether the centre, the right edge and the down edge of a tile block."""
        nodes = self.map.nodes
        if not 0 <= index < len(nodes):
            raise IndexError(f"tile index {index} is outside the map")
        value = nodes[index]
        return (
            value & self.center_flag == 0,
            value & (self.side_flag << RIGHT_INDEX) == 0,
            value & (self.side_flag << DOWN_INDEX) == 0,
        )

    def list(self, aabb: Aabb) -> Iterator[Point]:
        """Yield, row by row, the tiles in the box that are not fully blocked."""
        width = self.map.width
        for y in range(aabb.min.y, aabb.max.y):
            line_index = y * width
            for x in range(aabb.min.x, aabb.max.x):
                if not all(self.get_obstacle(x + line_index)):
                    yield Point(x, y)

    def get_neighbors(self, cur: int, parent: int | None) -> Iterator[int]:
        """The tiles reachable in one step from ``cur``, never going back to ``parent``."""
        arr = get_8d_neighbors(cur, self.map.width, self.map.amount)

        def drop(directions) -> None:
            for direction in directions:
                arr[direction] = None

        _, right_wall, down_wall = self.get_obstacle(cur)
        if right_wall:
            drop(_RIGHT_SIDE)
        if down_wall:
            drop(_DOWN_SIDE)

        i = arr[Direction.RIGHT]
        if i is not None:
            if parent != i:
                center, _, down = self.get_obstacle(i)
                if center:
                    drop(_RIGHT_SIDE)
                elif down:
                    drop((Direction.DOWN_RIGHT,))
            else:
                drop(_RIGHT_SIDE)

        i = arr[Direction.LEFT]
        if i is not None:
            if parent != i:
                center, right, down = self.get_obstacle(i)
                if center or right:
                    drop(_LEFT_SIDE)
                elif down:
                    drop((Direction.DOWN_LEFT,))
            else:
                drop(_LEFT_SIDE)

        i = arr[Direction.DOWN]
        if i is not None:
            if parent != i:
                center, right, _ = self.get_obstacle(i)
                if center:
                    drop(_DOWN_SIDE)
                elif right:
                    drop((Direction.DOWN_RIGHT,))
            else:
                drop(_DOWN_SIDE)

        i = arr[Direction.UP]
        if i is not None:
            if parent != i:
                center, right, down = self.get_obstacle(i)
                if center or down:
                    drop(_UP_SIDE)
                elif right:
                    drop((Direction.UP_RIGHT,))
            else:
                drop(_UP_SIDE)

        i = arr[Direction.UP_LEFT]
        if i is not None:
            if parent == i or any(self.get_obstacle(i)):
                arr[Direction.UP_LEFT] = None

        i = arr[Direction.UP_RIGHT]
        if i is not None:
            if parent != i:
                center, _, down = self.get_obstacle(i)
                blocked = center or down
            else:
                blocked = True
            if blocked:
                arr[Direction.UP_RIGHT] = None

        i = arr[Direction.DOWN_LEFT]
        if i is not None:
            if parent != i:
                center, right, _ = self.get_obstacle(i)
                blocked = center or right
            else:
                blocked = True
            if blocked:
                arr[Direction.DOWN_LEFT] = None

        i = arr[Direction.DOWN_RIGHT]
        if i is not None:
            if parent == i or self.get_obstacle(i)[0]:
                arr[Direction.DOWN_RIGHT] = None

        return (index for index in arr if index is not None)

    def get_g(self, cur: int, parent: int) -> int:
        """The cost of one step: ``cell_len`` when straight, ``oblique_len`` when diagonal."""
        width = self.map.width
        if (
            cur == parent + 1
            or cur + 1 == parent
            or cur == parent + width
            or cur + width == parent
        ):
            return self.map.cell_len
        return self.map.oblique_len

    def get_h(self, cur: int, end: int) -> int:
        """Octile distance: diagonal steps for the shorter axis, straight for the rest."""
        from_p = get_xy(self.map.width, cur)
        to_p = get_xy(self.map.width, end)
        dx = abs(from_p.x - to_p.x)
        dy = abs(from_p.y - to_p.y)
        low, high = min(dx, dy), max(dx, dy)
        return low * self.map.oblique_len + (high - low) * self.map.cell_len