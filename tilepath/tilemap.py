"""A rectangular tile map whose tiles carry centre, right-edge and down-edge flags."""

from __future__ import annotations

import math

from .base import Aabb, Point
from .grid import (
    CENTER_MASK,
    DOWN_INDEX,
    DOWN_MASK,
    RIGHT_INDEX,
    RIGHT_MASK,
    SIDE_MASK,
    Direction,
    TileFlagType,
    get_xy,
)


def _check_byte(value: int) -> int:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"flag value {value} does not fit in a byte")
    return value


class TileMap:
    """A ``width`` x ``height`` grid of tile flag bytes, stored row by row.

    Bits 0-3 of a flag are the centre flag, bits 4-5 the right-edge flag and
    bits 6-7 the down-edge flag. A centre flag sharing no bit with the
    caller's flag marks the tile as an obstacle.
    """

    def __init__(self, width: int, height: int, cell_len: int, oblique_len: int) -> None:
        """``cell_len`` is the cost of a straight step, ``oblique_len`` of a diagonal one."""
        self.width = width
        self.height = height
        self.cell_len = cell_len
        self.oblique_len = oblique_len
        self.amount = width * height
        self.nodes = bytearray(self.amount)

    def _in_range(self, node: int) -> bool:
        return 0 <= node < self.amount

    def get_node_flag(self, node: int) -> int:
        """The whole flag byte of a tile, or 0 outside the map."""
        return self.nodes[node] if self._in_range(node) else 0

    def get_node_flag_type(self, node: int, flag_type: TileFlagType) -> int:
        """One part of a tile's flag, or 0 outside the map."""
        if not self._in_range(node):
            return 0
        value = self.nodes[node]
        flag_type = TileFlagType(flag_type)
        if flag_type is TileFlagType.CENTER:
            return value & CENTER_MASK
        if flag_type is TileFlagType.RIGHT:
            return (value >> RIGHT_INDEX) & SIDE_MASK
        return value >> DOWN_INDEX

    def set_node_flag(self, node: int, flag: int) -> int:
        """Replace a tile's flag byte and return the old one (0 outside the map)."""
        _check_byte(flag)
        if not self._in_range(node):
            return 0
        old = self.nodes[node]
        self.nodes[node] = flag
        return old

    def set_node_flag_type(self, node: int, flag_type: TileFlagType, flag_value: int) -> int:
        """Replace one part of a tile's flag and return that part's old value."""
        _check_byte(flag_value)
        if not self._in_range(node):
            return 0
        value = self.nodes[node]
        flag_type = TileFlagType(flag_type)
        if flag_type is TileFlagType.CENTER:
            self.nodes[node] = (value & ~CENTER_MASK & 0xFF) | (flag_value & CENTER_MASK)
            return value & CENTER_MASK
        if flag_type is TileFlagType.RIGHT:
            self.nodes[node] = (value & ~RIGHT_MASK & 0xFF) | (
                (flag_value & SIDE_MASK) << RIGHT_INDEX
            )
            return (value >> RIGHT_INDEX) & SIDE_MASK
        self.nodes[node] = (value & ~DOWN_MASK & 0xFF) | ((flag_value & SIDE_MASK) << DOWN_INDEX)
        return value >> DOWN_INDEX

    def set_range_flag(self, aabb: Aabb, flag: int) -> None:
        """Set the flag byte of every tile in the box, clipped to the map."""
        _check_byte(flag)
        x1 = max(aabb.min.x, 0)
        y1 = max(aabb.min.y, 0)
        x2 = self.width if aabb.max.x < 0 or aabb.max.x > self.width else aabb.max.x
        y2 = self.height if aabb.max.y < 0 or aabb.max.y > self.height else aabb.max.y
        if x1 >= x2:
            return
        row = bytes([flag]) * (x2 - x1)
        for y in range(y1, y2):
            start = y * self.width
            self.nodes[start + x1 : start + x2] = row

    def is_node_center_obstacle(self, node: int, flag: int) -> bool:
        """Whether the tile's centre shares no bit with ``flag``."""
        return self.get_node_flag(node) & CENTER_MASK & flag == 0

    def get_node_center_flag(self, node: int) -> int:
        """The centre part of a tile's flag."""
        return self.get_node_flag(node) & CENTER_MASK

    def set_node_center_flag(self, node: int, value: int) -> bool:
        """Set the centre part of a tile's flag; False when outside the map."""
        if not self._in_range(node):
            return False
        self.nodes[node] = (self.nodes[node] & ~CENTER_MASK & 0xFF) | (value & CENTER_MASK)
        return True

    def move_center_flag(self, src: int, dest: int) -> None:
        """Move the centre flag of ``src`` to ``dest``, clearing it at ``src``."""
        flag = self.get_node_center_flag(src)
        self.set_node_center_flag(src, 0)
        self.set_node_center_flag(dest, flag)

    def find_round(
        self, node: int, count: int, spacing: int, d: Direction, flag: int
    ) -> tuple[Aabb, list[Point]]:
        """Collect free tiles around ``node`` until at least ``count`` are found.

        The searched box grows clockwise one ring at a time, starting toward
        ``d``; ``spacing`` free tiles are left between the chosen ones. Returns
        the final box and the tiles found, which is empty when ``node`` itself
        is an obstacle.
        """
        p = get_xy(self.width, node)
        if self.is_node_center_obstacle(node, flag):
            return Aabb(p, p), []
        result: list[Point] = []
        aabb = self._find(p, count, spacing + 1, flag, Direction(d), result)
        return aabb, result

    def _find(
        self,
        p: Point,
        count: int,
        spacing: int,
        flag: int,
        d: Direction,
        result: list[Point],
    ) -> Aabb:
        if count <= 1:
            result.append(p)
            return Aabb(p, p.offset(spacing))
        width = self.width
        height = self.height
        min_x, min_y = p.x, p.y
        if count >= 4:
            size = math.isqrt(count)
            rsize = min(size * spacing, width, height)
            min_x -= rsize // 2
            min_y -= rsize // 2
            # An even side length grew by half a ring, so shift and turn.
            if size % 2 == 0:
                if d is Direction.LEFT:
                    d = Direction.RIGHT
                    min_y += spacing
                elif d is Direction.RIGHT:
                    d = Direction.LEFT
                    min_x += spacing
                elif d is Direction.UP:
                    d = Direction.DOWN
                    min_x += spacing
                    min_y += spacing
                else:
                    d = Direction.UP
            max_x = min_x + rsize
            max_y = min_y + rsize
            if min_x < 0:
                max_x -= min_x
                min_x = 0
            if min_y < 0:
                max_y -= min_y
                min_y = 0
            if max_x > width:
                min_x -= max_x - width
                max_x = width
            if max_y > height:
                min_y -= max_y - height
                max_y = height
            self._spacing_points(spacing, min_x, min_y, max_x, max_y, flag, result)
            if len(result) >= count:
                return Aabb(Point(min_x, min_y), Point(max_x, max_y))
        else:
            max_x = min(p.x + spacing, width)
            max_y = min(p.y + spacing, height)
            result.append(p)

        while True:
            if d is Direction.LEFT:
                d = Direction.UP
                if min_x < spacing:
                    old = max_x
                    max_x += spacing
                    if max_x > width:
                        break
                    diff = (old, min_y, max_x, max_y)
                else:
                    old = min_x
                    min_x -= spacing
                    diff = (min_x, min_y, old, max_y)
            elif d is Direction.RIGHT:
                d = Direction.DOWN
                if max_x + spacing > width:
                    old = min_x
                    min_x -= spacing
                    if min_x < 0:
                        break
                    diff = (min_x, min_y, old, max_y)
                else:
                    old = max_x
                    max_x += spacing
                    diff = (old, min_y, max_x, max_y)
            elif d is Direction.UP:
                d = Direction.RIGHT
                if max_y + spacing > height:
                    old = min_y
                    min_y -= spacing
                    if min_y < 0:
                        break
                    diff = (min_x, min_y, max_x, old)
                else:
                    old = max_y
                    max_y += spacing
                    diff = (min_x, old, max_x, max_y)
            else:
                d = Direction.LEFT
                if min_y < spacing:
                    old = max_y
                    max_y += spacing
                    if max_y > height:
                        break
                    diff = (min_x, old, max_x, max_y)
                else:
                    old = min_y
                    min_y -= spacing
                    diff = (min_x, min_y, max_x, old)
            self._spacing_points(spacing, *diff, flag, result)
            if len(result) >= count:
                break
        return Aabb(Point(min_x, min_y), Point(max_x, max_y))

    def _spacing_points(
        self,
        spacing: int,
        min_x: int,
        min_y: int,
        max_x: int,
        max_y: int,
        flag: int,
        result: list[Point],
    ) -> None:
        """Pick at most one free tile from each spacing-sized cell of the box."""
        for y in range(min_y, max_y, spacing):
            for x in range(min_x, max_x, spacing):
                found = self._range_point(x, y, spacing, flag)
                if found is not None:
                    result.append(found)

    def _range_point(self, x0: int, y0: int, spacing: int, flag: int) -> Point | None:
        """The first free tile, row by row, of the cell starting at (x0, y0)."""
        x_end = min(x0 + spacing, self.width)
        y_end = min(y0 + spacing, self.height)
        for y in range(y0, y_end):
            line_index = y * self.width
            for x in range(x0, x_end):
                if not self.is_node_center_obstacle(x + line_index, flag):
                    return Point(x, y)
        return None