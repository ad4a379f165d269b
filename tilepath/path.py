"""Turning a found tile path into corner points, and straightening it."""

from __future__ import annotations

from typing import Callable, Iterable, Iterator, Optional

from .base import Angle, Point
from .bresenham import Bresenham
from .flagmap import FlagTileMap
from .grid import get_xy

_Check = Callable[[FlagTileMap, int], bool]


def filter_path(nodes: Iterable[int], width: int) -> Iterator[Point]:
    """Yield the tiles of a path where its direction changes, plus both ends.

    ``nodes`` are tile indices in path order, as yielded by
    ``AStar.result_iter``. Raises ValueError if there are none.
    """
    it = iter(nodes)
    first = next(it, None)
    if first is None:
        raise ValueError("a path needs at least one node")
    start = get_xy(width, first)
    second = next(it, None)
    if second is None:
        return iter([start])
    return _filter(it, width, start, get_xy(width, second))


def _filter(it: Iterator[int], width: int, start: Point, cur: Point) -> Iterator[Point]:
    angle = Angle(cur - start)
    for node in it:
        p = get_xy(width, node)
        turn = Angle(p - cur)
        if turn != angle:
            angle = turn
            yield start
            start = cur
        cur = p
    yield start
    yield cur


def smooth_path(points: Iterable[Point], flag_map: FlagTileMap) -> Iterator[Point]:
    """Drop the points of a path that a straight walk can skip.

    A point is kept only when the next point cannot be reached in a straight
    line from the last kept one. Raises ValueError if there are no points.
    """
    it = iter(points)
    start = next(it, None)
    if start is None:
        raise ValueError("a path needs at least one point")
    cur = next(it, None)
    if cur is None:
        return iter([start])
    return _smooth(it, flag_map, start, cur)


def _smooth(
    it: Iterator[Point], flag_map: FlagTileMap, start: Point, cur: Point
) -> Iterator[Point]:
    for point in it:
        if trace_line(flag_map, point, start) is not None:
            yield start
            start = cur
        cur = point
    yield start
    yield cur


def _check_center(flag_map: FlagTileMap, index: int) -> bool:
    return flag_map.get_obstacle(index)[0]


def _check_right(flag_map: FlagTileMap, index: int) -> bool:
    return flag_map.get_obstacle(index)[1]


def _check_center_right(flag_map: FlagTileMap, index: int) -> bool:
    center, right, _ = flag_map.get_obstacle(index)
    return center or right


def _check_down(flag_map: FlagTileMap, index: int) -> bool:
    return flag_map.get_obstacle(index)[2]


def _check_center_down(flag_map: FlagTileMap, index: int) -> bool:
    center, _, down = flag_map.get_obstacle(index)
    return center or down


def _check_all(flag_map: FlagTileMap, index: int) -> bool:
    return any(flag_map.get_obstacle(index))


def trace_line(flag_map: FlagTileMap, start: Point, end: Point) -> Point | None:
    """Walk a straight line from ``start`` to ``end`` over the map.

    Returns None when the whole line is walkable, otherwise the last
    walkable point reached. Rows grow downward.
    """
    if start == end:
        return None
    b = Bresenham(start, end)
    c = flag_map.map.width
    cc, cr, cd, ca = _check_center, _check_center_right, _check_center_down, _check_all
    # A start check of None means the starting tile is not checked.
    if end.x > start.x:
        if end.y > start.y:
            if b.xy_change:
                checks = (_check_down, cd, cd, cr, cd, cc, cc)
            else:
                checks = (_check_right, cr, cr, cr, cd, cc, cc)
            return _walk(flag_map, b, checks, -1, -c, look_ahead=True)
        if b.xy_change:
            checks = (None, cd, cd, cr, cc, cc, cd)
            return _walk(flag_map, b, checks, -1, c, look_ahead=True)
        checks = (_check_right, cr, ca, ca, cc, cc, cd)
        return _walk(flag_map, b, checks, -1, c, look_ahead=False)
    if end.y < start.y:
        if b.xy_change:
            checks = (None, cd, ca, cd, cr, cd, ca)
        else:
            checks = (None, cr, ca, cd, cr, cr, ca)
        return _walk(flag_map, b, checks, 1, c, look_ahead=False)
    if b.xy_change:
        checks = (_check_down, cd, ca, cc, ca, cc, cr)
        return _walk(flag_map, b, checks, 1, -c, look_ahead=False)
    checks = (None, cr, cr, cc, ca, cc, ca)
    return _walk(flag_map, b, checks, 1, -c, look_ahead=True)


def _walk(
    flag_map: FlagTileMap,
    b: Bresenham,
    checks: tuple[Optional[_Check], _Check, _Check, _Check, _Check, _Check, _Check],
    oblique1: int,
    oblique2: int,
    look_ahead: bool,
) -> Point | None:
    """Step the walker, checking straight and diagonal steps with the given rules.

    With ``look_ahead`` a straight step followed by a diagonal one must be
    entirely free.
    """
    (
        start_check,
        check_line,
        check_oblique,
        check_oblique1,
        check_oblique2,
        check_line_end,
        check_oblique_end,
    ) = checks
    swapped = b.xy_change
    width = flag_map.map.width

    def change(p: Point) -> Point:
        return Point(p.y, p.x) if swapped else p

    def index_of(p: Point) -> int:
        q = change(p)
        return q.x + q.y * width

    if start_check is not None and start_check(flag_map, index_of(b.start)):
        return b.start
    last = b.start
    b.step()
    while b.start != b.end:
        index = index_of(b.start)
        if b.start.y != last.y:
            if (
                check_oblique(flag_map, index)
                or check_oblique1(flag_map, index + oblique1)
                or check_oblique2(flag_map, index + oblique2)
            ):
                return change(last)
        elif look_ahead and b.y(b.start.x + b.x_step) != last.y:
            if _check_all(flag_map, index):
                return change(last)
        elif check_line(flag_map, index):
            return change(last)
        last = b.start
        b.step()
    index = index_of(b.start)
    if b.start.y != last.y:
        if (
            check_oblique_end(flag_map, index)
            or check_oblique1(flag_map, index + oblique1)
            or check_oblique2(flag_map, index + oblique2)
        ):
            return change(last)
    elif check_line_end(flag_map, index):
        return change(last)
    return None