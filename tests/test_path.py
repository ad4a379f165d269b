import pytest

from tilepath.base import Aabb, Point
from tilepath.finder import AStar, NodeState
from tilepath.flagmap import FlagTileMap
from tilepath.normal import Entry, make_neighbors
from tilepath.path import filter_path, smooth_path, trace_line
from tilepath.tilemap import TileMap


class _SlimEntry:
    __slots__ = ("g", "h", "version", "parent", "state")

    def __init__(self):
        self.g = 0
        self.h = 0
        self.version = 0
        self.parent = None
        self.state = NodeState.NONE

    def clear(self, version):
        self.g = 0
        self.h = 0
        self.version = version
        self.parent = None
        self.state = NodeState.NONE


def _open_map(width, height):
    tile_map = TileMap(width, height, 100, 141)
    tile_map.set_range_flag(Aabb(Point(0, 0), Point(width, height)), 255)
    return tile_map


def _search(tile_map, start, end, entry_factory=Entry):
    astar = AStar(tile_map.width * tile_map.height, 100, entry_factory)
    flag_map = FlagTileMap(tile_map, 1, 1)
    astar.find(start, end, 30000, flag_map, make_neighbors)
    filtered = list(filter_path(astar.result_iter(end), tile_map.width))
    smoothed = list(
        smooth_path(filter_path(astar.result_iter(end), tile_map.width), flag_map)
    )
    return filtered, smoothed


def _block_square(tile_map, width):
    for y in (4, 5, 6):
        for x in (4, 5, 6):
            tile_map.set_node_center_flag(x + y * width, 0)


def test_case_1_walls_with_gap():
    tile_map = _open_map(10, 10)
    tile_map.set_range_flag(Aabb(Point(4, 0), Point(6, 4)), 0)
    tile_map.set_range_flag(Aabb(Point(4, 5), Point(6, 10)), 0)
    flag_map = FlagTileMap(tile_map, 1, 1)
    assert trace_line(flag_map, Point(2, 5), Point(6, 4)) == Point(3, 5)

    filtered, smoothed = _search(tile_map, 9 + 9 * 10, 1 + 9 * 10)
    assert filtered == [
        Point(1, 9),
        Point(1, 6),
        Point(3, 4),
        Point(6, 4),
        Point(9, 7),
        Point(9, 9),
    ]
    assert smoothed == [Point(1, 9), Point(3, 4), Point(6, 4), Point(9, 9)]


def test_case_2_square_obstacle_forward():
    tile_map = _open_map(11, 11)
    _block_square(tile_map, 11)
    filtered, smoothed = _search(tile_map, 0, 120)
    assert filtered == [
        Point(10, 10),
        Point(9, 10),
        Point(6, 7),
        Point(3, 7),
        Point(3, 3),
        Point(0, 0),
    ]
    assert smoothed == [Point(10, 10), Point(3, 7), Point(0, 0)]


def test_case_22_square_obstacle_backward():
    tile_map = _open_map(11, 11)
    _block_square(tile_map, 11)
    filtered, smoothed = _search(tile_map, 120, 0)
    assert filtered == [
        Point(0, 0),
        Point(1, 0),
        Point(4, 3),
        Point(7, 3),
        Point(7, 7),
        Point(10, 10),
    ]
    assert smoothed == [Point(0, 0), Point(7, 3), Point(10, 10)]


def test_case_3_large_map():
    tile_map = _open_map(1000, 1000)
    width = tile_map.width
    for x, y in ((88, 88), (65, 64), (54, 55), (44, 44), (33, 33)):
        tile_map.set_node_center_flag(x + y * width, 0)
    filtered, smoothed = _search(
        tile_map, 999 + 999 * width, 1 + 1 * width, entry_factory=_SlimEntry
    )
    assert filtered == [
        Point(1, 1),
        Point(1, 4),
        Point(53, 56),
        Point(54, 56),
        Point(87, 89),
        Point(89, 89),
        Point(999, 999),
    ]
    assert smoothed == [Point(1, 1), Point(53, 56), Point(87, 89), Point(999, 999)]


def test_case_4_short_wall():
    tile_map = _open_map(30, 30)
    tile_map.set_node_center_flag(13 + 10 * 30, 0)
    tile_map.set_node_center_flag(14 + 10 * 30, 0)
    filtered, smoothed = _search(tile_map, 24 + 10 * 30, 10 + 10 * 30)
    assert filtered == [
        Point(10, 10),
        Point(11, 11),
        Point(15, 11),
        Point(16, 10),
        Point(24, 10),
    ]
    assert smoothed == [Point(10, 10), Point(11, 11), Point(15, 11), Point(24, 10)]


def test_filter_path_collapses_straight_run():
    assert list(filter_path([0, 1, 2, 3], 10)) == [Point(0, 0), Point(3, 0)]


def test_filter_path_keeps_corner():
    # (0,0) -> (1,0) -> (2,0) -> (2,1) -> (2,2)
    assert list(filter_path([0, 1, 2, 12, 22], 10)) == [
        Point(0, 0),
        Point(2, 0),
        Point(2, 2),
    ]


def test_filter_path_single_and_pair():
    assert list(filter_path([15], 10)) == [Point(5, 1)]
    assert list(filter_path([0, 1], 10)) == [Point(0, 0), Point(1, 0)]


def test_filter_path_empty_raises():
    with pytest.raises(ValueError):
        filter_path([], 10)


def test_smooth_path_open_map_skips_corner():
    flag_map = FlagTileMap(_open_map(8, 8), 1, 1)
    points = [Point(0, 0), Point(3, 0), Point(3, 3)]
    assert list(smooth_path(points, flag_map)) == [Point(0, 0), Point(3, 3)]


def test_smooth_path_single_point_and_empty():
    flag_map = FlagTileMap(_open_map(8, 8), 1, 1)
    assert list(smooth_path([Point(5, 5)], flag_map)) == [Point(5, 5)]
    with pytest.raises(ValueError):
        smooth_path([], flag_map)


def test_trace_line_same_point_is_reachable():
    flag_map = FlagTileMap(_open_map(5, 5), 1, 1)
    assert trace_line(flag_map, Point(2, 2), Point(2, 2)) is None


def test_trace_line_open_map_is_reachable_in_all_directions():
    flag_map = FlagTileMap(_open_map(9, 9), 1, 1)
    centre = Point(4, 4)
    ends = [Point(8, 6), Point(6, 8), Point(8, 1), Point(6, 0),
            Point(0, 2), Point(1, 0), Point(0, 7), Point(2, 8)]
    assert [trace_line(flag_map, centre, end) for end in ends] == [None] * len(ends)


def test_trace_line_stops_before_obstacle():
    tile_map = _open_map(6, 3)
    tile_map.set_node_center_flag(2, 0)
    flag_map = FlagTileMap(tile_map, 1, 1)
    assert trace_line(flag_map, Point(0, 0), Point(4, 0)) == Point(1, 0)


def test_trace_line_blocked_right_edge_at_start():
    tile_map = _open_map(6, 3)
    tile_map.set_node_flag(0, 0b11001111)
    flag_map = FlagTileMap(tile_map, 1, 1)
    assert trace_line(flag_map, Point(0, 0), Point(3, 0)) == Point(0, 0)