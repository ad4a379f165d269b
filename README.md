# tilepath

A* path finding on tile maps. It has no dependencies outside the standard library.

Each tile holds one flag byte. Bits 0–3 are the centre flag, bits 4–5 are the right-edge flag and bits 6–7 are the down-edge flag. A search reads the map through two masks, a centre flag and a side flag. A tile's centre is an obstacle when its centre bits share no bit with the centre mask. Its right or down edge is a wall when the edge bits share no bit with the side mask.

## Modules

- `tilepath.base`: `Point`, a frozen integer point. `Aabb` is a box with an inclusive `min` and an exclusive `max`, and has `extend`, `contains` and `intersects`. `Angle` compares direction vectors and counts whole turns with `rotate_left` and `rotate_right`.
- `tilepath.bresenham`: `Bresenham`, which steps along a straight line one unit at a time on its major axis.
- `tilepath.finder`: the A* engine.
  - `AStar(map_capacity, node_number, entry_factory)` has `find(start, end, max_number, arg, make_neighbors)`, `result_iter(node)` and `resize(map_capacity)`.
  - `find` returns an `AStarResult` with a `kind` (`ResultKind.FOUND`, `NOT_FOUND` or `LIMIT_NOT_FOUND`) and a `node`.
  - The open list is a heap of sorted neighbour runs (`NodeNeighbors`), not a heap of single nodes.
- `tilepath.normal`: the abstract `Map` (`get_neighbors`, `get_g`, `get_h`), the `Entry` that holds each node's search state, and `make_neighbors`, which expands a node for `AStar.find`.
- `tilepath.grid`:
  - the enums `Direction`, `Location` and `TileFlagType`;
  - neighbour lookups `get_4d_neighbors` and `get_8d_neighbors`;
  - `get_round`, `get_xy` and `sort_by_dist`.
- `tilepath.tilemap`: `TileMap(width, height, cell_len, oblique_len)`, the flag grid.
  - Per-tile methods: `get_node_flag`, `set_node_flag`, `get_node_flag_type`, `set_node_flag_type`, `get_node_center_flag`, `set_node_center_flag`, `is_node_center_obstacle` and `move_center_flag`.
  - `set_range_flag(aabb, flag)` sets every tile in a box, clipped to the map.
  - `find_round(node, count, spacing, d, flag)` collects free tiles around a tile until it has at least `count`. The search box grows clockwise one ring at a time, starting toward `d`. It returns the final box and the list of tiles. The list is empty when the starting tile is itself an obstacle.
- `tilepath.flagmap`: `FlagTileMap(map, center_flag, side_flag)`, a masked view of a `TileMap` that `AStar` can search.
  - It allows eight-way movement and never steps straight back to the parent tile.
  - A diagonal step is allowed only when both straight steps it cuts across are allowed.
  - A straight step costs `cell_len` and a diagonal step costs `oblique_len`. The heuristic is the octile distance.
  - `list(aabb)` yields the tiles in a box that are not fully blocked.
- `tilepath.path`:
  - `filter_path(nodes, width)` keeps the ends of a path and the tiles where its direction changes.
  - `smooth_path(points, flag_map)` drops the points that a straight walk can skip.
  - `trace_line(flag_map, start, end)` returns `None` when the straight line is walkable. Otherwise it returns the last walkable point.
- `tilepath.api`: a compact front end.
  - `GridMap(width, height)` uses step costs 100 and 144. It has `set_node_flag`, `get_node_flag`, `set_range_flag`, `find_round`, `find_round_and_sort_by_dist` and `trace_line`. `FlagKind.ALL` addresses the whole flag byte.
  - `PathFinder(width, height, node_number)` has `find_path` and `result`.

## Install

```
pip install tilepath
```

## Example

```python
from tilepath.api import FlagKind, GridMap, PathFinder

grid = GridMap(11, 11)
grid.set_range_flag(0, 0, 11, 11, 0xFF)          # everything walkable
for x in range(4, 7):
    for y in range(4, 7):
        grid.set_node_flag(x + y * 11, FlagKind.CENTER, 0)   # a 3x3 block

finder = PathFinder(11, 11, 100)
reached = finder.find_path(grid, 30000, 0, 120, 1, 1)
path = finder.result(reached, grid, 1, 1)   # smoothed list of Points, from `reached` back to the start
```

`find_path` returns the end tile when it reaches it. Otherwise it returns the tile the search came closest to, or the tile it stopped at when the open list grew past `max_number`. `result` traces the path back from whichever tile it is given.

The lower-level pieces can be used directly:

```python
from tilepath.base import Aabb, Point
from tilepath.finder import AStar
from tilepath.flagmap import FlagTileMap
from tilepath.normal import Entry, make_neighbors
from tilepath.path import filter_path, smooth_path
from tilepath.tilemap import TileMap

tiles = TileMap(10, 10, 100, 141)
tiles.set_range_flag(Aabb(Point(0, 0), Point(10, 10)), 0xFF)
view = FlagTileMap(tiles, 1, 1)

astar = AStar(tiles.width * tiles.height, 100, Entry)
outcome = astar.find(99, 0, 30000, view, make_neighbors)
corners = list(smooth_path(filter_path(astar.result_iter(outcome.node), tiles.width), view))
```

## What it does not do

This is a library only. It has no command-line tool, no drawing of maps or paths, and no loading or saving of maps. Maps are built in memory through the flag-setting methods. Search runs in one direction only, from the start tile toward the end tile.

## Tests

```
pip install -e .[test]
pytest
```