import pytest

from tilepath.finder import AStar, Finder, NodeState, ResultKind
from tilepath.normal import Entry, Map, make_neighbors


class GridMap(Map):
    """A 4-connected grid with unit steps and a Manhattan estimate."""

    def __init__(self, width, height, blocked=()):
        self.width = width
        self.height = height
        self.blocked = set(blocked)

    def _xy(self, index):
        return index % self.width, index // self.width

    def get_neighbors(self, cur, parent):
        x, y = self._xy(cur)
        for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            nx, ny = x + dx, y + dy
            if 0 <= nx < self.width and 0 <= ny < self.height:
                index = nx + ny * self.width
                if index not in self.blocked:
                    yield index

    def get_g(self, cur, parent):
        return 1

    def get_h(self, cur, end):
        x1, y1 = self._xy(cur)
        x2, y2 = self._xy(end)
        return abs(x1 - x2) + abs(y1 - y2)


class GraphMap(Map):
    """A directed graph given as {node: {neighbour: cost}}."""

    def __init__(self, edges):
        self.edges = edges

    def get_neighbors(self, cur, parent):
        return iter(self.edges.get(cur, {}))

    def get_g(self, cur, parent):
        return self.edges[parent][cur]

    def get_h(self, cur, end):
        return 0


def _finder(size, version=1):
    finder = Finder(nodes=[Entry() for _ in range(size)])
    finder.version = version
    return finder


def test_entry_clear_resets_everything():
    entry = Entry(g=5, h=7, version=2, parent=3, state=NodeState.FROM_OPEN)
    entry.clear(9)
    assert entry == Entry(version=9)
    assert entry.parent is None
    assert entry.state is NodeState.NONE


def test_map_cannot_be_instantiated_without_methods():
    with pytest.raises(TypeError):
        Map()


def test_make_neighbors_sorts_run_and_marks_states():
    grid = GridMap(5, 5)
    finder = _finder(25)
    cur, end = 12, 24
    finder.nodes[cur].clear(finder.version)
    nn = make_neighbors(grid, cur, end, finder)
    run = finder.neighbors[nn.start:nn.end]
    assert nn.node == cur
    assert len(run) == 4
    fs = [item.f for item in run]
    assert fs == sorted(fs)
    assert nn.f == fs[0]
    assert finder.nodes[cur].state is NodeState.FROM_CLOSE
    for item in run:
        entry = finder.nodes[item.node]
        assert entry.parent == cur
        assert entry.state is NodeState.FROM_OPEN
        assert entry.g == grid.get_g(item.node, cur)
        assert entry.h == grid.get_h(item.node, end)
        assert item.f == entry.g + entry.h


def test_make_neighbors_skips_closed_and_reparents_cheaper():
    cheap, direct = 1, 10
    edges = {0: {1: cheap, 2: direct}, 1: {2: cheap, 0: cheap}}
    graph = GraphMap(edges)
    finder = _finder(3)
    finder.nodes[0].clear(finder.version)
    first = make_neighbors(graph, 0, 2, finder)
    assert finder.nodes[2].parent == 0
    assert finder.nodes[2].g == direct

    second = make_neighbors(graph, 1, 2, finder)
    run = finder.neighbors[second.start:second.end]
    # Node 0 is already reached more cheaply, so only node 2 is offered again.
    assert [item.node for item in run] == [2]
    assert finder.nodes[2].parent == 1
    assert finder.nodes[2].g == cheap + cheap
    assert first.end == second.start


def test_make_neighbors_empty_run_has_zero_f():
    graph = GraphMap({0: {}})
    finder = _finder(1)
    finder.nodes[0].clear(finder.version)
    nn = make_neighbors(graph, 0, 0, finder)
    assert nn.start == nn.end
    assert nn.f == 0


def test_astar_finds_shortest_path_on_open_grid():
    width, height = 6, 5
    grid = GridMap(width, height)
    astar = AStar(width * height, 16, Entry)
    start, end = 0, width * height - 1
    result = astar.find(start, end, 1000, grid, make_neighbors)
    assert result.kind is ResultKind.FOUND
    assert result.node == end
    path = list(astar.result_iter(end))
    assert path[0] == end
    assert path[-1] == start
    assert len(path) == grid.get_h(start, end) + 1
    for a, b in zip(path, path[1:]):
        assert grid.get_h(a, b) == 1


def test_astar_goes_around_wall():
    width, height = 5, 5
    wall = [2 + y * width for y in range(4)]
    grid = GridMap(width, height, wall)
    astar = AStar(width * height, 16, Entry)
    start, end = 0, 4
    result = astar.find(start, end, 1000, grid, make_neighbors)
    assert result.kind is ResultKind.FOUND
    path = list(astar.result_iter(end))
    assert path[-1] == start
    assert not set(path) & set(wall)
    for a, b in zip(path, path[1:]):
        assert grid.get_h(a, b) == 1


def test_astar_reports_not_found_when_sealed_off():
    width, height = 5, 5
    wall = [2 + y * width for y in range(height)]
    grid = GridMap(width, height, wall)
    astar = AStar(width * height, 16, Entry)
    result = astar.find(0, 4, 1000, grid, make_neighbors)
    assert result.kind is ResultKind.NOT_FOUND
    assert result.node % width < 2


def test_astar_respects_open_list_limit():
    width, height = 5, 5
    grid = GridMap(width, height)
    astar = AStar(width * height, 16, Entry)
    result = astar.find(0, 24, 0, grid, make_neighbors)
    assert result.kind is ResultKind.LIMIT_NOT_FOUND


def test_astar_can_search_twice():
    width, height = 4, 4
    grid = GridMap(width, height)
    astar = AStar(width * height, 16, Entry)
    astar.find(0, 15, 1000, grid, make_neighbors)
    result = astar.find(15, 0, 1000, grid, make_neighbors)
    assert result.kind is ResultKind.FOUND
    path = list(astar.result_iter(0))
    assert path[0] == 0 and path[-1] == 15
    assert len(path) == grid.get_h(0, 15) + 1