"""A* search that keeps whole neighbour sets, not single nodes, in its open list.

Each expanded node yields a sorted run of its neighbours. The open list holds
these runs, which keeps it far smaller than a classic A* open list.

Entries stored in the finder must expose ``g``, ``h``, ``state`` and
``parent`` attributes and a ``clear(version)`` method; a ``parent`` of
``None`` ends a path.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, Generic, Iterator, TypeVar

E = TypeVar("E")


class NodeState(Enum):
    """Where a node stands in the current search."""

    NONE = auto()
    FROM_OPEN = auto()
    TO_OPEN = auto()
    FROM_CLOSE = auto()
    TO_CLOSE = auto()


class ResultKind(Enum):
    """How a search ended."""

    FOUND = auto()
    NOT_FOUND = auto()
    LIMIT_NOT_FOUND = auto()


@dataclass(frozen=True)
class AStarResult:
    """Outcome of a search.

    For ``FOUND`` the node is the goal; otherwise it is the node the search
    judged closest to the goal.
    """

    kind: ResultKind
    node: int | None


@dataclass
class FNode:
    """A neighbour index with its total estimated cost."""

    f: Any
    node: int


@dataclass
class Finder(Generic[E]):
    """Per-node search entries, the shared neighbour table and the search version."""

    nodes: list[E]
    neighbors: list[FNode] = field(default_factory=list)
    version: int = 0


@dataclass(eq=False)
class NodeNeighbors:
    """A run ``neighbors[start:end]`` of the neighbours of ``node``, sorted by f."""

    f: Any
    node: int
    start: int
    end: int

    def __lt__(self, other: NodeNeighbors) -> bool:
        return self.f < other.f

    def pop(self, finder: Finder, state: NodeState) -> int | None:
        """Take the best neighbour still owned by this run, or None when exhausted."""
        neighbors = finder.neighbors
        nodes = finder.nodes
        while self.start < self.end:
            candidate = neighbors[self.start].node
            entry = nodes[candidate]
            self.start += 1
            if entry.state == state and entry.parent == self.node:
                while self.start < self.end:
                    following = nodes[neighbors[self.start].node]
                    if following.state == state and following.parent == self.node:
                        self.f = following.g + following.h
                        break
                    self.start += 1
                return candidate
        return None


class _OpenHeap:
    """Binary min-heap on f with a fixed, deterministic tie order."""

    def __init__(self) -> None:
        self._data: list[NodeNeighbors] = []

    def __len__(self) -> int:
        return len(self._data)

    def clear(self) -> None:
        self._data.clear()

    def peek(self) -> NodeNeighbors | None:
        return self._data[0] if self._data else None

    def push(self, item: NodeNeighbors) -> None:
        self._data.append(item)
        self._sift_up(0, len(self._data) - 1)

    def pop(self) -> NodeNeighbors | None:
        if not self._data:
            return None
        item = self._data.pop()
        if self._data:
            item, self._data[0] = self._data[0], item
            self._sift_down_to_bottom(0)
        return item

    def _sift_up(self, start: int, pos: int) -> None:
        data = self._data
        item = data[pos]
        while pos > start:
            parent = (pos - 1) // 2
            if data[parent].f <= item.f:
                break
            data[pos] = data[parent]
            pos = parent
        data[pos] = item

    def _sift_down_to_bottom(self, pos: int) -> None:
        data = self._data
        end = len(data)
        start = pos
        item = data[pos]
        child = 2 * pos + 1
        limit = max(end - 2, 0)
        while child <= limit:
            if data[child + 1].f <= data[child].f:
                child += 1
            data[pos] = data[child]
            pos = child
            child = 2 * pos + 1
        if child == end - 1:
            data[pos] = data[child]
            pos = child
        data[pos] = item
        self._sift_up(start, pos)


MakeNeighbors = Callable[[Any, int, int, Finder], NodeNeighbors]


class AStar(Generic[E]):
    """A* search over a map of ``map_capacity`` nodes."""

    def __init__(
        self, map_capacity: int, node_number: int, entry_factory: Callable[[], E]
    ) -> None:
        """``node_number`` is the expected number of searched nodes, a sizing hint only."""
        self._entry_factory = entry_factory
        self._open = _OpenHeap()
        self.finder: Finder[E] = Finder(
            nodes=[entry_factory() for _ in range(map_capacity)]
        )

    def resize(self, map_capacity: int) -> None:
        """Grow or shrink the node table to ``map_capacity`` entries."""
        nodes = self.finder.nodes
        if map_capacity < len(nodes):
            del nodes[map_capacity:]
        else:
            nodes.extend(self._entry_factory() for _ in range(map_capacity - len(nodes)))

    def find(
        self,
        start: int,
        end: int,
        max_number: int,
        arg: Any,
        make_neighbors: MakeNeighbors,
    ) -> AStarResult:
        """Search from ``start`` to ``end``.

        ``make_neighbors(arg, node, end, finder)`` expands a node into a sorted
        run of neighbours. The search stops with ``LIMIT_NOT_FOUND`` once the
        open list holds more than ``max_number`` runs.
        """
        finder = self.finder
        open_list = self._open
        open_list.clear()
        finder.neighbors.clear()
        finder.version += 1
        finder.nodes[start].clear(finder.version)

        nn = make_neighbors(arg, start, end, finder)
        near = nn.node
        near_h = nn.f
        while True:
            node = nn.pop(finder, NodeState.FROM_OPEN)
            if node is None:
                next_nn = open_list.pop()
                if next_nn is None:
                    return AStarResult(ResultKind.NOT_FOUND, near)
                nn = next_nn
                continue
            if node == end:
                return AStarResult(ResultKind.FOUND, end)
            if nn.start < nn.end:
                nn1 = make_neighbors(arg, node, end, finder)
                h = finder.nodes[node].h
                if h < near_h:
                    near, near_h = node, h
                if nn1.start < nn1.end:
                    if nn1 < nn:
                        nn, nn1 = nn1, nn
                    open_list.push(nn1)
                    if len(open_list) > max_number:
                        return AStarResult(ResultKind.LIMIT_NOT_FOUND, node)
            else:
                nn = make_neighbors(arg, node, end, finder)
                h = finder.nodes[node].h
                if h < near_h:
                    near, near_h = node, h
                continue
            top = open_list.peek()
            if top is not None and top < nn:
                best = open_list.pop()
                open_list.push(nn)
                nn = best

    def result_iter(self, node: int | None) -> Iterator[int]:
        """Yield ``node`` and then each parent back to the start of the search."""
        nodes = self.finder.nodes
        while node is not None:
            yield node
            node = nodes[node].parent