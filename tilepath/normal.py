"""Node entries, the abstract map and neighbour expansion for plain A* search."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterable

from .finder import Finder, FNode, NodeNeighbors, NodeState


class Map(ABC):
    """A graph that A* can search.

    Nodes are identified by their index in the whole map.
    """

    @abstractmethod
    def get_neighbors(self, cur: int, parent: int | None) -> Iterable[int]:
        """Indices of the nodes reachable from ``cur``, which was reached from ``parent``."""

    @abstractmethod
    def get_g(self, cur: int, parent: int) -> Any:
        """The real cost of moving from ``parent`` to ``cur``."""

    @abstractmethod
    def get_h(self, cur: int, end: int) -> Any:
        """The estimated cost of moving from ``cur`` to ``end``."""


@dataclass
class Entry:
    """Search state of one node."""

    g: Any = 0
    h: Any = 0
    version: int = 0
    parent: int | None = None
    state: NodeState = NodeState.NONE

    def clear(self, version: int) -> None:
        """Reset the entry for the search with the given version."""
        self.g = 0
        self.h = 0
        self.version = version
        self.parent = None
        self.state = NodeState.NONE


def make_neighbors(map: Map, cur: int, end: int, finder: Finder) -> NodeNeighbors:
    """Close ``cur`` and append its improvable neighbours, sorted by f, to the finder."""
    entry = finder.nodes[cur]
    entry.state = NodeState.FROM_CLOSE
    g = entry.g
    start = len(finder.neighbors)
    added: list[FNode] = []
    for r in map.get_neighbors(cur, entry.parent):
        neighbour = finder.nodes[r]
        if neighbour.version == finder.version:
            # Already seen in this search: keep it only if cur offers a cheaper way.
            g1 = map.get_g(r, cur)
            if neighbour.g <= g + g1:
                continue
            neighbour.g = g + g1
            neighbour.parent = cur
        else:
            neighbour.version = finder.version
            neighbour.parent = cur
            neighbour.state = NodeState.FROM_OPEN
            neighbour.g = g + map.get_g(r, cur)
            neighbour.h = map.get_h(r, end)
        added.append(FNode(neighbour.g + neighbour.h, r))
    added.sort(key=lambda item: item.f)
    finder.neighbors.extend(added)
    f = added[0].f if added else 0
    return NodeNeighbors(f=f, node=cur, start=start, end=len(finder.neighbors))