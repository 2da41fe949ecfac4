"""Directed capacitated graph stored as a dense capacity matrix.

The matrix form keeps residual bookkeeping in the solvers trivial: the
reverse arc of ``(u, v)`` is simply ``(v, u)``.

Example:
    >>> from flowbench.graph import CapacityGraph
    >>> g = CapacityGraph(4)
    >>> g.add_edge(0, 1, 3)
    >>> g.add_edge(1, 3, 2)
    >>> g.capacity[0][1]
    3
"""

from __future__ import annotations

import random
from typing import Any, Hashable, Iterator, List, Optional, Tuple

import networkx as nx
import numpy as np

#: Row-major V x V matrix; entry [u][v] is the capacity of u -> v.
CapacityMatrix = List[List[int]]

#: Default bounds for randomly drawn edge capacities (inclusive).
MIN_RANDOM_CAPACITY = 20
MAX_RANDOM_CAPACITY = 700

#: Reference graph used as a regression anchor; source 0, sink 9.
FIXED_GRAPH_MATRIX: Tuple[Tuple[int, ...], ...] = (
    (0, 0, 544, 0, 0, 0, 0, 0, 610, 173),
    (0, 0, 160, 0, 397, 0, 0, 0, 440, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 503),
    (0, 0, 0, 0, 0, 0, 0, 632, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 43, 0, 0, 0, 0),
    (0, 186, 182, 0, 0, 0, 0, 0, 0, 0),
    (0, 322, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
)

#: Max flow of the reference graph from vertex 0 to vertex 9.
FIXED_GRAPH_MAX_FLOW = 676


class CapacityGraph:
    """A directed graph with integer edge capacities.

    Attributes:
        num_vertices: Number of vertices, labelled ``0 .. num_vertices - 1``.
    """

    def __init__(self, num_vertices: int) -> None:
        self.num_vertices = num_vertices
        self._capacity: CapacityMatrix = [
            [0] * num_vertices for _ in range(num_vertices)
        ]

    def __repr__(self) -> str:
        return (
            f"CapacityGraph(num_vertices={self.num_vertices}, "
            f"num_edges={self.num_edges})"
        )

    def add_edge(self, src: int, dst: int, capacity: int) -> None:
        """Set the capacity of ``src -> dst``, replacing any previous value.

        Indices and sign are not validated; callers are expected to pass
        vertices in range and a non-negative capacity.
        """
        self._capacity[src][dst] = capacity

    @property
    def capacity(self) -> CapacityMatrix:
        """The live capacity matrix. Solvers never mutate it."""
        return self._capacity

    def get_capacity(self) -> CapacityMatrix:
        return self._capacity

    def copy_capacity(self) -> CapacityMatrix:
        """Return an independent copy of the capacity matrix."""
        return [list(row) for row in self._capacity]

    @property
    def num_edges(self) -> int:
        return sum(1 for row in self._capacity for cap in row if cap > 0)

    def edges(self) -> Iterator[Tuple[int, int, int]]:
        """Yield ``(u, v, capacity)`` for every positive entry, row-major."""
        for u, row in enumerate(self._capacity):
            for v, cap in enumerate(row):
                if cap > 0:
                    yield u, v, cap

    def as_array(self) -> np.ndarray:
        """Return the capacity matrix as an ``int64`` NumPy array (a copy)."""
        return np.array(self._capacity, dtype=np.int64).reshape(
            self.num_vertices, self.num_vertices
        )

    def to_networkx(self, capacity_attr: str = "capacity") -> nx.DiGraph:
        """Convert to a ``networkx.DiGraph`` with one node per vertex.

        Args:
            capacity_attr: Edge attribute that receives the capacity.

        Returns:
            A new DiGraph; isolated vertices are kept as nodes.
        """
        G = nx.DiGraph()
        G.add_nodes_from(range(self.num_vertices))
        for u, v, cap in self.edges():
            G.add_edge(u, v, **{capacity_attr: cap})
        return G

    @classmethod
    def from_networkx(
        cls, G: Any, capacity_attr: str = "capacity"
    ) -> Tuple["CapacityGraph", List[Hashable]]:
        """Build a graph from a NetworkX directed graph.

        Nodes are numbered in ``G.nodes`` iteration order. Parallel edges of a
        multigraph are merged by summing their capacities.

        Args:
            G: ``networkx.DiGraph`` or ``networkx.MultiDiGraph``.
            capacity_attr: Edge attribute holding the capacity.

        Returns:
            Tuple of the new graph and the node names in index order.

        Raises:
            ValueError: If ``G`` is undirected or an edge lacks ``capacity_attr``.
        """
        if not G.is_directed():
            raise ValueError("from_networkx requires a directed graph")

        names: List[Hashable] = list(G.nodes)
        index = {name: i for i, name in enumerate(names)}
        graph = cls(len(names))
        for u, v, data in G.edges(data=True):
            if capacity_attr not in data:
                raise ValueError(
                    f"Edge {u!r}->{v!r} has no '{capacity_attr}' attribute"
                )
            i, j = index[u], index[v]
            graph.add_edge(i, j, graph.capacity[i][j] + int(data[capacity_attr]))
        return graph, names


def random_graph(
    vertices: int,
    edges: int,
    *,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
    min_capacity: int = MIN_RANDOM_CAPACITY,
    max_capacity: int = MAX_RANDOM_CAPACITY,
) -> CapacityGraph:
    """Generate a random graph that always connects vertex 0 to the last vertex.

    A chain ``0 -> 1 -> ... -> vertices-1`` is laid down first, then
    ``edges - (vertices - 1)`` further edges between random endpoints (none when
    ``edges`` is below the chain length, so the chain may exceed ``edges``).
    Self-loops are rejected by redrawing the destination; a repeated pair
    overwrites the earlier capacity, so the final edge count may be lower
    than ``edges``.

    Args:
        vertices: Number of vertices (at least 2).
        edges: Requested number of edges including the chain.
        rng: Random source. Takes precedence over ``seed``.
        seed: Seed for a private ``random.Random`` when ``rng`` is not given.
        min_capacity: Lowest capacity drawn (inclusive).
        max_capacity: Highest capacity drawn (inclusive).

    Returns:
        The generated graph.

    Raises:
        ValueError: If ``vertices < 2`` or the capacity bounds are inverted.
    """
    if vertices < 2:
        raise ValueError(f"random_graph needs at least 2 vertices, got {vertices}")
    if min_capacity > max_capacity:
        raise ValueError(
            f"min_capacity ({min_capacity}) exceeds max_capacity ({max_capacity})"
        )
    if rng is None:
        rng = random.Random(seed)

    graph = CapacityGraph(vertices)
    for i in range(vertices - 1):
        graph.add_edge(i, i + 1, rng.randint(min_capacity, max_capacity))

    for _ in range(edges - (vertices - 1)):
        src = rng.randrange(vertices)
        dst = rng.randrange(vertices)
        capacity = rng.randint(min_capacity, max_capacity)
        while src == dst:
            dst = rng.randrange(vertices)
        graph.add_edge(src, dst, capacity)

    return graph


def fixed_graph() -> CapacityGraph:
    """Return the 10-vertex reference graph (max flow 676 from 0 to 9)."""
    graph = CapacityGraph(len(FIXED_GRAPH_MATRIX))
    for u, row in enumerate(FIXED_GRAPH_MATRIX):
        for v, cap in enumerate(row):
            if cap > 0:
                graph.add_edge(u, v, cap)
    return graph
