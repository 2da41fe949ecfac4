"""Dinic's blocking-flow max-flow algorithm.

Each phase builds a level graph by BFS from the source and then saturates it
with a blocking flow. Inside a phase every vertex keeps a current-arc pointer
into its adjacency list: an arc that leads to a dead end is never examined
again in that phase, which bounds the search work per phase to O(V * E).
The path search uses an explicit stack instead of recursion so that long
level graphs cannot hit the interpreter's recursion limit.
"""

from __future__ import annotations

from collections import deque
from typing import List

from flowbench.algorithms.base import FlowSolver
from flowbench.algorithms.types import UNBOUNDED_FLOW, Algorithm
from flowbench.graph import CapacityGraph


class DinicSolver(FlowSolver):
    """Dinic's algorithm over the residual capacity matrix.

    Attributes:
        adjacency: For every vertex, the vertices reachable by a forward or
            reverse arc. Fixed at construction; only capacities change.
    """

    algorithm = Algorithm.DINIC

    def __init__(self, graph: CapacityGraph) -> None:
        super().__init__(graph)
        n = self.num_vertices
        self.adjacency: List[List[int]] = [[] for _ in range(n)]
        for i, row in enumerate(self._original):
            for j, cap in enumerate(row):
                if cap > 0:
                    self.adjacency[i].append(j)
                    # Reverse arc, traversable once flow has been pushed on i -> j
                    self.adjacency[j].append(i)
        self._level: List[int] = [-1] * n
        self._next_arc: List[int] = [0] * n

    def _max_flow(self, source: int, sink: int) -> int:
        counter = self.counter
        next_arc = self._next_arc

        max_flow = 0
        counter.assignments += 1

        while self._assign_levels(source, sink):
            counter.comparisons += 1

            for v in range(self.num_vertices):
                next_arc[v] = 0
            counter.assignments += self.num_vertices

            while True:
                pushed = self._augment(source, sink)
                counter.comparisons += 1
                if pushed == 0:
                    break
                max_flow += pushed
                counter.assignments += 1
        counter.comparisons += 1

        return max_flow

    def _assign_levels(self, source: int, sink: int) -> bool:
        """BFS over positive residual arcs; return True if ``sink`` got a level."""
        counter = self.counter
        residual = self._residual
        level = self._level

        queue = deque()
        counter.assignments += 1
        for v in range(self.num_vertices):
            level[v] = -1
        counter.assignments += self.num_vertices

        level[source] = 0
        queue.append(source)
        counter.assignments += 2

        while queue:
            counter.comparisons += 1
            u = queue.popleft()
            counter.assignments += 1
            next_level = level[u] + 1
            row = residual[u]

            for v in self.adjacency[u]:
                counter.comparisons += 1
                if level[v] == -1 and row[v] > 0:
                    counter.comparisons += 2
                    level[v] = next_level
                    queue.append(v)
                    counter.assignments += 2
        counter.comparisons += 2

        return level[sink] != -1

    def _augment(self, source: int, sink: int) -> int:
        """Find one source-sink path in the level graph and push its bottleneck.

        Returns:
            The flow pushed, or 0 when the level graph is blocked.
        """
        counter = self.counter
        residual = self._residual
        level = self._level
        next_arc = self._next_arc
        adjacency = self.adjacency

        # path[i] is a vertex on the current search path; caps[i] is the flow
        # that can reach it from the source along that path
        path = [source]
        caps = [UNBOUNDED_FLOW]

        while path:
            u = path[-1]
            counter.comparisons += 1
            if u == sink:
                path_flow = caps[-1]
                for i in range(len(path) - 1):
                    a, b = path[i], path[i + 1]
                    residual[a][b] -= path_flow
                    residual[b][a] += path_flow
                    counter.assignments += 2
                self._log_route(path, path_flow)
                return path_flow

            arcs = adjacency[u]
            wanted_level = level[u] + 1
            advanced = False
            while next_arc[u] < len(arcs):
                counter.comparisons += 1
                v = arcs[next_arc[u]]
                if level[v] == wanted_level and residual[u][v] > 0:
                    counter.comparisons += 2
                    path.append(v)
                    caps.append(min(caps[-1], residual[u][v]))
                    counter.assignments += 2
                    advanced = True
                    break
                next_arc[u] += 1
                counter.assignments += 1

            if not advanced:
                counter.comparisons += 1
                # Dead end: retreat and retire the arc that led here
                path.pop()
                caps.pop()
                if path:
                    next_arc[path[-1]] += 1
                    counter.assignments += 1

        return 0
