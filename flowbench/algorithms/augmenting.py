"""Shortest-augmenting-path solvers (BFS Ford-Fulkerson and Edmonds-Karp).

Both solvers run the same loop: breadth-first search over the residual
matrix, stopping as soon as the sink is discovered, then push the path's
bottleneck. Candidate vertices are scanned in increasing index order, which
fixes the choice among equally short paths and makes the operation counts
reproducible. The two classes differ only in their ``algorithm`` tag so that
each can be measured and reported on its own.
"""

from __future__ import annotations

from collections import deque
from typing import List

from flowbench.algorithms.base import FlowSolver
from flowbench.algorithms.types import UNBOUNDED_FLOW, Algorithm


class BfsAugmentingSolver(FlowSolver):
    """Shared implementation of the BFS shortest-augmenting-path method."""

    def _max_flow(self, source: int, sink: int) -> int:
        return self._augment_loop(source, sink)

    def _augment_loop(self, source: int, sink: int) -> int:
        counter = self.counter
        residual = self._residual

        parent: List[int] = [-1] * self.num_vertices
        counter.assignments += 1
        max_flow = 0
        counter.assignments += 1

        while self._bfs(source, sink, parent):
            counter.comparisons += 1

            # Bottleneck along the parent chain
            path_flow = UNBOUNDED_FLOW
            counter.assignments += 1
            v = sink
            while v != source:
                counter.comparisons += 1
                u = parent[v]
                path_flow = min(path_flow, residual[u][v])
                counter.assignments += 2
                v = u
            counter.comparisons += 1

            # Push it, opening the reverse arcs
            path = [sink]
            v = sink
            while v != source:
                counter.comparisons += 1
                u = parent[v]
                residual[u][v] -= path_flow
                residual[v][u] += path_flow
                counter.assignments += 3
                path.append(u)
                v = u
            counter.comparisons += 1

            path.reverse()
            self._log_route(path, path_flow)

            max_flow += path_flow
            counter.assignments += 1
        counter.comparisons += 1

        return max_flow

    def _bfs(self, source: int, sink: int, parent: List[int]) -> bool:
        """Fill ``parent`` with a BFS tree; return True once ``sink`` is reached."""
        counter = self.counter
        residual = self._residual
        n = self.num_vertices

        visited = [False] * n
        queue = deque([source])
        visited[source] = True
        parent[source] = -1
        counter.assignments += 4

        while queue:
            counter.comparisons += 1
            u = queue.popleft()
            counter.assignments += 1
            row = residual[u]

            for v in range(n):
                counter.comparisons += 1
                if not visited[v] and row[v] > 0:
                    counter.comparisons += 2
                    parent[v] = u
                    counter.assignments += 1

                    if v == sink:
                        counter.comparisons += 1
                        return True

                    queue.append(v)
                    visited[v] = True
                    counter.assignments += 2
        counter.comparisons += 1

        return False


class FordFulkersonSolver(BfsAugmentingSolver):
    """Ford-Fulkerson with breadth-first path search."""

    algorithm = Algorithm.FORD_FULKERSON


class EdmondsKarpSolver(BfsAugmentingSolver):
    """Edmonds-Karp: Ford-Fulkerson restricted to shortest augmenting paths.

    Runs in O(V * E^2) independent of capacities.
    """

    algorithm = Algorithm.EDMONDS_KARP
