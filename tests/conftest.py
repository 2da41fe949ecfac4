"""Shared graph fixtures for the flowbench test suite.

Vertex 0 is the source and the highest-numbered vertex the sink unless a
fixture's comment says otherwise.
"""

from __future__ import annotations

import pytest

from flowbench.graph import CapacityGraph, fixed_graph


@pytest.fixture
def diamond():
    # Capacity:
    #        [3]       [2]
    #    ┌──────►1──────────┐
    #    │                  ▼
    #    0                  3
    #    │                  ▲
    #    └──────►2──────────┘
    #        [2]       [3]
    #
    # Max flow 0 -> 3 is 4 (2 along each branch).
    g = CapacityGraph(4)
    g.add_edge(0, 1, 3)
    g.add_edge(0, 2, 2)
    g.add_edge(1, 3, 2)
    g.add_edge(2, 3, 3)
    return g


@pytest.fixture
def disconnected():
    # 0 -> 1 -> 2 and 3 -> 4; sink 4 is unreachable from 0.
    g = CapacityGraph(5)
    g.add_edge(0, 1, 10)
    g.add_edge(1, 2, 10)
    g.add_edge(3, 4, 10)
    return g


@pytest.fixture
def single_edge():
    g = CapacityGraph(2)
    g.add_edge(0, 1, 5)
    return g


@pytest.fixture
def cancellation():
    # Capacity 1 on every edge: 0->1, 0->2, 1->3, 1->4, 2->3, 3->5, 4->5.
    # Max flow 0 -> 5 is 2; the second augmenting path has to cancel 1->3.
    g = CapacityGraph(6)
    for u, v in [(0, 1), (0, 2), (1, 3), (1, 4), (2, 3), (3, 5), (4, 5)]:
        g.add_edge(u, v, 1)
    return g


@pytest.fixture
def antiparallel():
    # 0 -> 1 [4], 1 -> 0 [2], 1 -> 2 [3], 2 -> 1 [5]; max flow 0 -> 2 is 3.
    g = CapacityGraph(3)
    g.add_edge(0, 1, 4)
    g.add_edge(1, 0, 2)
    g.add_edge(1, 2, 3)
    g.add_edge(2, 1, 5)
    return g


@pytest.fixture
def complete5():
    # Fully connected 5 vertices with capacity 1 on each arc; max flow 0 -> 4 is 4.
    g = CapacityGraph(5)
    for u in range(5):
        for v in range(5):
            if u != v:
                g.add_edge(u, v, 1)
    return g


@pytest.fixture
def reference_graph():
    return fixed_graph()
