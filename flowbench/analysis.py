"""Post-solve analysis: per-edge flow, validity checks and the minimum cut.

All functions take the capacity matrix a solver started from and the residual
matrix it ended with. Because every push subtracts from ``residual[u][v]``
and adds to ``residual[v][u]``, the difference ``C - R`` is the antisymmetric
net-flow matrix.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import FrozenSet, Sequence, Set, Tuple

import numpy as np

from flowbench.algorithms.base import FlowSolver

MatrixLike = Sequence[Sequence[int]]


@dataclass(frozen=True)
class MinCut:
    """A minimum s-t cut derived from a final residual matrix.

    Attributes:
        source_side: Vertices reachable from the source in the residual graph.
        edges: Original edges ``(u, v)`` crossing from the source side to the
            sink side, row-major.
        capacity: Sum of the original capacities of ``edges``.
    """

    source_side: FrozenSet[int]
    edges: Tuple[Tuple[int, int], ...]
    capacity: int


def net_flow_matrix(original: MatrixLike, residual: MatrixLike) -> np.ndarray:
    """Return ``C - R``; entry ``[u, v]`` is the net flow from u to v."""
    cap = np.asarray(original, dtype=np.int64)
    return cap - np.asarray(residual, dtype=np.int64)


def flow_matrix(original: MatrixLike, residual: MatrixLike) -> np.ndarray:
    """Return the flow carried by each directed edge, ``max(0, C - R)``."""
    return np.clip(net_flow_matrix(original, residual), 0, None)


def check_flow(
    original: MatrixLike, residual: MatrixLike, source: int, sink: int
) -> int:
    """Verify capacity limits and flow conservation.

    Args:
        original: Capacities the solver started from.
        residual: Residual capacities after solving.
        source: Source vertex.
        sink: Sink vertex.

    Returns:
        Net flow leaving ``source``.

    Raises:
        ValueError: On a negative residual (an edge carrying more than its
            capacity), a net-flow matrix that is not antisymmetric, or an
            internal vertex whose inflow differs from its outflow.
    """
    cap = np.asarray(original, dtype=np.int64)
    res = np.asarray(residual, dtype=np.int64)
    if (res < 0).any():
        u, v = map(int, np.argwhere(res < 0)[0])
        raise ValueError(f"Negative residual capacity on {u}->{v}: {res[u, v]}")

    net = cap - res
    if not np.array_equal(net, -net.T):
        raise ValueError("Net flow matrix is not antisymmetric")

    balance = net.sum(axis=1)
    for v in range(len(balance)):
        if v in (source, sink):
            continue
        if balance[v] != 0:
            raise ValueError(
                f"Flow not conserved at vertex {v}: excess {-balance[v]}"
            )
    return int(balance[source])


def residual_reachable(residual: MatrixLike, source: int) -> Set[int]:
    """Vertices reachable from ``source`` over arcs with positive residual."""
    n = len(residual)
    seen = {source}
    queue = deque([source])
    while queue:
        u = queue.popleft()
        row = residual[u]
        for v in range(n):
            if v not in seen and row[v] > 0:
                seen.add(v)
                queue.append(v)
    return seen


def has_augmenting_path(residual: MatrixLike, source: int, sink: int) -> bool:
    return sink in residual_reachable(residual, source)


def min_cut(original: MatrixLike, residual: MatrixLike, source: int) -> MinCut:
    """Derive the minimum cut from a saturated residual matrix.

    The residual must come from a completed max-flow run; otherwise the
    result is a cut but not necessarily a minimum one.
    """
    side = residual_reachable(residual, source)
    edges = tuple(
        (u, v)
        for u in sorted(side)
        for v, cap in enumerate(original[u])
        if cap > 0 and v not in side
    )
    capacity = sum(original[u][v] for u, v in edges)
    return MinCut(source_side=frozenset(side), edges=edges, capacity=capacity)


def solver_min_cut(solver: FlowSolver, source: int) -> MinCut:
    """Shortcut for ``min_cut`` on a solver's own matrices."""
    return min_cut(solver.original_capacity, solver.residual, source)
