"""Solver registry and the one-call ``calc_max_flow`` helper."""

from __future__ import annotations

from typing import Dict, Literal, Tuple, Type, Union, overload

from flowbench.algorithms.augmenting import EdmondsKarpSolver, FordFulkersonSolver
from flowbench.algorithms.base import FlowSolver
from flowbench.algorithms.dinic import DinicSolver
from flowbench.algorithms.types import Algorithm, MaxFlowResult
from flowbench.graph import CapacityGraph

#: Solver class for every algorithm, in reporting order.
SOLVERS: Dict[Algorithm, Type[FlowSolver]] = {
    Algorithm.EDMONDS_KARP: EdmondsKarpSolver,
    Algorithm.FORD_FULKERSON: FordFulkersonSolver,
    Algorithm.DINIC: DinicSolver,
}


def create_solver(
    algorithm: Union[Algorithm, str], graph: CapacityGraph
) -> FlowSolver:
    """Instantiate the solver for ``algorithm`` over a snapshot of ``graph``.

    Args:
        algorithm: An ``Algorithm`` member or a name such as ``"edmonds-karp"``.
        graph: Graph whose capacities are copied into the solver.

    Raises:
        ValueError: If the algorithm name is unknown.
    """
    return SOLVERS[Algorithm.parse(algorithm)](graph)


@overload
def calc_max_flow(
    graph: CapacityGraph,
    source: int,
    sink: int,
    *,
    algorithm: Union[Algorithm, str] = Algorithm.DINIC,
    return_solver: Literal[False] = False,
) -> MaxFlowResult: ...


@overload
def calc_max_flow(
    graph: CapacityGraph,
    source: int,
    sink: int,
    *,
    algorithm: Union[Algorithm, str] = Algorithm.DINIC,
    return_solver: Literal[True],
) -> Tuple[MaxFlowResult, FlowSolver]: ...


def calc_max_flow(
    graph: CapacityGraph,
    source: int,
    sink: int,
    *,
    algorithm: Union[Algorithm, str] = Algorithm.DINIC,
    return_solver: bool = False,
) -> Union[MaxFlowResult, Tuple[MaxFlowResult, FlowSolver]]:
    """Compute the maximum flow from ``source`` to ``sink`` on a fresh solver.

    The graph itself is never modified.

    Args:
        graph: Graph to analyse.
        source: Source vertex.
        sink: Sink vertex.
        algorithm: Which algorithm to run. Defaults to Dinic.
        return_solver: If True, also return the solver so its residual
            matrix can be inspected (e.g. for a min cut).

    Returns:
        The ``MaxFlowResult``, or ``(result, solver)`` with ``return_solver``.

    Raises:
        ValueError: On an unknown algorithm or invalid endpoints.
    """
    solver = create_solver(algorithm, graph)
    result = solver.run(source, sink)
    if return_solver:
        return result, solver
    return result
