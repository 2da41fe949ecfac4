"""Max-flow algorithms with operation counting."""

from flowbench.algorithms.augmenting import (
    BfsAugmentingSolver,
    EdmondsKarpSolver,
    FordFulkersonSolver,
)
from flowbench.algorithms.base import FlowSolver
from flowbench.algorithms.dinic import DinicSolver
from flowbench.algorithms.max_flow import SOLVERS, calc_max_flow, create_solver
from flowbench.algorithms.types import (
    UNBOUNDED_FLOW,
    Algorithm,
    MaxFlowResult,
    OpCounter,
)

__all__ = [
    "Algorithm",
    "BfsAugmentingSolver",
    "DinicSolver",
    "EdmondsKarpSolver",
    "FlowSolver",
    "FordFulkersonSolver",
    "MaxFlowResult",
    "OpCounter",
    "SOLVERS",
    "UNBOUNDED_FLOW",
    "calc_max_flow",
    "create_solver",
]
