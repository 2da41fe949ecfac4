"""flowbench: instrumented max-flow algorithms.

Three interchangeable solvers (BFS Ford-Fulkerson, Edmonds-Karp and Dinic)
compute maximum flow on a capacity-matrix graph while counting assignments
and comparisons, so their work can be compared on the same inputs.

Primary API:
    CapacityGraph - Directed graph with integer capacities
    random_graph(), fixed_graph() - Graph generators
    calc_max_flow() - One-call max flow on a fresh solver
    FordFulkersonSolver, EdmondsKarpSolver, DinicSolver - Solvers
    run_benchmark() - Batch comparison over many graphs

Example:
    from flowbench import CapacityGraph, calc_max_flow

    g = CapacityGraph(4)
    g.add_edge(0, 1, 3)
    g.add_edge(0, 2, 2)
    g.add_edge(1, 3, 2)
    g.add_edge(2, 3, 3)

    result = calc_max_flow(g, 0, 3, algorithm="edmonds_karp")
    result.flow  # 4
"""

from __future__ import annotations

from flowbench import cli, logging
from flowbench._version import __version__
from flowbench.algorithms import (
    Algorithm,
    DinicSolver,
    EdmondsKarpSolver,
    FlowSolver,
    FordFulkersonSolver,
    MaxFlowResult,
    calc_max_flow,
    create_solver,
)
from flowbench.analysis import MinCut, check_flow, flow_matrix, min_cut
from flowbench.benchmark import BenchmarkRecord, BenchmarkReport, run_benchmark
from flowbench.config import BenchmarkConfig, load_config
from flowbench.graph import CapacityGraph, fixed_graph, random_graph

__all__ = [
    # Version
    "__version__",
    # Graph
    "CapacityGraph",
    "random_graph",
    "fixed_graph",
    # Solvers
    "Algorithm",
    "FlowSolver",
    "FordFulkersonSolver",
    "EdmondsKarpSolver",
    "DinicSolver",
    "MaxFlowResult",
    "calc_max_flow",
    "create_solver",
    # Analysis
    "MinCut",
    "check_flow",
    "flow_matrix",
    "min_cut",
    # Benchmark
    "BenchmarkConfig",
    "BenchmarkRecord",
    "BenchmarkReport",
    "load_config",
    "run_benchmark",
    # Utilities
    "cli",
    "logging",
]
