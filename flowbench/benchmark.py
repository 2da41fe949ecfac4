"""Batch driver comparing the max-flow algorithms on the same graphs.

Every graph is solved once per algorithm, each on its own solver instance,
so all algorithms start from identical capacities. Wall time, flow value and
operation counts are collected into a ``BenchmarkReport``.
"""

from __future__ import annotations

import time
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

from flowbench.algorithms.base import FlowSolver
from flowbench.algorithms.max_flow import create_solver
from flowbench.algorithms.types import Algorithm
from flowbench.config import BenchmarkConfig
from flowbench.graph import CapacityGraph, fixed_graph, random_graph
from flowbench.logging import get_logger
from flowbench.seed_manager import SeedManager

logger = get_logger(__name__)

FIXED_CASE_LABEL = "fixed"


@dataclass
class BenchmarkRecord:
    """Measurements for one algorithm on one graph.

    Attributes:
        case: Label of the graph (``"fixed"`` or ``"<vertices>x<edges>"``).
        algorithm: Algorithm tag value.
        vertices: Vertex count of the graph.
        edges: Requested edge count of the case.
        flow: Max-flow value found.
        time_ms: Wall-clock time of ``compute_max_flow`` in milliseconds.
        assignments: Assignments counted by the solver.
        comparisons: Comparisons counted by the solver.
        density: ``"dense"`` or ``"sparse"``.
    """

    case: str
    algorithm: str
    vertices: int
    edges: int
    flow: int
    time_ms: float
    assignments: int
    comparisons: int
    density: str


@dataclass
class BenchmarkReport:
    """All records of a benchmark run, in execution order."""

    records: List[BenchmarkRecord] = field(default_factory=list)
    seed: Optional[int] = None

    def cases(self) -> List[str]:
        """Case labels in first-seen order."""
        return list(dict.fromkeys(r.case for r in self.records))

    def for_case(self, case: str) -> List[BenchmarkRecord]:
        return [r for r in self.records if r.case == case]

    def flows_agree(self) -> bool:
        """True if every case got one flow value from all its algorithms."""
        return all(
            len({r.flow for r in self.for_case(case)}) <= 1 for case in self.cases()
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "records": [asdict(r) for r in self.records],
        }

    def to_dataframe(self) -> pd.DataFrame:
        """Return the records as a DataFrame, one row per (case, algorithm)."""
        columns = list(BenchmarkRecord.__dataclass_fields__)
        return pd.DataFrame([asdict(r) for r in self.records], columns=columns)


def classify_density(vertices: int, edges: int) -> str:
    """Label a directed graph dense when it has over half the possible arcs."""
    max_edges = vertices * (vertices - 1)
    return "dense" if edges > max_edges / 2 else "sparse"


def case_label(vertices: int, edges: int) -> str:
    return f"{vertices}x{edges}"


def measure(
    solver: FlowSolver,
    source: int,
    sink: int,
    *,
    case: str,
    edges: int,
) -> BenchmarkRecord:
    """Run ``solver`` once and time it.

    Args:
        solver: Freshly constructed solver.
        source: Source vertex.
        sink: Sink vertex.
        case: Label stored on the record.
        edges: Requested edge count, used for the density label.
    """
    start = time.perf_counter()
    result = solver.run(source, sink)
    elapsed_ms = (time.perf_counter() - start) * 1000.0

    return BenchmarkRecord(
        case=case,
        algorithm=solver.algorithm.value,
        vertices=solver.num_vertices,
        edges=edges,
        flow=result.flow,
        time_ms=elapsed_ms,
        assignments=result.assignments,
        comparisons=result.comparisons,
        density=classify_density(solver.num_vertices, edges),
    )


def benchmark_graph(
    graph: CapacityGraph,
    algorithms: Iterable[Algorithm],
    *,
    case: str,
    edges: int,
    source: int = 0,
    sink: Optional[int] = None,
) -> List[BenchmarkRecord]:
    """Measure every algorithm on ``graph``; ``sink`` defaults to the last vertex."""
    if sink is None:
        sink = graph.num_vertices - 1

    records = []
    for algorithm in algorithms:
        solver = create_solver(algorithm, graph)
        record = measure(solver, source, sink, case=case, edges=edges)
        logger.debug(
            "%s on %s: flow=%d time=%.3f ms",
            solver.name,
            case,
            record.flow,
            record.time_ms,
        )
        records.append(record)

    flows = {r.flow for r in records}
    if len(flows) > 1:
        logger.error(
            "Algorithms disagree on case %s: %s",
            case,
            ", ".join(f"{r.algorithm}={r.flow}" for r in records),
        )
    return records


def run_benchmark(config: Optional[BenchmarkConfig] = None) -> BenchmarkReport:
    """Run the fixed graph (if enabled) and every configured random case.

    Each random case draws its graph from a ``random.Random`` derived from the
    master seed and the case label, so a seeded run is reproducible and a case
    keeps its graph when other cases are added or removed.
    """
    if config is None:
        config = BenchmarkConfig()

    seeds = SeedManager(config.seed)
    report = BenchmarkReport(seed=config.seed)

    if config.include_fixed:
        graph = fixed_graph()
        logger.info(
            "Benchmarking fixed reference graph (%d vertices)", graph.num_vertices
        )
        report.records.extend(
            benchmark_graph(
                graph,
                config.algorithms,
                case=FIXED_CASE_LABEL,
                edges=graph.num_edges,
            )
        )

    for index, (vertices, edges) in enumerate(config.cases):
        label = case_label(vertices, edges)
        if label in report.cases():
            label = f"{label}#{index}"
        rng = seeds.create_random_state("case", label)
        graph = random_graph(
            vertices,
            edges,
            rng=rng,
            min_capacity=config.min_capacity,
            max_capacity=config.max_capacity,
        )
        logger.info(
            "Benchmarking case %s (%d distinct edges, %s)",
            label,
            graph.num_edges,
            classify_density(vertices, edges),
        )
        report.records.extend(
            benchmark_graph(graph, config.algorithms, case=label, edges=edges)
        )

    logger.info(
        "Benchmark finished: %d cases, %d measurements",
        len(report.cases()),
        len(report.records),
    )
    return report
