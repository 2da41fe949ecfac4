"""Abstract base class for the max-flow solvers."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import ClassVar, List

from flowbench.algorithms.types import Algorithm, MaxFlowResult, OpCounter
from flowbench.graph import CapacityGraph, CapacityMatrix
from flowbench.logging import get_logger

logger = get_logger(__name__)


class FlowSolver(ABC):
    """A max-flow solver bound to one snapshot of a graph's capacities.

    The constructor copies the capacity matrix into a private residual matrix,
    so the graph can be reused for other solvers. Flow pushed by
    ``compute_max_flow`` stays in the residual matrix; calling it again on the
    same instance therefore normally returns 0.

    Subclasses set ``algorithm`` and implement ``_max_flow``.
    """

    algorithm: ClassVar[Algorithm]

    def __init__(self, graph: CapacityGraph) -> None:
        self.num_vertices = graph.num_vertices
        self._original: CapacityMatrix = graph.copy_capacity()
        self._residual: CapacityMatrix = graph.copy_capacity()
        self.counter = OpCounter()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(num_vertices={self.num_vertices})"

    @property
    def name(self) -> str:
        return self.algorithm.label

    @property
    def residual(self) -> CapacityMatrix:
        """Copy of the current residual capacity matrix."""
        return [list(row) for row in self._residual]

    @property
    def original_capacity(self) -> CapacityMatrix:
        """Copy of the capacities captured at construction."""
        return [list(row) for row in self._original]

    def get_assignments(self) -> int:
        return self.counter.assignments

    def get_comparisons(self) -> int:
        return self.counter.comparisons

    def compute_max_flow(self, source: int, sink: int) -> int:
        """Push as much flow as possible from ``source`` to ``sink``.

        Args:
            source: Source vertex index.
            sink: Sink vertex index.

        Returns:
            Total flow pushed by this call.

        Raises:
            ValueError: If an endpoint is out of range or ``source == sink``.
        """
        self._validate_endpoints(source, sink)
        flow = self._max_flow(source, sink)
        logger.debug(
            "%s: max flow %d from %d to %d (assignments=%d, comparisons=%d)",
            self.name,
            flow,
            source,
            sink,
            self.counter.assignments,
            self.counter.comparisons,
        )
        return flow

    def run(self, source: int, sink: int) -> MaxFlowResult:
        """Compute max flow and return it with the counts spent on this call."""
        assignments_before, comparisons_before = self.counter.snapshot()
        flow = self.compute_max_flow(source, sink)
        return MaxFlowResult(
            algorithm=self.algorithm,
            source=source,
            sink=sink,
            flow=flow,
            assignments=self.counter.assignments - assignments_before,
            comparisons=self.counter.comparisons - comparisons_before,
        )

    def _validate_endpoints(self, source: int, sink: int) -> None:
        n = self.num_vertices
        if not (0 <= source < n and 0 <= sink < n):
            raise ValueError(
                f"Source {source} or sink {sink} out of range for "
                f"{n} vertices"
            )
        if source == sink:
            raise ValueError(f"Source and sink must differ (both are {source})")

    def _log_route(self, path: List[int], path_flow: int) -> None:
        if logger.isEnabledFor(logging.DEBUG):
            route = " -> ".join(str(v) for v in path)
            logger.debug("%s route: %s | path flow: %d", self.name, route, path_flow)

    @abstractmethod
    def _max_flow(self, source: int, sink: int) -> int:
        """Run the algorithm on validated endpoints and return the flow."""
