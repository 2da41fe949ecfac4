"""Types shared by the max-flow solvers.

Defines the algorithm tag, the operation counter every solver owns, and the
immutable result record returned by ``FlowSolver.run``.
"""

from __future__ import annotations

import sys
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict

#: Sentinel for an unconstrained bottleneck; larger than any real path capacity.
UNBOUNDED_FLOW = sys.maxsize


class Algorithm(str, Enum):
    """Max-flow algorithms available to the registry and the CLI."""

    FORD_FULKERSON = "ford_fulkerson"
    EDMONDS_KARP = "edmonds_karp"
    DINIC = "dinic"

    @property
    def label(self) -> str:
        """Human-readable name used in reports."""
        return _LABELS[self]

    @classmethod
    def parse(cls, value: "Algorithm | str") -> "Algorithm":
        """Resolve an ``Algorithm`` from a member, value or loose name.

        Accepts e.g. ``"dinic"``, ``"Edmonds-Karp"``, ``"FORD_FULKERSON"``.

        Raises:
            ValueError: If the name matches no algorithm.
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("-", "_").replace(" ", "_")
        for member in cls:
            if member.value == key:
                return member
        valid = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown algorithm '{value}'. Valid: {valid}")


_LABELS = {
    Algorithm.FORD_FULKERSON: "Ford-Fulkerson",
    Algorithm.EDMONDS_KARP: "Edmonds-Karp",
    Algorithm.DINIC: "Dinic",
}


@dataclass
class OpCounter:
    """Operation counts accumulated by one solver instance.

    Attributes:
        assignments: Writes on hot paths (residual updates, parent/level/next
            writes, queue operations, running totals).
        comparisons: Tests that gate control flow (loop conditions, capacity
            and level checks, sink tests).
    """

    assignments: int = 0
    comparisons: int = 0

    def snapshot(self) -> tuple[int, int]:
        return self.assignments, self.comparisons


@dataclass(frozen=True)
class MaxFlowResult:
    """Outcome of a single ``FlowSolver.run`` call.

    Attributes:
        algorithm: Algorithm that produced the result.
        source: Source vertex.
        sink: Sink vertex.
        flow: Max-flow value found by this call.
        assignments: Assignments counted during this call.
        comparisons: Comparisons counted during this call.
    """

    algorithm: Algorithm
    source: int
    sink: int
    flow: int
    assignments: int
    comparisons: int

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["algorithm"] = self.algorithm.value
        return data
