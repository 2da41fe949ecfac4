"""Configuration for benchmark runs.

A config can be built in code or loaded from YAML:

```yaml
seed: 42
include_fixed: true
algorithms: [edmonds_karp, ford_fulkerson, dinic]
capacity: {min: 20, max: 700}
cases:
  - [20, 24]
  - {vertices: 40, edges: 48}
```
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml

from flowbench.algorithms.types import Algorithm
from flowbench.graph import MAX_RANDOM_CAPACITY, MIN_RANDOM_CAPACITY

#: (vertices, edges) pairs measured by default; sparse first, then dense.
DEFAULT_CASES: Tuple[Tuple[int, int], ...] = (
    (20, 24),
    (40, 48),
    (80, 56),
    (10, 100),
    (20, 400),
    (40, 1600),
    (80, 6400),
)

_ALLOWED_KEYS = {"seed", "include_fixed", "algorithms", "capacity", "cases"}


@dataclass
class BenchmarkConfig:
    """Settings for one benchmark run."""

    # Graph sizes to generate, one random graph per entry
    cases: List[Tuple[int, int]] = field(default_factory=lambda: list(DEFAULT_CASES))

    # Algorithms to run on every graph, in reporting order
    algorithms: List[Algorithm] = field(
        default_factory=lambda: [
            Algorithm.EDMONDS_KARP,
            Algorithm.FORD_FULKERSON,
            Algorithm.DINIC,
        ]
    )

    # Master seed for graph generation; None draws fresh graphs each run
    seed: Optional[int] = None

    # Inclusive bounds for random edge capacities
    min_capacity: int = MIN_RANDOM_CAPACITY
    max_capacity: int = MAX_RANDOM_CAPACITY

    # Run the fixed reference graph before the random cases
    include_fixed: bool = True

    def __post_init__(self) -> None:
        self.algorithms = [Algorithm.parse(a) for a in self.algorithms]
        self.cases = [_parse_case(c) for c in self.cases]
        if self.min_capacity > self.max_capacity:
            raise ValueError(
                f"min_capacity ({self.min_capacity}) exceeds "
                f"max_capacity ({self.max_capacity})"
            )
        if not self.algorithms:
            raise ValueError("At least one algorithm is required")


def _parse_case(raw: Any) -> Tuple[int, int]:
    if isinstance(raw, dict):
        try:
            vertices, edges = raw["vertices"], raw["edges"]
        except KeyError as exc:
            raise ValueError(f"Case {raw!r} is missing key {exc}") from exc
    elif isinstance(raw, (list, tuple)) and len(raw) == 2:
        vertices, edges = raw
    else:
        raise ValueError(f"Case must be [vertices, edges] or a mapping, got {raw!r}")

    if not isinstance(vertices, int) or not isinstance(edges, int):
        raise ValueError(f"Case values must be integers, got {raw!r}")
    if vertices < 2:
        raise ValueError(f"Case {raw!r} needs at least 2 vertices")
    return vertices, edges


def config_from_dict(data: Optional[Dict[str, Any]]) -> BenchmarkConfig:
    """Build a ``BenchmarkConfig`` from parsed YAML data.

    Raises:
        ValueError: On unknown keys or invalid values.
    """
    if data is None:
        return BenchmarkConfig()
    if not isinstance(data, dict):
        raise ValueError("Benchmark config must be a mapping")

    unknown = set(data) - _ALLOWED_KEYS
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")

    kwargs: Dict[str, Any] = {}
    if "seed" in data:
        kwargs["seed"] = data["seed"]
    if "include_fixed" in data:
        if not isinstance(data["include_fixed"], bool):
            raise ValueError(
                "'include_fixed' must be true or false, "
                f"got {data['include_fixed']!r}"
            )
        kwargs["include_fixed"] = data["include_fixed"]
    if "algorithms" in data:
        kwargs["algorithms"] = list(data["algorithms"] or [])
    if "cases" in data:
        kwargs["cases"] = list(data["cases"] or [])
    capacity = data.get("capacity") or {}
    if not isinstance(capacity, dict):
        raise ValueError("'capacity' must be a mapping with 'min' and/or 'max'")
    if "min" in capacity:
        kwargs["min_capacity"] = int(capacity["min"])
    if "max" in capacity:
        kwargs["max_capacity"] = int(capacity["max"])

    return BenchmarkConfig(**kwargs)


def load_config(path: Union[str, Path]) -> BenchmarkConfig:
    """Load a benchmark config from a YAML file.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the YAML is malformed or holds invalid settings.
    """
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    return config_from_dict(data)


# Global default configuration instance
DEFAULT_CONFIG = BenchmarkConfig()
