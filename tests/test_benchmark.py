"""Tests for the benchmark driver."""

import logging

import pandas as pd
import pytest

from flowbench.algorithms import Algorithm, EdmondsKarpSolver, calc_max_flow
from flowbench.benchmark import (
    FIXED_CASE_LABEL,
    BenchmarkRecord,
    BenchmarkReport,
    benchmark_graph,
    case_label,
    classify_density,
    measure,
    run_benchmark,
)
from flowbench.config import BenchmarkConfig
from flowbench.graph import random_graph
from flowbench.seed_manager import SeedManager


def _record(case, algorithm, flow):
    return BenchmarkRecord(
        case=case,
        algorithm=algorithm,
        vertices=4,
        edges=4,
        flow=flow,
        time_ms=0.1,
        assignments=1,
        comparisons=1,
        density="sparse",
    )


@pytest.mark.parametrize(
    "vertices,edges,expected",
    [
        (20, 24, "sparse"),
        (80, 56, "sparse"),
        (10, 100, "dense"),
        (20, 400, "dense"),
        (10, 45, "sparse"),
        (10, 46, "dense"),
    ],
)
def test_classify_density(vertices, edges, expected):
    assert classify_density(vertices, edges) == expected


def test_case_label():
    assert case_label(40, 1600) == "40x1600"


def test_measure(diamond):
    record = measure(EdmondsKarpSolver(diamond), 0, 3, case="d", edges=4)
    assert record.case == "d"
    assert record.algorithm == "edmonds_karp"
    assert record.vertices == 4
    assert record.flow == 4
    assert record.time_ms >= 0.0
    assert record.assignments > 0
    assert record.comparisons > 0
    assert record.density == "sparse"


def test_benchmark_graph_defaults_to_last_vertex(diamond):
    records = benchmark_graph(diamond, list(Algorithm), case="d", edges=4)
    assert [r.algorithm for r in records] == [a.value for a in Algorithm]
    assert {r.flow for r in records} == {4}


def test_benchmark_graph_uses_separate_solvers(reference_graph):
    records = benchmark_graph(
        reference_graph,
        [Algorithm.DINIC, Algorithm.DINIC],
        case="fixed",
        edges=12,
    )
    assert records[0].flow == records[1].flow == 676
    assert records[0].assignments == records[1].assignments


class TestRunBenchmark:
    def test_fixed_graph_first(self):
        report = run_benchmark(BenchmarkConfig(cases=[(6, 10)], seed=1))
        assert report.cases() == [FIXED_CASE_LABEL, "6x10"]
        fixed = report.for_case(FIXED_CASE_LABEL)
        assert [r.flow for r in fixed] == [676, 676, 676]
        assert fixed[0].edges == 12
        assert report.flows_agree()

    def test_default_config_runs_every_case(self):
        report = run_benchmark(BenchmarkConfig(seed=1))
        assert report.cases() == [
            FIXED_CASE_LABEL,
            "20x24",
            "40x48",
            "80x56",
            "10x100",
            "20x400",
            "40x1600",
            "80x6400",
        ]
        assert len(report.records) == 24
        assert report.flows_agree()
        chain_only = report.for_case("80x56")
        assert all(r.flow > 0 for r in chain_only)
        assert {r.density for r in chain_only} == {"sparse"}

    def test_skip_fixed(self):
        config = BenchmarkConfig(cases=[(5, 8)], include_fixed=False, seed=3)
        report = run_benchmark(config)
        assert report.cases() == ["5x8"]
        assert len(report.records) == 3

    def test_seeded_runs_reproduce(self):
        config = BenchmarkConfig(cases=[(12, 30), (8, 40)], seed=42)
        first = run_benchmark(config)
        second = run_benchmark(config)
        key = [(r.case, r.algorithm, r.flow, r.assignments, r.comparisons)
               for r in first.records]
        assert key == [
            (r.case, r.algorithm, r.flow, r.assignments, r.comparisons)
            for r in second.records
        ]

    def test_case_graph_independent_of_other_cases(self):
        alone = run_benchmark(
            BenchmarkConfig(cases=[(10, 30)], seed=5, include_fixed=False)
        )
        mixed = run_benchmark(
            BenchmarkConfig(cases=[(6, 9), (10, 30)], seed=5, include_fixed=False)
        )
        assert alone.for_case("10x30")[0].flow == mixed.for_case("10x30")[0].flow

    def test_case_graph_drawn_from_label_seed(self):
        report = run_benchmark(
            BenchmarkConfig(cases=[(10, 30)], seed=5, include_fixed=False)
        )
        rng = SeedManager(5).create_random_state("case", "10x30")
        expected = calc_max_flow(random_graph(10, 30, rng=rng), 0, 9).flow
        assert {r.flow for r in report.for_case("10x30")} == {expected}

    def test_duplicate_cases_get_distinct_labels(self):
        config = BenchmarkConfig(cases=[(6, 9), (6, 9)], include_fixed=False, seed=0)
        report = run_benchmark(config)
        assert report.cases() == ["6x9", "6x9#1"]

    def test_selected_algorithms(self):
        config = BenchmarkConfig(
            cases=[(6, 9)], algorithms=["dinic"], include_fixed=False
        )
        report = run_benchmark(config)
        assert [r.algorithm for r in report.records] == ["dinic"]

    def test_logs_progress(self, caplog):
        with caplog.at_level(logging.INFO, logger="flowbench"):
            run_benchmark(BenchmarkConfig(cases=[(5, 6)], seed=0))
        messages = [r.getMessage() for r in caplog.records]
        assert any("fixed reference graph" in m for m in messages)
        assert any("Benchmarking case 5x6" in m for m in messages)
        assert any("Benchmark finished: 2 cases, 6 measurements" in m for m in messages)


class TestBenchmarkReport:
    def test_flows_agree_false_on_mismatch(self):
        report = BenchmarkReport(
            records=[_record("a", "dinic", 4), _record("a", "edmonds_karp", 5)]
        )
        assert not report.flows_agree()

    def test_empty_report_agrees(self):
        assert BenchmarkReport().flows_agree()

    def test_to_dict(self):
        report = BenchmarkReport(records=[_record("a", "dinic", 4)], seed=9)
        data = report.to_dict()
        assert data["seed"] == 9
        assert data["records"][0]["flow"] == 4
        assert data["records"][0]["algorithm"] == "dinic"

    def test_to_dataframe(self):
        report = BenchmarkReport(
            records=[_record("a", "dinic", 4), _record("b", "dinic", 2)]
        )
        df = report.to_dataframe()
        assert isinstance(df, pd.DataFrame)
        assert list(df.columns) == [
            "case",
            "algorithm",
            "vertices",
            "edges",
            "flow",
            "time_ms",
            "assignments",
            "comparisons",
            "density",
        ]
        assert df["flow"].tolist() == [4, 2]

    def test_empty_dataframe_has_columns(self):
        df = BenchmarkReport().to_dataframe()
        assert df.empty
        assert "flow" in df.columns
