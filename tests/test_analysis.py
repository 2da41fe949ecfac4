"""Tests for post-solve flow analysis."""

import numpy as np
import pytest

from flowbench.algorithms import Algorithm, calc_max_flow, create_solver
from flowbench.analysis import (
    check_flow,
    flow_matrix,
    has_augmenting_path,
    min_cut,
    net_flow_matrix,
    residual_reachable,
    solver_min_cut,
)
from flowbench.graph import random_graph


def _solved(graph, source, sink, algorithm=Algorithm.DINIC):
    result, solver = calc_max_flow(
        graph, source, sink, algorithm=algorithm, return_solver=True
    )
    return result.flow, solver.original_capacity, solver.residual


class TestFlowMatrices:
    def test_diamond_flow_per_edge(self, diamond):
        _, original, residual = _solved(diamond, 0, 3)
        flows = flow_matrix(original, residual)
        assert flows[0, 1] == 2
        assert flows[0, 2] == 2
        assert flows[1, 3] == 2
        assert flows[2, 3] == 2
        assert flows.sum() == 8

    def test_net_flow_is_antisymmetric(self, cancellation):
        _, original, residual = _solved(cancellation, 0, 5)
        net = net_flow_matrix(original, residual)
        assert np.array_equal(net, -net.T)

    def test_flow_respects_capacity(self, antiparallel):
        _, original, residual = _solved(antiparallel, 0, 2)
        flows = flow_matrix(original, residual)
        assert (flows >= 0).all()
        assert (flows <= np.asarray(original)).all()

    def test_unsolved_residual_has_no_flow(self, diamond):
        flows = flow_matrix(diamond.capacity, diamond.capacity)
        assert not flows.any()


class TestCheckFlow:
    @pytest.mark.parametrize("algorithm", list(Algorithm))
    def test_valid_flow_returns_value(self, reference_graph, algorithm):
        flow, original, residual = _solved(reference_graph, 0, 9, algorithm)
        assert check_flow(original, residual, 0, 9) == flow == 676

    def test_zero_flow_is_valid(self, diamond):
        assert check_flow(diamond.capacity, diamond.capacity, 0, 3) == 0

    def test_negative_residual_detected(self, diamond):
        residual = diamond.copy_capacity()
        residual[0][1] = -1
        residual[1][0] = 4
        with pytest.raises(ValueError, match="Negative residual"):
            check_flow(diamond.capacity, residual, 0, 3)

    def test_non_antisymmetric_detected(self, diamond):
        residual = diamond.copy_capacity()
        residual[0][1] = 1
        with pytest.raises(ValueError, match="antisymmetric"):
            check_flow(diamond.capacity, residual, 0, 3)

    def test_conservation_violation_detected(self, diamond):
        # Two units enter vertex 1 but none leave it
        residual = diamond.copy_capacity()
        residual[0][1] -= 2
        residual[1][0] += 2
        with pytest.raises(ValueError, match="not conserved at vertex 1"):
            check_flow(diamond.capacity, residual, 0, 3)


class TestMinCut:
    def test_diamond_min_cut(self, diamond):
        flow, original, residual = _solved(diamond, 0, 3)
        cut = min_cut(original, residual, 0)
        assert cut.capacity == flow == 4
        assert cut.source_side == frozenset({0, 1})
        assert cut.edges == ((0, 2), (1, 3))

    def test_reference_min_cut(self, reference_graph):
        solver = create_solver(Algorithm.EDMONDS_KARP, reference_graph)
        flow = solver.compute_max_flow(0, 9)
        cut = solver_min_cut(solver, 0)
        assert cut.capacity == flow
        assert 9 not in cut.source_side

    def test_disconnected_cut_is_empty(self, disconnected):
        flow, original, residual = _solved(disconnected, 0, 4)
        cut = min_cut(original, residual, 0)
        assert flow == 0
        assert cut.edges == ()
        assert cut.capacity == 0
        assert cut.source_side == frozenset({0, 1, 2})

    @pytest.mark.parametrize("seed", range(5))
    def test_cut_capacity_equals_flow_on_random_graphs(self, seed):
        graph = random_graph(18, 70, seed=seed)
        for algorithm in Algorithm:
            flow, original, residual = _solved(graph, 0, 17, algorithm)
            assert min_cut(original, residual, 0).capacity == flow


class TestReachability:
    def test_reachable_before_and_after(self, diamond):
        assert residual_reachable(diamond.capacity, 0) == {0, 1, 2, 3}
        assert has_augmenting_path(diamond.capacity, 0, 3)

        _, _, residual = _solved(diamond, 0, 3)
        assert not has_augmenting_path(residual, 0, 3)
