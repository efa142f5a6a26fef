"""Tests for the topological sorter."""

from __future__ import annotations

import random
from pathlib import Path

import pytest

from fragcat.exceptions import CyclicDependencyError
from fragcat.fragments.graph import DependencyGraph
from fragcat.fragments.sorting import topological_order

from tests.utils import graph_of, names


def _assert_valid(graph: DependencyGraph, order: list[Path]) -> None:
    assert len(order) == len(graph)
    assert set(order) == set(graph.fragments)
    position = {path: i for i, path in enumerate(order)}
    for dependent, dependency in graph.edges():
        assert position[dependency] < position[dependent]


def _random_dag(root: Path, size: int, seed: int) -> DependencyGraph:
    rng = random.Random(seed)
    labels = [f"f{i:02d}.txt" for i in range(size)]
    # Edges only point "backwards" in a hidden rank, then keys are shuffled
    edges = {
        label: [labels[j] for j in range(i) if rng.random() < 0.3]
        for i, label in enumerate(labels)
    }
    keys = list(edges)
    rng.shuffle(keys)
    return graph_of(root, {key: edges[key] for key in keys})


class TestScenarios:

    def test_chain_orders_dependencies_first(self, tmp_path: Path):
        graph = graph_of(tmp_path, {"a.txt": ["b.txt"], "b.txt": ["c.txt"], "c.txt": []})

        assert names(topological_order(graph)) == ["c.txt", "b.txt", "a.txt"]

    def test_independent_fragments_keep_discovery_order(self, tmp_path: Path):
        graph = graph_of(tmp_path, {"a.txt": [], "b.txt": [], "c.txt": []})

        assert names(topological_order(graph)) == ["a.txt", "b.txt", "c.txt"]

    def test_two_cycle_fails(self, tmp_path: Path):
        graph = graph_of(tmp_path, {"a.txt": ["b.txt"], "b.txt": ["a.txt"]})

        with pytest.raises(CyclicDependencyError) as excinfo:
            topological_order(graph)

        assert set(names(excinfo.value.cycle)) == {"a.txt", "b.txt"}
        assert set(names(excinfo.value.unsorted)) == {"a.txt", "b.txt"}


class TestOrdering:

    def test_empty_graph(self):
        assert topological_order(DependencyGraph([])) == []

    def test_isolated_fragment_sorts_with_seed_set(self, tmp_path: Path):
        graph = graph_of(tmp_path, {"a.txt": [], "b.txt": ["c.txt"], "c.txt": []})

        order = topological_order(graph)

        _assert_valid(graph, order)
        # a and b are both seeds; c is released by b and lands before it
        assert names(order) == ["c.txt", "a.txt", "b.txt"]

    def test_diamond(self, tmp_path: Path):
        graph = graph_of(tmp_path, {
            "top.txt": ["left.txt", "right.txt"],
            "left.txt": ["base.txt"],
            "right.txt": ["base.txt"],
            "base.txt": [],
        })

        order = topological_order(graph)

        _assert_valid(graph, order)
        assert names(order)[0] == "base.txt"
        assert names(order)[-1] == "top.txt"

    def test_duplicate_edges_still_sort(self, tmp_path: Path):
        graph = graph_of(tmp_path, {"a.txt": ["b.txt", "b.txt", "b.txt"], "b.txt": []})

        assert names(topological_order(graph)) == ["b.txt", "a.txt"]

    def test_self_dependency_is_a_cycle(self, tmp_path: Path):
        graph = graph_of(tmp_path, {"a.txt": ["a.txt"], "b.txt": []})

        with pytest.raises(CyclicDependencyError) as excinfo:
            topological_order(graph)

        assert names(excinfo.value.cycle) == ["a.txt", "a.txt"]

    def test_fragments_outside_cycle_are_not_unsorted_dependents(self, tmp_path: Path):
        graph = graph_of(tmp_path, {
            "free.txt": [],
            "x.txt": ["y.txt"],
            "y.txt": ["z.txt"],
            "z.txt": ["y.txt"],
        })

        with pytest.raises(CyclicDependencyError) as excinfo:
            topological_order(graph)

        assert "free.txt" not in names(excinfo.value.unsorted)
        assert set(names(excinfo.value.cycle)) == {"y.txt", "z.txt"}

    @pytest.mark.parametrize("seed", range(5))
    def test_random_acyclic_graphs(self, tmp_path: Path, seed: int):
        graph = _random_dag(tmp_path, 25, seed)

        _assert_valid(graph, topological_order(graph))

    def test_deterministic(self, tmp_path: Path):
        graph = _random_dag(tmp_path, 30, seed=42)

        assert topological_order(graph) == topological_order(graph)
