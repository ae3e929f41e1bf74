"""
Graph Controller Tests
======================

Facade behavior: lazy rebuilds, snapshots handed to workers and the
async enumeration entry points.
"""

import asyncio

import pytest

from graph_engine import EmptyGraph, EnumerationStatus, GraphController, InvalidReference, Node

from .conftest import build_graph


class TestDerivedState:

    def test_queries_reuse_cache_until_mutation(self, diamond):
        """Derived state is reused until the revision moves."""
        first = diamond.distance_matrix()
        assert diamond.distance_matrix() is first

        diamond.add_arc(begin="D", end="A")
        second = diamond.distance_matrix()
        assert second is not first
        assert diamond.is_connective() is True

    def test_add_node_builds_from_fields(self):
        """Keyword fields build the node."""
        controller = GraphController()
        node = controller.add_node(id="X", label="Gateway")
        assert node == Node(id="X")
        assert controller.store.get_node("X").label == "Gateway"

    def test_clear(self, diamond):
        """Clearing leaves an empty graph."""
        diamond.clear()
        assert diamond.snapshot().nodes == ()
        assert diamond.diameter() == 0

    def test_empty_graph_predicates(self, empty_graph):
        """Predicates and metrics on an empty graph are False and 0."""
        assert empty_graph.is_connective() is False
        assert empty_graph.is_tree() is False
        assert empty_graph.diameter() == 0
        assert empty_graph.radius() == 0

    def test_eccentricity_of_unknown_node(self, diamond):
        """Eccentricity of an unknown node raises InvalidReference."""
        with pytest.raises(InvalidReference):
            diamond.eccentricity("Z")


class TestAsyncEnumeration:

    def test_cycles_on_worker(self, directed_triangle):
        """Cycle search runs on a worker thread."""
        result = asyncio.run(directed_triangle.eulerian_cycles_async("A", timeout=5))
        assert result.paths == [("A", "B", "C", "A")]
        assert result.complete

    def test_paths_on_worker(self, diamond):
        """Path search runs on a worker thread."""
        result = asyncio.run(diamond.path_between_async("A", "D", timeout=5))
        assert result.paths == [("A", "B", "D"), ("A", "C", "D")]

    def test_errors_propagate_from_worker(self, empty_graph, diamond):
        """Worker exceptions reach the caller."""
        with pytest.raises(EmptyGraph):
            asyncio.run(empty_graph.eulerian_cycles_async())
        with pytest.raises(InvalidReference):
            asyncio.run(diamond.path_between_async("A", "Z"))

    def test_timeout_returns_partial_result(self):
        """A timeout keeps the paths found so far."""
        # Complete directed graph on 11 nodes: about a million simple paths
        nodes = [f"n{i}" for i in range(11)]
        arcs = [(a, b) for a in nodes for b in nodes if a != b]
        graph = build_graph(nodes, arcs)

        result = asyncio.run(graph.path_between_async("n0", "n10", timeout=0.05))
        assert result.status == EnumerationStatus.TIMED_OUT
        assert all(path[0] == "n0" and path[-1] == "n10" for path in result.paths)

    def test_worker_searches_snapshot_taken_before_start(self, directed_triangle):
        """Mutations after the call do not reach the running search."""
        async def scenario():
            pending = asyncio.ensure_future(
                directed_triangle.eulerian_cycles_async("A", timeout=5)
            )
            # Mutate once the coroutine has captured its snapshot
            await asyncio.sleep(0)
            directed_triangle.remove_node("C")
            return await pending

        result = asyncio.run(scenario())
        assert result.paths == [("A", "B", "C", "A")]
