"""
Enumeration Tests
=================

Edge-covering cycles and simple paths, including cancellation,
timeouts and result caps.
"""

import pytest

from graph_engine import (
    CancellationToken,
    EmptyGraph,
    EnumerationStatus,
    InvalidReference,
    enumerate_eulerian_cycles,
    enumerate_simple_paths,
)

from .conftest import build_graph


class TestEulerianCycles:

    def test_directed_triangle_from_a(self, directed_triangle):
        """The directed triangle has exactly one cycle from A."""
        result = directed_triangle.eulerian_cycles("A")
        assert result.paths == [("A", "B", "C", "A")]
        assert result.status == EnumerationStatus.COMPLETE

    def test_every_cycle_uses_every_arc_once(self):
        """Each reported cycle walks every arc exactly once."""
        # Two triangles sharing A (a bowtie), all arcs directed
        graph = build_graph("ABCDE", [
            ("A", "B"), ("B", "C"), ("C", "A"),
            ("A", "D"), ("D", "E"), ("E", "A"),
        ])
        result = graph.eulerian_cycles("A")
        assert sorted(result.paths) == [
            ("A", "B", "C", "A", "D", "E", "A"),
            ("A", "D", "E", "A", "B", "C", "A"),
        ]
        for cycle in result.paths:
            assert len(cycle) - 1 == len(graph.store.arcs)

    def test_undirected_arc_consumed_once(self):
        """An undirected triangle is walked both ways round."""
        graph = build_graph("ABC", [("A", "B"), ("B", "C"), ("C", "A")], directed=False)
        result = graph.eulerian_cycles("A")
        assert sorted(result.paths) == [("A", "B", "C", "A"), ("A", "C", "B", "A")]

    def test_parallel_arcs_reported_once(self):
        """Parallel arcs giving one node sequence count once."""
        graph = build_graph("AB", [("A", "B"), ("A", "B")], directed=False)
        result = graph.eulerian_cycles("A")
        assert result.paths == [("A", "B", "A")]

    def test_self_loop(self):
        """A lone self-loop is a cycle of one arc."""
        graph = build_graph("A", [("A", "A")])
        assert graph.eulerian_cycles("A").paths == [("A", "A")]

    def test_no_cycle_when_an_arc_is_unreachable(self, directed_triangle):
        """An arc the walk cannot reach means no cycle."""
        directed_triangle.add_node(id="D")
        directed_triangle.add_arc(begin="D", end="A")
        assert directed_triangle.eulerian_cycles("A").paths == []

    def test_path_graph_has_no_cycle(self, undirected_path):
        """A path has no closed walk covering it."""
        assert undirected_path.eulerian_cycles("A").paths == []

    def test_graph_without_arcs(self):
        """A node without arcs has no cycles."""
        assert build_graph("A", []).eulerian_cycles("A").paths == []

    def test_all_start_nodes(self, directed_triangle):
        """Without a start, each node contributes its rotation."""
        result = directed_triangle.eulerian_cycles()
        assert result.paths == [
            ("A", "B", "C", "A"),
            ("B", "C", "A", "B"),
            ("C", "A", "B", "C"),
        ]

    def test_empty_graph(self, empty_graph):
        """Cycle search on an empty graph raises EmptyGraph."""
        with pytest.raises(EmptyGraph):
            empty_graph.eulerian_cycles()

    def test_unknown_start(self, directed_triangle):
        """An unknown start node raises InvalidReference."""
        with pytest.raises(InvalidReference):
            directed_triangle.eulerian_cycles("Z")

    def test_max_results(self, directed_triangle):
        """The cap truncates the search."""
        result = directed_triangle.eulerian_cycles(max_results=2)
        assert len(result.paths) == 2
        assert result.status == EnumerationStatus.TRUNCATED

    def test_zero_max_results_rejected(self, directed_triangle):
        """A cap below one is refused."""
        with pytest.raises(ValueError):
            directed_triangle.eulerian_cycles("A", max_results=0)
        with pytest.raises(ValueError):
            directed_triangle.eulerian_cycles(max_results=0)


class TestSimplePaths:

    def test_diamond(self, diamond):
        """The diamond has two paths from A to D."""
        result = diamond.path_between("A", "D")
        assert result.paths == [("A", "B", "D"), ("A", "C", "D")]
        assert result.complete

    def test_same_begin_and_end(self, diamond):
        """A node's only path to itself is the node alone."""
        assert diamond.path_between("B", "B").paths == [("B",)]

    def test_direction_respected(self, diamond):
        """Paths follow arc direction."""
        assert diamond.path_between("D", "A").paths == []

    def test_paths_stop_at_end(self):
        """A path ends the first time it reaches the target."""
        graph = build_graph("ABC", [("A", "B"), ("B", "C"), ("C", "B")])
        assert graph.path_between("A", "B").paths == [("A", "B")]

    def test_undirected_paths_never_repeat_nodes(self):
        """No path visits a node twice."""
        graph = build_graph("ABCD", [
            ("A", "B"), ("B", "C"), ("C", "D"), ("A", "C"),
        ], directed=False)
        result = graph.path_between("A", "D")
        assert sorted(result.paths) == [("A", "B", "C", "D"), ("A", "C", "D")]
        for path in result.paths:
            assert len(set(path)) == len(path)

    def test_parallel_arcs_do_not_duplicate(self):
        """Parallel arcs do not duplicate a path."""
        graph = build_graph("AB", [("A", "B"), ("A", "B")])
        assert graph.path_between("A", "B").paths == [("A", "B")]

    def test_max_depth(self):
        """max_depth drops paths with more arcs than allowed."""
        graph = build_graph("ABCD", [
            ("A", "B"), ("B", "C"), ("C", "D"), ("A", "D"),
        ])
        assert graph.path_between("A", "D", max_depth=1).paths == [("A", "D")]
        assert len(graph.path_between("A", "D", max_depth=3).paths) == 2

    def test_max_results_below_one_rejected(self, diamond):
        """Caps of zero or less are refused."""
        for bad in (0, -1):
            with pytest.raises(ValueError):
                diamond.path_between("A", "D", max_results=bad)
        with pytest.raises(ValueError):
            enumerate_simple_paths(diamond.snapshot(), "A", "D", max_results=0)

    def test_unknown_endpoints(self, diamond):
        """Unknown endpoints raise InvalidReference."""
        with pytest.raises(InvalidReference):
            diamond.path_between("A", "Z")
        with pytest.raises(InvalidReference):
            diamond.path_between("Z", "A")


class TestCancellation:

    def test_cancelled_token_stops_cycle_search(self, directed_triangle):
        """A cancelled token ends the cycle search at once."""
        token = CancellationToken()
        token.cancel()
        result = enumerate_eulerian_cycles(directed_triangle.snapshot(), "A", token=token)
        assert result.status == EnumerationStatus.CANCELLED
        assert result.paths == []

    def test_cancelled_token_stops_path_search(self, diamond):
        """A cancelled token ends the path search at once."""
        token = CancellationToken()
        token.cancel()
        result = enumerate_simple_paths(diamond.snapshot(), "A", "D", token=token)
        assert result.status == EnumerationStatus.CANCELLED

    def test_expired_deadline(self, diamond):
        """A deadline already passed reports timed_out."""
        token = CancellationToken(timeout=0)
        assert token.timed_out
        result = diamond.path_between("A", "D", token=token)
        assert result.status == EnumerationStatus.TIMED_OUT

    def test_result_to_dict(self, diamond):
        """Results serialize to lists with a count and status."""
        data = diamond.path_between("A", "D").to_dict()
        assert data == {
            "paths": [["A", "B", "D"], ["A", "C", "D"]],
            "count": 2,
            "status": "complete",
        }
