"""
Coloring Tests
==============
"""

import itertools

from graph_engine.coloring import PALETTE

from .conftest import build_graph


def assert_proper(graph, coloring):
    for arc in graph.store.arcs:
        if arc.begin != arc.end:
            assert coloring[arc.begin] != coloring[arc.end]


class TestColoring:

    def test_every_node_colored(self, diamond):
        """Every node gets a color."""
        coloring = diamond.colorize_nodes()
        assert set(coloring) == {"A", "B", "C", "D"}

    def test_proper_on_directed_graph(self, diamond):
        """Greedy coloring of the diamond uses two colors."""
        coloring = diamond.colorize_nodes()
        assert_proper(diamond, coloring)
        # A, D share a color; B, C share the other
        assert coloring["A"] == coloring["D"] == PALETTE[0]
        assert coloring["B"] == coloring["C"] == PALETTE[1]

    def test_direction_ignored(self):
        """Neighbors count whichever way the arc points."""
        # B only has an incoming arc from C, which is colored after it
        graph = build_graph("ABC", [("A", "B"), ("C", "B")])
        coloring = graph.colorize_nodes()
        assert_proper(graph, coloring)

    def test_odd_cycle_needs_three_colors(self, directed_triangle):
        """A triangle takes three colors."""
        coloring = directed_triangle.colorize_nodes()
        assert_proper(directed_triangle, coloring)
        assert len(set(coloring.values())) == 3

    def test_self_loop_ignored(self):
        """A loop does not force a node to differ from itself."""
        graph = build_graph("A", [("A", "A")])
        assert graph.colorize_nodes() == {"A": PALETTE[0]}

    def test_palette_overflow_stays_proper(self):
        """Past the palette, generated color names keep the coloring proper."""
        nodes = [f"n{i}" for i in range(len(PALETTE) + 2)]
        graph = build_graph(nodes, list(itertools.combinations(nodes, 2)), directed=False)
        coloring = graph.colorize_nodes()
        assert_proper(graph, coloring)
        assert len(set(coloring.values())) == len(nodes)
        assert coloring[nodes[-1]] == f"color-{len(nodes) - 1}"

    def test_deterministic(self, undirected_path):
        """Coloring the same graph twice gives the same result."""
        assert undirected_path.colorize_nodes() == undirected_path.colorize_nodes()
