import pytest

from graph_engine import Arc, GraphController, Node


def build_graph(nodes, arcs, directed=True) -> GraphController:
    """Build a controller from node ids and (begin, end[, directed]) tuples."""
    controller = GraphController()
    for node_id in nodes:
        controller.add_node(Node(id=node_id, label=node_id))
    for arc_tuple in arcs:
        begin, end = arc_tuple[0], arc_tuple[1]
        arc_directed = arc_tuple[2] if len(arc_tuple) > 2 else directed
        controller.add_arc(Arc(begin=begin, end=end, directed=arc_directed))
    return controller


@pytest.fixture
def empty_graph():
    return GraphController()


@pytest.fixture
def directed_triangle():
    return build_graph("ABC", [("A", "B"), ("B", "C"), ("C", "A")])


@pytest.fixture
def diamond():
    return build_graph("ABCD", [("A", "B"), ("A", "C"), ("B", "D"), ("C", "D")])


@pytest.fixture
def undirected_path():
    return build_graph("ABCD", [("A", "B"), ("B", "C"), ("C", "D")], directed=False)
