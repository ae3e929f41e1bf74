"""
Node coloring - Greedy proper coloring.
"""

from .adjacency import AdjacencyIndex

# Fill colors handed out in order; nodes needing more fall back to "color-<n>"
PALETTE = (
    "#e6194b",
    "#3cb44b",
    "#4363d8",
    "#f58231",
    "#911eb4",
    "#46f0f0",
    "#f032e6",
    "#bcf60c",
    "#fabebe",
    "#008080",
    "#9a6324",
    "#800000",
)


def color_label(index: int) -> str:
    """Get the label for the `index`-th color."""
    if index < len(PALETTE):
        return PALETTE[index]
    return f"color-{index}"


def colorize_nodes(adjacency: AdjacencyIndex) -> dict[str, str]:
    """
    Color every node so that no arc joins two nodes of the same color.

    Nodes are processed in graph order; each takes the first color not
    used by an already colored neighbor. The result is deterministic but
    not guaranteed to use the fewest colors.

    Args:
        adjacency: Adjacency index of the graph to color

    Returns:
        Dictionary mapping node_id to its color label
    """
    indexes: dict[str, int] = {}

    for node_id in adjacency.node_ids:
        taken = {indexes[n] for n in adjacency.neighbors_of(node_id) if n in indexes}
        index = 0
        while index in taken:
            index += 1
        indexes[node_id] = index

    return {node_id: color_label(index) for node_id, index in indexes.items()}
