"""
Graph validation - Check graphs for structural issues.

Provides validation that can be used by both the backend and MCP tools
to report on graph integrity.
"""

from dataclasses import dataclass
from enum import Enum

from .store import GraphSnapshot


class IssueSeverity(str, Enum):
    """Severity levels for validation issues."""
    ERROR = "error"      # Invalid state, must be fixed
    WARNING = "warning"  # Potential problem, should review
    INFO = "info"        # Informational, may be intentional


@dataclass
class ValidationIssue:
    """A single validation issue found in a graph."""
    severity: IssueSeverity
    message: str
    node_id: str | None = None
    arc_id: str | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        result = {
            "type": self.severity.value,
            "message": self.message
        }
        if self.node_id:
            result["node_id"] = self.node_id
        if self.arc_id:
            result["arc_id"] = self.arc_id
        return result


def validate_graph(snapshot: GraphSnapshot) -> list[ValidationIssue]:
    """
    Validate a graph and return a list of issues.

    Checks for:
    - Isolated nodes (no arcs) - WARNING
    - Invalid arc references (begin/end doesn't exist) - ERROR
    - Self-loops - INFO
    - Parallel arcs (same begin->end) - INFO
    - Empty graph - INFO

    Args:
        snapshot: The graph to validate

    Returns:
        List of ValidationIssue objects
    """
    issues: list[ValidationIssue] = []

    node_ids = set(snapshot.node_ids)

    if not snapshot.nodes:
        issues.append(ValidationIssue(
            severity=IssueSeverity.INFO,
            message="Graph has no nodes"
        ))
        return issues

    touched: set[str] = set()
    for arc in snapshot.arcs:
        touched.add(arc.begin)
        touched.add(arc.end)

    isolated = [node for node in snapshot.nodes if node.id not in touched]
    if isolated:
        labels = ", ".join(f"{node.label or node.id} ({node.id})" for node in isolated)
        issues.append(ValidationIssue(
            severity=IssueSeverity.WARNING,
            message=f"Isolated nodes (no arcs): {labels}"
        ))

    for arc in snapshot.arcs:
        if arc.begin not in node_ids:
            issues.append(ValidationIssue(
                severity=IssueSeverity.ERROR,
                message=f"Arc references non-existent begin node: {arc.begin}",
                arc_id=arc.id
            ))
        if arc.end not in node_ids:
            issues.append(ValidationIssue(
                severity=IssueSeverity.ERROR,
                message=f"Arc references non-existent end node: {arc.end}",
                arc_id=arc.id
            ))

    for arc in snapshot.arcs:
        if arc.is_loop:
            issues.append(ValidationIssue(
                severity=IssueSeverity.INFO,
                message="Self-loop (node connects to itself)",
                arc_id=arc.id,
                node_id=arc.begin
            ))

    seen_pairs: set[tuple[str, str]] = set()
    for arc in snapshot.arcs:
        pair = (arc.begin, arc.end)
        if pair in seen_pairs:
            issues.append(ValidationIssue(
                severity=IssueSeverity.INFO,
                message=f"Parallel arc from {arc.begin} to {arc.end} (key {arc.key})",
                arc_id=arc.id
            ))
        else:
            seen_pairs.add(pair)

    return issues


def validation_summary(issues: list[ValidationIssue]) -> dict:
    """
    Create a summary of validation issues.

    Args:
        issues: List of validation issues

    Returns:
        Dictionary with counts by severity
    """
    errors = len([i for i in issues if i.severity == IssueSeverity.ERROR])
    return {
        "total": len(issues),
        "errors": errors,
        "warnings": len([i for i in issues if i.severity == IssueSeverity.WARNING]),
        "info": len([i for i in issues if i.severity == IssueSeverity.INFO]),
        "valid": errors == 0
    }
