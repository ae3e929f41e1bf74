"""
Core data models for graphs.

These models define the canonical schema the engine works on:
- Nodes identified by a stable `id` (equality never looks at the label)
- Arcs connecting two node ids, directed or not, with a `key` telling
  parallel arcs apart
- Paths as plain tuples of node ids

Field Naming Convention:
- Arcs use `begin` and `end` for their endpoints
- For convenience, `source`/`target` and `from`/`to` are accepted on input
  and converted
"""

from typing import Any
from pydantic import BaseModel, ConfigDict, Field, model_validator
import uuid


# A walk through the graph as an ordered sequence of node ids.
Path = tuple[str, ...]


def generate_node_id() -> str:
    """Generate a unique node ID."""
    return f"n{uuid.uuid4().hex[:8]}"


def generate_arc_id() -> str:
    """Generate a unique arc ID."""
    return f"a{uuid.uuid4().hex[:8]}"


def _convert_endpoint_aliases(data: Any) -> Any:
    if isinstance(data, dict):
        for alias in ("source", "from"):
            if alias in data and "begin" not in data:
                data["begin"] = data.pop(alias)
        for alias in ("target", "to"):
            if alias in data and "end" not in data:
                data["end"] = data.pop(alias)
    return data


class Node(BaseModel):
    """A node in the graph. Two nodes are equal when their ids are."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=generate_node_id)
    label: str = ""

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Node):
            return self.id == other.id
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.id)


class Arc(BaseModel):
    """
    An arc connecting two nodes.

    Undirected arcs can be walked in both directions. Parallel arcs share
    `begin`/`end` and differ in `id` and `key`; the store assigns `key`
    when the arc is added.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=generate_arc_id)
    begin: str  # Begin node ID
    end: str    # End node ID
    directed: bool = True
    key: int = 0

    @model_validator(mode='before')
    @classmethod
    def convert_legacy_fields(cls, data: Any) -> Any:
        """Convert 'source'/'target' and 'from'/'to' to 'begin'/'end'."""
        return _convert_endpoint_aliases(data)

    @property
    def is_loop(self) -> bool:
        return self.begin == self.end

    def connects(self, begin: str, end: str) -> bool:
        """Match by endpoints only, ignoring id and key."""
        return self.begin == begin and self.end == end

    def to_json_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "id": self.id,
            "begin": self.begin,
            "end": self.end,
            "directed": self.directed,
            "key": self.key,
        }


# --- API Request Models ---

class CreateNodeRequest(BaseModel):
    """Request to create a new node."""
    id: str | None = None
    label: str = ""


class CreateArcRequest(BaseModel):
    """Request to create a new arc."""
    begin: str
    end: str
    directed: bool = True

    @model_validator(mode='before')
    @classmethod
    def convert_legacy_fields(cls, data: Any) -> Any:
        """Convert 'source'/'target' and 'from'/'to' to 'begin'/'end'."""
        return _convert_endpoint_aliases(data)
