"""Graph models: nodes, edges and snapshots of the whole graph.

The graph is what the canvas renders and what undo/redo rolls back.
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from flowboard.models.kinds import NodeKind, NodeStatus
from flowboard.models.node_config import NodeConfig, default_config

EDGE_STYLE = {"stroke": "#4f9eed", "strokeWidth": 2}


class Position(BaseModel):
    """A point in graph space."""

    x: float = 0.0
    y: float = 0.0


class Node(BaseModel):
    """A typed unit of work in the graph."""

    model_config = {"validate_assignment": True}

    id: str = Field(frozen=True)
    kind: NodeKind = Field(default=NodeKind.generic, frozen=True)
    label: str = Field(default="Node", frozen=True)
    icon: str = Field(default="🧩", frozen=True)
    position: Position = Field(default_factory=Position)
    status: NodeStatus = NodeStatus.idle
    config: NodeConfig | None = None
    selected: bool = False

    # reported by the canvas when the node is resized
    width: float | None = None
    height: float | None = None

    @field_validator("kind", mode="before")
    @classmethod
    def coerce_kind(cls, value: Any) -> Any:
        if not value:
            return NodeKind.generic
        return NodeKind(value)

    @model_validator(mode="after")
    def fill_config(self):
        """Give every node the config variant matching its kind."""
        if self.config is None or self.config.kind != self.kind.value:
            # bypass validate_assignment, which would re-enter this validator
            object.__setattr__(self, "config", default_config(self.kind))
        return self


class Edge(BaseModel):
    """A directed connection defining execution order between two nodes."""

    id: str
    source: str
    target: str
    source_handle: str | None = Field(default=None, alias="sourceHandle")
    target_handle: str | None = Field(default=None, alias="targetHandle")
    animated: bool = True
    style: dict[str, Any] = Field(default_factory=lambda: dict(EDGE_STYLE))
    selected: bool = False

    model_config = {"populate_by_name": True}


class GraphSnapshot(BaseModel):
    """A deep, independent copy of the node and edge lists."""

    nodes: list[Node] = Field(default_factory=list)
    edges: list[Edge] = Field(default_factory=list)
