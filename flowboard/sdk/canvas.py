"""Contract between the core and the graph-rendering collaborator.

The renderer owns drawing, pan/zoom and drag layout. It reads ``nodes`` and
``edges`` from the canvas and reports user gestures through four callbacks:
on_nodes_change, on_edges_change, on_connect and on_drop. Structural edits
(add, drop, connect, delete, drag end) each record one history commit.
"""

import json
import logging
import random
from collections.abc import Callable, Iterable
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from flowboard.errors import DropPayloadError
from flowboard.models.graph import Edge, Node, Position
from flowboard.models.kinds import NodeKind
from flowboard.store.graph_store import GraphStore
from flowboard.store.history import HistoryManager
from flowboard.utils.identifiers import IdGenerator

logger = logging.getLogger(__name__)

# MIME name under which toolbar items carry their payload during a drag
DRAG_MIME_TYPE = "application/reactflow"

Projection = Callable[[Position], Position]


def identity_projection(point: Position) -> Position:
    return point


class DragPayload(BaseModel):
    """What a toolbar item carries: enough to create a node."""

    label: str = "Node"
    icon: str = "🧩"
    kind: NodeKind = NodeKind.generic


class Connection(BaseModel):
    """A canonical source/target pair reported when the user wires two nodes."""

    model_config = {"populate_by_name": True}

    source: str
    target: str
    source_handle: str | None = Field(default=None, alias="sourceHandle")
    target_handle: str | None = Field(default=None, alias="targetHandle")


class DropEvent(BaseModel):
    """A drop gesture: the drag data by MIME name plus screen coordinates."""

    model_config = {"populate_by_name": True}

    data: dict[str, str] = Field(default_factory=dict)
    client_x: float = Field(alias="clientX")
    client_y: float = Field(alias="clientY")


class Canvas:
    """Graph editing operations driven by the renderer and the toolbar."""

    def __init__(
        self,
        graph: GraphStore,
        history: HistoryManager,
        node_ids: IdGenerator | None = None,
        edge_ids: IdGenerator | None = None,
        rng: random.Random | None = None,
        project: Projection = identity_projection,
        origin: tuple[float, float] = (0.0, 0.0),
    ) -> None:
        self.graph = graph
        self.history = history
        self.node_ids = node_ids or IdGenerator("node")
        self.edge_ids = edge_ids or IdGenerator("edge")
        self.rng = rng or random.Random()
        self.project = project
        self.origin = origin  # top-left corner of the renderer's wrapper element

    @property
    def nodes(self) -> list[Node]:
        return self.graph.nodes

    @property
    def edges(self) -> list[Edge]:
        return self.graph.edges

    def add_node(
        self,
        label: str,
        icon: str,
        kind: NodeKind | str,
        position: Position | None = None,
    ) -> Node:
        """Create a node (toolbar click), at a random spot unless placed."""
        if position is None:
            position = Position(
                x=120 + self.rng.random() * 400,
                y=100 + self.rng.random() * 300,
            )
        node = Node(
            id=self.node_ids(),
            kind=kind,
            label=label,
            icon=icon,
            position=position,
        )
        self.graph.add_node(node)
        self.history.commit()
        return node

    def on_drop(self, event: DropEvent | dict[str, Any]) -> Node | None:
        """Create a node from a toolbar item dropped onto the canvas."""
        if not isinstance(event, DropEvent):
            event = DropEvent.model_validate(event)
        raw = event.data.get(DRAG_MIME_TYPE)
        if not raw:
            return None

        try:
            payload = DragPayload.model_validate(json.loads(raw))
        except (ValueError, ValidationError) as e:
            raise DropPayloadError(f"Invalid drag payload: {e}") from e

        left, top = self.origin
        position = self.project(Position(x=event.client_x - left, y=event.client_y - top))
        return self.add_node(payload.label, payload.icon, payload.kind, position=position)

    def on_connect(self, connection: Connection | dict[str, Any]) -> Edge:
        """Add a directed edge between two nodes.

        Raises:
            NodeNotFoundError: if either end is not in the graph; nothing is
                added or committed.
        """
        if not isinstance(connection, Connection):
            connection = Connection.model_validate(connection)
        self.graph.require_node(connection.source)
        self.graph.require_node(connection.target)
        edge = Edge(
            id=self.edge_ids(),
            source=connection.source,
            target=connection.target,
            source_handle=connection.source_handle,
            target_handle=connection.target_handle,
        )
        self.graph.add_edge(edge)
        self.history.commit()
        return edge

    def on_nodes_change(self, changes: Iterable[dict[str, Any]]) -> None:
        """Apply node changes; a finished drag records one history commit."""
        changes = list(changes)
        self.graph.apply_node_changes(changes)
        if any(c.get("type") == "position" and c.get("dragging") is False for c in changes):
            self.history.commit()

    def on_edges_change(self, changes: Iterable[dict[str, Any]]) -> None:
        self.graph.apply_edge_changes(changes)

    def delete_selected(self) -> bool:
        """Delete selected nodes and edges, plus every edge touching a deleted node."""
        node_ids, edge_ids = self.graph.selected_ids()
        if not node_ids and not edge_ids:
            return False
        self.graph.remove(node_ids=node_ids, edge_ids=edge_ids)
        self.history.commit()
        logger.debug("Deleted %d nodes and %d edges", len(node_ids), len(edge_ids))
        return True

    def undo(self) -> bool:
        return self.history.undo()

    def redo(self) -> bool:
        return self.history.redo()
