"""Authoritative node and edge lists for one session.

All mutations are synchronous and visible to the next read. The canvas writes
positions, selection and sizes back through the change appliers; the engine
writes status and config.
"""

import logging
from collections.abc import Iterable
from typing import Any

from flowboard.errors import NodeNotFoundError
from flowboard.models.graph import Edge, GraphSnapshot, Node, Position
from flowboard.models.kinds import NodeKind, NodeStatus
from flowboard.models.node_config import patch_config

logger = logging.getLogger(__name__)


class GraphStore:
    """Holds the live graph and the mutation surface used by the engine."""

    def __init__(self) -> None:
        self.nodes: list[Node] = []
        self.edges: list[Edge] = []

    # lookups

    def get_node(self, node_id: str) -> Node | None:
        """Look up a node by id, or None if it is not in the graph."""
        return next((n for n in self.nodes if n.id == node_id), None)

    def require_node(self, node_id: str) -> Node:
        node = self.get_node(node_id)
        if node is None:
            raise NodeNotFoundError(node_id)
        return node

    def find_by_kind(self, kind: NodeKind) -> Node | None:
        """First node of the given kind, in insertion order."""
        return next((n for n in self.nodes if n.kind == kind), None)

    def outgoing(self, node_id: str) -> list[str]:
        """Target ids of edges leaving a node, in edge insertion order."""
        return [e.target for e in self.edges if e.source == node_id]

    def selected_ids(self) -> tuple[set[str], set[str]]:
        """Ids of the selected nodes and selected edges."""
        return (
            {n.id for n in self.nodes if n.selected},
            {e.id for e in self.edges if e.selected},
        )

    # mutations

    def add_node(self, node: Node) -> Node:
        self.nodes.append(node)
        return node

    def add_edge(self, edge: Edge) -> Edge:
        self.edges.append(edge)
        return edge

    def remove(
        self,
        node_ids: Iterable[str] = (),
        edge_ids: Iterable[str] = (),
    ) -> None:
        """Remove nodes and edges by id; edges touching a removed node go too."""
        node_ids = set(node_ids)
        edge_ids = set(edge_ids)
        self.edges = [
            e
            for e in self.edges
            if e.id not in edge_ids
            and e.source not in node_ids
            and e.target not in node_ids
        ]
        self.nodes = [n for n in self.nodes if n.id not in node_ids]

    def patch_config(self, node_id: str, patch: dict[str, Any]) -> Node:
        """Shallow-merge a partial mapping into a node's config."""
        node = self.require_node(node_id)
        node.config = patch_config(node.config, patch)
        return node

    def set_status(self, node_id: str, status: NodeStatus) -> Node:
        node = self.require_node(node_id)
        node.status = status
        return node

    # canvas change descriptors

    def apply_node_changes(self, changes: Iterable[dict[str, Any]]) -> None:
        """Apply node change descriptors sent by the canvas.

        Supported types: position, select, dimensions, remove.
        """
        removed: set[str] = set()
        for change in changes:
            change_type = change.get("type")
            node_id = change.get("id")
            if change_type == "remove":
                removed.add(node_id)
                continue
            node = self.get_node(node_id)
            if node is None:
                logger.debug("Ignoring %s change for unknown node %s", change_type, node_id)
                continue
            if change_type == "position":
                if change.get("position") is not None:
                    node.position = Position.model_validate(change["position"])
            elif change_type == "select":
                node.selected = bool(change.get("selected"))
            elif change_type == "dimensions":
                dims = change.get("dimensions") or {}
                node.width = dims.get("width", node.width)
                node.height = dims.get("height", node.height)
            else:
                logger.debug("Unsupported node change type: %s", change_type)
        if removed:
            self.remove(node_ids=removed)

    def apply_edge_changes(self, changes: Iterable[dict[str, Any]]) -> None:
        """Apply edge change descriptors sent by the canvas (select, remove)."""
        removed: set[str] = set()
        for change in changes:
            change_type = change.get("type")
            if change_type == "remove":
                removed.add(change.get("id"))
            elif change_type == "select":
                for edge in self.edges:
                    if edge.id == change.get("id"):
                        edge.selected = bool(change.get("selected"))
            else:
                logger.debug("Unsupported edge change type: %s", change_type)
        if removed:
            self.remove(edge_ids=removed)

    # snapshots

    def snapshot(self) -> GraphSnapshot:
        """Deep copy of the live graph."""
        return GraphSnapshot(nodes=self.nodes, edges=self.edges).model_copy(deep=True)

    def restore(self, snapshot: GraphSnapshot) -> None:
        """Replace the live graph wholesale with a copy of a snapshot."""
        copy = snapshot.model_copy(deep=True)
        self.nodes = copy.nodes
        self.edges = copy.edges
