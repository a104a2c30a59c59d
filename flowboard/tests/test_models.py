"""Tests for graph and config models."""

import pytest
from pydantic import ValidationError

from flowboard.models.graph import Edge, GraphSnapshot, Node, Position
from flowboard.models.kinds import NodeKind, NodeStatus
from flowboard.models.node_config import (
    AIConfig,
    CloudConfig,
    DBConfig,
    GenericConfig,
    UploadConfig,
    default_config,
    patch_config,
)


class TestNode:
    """Test Node construction and invariants."""

    def test_defaults(self):
        """A new node is idle, unselected and gets the config for its kind."""
        node = Node(id="node_1", kind="upload", label="Upload File", icon="📂")
        assert node.status == NodeStatus.idle
        assert node.selected is False
        assert isinstance(node.config, UploadConfig)
        assert node.config.filename is None

    def test_unknown_kind_becomes_generic(self):
        """Kinds outside the closed set run as generic nodes."""
        node = Node(id="node_1", kind="teleporter")
        assert node.kind == NodeKind.generic
        assert isinstance(node.config, GenericConfig)

    def test_missing_kind_becomes_generic(self):
        node = Node(id="node_1", kind=None)
        assert node.kind == NodeKind.generic

    def test_label_and_icon_are_frozen(self):
        """Display metadata cannot change after creation."""
        node = Node(id="node_1", kind="start", label="Start", icon="▶️")
        with pytest.raises(ValidationError):
            node.label = "Renamed"
        with pytest.raises(ValidationError):
            node.icon = "x"

    def test_status_is_validated(self):
        node = Node(id="node_1", kind="start")
        node.status = "running"
        assert node.status == NodeStatus.running
        with pytest.raises(ValidationError):
            node.status = "exploded"

    def test_config_from_json(self):
        """A serialized node restores its config variant."""
        node = Node(id="node_1", kind="ai")
        node.config = patch_config(node.config, {"prompt": "hi"})
        restored = Node.model_validate_json(node.model_dump_json(by_alias=True))
        assert isinstance(restored.config, AIConfig)
        assert restored.config.prompt == "hi"


class TestNodeConfig:
    """Test tagged config variants and shallow merging."""

    def test_default_config_per_kind(self):
        assert isinstance(default_config(NodeKind.db), DBConfig)
        assert default_config(NodeKind.db).operation == "read"
        assert isinstance(default_config("cloud"), CloudConfig)

    def test_patch_merges_without_dropping_keys(self):
        """Keys not in the patch keep their values."""
        config = patch_config(default_config(NodeKind.db), {"table": "users"})
        config = patch_config(config, {"operation": "write"})
        assert config.table == "users"
        assert config.operation == "write"

    def test_patch_accepts_wire_aliases(self):
        """camelCase keys from widgets map onto snake_case fields."""
        config = patch_config(default_config(NodeKind.cloud), {"functionName": "resize"})
        assert config.function_name == "resize"
        config = patch_config(config, {"lastMsg": "done", "lastResult": {"n": 1}})
        assert config.last_msg == "done"
        assert config.last_result == {"n": 1}

    def test_patch_keeps_unknown_keys(self):
        """Extra keys are stored, the mapping stays open."""
        config = patch_config(default_config(NodeKind.check), {"threshold": 3})
        assert config.model_dump()["threshold"] == 3

    def test_patch_cannot_change_kind(self):
        config = patch_config(default_config(NodeKind.ai), {"kind": "db", "prompt": "p"})
        assert isinstance(config, AIConfig)
        assert config.kind == "ai"

    def test_patch_rejects_invalid_values(self):
        with pytest.raises(ValidationError):
            patch_config(default_config(NodeKind.db), {"table": {"name": "users"}})

    def test_choice_fields_accept_values_outside_the_widget(self):
        """Script names and db operations are free text, not a closed set."""
        config = patch_config(default_config(NodeKind.script), {"script": "custom_job"})
        assert config.script == "custom_job"
        config = patch_config(default_config(NodeKind.db), {"operation": "truncate"})
        assert config.operation == "truncate"

    def test_dump_uses_wire_aliases(self):
        config = patch_config(default_config(NodeKind.start), {"last_msg": "Start"})
        assert config.model_dump(by_alias=True)["lastMsg"] == "Start"


class TestGraphSnapshot:
    """Test snapshot copies."""

    def test_deep_copy_is_independent(self):
        """Mutating the original never shows through a deep copy."""
        node = Node(id="node_1", kind="start", position=Position(x=1, y=2))
        snap = GraphSnapshot(nodes=[node], edges=[]).model_copy(deep=True)
        node.position = Position(x=50, y=50)
        assert snap.nodes[0].position == Position(x=1, y=2)

    def test_edge_defaults(self):
        edge = Edge(id="edge_1", source="node_1", target="node_2")
        assert edge.animated is True
        assert edge.style == {"stroke": "#4f9eed", "strokeWidth": 2}

    def test_edge_handles_accept_aliases(self):
        edge = Edge.model_validate(
            {"id": "e", "source": "a", "target": "b", "sourceHandle": "r-src"}
        )
        assert edge.source_handle == "r-src"
