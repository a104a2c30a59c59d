"""Tests for undo/redo history."""

from flowboard.models.graph import Edge, Node
from flowboard.store.graph_store import GraphStore
from flowboard.store.history import HistoryManager


def build() -> tuple[GraphStore, HistoryManager]:
    store = GraphStore()
    return store, HistoryManager(store.snapshot, store.restore)


def node_ids(store: GraphStore) -> list[str]:
    return [n.id for n in store.nodes]


class TestHistory:
    """Test commit, undo and redo."""

    def test_initial_state(self):
        """History starts with the empty graph and nothing to redo."""
        _, history = build()
        assert len(history.history) == 1
        assert history.history[0].nodes == []
        assert history.can_undo is False
        assert history.can_redo is False

    def test_undo_with_nothing_committed_is_noop(self):
        store, history = build()
        assert history.undo() is False
        assert len(history.history) == 1
        assert node_ids(store) == []

    def test_redo_with_empty_future_is_noop(self):
        store, history = build()
        store.add_node(Node(id="node_1", kind="start"))
        history.commit()
        assert history.redo() is False
        assert node_ids(store) == ["node_1"]

    def test_undo_restores_previous_commit(self):
        store, history = build()
        store.add_node(Node(id="node_1", kind="start"))
        history.commit()
        store.add_node(Node(id="node_2", kind="upload"))
        history.commit()

        assert history.undo() is True
        assert node_ids(store) == ["node_1"]
        assert history.undo() is True
        assert node_ids(store) == []
        assert history.undo() is False

    def test_n_undos_then_n_redos_restores_graph(self):
        store, history = build()
        for i in range(1, 4):
            store.add_node(Node(id=f"node_{i}", kind="generic"))
            history.commit()
        store.add_edge(Edge(id="edge_1", source="node_1", target="node_2"))
        history.commit()
        before = store.snapshot()

        for _ in range(3):
            history.undo()
        for _ in range(3):
            history.redo()

        assert store.snapshot() == before

    def test_commit_clears_future(self):
        """A new edit after undo discards the redo stack."""
        store, history = build()
        store.add_node(Node(id="node_1", kind="start"))
        history.commit()
        history.undo()
        assert history.can_redo is True

        store.add_node(Node(id="node_2", kind="ai"))
        history.commit()
        assert history.can_redo is False
        assert history.redo() is False

    def test_snapshots_are_isolated_from_live_graph(self):
        store, history = build()
        store.add_node(Node(id="node_1", kind="start"))
        history.commit()
        store.nodes[0].selected = True
        assert history.history[-1].nodes[0].selected is False

    def test_undo_rolls_back_status(self):
        """Status written after a commit is not part of that commit."""
        store, history = build()
        store.add_node(Node(id="node_1", kind="start"))
        history.commit()
        store.add_node(Node(id="node_2", kind="start"))
        history.commit()
        store.nodes[0].status = "success"
        history.undo()
        assert store.nodes[0].status == "idle"

    def test_undo_after_redos_steps_over_redone_states(self):
        """Redo records the state it leaves, and the next undo discards that record.

        After two undos and two redos the history top is the state before the
        last redo, and one undo from the newest graph skips back past it.
        """
        store, history = build()
        store.add_node(Node(id="node_1", kind="start"))
        history.commit()
        store.add_node(Node(id="node_2", kind="upload"))
        history.commit()

        history.undo()
        history.undo()
        history.redo()
        history.redo()
        assert node_ids(store) == ["node_1", "node_2"]

        history.undo()
        assert node_ids(store) == []
