"""Tests for the event bus and node callbacks."""

import asyncio

import pytest

from flowboard.adapters.event_bus import EventBus, NodeCallbacks
from flowboard.models.messages import (
    AnalysisMessage,
    RunFromStartMessage,
    RunNodeMessage,
    Topic,
    UpdateConfigMessage,
    UploadMessage,
)


class TestSubscriptions:
    """Test synchronous delivery."""

    def test_handlers_run_in_subscription_order(self):
        """Every subscriber of a topic sees the message, first subscribed first."""
        bus = EventBus()
        seen = []
        bus.subscribe(Topic.run_node, lambda m: seen.append(("a", m.node_id)))
        bus.subscribe(Topic.run_node, lambda m: seen.append(("b", m.node_id)))
        bus.publish(RunNodeMessage(node_id="node_1"))
        assert seen == [("a", "node_1"), ("b", "node_1")]

    def test_other_topics_are_not_delivered(self):
        bus = EventBus()
        seen = []
        bus.subscribe(Topic.upload, seen.append)
        bus.publish(RunFromStartMessage())
        assert seen == []

    def test_unsubscribe(self):
        bus = EventBus()
        seen = []
        unsubscribe = bus.subscribe("run-from-start", seen.append)
        unsubscribe()
        unsubscribe()
        bus.publish(RunFromStartMessage())
        assert seen == []
        assert bus.subscribers(Topic.run_from_start) == []

    def test_no_replay_for_late_subscribers(self):
        """Messages published before subscribing are never delivered."""
        bus = EventBus()
        bus.publish(RunFromStartMessage())
        seen = []
        bus.subscribe(Topic.run_from_start, seen.append)
        assert seen == []

    def test_failing_sync_handler_does_not_stop_others(self):
        bus = EventBus()
        seen = []

        def broken(message):
            raise RuntimeError("boom")

        bus.subscribe(Topic.update_config, broken)
        bus.subscribe(Topic.update_config, seen.append)
        bus.publish(UpdateConfigMessage(node_id="node_1", patch={"a": 1}))
        assert len(seen) == 1

    def test_messages_accept_wire_names(self):
        message = UploadMessage.model_validate({"nodeId": "node_2", "file": object()})
        assert message.node_id == "node_2"
        assert message.key == ("upload", "node_2")
        assert RunFromStartMessage().key == ("run-from-start", None)


class TestAsyncHandlers:
    """Test coroutine handlers scheduled as tasks."""

    @pytest.mark.asyncio
    async def test_drain_waits_for_tasks(self):
        bus = EventBus()
        seen = []

        async def handler(message):
            await asyncio.sleep(0)
            seen.append(message.op)

        bus.subscribe(Topic.analysis, handler)
        tasks = bus.publish(AnalysisMessage(node_id="node_1", op="unique_users"))
        assert len(tasks) == 1
        await bus.drain()
        assert seen == ["unique_users"]
        assert bus.pending == 0

    @pytest.mark.asyncio
    async def test_same_node_same_topic_is_serialized(self):
        """Two uploads to one node never interleave."""
        bus = EventBus()
        events = []

        async def handler(message):
            events.append(("begin", message.file))
            await asyncio.sleep(0.01)
            events.append(("end", message.file))

        bus.subscribe(Topic.upload, handler)
        bus.publish(UploadMessage(node_id="node_1", file="first"))
        bus.publish(UploadMessage(node_id="node_1", file="second"))
        await bus.drain()
        assert events == [
            ("begin", "first"),
            ("end", "first"),
            ("begin", "second"),
            ("end", "second"),
        ]

    @pytest.mark.asyncio
    async def test_different_nodes_run_concurrently(self):
        bus = EventBus()
        events = []

        async def handler(message):
            events.append(("begin", message.node_id))
            await asyncio.sleep(0.01)
            events.append(("end", message.node_id))

        bus.subscribe(Topic.upload, handler)
        bus.publish(UploadMessage(node_id="node_1", file="a"))
        bus.publish(UploadMessage(node_id="node_2", file="b"))
        await bus.drain()
        assert events[:2] == [("begin", "node_1"), ("begin", "node_2")]

    @pytest.mark.asyncio
    async def test_failing_task_is_contained(self):
        """A failing handler task does not break drain or later messages."""
        bus = EventBus()
        seen = []

        async def handler(message):
            if message.node_id == "bad":
                raise ValueError("bad node")
            seen.append(message.node_id)

        bus.subscribe(Topic.run_node, handler)
        bus.publish(RunNodeMessage(node_id="bad"))
        bus.publish(RunNodeMessage(node_id="good"))
        await bus.drain()
        assert seen == ["good"]

    @pytest.mark.asyncio
    async def test_locks_are_released_after_drain(self):
        """Finished keys do not leave a lock behind."""
        bus = EventBus()

        async def handler(message):
            await asyncio.sleep(0)

        bus.subscribe(Topic.upload, handler)
        for node_id in ("node_1", "node_1", "node_2"):
            bus.publish(UploadMessage(node_id=node_id, file="f"))
        assert len(bus._locks) == 2
        await bus.drain()
        assert bus._locks == {}

        bus.publish(UploadMessage(node_id="node_1", file="again"))
        await bus.drain()
        assert bus._locks == {}


class TestNodeCallbacks:
    """Test the callback bundle handed to node widgets."""

    def test_each_callback_publishes_its_topic(self):
        bus = EventBus()
        seen = []
        for topic in Topic:
            bus.subscribe(topic, seen.append)

        callbacks = NodeCallbacks(node_id="node_3", bus=bus)
        callbacks.on_run()
        callbacks.on_run_from_start()
        callbacks.on_config_change({"prompt": "hi"})
        callbacks.on_upload("file")
        callbacks.on_analysis("row_count")

        assert [m.topic for m in seen] == [
            Topic.run_node,
            Topic.run_from_start,
            Topic.update_config,
            Topic.upload,
            Topic.analysis,
        ]
        assert seen[2].patch == {"prompt": "hi"}
        assert seen[4].node_id == "node_3"
