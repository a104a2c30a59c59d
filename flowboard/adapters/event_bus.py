"""Typed publish/subscribe channel between node widgets and the engine.

Delivery is fire-and-forget and at-most-once: handlers registered for a
topic are invoked in subscription order at publish time, nothing is queued
for late subscribers, and nothing is persisted.

Plain function handlers run inline. Coroutine handlers are scheduled as
tasks on the running loop; tasks sharing a message key (topic + node id) run
one after another, so two uploads to the same node cannot interleave their
writes to the runtime store.
"""

import asyncio
import inspect
import logging
from collections import defaultdict
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from flowboard.models.messages import (
    AnalysisMessage,
    BusMessage,
    RunFromStartMessage,
    RunNodeMessage,
    Topic,
    UpdateConfigMessage,
    UploadMessage,
)

logger = logging.getLogger(__name__)

Handler = Callable[[BusMessage], Awaitable[None] | None]


class EventBus:
    """Process-local message channel keyed by topic."""

    def __init__(self) -> None:
        self._subscribers: dict[Topic, list[Handler]] = defaultdict(list)
        self._locks: dict[tuple[str, str | None], asyncio.Lock] = {}
        self._pending: set[asyncio.Task] = set()
        self._keys: dict[asyncio.Task, tuple[str, str | None]] = {}

    def subscribe(self, topic: Topic, handler: Handler) -> Callable[[], None]:
        """Register a handler for a topic. Returns an unsubscribe callable."""
        topic = Topic(topic)
        self._subscribers[topic].append(handler)

        def unsubscribe() -> None:
            if handler in self._subscribers[topic]:
                self._subscribers[topic].remove(handler)

        return unsubscribe

    def subscribers(self, topic: Topic) -> list[Handler]:
        return list(self._subscribers.get(Topic(topic), ()))

    def publish(self, message: BusMessage) -> list[asyncio.Task]:
        """Deliver a message to the current subscribers of its topic.

        Coroutine handlers need a running event loop. Returns the tasks that
        were scheduled so callers may await them if they wish.
        """
        tasks: list[asyncio.Task] = []
        for handler in self.subscribers(message.topic):
            if inspect.iscoroutinefunction(handler):
                tasks.append(self._spawn(handler, message))
                continue
            try:
                handler(message)
            except Exception:
                logger.exception("Handler for %s failed", message.topic.value)
        return tasks

    async def drain(self) -> None:
        """Wait until every scheduled handler task has finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def _lock_for(self, key: tuple[str, str | None]) -> asyncio.Lock:
        if key not in self._locks:
            self._locks[key] = asyncio.Lock()
        return self._locks[key]

    def _spawn(self, handler: Handler, message: BusMessage) -> asyncio.Task:
        lock = self._lock_for(message.key)

        async def invoke() -> None:
            async with lock:
                await handler(message)

        task = asyncio.get_running_loop().create_task(invoke())
        self._pending.add(task)
        self._keys[task] = message.key
        task.add_done_callback(self._finished)
        return task

    def _release(self, key: tuple[str, str | None]) -> None:
        """Forget a key's lock once no task for that key is left."""
        lock = self._locks.get(key)
        if lock is None or lock.locked():
            return
        if any(k == key for k in self._keys.values()):
            return
        del self._locks[key]

    def _finished(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        self._release(self._keys.pop(task))
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Bus handler task failed: %s", exc, exc_info=exc)


@dataclass
class NodeCallbacks:
    """The callbacks one node widget is handed instead of a global bus.

    Each callback publishes the typed message for its intent.
    """

    node_id: str
    bus: EventBus

    def on_run(self) -> list[asyncio.Task]:
        return self.bus.publish(RunNodeMessage(node_id=self.node_id))

    def on_run_from_start(self) -> list[asyncio.Task]:
        return self.bus.publish(RunFromStartMessage())

    def on_config_change(self, patch: dict[str, Any]) -> list[asyncio.Task]:
        return self.bus.publish(UpdateConfigMessage(node_id=self.node_id, patch=patch))

    def on_upload(self, file: Any) -> list[asyncio.Task]:
        return self.bus.publish(UploadMessage(node_id=self.node_id, file=file))

    def on_analysis(self, op: str) -> list[asyncio.Task]:
        return self.bus.publish(AnalysisMessage(node_id=self.node_id, op=op))
