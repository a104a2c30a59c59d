"""The session: one user's graph, history, runtime cache and output log.

Everything that would otherwise be process-wide state (id counters, uploaded
CSV rows, the last AI reply, the output log) lives on a Session. A session
lasts as long as its owner keeps it; nothing is persisted.

Usage:
    session = Session()
    start = session.canvas.add_node("Start", "▶️", "start")
    session.callbacks_for(start.id).on_run_from_start()
    await session.bus.drain()
"""

import logging
import random
from pathlib import Path

from flowboard.adapters.event_bus import EventBus, NodeCallbacks
from flowboard.adapters.sinks import FileSink, ListSink, RunRecorder, RunSink
from flowboard.config import Settings, load_settings
from flowboard.engine.executor import ExecutionEngine
from flowboard.engine.runners import RunContext
from flowboard.models.kinds import NodeStatus
from flowboard.models.messages import (
    AnalysisMessage,
    RunFromStartMessage,
    RunNodeMessage,
    Topic,
    UpdateConfigMessage,
    UploadMessage,
)
from flowboard.models.run_result import CsvMeta
from flowboard.sdk.canvas import Canvas
from flowboard.sdk.chat_client import ChatClient
from flowboard.store.graph_store import GraphStore
from flowboard.store.history import HistoryManager
from flowboard.store.output_log import OutputLog
from flowboard.store.runtime_store import RuntimeStore
from flowboard.utils.csv_parser import parse_csv
from flowboard.utils.identifiers import IdGenerator, generate_session_id

logger = logging.getLogger(__name__)


class Session:
    """Explicit context object handed to the engine, runners and bus handlers."""

    def __init__(
        self,
        settings: Settings | None = None,
        session_id: str | None = None,
        chat: ChatClient | None = None,
        sink: RunSink | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.settings = settings or load_settings()
        self.session_id = session_id or generate_session_id()

        self.graph = GraphStore()
        self.history = HistoryManager(self.graph.snapshot, self.graph.restore)
        self.runtime = RuntimeStore()
        self.log = OutputLog(capacity=self.settings.log_capacity)
        self.canvas = Canvas(
            self.graph,
            self.history,
            node_ids=IdGenerator("node"),
            edge_ids=IdGenerator("edge"),
            rng=rng,
        )

        self.sink = sink or self._default_sink()
        self.engine = ExecutionEngine(
            self.graph,
            RunContext(
                runtime=self.runtime,
                chat=chat
                or ChatClient(self.settings.chat_url, timeout=self.settings.chat_timeout),
            ),
            self.log,
            recorder=RunRecorder(self.session_id, self.sink),
            max_steps=self.settings.max_chain_steps,
        )

        self.bus = EventBus()
        self.bus.subscribe(Topic.upload, self.handle_upload)
        self.bus.subscribe(Topic.update_config, self.handle_update_config)
        self.bus.subscribe(Topic.run_from_start, self.handle_run_from_start)
        self.bus.subscribe(Topic.run_node, self.handle_run_node)
        self.bus.subscribe(Topic.analysis, self.handle_analysis)

    def _default_sink(self) -> RunSink:
        if self.settings.run_log_dir:
            return FileSink(Path(self.settings.run_log_dir) / self.session_id / "runs.jsonl")
        return ListSink()

    def callbacks_for(self, node_id: str) -> NodeCallbacks:
        """The callback bundle a node widget uses to talk to the engine."""
        return NodeCallbacks(node_id=node_id, bus=self.bus)

    # bus handlers

    async def handle_upload(self, message: UploadMessage) -> None:
        """Read and parse an uploaded CSV, then mark the upload node ready."""
        file = message.file
        text = await file.read_text()
        rows = parse_csv(text)
        self.runtime.csv = rows
        self.runtime.csv_meta = CsvMeta(name=file.name, size=file.size)

        if self.graph.get_node(message.node_id) is not None:
            self.graph.patch_config(message.node_id, {"filename": file.name})
            self.graph.set_status(message.node_id, NodeStatus.success)
        else:
            logger.warning("Upload for unknown node %s", message.node_id)
        self.log.append(f"Upload: {file.name} ({len(rows)} rows)")

    def handle_update_config(self, message: UpdateConfigMessage) -> None:
        if self.graph.get_node(message.node_id) is None:
            logger.warning("Config update for unknown node %s", message.node_id)
            return
        self.graph.patch_config(message.node_id, message.patch)

    async def handle_run_from_start(self, message: RunFromStartMessage) -> None:
        await self.engine.run_from_start()

    async def handle_run_node(self, message: RunNodeMessage) -> None:
        await self.engine.run_chain(message.node_id)

    async def handle_analysis(self, message: AnalysisMessage) -> None:
        await self.engine.run_analysis(message.node_id, message.op)

    def __repr__(self) -> str:
        return (
            f"Session(session_id={self.session_id!r}, nodes={len(self.graph.nodes)}, "
            f"edges={len(self.graph.edges)})"
        )
