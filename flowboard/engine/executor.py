"""Execution engine: runs nodes and walks chains of nodes.

A chain walk runs a node, then follows only the first outgoing edge (in edge
insertion order) of each successful node. Branching graphs therefore execute
a single path. The walk stops at the first failed node, at a node with no
outgoing edge, when the cancel token is set, or after max_steps nodes.

No method here raises for a bad node id or a failing runner; failures are
reported as RunResult(ok=False).
"""

import asyncio
import logging

from flowboard.adapters.sinks import RunRecorder
from flowboard.engine.runners import RunContext, runner_for
from flowboard.models.kinds import NodeKind, NodeStatus
from flowboard.models.run_result import RunResult
from flowboard.store.graph_store import GraphStore
from flowboard.store.output_log import OutputLog

logger = logging.getLogger(__name__)

NODE_NOT_FOUND = "Node not found."
DEFAULT_MAX_STEPS = 1000


class ExecutionEngine:
    """Dispatches nodes to their runners and records the outcome."""

    def __init__(
        self,
        graph: GraphStore,
        context: RunContext,
        log: OutputLog,
        recorder: RunRecorder | None = None,
        max_steps: int = DEFAULT_MAX_STEPS,
    ) -> None:
        self.graph = graph
        self.context = context
        self.log = log
        self.recorder = recorder
        self.max_steps = max_steps

    async def run_node(self, node_id: str, op_override: str | None = None) -> RunResult:
        """Run one node and record status, output and a log line."""
        node = self.graph.get_node(node_id)
        if node is None:
            return RunResult(ok=False, msg=NODE_NOT_FOUND)

        node.status = NodeStatus.running
        runner = runner_for(node.kind)
        try:
            result = await runner(self.context, node, op_override)
        except Exception as e:
            logger.exception("Runner for %s (%s) failed", node.id, node.kind.value)
            result = RunResult(ok=False, msg=str(e) or "Error")

        # the node may have been deleted or replaced by undo while awaiting
        live = self.graph.get_node(node_id)
        if live is not None:
            live.status = NodeStatus.success if result.ok else NodeStatus.error
            self.graph.patch_config(
                node_id, {"lastMsg": result.msg, "lastResult": result.data}
            )
        self.log.append(f"{node.label or node.id}: {result.msg}")

        if self.recorder is not None:
            self.recorder.record(
                node_id=node.id,
                kind=node.kind.value,
                label=node.label,
                ok=result.ok,
                msg=result.msg,
                data=result.data,
                op=op_override,
            )
        return result

    async def run_chain(
        self,
        node_id: str | None,
        cancel: asyncio.Event | None = None,
    ) -> list[RunResult]:
        """Run a node and keep following its first outgoing edge."""
        results: list[RunResult] = []
        next_id = node_id
        while next_id is not None:
            if cancel is not None and cancel.is_set():
                logger.info("Chain cancelled before %s", next_id)
                break
            if results and self.graph.get_node(next_id) is None:
                # dangling edge: the target was deleted after the edge was drawn
                break
            if len(results) >= self.max_steps:
                logger.warning("Chain stopped after %d steps at %s", self.max_steps, next_id)
                break

            result = await self.run_node(next_id)
            results.append(result)
            if not result.ok:
                break
            next_id = self._first_target(next_id)
        return results

    async def run_analysis(
        self,
        node_id: str,
        op: str,
        cancel: asyncio.Event | None = None,
    ) -> list[RunResult]:
        """Run an analysis node with an explicit op, then chain onwards."""
        result = await self.run_node(node_id, op)
        if not result.ok:
            return [result]
        return [result] + await self.run_chain(self._first_target(node_id), cancel)

    async def run_from_start(self, cancel: asyncio.Event | None = None) -> list[RunResult]:
        """Chain from the start node, if the graph has one."""
        start = self.graph.find_by_kind(NodeKind.start)
        if start is None:
            logger.info("No start node in graph; nothing to run")
            return []
        return await self.run_chain(start.id, cancel)

    def _first_target(self, node_id: str) -> str | None:
        targets = self.graph.outgoing(node_id)
        return targets[0] if targets else None
