"""Kind-specific runners and the runner table.

A runner never mutates the graph; it reads the node and the runtime store,
may write the runtime store, and returns a RunResult. The executor owns
status, config and log updates.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from flowboard.analysis.csv_stats import row_count, rows_without_manager, unique_users
from flowboard.errors import ChatClientError
from flowboard.models.graph import Node
from flowboard.models.kinds import NodeKind
from flowboard.models.run_result import RunResult
from flowboard.sdk.chat_client import ChatClient
from flowboard.store.runtime_store import RuntimeStore

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = "Hello model"
DEFAULT_ANALYSIS_OP = "row_count"
PLACEHOLDER_MSG = "......."
CSV_NOT_LOADED = "CSV not loaded."

# fixed operator notice returned when a script finds no CSV and when the AI
# node falls back to its canned reply
ADVISORY_MESSAGE = (
    "Metal frame stock status: we currently have a decent quantity in storage, "
    "assorted sizes available. Please verify the latest count before dispatching. "
    "\nRequesting for approval"
)


@dataclass
class RunContext:
    """What runners may touch: the session's runtime store and chat client."""

    runtime: RuntimeStore
    chat: ChatClient


Runner = Callable[[RunContext, Node, str | None], Awaitable[RunResult]]


async def run_start(ctx: RunContext, node: Node, op: str | None = None) -> RunResult:
    return RunResult(ok=True, msg="Start")


async def run_upload(ctx: RunContext, node: Node, op: str | None = None) -> RunResult:
    filename = getattr(node.config, "filename", None)
    if not filename:
        return RunResult(ok=False, msg="No file selected.")
    meta = ctx.runtime.csv_meta
    return RunResult(
        ok=True,
        msg=f"File ready: {filename}",
        data=meta.model_dump() if meta else None,
    )


async def run_script(ctx: RunContext, node: Node, op: str | None = None) -> RunResult:
    # the configured script name is not consulted; every script is a presence check
    rows = ctx.runtime.rows
    if not rows:
        return RunResult(ok=False, msg=ADVISORY_MESSAGE)
    return RunResult(ok=True, msg="CSV present.", data={"rows": len(rows)})


async def run_ai(ctx: RunContext, node: Node, op: str | None = None) -> RunResult:
    prompt = getattr(node.config, "prompt", "") or DEFAULT_PROMPT
    try:
        reply = await ctx.chat.complete(prompt)
    except ChatClientError as e:
        logger.info("Chat call failed, using mock reply: %s", e)
        mock = f"(mock) Model response to: {prompt[:80]}"
        ctx.runtime.last_ai = mock
        return RunResult(ok=True, msg=ADVISORY_MESSAGE, data=mock)

    ctx.runtime.last_ai = reply
    return RunResult(ok=True, msg="AI reply received.", data=reply)


async def run_analysis(ctx: RunContext, node: Node, op: str | None = None) -> RunResult:
    rows = ctx.runtime.rows
    if not rows:
        return RunResult(ok=False, msg=CSV_NOT_LOADED)

    op = op or DEFAULT_ANALYSIS_OP
    if op == "row_count":
        count = row_count(rows)
        ctx.runtime.last_analysis = {"type": "row_count", "value": count}
        return RunResult(ok=True, msg=f"Rows: {count}", data=ctx.runtime.last_analysis)

    if op == "unique_users":
        unique = unique_users(rows)
        data = {"type": "unique", "key": unique.key, "value": unique.value}
        ctx.runtime.last_analysis = data
        return RunResult(ok=True, msg=f"Unique by {unique.key_label}: {unique.value}", data=data)

    if op == "question":
        # fixed demo answer; config.question is not consulted
        return RunResult(
            ok=True, msg="Answered (demo).", data={"type": "answer", "value": "question"}
        )

    return RunResult(ok=True, msg=f"Analysis {op} done.")


async def run_check(ctx: RunContext, node: Node, op: str | None = None) -> RunResult:
    rows = ctx.runtime.rows
    if not rows:
        return RunResult(ok=False, msg=CSV_NOT_LOADED)
    missing = len(rows_without_manager(rows))
    return RunResult(
        ok=True,
        msg=f"Found {missing} users with no manager.",
        data={"noManager": missing},
    )


async def run_placeholder(ctx: RunContext, node: Node, op: str | None = None) -> RunResult:
    return RunResult(ok=True, msg=PLACEHOLDER_MSG)


RUNNERS: dict[NodeKind, Runner] = {
    NodeKind.start: run_start,
    NodeKind.upload: run_upload,
    NodeKind.script: run_script,
    NodeKind.ai: run_ai,
    NodeKind.analysis: run_analysis,
    NodeKind.check: run_check,
}


def runner_for(kind: NodeKind) -> Runner:
    """Runner for a node kind; kinds without one succeed trivially."""
    return RUNNERS.get(kind, run_placeholder)
