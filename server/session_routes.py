"""API routes for editing and running a session's graph."""

from typing import Any

from fastapi import APIRouter, File, HTTPException, UploadFile
from pydantic import BaseModel, ValidationError

from flowboard.adapters.files import InMemoryFile
from flowboard.adapters.sinks import ListSink
from flowboard.errors import DropPayloadError
from flowboard.models.graph import Edge, Node, Position
from flowboard.models.kinds import NodeKind
from flowboard.models.messages import RunFromStartMessage
from flowboard.models.node_config import patch_config
from flowboard.models.run_result import RunRecord
from flowboard.sdk.canvas import Connection, DropEvent
from flowboard.sdk.keyboard import KeyEvent, handle_key
from flowboard.session import Session
from server.sessions import (
    create_session as registry_create_session,
    delete_session as registry_delete_session,
    get_session as registry_get_session,
    list_sessions as registry_list_sessions,
)

router = APIRouter()


class SessionInfo(BaseModel):
    """summary of a live session."""

    session_id: str
    node_count: int
    edge_count: int


class GraphState(BaseModel):
    """what the canvas needs to render a session."""

    session_id: str
    nodes: list[Node]
    edges: list[Edge]
    can_undo: bool
    can_redo: bool


class AddNodeRequest(BaseModel):
    """request body for a toolbar click."""

    label: str = "Node"
    icon: str = "🧩"
    kind: NodeKind = NodeKind.generic
    position: Position | None = None


class ChangesRequest(BaseModel):
    """change descriptors reported by the canvas."""

    changes: list[dict[str, Any]]


class AnalysisRequest(BaseModel):
    op: str = "row_count"


class RunResponse(BaseModel):
    """graph state after a run plus the tail of the output log."""

    graph: GraphState
    log: list[str]


def _session(session_id: str) -> Session:
    session = registry_get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Session not found: {session_id}")
    return session


def _require_node(session: Session, node_id: str) -> None:
    if session.graph.get_node(node_id) is None:
        raise HTTPException(status_code=404, detail=f"Node not found: {node_id}")


def _graph_state(session: Session) -> GraphState:
    return GraphState(
        session_id=session.session_id,
        nodes=session.graph.nodes,
        edges=session.graph.edges,
        can_undo=session.history.can_undo,
        can_redo=session.history.can_redo,
    )


async def _settle(session: Session) -> RunResponse:
    """Wait for every bus handler the request triggered, then report."""
    await session.bus.drain()
    return RunResponse(graph=_graph_state(session), log=session.log.lines)


# sessions

@router.post("/sessions")
def create_session() -> SessionInfo:
    """start a new, empty session."""
    session = registry_create_session()
    return SessionInfo(session_id=session.session_id, node_count=0, edge_count=0)


@router.get("/sessions")
def list_sessions() -> list[SessionInfo]:
    return [
        SessionInfo(
            session_id=s.session_id,
            node_count=len(s.graph.nodes),
            edge_count=len(s.graph.edges),
        )
        for s in registry_list_sessions()
    ]


@router.get("/sessions/{session_id}")
def get_graph(session_id: str) -> GraphState:
    return _graph_state(_session(session_id))


@router.delete("/sessions/{session_id}")
def delete_session(session_id: str) -> dict:
    _session(session_id)
    registry_delete_session(session_id)
    return {"deleted": session_id}


# graph editing

@router.post("/sessions/{session_id}/nodes")
def add_node(session_id: str, request: AddNodeRequest) -> Node:
    """create a node from a toolbar item."""
    session = _session(session_id)
    return session.canvas.add_node(
        request.label, request.icon, request.kind, position=request.position
    )


@router.post("/sessions/{session_id}/drop")
def drop_node(session_id: str, event: DropEvent) -> Node | None:
    """create a node from a toolbar item dropped on the canvas."""
    session = _session(session_id)
    try:
        return session.canvas.on_drop(event)
    except DropPayloadError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/sessions/{session_id}/connect")
def connect(session_id: str, connection: Connection) -> Edge:
    session = _session(session_id)
    _require_node(session, connection.source)
    _require_node(session, connection.target)
    return session.canvas.on_connect(connection)


@router.post("/sessions/{session_id}/node-changes")
def node_changes(session_id: str, request: ChangesRequest) -> GraphState:
    session = _session(session_id)
    try:
        session.canvas.on_nodes_change(request.changes)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors())
    return _graph_state(session)


@router.post("/sessions/{session_id}/edge-changes")
def edge_changes(session_id: str, request: ChangesRequest) -> GraphState:
    session = _session(session_id)
    session.canvas.on_edges_change(request.changes)
    return _graph_state(session)


@router.post("/sessions/{session_id}/delete-selection")
def delete_selection(session_id: str) -> GraphState:
    session = _session(session_id)
    session.canvas.delete_selected()
    return _graph_state(session)


@router.post("/sessions/{session_id}/undo")
def undo(session_id: str) -> GraphState:
    session = _session(session_id)
    session.canvas.undo()
    return _graph_state(session)


@router.post("/sessions/{session_id}/redo")
def redo(session_id: str) -> GraphState:
    session = _session(session_id)
    session.canvas.redo()
    return _graph_state(session)


@router.post("/sessions/{session_id}/keys")
def key_down(session_id: str, event: KeyEvent) -> dict:
    """apply a keyboard shortcut forwarded by the UI."""
    session = _session(session_id)
    action = handle_key(session.canvas, event)
    return {
        "action": action,
        "graph": _graph_state(session).model_dump(mode="json", by_alias=True),
    }


# node intents (published on the session's event bus)

@router.patch("/sessions/{session_id}/nodes/{node_id}/config")
async def update_config(session_id: str, node_id: str, patch: dict[str, Any]) -> Node:
    """shallow-merge a partial config into a node."""
    session = _session(session_id)
    _require_node(session, node_id)
    try:
        # reject bad values here; the bus handler would only log them
        patch_config(session.graph.get_node(node_id).config, patch)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors())
    session.callbacks_for(node_id).on_config_change(patch)
    await session.bus.drain()
    return session.graph.get_node(node_id)


@router.post("/sessions/{session_id}/nodes/{node_id}/upload")
async def upload(session_id: str, node_id: str, file: UploadFile = File(...)) -> RunResponse:
    """attach a CSV file to an upload node."""
    session = _session(session_id)
    _require_node(session, node_id)
    content = await file.read()
    session.callbacks_for(node_id).on_upload(
        InMemoryFile(file.filename or "upload.csv", content)
    )
    return await _settle(session)


@router.post("/sessions/{session_id}/run")
async def run_from_start(session_id: str) -> RunResponse:
    """run the chain that begins at the start node."""
    session = _session(session_id)
    session.bus.publish(RunFromStartMessage())
    return await _settle(session)


@router.post("/sessions/{session_id}/nodes/{node_id}/run")
async def run_node(session_id: str, node_id: str) -> RunResponse:
    """run a node and the chain that follows it."""
    session = _session(session_id)
    _require_node(session, node_id)
    session.callbacks_for(node_id).on_run()
    return await _settle(session)


@router.post("/sessions/{session_id}/nodes/{node_id}/analysis")
async def run_analysis(session_id: str, node_id: str, request: AnalysisRequest) -> RunResponse:
    """run an analysis node with an explicit operation, then continue the chain."""
    session = _session(session_id)
    _require_node(session, node_id)
    session.callbacks_for(node_id).on_analysis(request.op)
    return await _settle(session)


# output

@router.get("/sessions/{session_id}/log")
def get_log(session_id: str) -> list[str]:
    return _session(session_id).log.lines


@router.get("/sessions/{session_id}/runs")
def get_runs(session_id: str) -> list[RunRecord]:
    """structured records of every node run in this session."""
    session = _session(session_id)
    if not isinstance(session.sink, ListSink):
        raise HTTPException(
            status_code=409,
            detail="Run records are written to disk for this session",
        )
    return session.sink.records


@router.get("/sessions/{session_id}/runtime")
def get_runtime(session_id: str) -> dict:
    """what the runners have cached so far."""
    runtime = _session(session_id).runtime
    return {
        "rows": len(runtime.rows),
        "csv_meta": runtime.csv_meta.model_dump() if runtime.csv_meta else None,
        "last_ai": runtime.last_ai,
        "last_analysis": runtime.last_analysis,
    }
