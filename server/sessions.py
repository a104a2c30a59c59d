"""In-memory registry of live sessions.

Sessions are not persisted; restarting the server drops every graph.
"""

from flowboard.config import Settings, load_settings
from flowboard.session import Session

_sessions: dict[str, Session] = {}


def create_session(settings: Settings | None = None) -> Session:
    session = Session(settings=settings or load_settings())
    _sessions[session.session_id] = session
    return session


def get_session(session_id: str) -> Session | None:
    return _sessions.get(session_id)


def list_sessions() -> list[Session]:
    return list(_sessions.values())


def delete_session(session_id: str) -> None:
    _sessions.pop(session_id, None)


def clear_sessions() -> None:
    _sessions.clear()
