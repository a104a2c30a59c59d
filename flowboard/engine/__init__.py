"""Node execution: the runner table and the chain-walking engine."""

from flowboard.engine.executor import ExecutionEngine
from flowboard.engine.runners import (
    ADVISORY_MESSAGE,
    RUNNERS,
    RunContext,
    Runner,
    runner_for,
)

__all__ = [
    "ADVISORY_MESSAGE",
    "ExecutionEngine",
    "RUNNERS",
    "RunContext",
    "Runner",
    "runner_for",
]
