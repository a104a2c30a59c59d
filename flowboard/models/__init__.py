"""Core data models for flowboard."""

from flowboard.models.graph import Edge, GraphSnapshot, Node, Position
from flowboard.models.kinds import NodeKind, NodeStatus
from flowboard.models.messages import (
    AnalysisMessage,
    BusMessage,
    RunFromStartMessage,
    RunNodeMessage,
    Topic,
    UpdateConfigMessage,
    UploadMessage,
)
from flowboard.models.node_config import (
    BaseNodeConfig,
    NodeConfig,
    default_config,
    patch_config,
)
from flowboard.models.run_result import CsvMeta, RunRecord, RunResult

__all__ = [
    # graph
    "Edge",
    "GraphSnapshot",
    "Node",
    "NodeKind",
    "NodeStatus",
    "Position",
    # node configs
    "BaseNodeConfig",
    "NodeConfig",
    "default_config",
    "patch_config",
    # bus messages
    "AnalysisMessage",
    "BusMessage",
    "RunFromStartMessage",
    "RunNodeMessage",
    "Topic",
    "UpdateConfigMessage",
    "UploadMessage",
    # runs
    "CsvMeta",
    "RunRecord",
    "RunResult",
]
