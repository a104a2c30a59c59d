"""Typed messages carried by the event bus.

Each topic has exactly one message type, so a subscriber always knows the
payload shape it receives.
"""

from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field


class Topic(str, Enum):
    """Event bus topics, named after the intents node widgets emit."""

    upload = "upload"
    update_config = "update-config"
    run_from_start = "run-from-start"
    run_node = "run-node"
    analysis = "analysis"


class BusMessage(BaseModel):
    """Base class for bus messages."""

    model_config = ConfigDict(
        populate_by_name=True, arbitrary_types_allowed=True, frozen=True
    )

    topic: ClassVar[Topic]

    @property
    def key(self) -> tuple[str, str | None]:
        """Serialization key: one in-flight handler per topic and node."""
        return (self.topic.value, getattr(self, "node_id", None))


class UploadMessage(BusMessage):
    topic: ClassVar[Topic] = Topic.upload

    node_id: str = Field(alias="nodeId")
    file: Any  # a FileHandle; see flowboard.adapters.files


class UpdateConfigMessage(BusMessage):
    topic: ClassVar[Topic] = Topic.update_config

    node_id: str = Field(alias="nodeId")
    patch: dict[str, Any] = Field(default_factory=dict)


class RunFromStartMessage(BusMessage):
    topic: ClassVar[Topic] = Topic.run_from_start


class RunNodeMessage(BusMessage):
    topic: ClassVar[Topic] = Topic.run_node

    node_id: str = Field(alias="nodeId")


class AnalysisMessage(BusMessage):
    topic: ClassVar[Topic] = Topic.analysis

    node_id: str = Field(alias="nodeId")
    op: str = "row_count"
