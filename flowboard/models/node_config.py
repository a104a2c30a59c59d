"""Per-kind node configuration models.

Each node kind carries only the fields its runner or widget needs. Every
variant shares the output wrapper (lastMsg / lastResult) that the node's
output box renders after a run. Unknown keys are kept so a widget can stash
extra values through update-config.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from flowboard.models.kinds import NodeKind


class BaseNodeConfig(BaseModel):
    """Fields common to every node config."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    last_msg: str | None = Field(default=None, alias="lastMsg")
    last_result: Any = Field(default=None, alias="lastResult")


class StartConfig(BaseNodeConfig):
    kind: Literal["start"] = "start"


class UploadConfig(BaseNodeConfig):
    kind: Literal["upload"] = "upload"
    filename: str | None = None  # set by the upload topic handler


class ScriptConfig(BaseNodeConfig):
    kind: Literal["script"] = "script"
    # recorded for the widget; the runner always performs the presence check
    script: str = "check_csv_present"  # widget offers check_csv_present, regen_model


class AIConfig(BaseNodeConfig):
    kind: Literal["ai"] = "ai"
    prompt: str = ""


class AnalysisConfig(BaseNodeConfig):
    kind: Literal["analysis"] = "analysis"
    question: str = ""


class CheckConfig(BaseNodeConfig):
    kind: Literal["check"] = "check"


class CloudConfig(BaseNodeConfig):
    kind: Literal["cloud"] = "cloud"
    function_name: str = Field(default="", alias="functionName")


class NLPConfig(BaseNodeConfig):
    kind: Literal["nlp"] = "nlp"
    text: str = ""


class DBConfig(BaseNodeConfig):
    kind: Literal["db"] = "db"
    operation: str = "read"  # widget offers read, write, update, delete
    table: str = ""


class EditableConfig(BaseNodeConfig):
    kind: Literal["editable"] = "editable"
    content: str = ""


class GenericConfig(BaseNodeConfig):
    kind: Literal["generic"] = "generic"


NodeConfig = Annotated[
    Union[
        StartConfig,
        UploadConfig,
        ScriptConfig,
        AIConfig,
        AnalysisConfig,
        CheckConfig,
        CloudConfig,
        NLPConfig,
        DBConfig,
        EditableConfig,
        GenericConfig,
    ],
    Field(discriminator="kind"),
]

_node_config_adapter: TypeAdapter = TypeAdapter(NodeConfig)


def default_config(kind: NodeKind) -> BaseNodeConfig:
    """Build the empty config variant for a node kind."""
    return _node_config_adapter.validate_python({"kind": NodeKind(kind).value})


def patch_config(config: BaseNodeConfig, patch: dict[str, Any]) -> BaseNodeConfig:
    """Shallow-merge a partial mapping into a config, keeping its variant.

    Keys may use either the wire alias (``lastMsg``) or the field name
    (``last_msg``). A ``kind`` key in the patch is ignored.
    """
    merged = config.model_dump(by_alias=True)
    for key, value in patch.items():
        if key == "kind":
            continue
        field = type(config).model_fields.get(key)
        merged[field.alias if field and field.alias else key] = value
    return type(config).model_validate(merged)
