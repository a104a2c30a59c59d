"""Run record sinks for execution tracing."""

from pathlib import Path
from typing import Protocol

from flowboard.models.run_result import RunRecord
from flowboard.utils.identifiers import generate_record_id, utc_timestamp


class RunSink(Protocol):
    """Protocol for receiving run records."""

    def append(self, record: RunRecord) -> None:
        """Append a record to the sink."""
        ...


class ListSink:
    """stores records in a list."""

    def __init__(self) -> None:
        self.records: list[RunRecord] = []

    def append(self, record: RunRecord) -> None:
        self.records.append(record)

    def clear(self) -> None:
        self.records.clear()


class FileSink:
    """writes records to a JSONL file."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def append(self, record: RunRecord) -> None:
        with open(self.path, "a") as f:
            f.write(record.model_dump_json() + "\n")


class RunRecorder:
    """Stamps run results into RunRecords and hands them to a sink."""

    def __init__(self, session_id: str, sink: RunSink) -> None:
        self.session_id = session_id
        self.sink = sink
        self._sequence = 0

    def _next_sequence(self) -> int:
        seq = self._sequence
        self._sequence += 1
        return seq

    def record(
        self,
        node_id: str,
        kind: str,
        label: str,
        ok: bool,
        msg: str,
        data=None,
        op: str | None = None,
    ) -> RunRecord:
        record = RunRecord(
            record_id=generate_record_id(),
            session_id=self.session_id,
            timestamp=utc_timestamp(),
            sequence=self._next_sequence(),
            node_id=node_id,
            kind=kind,
            label=label,
            op=op,
            ok=ok,
            msg=msg,
            data=data,
        )
        self.sink.append(record)
        return record
