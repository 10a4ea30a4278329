"""Tool call tracing and aggregate call metrics."""

from __future__ import annotations

import uuid
from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone

from santuri_mcp.types import ToolTrace


@dataclass(slots=True)
class TraceRecord:
    trace_id: str
    timestamp_utc: str
    tool: str
    arguments: dict[str, object]
    output_preview: str
    latency_ms: float
    is_error: bool


class TraceStore:
    """Bounded in-memory trace storage for server-level observability.

    Register `record` as the tool registry observer; the oldest records are
    dropped once `capacity` is reached.
    """

    def __init__(self, *, capacity: int = 1000) -> None:
        self._records: deque[TraceRecord] = deque(maxlen=capacity)

    def record(self, trace: ToolTrace) -> TraceRecord:
        record = TraceRecord(
            trace_id=str(uuid.uuid4()),
            timestamp_utc=datetime.now(timezone.utc).isoformat(),
            tool=trace.name,
            arguments=dict(trace.input_payload),
            output_preview=trace.output_preview,
            latency_ms=trace.latency_ms,
            is_error=trace.is_error,
        )
        self._records.append(record)
        return record

    def get(self, trace_id: str) -> TraceRecord:
        for record in self._records:
            if record.trace_id == trace_id:
                return record
        raise KeyError(f"Trace not found: {trace_id}")

    def list_recent(self, limit: int = 20) -> list[TraceRecord]:
        if limit <= 0:
            return []
        return list(self._records)[-limit:]

    def summary(self) -> dict[str, float | int | dict[str, int]]:
        """Aggregate call counts and latency for dashboard display."""
        records = list(self._records)
        total = len(records)
        if total == 0:
            return {
                "total_calls": 0,
                "error_calls": 0,
                "avg_latency_ms": 0.0,
                "p95_latency_ms": 0.0,
                "calls_by_tool": {},
            }

        latencies = sorted(record.latency_ms for record in records)
        p95_index = max(0, int((len(latencies) * 0.95) - 1))
        calls_by_tool: dict[str, int] = {}
        for record in records:
            calls_by_tool[record.tool] = calls_by_tool.get(record.tool, 0) + 1

        return {
            "total_calls": total,
            "error_calls": sum(1 for record in records if record.is_error),
            "avg_latency_ms": sum(latencies) / total,
            "p95_latency_ms": latencies[p95_index],
            "calls_by_tool": calls_by_tool,
        }
