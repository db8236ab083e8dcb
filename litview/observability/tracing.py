"""Minimal tracing primitives.

Render calls emit one JSON line per event so a log shipper can pick them up
without an OpenTelemetry dependency. Output is switched on with
``LITVIEW_TRACE_EVENTS=1``.
"""

from __future__ import annotations

import json
import time
import uuid
from dataclasses import dataclass, field
from typing import Any

from litview.config import settings


@dataclass
class Span:
    name: str
    trace_id: str
    span_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    start_ns: int = field(default_factory=time.time_ns)
    end_ns: int | None = None
    attributes: dict[str, Any] = field(default_factory=dict)

    def end(self) -> None:
        self.end_ns = time.time_ns()

    @property
    def duration_ms(self) -> float | None:
        if self.end_ns is None:
            return None
        return (self.end_ns - self.start_ns) / 1_000_000.0


def new_trace_id() -> str:
    return uuid.uuid4().hex


def format_event(event: str, *, trace_id: str, span: Span | None = None, **fields: Any) -> str:
    payload: dict[str, Any] = {'event': event, 'trace_id': trace_id, **fields}
    if span is not None:
        payload['span'] = {
            'name': span.name,
            'span_id': span.span_id,
            'duration_ms': span.duration_ms,
            'attributes': span.attributes,
        }
    return json.dumps(payload, ensure_ascii=False, default=str)


def log_event(event: str, *, trace_id: str, span: Span | None = None, **fields: Any) -> None:
    if not settings.trace_events:
        return
    print(format_event(event, trace_id=trace_id, span=span, **fields))
