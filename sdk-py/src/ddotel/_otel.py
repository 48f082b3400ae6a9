"""Adapter from OpenTelemetry SDK spans to SpanData."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import grpc
from opentelemetry.trace import SpanKind as OTelSpanKind
from opentelemetry.trace import StatusCode as OTelStatusCode

from ddotel._types import KeyValue, SpanData, SpanKind, ValueType

if TYPE_CHECKING:
    from opentelemetry.sdk.trace import ReadableSpan

logger = logging.getLogger("ddotel.otel")

_KIND_MAP: dict[OTelSpanKind, SpanKind] = {
    OTelSpanKind.INTERNAL: SpanKind.INTERNAL,
    OTelSpanKind.SERVER: SpanKind.SERVER,
    OTelSpanKind.CLIENT: SpanKind.CLIENT,
    OTelSpanKind.PRODUCER: SpanKind.PRODUCER,
    OTelSpanKind.CONSUMER: SpanKind.CONSUMER,
}


def otel_status_to_code(status_code: OTelStatusCode) -> int:
    """Map an OpenTelemetry status to the gRPC code space.

    OpenTelemetry only distinguishes success from failure; failures are
    reported as UNKNOWN.
    """
    if status_code == OTelStatusCode.ERROR:
        return grpc.StatusCode.UNKNOWN.value[0]  # type: ignore[no-any-return]
    return grpc.StatusCode.OK.value[0]  # type: ignore[no-any-return]


def from_readable_span(span: ReadableSpan) -> SpanData:
    """Snapshot a finished OpenTelemetry SDK span as SpanData."""
    ctx = span.get_span_context()
    parent = span.parent
    parent_span_id = parent.span_id if parent is not None and parent.is_valid else 0

    attributes: list[KeyValue] = []
    for key, value in (span.attributes or {}).items():
        kv = KeyValue.of(key, value)
        if kv.value.type is ValueType.INVALID:
            logger.debug("Unsupported value for attribute %r: %r", key, value)
        attributes.append(kv)

    start = span.start_time or 0
    end = span.end_time if span.end_time is not None else start
    status = span.status
    return SpanData(
        trace_id=ctx.trace_id if ctx is not None else 0,
        span_id=ctx.span_id if ctx is not None else 0,
        parent_span_id=parent_span_id,
        name=span.name,
        kind=_KIND_MAP.get(span.kind, SpanKind.INTERNAL),
        start_time_ns=start,
        end_time_ns=end,
        status_code=otel_status_to_code(status.status_code),
        status_message=status.description or "",
        attributes=tuple(attributes),
    )
