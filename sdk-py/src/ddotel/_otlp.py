"""Adapter from OTLP protobuf spans to SpanData."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import grpc
from opentelemetry.proto.trace.v1.trace_pb2 import Span as OtlpSpan
from opentelemetry.proto.trace.v1.trace_pb2 import Status as OtlpStatus

from ddotel._types import AttributeValue, KeyValue, SpanData, SpanKind

if TYPE_CHECKING:
    from opentelemetry.proto.collector.trace.v1.trace_service_pb2 import (
        ExportTraceServiceRequest,
    )
    from opentelemetry.proto.common.v1.common_pb2 import AnyValue

logger = logging.getLogger("ddotel.otlp")

_KIND_MAP: dict[int, SpanKind] = {
    OtlpSpan.SPAN_KIND_INTERNAL: SpanKind.INTERNAL,
    OtlpSpan.SPAN_KIND_SERVER: SpanKind.SERVER,
    OtlpSpan.SPAN_KIND_CLIENT: SpanKind.CLIENT,
    OtlpSpan.SPAN_KIND_PRODUCER: SpanKind.PRODUCER,
    OtlpSpan.SPAN_KIND_CONSUMER: SpanKind.CONSUMER,
}


def _id_from_bytes(raw: bytes) -> int:
    """Decode a big-endian protobuf id; missing ids decode to 0."""
    return int.from_bytes(raw, "big") if raw else 0


def _from_any_value(av: AnyValue) -> AttributeValue:
    """Convert an OTLP AnyValue. Bytes and key/value lists are not supported."""
    which = av.WhichOneof("value")
    if which == "string_value":
        return AttributeValue.string(av.string_value)
    if which == "bool_value":
        return AttributeValue.bool(av.bool_value)
    if which == "int_value":
        return AttributeValue.int64(av.int_value)
    if which == "double_value":
        return AttributeValue.float64(av.double_value)
    if which == "array_value":
        return AttributeValue.array(
            [_from_any_value(v).value for v in av.array_value.values]
        )
    if which is not None:
        logger.debug("Unsupported OTLP value kind %s", which)
    return AttributeValue.invalid()


def _status_code(status: OtlpStatus) -> int:
    if status.code == OtlpStatus.STATUS_CODE_ERROR:
        return grpc.StatusCode.UNKNOWN.value[0]  # type: ignore[no-any-return]
    return grpc.StatusCode.OK.value[0]  # type: ignore[no-any-return]


def from_otlp_span(span: OtlpSpan) -> SpanData:
    """Convert a single OTLP Span protobuf to SpanData."""
    return SpanData(
        trace_id=_id_from_bytes(span.trace_id),
        span_id=_id_from_bytes(span.span_id),
        parent_span_id=_id_from_bytes(span.parent_span_id),
        name=span.name,
        kind=_KIND_MAP.get(span.kind, SpanKind.INTERNAL),
        start_time_ns=span.start_time_unix_nano,
        end_time_ns=span.end_time_unix_nano,
        status_code=_status_code(span.status),
        status_message=span.status.message,
        attributes=tuple(
            KeyValue(kv.key, _from_any_value(kv.value)) for kv in span.attributes
        ),
    )


def spans_from_export_request(request: ExportTraceServiceRequest) -> list[SpanData]:
    """Flatten every span of an ExportTraceServiceRequest, in request order."""
    return [
        from_otlp_span(span)
        for resource_spans in request.resource_spans
        for scope_spans in resource_spans.scope_spans
        for span in scope_spans.spans
    ]
