"""Tests for the OpenTelemetry SDK span adapter."""

from __future__ import annotations

import pytest
from opentelemetry import trace as trace_api
from opentelemetry.sdk.trace import ReadableSpan, TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import (
    InMemorySpanExporter,
)
from opentelemetry.trace import SpanContext, TraceFlags
from opentelemetry.trace import SpanKind as OTelSpanKind
from opentelemetry.trace.status import Status
from opentelemetry.trace.status import StatusCode as OTelStatusCode

from ddotel._otel import from_readable_span, otel_status_to_code
from ddotel._types import AttributeValue, KeyValue, SpanKind, ValueType


@pytest.fixture
def finished() -> InMemorySpanExporter:
    return InMemorySpanExporter()


@pytest.fixture
def tracer(finished: InMemorySpanExporter) -> trace_api.Tracer:
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(finished))
    return provider.get_tracer("ddotel-tests")


def test_status_mapping() -> None:
    assert otel_status_to_code(OTelStatusCode.UNSET) == 0
    assert otel_status_to_code(OTelStatusCode.OK) == 0
    assert otel_status_to_code(OTelStatusCode.ERROR) == 2


def test_root_span(tracer: trace_api.Tracer, finished: InMemorySpanExporter) -> None:
    span = tracer.start_span("/a/b", kind=OTelSpanKind.CLIENT, start_time=1_000)
    span.set_attribute("str", "abc")
    span.set_attribute("bool", True)
    span.set_attribute("int", 1)
    span.set_attribute("float", 2.5)
    span.set_attribute("list", ["x", "y"])
    span.end(end_time=5_000)

    (readable,) = finished.get_finished_spans()
    sd = from_readable_span(readable)
    ctx = readable.get_span_context()
    assert sd.trace_id == ctx.trace_id
    assert sd.span_id == ctx.span_id
    assert sd.parent_span_id == 0
    assert not sd.has_parent
    assert sd.name == "/a/b"
    assert sd.kind is SpanKind.CLIENT
    assert sd.start_time_ns == 1_000
    assert sd.end_time_ns == 5_000
    assert sd.status_code == 0
    assert sd.status_message == ""
    assert sd.attributes == (
        KeyValue("str", AttributeValue.string("abc")),
        KeyValue("bool", AttributeValue.bool(True)),
        KeyValue("int", AttributeValue.int64(1)),
        KeyValue("float", AttributeValue.float64(2.5)),
        KeyValue("list", AttributeValue.array(("x", "y"))),
    )


def test_child_span(tracer: trace_api.Tracer, finished: InMemorySpanExporter) -> None:
    with tracer.start_as_current_span("parent") as parent:
        with tracer.start_as_current_span("child", kind=OTelSpanKind.SERVER):
            pass

    child = next(s for s in finished.get_finished_spans() if s.name == "child")
    sd = from_readable_span(child)
    assert sd.parent_span_id == parent.get_span_context().span_id
    assert sd.has_parent
    assert sd.kind is SpanKind.SERVER


def test_error_status(tracer: trace_api.Tracer, finished: InMemorySpanExporter) -> None:
    span = tracer.start_span("failing")
    span.set_status(Status(OTelStatusCode.ERROR, "boom"))
    span.end()

    sd = from_readable_span(finished.get_finished_spans()[0])
    assert sd.status_code == 2
    assert sd.status_message == "boom"
    assert sd.kind is SpanKind.INTERNAL


def test_invalid_parent_is_root() -> None:
    ctx = SpanContext(
        trace_id=0x0102030405060708090A0B0C0D0E0F10,
        span_id=0x0102030405060708,
        is_remote=False,
        trace_flags=TraceFlags(TraceFlags.SAMPLED),
    )
    readable = ReadableSpan(
        name="orphan",
        context=ctx,
        parent=trace_api.INVALID_SPAN_CONTEXT,
        kind=OTelSpanKind.PRODUCER,
        start_time=10,
        end_time=20,
    )
    sd = from_readable_span(readable)
    assert sd.parent_span_id == 0
    assert sd.kind is SpanKind.PRODUCER
    assert sd.attributes == ()


def test_unfinished_span_has_zero_duration() -> None:
    ctx = SpanContext(trace_id=1, span_id=2, is_remote=False)
    readable = ReadableSpan(name="open", context=ctx, start_time=10)
    sd = from_readable_span(readable)
    assert sd.end_time_ns == sd.start_time_ns == 10


def test_attribute_types_are_inferred() -> None:
    ctx = SpanContext(trace_id=1, span_id=2, is_remote=False)
    readable = ReadableSpan(
        name="typed",
        context=ctx,
        attributes={"ratio": 0.5, "flags": (True, False)},
        start_time=0,
        end_time=1,
    )
    types = {kv.key: kv.value.type for kv in from_readable_span(readable).attributes}
    assert types == {"ratio": ValueType.FLOAT64, "flags": ValueType.ARRAY}
