"""Tests for _types module."""

from __future__ import annotations

import pytest

from ddotel._types import (
    AttributeValue,
    DDSpan,
    KeyValue,
    SpanData,
    SpanKind,
    ValueType,
)


def test_span_kind_values() -> None:
    assert SpanKind.INTERNAL.value == "internal"
    assert SpanKind.CLIENT.value == "client"
    assert SpanKind.SERVER.value == "server"


class TestAttributeValueOf:
    def test_bool_is_not_int(self) -> None:
        """bool is a subclass of int; it must stay a bool."""
        assert AttributeValue.of(True) == AttributeValue.bool(True)
        assert AttributeValue.of(1) == AttributeValue.int64(1)

    def test_large_int_is_unsigned(self) -> None:
        assert AttributeValue.of(2**63).type is ValueType.UINT64

    def test_out_of_range_int_is_invalid(self) -> None:
        assert AttributeValue.of(2**64).type is ValueType.INVALID
        assert AttributeValue.of(-(2**63) - 1).type is ValueType.INVALID

    def test_float(self) -> None:
        assert AttributeValue.of(1.5) == AttributeValue.float64(1.5)

    def test_string(self) -> None:
        assert AttributeValue.of("x") == AttributeValue.string("x")

    def test_sequences(self) -> None:
        assert AttributeValue.of(["a", "b"]) == AttributeValue.array(("a", "b"))
        assert AttributeValue.of((1, 2)).type is ValueType.ARRAY

    def test_unsupported(self) -> None:
        assert AttributeValue.of(None).type is ValueType.INVALID
        assert AttributeValue.of({"a": 1}).type is ValueType.INVALID


def test_float32_rounds() -> None:
    v = AttributeValue.float32(0.1)
    assert v.type is ValueType.FLOAT32
    assert v.value == pytest.approx(0.1)
    assert v.value != 0.1


def test_str_rendering() -> None:
    assert str(AttributeValue.array([1, 2])) == "[1, 2]"
    assert str(AttributeValue.bool(False)) == "false"
    assert str(AttributeValue.int32(3)) == "3"
    assert str(AttributeValue.invalid()) == ""


def test_key_value_of() -> None:
    kv = KeyValue.of("k", "v")
    assert kv.key == "k"
    assert kv.value == AttributeValue.string("v")


def test_span_data_defaults() -> None:
    sd = SpanData(
        trace_id=1,
        span_id=2,
        name="test-span",
        kind=SpanKind.INTERNAL,
        start_time_ns=1000,
        end_time_ns=2000,
    )
    assert sd.parent_span_id == 0
    assert not sd.has_parent
    assert sd.status_code == 0
    assert sd.status_message == ""
    assert sd.attributes == ()


def test_span_data_is_frozen() -> None:
    sd = SpanData(
        trace_id=1,
        span_id=2,
        name="x",
        kind=SpanKind.SERVER,
        start_time_ns=0,
        end_time_ns=1,
        parent_span_id=3,
    )
    assert sd.has_parent
    with pytest.raises(AttributeError):
        sd.name = "changed"  # type: ignore[misc]


def test_dd_span_to_dict() -> None:
    span = DDSpan(
        trace_id=1,
        span_id=2,
        parent_id=3,
        name="opentelemetry",
        resource="/a",
        service="svc",
        type="web",
        start=10,
        duration=5,
        error=1,
        metrics={"m": 1.0},
        meta={"k": "v"},
    )
    d = span.to_dict()
    assert d == {
        "trace_id": 1,
        "span_id": 2,
        "parent_id": 3,
        "name": "opentelemetry",
        "resource": "/a",
        "service": "svc",
        "type": "web",
        "start": 10,
        "duration": 5,
        "error": 1,
        "meta": {"k": "v"},
        "metrics": {"m": 1.0},
    }
    d["meta"]["k"] = "changed"
    assert span.meta["k"] == "v"


def test_dd_span_default_containers() -> None:
    a = DDSpan()
    b = DDSpan()
    assert a.meta == {} and a.metrics == {}
    assert a.meta is not b.meta
