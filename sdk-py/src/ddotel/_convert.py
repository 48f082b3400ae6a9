"""Conversion of finished spans into Datadog span records."""

from __future__ import annotations

import logging
from collections.abc import Callable

from ddotel import _ext as ext
from ddotel._config import ConverterConfig
from ddotel._status import status_code_value, translate_status
from ddotel._types import (
    FLOAT_TYPES,
    INTEGER_TYPES,
    AttributeValue,
    DDSpan,
    SpanData,
    SpanKind,
    ValueType,
)

logger = logging.getLogger("ddotel.convert")

_LOW_64 = (1 << 64) - 1


class SpanConverter:
    """Converts SpanData into DDSpan records.

    Holds no per-span state, so one instance may be shared between threads.
    """

    def __init__(self, config: ConverterConfig) -> None:
        self._config = config

    @property
    def config(self) -> ConverterConfig:
        return self._config

    def convert(self, s: SpanData) -> DDSpan:
        """Return a new DDSpan for ``s``. Never raises."""
        span = DDSpan(
            trace_id=s.trace_id & _LOW_64,
            span_id=s.span_id & _LOW_64,
            name=ext.OPERATION_NAME,
            resource=s.name,
            service=self._config.service_name,
            start=s.start_time_ns,
            duration=s.end_time_ns - s.start_time_ns,
        )
        if s.has_parent:
            span.parent_id = s.parent_span_id & _LOW_64

        status_code = status_code_value(s.status_code)
        code = translate_status(status_code)

        if s.kind is SpanKind.CLIENT:
            span.type = "client"
            if code.status // 100 == 4:
                span.error = 1
        else:
            if s.kind is SpanKind.SERVER:
                span.type = "server"
            if code.status // 100 == 5:
                span.error = 1

        if span.error == 1:
            span.meta[ext.ERROR_TYPE] = code.message
            if s.status_message:
                span.meta[ext.ERROR_MSG] = s.status_message

        span.meta[ext.STATUS_CODE] = str(status_code)
        span.meta[ext.STATUS] = code.message
        if s.status_message:
            span.meta[ext.STATUS_DESCRIPTION] = s.status_message

        for attr in self._config.global_tags:
            set_tag(span, attr.key, attr.value)
        for attr in s.attributes:
            set_tag(span, attr.key, attr.value)
        return span


def set_tag(s: DDSpan, key: str, val: AttributeValue) -> None:
    """Route an attribute to the error flag, a tag, a metric or a field."""
    if key == ext.ERROR:
        set_error(s, val)
        return
    t = val.type
    if t is ValueType.STRING:
        set_string_tag(s, key, val.value)
    elif t is ValueType.BOOL:
        set_string_tag(s, key, "true" if val.value else "false")
    elif t in FLOAT_TYPES or t in INTEGER_TYPES:
        set_metric(s, key, float(val.value))
    elif t is ValueType.ARRAY:
        # Not produced by well-behaved SDKs; stringify rather than drop.
        set_string_tag(s, key, str(val))
    else:
        logger.debug("Ignoring attribute %r with no usable value", key)


def set_metric(s: DDSpan, key: str, v: float) -> None:
    if key == ext.SAMPLING_PRIORITY:
        s.metrics[ext._SAMPLING_PRIORITY_KEY] = v
    else:
        s.metrics[key] = v


def _set_service(s: DDSpan, v: str) -> None:
    s.service = v


def _set_resource(s: DDSpan, v: str) -> None:
    s.resource = v


def _set_type(s: DDSpan, v: str) -> None:
    s.type = v


def _set_name(s: DDSpan, v: str) -> None:
    s.name = v


def _set_analytics_event(s: DDSpan, v: str) -> None:
    set_metric(s, ext.EVENT_SAMPLE_RATE, 0.0 if v == "false" else 1.0)


_STRING_FIELDS: dict[str, Callable[[DDSpan, str], None]] = {
    ext.SERVICE_NAME: _set_service,
    ext.RESOURCE_NAME: _set_resource,
    ext.SPAN_TYPE: _set_type,
    ext.SPAN_NAME: _set_name,
    ext.ANALYTICS_EVENT: _set_analytics_event,
}


def set_string_tag(s: DDSpan, key: str, v: str) -> None:
    """Store ``v`` under ``key``, or in the span field the key is reserved for."""
    setter = _STRING_FIELDS.get(key)
    if setter is not None:
        setter(s, v)
    else:
        s.meta[key] = v


def set_error(s: DDSpan, val: AttributeValue) -> None:
    """Set the error flag from the value of an ``error`` attribute.

    Integers count as an error when positive. Float and array values are
    treated as errors whatever their content.
    """
    t = val.type
    if t is ValueType.STRING:
        s.error = 1
        s.meta[ext.ERROR_MSG] = val.value
    elif t is ValueType.BOOL:
        s.error = 1 if val.value else 0
    elif t in INTEGER_TYPES:
        s.error = 1 if val.value > 0 else 0
    elif t is ValueType.INVALID:
        s.error = 0
    else:
        s.error = 1
