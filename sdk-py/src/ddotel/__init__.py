"""ddotel: convert OpenTelemetry spans into Datadog span records."""

from __future__ import annotations

from ddotel._config import ConverterConfig, GlobalTags, make_config
from ddotel._convert import SpanConverter
from ddotel._exporter import DatadogSpanExporter, SpanHandler
from ddotel._otel import from_readable_span
from ddotel._otlp import from_otlp_span, spans_from_export_request
from ddotel._status import CodeDetails, translate_status
from ddotel._types import (
    AttributeValue,
    DDSpan,
    KeyValue,
    SpanData,
    SpanKind,
    ValueType,
)

__version__ = "0.1.0"

__all__ = [
    "AttributeValue",
    "CodeDetails",
    "ConverterConfig",
    "DDSpan",
    "DatadogSpanExporter",
    "KeyValue",
    "SpanConverter",
    "SpanData",
    "SpanHandler",
    "SpanKind",
    "ValueType",
    "__version__",
    "from_otlp_span",
    "from_readable_span",
    "new_converter",
    "spans_from_export_request",
    "translate_status",
]


def new_converter(
    *,
    service_name: str | None = None,
    global_tags: GlobalTags | None = None,
) -> SpanConverter:
    """Create a span converter.

    Usage::

        converter = ddotel.new_converter(
            service_name="checkout",
            global_tags={"env": "prod"},
        )
        record = converter.convert(span_data)
    """
    return SpanConverter(make_config(service_name=service_name, global_tags=global_tags))
