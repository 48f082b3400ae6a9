"""OpenTelemetry span exporter that converts spans to Datadog records."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from opentelemetry.sdk.trace.export import SpanExporter, SpanExportResult

from ddotel._otel import from_readable_span

if TYPE_CHECKING:
    from opentelemetry.sdk.trace import ReadableSpan

    from ddotel._convert import SpanConverter
    from ddotel._types import DDSpan

logger = logging.getLogger("ddotel.exporter")

SpanHandler = Callable[[list["DDSpan"]], None]


def _noop_handler(spans: list[DDSpan]) -> None:
    """Default handler that discards converted spans."""


class DatadogSpanExporter(SpanExporter):
    """Converts finished OpenTelemetry spans and passes them to a handler.

    Delivery (encoding, batching, sending to the agent) is the handler's
    job. Handler failures are logged but never raised, so tracing issues
    cannot break the instrumented application.
    """

    def __init__(
        self,
        converter: SpanConverter,
        *,
        handler: SpanHandler = _noop_handler,
    ) -> None:
        self._converter = converter
        self._handler = handler
        self._shutdown = False

    def export(self, spans: Sequence[ReadableSpan]) -> SpanExportResult:
        """Convert a batch of spans and hand them to the handler."""
        if self._shutdown:
            logger.debug("Exporter already shut down, dropping %d spans", len(spans))
            return SpanExportResult.FAILURE
        if not spans:
            return SpanExportResult.SUCCESS
        records = [self._converter.convert(from_readable_span(s)) for s in spans]
        try:
            self._handler(records)
        except Exception:  # noqa: BLE001
            logger.debug("Failed to export %d spans", len(records), exc_info=True)
            return SpanExportResult.FAILURE
        return SpanExportResult.SUCCESS

    def shutdown(self) -> None:
        """Stop accepting spans. Idempotent."""
        self._shutdown = True

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        return True
