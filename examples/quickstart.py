"""ddotel Quick Start: convert OpenTelemetry spans into Datadog records."""

import json

from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor

import ddotel


def print_records(spans: list[ddotel.DDSpan]) -> None:
    # Replace with a real transport that ships records to the Datadog agent.
    for record in spans:
        print(json.dumps(record.to_dict(), indent=2))


# 1. Build a converter with a service name and tags for every span
converter = ddotel.new_converter(
    service_name="my-app",
    global_tags={"env": "development"},
)

# 2. Register the exporter with the OpenTelemetry SDK
provider = TracerProvider()
provider.add_span_processor(
    SimpleSpanProcessor(ddotel.DatadogSpanExporter(converter, handler=print_records))
)
trace.set_tracer_provider(provider)
tracer = trace.get_tracer("example")

# 3. Trace as usual; reserved attributes set Datadog fields
with tracer.start_as_current_span("/foo"):
    with tracer.start_as_current_span("/bar") as span:
        span.set_attribute("resource.name", "/foo/bar")
        span.set_attribute("span.type", "web")

provider.shutdown()
