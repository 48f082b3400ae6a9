"""Reserved tag and metric keys shared with the Datadog agent.

Keys a caller sets as span attributes are matched case-sensitively.
Keys with a leading underscore are internal to the agent and never set
directly by instrumentation.
"""

from __future__ import annotations

# Attribute keys understood by the converter.
ERROR = "error"
SERVICE_NAME = "service.name"
RESOURCE_NAME = "resource.name"
SPAN_TYPE = "span.type"
SPAN_NAME = "span.name"
SAMPLING_PRIORITY = "sampling.priority"
ANALYTICS_EVENT = "analytics.event"

# Tags written on the output record.
ERROR_MSG = "error.msg"
ERROR_TYPE = "error.type"
STATUS = "opentelemetry.status"
STATUS_CODE = "opentelemetry.status_code"
STATUS_DESCRIPTION = "opentelemetry.status_description"

# Metrics written on the output record.
EVENT_SAMPLE_RATE = "_dd1.sr.eausr"
_SAMPLING_PRIORITY_KEY = "_sampling_priority_v1"

# Operation name of every converted span.
OPERATION_NAME = "opentelemetry"

# Sampling priorities, see ddtrace.constants.
USER_REJECT = -1
AUTO_REJECT = 0
AUTO_KEEP = 1
USER_KEEP = 2
