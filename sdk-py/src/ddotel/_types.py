"""Core types: attribute values, source span snapshots and Datadog span records."""

from __future__ import annotations

import enum
import struct
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_UINT64_MAX = (1 << 64) - 1


class SpanKind(enum.Enum):
    """Role of a span in a trace."""

    INTERNAL = "internal"
    SERVER = "server"
    CLIENT = "client"
    PRODUCER = "producer"
    CONSUMER = "consumer"


class ValueType(enum.Enum):
    """Discriminant of an AttributeValue."""

    INVALID = "invalid"
    BOOL = "bool"
    INT32 = "int32"
    INT64 = "int64"
    UINT32 = "uint32"
    UINT64 = "uint64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    STRING = "string"
    ARRAY = "array"


INTEGER_TYPES = frozenset(
    {ValueType.INT32, ValueType.INT64, ValueType.UINT32, ValueType.UINT64}
)
FLOAT_TYPES = frozenset({ValueType.FLOAT32, ValueType.FLOAT64})


@dataclass(frozen=True)
class AttributeValue:
    """A typed attribute value.

    Build instances with the typed constructors (``AttributeValue.int32(4)``,
    ``AttributeValue.string("abc")``...) or infer the type from a native
    Python value with :meth:`of`.
    """

    type: ValueType
    value: Any = None

    @classmethod
    def invalid(cls) -> AttributeValue:
        return cls(ValueType.INVALID)

    @classmethod
    def bool(cls, v: bool) -> AttributeValue:
        return cls(ValueType.BOOL, v)

    @classmethod
    def int32(cls, v: int) -> AttributeValue:
        return cls(ValueType.INT32, v)

    @classmethod
    def int64(cls, v: int) -> AttributeValue:
        return cls(ValueType.INT64, v)

    @classmethod
    def uint32(cls, v: int) -> AttributeValue:
        return cls(ValueType.UINT32, v)

    @classmethod
    def uint64(cls, v: int) -> AttributeValue:
        return cls(ValueType.UINT64, v)

    @classmethod
    def float32(cls, v: float) -> AttributeValue:
        """Single-precision value; ``v`` is rounded to the nearest float32."""
        return cls(ValueType.FLOAT32, struct.unpack("f", struct.pack("f", v))[0])

    @classmethod
    def float64(cls, v: float) -> AttributeValue:
        return cls(ValueType.FLOAT64, v)

    @classmethod
    def string(cls, v: str) -> AttributeValue:
        return cls(ValueType.STRING, v)

    @classmethod
    def array(cls, v: Sequence[Any]) -> AttributeValue:
        return cls(ValueType.ARRAY, tuple(v))

    @classmethod
    def of(cls, obj: object) -> AttributeValue:
        """Infer the value type of a native Python value.

        Anything that is not a bool, int, float, str, list or tuple becomes
        an INVALID value, which the converter ignores.
        """
        # bool is a subclass of int, check it first.
        if isinstance(obj, bool):
            return cls.bool(obj)
        if isinstance(obj, int):
            if _INT64_MIN <= obj <= _INT64_MAX:
                return cls.int64(obj)
            if 0 <= obj <= _UINT64_MAX:
                return cls.uint64(obj)
            return cls.invalid()
        if isinstance(obj, float):
            return cls.float64(obj)
        if isinstance(obj, str):
            return cls.string(obj)
        if isinstance(obj, (list, tuple)):
            return cls.array(obj)
        return cls.invalid()

    def __str__(self) -> str:
        if self.type is ValueType.ARRAY:
            return str(list(self.value))
        if self.type is ValueType.BOOL:
            return "true" if self.value else "false"
        if self.type is ValueType.INVALID:
            return ""
        return str(self.value)


@dataclass(frozen=True)
class KeyValue:
    """A keyed attribute."""

    key: str
    value: AttributeValue

    @classmethod
    def of(cls, key: str, obj: object) -> KeyValue:
        return cls(key, AttributeValue.of(obj))


@dataclass(frozen=True)
class SpanData:
    """Immutable snapshot of a finished span, ready for conversion.

    ``parent_span_id`` is 0 when the span has no valid parent.
    ``status_code`` uses the gRPC code space (0 is OK).
    """

    trace_id: int
    span_id: int
    name: str
    kind: SpanKind
    start_time_ns: int
    end_time_ns: int
    parent_span_id: int = 0
    status_code: int = 0
    status_message: str = ""
    attributes: tuple[KeyValue, ...] = ()

    @property
    def has_parent(self) -> bool:
        return self.parent_span_id != 0


@dataclass
class DDSpan:
    """A span record in the layout expected by the Datadog agent."""

    trace_id: int = 0
    span_id: int = 0
    parent_id: int = 0
    name: str = ""
    resource: str = ""
    service: str = ""
    type: str = ""
    start: int = 0
    duration: int = 0
    error: int = 0
    metrics: dict[str, float] = field(default_factory=dict)
    meta: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Render the record with the agent's msgpack field names."""
        return {
            "trace_id": self.trace_id,
            "span_id": self.span_id,
            "parent_id": self.parent_id,
            "name": self.name,
            "resource": self.resource,
            "service": self.service,
            "type": self.type,
            "start": self.start,
            "duration": self.duration,
            "error": self.error,
            "meta": dict(self.meta),
            "metrics": dict(self.metrics),
        }
