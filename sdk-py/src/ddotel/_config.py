"""Converter configuration."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from ddotel._types import KeyValue

GlobalTags = Mapping[str, object] | Iterable[KeyValue]


def default_service_name() -> str:
    """Name of the running program, used when no service name is given."""
    return os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "python"


@dataclass(frozen=True)
class ConverterConfig:
    """Immutable converter configuration.

    ``global_tags`` are applied to every converted span, in order, before
    the span's own attributes.
    """

    service_name: str
    global_tags: tuple[KeyValue, ...] = ()


def make_config(
    *,
    service_name: str | None = None,
    global_tags: GlobalTags | None = None,
) -> ConverterConfig:
    """Build a ConverterConfig from loosely typed arguments.

    ``global_tags`` may be a mapping of native Python values or a sequence
    of ``KeyValue``. An empty ``service_name`` falls back to the program
    name.
    """
    if global_tags is None:
        tags: tuple[KeyValue, ...] = ()
    elif isinstance(global_tags, Mapping):
        tags = tuple(KeyValue.of(k, v) for k, v in global_tags.items())
    else:
        tags = tuple(global_tags)
    return ConverterConfig(
        service_name=service_name or default_service_name(),
        global_tags=tags,
    )
