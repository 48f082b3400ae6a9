#!/usr/bin/env python3
"""Span conversion throughput benchmark.

Measures the per-span cost of:
  1. translate_status (table lookup)
  2. SpanConverter.convert (span with a handful of attributes)
  3. from_otlp_span + convert (protobuf decode path)

Usage:
    cd sdk-py && uv run python benchmarks/bench_convert.py
"""

from __future__ import annotations

import time

from opentelemetry.proto.common.v1.common_pb2 import AnyValue, KeyValue as OtlpKeyValue
from opentelemetry.proto.trace.v1.trace_pb2 import Span as OtlpSpan

from ddotel._config import make_config
from ddotel._convert import SpanConverter
from ddotel._otlp import from_otlp_span
from ddotel._status import translate_status
from ddotel._types import KeyValue, SpanData, SpanKind


def _span_data() -> SpanData:
    return SpanData(
        trace_id=0x0102030405060708090A0B0C0D0E0F10,
        span_id=0x0102030405060708,
        parent_span_id=0x0807060504030201,
        name="/checkout",
        kind=SpanKind.SERVER,
        start_time_ns=1_000,
        end_time_ns=2_000,
        status_code=13,
        status_message="boom",
        attributes=(
            KeyValue.of("http.method", "POST"),
            KeyValue.of("http.status_code", 500),
            KeyValue.of("cache.hit", False),
            KeyValue.of("span.type", "web"),
        ),
    )


def bench_translate_status(iterations: int = 1_000_000) -> float:
    """Benchmark: status lookup, known and unknown codes."""
    for _ in range(5000):
        translate_status(13)

    start = time.perf_counter_ns()
    for i in range(iterations):
        translate_status(i & 31)
    elapsed = time.perf_counter_ns() - start

    return elapsed / iterations


def bench_convert(iterations: int = 200_000) -> float:
    """Benchmark: SpanData -> DDSpan with global tags."""
    converter = SpanConverter(
        make_config(service_name="bench", global_tags={"env": "bench", "version": "1"})
    )
    sd = _span_data()

    for _ in range(1000):
        converter.convert(sd)

    start = time.perf_counter_ns()
    for _ in range(iterations):
        converter.convert(sd)
    elapsed = time.perf_counter_ns() - start

    return elapsed / iterations


def bench_otlp_convert(iterations: int = 100_000) -> float:
    """Benchmark: OTLP protobuf span -> SpanData -> DDSpan."""
    converter = SpanConverter(make_config(service_name="bench"))
    otlp = OtlpSpan(
        trace_id=bytes(range(1, 17)),
        span_id=bytes(range(1, 9)),
        name="/checkout",
        kind=OtlpSpan.SPAN_KIND_CLIENT,
        start_time_unix_nano=1_000,
        end_time_unix_nano=2_000,
        attributes=[
            OtlpKeyValue(key="http.method", value=AnyValue(string_value="GET")),
            OtlpKeyValue(key="retries", value=AnyValue(int_value=2)),
        ],
    )

    for _ in range(1000):
        converter.convert(from_otlp_span(otlp))

    start = time.perf_counter_ns()
    for _ in range(iterations):
        converter.convert(from_otlp_span(otlp))
    elapsed = time.perf_counter_ns() - start

    return elapsed / iterations


def main() -> None:
    print("=" * 60)
    print("ddotel Conversion Benchmark")
    print("=" * 60)

    results: list[tuple[str, float, str]] = []

    ns = bench_translate_status()
    status = "PASS" if ns < 500 else "WARN" if ns < 1000 else "FAIL"
    results.append(("translate_status", ns, f"{status} (target < 500ns)"))

    ns = bench_convert()
    status = "PASS" if ns < 10000 else "WARN" if ns < 20000 else "FAIL"
    results.append(("SpanConverter.convert", ns, f"{status} (target < 10μs)"))

    ns = bench_otlp_convert()
    status = "PASS" if ns < 20000 else "WARN" if ns < 40000 else "FAIL"
    results.append(("from_otlp_span + convert", ns, f"{status} (target < 20μs)"))

    print()
    for name, ns_val, note in results:
        if ns_val >= 1000:
            display = f"{ns_val / 1000:.2f}μs"
        else:
            display = f"{ns_val:.0f}ns"
        print(f"  {name:40s}  {display:>10s}   {note}")

    print()
    all_pass = all("PASS" in r[2] or "WARN" in r[2] for r in results)
    if all_pass:
        print("All benchmarks within acceptable range.")
    else:
        print("WARNING: Some benchmarks exceeded target. Review above.")


if __name__ == "__main__":
    main()
