"""Reduction of attempt results into per-method and per-run statistics."""

import statistics
from datetime import datetime, timezone
from typing import Iterable, Optional, Sequence

from .models import AttemptResult, ExecutionMode, MethodAggregate, RunReport
from .rating import classify


def aggregate(method: str, attempts: Iterable[AttemptResult]) -> MethodAggregate:
    """
    Reduce one method's attempts to min/avg/max latency and success counts.

    Failed attempts count towards the total but not towards latency. When
    nothing succeeded the latency fields stay None.
    """
    attempts = tuple(attempts)
    latencies = [a.latency_ms for a in attempts if a.success]

    if not latencies:
        return MethodAggregate(
            method=method,
            success_count=0,
            total_count=len(attempts),
            attempts=attempts,
        )

    return MethodAggregate(
        method=method,
        success_count=len(latencies),
        total_count=len(attempts),
        min_latency_ms=min(latencies),
        avg_latency_ms=statistics.mean(latencies),
        max_latency_ms=max(latencies),
        attempts=attempts,
    )


def build_report(
    aggregates: Sequence[MethodAggregate],
    endpoint: str,
    iterations: int,
    mode: ExecutionMode,
    timestamp: Optional[datetime] = None,
    duration_seconds: Optional[float] = None,
) -> RunReport:
    """
    Roll per-method aggregates up into a RunReport.

    Overall success rate is the mean of per-method success rates. Overall
    latency is the mean of per-method averages, skipping methods that never
    succeeded.
    """
    aggregates = tuple(aggregates)

    if aggregates:
        overall_success_rate = statistics.mean(a.success_rate for a in aggregates)
    else:
        overall_success_rate = 0.0

    averages = [a.avg_latency_ms for a in aggregates if a.avg_latency_ms is not None]
    overall_avg = statistics.mean(averages) if averages else None

    return RunReport(
        timestamp=timestamp or datetime.now(timezone.utc),
        endpoint=endpoint,
        iterations=iterations,
        mode=mode,
        methods=aggregates,
        overall_success_rate=overall_success_rate,
        overall_avg_latency_ms=overall_avg,
        overall_rating=classify(overall_avg) if overall_avg is not None else None,
        duration_seconds=duration_seconds,
    )
