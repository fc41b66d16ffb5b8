"""Data models for RPC benchmarking."""

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, List, Dict, Any, Tuple
from urllib.parse import urlsplit, urlunsplit, parse_qsl

from ..presets import DEFAULT_URL, RUN_DEFAULTS
from .exceptions import ConfigurationError
from .rating import Rating, classify


class ExecutionMode(Enum):
    """How the iterations of a single method are issued."""

    SEQUENTIAL = "sequential"
    PARALLEL = "parallel"


@dataclass(frozen=True)
class EndpointConfig:
    """Configuration for a single benchmark run. Read-only once created."""

    url: str = DEFAULT_URL
    iterations: int = RUN_DEFAULTS["iterations"]
    mode: ExecutionMode = ExecutionMode.SEQUENTIAL
    show_progress: bool = True

    # Per-request ceiling and pause between sequential attempts
    timeout_seconds: float = RUN_DEFAULTS["timeout_seconds"]
    delay_seconds: float = RUN_DEFAULTS["delay_seconds"]

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Raise ConfigurationError if any field is out of range."""
        parts = urlsplit(self.url or "")
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ConfigurationError(f"Invalid endpoint URL: {self.url!r}")
        if isinstance(self.iterations, bool) or not isinstance(self.iterations, int):
            raise ConfigurationError("Iteration count must be an integer")
        if self.iterations <= 0:
            raise ConfigurationError("Iteration count must be positive")
        if not math.isfinite(self.timeout_seconds) or self.timeout_seconds <= 0:
            raise ConfigurationError("Request timeout must be a positive number of seconds")
        if not math.isfinite(self.delay_seconds) or self.delay_seconds < 0:
            raise ConfigurationError("Delay between attempts cannot be negative")

    @property
    def is_parallel(self) -> bool:
        """Check if this config is for parallel mode."""
        return self.mode is ExecutionMode.PARALLEL

    @property
    def display_url(self) -> str:
        """URL with query values masked, safe to print or export."""
        return mask_url(self.url)


def mask_url(url: str) -> str:
    """Replace every query-string value with '***'."""
    parts = urlsplit(url)
    if not parts.query:
        return url
    masked = "&".join(
        f"{key}=***" for key, _ in parse_qsl(parts.query, keep_blank_values=True)
    )
    return urlunsplit(parts._replace(query=masked))


@dataclass(frozen=True)
class AttemptResult:
    """Outcome of one RPC call."""

    method: str
    latency_ms: float
    success: bool
    error: Optional[str] = None
    request_id: Optional[int] = None

    # Decoded JSON-RPC result, only kept when the caller asks for it
    result: Any = field(default=None, repr=False, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "method": self.method,
            "latency_ms": self.latency_ms,
            "success": self.success,
            "error": self.error,
            "request_id": self.request_id,
        }


@dataclass(frozen=True)
class MethodAggregate:
    """Per-method rollup of attempts.

    Latency statistics cover successful attempts only and are None when the
    method never succeeded.
    """

    method: str
    success_count: int
    total_count: int

    # Latency metrics (milliseconds)
    min_latency_ms: Optional[float] = None
    avg_latency_ms: Optional[float] = None
    max_latency_ms: Optional[float] = None

    attempts: Tuple[AttemptResult, ...] = field(default=(), repr=False)

    @property
    def failure_count(self) -> int:
        return self.total_count - self.success_count

    @property
    def success_rate(self) -> float:
        """Percentage of successful attempts, unrounded."""
        if self.total_count == 0:
            return 0.0
        return self.success_count / self.total_count * 100

    @property
    def has_latency(self) -> bool:
        return self.avg_latency_ms is not None

    @property
    def rating(self) -> Optional[Rating]:
        if self.avg_latency_ms is None:
            return None
        return classify(self.avg_latency_ms)

    @property
    def errors(self) -> List[str]:
        """Error messages of failed attempts, in attempt order."""
        return [
            a.error or "Unknown error" for a in self.attempts if not a.success
        ]

    def error_counts(self) -> Dict[str, int]:
        """Distinct error messages with their number of occurrences."""
        counts: Dict[str, int] = {}
        for error in self.errors:
            counts[error] = counts.get(error, 0) + 1
        return counts

    def to_dict(self, include_attempts: bool = False) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        rating = self.rating
        data = {
            "method": self.method,
            "success_count": self.success_count,
            "total_count": self.total_count,
            "success_rate": self.success_rate,
            "min_latency_ms": self.min_latency_ms,
            "avg_latency_ms": self.avg_latency_ms,
            "max_latency_ms": self.max_latency_ms,
            "rating": rating.value if rating else None,
        }
        if include_attempts:
            data["attempts"] = [a.to_dict() for a in self.attempts]
        return data


@dataclass(frozen=True)
class RunReport:
    """Results of one full benchmark run against one endpoint."""

    timestamp: datetime
    endpoint: str
    iterations: int
    mode: ExecutionMode
    methods: Tuple[MethodAggregate, ...]

    overall_success_rate: float
    overall_avg_latency_ms: Optional[float]
    overall_rating: Optional[Rating]

    duration_seconds: Optional[float] = None

    @property
    def failed_methods(self) -> List[MethodAggregate]:
        """Methods without a single successful attempt."""
        return [m for m in self.methods if m.success_count == 0]

    def get(self, method: str) -> Optional[MethodAggregate]:
        for aggregate in self.methods:
            if aggregate.method == method:
                return aggregate
        return None

    def to_dict(self, include_attempts: bool = False) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "endpoint": self.endpoint,
            "iterations": self.iterations,
            "mode": self.mode.value,
            "methods": [m.to_dict(include_attempts) for m in self.methods],
            "overall_success_rate": self.overall_success_rate,
            "overall_avg_latency_ms": self.overall_avg_latency_ms,
            "overall_rating": (
                self.overall_rating.value if self.overall_rating else None
            ),
            "duration_seconds": self.duration_seconds,
        }
