"""Human-readable console report for benchmark runs."""

from typing import List, Optional

from ..core.methods import method_names
from ..core.models import EndpointConfig, MethodAggregate, RunReport
from ..core.rating import Rating
from ..presets import REPORT_WIDTH

NOT_AVAILABLE = "N/A"


def format_ms(value: Optional[float]) -> str:
    """Format a latency for display, N/A when absent."""
    if value is None:
        return NOT_AVAILABLE
    return f"{value:.1f}ms"


def format_rating(rating: Optional[Rating]) -> str:
    return rating.value if rating is not None else NOT_AVAILABLE


def success_status(success_rate: float) -> str:
    """Short status word for a success percentage."""
    if success_rate == 100.0:
        return "OK"
    elif success_rate >= 80.0:
        return "DEGRADED"
    elif success_rate >= 50.0:
        return "UNSTABLE"
    return "FAILING"


class ReportRenderer:
    """Formats configuration and run reports as plain text."""

    def __init__(self, width: int = REPORT_WIDTH):
        self.width = width

    def _banner(self, title: str) -> List[str]:
        return ["=" * self.width, title.center(self.width), "=" * self.width]

    def render_welcome(self) -> str:
        lines = self._banner("SOLANA RPC PERFORMANCE CHECKER")
        lines.append("Benchmarks the latency and reliability of a Solana RPC endpoint.")
        lines.append(f"Tests include: {', '.join(method_names())}.")
        return "\n".join(lines)

    def render_configuration(self, config: EndpointConfig) -> str:
        lines = self._banner("TEST CONFIGURATION")
        lines.append(f"RPC endpoint:         {config.display_url}")
        lines.append(f"Iterations per test:  {config.iterations}")
        lines.append(f"Mode:                 {'Parallel' if config.is_parallel else 'Sequential'}")
        lines.append(f"Request timeout:      {config.timeout_seconds:g}s")
        return "\n".join(lines)

    def render_method(self, result: MethodAggregate) -> str:
        """Block for one method: success line, latency, rating and errors."""
        lines = [
            f"{result.method} {result.success_rate:.1f}% "
            f"({result.success_count}/{result.total_count}) "
            f"[{success_status(result.success_rate)}]"
        ]
        if result.has_latency:
            lines.append(
                f"  Response time: avg {format_ms(result.avg_latency_ms)} | "
                f"min {format_ms(result.min_latency_ms)} | "
                f"max {format_ms(result.max_latency_ms)}"
            )
        else:
            lines.append(f"  Response time: {NOT_AVAILABLE}")
        lines.append(f"  Speed rating: {format_rating(result.rating)}")

        for error, count in result.error_counts().items():
            label = "occurrence" if count == 1 else "occurrences"
            lines.append(f"  Error ({count} {label}): {error}")
        return "\n".join(lines)

    def render_report(self, report: RunReport) -> str:
        """Full report: header, overall figures, per-method blocks, footer."""
        if not report.methods:
            return "No test results to display."

        lines = self._banner("RPC PERFORMANCE REPORT")
        lines.append(f"Timestamp: {report.timestamp.isoformat()}")
        lines.append(f"Endpoint: {report.endpoint}")
        lines.append(f"Overall Success Rate: {report.overall_success_rate:.1f}%")
        if report.overall_avg_latency_ms is not None:
            lines.append(
                f"Overall Speed Rating: {format_rating(report.overall_rating)} "
                f"({report.overall_avg_latency_ms:.1f} ms avg)"
            )
        else:
            lines.append(f"Overall Speed Rating: {NOT_AVAILABLE}")
        if report.duration_seconds is not None:
            lines.append(f"Total Duration: {report.duration_seconds:.2f}s")
        lines.append("-" * self.width)

        for result in report.methods:
            lines.append("")
            lines.append(self.render_method(result))

        failed = report.failed_methods
        if failed:
            lines.append("")
            lines.append(
                "Methods without a successful response: "
                + ", ".join(m.method for m in failed)
            )

        lines.append("=" * self.width)
        lines.append("Thank you for using the Solana RPC Performance Checker!")
        return "\n".join(lines)

    def print_welcome(self) -> None:
        print(self.render_welcome())
        print()

    def print_configuration(self, config: EndpointConfig) -> None:
        print(self.render_configuration(config))
        print()

    def print_report(self, report: RunReport) -> None:
        print()
        print(self.render_report(report))
