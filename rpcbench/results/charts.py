"""Chart generation for benchmark results."""

import matplotlib.pyplot as plt
from datetime import datetime
from typing import List, Optional

from ..core.models import RunReport
from ..core.rating import Rating

RATING_COLORS = {
    Rating.EXCELLENT: "#2ca02c",
    Rating.GOOD: "#98df8a",
    Rating.AVERAGE: "#ffbb33",
    Rating.SLOW: "#ff7f0e",
    Rating.VERY_SLOW: "#d62728",
}
NO_DATA_COLOR = "#bbbbbb"


def _save(fig, output_path: Optional[str], prefix: str, show: bool) -> str:
    if output_path:
        saved_path = output_path
    else:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        saved_path = f"{prefix}_{timestamp}.png"

    fig.savefig(saved_path, dpi=150, bbox_inches="tight")
    print(f"\nChart saved as: {saved_path}")

    if show:
        plt.show()
    plt.close(fig)
    return saved_path


def generate_report_chart(
    report: RunReport,
    output_path: Optional[str] = None,
    show: bool = False,
) -> Optional[str]:
    """
    Plot per-method average latency with min/max whiskers and success rates.

    Bars are colored by rating; methods without a successful attempt are
    drawn as empty grey bars.

    Args:
        report: Run report to plot
        output_path: Path to save the chart (auto-generated if None)
        show: Whether to display the chart

    Returns:
        Path to saved chart file, or None if there was nothing to plot
    """
    if not report.methods:
        print("No results to chart.")
        return None

    names = [m.method for m in report.methods]
    averages = [m.avg_latency_ms or 0.0 for m in report.methods]
    lower = [
        (m.avg_latency_ms - m.min_latency_ms) if m.has_latency else 0.0
        for m in report.methods
    ]
    upper = [
        (m.max_latency_ms - m.avg_latency_ms) if m.has_latency else 0.0
        for m in report.methods
    ]
    colors = [RATING_COLORS.get(m.rating, NO_DATA_COLOR) for m in report.methods]
    success_rates = [m.success_rate for m in report.methods]

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(15, 6))
    fig.suptitle(f"RPC Performance: {report.endpoint}", fontsize=14, fontweight="bold")

    positions = range(len(names))
    ax1.bar(positions, averages, color=colors, yerr=[lower, upper], capsize=4)
    ax1.set_xticks(list(positions))
    ax1.set_xticklabels(names, rotation=30, ha="right")
    ax1.set_ylabel("Latency (ms)")
    ax1.set_title("Average Latency (min-max range)")
    ax1.grid(True, axis="y", alpha=0.3)

    ax2.bar(positions, success_rates, color="b", alpha=0.6)
    ax2.set_xticks(list(positions))
    ax2.set_xticklabels(names, rotation=30, ha="right")
    ax2.set_ylabel("Success Rate (%)")
    ax2.set_ylim(0, 105)
    ax2.set_title("Success Rate")
    ax2.grid(True, axis="y", alpha=0.3)

    fig.tight_layout()
    return _save(fig, output_path, "rpc_report", show)


def generate_comparison_chart(
    reports: List[RunReport],
    output_path: Optional[str] = None,
    show: bool = False,
) -> Optional[str]:
    """
    Grouped bar chart of per-method average latency across endpoints.

    Args:
        reports: One report per endpoint, all using the same method battery
        output_path: Path to save the chart (auto-generated if None)
        show: Whether to display the chart

    Returns:
        Path to saved chart file, or None if there was nothing to plot
    """
    if not reports:
        print("No results to chart.")
        return None

    names = [m.method for m in reports[0].methods]
    width = 0.8 / len(reports)

    fig, ax = plt.subplots(figsize=(15, 7))
    for index, report in enumerate(reports):
        averages = []
        for name in names:
            result = report.get(name)
            averages.append(result.avg_latency_ms if result and result.has_latency else 0.0)
        offsets = [p + index * width for p in range(len(names))]
        ax.bar(offsets, averages, width=width, label=report.endpoint)

    ax.set_xticks([p + width * (len(reports) - 1) / 2 for p in range(len(names))])
    ax.set_xticklabels(names, rotation=30, ha="right")
    ax.set_ylabel("Average Latency (ms)")
    ax.set_title("Average Latency by Endpoint")
    ax.legend()
    ax.grid(True, axis="y", alpha=0.3)

    fig.tight_layout()
    return _save(fig, output_path, "rpc_comparison", show)
