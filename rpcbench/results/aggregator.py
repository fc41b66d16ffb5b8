"""Result aggregation and tabular export."""

import json

import pandas as pd
from typing import List, Optional

from ..core.models import RunReport


def _fmt(value: Optional[float]) -> str:
    return f"{value:.1f}" if value is not None else "N/A"


class ResultAggregator:
    """Aggregates run reports and formats them for export."""

    def __init__(self):
        self.reports: List[RunReport] = []

    def add_report(self, report: RunReport) -> None:
        """Add a single run report."""
        self.reports.append(report)

    def add_reports(self, reports: List[RunReport]) -> None:
        """Add multiple run reports."""
        self.reports.extend(reports)

    def to_dataframe(self) -> pd.DataFrame:
        """One row per endpoint and method."""
        data = []
        for report in self.reports:
            for result in report.methods:
                data.append({
                    "Endpoint": report.endpoint,
                    "Method": result.method,
                    "Success": result.success_count,
                    "Total": result.total_count,
                    "Success%": f"{result.success_rate:.1f}",
                    "Avg_ms": _fmt(result.avg_latency_ms),
                    "Min_ms": _fmt(result.min_latency_ms),
                    "Max_ms": _fmt(result.max_latency_ms),
                    "Rating": result.rating.value if result.rating else "N/A",
                })
        return pd.DataFrame(data)

    def summary_dataframe(self) -> pd.DataFrame:
        """One row per endpoint with the overall figures."""
        data = []
        for report in self.reports:
            data.append({
                "Endpoint": report.endpoint,
                "Mode": report.mode.value,
                "Iterations": report.iterations,
                "Success%": f"{report.overall_success_rate:.1f}",
                "Avg_ms": _fmt(report.overall_avg_latency_ms),
                "Rating": report.overall_rating.value if report.overall_rating else "N/A",
                "Failed_Methods": len(report.failed_methods),
                "Duration_s": _fmt(report.duration_seconds),
            })
        return pd.DataFrame(data)

    def to_csv(self, path: str) -> None:
        """Export to CSV file."""
        df = self.to_dataframe()
        df.to_csv(path, index=False)

    def to_tsv(self, path: str) -> None:
        """Export to TSV file."""
        df = self.to_dataframe()
        df.to_csv(path, sep="\t", index=False)

    def to_json(self, path: str) -> None:
        """Export full reports, including every attempt, to a JSON file."""
        data = [report.to_dict(include_attempts=True) for report in self.reports]
        with open(path, "w") as f:
            json.dump(data, f, indent=2)

    def export(self, path: str) -> None:
        """Export by extension: .json for full reports, .csv for CSV, TSV otherwise."""
        suffix = path.lower()
        if suffix.endswith(".json"):
            self.to_json(path)
        elif suffix.endswith(".csv"):
            self.to_csv(path)
        else:
            self.to_tsv(path)

    def get_tsv_string(self) -> str:
        """Get summary as TSV string for easy copy/paste to spreadsheet."""
        df = self.summary_dataframe()
        return df.to_csv(sep="\t", index=False)

    def print_summary_table(
        self,
        title: Optional[str] = None,
        description: Optional[str] = None,
    ) -> None:
        """Print formatted summary table to console."""
        if not self.reports:
            print("No results to display.")
            return

        print()
        print("=" * 100)
        if title:
            print(title.center(100))
        else:
            print("RPC BENCHMARK SUMMARY".center(100))
        print("=" * 100)

        if description:
            print(description)
            print("-" * 100)

        df = self.summary_dataframe()
        print(df.to_string(index=False))

        print()
        print("-" * 100)
        print("PER-METHOD AVERAGE LATENCY (ms)")
        print("-" * 100)
        print(self.latency_matrix().to_string())

        print()
        print("=" * 100)
        print("TSV OUTPUT (copy to spreadsheet):")
        print("=" * 100)
        print(self.get_tsv_string())
        print("=" * 100)

    def latency_matrix(self) -> pd.DataFrame:
        """Average latency pivoted as methods x endpoints, N/A where absent."""
        df = self.to_dataframe()
        if df.empty:
            return df
        matrix = df.pivot_table(
            index="Method", columns="Endpoint", values="Avg_ms", aggfunc="first"
        )
        method_order = list(dict.fromkeys(df["Method"]))
        endpoint_order = list(dict.fromkeys(df["Endpoint"]))
        return matrix.reindex(index=method_order, columns=endpoint_order)

    @staticmethod
    def print_single_result(report: RunReport) -> None:
        """Print a one-endpoint summary during a comparison."""
        print(f"\nResults for {report.endpoint}:")
        print(f"  Success Rate: {report.overall_success_rate:.1f}%")
        print(f"  Avg Latency: {_fmt(report.overall_avg_latency_ms)}ms")
        print(f"  Rating: {report.overall_rating.value if report.overall_rating else 'N/A'}")
        if report.failed_methods:
            names = ", ".join(m.method for m in report.failed_methods)
            print(f"  Unavailable methods: {names}")
