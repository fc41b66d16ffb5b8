"""CLI for comparing several endpoints with the same method battery."""

import argparse
import asyncio
import sys
from typing import List, Optional

from ..core.exceptions import ConfigurationError
from ..core.models import EndpointConfig, RunReport
from ..results.aggregator import ResultAggregator
from ..results.charts import generate_comparison_chart
from .run import add_run_arguments, build_config, run_benchmark


def parse_urls(urls_str: str) -> List[str]:
    """Parse comma-separated URLs, dropping blanks and duplicates."""
    urls = [u.strip() for u in urls_str.split(",")]
    return list(dict.fromkeys(u for u in urls if u))


async def run_comparison(
    configs: List[EndpointConfig],
    reports: List[RunReport],
    verbose: bool = False,
) -> List[RunReport]:
    """Benchmark each endpoint in turn, appending each report as it completes."""
    for i, config in enumerate(configs):
        print(f"\n{'=' * 60}")
        print(f"Endpoint {i + 1}/{len(configs)}: {config.display_url}")
        print(f"{'=' * 60}")

        report = await run_benchmark(config, verbose=verbose)
        reports.append(report)
        ResultAggregator.print_single_result(report)

    return reports


def main(argv: Optional[List[str]] = None):
    """Main entry point for the compare CLI."""
    parser = argparse.ArgumentParser(
        description="Compare latency and reliability of several Solana RPC endpoints",
    )
    parser.add_argument(
        "--urls",
        type=str,
        required=True,
        help="Comma-separated list of RPC endpoint URLs",
    )
    add_run_arguments(parser)
    parser.add_argument(
        "--chart",
        type=str,
        help="Save the comparison chart PNG to this path",
    )
    parser.add_argument(
        "--no-chart",
        action="store_true",
        help="Skip chart generation",
    )

    args = parser.parse_args(argv)

    urls = parse_urls(args.urls)
    if not urls:
        print("Error: --urls must name at least one endpoint")
        sys.exit(1)

    try:
        configs = [build_config(args, url) for url in urls]
    except ConfigurationError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print("Starting endpoint comparison...")
    print(f"Endpoints: {', '.join(c.display_url for c in configs)}")
    print(f"Iterations per test: {args.iterations}")
    print(f"Mode: {'Parallel' if args.parallel else 'Sequential'}")

    aggregator = ResultAggregator()
    reports: List[RunReport] = []

    try:
        asyncio.run(run_comparison(configs, reports, verbose=args.verbose))
    except KeyboardInterrupt:
        print("\nComparison interrupted by user")
        aggregator.add_reports(reports)
        if aggregator.reports:
            aggregator.print_summary_table(
                title="PARTIAL COMPARISON RESULTS (interrupted)"
            )
        sys.exit(130)

    aggregator.add_reports(reports)
    aggregator.print_summary_table(
        title="RPC ENDPOINT COMPARISON",
        description=f"Iterations per test: {args.iterations} | "
        f"Mode: {'parallel' if args.parallel else 'sequential'}",
    )

    if args.output:
        aggregator.export(args.output)
        print(f"\nResults saved to: {args.output}")

    if not args.no_chart and reports:
        generate_comparison_chart(reports, output_path=args.chart, show=False)


if __name__ == "__main__":
    main()
