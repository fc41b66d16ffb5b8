"""CLI for a single-endpoint benchmark run."""

import argparse
import asyncio
import sys
from typing import List, Optional

from ..core.exceptions import ConfigurationError
from ..core.models import EndpointConfig, ExecutionMode
from ..core.runner import BenchmarkRunner
from ..presets import DEFAULT_URL, RUN_DEFAULTS
from ..results.aggregator import ResultAggregator
from ..results.charts import generate_report_chart
from ..results.progress import ProgressDisplay
from ..results.report import ReportRenderer


def add_run_arguments(parser: argparse.ArgumentParser) -> None:
    """Arguments shared by every command that runs the method battery."""
    parser.add_argument(
        "-i",
        "--iterations",
        type=int,
        default=RUN_DEFAULTS["iterations"],
        help=f"Number of iterations for each test (default: {RUN_DEFAULTS['iterations']})",
    )
    parser.add_argument(
        "-p",
        "--parallel",
        action="store_true",
        help="Issue the iterations of each method concurrently",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Do not draw the progress bar",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=RUN_DEFAULTS["timeout_seconds"],
        help=f"Per-request timeout in seconds (default: {RUN_DEFAULTS['timeout_seconds']:g})",
    )
    parser.add_argument(
        "--delay-ms",
        type=int,
        default=int(RUN_DEFAULTS["delay_seconds"] * 1000),
        help="Pause between sequential attempts in milliseconds "
        f"(default: {int(RUN_DEFAULTS['delay_seconds'] * 1000)})",
    )
    parser.add_argument(
        "--output",
        type=str,
        help="Export results to this file: TSV, CSV for .csv, full JSON reports for .json",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log run progress at INFO level",
    )


def build_config(args: argparse.Namespace, url: str) -> EndpointConfig:
    """Create an EndpointConfig from parsed arguments (may raise ConfigurationError)."""
    return EndpointConfig(
        url=url,
        iterations=args.iterations,
        mode=ExecutionMode.PARALLEL if args.parallel else ExecutionMode.SEQUENTIAL,
        show_progress=not args.no_progress,
        timeout_seconds=args.timeout,
        delay_seconds=args.delay_ms / 1000,
    )


async def run_benchmark(config: EndpointConfig, verbose: bool = False):
    """Run one benchmark with a progress display attached."""
    runner = BenchmarkRunner(config, verbose=verbose)
    progress = ProgressDisplay(runner.total_attempts, enabled=config.show_progress)
    runner.on_attempt = progress.advance
    runner.on_method_start = progress.start_method

    if not config.show_progress:
        print("Running tests...")

    report = await runner.run()

    if config.show_progress:
        progress.finish()
    else:
        print("Testing completed!")
    return report


def main(argv: Optional[List[str]] = None):
    """Main entry point for the run CLI."""
    parser = argparse.ArgumentParser(
        description="Test and benchmark a Solana RPC endpoint",
    )
    parser.add_argument(
        "-u",
        "--url",
        type=str,
        default=DEFAULT_URL,
        help=f"RPC endpoint URL (default: {DEFAULT_URL}, or $RPCBENCH_URL)",
    )
    add_run_arguments(parser)
    parser.add_argument(
        "--chart",
        type=str,
        help="Save a latency chart PNG to this path",
    )
    parser.add_argument(
        "--fail-on-error",
        action="store_true",
        help="Exit with status 1 when any method had no successful attempt",
    )

    args = parser.parse_args(argv)

    try:
        config = build_config(args, args.url)
    except ConfigurationError as e:
        print(f"Error: {e}")
        sys.exit(1)

    renderer = ReportRenderer()
    renderer.print_welcome()
    renderer.print_configuration(config)

    try:
        report = asyncio.run(run_benchmark(config, verbose=args.verbose))
    except KeyboardInterrupt:
        print("\nBenchmark interrupted by user")
        sys.exit(130)

    renderer.print_report(report)

    if args.output:
        aggregator = ResultAggregator()
        aggregator.add_report(report)
        aggregator.export(args.output)
        print(f"\nResults saved to: {args.output}")

    if args.chart:
        generate_report_chart(report, output_path=args.chart, show=False)

    if args.fail_on_error and report.failed_methods:
        sys.exit(1)


if __name__ == "__main__":
    main()
