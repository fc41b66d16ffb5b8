"""Main entry point for the rpcbench package.

Usage:
    python -m rpcbench --url https://api.mainnet-beta.solana.com --iterations 5
    python -m rpcbench run --parallel --no-progress
    python -m rpcbench compare --urls https://rpc-a.example,https://rpc-b.example
"""

import sys


def main():
    """Main entry point that dispatches to subcommands."""
    args = sys.argv[1:]

    # Without a command, or when starting with an option, run a single benchmark
    if not args or (args[0].startswith("-") and args[0] not in ["-h", "--help"]):
        command = "run"
    else:
        command = args.pop(0)

    if command in ["-h", "--help", "help"]:
        print_help()
        sys.exit(0)

    if command == "run":
        from .cli.run import main as run_main

        run_main(args)
    elif command == "compare":
        from .cli.compare import main as compare_main

        compare_main(args)
    else:
        print(f"Unknown command: {command}")
        print_help()
        sys.exit(1)


def print_help():
    """Print help message."""
    print(
        """Solana RPC Performance Checker

Usage: python -m rpcbench [command] [options]

Commands:
    run         Benchmark one endpoint (default when no command is given)
    compare     Benchmark several endpoints and compare them side by side

Examples:
    # Benchmark the default endpoint with 3 iterations per method
    python -m rpcbench

    # Benchmark a custom endpoint, 10 parallel iterations per method
    python -m rpcbench -u https://my-node.example -i 10 --parallel

    # Export results and a latency chart
    python -m rpcbench run --output results.tsv --chart latency.png

    # Compare two endpoints
    python -m rpcbench compare --urls https://rpc-a.example,https://rpc-b.example

For command-specific help:
    python -m rpcbench <command> --help
"""
    )


if __name__ == "__main__":
    main()
