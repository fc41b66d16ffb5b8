"""Predefined defaults for RPC benchmark runs."""

import os

# Public mainnet endpoint; override with RPCBENCH_URL or --url
PUBLIC_MAINNET_URL = "https://api.mainnet-beta.solana.com"
DEFAULT_URL = os.environ.get("RPCBENCH_URL", PUBLIC_MAINNET_URL)

RUN_DEFAULTS = {
    "iterations": 3,
    "timeout_seconds": 30.0,
    "delay_seconds": 0.1,
}

# Example accounts used as parameters for account-level methods
EXAMPLE_ACCOUNT = "11111111111111111111111111111111"
EXAMPLE_OWNER = "11111111111111111111111111111111"
TOKEN_PROGRAM_ID = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"

# getBlock asks for a block slightly behind the tip so it has been produced
SLOT_LOOKBACK = 10
FALLBACK_SLOT = 250_000_000

REPORT_WIDTH = 65
