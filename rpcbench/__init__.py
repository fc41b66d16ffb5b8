"""Latency and reliability checker for Solana JSON-RPC endpoints."""

__version__ = "1.0.0"
