"""Solana Actions backend: memo and native SOL transfer endpoints."""

__version__ = "1.0.0"
