"""CLI commands for StockVision.

This package provides the command-line interface for StockVision,
including data import, metrics, scanning, correlation and backtesting.
"""

from stockvision.cli.main import cli, main

__all__ = ["cli", "main"]
