"""StockVision - market signal and backtesting engine for equity dashboards."""

__version__ = "0.1.0"
