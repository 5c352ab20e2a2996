"""Personal net-worth tracker: multi-currency valuation, history and JSON persistence."""

__version__ = "0.1.0"
