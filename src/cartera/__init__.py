"""Portfolio valuation and transaction ledger service over JSON snapshots."""

__version__ = "0.1.0"
