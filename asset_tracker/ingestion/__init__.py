"""Transaction ingestion from files."""

from asset_tracker.ingestion.transactions import TransactionLoader

__all__ = ["TransactionLoader"]
