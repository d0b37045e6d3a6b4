"""Data models for the asset tracker."""

from asset_tracker.models.enums import TransactionType
from asset_tracker.models.lot import (
    Lot,
    LotFragment,
    PositionSummary,
    SaleMatch,
    SaleResult,
)
from asset_tracker.models.transaction import Transaction

__all__ = [
    "Lot",
    "LotFragment",
    "PositionSummary",
    "SaleMatch",
    "SaleResult",
    "Transaction",
    "TransactionType",
]
