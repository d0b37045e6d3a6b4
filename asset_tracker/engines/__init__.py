"""Lot ledger and sale matching engines."""

from asset_tracker.engines.ledger import LotLedger, cost_basis, current_quantity
from asset_tracker.engines.sale_matcher import SaleMatcher

__all__ = [
    "LotLedger",
    "SaleMatcher",
    "cost_basis",
    "current_quantity",
]
