"""Asset Tracker: FIFO lot matching and gain/loss for purchased assets."""

from asset_tracker.engines import LotLedger, SaleMatcher
from asset_tracker.exceptions import (
    AssetNotFoundError,
    AssetTrackerError,
    InsufficientQuantityError,
    InvalidInputError,
    InvalidLotFormatError,
)
from asset_tracker.models import Lot, SaleResult
from asset_tracker.tracker import AssetTracker

__all__ = [
    "AssetNotFoundError",
    "AssetTracker",
    "AssetTrackerError",
    "InsufficientQuantityError",
    "InvalidInputError",
    "InvalidLotFormatError",
    "Lot",
    "LotLedger",
    "SaleMatcher",
    "SaleResult",
]
