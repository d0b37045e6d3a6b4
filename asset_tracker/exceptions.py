"""Custom exceptions for the asset tracker."""

from decimal import Decimal


class AssetTrackerError(Exception):
    """Base exception for asset tracking errors."""


class InvalidInputError(AssetTrackerError):
    """Raised when a purchase, sale, or transaction record fails validation."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"Validation error on '{field}': {message}")


class AssetNotFoundError(AssetTrackerError):
    """Raised when an operation references a symbol with no open position."""

    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(f"Asset not found: {symbol}")


class InsufficientQuantityError(AssetTrackerError):
    """Raised when a sale requires more units than the open lots hold."""

    def __init__(self, symbol: str, requested: Decimal, available: Decimal):
        self.symbol = symbol
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient quantity for {symbol}: "
            f"requested={requested}, available={available}"
        )


class InvalidLotFormatError(AssetTrackerError):
    """Raised when stored lot data is missing fields or has the wrong shape."""

    def __init__(self, index: int, message: str):
        self.index = index
        super().__init__(f"Invalid lot format at position {index}: {message}")
