"""Coercion and validation of caller-supplied values."""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from asset_tracker.exceptions import InvalidInputError


def to_decimal(value: object, field: str) -> Decimal:
    """Convert a number or numeric string to Decimal.

    Floats go through ``str`` so ``160.1`` becomes ``Decimal("160.1")``
    rather than its binary expansion.
    """
    if isinstance(value, bool) or value is None:
        raise InvalidInputError(field, f"expected a number, got {value!r}")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            raise InvalidInputError(field, f"expected a number, got {value!r}") from None
    if not result.is_finite():
        raise InvalidInputError(field, f"expected a finite number, got {value!r}")
    return result


def require_positive(value: object, field: str) -> Decimal:
    amount = to_decimal(value, field)
    if amount <= 0:
        raise InvalidInputError(field, f"must be positive, got {amount}")
    return amount


def to_date(value: object, field: str) -> date:
    """Accept a date, a datetime, or an ISO ``YYYY-MM-DD`` string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            raise InvalidInputError(field, f"expected YYYY-MM-DD, got {value!r}") from None
    raise InvalidInputError(field, f"expected a date, got {value!r}")


def require_symbol(value: object) -> str:
    if not isinstance(value, str) or not value:
        raise InvalidInputError("symbol", f"expected a non-empty string, got {value!r}")
    return value
