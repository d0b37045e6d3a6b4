"""Lot ledger: per-asset lot sequences and their quantity and cost basis."""

from collections.abc import Iterable, Mapping
from datetime import date
from decimal import Decimal

from asset_tracker.exceptions import AssetNotFoundError, InvalidInputError, InvalidLotFormatError
from asset_tracker.models.lot import Lot
from asset_tracker.validation import require_positive, require_symbol, to_date, to_decimal


def current_quantity(position: Iterable[Lot]) -> Decimal:
    """Total open quantity of a position. Zero for an empty position."""
    return sum((lot.quantity for lot in position), Decimal("0"))


def cost_basis(position: Iterable[Lot]) -> Decimal:
    """Sum of quantity * unit_price over the open lots of a position."""
    return sum((lot.quantity * lot.unit_price for lot in position), Decimal("0"))


class LotLedger:
    """In-memory mapping from asset symbol to its open purchase lots.

    Lots are kept in insertion order. A symbol is present only while at
    least one of its lots has a positive quantity.
    """

    def __init__(self) -> None:
        self._positions: dict[str, list[Lot]] = {}

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._positions

    def __len__(self) -> int:
        return len(self._positions)

    def symbols(self) -> list[str]:
        return list(self._positions)

    def lots(self, symbol: str) -> list[Lot]:
        """Copies of the symbol's lots, or an empty list when it has none."""
        return [lot.model_copy() for lot in self._positions.get(symbol, [])]

    def add_purchase(
        self,
        symbol: str,
        settle_date: date | str,
        quantity: Decimal | int | float | str,
        unit_price: Decimal | int | float | str,
    ) -> Lot:
        """Append a new lot to the symbol's position, creating it if absent."""
        symbol = require_symbol(symbol)
        lot = Lot(
            quantity=require_positive(quantity, "quantity"),
            settle_date=to_date(settle_date, "settle_date"),
            unit_price=require_positive(unit_price, "unit_price"),
        )
        self._positions.setdefault(symbol, []).append(lot)
        return lot.model_copy()

    def replace_lots(self, symbol: str, lots: Iterable[Lot]) -> list[Lot]:
        """Swap in a new lot sequence, dropping exhausted lots.

        The symbol is removed when no open lot remains. Returns the lots kept.
        """
        kept = [lot.model_copy() for lot in lots if not lot.is_exhausted]
        if kept:
            self._positions[symbol] = kept
        else:
            self._positions.pop(symbol, None)
        return [lot.model_copy() for lot in kept]

    def remove(self, symbol: str) -> None:
        if self._positions.pop(symbol, None) is None:
            raise AssetNotFoundError(symbol)

    def current_quantity(self, symbol: str) -> Decimal:
        return current_quantity(self._positions.get(symbol, []))

    def cost_basis(self, symbol: str) -> Decimal:
        return cost_basis(self._positions.get(symbol, []))

    def unrealized_gain_loss(
        self, symbol: str, market_price: Decimal | int | float | str
    ) -> Decimal:
        """Paper gain/loss of the open quantity valued at ``market_price``."""
        position = self._positions.get(symbol)
        if not position:
            raise AssetNotFoundError(symbol)
        price = to_decimal(market_price, "market_price")
        return current_quantity(position) * price - cost_basis(position)

    def snapshot(self) -> dict[str, list[Lot]]:
        return {symbol: self.lots(symbol) for symbol in self._positions}

    # --- Serialization ---

    def to_dict(self) -> dict[str, list[list[str]]]:
        """Export as ``{symbol: [[quantity, settle_date, unit_price], ...]}``."""
        return {
            symbol: [
                [str(quantity), settle_date.isoformat(), str(unit_price)]
                for quantity, settle_date, unit_price in (lot.as_triple() for lot in lots)
            ]
            for symbol, lots in self._positions.items()
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Iterable]) -> "LotLedger":
        """Rebuild a ledger from the ``to_dict`` layout.

        Each lot may be a ``[quantity, settle_date, unit_price]`` triple or a
        mapping with those keys. Exhausted lots are dropped.
        """
        if not isinstance(data, Mapping):
            raise InvalidLotFormatError(0, f"expected a mapping of symbols, got {type(data).__name__}")
        ledger = cls()
        for symbol, entries in data.items():
            if not isinstance(entries, (list, tuple)):
                raise InvalidLotFormatError(0, f"lots for {symbol!r} must be a list")
            lots = [_lot_from_entry(index, entry) for index, entry in enumerate(entries)]
            ledger.replace_lots(require_symbol(symbol), lots)
        return ledger


def _lot_from_entry(index: int, entry: object) -> Lot:
    if isinstance(entry, Mapping):
        missing = [k for k in ("quantity", "settle_date", "unit_price") if k not in entry]
        if missing:
            raise InvalidLotFormatError(index, f"missing fields: {', '.join(missing)}")
        raw = (entry["quantity"], entry["settle_date"], entry["unit_price"])
    elif isinstance(entry, (list, tuple)) and len(entry) == 3:
        raw = tuple(entry)
    else:
        raise InvalidLotFormatError(index, f"expected a 3-item triple, got {entry!r}")

    try:
        quantity = to_decimal(raw[0], "quantity")
        settle_date = to_date(raw[1], "settle_date")
        unit_price = require_positive(raw[2], "unit_price")
    except InvalidInputError as exc:
        raise InvalidLotFormatError(index, str(exc)) from exc
    if quantity < 0:
        raise InvalidLotFormatError(index, f"negative quantity {quantity}")
    return Lot(quantity=quantity, settle_date=settle_date, unit_price=unit_price)
