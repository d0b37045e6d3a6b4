"""FIFO sale matching engine."""

import logging
from collections.abc import Iterable, Mapping
from decimal import Decimal

from pydantic import ValidationError

from asset_tracker.exceptions import InsufficientQuantityError, InvalidLotFormatError
from asset_tracker.models.lot import Lot, LotFragment, SaleMatch
from asset_tracker.validation import to_decimal

logger = logging.getLogger(__name__)


class SaleMatcher:
    """Consumes a position's lots oldest settle date first to fill a sale."""

    def match_sale(
        self,
        position: Iterable[Lot | Mapping],
        quantity: Decimal | int | float | str,
        unit_price: Decimal | int | float | str,
        symbol: str = "",
    ) -> tuple[list[Lot], Decimal]:
        """Return (remaining lots, realized gain/loss) for selling ``quantity``."""
        result = self.match(position, quantity, unit_price, symbol=symbol)
        return result.lots, result.realized_gain_loss

    def match(
        self,
        position: Iterable[Lot | Mapping],
        quantity: Decimal | int | float | str,
        unit_price: Decimal | int | float | str,
        symbol: str = "",
    ) -> SaleMatch:
        """Match a sale against a position using FIFO.

        Args:
            position: Open lots for one symbol, in any order. Entries may be
                Lot models or mappings with the same fields.
            quantity: Units sold. Must be positive.
            unit_price: Sale price per unit.
            symbol: Only used in error messages.

        Returns:
            SaleMatch with the surviving lots (exhausted ones dropped), the
            consumed fragments, and the realized gain/loss.

        Raises:
            InvalidLotFormatError: an entry of ``position`` is malformed.
            InsufficientQuantityError: the lots hold less than ``quantity``.
        """
        quantity = to_decimal(quantity, "quantity")
        unit_price = to_decimal(unit_price, "unit_price")
        if quantity <= 0:
            raise ValueError(f"Sale quantity must be positive, got {quantity}")

        lots = self._coerce_lots(position)
        # sorted() is stable: lots settling the same day keep insertion order
        ordered = sorted(lots, key=lambda lot: lot.settle_date)

        remaining = quantity
        realized = Decimal("0")
        fragments: list[LotFragment] = []

        for lot in ordered:
            if remaining <= 0:
                break
            drawn = min(lot.quantity, remaining)
            if drawn == 0:
                continue
            fragment = LotFragment(
                settle_date=lot.settle_date,
                quantity=drawn,
                unit_price=lot.unit_price,
                sale_price=unit_price,
            )
            realized += fragment.gain_loss
            lot.quantity -= drawn
            remaining -= drawn
            fragments.append(fragment)
            logger.debug(
                "Drew %s of %s lot settled %s at cost %s",
                drawn, symbol or "position", lot.settle_date, lot.unit_price,
            )

        if remaining > 0:
            available = quantity - remaining
            raise InsufficientQuantityError(symbol, quantity, available)

        return SaleMatch(
            lots=[lot for lot in ordered if not lot.is_exhausted],
            fragments=fragments,
            realized_gain_loss=realized,
        )

    @staticmethod
    def _coerce_lots(position: Iterable[Lot | Mapping]) -> list[Lot]:
        """Copy each entry into a fresh Lot so the caller's data is untouched."""
        lots: list[Lot] = []
        for index, entry in enumerate(position):
            if isinstance(entry, Lot):
                lots.append(entry.model_copy())
                continue
            if not isinstance(entry, Mapping):
                raise InvalidLotFormatError(index, f"expected a lot, got {type(entry).__name__}")
            try:
                lots.append(Lot.model_validate(dict(entry)))
            except ValidationError as exc:
                fields = sorted({str(err["loc"][0]) for err in exc.errors() if err["loc"]})
                raise InvalidLotFormatError(index, f"bad fields: {', '.join(fields)}") from exc
        return lots
