"""Asset tracker service: validates requests and applies them to a ledger."""

import logging
import threading
from collections.abc import Iterable, Mapping
from datetime import date
from decimal import Decimal

from asset_tracker.engines.ledger import LotLedger
from asset_tracker.engines.sale_matcher import SaleMatcher
from asset_tracker.exceptions import AssetNotFoundError, AssetTrackerError
from asset_tracker.models.enums import TransactionType
from asset_tracker.models.lot import Lot, PositionSummary, SaleResult
from asset_tracker.models.transaction import Transaction
from asset_tracker.validation import require_positive, require_symbol, to_date, to_decimal

logger = logging.getLogger(__name__)


class AssetTracker:
    """Purchases, FIFO sales, and unrealized gain/loss over one ledger.

    Each instance owns its own ledger, so independent books (one per account,
    one per test) never share state. Operations on the same symbol are
    serialized; different symbols do not block each other.

    Args:
        ledger: Starting ledger. A new empty one is created when omitted.
        matcher: Sale matcher to use.
        strict_symbols: When True, selling a symbol with no position raises
            AssetNotFoundError. Otherwise the symbol is treated as holding
            zero units and the sale fails with InsufficientQuantityError.
    """

    def __init__(
        self,
        ledger: LotLedger | None = None,
        matcher: SaleMatcher | None = None,
        strict_symbols: bool = False,
    ) -> None:
        self.ledger = ledger if ledger is not None else LotLedger()
        self.matcher = matcher or SaleMatcher()
        self.strict_symbols = strict_symbols
        self._symbol_locks: dict[str, threading.RLock] = {}
        self._lock = threading.RLock()

    def _symbol_lock(self, symbol: str) -> threading.RLock:
        with self._lock:
            if symbol not in self._symbol_locks:
                self._symbol_locks[symbol] = threading.RLock()
            return self._symbol_locks[symbol]

    # --- Operations ---

    def add_purchase(
        self,
        symbol: str,
        settle_date: date | str,
        quantity: Decimal | int | float | str,
        unit_price: Decimal | int | float | str,
    ) -> dict[str, list[Lot]]:
        """Record a purchase lot. Returns a snapshot of the updated ledger."""
        symbol = require_symbol(symbol)
        with self._symbol_lock(symbol):
            try:
                with self._lock:
                    lot = self.ledger.add_purchase(symbol, settle_date, quantity, unit_price)
            except AssetTrackerError as exc:
                logger.warning("Rejected purchase of %s: %s", symbol, exc)
                raise
            logger.info(
                "Purchased %s %s settling %s at %s",
                lot.quantity, symbol, lot.settle_date, lot.unit_price,
            )
        return self.positions()

    def add_sale(
        self,
        symbol: str,
        settle_date: date | str,
        quantity: Decimal | int | float | str,
        unit_price: Decimal | int | float | str,
    ) -> SaleResult:
        """Sell ``quantity`` units of ``symbol`` against its lots, oldest first.

        The sale's settle date is recorded on the result; consumption order
        depends only on the purchase lots' dates. Nothing is written to the
        ledger unless the whole quantity can be filled.
        """
        symbol = require_symbol(symbol)
        with self._symbol_lock(symbol):
            try:
                sale_date = to_date(settle_date, "settle_date")
                amount = require_positive(quantity, "quantity")
                price = require_positive(unit_price, "unit_price")
                if self.strict_symbols and symbol not in self.ledger:
                    raise AssetNotFoundError(symbol)
                match = self.matcher.match(self.ledger.lots(symbol), amount, price, symbol=symbol)
            except AssetTrackerError as exc:
                logger.warning("Rejected sale of %s: %s", symbol, exc)
                raise

            with self._lock:
                remaining = self.ledger.replace_lots(symbol, match.lots)

        logger.info(
            "Sold %s %s at %s: realized %s across %d lot(s)",
            amount, symbol, price, match.realized_gain_loss, len(match.fragments),
        )
        if not remaining:
            logger.info("Position in %s closed", symbol)

        return SaleResult(
            symbol=symbol,
            settle_date=sale_date,
            quantity=amount,
            unit_price=price,
            realized_gain_loss=match.realized_gain_loss,
            fragments=match.fragments,
            remaining_lots=remaining,
        )

    def unrealized_gain_loss(
        self, symbol: str, market_price: Decimal | int | float | str
    ) -> Decimal:
        with self._symbol_lock(symbol):
            return self.ledger.unrealized_gain_loss(symbol, market_price)

    # --- Views ---

    def positions(self) -> dict[str, list[Lot]]:
        with self._lock:
            return self.ledger.snapshot()

    def summaries(
        self, market_prices: Mapping[str, Decimal | int | float | str] | None = None
    ) -> list[PositionSummary]:
        """One summary per open symbol, sorted by symbol.

        Symbols present in ``market_prices`` also get an unrealized gain/loss.
        """
        market_prices = market_prices or {}
        summaries = []
        for symbol, lots in sorted(self.positions().items()):
            quantity = sum((lot.quantity for lot in lots), Decimal("0"))
            basis = sum((lot.cost_basis for lot in lots), Decimal("0"))
            summary = PositionSummary(
                symbol=symbol,
                quantity=quantity,
                cost_basis=basis,
                lot_count=len(lots),
            )
            if symbol in market_prices:
                price = to_decimal(market_prices[symbol], "market_price")
                summary.market_price = price
                summary.unrealized_gain_loss = quantity * price - basis
            summaries.append(summary)
        return summaries

    # --- Transactions ---

    def apply(self, transaction: Transaction) -> SaleResult | None:
        """Apply one transaction. Returns the SaleResult for sales."""
        if transaction.type == TransactionType.PURCHASE:
            self.add_purchase(
                transaction.symbol,
                transaction.settle_date,
                transaction.quantity,
                transaction.unit_price,
            )
            return None
        return self.add_sale(
            transaction.symbol,
            transaction.settle_date,
            transaction.quantity,
            transaction.unit_price,
        )

    def replay(self, transactions: Iterable[Transaction]) -> list[SaleResult]:
        """Apply transactions in order, stopping at the first failure."""
        results = []
        for transaction in transactions:
            result = self.apply(transaction)
            if result is not None:
                results.append(result)
        return results
