"""Shared test fixtures for the asset tracker."""

from datetime import date
from decimal import Decimal

import pytest

from asset_tracker.engines.ledger import LotLedger
from asset_tracker.models.lot import Lot
from asset_tracker.tracker import AssetTracker


@pytest.fixture
def ledger() -> LotLedger:
    return LotLedger()


@pytest.fixture
def tracker() -> AssetTracker:
    return AssetTracker()


@pytest.fixture
def aapl_lots() -> list[Lot]:
    """Two AAPL lots, deliberately stored newest first."""
    return [
        Lot(quantity=Decimal("10"), settle_date=date(2023, 9, 29), unit_price=Decimal("170.0")),
        Lot(quantity=Decimal("10"), settle_date=date(2023, 9, 28), unit_price=Decimal("160.0")),
    ]


@pytest.fixture
def two_lot_tracker() -> AssetTracker:
    tracker = AssetTracker()
    tracker.add_purchase("AAPL", date(2023, 9, 28), Decimal("10"), Decimal("160.0"))
    tracker.add_purchase("AAPL", date(2023, 9, 29), Decimal("10"), Decimal("170.0"))
    return tracker
