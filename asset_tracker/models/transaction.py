"""Replayable purchase and sale records."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from asset_tracker.models.enums import TransactionType


class Transaction(BaseModel):
    type: TransactionType
    symbol: str = Field(min_length=1)
    settle_date: date
    quantity: Decimal
    unit_price: Decimal
