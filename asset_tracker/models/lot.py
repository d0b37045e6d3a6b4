"""Lot, sale, and position models."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field


class Lot(BaseModel):
    quantity: Decimal = Field(ge=0)
    settle_date: date
    unit_price: Decimal = Field(gt=0)

    @property
    def cost_basis(self) -> Decimal:
        return self.quantity * self.unit_price

    @property
    def is_exhausted(self) -> bool:
        return self.quantity == 0

    def as_triple(self) -> tuple[Decimal, date, Decimal]:
        return (self.quantity, self.settle_date, self.unit_price)


class LotFragment(BaseModel):
    """The part of one lot drawn down by a sale."""

    settle_date: date
    quantity: Decimal
    unit_price: Decimal
    sale_price: Decimal

    @property
    def cost_basis(self) -> Decimal:
        return self.quantity * self.unit_price

    @property
    def proceeds(self) -> Decimal:
        return self.quantity * self.sale_price

    @property
    def gain_loss(self) -> Decimal:
        return (self.sale_price - self.unit_price) * self.quantity


class SaleMatch(BaseModel):
    """Output of the FIFO matcher for one position."""

    lots: list[Lot]
    fragments: list[LotFragment] = Field(default_factory=list)
    realized_gain_loss: Decimal = Decimal("0")


class SaleResult(BaseModel):
    """Output of a sale applied to the ledger."""

    symbol: str
    settle_date: date
    quantity: Decimal
    unit_price: Decimal
    realized_gain_loss: Decimal
    fragments: list[LotFragment] = Field(default_factory=list)
    remaining_lots: list[Lot] = Field(default_factory=list)

    @property
    def position_closed(self) -> bool:
        return not self.remaining_lots

    @property
    def proceeds(self) -> Decimal:
        return self.quantity * self.unit_price

    @property
    def cost_basis(self) -> Decimal:
        return sum((f.cost_basis for f in self.fragments), Decimal("0"))


class PositionSummary(BaseModel):
    symbol: str
    quantity: Decimal
    cost_basis: Decimal
    lot_count: int
    market_price: Decimal | None = None
    unrealized_gain_loss: Decimal | None = None

    @property
    def average_cost(self) -> Decimal:
        if self.quantity == 0:
            return Decimal("0")
        return self.cost_basis / self.quantity
