"""Plain-text position and realized gain/loss report."""

from decimal import Decimal
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from asset_tracker.models.lot import PositionSummary, SaleResult

TEMPLATE_DIR = Path(__file__).parent / "templates"


class PositionReportGenerator:
    """Renders open positions and the sales that produced them."""

    def __init__(self) -> None:
        self.env = Environment(
            loader=FileSystemLoader(str(TEMPLATE_DIR)),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(
        self,
        summaries: list[PositionSummary],
        sales: list[SaleResult] | None = None,
    ) -> str:
        sales = sales or []
        unrealized = [s.unrealized_gain_loss for s in summaries if s.unrealized_gain_loss is not None]
        template = self.env.get_template("position_report.txt")
        return template.render(
            positions=summaries,
            sales=sales,
            total_cost_basis=sum((s.cost_basis for s in summaries), Decimal("0")),
            total_realized=sum((s.realized_gain_loss for s in sales), Decimal("0")),
            total_unrealized=sum(unrealized, Decimal("0")) if unrealized else None,
        )

    def write(
        self,
        output: Path,
        summaries: list[PositionSummary],
        sales: list[SaleResult] | None = None,
    ) -> Path:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(self.render(summaries, sales))
        return output
