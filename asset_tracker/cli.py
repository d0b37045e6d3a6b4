"""Typer CLI interface for the asset tracker."""

import json
import logging
from decimal import Decimal
from pathlib import Path

import typer

from asset_tracker.exceptions import AssetTrackerError

app = typer.Typer(
    name="asset-tracker",
    help="Asset Tracker: FIFO lot matching, realized and unrealized gain/loss.",
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Asset Tracker: FIFO lot matching, realized and unrealized gain/loss."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _parse_prices(prices: list[str]) -> dict[str, Decimal]:
    """Parse repeated ``SYMBOL=PRICE`` options."""
    from asset_tracker.validation import to_decimal

    parsed: dict[str, Decimal] = {}
    for item in prices:
        symbol, sep, value = item.partition("=")
        if not sep or not symbol:
            raise typer.BadParameter(f"expected SYMBOL=PRICE, got {item!r}", param_hint="--price")
        try:
            parsed[symbol] = to_decimal(value, f"price for {symbol}")
        except AssetTrackerError as exc:
            raise typer.BadParameter(str(exc), param_hint="--price") from exc
    return parsed


def _load_ledger(path: Path):
    from asset_tracker.engines.ledger import LotLedger

    if not path.exists():
        typer.echo(f"Error: Ledger file not found: {path}", err=True)
        raise typer.Exit(1)
    try:
        return LotLedger.from_dict(json.loads(path.read_text()))
    except (AssetTrackerError, ValueError) as exc:
        typer.echo(f"Error: Cannot load ledger {path.name}: {exc}", err=True)
        raise typer.Exit(1)


def _print_positions(summaries: list) -> None:
    from rich.console import Console
    from rich.table import Table

    if not summaries:
        typer.echo("No open positions.")
        return

    table = Table(title="Open Positions")
    table.add_column("Symbol")
    table.add_column("Quantity", justify="right")
    table.add_column("Lots", justify="right")
    table.add_column("Cost Basis", justify="right")
    table.add_column("Avg Cost", justify="right")
    table.add_column("Market", justify="right")
    table.add_column("Unrealized", justify="right")
    for s in summaries:
        table.add_row(
            s.symbol,
            str(s.quantity),
            str(s.lot_count),
            f"{s.cost_basis:,.2f}",
            f"{s.average_cost:,.2f}",
            f"{s.market_price:,.2f}" if s.market_price is not None else "-",
            f"{s.unrealized_gain_loss:,.2f}" if s.unrealized_gain_loss is not None else "-",
        )
    Console().print(table)


@app.command()
def replay(
    transactions_file: Path = typer.Argument(..., help="JSON or CSV file of purchases and sales"),
    ledger_file: Path | None = typer.Option(
        None, "--ledger", "-l", help="Start from a ledger snapshot (JSON) instead of an empty ledger",
    ),
    dump: Path | None = typer.Option(
        None, "--dump", help="Write the resulting ledger snapshot to this JSON file",
    ),
    prices: list[str] = typer.Option(
        [], "--price", "-p", help="Market price for unrealized gain/loss, as SYMBOL=PRICE (repeatable)",
    ),
    strict_symbols: bool = typer.Option(
        False,
        "--strict-symbols",
        envvar="ASSET_TRACKER_STRICT_SYMBOLS",
        help="Report selling an unknown symbol as 'asset not found' instead of insufficient quantity",
    ),
    report: Path | None = typer.Option(
        None, "--report", "-o", help="Write a plain-text position report to this file",
    ),
) -> None:
    """Replay purchases and sales in file order and show the resulting positions."""
    from asset_tracker.engines.ledger import LotLedger
    from asset_tracker.ingestion.transactions import TransactionLoader
    from asset_tracker.reports.position_report import PositionReportGenerator
    from asset_tracker.tracker import AssetTracker

    market_prices = _parse_prices(prices)
    ledger = _load_ledger(ledger_file) if ledger_file else LotLedger()

    loader = TransactionLoader()
    try:
        transactions = loader.parse(transactions_file)
    except (FileNotFoundError, ValueError, AssetTrackerError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)

    errors = loader.validate(transactions)
    if errors:
        for error in errors:
            typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(1)

    tracker = AssetTracker(ledger=ledger, strict_symbols=strict_symbols)
    sales = []
    for number, txn in enumerate(transactions, 1):
        try:
            result = tracker.apply(txn)
        except AssetTrackerError as exc:
            typer.echo(
                f"Error: record {number} ({txn.type.value} {txn.quantity} {txn.symbol} "
                f"on {txn.settle_date}): {exc}",
                err=True,
            )
            raise typer.Exit(1)
        if result is not None:
            sales.append(result)
            typer.echo(
                f"{result.settle_date} SELL {result.quantity} {result.symbol} @ {result.unit_price}: "
                f"realized {result.realized_gain_loss:,.2f}"
            )

    total_realized = sum((s.realized_gain_loss for s in sales), Decimal("0"))
    typer.echo(f"Applied {len(transactions)} transaction(s); realized gain/loss {total_realized:,.2f}")

    summaries = tracker.summaries(market_prices)
    _print_positions(summaries)

    unknown = sorted(set(market_prices) - {s.symbol for s in summaries})
    for symbol in unknown:
        typer.echo(f"Warning: no open position for priced symbol {symbol}", err=True)

    if dump:
        dump.parent.mkdir(parents=True, exist_ok=True)
        dump.write_text(json.dumps(tracker.ledger.to_dict(), indent=2))
        typer.echo(f"Ledger written to {dump}")

    if report:
        PositionReportGenerator().write(report, summaries, sales)
        typer.echo(f"Report written to {report}")


@app.command()
def unrealized(
    ledger_file: Path = typer.Argument(..., help="Ledger snapshot JSON written by `replay --dump`"),
    symbol: str = typer.Argument(..., help="Asset symbol (case-sensitive)"),
    price: str = typer.Argument(..., help="Market price per unit"),
) -> None:
    """Show unrealized gain/loss for one symbol at a market price."""
    ledger = _load_ledger(ledger_file)
    try:
        gain_loss = ledger.unrealized_gain_loss(symbol, price)
    except AssetTrackerError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)
    typer.echo(f"{symbol}: unrealized gain/loss {gain_loss:,.2f}")


if __name__ == "__main__":
    app()
