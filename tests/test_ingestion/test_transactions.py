"""Tests for the transaction file loader."""

import json
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

from asset_tracker.exceptions import InvalidInputError
from asset_tracker.ingestion.transactions import TransactionLoader
from asset_tracker.models.enums import TransactionType


class TestJSONLoading:
    def test_list_of_records(self, tmp_path: Path):
        path = tmp_path / "txns.json"
        path.write_text(json.dumps([
            {"type": "purchase", "symbol": "AAPL", "settle_date": "2023-09-28",
             "quantity": 10.0, "unit_price": 160.0},
            {"type": "SELL", "symbol": "AAPL", "settle_date": "2023-10-31",
             "quantity": "9", "unit_price": "200.0"},
        ]))
        transactions = TransactionLoader().parse(path)

        assert [t.type for t in transactions] == [TransactionType.PURCHASE, TransactionType.SALE]
        assert transactions[0].quantity == Decimal("10.0")
        assert transactions[1].settle_date == date(2023, 10, 31)

    def test_wrapped_object(self, tmp_path: Path):
        path = tmp_path / "txns.json"
        path.write_text(json.dumps({"transactions": [
            {"type": "buy", "symbol": "BTC", "settle_date": "2024-01-01",
             "quantity": "0.5", "unit_price": "40000"},
        ]}))
        assert len(TransactionLoader().parse(path)) == 1

    def test_unknown_type(self, tmp_path: Path):
        path = tmp_path / "txns.json"
        path.write_text(json.dumps([
            {"type": "dividend", "symbol": "AAPL", "settle_date": "2023-09-28",
             "quantity": 1, "unit_price": 1},
        ]))
        with pytest.raises(InvalidInputError) as exc_info:
            TransactionLoader().parse(path)
        assert exc_info.value.field == "record 1"

    def test_missing_field(self, tmp_path: Path):
        path = tmp_path / "txns.json"
        path.write_text(json.dumps([{"type": "buy", "symbol": "AAPL", "quantity": 1, "unit_price": 1}]))
        with pytest.raises(InvalidInputError, match="settle_date"):
            TransactionLoader().parse(path)


class TestCSVLoading:
    def test_csv_records(self, tmp_path: Path):
        path = tmp_path / "txns.csv"
        path.write_text(
            "Type,Symbol,Settle_Date,Quantity,Unit_Price\n"
            "purchase,AAPL,2023-09-28,10,160.0\n"
            "\n"
            "sale,AAPL,2023-10-31,9,200.0\n"
        )
        transactions = TransactionLoader().parse(path)
        assert len(transactions) == 2
        assert transactions[1].unit_price == Decimal("200.0")

    def test_missing_columns(self, tmp_path: Path):
        path = tmp_path / "txns.csv"
        path.write_text("type,symbol,quantity\nbuy,AAPL,1\n")
        with pytest.raises(InvalidInputError, match="settle_date"):
            TransactionLoader().parse(path)

    def test_bad_number(self, tmp_path: Path):
        path = tmp_path / "txns.csv"
        path.write_text("type,symbol,settle_date,quantity,unit_price\nbuy,AAPL,2023-09-28,ten,160\n")
        with pytest.raises(InvalidInputError) as exc_info:
            TransactionLoader().parse(path)
        assert exc_info.value.field == "record 1"


    def test_blank_row_with_extra_column(self, tmp_path: Path):
        path = tmp_path / "txns.csv"
        path.write_text(
            "type,symbol,settle_date,quantity,unit_price\n"
            ",,,,,x\n"
        )
        with pytest.raises(InvalidInputError, match="too many columns"):
            TransactionLoader().parse(path)

    def test_trailing_comma_is_allowed(self, tmp_path: Path):
        path = tmp_path / "txns.csv"
        path.write_text(
            "type,symbol,settle_date,quantity,unit_price\n"
            "buy,AAPL,2023-09-28,10,160,\n"
        )
        assert len(TransactionLoader().parse(path)) == 1


class TestLoaderErrors:
    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            TransactionLoader().parse(tmp_path / "missing.json")

    def test_unsupported_extension(self, tmp_path: Path):
        path = tmp_path / "txns.xlsx"
        path.write_text("")
        with pytest.raises(ValueError):
            TransactionLoader().parse(path)

    def test_validate_flags_non_positive_values(self, tmp_path: Path):
        path = tmp_path / "txns.csv"
        path.write_text(
            "type,symbol,settle_date,quantity,unit_price\n"
            "buy,AAPL,2023-09-28,0,160\n"
            "sell,AAPL,2023-09-29,1,-2\n"
        )
        loader = TransactionLoader()
        errors = loader.validate(loader.parse(path))
        assert errors == [
            "record 1: quantity must be > 0",
            "record 2: unit_price must be > 0",
        ]
