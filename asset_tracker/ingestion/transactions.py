"""Transaction file loader for JSON and CSV purchase/sale records."""

import csv
import json
from pathlib import Path

from pydantic import ValidationError

from asset_tracker.exceptions import InvalidInputError
from asset_tracker.models.enums import TransactionType
from asset_tracker.models.transaction import Transaction
from asset_tracker.validation import to_date, to_decimal

CSV_COLUMNS = ("type", "symbol", "settle_date", "quantity", "unit_price")

_TYPE_ALIASES = {
    "PURCHASE": TransactionType.PURCHASE,
    "BUY": TransactionType.PURCHASE,
    "SALE": TransactionType.SALE,
    "SELL": TransactionType.SALE,
}


class TransactionLoader:
    """Reads replayable transactions from ``.json`` or ``.csv`` files."""

    def parse(self, file_path: Path) -> list[Transaction]:
        """Read a file and return its transactions in file order."""
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        suffix = file_path.suffix.lower()
        if suffix == ".json":
            records = self._read_json(file_path)
        elif suffix == ".csv":
            records = self._read_csv(file_path)
        else:
            raise ValueError(f"Unsupported transaction file type: {file_path.suffix or '(none)'}")

        return [self._to_transaction(number, record) for number, record in enumerate(records, 1)]

    def validate(self, transactions: list[Transaction]) -> list[str]:
        """Flag records the tracker would reject. Returns error messages."""
        errors = []
        for number, txn in enumerate(transactions, 1):
            if txn.quantity <= 0:
                errors.append(f"record {number}: quantity must be > 0")
            if txn.unit_price <= 0:
                errors.append(f"record {number}: unit_price must be > 0")
        return errors

    @staticmethod
    def _read_json(file_path: Path) -> list[dict]:
        raw = json.loads(file_path.read_text())
        if isinstance(raw, dict):
            raw = raw.get("transactions")
        if not isinstance(raw, list):
            raise InvalidInputError(
                "transactions", "expected a list or an object with a 'transactions' list"
            )
        return raw

    @staticmethod
    def _read_csv(file_path: Path) -> list[dict]:
        reader = csv.DictReader(file_path.read_text().splitlines())
        header = [name.strip().lower() for name in reader.fieldnames or []]
        missing = [col for col in CSV_COLUMNS if col not in header]
        if missing:
            raise InvalidInputError("header", f"missing columns: {', '.join(missing)}")
        reader.fieldnames = header
        rows = []
        for number, row in enumerate(reader, 1):
            if any(extra.strip() for extra in row.get(None) or []):
                raise InvalidInputError(f"record {number}", "too many columns")
            if any(isinstance(value, str) and value.strip() for value in row.values()):
                rows.append(row)
        return rows

    @staticmethod
    def _to_transaction(number: int, record: object) -> Transaction:
        if not isinstance(record, dict):
            raise InvalidInputError(f"record {number}", f"expected an object, got {record!r}")

        missing = [col for col in CSV_COLUMNS if record.get(col) in (None, "")]
        if missing:
            raise InvalidInputError(f"record {number}", f"missing {', '.join(missing)}")

        kind = _TYPE_ALIASES.get(str(record["type"]).strip().upper())
        if kind is None:
            raise InvalidInputError(f"record {number}", f"unknown type {record['type']!r}")

        try:
            return Transaction(
                type=kind,
                symbol=str(record["symbol"]).strip(),
                settle_date=to_date(record["settle_date"], "settle_date"),
                quantity=to_decimal(record["quantity"], "quantity"),
                unit_price=to_decimal(record["unit_price"], "unit_price"),
            )
        except InvalidInputError as exc:
            raise InvalidInputError(f"record {number}", str(exc)) from exc
        except ValidationError as exc:
            fields = ", ".join(sorted({str(err["loc"][0]) for err in exc.errors() if err["loc"]}))
            raise InvalidInputError(f"record {number}", f"invalid {fields}") from exc
