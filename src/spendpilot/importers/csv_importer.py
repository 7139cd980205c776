"""
CSV Importer — load expenses from CSV files.

Accepts SpendPilot's own CSV export as well as most bank/spreadsheet
exports with date, amount and description columns.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path

import pandas as pd

logger = logging.getLogger("spendpilot.importers.csv")

# Common column name mappings
_COLUMN_ALIASES: dict[str, list[str]] = {
    "date": ["date", "transaction_date", "txn_date", "posted_date", "posting_date", "trans_date"],
    "amount": ["amount", "total", "value", "debit", "sum", "net_amount"],
    "description": ["description", "memo", "narrative", "details", "note", "desc", "payee", "merchant"],
    "category": ["category", "type", "expense_type", "classification"],
}

FALLBACK_CATEGORY = "Other"


@dataclass
class ImportedExpense:
    """One parsed CSV row, ready to be added to the tracker."""

    date: date
    amount: float
    category: str
    description: str


class CSVImporter:
    """Parse a CSV file into expense rows.

    Usage::

        importer = CSVImporter("bank_export.csv")
        rows = importer.read(known_categories=["Food", "Bills", "Other"])

    Negative amounts (bank debits) are imported as positive expenses; zero
    amounts and rows with unparseable dates are skipped.
    """

    def __init__(self, file_path: str | Path, encoding: str = "utf-8", delimiter: str = ",") -> None:
        self.file_path = Path(file_path)
        self.encoding = encoding
        self.delimiter = delimiter

    def read(self, known_categories: Iterable[str] | None = None) -> list[ImportedExpense]:
        if not self.file_path.exists():
            raise FileNotFoundError(f"CSV file not found: {self.file_path}")

        df = pd.read_csv(self.file_path, encoding=self.encoding, delimiter=self.delimiter)
        df.columns = df.columns.str.strip().str.lower()

        col_map = self._detect_columns(df)
        rows = self._parse_rows(df, col_map, list(known_categories or []))
        logger.info("Parsed %d expenses from %s", len(rows), self.file_path.name)
        return rows

    def _detect_columns(self, df: pd.DataFrame) -> dict[str, str]:
        """Auto-detect column mappings from the DataFrame."""
        col_map: dict[str, str] = {}
        df_cols = set(df.columns)

        for field, aliases in _COLUMN_ALIASES.items():
            for alias in aliases:
                if alias in df_cols:
                    col_map[field] = alias
                    break

        return col_map

    def _parse_rows(
        self,
        df: pd.DataFrame,
        col_map: dict[str, str],
        known_categories: list[str],
    ) -> list[ImportedExpense]:
        rows: list[ImportedExpense] = []

        date_col = col_map.get("date")
        amount_col = col_map.get("amount")
        desc_col = col_map.get("description")
        cat_col = col_map.get("category")

        if not date_col or not amount_col:
            logger.warning("CSV missing required columns (date, amount)")
            return rows

        for _, row in df.iterrows():
            try:
                raw_date = row[date_col]
                if isinstance(raw_date, str):
                    exp_date = pd.to_datetime(raw_date).date()
                elif isinstance(raw_date, datetime):
                    exp_date = raw_date.date()
                elif isinstance(raw_date, date):
                    exp_date = raw_date
                else:
                    continue

                amount = abs(float(row[amount_col]))
                if amount == 0 or pd.isna(amount):
                    continue

                description = str(row[desc_col]).strip() if desc_col and pd.notna(row[desc_col]) else ""
                raw_category = str(row[cat_col]) if cat_col and pd.notna(row[cat_col]) else ""

                rows.append(
                    ImportedExpense(
                        date=exp_date,
                        amount=amount,
                        category=self._map_category(raw_category, known_categories),
                        description=description or "Imported expense",
                    )
                )
            except (ValueError, TypeError) as e:
                logger.debug("Skipping row: %s", e)

        return rows

    @staticmethod
    def _map_category(raw_category: str, known_categories: list[str]) -> str:
        """Match a raw category against the registry, case-insensitively."""
        if not raw_category:
            return FALLBACK_CATEGORY
        if not known_categories:
            return raw_category.strip()

        lowered = raw_category.strip().lower()
        for name in known_categories:
            if name.lower() == lowered:
                return name
        return FALLBACK_CATEGORY
