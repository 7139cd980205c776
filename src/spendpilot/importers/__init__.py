"""Importers package — bring expenses in from external files."""
from spendpilot.importers.csv_importer import CSVImporter, ImportedExpense

__all__ = ["CSVImporter", "ImportedExpense"]
