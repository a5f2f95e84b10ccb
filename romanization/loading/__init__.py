"""
Table loading for romanization.
"""

from romanization.loading.tables import (
    CsvTableProvider, TableLoadError, TableProvider,
)

__all__ = ['CsvTableProvider', 'TableLoadError', 'TableProvider']
