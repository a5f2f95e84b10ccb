"""
Character map loading for romanization.

A table provider turns a logical table name into a mapping from character
to value, applying caller-supplied key and value transforms. Systems load
all of their tables in their constructor, so a missing or malformed table
surfaces once, before any text is processed.
"""

import csv
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Tuple, TypeVar, Union

from romanization.settings import CSV_COMMENT_PREFIX, CSV_ENCODING, DATA_DIR

logger = logging.getLogger(__name__)

K = TypeVar('K')
V = TypeVar('V')


class TableLoadError(Exception):
    """Raised when a character table cannot be loaded."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Could not load table '{name}': {reason}")


def identity(value: str) -> str:
    return value


class TableProvider(ABC):
    """Base class for sources of character tables."""

    @abstractmethod
    def read_rows(self, name: str) -> List[Tuple[str, str]]:
        """
        Read the raw (key, value) rows of a table, in stored order.

        Raises:
            TableLoadError: If the table is missing or malformed.
        """
        pass

    def load_character_map(
        self,
        name: str,
        key_transform: Callable[[str], K] = identity,
        value_transform: Callable[[str], V] = identity,
    ) -> Dict[K, V]:
        """
        Load a table into a dictionary.

        When a key appears more than once, the first row wins.

        Args:
            name: Logical table name.
            key_transform: Applied to every raw key.
            value_transform: Applied to every raw value.

        Returns:
            Dictionary of transformed keys to transformed values.

        Raises:
            TableLoadError: If the table is missing, malformed or a transform
                fails.
        """
        result: Dict[K, V] = {}
        duplicates = 0

        for line_no, (raw_key, raw_value) in enumerate(self.read_rows(name), 1):
            try:
                key = key_transform(raw_key)
                value = value_transform(raw_value)
            except (ValueError, IndexError, KeyError) as e:
                raise TableLoadError(name, f"row {line_no}: {e}") from e

            if key in result:
                duplicates += 1
                continue
            result[key] = value

        if duplicates:
            logger.warning(f"Table {name}: ignored {duplicates} duplicate keys")
        logger.info(f"Loaded table {name} ({len(result)} entries)")
        return result


class CsvTableProvider(TableProvider):
    """
    Reads tables from ``<data_dir>/<name>`` CSV files.

    Each row is ``character,value``. Blank rows and rows whose first cell
    starts with ``#`` are skipped.
    """

    def __init__(self, data_dir: Optional[Union[str, Path]] = None,
                 encoding: str = CSV_ENCODING):
        self.data_dir = Path(data_dir) if data_dir is not None else DATA_DIR
        self.encoding = encoding

    def path_for(self, name: str) -> Path:
        return self.data_dir / name

    def read_rows(self, name: str) -> List[Tuple[str, str]]:
        path = self.path_for(name)
        if not path.is_file():
            raise TableLoadError(name, f"file not found: {path}")

        try:
            with open(path, encoding=self.encoding, newline='') as f:
                return list(_parse_rows(name, csv.reader(f)))
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise TableLoadError(name, str(e)) from e


def _parse_rows(name: str, reader: Iterable[List[str]]):
    for row in reader:
        if not row or not any(cell.strip() for cell in row):
            continue
        if row[0].startswith(CSV_COMMENT_PREFIX):
            continue
        if len(row) != 2:
            raise TableLoadError(
                name, f"line {reader.line_num}: expected 2 fields, got {len(row)}"
            )
        key, value = row[0].strip(), row[1].strip()
        if not key or not value:
            raise TableLoadError(name, f"line {reader.line_num}: empty key or value")
        yield key, value
