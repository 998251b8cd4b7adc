"""
Keyed lookup tables for enrichment data.

Frequency, pitch-accent and JLPT data all share one shape: a read-only
word -> value mapping, built once from an embedded default table or a
tab-separated file with one ``word<TAB>value`` record per line.
"""

import csv
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Generic, List, Mapping, Optional, TypeVar, Union

logger = logging.getLogger(__name__)

V = TypeVar('V')


def _rows(f):
    """Yield the columns of each line, or None for a line csv cannot split."""
    reader = csv.reader(f, delimiter='\t', quoting=csv.QUOTE_NONE)
    while True:
        try:
            yield next(reader)
        except StopIteration:
            return
        except csv.Error as e:
            logger.debug(f"Line {reader.line_num}: {e}")
            yield None


def read_table(path: Union[str, Path], parse_row) -> Dict[str, V]:
    """
    Read a tab-separated table file.

    Blank lines and lines starting with '#' are ignored. A line with fewer
    than two columns, an empty key, or a value ``parse_row`` rejects (by
    raising ValueError or returning None) is skipped, as is a line the csv
    module rejects (e.g. a field over the csv field size limit).

    Args:
        path: Path to the file.
        parse_row: Callable taking the list of columns and returning the value.

    Returns:
        Dictionary of key -> parsed value. Later lines override earlier ones.

    Raises:
        OSError: If the file cannot be opened or read.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    table: Dict[str, V] = {}
    skipped = 0

    with open(path, 'r', encoding='utf-8-sig', newline='') as f:
        for row in _rows(f):
            if row is None:
                skipped += 1
                continue
            if not row or row[0].startswith('#'):
                continue
            key = row[0].strip()
            if len(row) < 2 or not key:
                skipped += 1
                continue
            try:
                value = parse_row([col.strip() for col in row])
            except ValueError:
                value = None
            if value is None:
                skipped += 1
                continue
            table[key] = value

    if skipped:
        logger.debug(f"Skipped {skipped} malformed lines in {path}")
    logger.info(f"Loaded {len(table)} records from {path}")
    return table


class EnrichmentTable(ABC, Generic[V]):
    """
    Base class for read-only word -> value tables.

    Subclasses define ``DEFAULTS`` (the embedded table) and
    :meth:`parse_row` (how one file line becomes a value).
    """

    DEFAULTS: Mapping[str, V] = {}

    def __init__(self, table: Optional[Mapping[str, V]] = None):
        self._table = MappingProxyType(dict(table or {}))

    @classmethod
    def with_defaults(cls):
        """Create a table from the embedded default data."""
        return cls(cls.DEFAULTS)

    @classmethod
    def load_from_file(cls, path: Union[str, Path]):
        """
        Load a table from a ``word<TAB>value`` file.

        Raises:
            OSError: If the file cannot be read. Malformed lines are skipped.
        """
        return cls(read_table(path, cls.parse_row))

    @staticmethod
    @abstractmethod
    def parse_row(row: List[str]) -> Optional[V]:
        """Convert the columns of one line into a value (None to skip)."""

    def get(self, word: str) -> Optional[V]:
        return self._table.get(word)

    def __contains__(self, word: object) -> bool:
        return word in self._table

    def __len__(self) -> int:
        return len(self._table)
