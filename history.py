"""
In-memory history of completed factorizations.

Records are appended after every successful factorization and only leave the
store through an explicit removal. The store keeps insertion order, allows
duplicate numbers and never edits a record in place.
"""
import logging
import threading
from typing import Iterable, Iterator, List, NamedTuple, Optional, Tuple

logger = logging.getLogger(__name__)

SEPARATOR = " × "


class HistoryRecord(NamedTuple):
    number: int
    factorization: str


def format_factorization(grouped: Iterable[Tuple[int, int]], separator: str = SEPARATOR) -> str:
    """Render (prime, exponent) groups as e.g. ``2^3 × 5``."""
    return separator.join(
        f"{prime}^{exponent}" if exponent > 1 else str(prime)
        for prime, exponent in grouped
    )


class HistoryStore:
    """
    Ordered collection of HistoryRecord entries.

    Mutations and snapshots are serialized by a lock, so a store can be
    shared between a UI thread and a worker computing factorizations.
    """

    def __init__(self, records: Optional[Iterable[HistoryRecord]] = None):
        self._lock = threading.Lock()
        self._records: List[HistoryRecord] = [HistoryRecord(*r) for r in records or ()]

    def append(self, number: int, factorization: str) -> HistoryRecord:
        record = HistoryRecord(number, factorization)
        with self._lock:
            self._records.append(record)
            size = len(self._records)
        logger.debug("history append %s = %s (size=%d)", number, factorization, size)
        return record

    def add(self, result, separator: str = SEPARATOR) -> HistoryRecord:
        """Append a Factorization result, formatting its groups."""
        return self.append(result.number, format_factorization(result.groups, separator))

    def remove_at(self, index: int) -> HistoryRecord:
        """
        Remove and return the record at ``index``.

        Raises:
            IndexError: if index is not in range(len(self)); the store is
                left unchanged. Negative indexes are rejected.
        """
        with self._lock:
            if not 0 <= index < len(self._records):
                raise IndexError(f"history index {index} out of range (size={len(self._records)})")
            record = self._records.pop(index)
        logger.debug("history remove_at %d -> %s", index, record.number)
        return record

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __getitem__(self, index: int) -> HistoryRecord:
        with self._lock:
            if not 0 <= index < len(self._records):
                raise IndexError(f"history index {index} out of range (size={len(self._records)})")
            return self._records[index]

    def __iter__(self) -> Iterator[HistoryRecord]:
        return iter(self.list())

    def __repr__(self) -> str:
        return f"HistoryStore({self.list()!r})"

    # Defined last: the method name shadows the builtin inside the class body.
    def list(self) -> List[HistoryRecord]:
        """Snapshot of the records in append order."""
        with self._lock:
            return self._records.copy()
