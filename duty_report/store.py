"""
Record store: an immutable, append-only snapshot of the service log.

The store never changes in place. `merge_import` returns a new snapshot with
the batch appended, after checking the whole batch, so a rejected batch leaves
nothing behind.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Tuple

from duty_report.domain.models import ServiceRecord


class DuplicateRecordError(ValueError):
    """Raised when an import batch reuses an existing record id."""


@dataclass(frozen=True)
class RecordStore:
    """
    Ordered, immutable collection of service records.
    """

    records: Tuple[ServiceRecord, ...] = field(default_factory=tuple)

    @classmethod
    def from_records(cls, records: Iterable[ServiceRecord]) -> "RecordStore":
        store = cls()
        return merge_import(store, records)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[ServiceRecord]:
        return iter(self.records)

    def ids(self) -> frozenset[str]:
        return frozenset(r.id for r in self.records)


def merge_import(store: RecordStore, batch: Iterable[ServiceRecord]) -> RecordStore:
    """
    Append `batch` to `store`, returning a new store.

    Existing records keep their order and identity; new records follow in
    batch order.

    Raises
    ------
    DuplicateRecordError
        If a batch id already exists in the store or repeats within the batch.
    """
    batch = tuple(batch)
    existing = store.ids()
    incoming: set[str] = set()
    for record in batch:
        if record.id in existing or record.id in incoming:
            raise DuplicateRecordError(f"Record id '{record.id}' is already in use")
        incoming.add(record.id)
    return RecordStore(records=store.records + batch)


__all__ = ["DuplicateRecordError", "RecordStore", "merge_import"]
