"""
Static import: hands over a batch that is already in memory.
"""

from __future__ import annotations

from typing import Iterable, List

from duty_report.domain.models import ServiceRecord
from duty_report.importers.abstract import AbstractImportProvider


class StaticImporter(AbstractImportProvider):
    """Yield a fixed list of records, e.g. ones built programmatically."""

    name: str = "static"
    description: str = "In-memory batch of prepared records."

    def __init__(self, records: Iterable[ServiceRecord] = ()) -> None:
        self._records = list(records)

    async def fetch(self) -> List[ServiceRecord]:
        return list(self._records)


__all__ = ["StaticImporter"]
