"""
Import provider interfaces for the Duty Report dashboard.

A provider acquires a batch of new service records from somewhere (an
uploaded file, a fixed list) asynchronously. Providers only produce records;
merging them into the store is the import coordinator's job.
"""

from __future__ import annotations

import abc
from typing import List, Protocol, runtime_checkable

from duty_report.domain.models import ServiceRecord


@runtime_checkable
class ImportProvider(Protocol):
    """
    Common interface all import providers must implement.

    Attributes
    ----------
    name : str
        A short machine-friendly identifier.
    description : str
        A human-friendly summary of where the records come from.
    """

    name: str
    description: str

    async def fetch(self) -> List[ServiceRecord]:
        """
        Acquire the complete batch of new records.

        Returns
        -------
        list[ServiceRecord]
            The records to append. An exception means the import failed.
        """
        ...


class AbstractImportProvider(abc.ABC):
    """
    Optional ABC helper for class-based providers.
    """

    name: str
    description: str

    @abc.abstractmethod
    async def fetch(self) -> List[ServiceRecord]:  # pragma: no cover - interface only
        """Acquire the batch of new records."""
        raise NotImplementedError


__all__ = ["AbstractImportProvider", "ImportProvider"]
