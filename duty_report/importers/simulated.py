"""
Simulated file import.

Stands in for parsing an uploaded CSV/PDF/spreadsheet: waits a moment as a
file read would, then yields a small batch of plausible records dated today.
"""

from __future__ import annotations

import asyncio
import itertools
import random
import time
from datetime import date
from typing import List, Optional

from duty_report.config import get_settings
from duty_report.domain.models import ServiceRecord, ServiceType
from duty_report.importers.abstract import AbstractImportProvider

_batch_sequence = itertools.count(1)


class SimulatedFileImporter(AbstractImportProvider):
    """
    Produce `batch_size` records of random known types after `delay_seconds`.

    Each record is an 08:00-18:00 shift (10 hours) assigned to
    "IMPORTADO VIA ARQUIVO <n>". Ids embed a timestamp and a process-wide
    batch sequence so two imports never share an id.
    """

    name: str = "simulated"
    description: str = "Simulated file upload producing a batch of shifts dated today."

    def __init__(
        self,
        batch_size: Optional[int] = None,
        delay_seconds: Optional[float] = None,
        seed: Optional[int] = None,
        today: Optional[date] = None,
    ) -> None:
        settings = get_settings()
        self.batch_size = batch_size if batch_size is not None else settings.import_batch_size
        self.delay_seconds = (
            delay_seconds if delay_seconds is not None else settings.import_delay_seconds
        )
        self._rng = random.Random(seed if seed is not None else settings.import_seed)
        self._today = today

    def _build_batch(self) -> List[ServiceRecord]:
        stamp = int(time.time() * 1000)
        sequence = next(_batch_sequence)
        day = (self._today or date.today()).strftime("%d/%m/%Y")
        types = list(ServiceType)
        return [
            ServiceRecord(
                id=f"imported-{stamp}-{sequence}-{i}",
                type=self._rng.choice(types),
                date=day,
                start_time="08:00",
                end_time="18:00",
                duration_hours=10,
                personnel=f"IMPORTADO VIA ARQUIVO {i + 1}",
            )
            for i in range(self.batch_size)
        ]

    async def fetch(self) -> List[ServiceRecord]:
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)
        return self._build_batch()


__all__ = ["SimulatedFileImporter"]
