"""
Pytest configuration for the Duty Report dashboard.

Provides fixtures for:
- The seed service log and a store built from it
- Settings with the import delays and retry backoff disabled
- A record factory for hand-built edge cases
"""

from __future__ import annotations

from datetime import date
from typing import Callable, List, Optional

import pytest

from duty_report.config import Settings
from duty_report.domain.models import ServiceRecord
from duty_report.domain.seed import seed_records
from duty_report.store import RecordStore

FIXED_TODAY = date(2025, 12, 15)


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.

    Imports finish immediately and retries do not back off.
    """
    return Settings(
        log_level="DEBUG",
        import_delay_seconds=0.0,
        import_retry_backoff_seconds=0.0,
        import_timeout_seconds=2.0,
        import_seed=42,
    )


@pytest.fixture
def seed() -> List[ServiceRecord]:
    return seed_records()


@pytest.fixture
def seed_store(seed: List[ServiceRecord]) -> RecordStore:
    return RecordStore.from_records(seed)


@pytest.fixture
def today() -> date:
    """Fallback date for unparseable record dates."""
    return FIXED_TODAY


@pytest.fixture
def make_record() -> Callable[..., ServiceRecord]:
    """
    Build a record with sensible defaults; override any field by keyword.
    """
    counter = iter(range(1, 10_000))

    def _make(
        type: str = "Sentinela",
        date: str = "10/11/2025",
        start_time: str = "19:00",
        end_time: str = "07:00",
        duration_hours: Optional[float] = 12.0,
        personnel: Optional[str] = None,
        id: Optional[str] = None,
    ) -> ServiceRecord:
        return ServiceRecord(
            id=id or f"t-{next(counter)}",
            type=type,
            date=date,
            start_time=start_time,
            end_time=end_time,
            duration_hours=duration_hours,
            personnel=personnel,
        )

    return _make
