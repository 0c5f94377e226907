"""
Duty Report - statistics and breakdowns over an operational service log.

This package aggregates duty/shift records and derives what the operational
dashboard displays:

- Filtering by service type, free-text search and date range
- Summary counters (hours, records, distinct personnel, highlighted category)
- Grouping projections (by type, weekday, duration range, person, week)
- Append-only background imports into the record store

Aggregation is a set of pure functions over immutable records; the only
stateful piece is the import coordinator, which owns the record store.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from duty_report.config import Settings, get_settings
from duty_report.core import (
    FormatError,
    apply_filter,
    category_hours,
    compute_duration,
    count_by_duration_range,
    count_by_type,
    count_by_week,
    count_by_weekday,
    hours_by_person,
    hours_by_type,
    parse_date,
    summarize,
)
from duty_report.domain import FilterSpec, ServiceRecord, ServiceType, Stats, seed_records
from duty_report.import_task import (
    ImportCoordinator,
    ImportFailedError,
    ImportStatus,
    ImportTask,
)
from duty_report.orchestrator import build_report
from duty_report.store import DuplicateRecordError, RecordStore, merge_import
from duty_report.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "FilterSpec",
    "ServiceRecord",
    "ServiceType",
    "Stats",
    "seed_records",
    # Aggregation core
    "FormatError",
    "apply_filter",
    "category_hours",
    "compute_duration",
    "count_by_duration_range",
    "count_by_type",
    "count_by_week",
    "count_by_weekday",
    "hours_by_person",
    "hours_by_type",
    "parse_date",
    "summarize",
    # Store and imports
    "DuplicateRecordError",
    "ImportCoordinator",
    "ImportFailedError",
    "ImportStatus",
    "ImportTask",
    "RecordStore",
    "merge_import",
    # Reporting
    "build_report",
    # Logging
    "configure_logging",
    "get_logger",
]
