"""
Aggregation core for the Duty Report dashboard.

Pure functions only: parsing helpers, the filter engine, summary statistics
and the grouping projections. Nothing in this package holds state.
"""

from duty_report.core.filters import apply_filter
from duty_report.core.grouping import (
    count_by_duration_range,
    count_by_type,
    count_by_week,
    count_by_weekday,
    hours_by_person,
    hours_by_type,
)
from duty_report.core.stats import category_hours, summarize
from duty_report.domain.timeparse import (
    FormatError,
    compute_duration,
    is_valid_date,
    malformed_dates,
    parse_date,
)

__all__ = [
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
    "is_valid_date",
    "malformed_dates",
    "parse_date",
    "summarize",
]
