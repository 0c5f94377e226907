"""
Domain package for the Duty Report dashboard.

Exports the service record model, the known categories, the filter selection
and the seed log. Keep this package focused on data definitions and validation.
"""

from duty_report.domain.models import (
    MATCH_ALL,
    PLACEHOLDER_PERSONNEL,
    Bucket,
    FilterSpec,
    ServiceRecord,
    ServiceType,
    Stats,
    WeekBucket,
)
from duty_report.domain.seed import seed_records

__all__ = [
    "MATCH_ALL",
    "PLACEHOLDER_PERSONNEL",
    "Bucket",
    "FilterSpec",
    "ServiceRecord",
    "ServiceType",
    "Stats",
    "WeekBucket",
    "seed_records",
]
