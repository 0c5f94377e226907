"""
Summary statistics over a (usually filtered) record collection.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from duty_report.domain.models import PLACEHOLDER_PERSONNEL, ServiceRecord, ServiceType, Stats


def category_hours(records: Iterable[ServiceRecord], category: ServiceType | str) -> float:
    """Sum of duration hours over records of exactly `category`."""
    label = category.value if isinstance(category, ServiceType) else category
    return sum((r.duration_hours for r in records if r.type == label), 0.0)


def summarize(
    records: Sequence[ServiceRecord],
    highlight: ServiceType | str = ServiceType.SENTINELA,
    placeholder: str = PLACEHOLDER_PERSONNEL,
) -> Stats:
    """
    Compute total hours, record count, distinct identifiable personnel and the
    hours of the highlighted category. Empty input yields all zeros.
    """
    label = highlight.value if isinstance(highlight, ServiceType) else highlight
    people = {r.personnel for r in records if r.has_identifiable_personnel(placeholder)}
    return Stats(
        total_hours=sum((r.duration_hours for r in records), 0.0),
        total_records=len(records),
        distinct_personnel_count=len(people),
        category_hours=category_hours(records, label),
        highlight_category=label,
    )


__all__ = ["category_hours", "summarize"]
