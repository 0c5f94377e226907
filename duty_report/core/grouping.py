"""
Grouping projections over a record collection.

Each projection partitions the records by one key and reduces every partition
to a count or an hour sum. All of them are total: empty input gives an empty
list, or zero-filled buckets where the bucket set is fixed.
"""

from __future__ import annotations

import math
from datetime import date
from typing import Dict, Iterable, List, Optional, Set

from duty_report.domain.models import (
    PLACEHOLDER_PERSONNEL,
    Bucket,
    ServiceRecord,
    ServiceType,
    WeekBucket,
)
from duty_report.domain.timeparse import parse_date

WEEKDAY_LABELS = ("Dom", "Seg", "Ter", "Qua", "Qui", "Sex", "Sáb")

DURATION_SHORT = "< 6h"
DURATION_MEDIUM = "6h - 12h"
DURATION_LONG = "> 12h"
DURATION_LABELS = (DURATION_SHORT, DURATION_MEDIUM, DURATION_LONG)

STUDENT_PREFIX = "AL SD "


def _sunday_index(day: date) -> int:
    # date.weekday() is Monday=0; the dashboard counts from Sunday.
    return (day.weekday() + 1) % 7


def week_index(day: date) -> int:
    """Week number of `day` within its month, weeks starting on Sunday."""
    return math.ceil((day.day + 6 - _sunday_index(day)) / 7)


def duration_label(hours: float) -> str:
    if hours < 6:
        return DURATION_SHORT
    if hours <= 12:
        return DURATION_MEDIUM
    return DURATION_LONG


def count_by_type(records: Iterable[ServiceRecord]) -> List[Bucket]:
    """Occurrences per type, in order of first appearance."""
    counts: Dict[str, int] = {}
    for record in records:
        counts[record.type] = counts.get(record.type, 0) + 1
    return [Bucket(label=name, value=count) for name, count in counts.items()]


def hours_by_type(records: Iterable[ServiceRecord]) -> List[Bucket]:
    """Summed hours per type, largest first."""
    hours: Dict[str, float] = {}
    for record in records:
        hours[record.type] = hours.get(record.type, 0.0) + record.duration_hours
    ordered = sorted(hours.items(), key=lambda item: item[1], reverse=True)
    return [Bucket(label=name, value=total) for name, total in ordered]


def count_by_weekday(
    records: Iterable[ServiceRecord], today: Optional[date] = None
) -> List[Bucket]:
    """Occurrences per weekday; always seven buckets, Sunday first."""
    counts = [0] * 7
    for record in records:
        counts[_sunday_index(parse_date(record.date, today))] += 1
    return [Bucket(label=label, value=count) for label, count in zip(WEEKDAY_LABELS, counts)]


def count_by_duration_range(records: Iterable[ServiceRecord]) -> List[Bucket]:
    """Occurrences per duration range; 6 and 12 hours belong to the middle range."""
    counts = dict.fromkeys(DURATION_LABELS, 0)
    for record in records:
        counts[duration_label(record.duration_hours)] += 1
    return [Bucket(label=label, value=count) for label, count in counts.items()]


def hours_by_person(
    records: Iterable[ServiceRecord],
    category: ServiceType | str = ServiceType.ALUNO,
    prefix: str = STUDENT_PREFIX,
) -> List[Bucket]:
    """
    Summed hours per person within one category, in order of first appearance.

    Records without personnel are left out. A leading role prefix
    (e.g. "AL SD ") is dropped before grouping, so "AL SD NAARA" and "NAARA"
    share one bucket.
    """
    label = category.value if isinstance(category, ServiceType) else category
    hours: Dict[str, float] = {}
    for record in records:
        if record.type != label or not record.personnel:
            continue
        name = _strip_prefix(record.personnel, prefix)
        hours[name] = hours.get(name, 0.0) + record.duration_hours
    return [Bucket(label=name, value=total) for name, total in hours.items()]


def _strip_prefix(name: str, prefix: str) -> str:
    if prefix and name.startswith(prefix):
        return name[len(prefix):]
    return name


def count_by_week(
    records: Iterable[ServiceRecord],
    placeholder: str = PLACEHOLDER_PERSONNEL,
    today: Optional[date] = None,
) -> List[WeekBucket]:
    """
    Occurrences per week-of-month index, ascending.

    `new` counts each identifiable person once per week, on their first
    record in that week.
    """
    totals: Dict[int, int] = {}
    seen: Dict[int, Set[str]] = {}
    for record in records:
        week = week_index(parse_date(record.date, today))
        totals[week] = totals.get(week, 0) + 1
        people = seen.setdefault(week, set())
        if record.has_identifiable_personnel(placeholder):
            people.add(record.personnel)  # type: ignore[arg-type]
    return [
        WeekBucket(week=week, total=totals[week], new=len(seen[week])) for week in sorted(totals)
    ]


__all__ = [
    "DURATION_LABELS",
    "WEEKDAY_LABELS",
    "count_by_duration_range",
    "count_by_type",
    "count_by_week",
    "count_by_weekday",
    "duration_label",
    "hours_by_person",
    "hours_by_type",
    "week_index",
]
