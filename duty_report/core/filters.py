"""
Filter engine: narrows a record collection to the current FilterSpec.

Stages run in a fixed order (type, search text, lower date bound, upper date
bound), each working on the previous stage's output. A stage whose field is
empty passes everything through.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, List, Optional

from duty_report.domain.models import MATCH_ALL, FilterSpec, ServiceRecord
from duty_report.domain.timeparse import parse_date


def _matches_search(record: ServiceRecord, needle: str) -> bool:
    if record.personnel and needle in record.personnel.lower():
        return True
    return needle in record.type.lower()


def apply_filter(
    records: Iterable[ServiceRecord],
    spec: Optional[FilterSpec] = None,
    today: Optional[date] = None,
) -> List[ServiceRecord]:
    """
    Return the records matching `spec`, in their original order.

    `today` is the fallback for record dates that cannot be parsed; it
    defaults to the current date.
    """
    result = list(records)
    if spec is None:
        return result

    if spec.type_filter != MATCH_ALL:
        result = [r for r in result if r.type == spec.type_filter]

    if spec.search:
        needle = spec.search.lower()
        result = [r for r in result if _matches_search(r, needle)]

    if spec.date_from is not None:
        result = [r for r in result if parse_date(r.date, today) >= spec.date_from]

    if spec.date_to is not None:
        result = [r for r in result if parse_date(r.date, today) <= spec.date_to]

    return result


__all__ = ["apply_filter"]
