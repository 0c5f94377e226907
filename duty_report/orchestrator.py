"""
Report builder: runs the filter, the statistics and every grouping projection
over one snapshot of the service log.

Usage (example from CLI):
    from duty_report.orchestrator import build_report

    report = build_report(seed_records(), FilterSpec(type_filter="Sentinela"))
    print(report["stats"]["total_hours"])

The payload is plain JSON-serialisable data; the terminal reporter and any
other presentation layer render from it without touching the records again.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from duty_report.config import Settings, get_settings
from duty_report.core.filters import apply_filter
from duty_report.core.grouping import (
    count_by_duration_range,
    count_by_type,
    count_by_week,
    count_by_weekday,
    hours_by_person,
    hours_by_type,
)
from duty_report.core.stats import summarize
from duty_report.domain.models import Bucket, FilterSpec, ServiceRecord
from duty_report.domain.timeparse import malformed_dates
from duty_report.utils.logging import get_logger
from duty_report.utils.profiler import profile_block

log = get_logger(__name__)


def _round_float(value: float, decimals: int = 2) -> float:
    """Round a float to specified decimal places for human-readable output."""
    return round(value, decimals)


def _round_buckets(buckets: List[Bucket], decimals: int = 2) -> List[Dict[str, Any]]:
    return [
        {
            "label": b["label"],
            "value": _round_float(b["value"], decimals)
            if isinstance(b["value"], float)
            else b["value"],
        }
        for b in buckets
    ]


def _record_row(record: ServiceRecord) -> Dict[str, Any]:
    return {
        "id": record.id,
        "date": record.date,
        "type": record.type,
        "start_time": record.start_time,
        "end_time": record.end_time,
        "duration_hours": record.duration_hours,
        "personnel": record.personnel,
    }


def _warn_malformed(records: List[ServiceRecord], today: date) -> List[str]:
    bad = malformed_dates(records)
    for record in bad:
        log.warning(
            f"[DATE FALLBACK] record {record.id} has unparseable date {record.date!r}",
            extra={"record_id": record.id, "date": record.date, "fallback": today.isoformat()},
        )
    return [r.id for r in bad]


def build_report(
    records: Iterable[ServiceRecord],
    spec: Optional[FilterSpec] = None,
    settings: Optional[Settings] = None,
    today: Optional[date] = None,
) -> Dict[str, Any]:
    """
    Build the full dashboard payload for `records` narrowed by `spec`.

    Parameters
    ----------
    records : iterable[ServiceRecord]
        The full, unfiltered collection (e.g. a RecordStore).
    spec : FilterSpec | None
        Current filter selection. None means no filtering.
    settings : Settings | None
        Aggregation conventions (placeholder personnel, highlighted category,
        student category and prefix). Defaults to get_settings().
    today : date | None
        Fallback for unparseable record dates. Defaults to the current date.

    Returns
    -------
    dict
        Stats, the six projections, the visible rows and bookkeeping counts.
        Hours are rounded to 2 decimals in the payload only.
    """
    settings = settings or get_settings()
    spec = spec or FilterSpec()
    today = today or date.today()
    everything = list(records)

    log.info(
        "[REPORT START]",
        extra={"records": len(everything), "filters_active": spec.is_active},
    )
    with profile_block("report") as profile:
        anomalies = _warn_malformed(everything, today)
        visible = apply_filter(everything, spec, today=today)
        stats = summarize(
            visible,
            highlight=settings.highlight_category,
            placeholder=settings.placeholder_personnel,
        )
        payload: Dict[str, Any] = {
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "filters": spec.model_dump(mode="json"),
            "total_available": len(everything),
            "filtered_count": len(visible),
            "stats": {
                "total_hours": _round_float(stats.total_hours),
                "total_records": stats.total_records,
                "distinct_personnel_count": stats.distinct_personnel_count,
                "category_hours": _round_float(stats.category_hours),
                "highlight_category": stats.highlight_category,
            },
            "by_type": _round_buckets(count_by_type(visible)),
            "hours_by_type": _round_buckets(hours_by_type(visible)),
            "by_weekday": _round_buckets(count_by_weekday(visible, today=today)),
            "by_duration": _round_buckets(count_by_duration_range(visible)),
            "hours_by_person": _round_buckets(
                hours_by_person(
                    visible,
                    category=settings.student_category,
                    prefix=settings.personnel_prefix,
                )
            ),
            "by_week": [
                dict(w)
                for w in count_by_week(
                    visible, placeholder=settings.placeholder_personnel, today=today
                )
            ],
            "malformed_date_ids": anomalies,
            "records": [_record_row(r) for r in visible],
        }

    log.info(
        "[REPORT COMPLETE]",
        extra={
            "records": len(everything),
            "visible": len(visible),
            "duration_seconds": _round_float(profile.duration_seconds, 4),
        },
    )
    return payload


__all__ = ["build_report"]
