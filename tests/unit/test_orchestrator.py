from __future__ import annotations

import json
import logging
from datetime import date

from duty_report.domain.models import FilterSpec
from duty_report.orchestrator import _round_buckets, build_report

SEED_SIZE = 21
TODAY = date(2025, 12, 15)


def test_build_report_unfiltered(seed, test_settings) -> None:
    report = build_report(seed, settings=test_settings, today=TODAY)

    assert report["total_available"] == SEED_SIZE
    assert report["filtered_count"] == SEED_SIZE
    assert report["stats"]["total_hours"] == 206.93
    assert report["stats"]["distinct_personnel_count"] == 4
    assert report["stats"]["category_hours"] == 36.5
    assert len(report["by_weekday"]) == 7
    assert len(report["by_duration"]) == 3
    assert [b["label"] for b in report["hours_by_person"]][0] == "OLÍVIA"
    assert report["hours_by_type"][4] == {"label": "Prado Seguro", "value": 19.33}
    assert report["malformed_date_ids"] == []
    assert len(report["records"]) == SEED_SIZE


def test_build_report_filtered_by_sentinel(seed, test_settings) -> None:
    report = build_report(seed, FilterSpec(type_filter="Sentinela"), settings=test_settings)

    assert report["filtered_count"] == 3
    assert report["total_available"] == SEED_SIZE
    assert report["stats"]["total_hours"] == 36.5
    assert report["hours_by_person"] == []
    assert report["filters"]["type_filter"] == "Sentinela"


def test_build_report_is_json_serialisable(seed, test_settings) -> None:
    report = build_report(seed, FilterSpec(date_from="2025-11-01"), settings=test_settings)
    decoded = json.loads(json.dumps(report))
    assert decoded["filters"]["date_from"] == "2025-11-01"
    assert decoded["filtered_count"] == 13


def test_build_report_empty_selection(seed, test_settings) -> None:
    report = build_report(seed, FilterSpec(search="nobody"), settings=test_settings)

    assert report["filtered_count"] == 0
    assert report["stats"]["total_hours"] == 0
    assert report["by_type"] == []
    assert sum(b["value"] for b in report["by_weekday"]) == 0
    assert report["by_week"] == []


def test_build_report_flags_malformed_dates(make_record, test_settings, caplog) -> None:
    records = [make_record(id="ok"), make_record(id="odd", date="2025/13/45")]
    with caplog.at_level(logging.WARNING, logger="duty_report.orchestrator"):
        report = build_report(records, settings=test_settings, today=TODAY)

    assert report["malformed_date_ids"] == ["odd"]
    assert any("DATE FALLBACK" in message for message in caplog.messages)


def test_build_report_uses_configured_conventions(make_record, test_settings) -> None:
    settings = test_settings.model_copy(
        update={
            "highlight_category": "REDS",
            "student_category": "REDS",
            "personnel_prefix": "SGT ",
            "placeholder_personnel": "N/D",
        }
    )
    records = [
        make_record(type="REDS", personnel="SGT SILVA", duration_hours=6.0),
        make_record(type="REDS", personnel="N/D", duration_hours=6.5),
    ]
    report = build_report(records, settings=settings)

    assert report["stats"]["category_hours"] == 12.5
    assert report["stats"]["distinct_personnel_count"] == 1
    assert report["hours_by_person"] == [
        {"label": "SILVA", "value": 6.0},
        {"label": "N/D", "value": 6.5},
    ]


def test_round_buckets_only_touches_floats() -> None:
    buckets = [{"label": "a", "value": 1.23456}, {"label": "b", "value": 3}]
    assert _round_buckets(buckets) == [{"label": "a", "value": 1.23}, {"label": "b", "value": 3}]
