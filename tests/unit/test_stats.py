from __future__ import annotations

import pytest

from duty_report.core.filters import apply_filter
from duty_report.core.stats import category_hours, summarize
from duty_report.domain.models import FilterSpec, ServiceType

SEED_TOTAL_HOURS = 206.93
SEED_SIZE = 21
# OLÍVIA, LÉLLIS, NAARA and MATHEUS ANTÔNIO; every other record is GENERICO.
SEED_DISTINCT_PERSONNEL = 4
SENTINEL_HOURS = 36.5


def test_summarize_empty_is_all_zero() -> None:
    stats = summarize([])
    assert stats.total_hours == 0
    assert stats.total_records == 0
    assert stats.distinct_personnel_count == 0
    assert stats.category_hours == 0


def test_summarize_seed(seed) -> None:
    stats = summarize(seed)
    assert stats.total_hours == pytest.approx(SEED_TOTAL_HOURS)
    assert stats.total_records == SEED_SIZE
    assert stats.distinct_personnel_count == SEED_DISTINCT_PERSONNEL
    assert stats.category_hours == pytest.approx(SENTINEL_HOURS)
    assert stats.highlight_category == "Sentinela"


def test_summarize_filtered_sentinel(seed) -> None:
    stats = summarize(apply_filter(seed, FilterSpec(type_filter="Sentinela")))
    assert stats.total_records == 3
    assert stats.total_hours == pytest.approx(SENTINEL_HOURS)
    assert stats.distinct_personnel_count == 0


def test_distinct_personnel_ignores_placeholder_and_absent(make_record) -> None:
    records = [
        make_record(personnel="AL SD NAARA"),
        make_record(personnel="AL SD NAARA"),
        make_record(personnel="GENERICO"),
        make_record(personnel=None),
        make_record(personnel="AL SD OLÍVIA"),
    ]
    assert summarize(records).distinct_personnel_count == 2


def test_custom_placeholder(make_record) -> None:
    records = [make_record(personnel="N/D"), make_record(personnel="GENERICO")]
    assert summarize(records, placeholder="N/D").distinct_personnel_count == 1


def test_highlight_category_is_configurable(seed) -> None:
    stats = summarize(seed, highlight=ServiceType.SAT)
    assert stats.category_hours == pytest.approx(21.5)
    assert stats.highlight_category == "SAT"


def test_category_hours_free_text_category(make_record) -> None:
    records = [
        make_record(type="Operação Verão", duration_hours=3.5),
        make_record(type="Operação Verão", duration_hours=2.0),
        make_record(type="SAT", duration_hours=9.0),
    ]
    assert category_hours(records, "Operação Verão") == pytest.approx(5.5)
    assert category_hours(records, "Sentinela") == 0.0
