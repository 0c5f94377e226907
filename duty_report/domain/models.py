"""
Domain models for the Duty Report dashboard.

Defines the service record (one logged duty shift), the closed set of known
service categories, the filter selection and the summary statistics. Records
are frozen: once built they are never updated, only appended to a store.
"""
from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Any, Optional, TypedDict

from pydantic import BaseModel, Field, field_validator, model_validator

from duty_report.domain.timeparse import compute_duration, parse_clock, parse_date

PLACEHOLDER_PERSONNEL = "GENERICO"
MATCH_ALL = "ALL"


class ServiceType(str, Enum):
    """Known service categories. Records may also carry any other text."""

    ALUNO = "Escala Alunos"
    INTERNO = "Serviço Interno"
    REDS = "REDS"
    SENTINELA = "Sentinela"
    PRADO_SEGURO = "Prado Seguro"
    SAT = "SAT"
    FEIRA_HIPPIE = "Feira Hippie"

    @classmethod
    def lookup(cls, value: str) -> Optional["ServiceType"]:
        """Return the known category for `value`, or None for free text."""
        try:
            return cls(value)
        except ValueError:
            return None


class ServiceRecord(BaseModel):
    """
    One logged duty shift.
    """

    id: str = Field(..., min_length=1, description="Opaque unique identifier.")
    type: str = Field(..., description="Known ServiceType value or free text.")
    date: str = Field(..., description="Calendar date as DD/MM/YYYY.")
    start_time: str = Field(..., alias="startTime", description="Start as HH:MM (24h).")
    end_time: str = Field(..., alias="endTime", description="End as HH:MM (24h).")
    duration_hours: float = Field(
        ..., ge=0, alias="durationHours", description="Elapsed hours; authoritative once set."
    )
    personnel: Optional[str] = Field(None, description="Assigned person, if identifiable.")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "arbitrary_types_allowed": False,
    }

    @model_validator(mode="before")
    @classmethod
    def _fill_duration(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        if data.get("duration_hours") is None and data.get("durationHours") is None:
            start = data.get("start_time", data.get("startTime"))
            end = data.get("end_time", data.get("endTime"))
            if start is not None and end is not None:
                data = {**data, "duration_hours": compute_duration(start, end)}
                data.pop("durationHours", None)
        return data

    @field_validator("type", mode="before")
    @classmethod
    def _type_text(cls, value: Any) -> Any:
        if isinstance(value, ServiceType):
            return value.value
        return value

    @field_validator("start_time", "end_time")
    @classmethod
    def _check_clock(cls, value: str) -> str:
        parse_clock(value)
        return value

    @classmethod
    def from_shift(
        cls,
        id: str,
        type: ServiceType | str,
        date: str,
        start_time: str,
        end_time: str,
        personnel: Optional[str] = None,
    ) -> "ServiceRecord":
        """
        Build a record from its time span, computing the duration.

        Raises FormatError directly (not wrapped by pydantic) for bad times.
        """
        hours = compute_duration(start_time, end_time)
        return cls(
            id=id,
            type=type,
            date=date,
            start_time=start_time,
            end_time=end_time,
            duration_hours=hours,
            personnel=personnel,
        )

    @property
    def known_type(self) -> Optional[ServiceType]:
        return ServiceType.lookup(self.type)

    @property
    def calendar_date(self) -> dt.date:
        return parse_date(self.date)

    def has_identifiable_personnel(self, placeholder: str = PLACEHOLDER_PERSONNEL) -> bool:
        return bool(self.personnel) and self.personnel != placeholder


class FilterSpec(BaseModel):
    """
    Current filter selection. Empty fields never narrow the result.
    """

    search: str = ""
    type_filter: str = MATCH_ALL
    date_from: Optional[dt.date] = None
    date_to: Optional[dt.date] = None

    model_config = {"frozen": True}

    @field_validator("type_filter", mode="before")
    @classmethod
    def _type_filter_text(cls, value: Any) -> Any:
        if value is None or value == "":
            return MATCH_ALL
        if isinstance(value, ServiceType):
            return value.value
        return value

    @field_validator("date_from", "date_to", mode="before")
    @classmethod
    def _bound(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        if isinstance(value, str) and "/" in value:
            day, month, year = (int(p) for p in value.strip().split("/"))
            return dt.date(year, month, day)
        return value

    @property
    def is_active(self) -> bool:
        return bool(
            self.search or self.type_filter != MATCH_ALL or self.date_from or self.date_to
        )


class Stats(BaseModel):
    """
    Summary counters over a record collection.
    """

    total_hours: float = 0.0
    total_records: int = 0
    distinct_personnel_count: int = 0
    category_hours: float = 0.0
    highlight_category: str = ServiceType.SENTINELA.value

    model_config = {"frozen": True}


class Bucket(TypedDict):
    label: str
    value: float


class WeekBucket(TypedDict):
    week: int
    total: int
    new: int


__all__ = [
    "MATCH_ALL",
    "PLACEHOLDER_PERSONNEL",
    "Bucket",
    "FilterSpec",
    "ServiceRecord",
    "ServiceType",
    "Stats",
    "WeekBucket",
]
