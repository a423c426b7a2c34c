"""Trend request and result schemas."""

import re
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from trendline.core.exceptions import InvalidAggregateError, InvalidIntervalError

COLUMN_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")
ALIAS_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class Interval(str, Enum):
    """Bucket width options."""

    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    MONTH = "month"
    YEAR = "year"

    @classmethod
    def parse(cls, value: "Interval | str") -> "Interval":
        """Coerce a string to an Interval, raising InvalidIntervalError."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise InvalidIntervalError(value) from None


class AggregateFunction(str, Enum):
    """SQL aggregate functions a trend can compute."""

    COUNT = "count"
    SUM = "sum"
    AVG = "avg"
    MIN = "min"
    MAX = "max"

    @classmethod
    def parse(cls, value: "AggregateFunction | str") -> "AggregateFunction":
        """Coerce a string to an AggregateFunction, raising InvalidAggregateError."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise InvalidAggregateError(value) from None


def to_number(value: Any) -> int | float:
    """Coerce a raw aggregate value to a number, treating NULL as zero."""
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int | float):
        return value
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Aggregate value is not numeric: {value!r}") from e
    return int(number) if number.is_integer() else number


class TrendRequest(BaseModel):
    """Immutable configuration for a single trend aggregation."""

    model_config = ConfigDict(frozen=True)

    interval: Interval
    start: datetime
    end: datetime
    date_column: str = "created_at"
    date_alias: str = "date"

    @field_validator("date_column")
    @classmethod
    def validate_date_column(cls, v: str) -> str:
        if not COLUMN_PATTERN.match(v):
            raise ValueError(f"Invalid date column name: {v!r}")
        return v

    @field_validator("date_alias")
    @classmethod
    def validate_date_alias(cls, v: str) -> str:
        if not ALIAS_PATTERN.match(v):
            raise ValueError(f"Invalid date alias: {v!r}")
        if v == "aggregate":
            raise ValueError("Date alias cannot be 'aggregate'")
        return v

    @model_validator(mode="after")
    def validate_range(self) -> "TrendRequest":
        if (self.start.tzinfo is None) != (self.end.tzinfo is None):
            raise ValueError("start and end must both be naive or both be timezone-aware")
        if self.start > self.end:
            raise ValueError("start must not be after end")
        return self


class AggregateRow(BaseModel):
    """A database row normalized to a truncated date label and its aggregate."""

    date: str
    aggregate: int | float = 0

    @field_validator("date", mode="before")
    @classmethod
    def coerce_date(cls, v: Any) -> Any:
        if v is None or isinstance(v, str):
            return v
        return str(v)

    @field_validator("aggregate", mode="before")
    @classmethod
    def coerce_aggregate(cls, v: Any) -> int | float:
        return to_number(v)


class TrendPoint(BaseModel):
    """A single bucket in a trend series."""

    date: str
    aggregate: int | float
