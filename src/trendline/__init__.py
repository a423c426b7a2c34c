"""Zero-filled, time-bucketed aggregates over SQLAlchemy queries."""

from trendline.core.exceptions import (
    InvalidAggregateError,
    InvalidIntervalError,
    InvalidTrendRequestError,
    MissingRangeError,
    TrendError,
    UnsupportedDialectError,
)
from trendline.schemas.trends import AggregateFunction, Interval, TrendPoint, TrendRequest
from trendline.services.trends import aggregate_trend
from trendline.trend import Trend

__all__ = [
    "Trend",
    "TrendRequest",
    "TrendPoint",
    "Interval",
    "AggregateFunction",
    "aggregate_trend",
    "TrendError",
    "UnsupportedDialectError",
    "InvalidIntervalError",
    "InvalidAggregateError",
    "InvalidTrendRequestError",
    "MissingRangeError",
]
