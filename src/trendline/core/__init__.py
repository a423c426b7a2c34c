"""Core library components package."""

from .config import settings
from .database import async_session_factory, dialect_name, engine, get_db
from .exceptions import (
    InvalidAggregateError,
    InvalidIntervalError,
    InvalidTrendRequestError,
    MissingRangeError,
    TrendError,
    UnsupportedDialectError,
)

__all__ = [
    "settings",
    "engine",
    "async_session_factory",
    "get_db",
    "dialect_name",
    "TrendError",
    "UnsupportedDialectError",
    "InvalidIntervalError",
    "InvalidAggregateError",
    "InvalidTrendRequestError",
    "MissingRangeError",
]
