"""Errors raised while configuring or running a trend aggregation."""


class TrendError(ValueError):
    """Base class for trend errors."""


class UnsupportedDialectError(TrendError):
    """The bound database is not PostgreSQL, MySQL/MariaDB or SQLite."""

    def __init__(self, dialect: str):
        self.dialect = dialect
        super().__init__(f"Unsupported database: {dialect}")


class InvalidIntervalError(TrendError):
    """The interval is not one of minute, hour, day, month or year."""

    def __init__(self, interval: object):
        self.interval = interval
        super().__init__(f"Invalid interval: {interval!r}")


class InvalidAggregateError(TrendError):
    """The aggregate function is not one of count, sum, avg, min or max."""

    def __init__(self, function: object):
        self.function = function
        super().__init__(f"Invalid aggregate function: {function!r}")


class MissingRangeError(TrendError):
    """An aggregate was requested before between() was called."""

    def __init__(self) -> None:
        super().__init__("A date range is required; call between() before aggregating")


class InvalidTrendRequestError(TrendError):
    """The trend configuration failed validation."""
