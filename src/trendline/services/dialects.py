"""Dialect-specific SQL for truncating a date column to a bucket label.

Each supported database family renders the same label for a given interval
(see ``trendline.services.periods.LABEL_FORMATS``) using its native date
formatting function:

- PostgreSQL: ``to_char(column, 'YYYY-MM-DD')``
- MySQL/MariaDB: ``DATE_FORMAT(column, '%Y-%m-%d')``
- SQLite: ``strftime('%Y-%m-%d', column)``
"""

from enum import Enum

from sqlalchemy import func, literal
from sqlalchemy.sql import ColumnElement

from trendline.core.exceptions import InvalidIntervalError, UnsupportedDialectError
from trendline.schemas.trends import Interval


class SqlDialect(str, Enum):
    """Supported database families."""

    POSTGRES = "postgres"
    MYSQL = "mysql"
    SQLITE = "sqlite"

    @classmethod
    def from_name(cls, name: str) -> "SqlDialect":
        """Map a SQLAlchemy dialect name to a database family."""
        try:
            return DIALECT_NAMES[name.lower()]
        except KeyError:
            raise UnsupportedDialectError(name) from None


# SQLAlchemy dialect names (and common aliases) per family
DIALECT_NAMES: dict[str, SqlDialect] = {
    "postgresql": SqlDialect.POSTGRES,
    "postgres": SqlDialect.POSTGRES,
    "mysql": SqlDialect.MYSQL,
    "mariadb": SqlDialect.MYSQL,
    "sqlite": SqlDialect.SQLITE,
    "sqlite3": SqlDialect.SQLITE,
}

DATE_FORMATS: dict[SqlDialect, dict[Interval, str]] = {
    SqlDialect.POSTGRES: {
        Interval.MINUTE: "YYYY-MM-DD HH24:MI:00",
        Interval.HOUR: "YYYY-MM-DD HH24:00",
        Interval.DAY: "YYYY-MM-DD",
        Interval.MONTH: "YYYY-MM",
        Interval.YEAR: "YYYY",
    },
    SqlDialect.MYSQL: {
        Interval.MINUTE: "%Y-%m-%d %H:%i:00",
        Interval.HOUR: "%Y-%m-%d %H:00",
        Interval.DAY: "%Y-%m-%d",
        Interval.MONTH: "%Y-%m",
        Interval.YEAR: "%Y",
    },
    SqlDialect.SQLITE: {
        Interval.MINUTE: "%Y-%m-%d %H:%M:00",
        Interval.HOUR: "%Y-%m-%d %H:00",
        Interval.DAY: "%Y-%m-%d",
        Interval.MONTH: "%Y-%m",
        Interval.YEAR: "%Y",
    },
}


def sql_date_format(dialect: SqlDialect, interval: Interval | str) -> str:
    """Return the dialect's format string for an interval."""
    try:
        return DATE_FORMATS[dialect][Interval.parse(interval)]
    except KeyError:
        raise InvalidIntervalError(interval) from None


def date_format_expression(
    dialect: SqlDialect, column: ColumnElement, interval: Interval | str
) -> ColumnElement[str]:
    """Build the expression that renders ``column`` as a bucket label.

    The format is rendered inline so the expression compiles to identical
    SQL wherever it appears, which GROUP BY on PostgreSQL requires.
    """
    fmt = literal(sql_date_format(dialect, interval), literal_execute=True)

    if dialect is SqlDialect.POSTGRES:
        return func.to_char(column, fmt)
    if dialect is SqlDialect.MYSQL:
        return func.date_format(column, fmt)
    return func.strftime(fmt, column)
