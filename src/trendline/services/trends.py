"""Service layer for running trend aggregations and zero-filling the result."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from sqlalchemy import Select, asc, column, func, literal_column
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

from trendline.core.database import dialect_name
from trendline.core.exceptions import InvalidTrendRequestError
from trendline.schemas.trends import (
    COLUMN_PATTERN,
    AggregateFunction,
    AggregateRow,
    TrendPoint,
    TrendRequest,
)
from trendline.services.dialects import SqlDialect, date_format_expression
from trendline.services.periods import date_labels

logger = logging.getLogger(__name__)

AGGREGATE_LABEL = "aggregate"


def resolve_column(statement: Select, name: str) -> ColumnElement:
    """Resolve a column name against the tables the statement selects from.

    Falls back to an unbound column so raw names still render when the
    statement's FROM clause does not expose it.
    """
    if "." in name:
        return literal_column(name)

    for from_clause in statement.get_final_froms():
        columns = getattr(from_clause, "c", None)
        if columns is not None and name in columns:
            return columns[name]

    return column(name)


def aggregate_expression(
    statement: Select, column_name: str, function: AggregateFunction
) -> ColumnElement:
    """Build ``FUNCTION(column)`` for the aggregate select column."""
    if column_name == "*":
        if function is not AggregateFunction.COUNT:
            raise InvalidTrendRequestError(f"'*' can only be used with count, not {function.value}")
        return func.count()

    if not COLUMN_PATTERN.match(column_name):
        raise InvalidTrendRequestError(f"Invalid aggregate column name: {column_name!r}")

    return getattr(func, function.value)(resolve_column(statement, column_name))


def build_trend_statement(
    statement: Select,
    request: TrendRequest,
    dialect: SqlDialect,
    column_name: str = "*",
    function: AggregateFunction = AggregateFunction.COUNT,
) -> Select:
    """Turn a base statement into the grouped, ordered trend query.

    The statement keeps its FROM clause and WHERE criteria; its selected
    columns are replaced by the bucket label and the aggregate.
    """
    date_column = resolve_column(statement, request.date_column)
    date_expr = date_format_expression(dialect, date_column, request.interval)

    return (
        statement.with_only_columns(
            date_expr.label(request.date_alias),
            aggregate_expression(statement, column_name, function).label(AGGREGATE_LABEL),
            maintain_column_froms=True,
        )
        .where(date_column.between(request.start, request.end))
        .group_by(date_expr)
        .order_by(asc(date_expr))
    )


def _row_mapping(row: Any) -> Mapping[str, Any]:
    if isinstance(row, Mapping):
        return row
    mapping = getattr(row, "_mapping", None)
    if mapping is not None:
        return mapping
    return vars(row)


def normalize_rows(rows: Iterable[Any], date_alias: str) -> list[AggregateRow]:
    """Normalize raw result rows to ``AggregateRow``.

    Accepts SQLAlchemy ``Row`` objects, plain mappings or attribute objects.
    A missing or NULL aggregate becomes 0.
    """
    normalized = []
    for row in rows:
        mapping = _row_mapping(row)
        normalized.append(
            AggregateRow(
                date=mapping.get(date_alias),
                aggregate=mapping.get(AGGREGATE_LABEL),
            )
        )
    return normalized


def map_values_to_dates(rows: Iterable[AggregateRow], request: TrendRequest) -> list[TrendPoint]:
    """Place row aggregates into the full bucket sequence, zero-filling gaps."""
    labels = date_labels(request.start, request.end, request.interval)
    values: dict[str, int | float] = dict.fromkeys(labels, 0)

    for row in rows:
        if row.date in values:
            values[row.date] = row.aggregate
        else:
            logger.debug(f"Dropping row for {row.date!r}: outside the generated buckets")

    return [TrendPoint(date=label, aggregate=aggregate) for label, aggregate in values.items()]


async def aggregate_trend(
    db: AsyncSession,
    statement: Select,
    request: TrendRequest,
    column_name: str = "*",
    function: AggregateFunction | str = AggregateFunction.COUNT,
) -> list[TrendPoint]:
    """Run a trend aggregation and return the zero-filled series.

    Args:
        db: Database session
        statement: Base SELECT whose FROM clause and filters are kept
        request: Interval, date range and column configuration
        column_name: Column to aggregate, or "*" for count
        function: Aggregate function name

    Returns:
        One point per bucket in the range, ascending by date

    Raises:
        UnsupportedDialectError: Session is bound to an unsupported database
        InvalidAggregateError: Unknown aggregate function
    """
    function = AggregateFunction.parse(function)
    dialect = SqlDialect.from_name(dialect_name(db))
    query = build_trend_statement(statement, request, dialect, column_name, function)

    logger.debug(
        f"Running {function.value}({column_name}) trend per {request.interval.value} "
        f"from {request.start.isoformat()} to {request.end.isoformat()} on {dialect.value}"
    )

    result = await db.execute(query)
    rows = normalize_rows(result.all(), request.date_alias)
    return map_values_to_dates(rows, request)
