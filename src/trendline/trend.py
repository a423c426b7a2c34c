"""Fluent builder for zero-filled trend aggregations.

Example::

    points = await (
        Trend.model(Order, session)
        .between(datetime(2024, 1, 1), datetime(2024, 1, 31))
        .per_day()
        .sum("total")
    )
"""

from datetime import datetime
from typing import Any

from pydantic import ValidationError
from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from trendline.core.config import settings
from trendline.core.database import get_db
from trendline.core.exceptions import InvalidTrendRequestError, MissingRangeError
from trendline.schemas.trends import AggregateFunction, Interval, TrendPoint, TrendRequest
from trendline.services.trends import aggregate_trend


class Trend:
    """Aggregate rows of a query into a dense per-interval series.

    Each setter returns the instance for chaining. The configuration is
    frozen into a ``TrendRequest`` when an aggregate runs, so one Trend
    should be used per logical request.
    """

    def __init__(self, statement: Select, session: AsyncSession | None = None):
        self.statement = statement
        self.session = session
        self._interval = Interval.parse(settings.default_interval)
        self._start: datetime | None = None
        self._end: datetime | None = None
        self._date_column = settings.default_date_column
        self._date_alias = settings.default_date_alias

    @classmethod
    def model(cls, model: Any, session: AsyncSession | None = None) -> "Trend":
        """Build a trend over every row of a mapped class or Table."""
        return cls(select(model), session)

    @classmethod
    def query(cls, statement: Select, session: AsyncSession | None = None) -> "Trend":
        """Build a trend over the rows matched by an existing statement."""
        return cls(statement, session)

    def between(self, start: datetime, end: datetime | None = None) -> "Trend":
        self._start = start
        self._end = end if end is not None else datetime.now(start.tzinfo)
        return self

    def interval(self, interval: Interval | str) -> "Trend":
        self._interval = Interval.parse(interval)
        return self

    def per_minute(self) -> "Trend":
        return self.interval(Interval.MINUTE)

    def per_hour(self) -> "Trend":
        return self.interval(Interval.HOUR)

    def per_day(self) -> "Trend":
        return self.interval(Interval.DAY)

    def per_month(self) -> "Trend":
        return self.interval(Interval.MONTH)

    def per_year(self) -> "Trend":
        return self.interval(Interval.YEAR)

    def date_column(self, column: str) -> "Trend":
        self._date_column = column
        return self

    def date_alias(self, alias: str) -> "Trend":
        self._date_alias = alias
        return self

    def request(self) -> TrendRequest:
        """Freeze the current configuration.

        Raises:
            MissingRangeError: between() was never called
            InvalidTrendRequestError: The range or column names are invalid
        """
        if self._start is None or self._end is None:
            raise MissingRangeError()

        try:
            return TrendRequest(
                interval=self._interval,
                start=self._start,
                end=self._end,
                date_column=self._date_column,
                date_alias=self._date_alias,
            )
        except ValidationError as e:
            raise InvalidTrendRequestError(str(e)) from e

    async def aggregate(
        self, column: str, function: AggregateFunction | str
    ) -> list[TrendPoint]:
        """Compute ``function(column)`` per bucket over the configured range."""
        request = self.request()
        function = AggregateFunction.parse(function)

        if self.session is not None:
            return await aggregate_trend(self.session, self.statement, request, column, function)

        async with get_db() as db:
            return await aggregate_trend(db, self.statement, request, column, function)

    async def avg(self, column: str) -> list[TrendPoint]:
        return await self.aggregate(column, AggregateFunction.AVG)

    async def average(self, column: str) -> list[TrendPoint]:
        return await self.avg(column)

    async def min(self, column: str) -> list[TrendPoint]:
        return await self.aggregate(column, AggregateFunction.MIN)

    async def max(self, column: str) -> list[TrendPoint]:
        return await self.aggregate(column, AggregateFunction.MAX)

    async def sum(self, column: str) -> list[TrendPoint]:
        return await self.aggregate(column, AggregateFunction.SUM)

    async def count(self, column: str = "*") -> list[TrendPoint]:
        return await self.aggregate(column, AggregateFunction.COUNT)
