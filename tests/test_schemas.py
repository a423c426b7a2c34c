"""Tests for trend schemas."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from trendline.core.exceptions import InvalidAggregateError, InvalidIntervalError
from trendline.schemas.trends import (
    AggregateFunction,
    AggregateRow,
    Interval,
    TrendRequest,
)


class TestInterval:
    """Tests for interval parsing."""

    def test_parse_string(self):
        """String values should parse case-insensitively."""
        assert Interval.parse("Hour") is Interval.HOUR

    def test_parse_enum(self):
        """Enum members should pass through."""
        assert Interval.parse(Interval.YEAR) is Interval.YEAR

    def test_parse_invalid(self):
        """Unknown values should raise InvalidIntervalError."""
        with pytest.raises(InvalidIntervalError):
            Interval.parse("week")


class TestAggregateFunction:
    """Tests for aggregate function parsing."""

    def test_parse_string(self):
        """String values should parse case-insensitively."""
        assert AggregateFunction.parse("SUM") is AggregateFunction.SUM

    def test_parse_invalid(self):
        """Unknown values should raise InvalidAggregateError."""
        with pytest.raises(InvalidAggregateError):
            AggregateFunction.parse("median")


class TestTrendRequest:
    """Tests for trend request validation."""

    def test_defaults(self):
        """Column and alias should default to created_at and date."""
        request = TrendRequest(
            interval=Interval.DAY, start=datetime(2024, 1, 1), end=datetime(2024, 1, 2)
        )
        assert request.date_column == "created_at"
        assert request.date_alias == "date"

    def test_frozen(self):
        """Requests should be immutable."""
        request = TrendRequest(
            interval=Interval.DAY, start=datetime(2024, 1, 1), end=datetime(2024, 1, 2)
        )
        with pytest.raises(ValidationError):
            request.interval = Interval.HOUR

    def test_start_after_end(self):
        """A start later than the end should be rejected."""
        with pytest.raises(ValidationError, match="start must not be after end"):
            TrendRequest(
                interval=Interval.DAY, start=datetime(2024, 1, 2), end=datetime(2024, 1, 1)
            )

    def test_mixed_timezones(self):
        """Mixing naive and aware datetimes should be rejected."""
        with pytest.raises(ValidationError, match="naive"):
            TrendRequest(
                interval=Interval.DAY,
                start=datetime(2024, 1, 1),
                end=datetime(2024, 1, 2, tzinfo=timezone.utc),
            )

    def test_qualified_column_allowed(self):
        """Table-qualified date columns should be accepted."""
        request = TrendRequest(
            interval=Interval.DAY,
            start=datetime(2024, 1, 1),
            end=datetime(2024, 1, 2),
            date_column="orders.paid_at",
        )
        assert request.date_column == "orders.paid_at"

    @pytest.mark.parametrize("name", ["created_at; drop table orders", "1col", "a.b.c", ""])
    def test_invalid_column(self, name: str):
        """Column names that are not plain identifiers should be rejected."""
        with pytest.raises(ValidationError):
            TrendRequest(
                interval=Interval.DAY,
                start=datetime(2024, 1, 1),
                end=datetime(2024, 1, 2),
                date_column=name,
            )

    @pytest.mark.parametrize("alias", ["aggregate", "my date", "t.date"])
    def test_invalid_alias(self, alias: str):
        """Aliases must be plain identifiers other than 'aggregate'."""
        with pytest.raises(ValidationError):
            TrendRequest(
                interval=Interval.DAY,
                start=datetime(2024, 1, 1),
                end=datetime(2024, 1, 2),
                date_alias=alias,
            )


class TestAggregateRow:
    """Tests for aggregate row coercion."""

    def test_null_aggregate_is_zero(self):
        """NULL aggregates should become 0."""
        assert AggregateRow(date="2024-01-01", aggregate=None).aggregate == 0

    def test_missing_aggregate_is_zero(self):
        """A missing aggregate should default to 0."""
        assert AggregateRow(date="2024-01-01").aggregate == 0

    def test_integral_decimal_becomes_int(self):
        """Whole Decimal values should become ints."""
        row = AggregateRow(date="2024-01-01", aggregate=Decimal("42"))
        assert row.aggregate == 42
        assert isinstance(row.aggregate, int)

    def test_fractional_decimal_becomes_float(self):
        """Fractional Decimal values should become floats."""
        assert AggregateRow(date="2024-01-01", aggregate=Decimal("2.5")).aggregate == 2.5

    def test_numeric_string(self):
        """Numeric strings should be parsed."""
        assert AggregateRow(date="2024", aggregate="3.25").aggregate == 3.25

    def test_non_numeric_aggregate_rejected(self):
        """Unparseable aggregates should raise rather than become 0."""
        with pytest.raises(ValidationError, match="not numeric"):
            AggregateRow(date="2024", aggregate="n/a")

    def test_non_string_date(self):
        """Non-string date values should be stringified."""
        assert AggregateRow(date=2024, aggregate=1).date == "2024"
