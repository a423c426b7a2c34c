"""Bucket alignment and the expected label sequence for a date range."""

import logging
from datetime import datetime, timedelta

from trendline.schemas.trends import Interval

logger = logging.getLogger(__name__)

# strftime formats matching the labels produced by each dialect's SQL
LABEL_FORMATS: dict[Interval, str] = {
    Interval.MINUTE: "%Y-%m-%d %H:%M:00",
    Interval.HOUR: "%Y-%m-%d %H:00",
    Interval.DAY: "%Y-%m-%d",
    Interval.MONTH: "%Y-%m",
    Interval.YEAR: "%Y",
}


def format_label(moment: datetime, interval: Interval | str) -> str:
    """Render ``moment`` as the label of the bucket containing it.

    Fields are zero-padded and taken from the datetime's own calendar, so
    aware datetimes are labelled in their own timezone.
    """
    fmt = LABEL_FORMATS[Interval.parse(interval)]
    # %Y is not zero-padded for years below 1000 on glibc
    return moment.strftime(fmt.replace("%Y", f"{moment.year:04d}"))


def align(moment: datetime, interval: Interval | str) -> datetime:
    """Truncate ``moment`` to the start of its bucket."""
    interval = Interval.parse(interval)
    aligned = moment.replace(second=0, microsecond=0)
    if interval is Interval.MINUTE:
        return aligned
    aligned = aligned.replace(minute=0)
    if interval is Interval.HOUR:
        return aligned
    aligned = aligned.replace(hour=0)
    if interval is Interval.DAY:
        return aligned
    aligned = aligned.replace(day=1)
    if interval is Interval.MONTH:
        return aligned
    return aligned.replace(month=1)


def step(anchor: datetime, interval: Interval | str) -> datetime:
    """Advance an aligned anchor by exactly one interval.

    Minutes, hours and days are wall-clock steps; months and years use
    calendar arithmetic, which is safe because anchors sit on day 1.
    """
    interval = Interval.parse(interval)
    if interval is Interval.MINUTE:
        return anchor + timedelta(minutes=1)
    if interval is Interval.HOUR:
        return anchor + timedelta(hours=1)
    if interval is Interval.DAY:
        return anchor + timedelta(days=1)
    if interval is Interval.MONTH:
        if anchor.month == 12:
            return anchor.replace(year=anchor.year + 1, month=1)
        return anchor.replace(month=anchor.month + 1)
    return anchor.replace(year=anchor.year + 1)


def date_period(start: datetime, end: datetime, interval: Interval | str) -> list[datetime]:
    """Return the anchor of every bucket overlapping ``[start, end]``.

    The first anchor is ``start`` aligned down to its bucket; anchors follow
    one interval apart up to and including the bucket that contains ``end``.
    A range whose end precedes its start yields no anchors.
    """
    interval = Interval.parse(interval)
    anchors: list[datetime] = []
    anchor = align(start, interval)
    while anchor <= end:
        anchors.append(anchor)
        anchor = step(anchor, interval)

    logger.debug(f"Generated {len(anchors)} {interval.value} buckets from {start} to {end}")
    return anchors


def date_labels(start: datetime, end: datetime, interval: Interval | str) -> list[str]:
    """Return the labels of every bucket in ``[start, end]``, ascending."""
    return [format_label(anchor, interval) for anchor in date_period(start, end, interval)]
