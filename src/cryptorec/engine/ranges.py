"""Resolution of optional calendar-date bounds into concrete instant ranges."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone, tzinfo

from cryptorec.data.store import PriceStore
from cryptorec.exceptions import InvalidRangeError, NoDataError
from cryptorec.types import Symbol, TimeRange

# Smallest step representable by datetime; the end of a day is one step
# before the next day's start.
_RESOLUTION = timedelta(microseconds=1)


def start_of_day(day: date, tz: tzinfo = timezone.utc) -> datetime:
    """Return the first instant of ``day`` in ``tz``, expressed in UTC."""
    return datetime.combine(day, time.min, tzinfo=tz).astimezone(timezone.utc)


def end_of_day(day: date, tz: tzinfo = timezone.utc) -> datetime:
    """Return the last representable instant of ``day`` in ``tz``, in UTC."""
    return start_of_day(day + timedelta(days=1), tz) - _RESOLUTION


class DateRangeResolver:
    """Turn an optional ``(from, to)`` date pair into a validated TimeRange.

    Omitted bounds fall back to the symbol's earliest and latest recorded
    timestamps. The ``from <= to`` check runs on the resolved instants, so an
    omitted bound never causes an invalid range by itself.

    :param store: Price store supplying per-symbol history bounds.
    :param tz: Timezone defining calendar-day boundaries (default UTC).
    """

    def __init__(self, store: PriceStore, tz: tzinfo = timezone.utc) -> None:
        self.store = store
        self.tz = tz

    def resolve(
        self,
        symbol: Symbol,
        from_date: date | None = None,
        to_date: date | None = None,
    ) -> TimeRange:
        """Resolve bounds for ``symbol``.

        :param symbol: Canonical symbol whose history bounds are used for defaults.
        :param from_date: Optional first calendar day (inclusive).
        :param to_date: Optional last calendar day (inclusive).
        :returns: Validated TimeRange.
        :raises NoDataError: If a bound is omitted and the symbol has no observations.
        :raises InvalidRangeError: If the resolved start is after the resolved end.
        """
        if from_date is not None:
            start = start_of_day(from_date, self.tz)
        else:
            start = self.store.earliest_timestamp(symbol)

        if to_date is not None:
            end = end_of_day(to_date, self.tz)
        else:
            end = self.store.latest_timestamp(symbol)

        if start is None or end is None:
            raise NoDataError(symbol)

        if start > end:
            raise InvalidRangeError()

        return TimeRange(start=start, end=end)
