"""Reporting window value object"""

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional, Union

from ..enums import StatsPeriod

EPOCH = date(1970, 1, 1)
END_OF_DAY = time(23, 59, 59, 999000)

DateLike = Union[date, datetime]


@dataclass(frozen=True)
class DateWindow:
    """Inclusive [start, end] range used to scope dashboard queries.

    A start after the end is allowed and matches nothing.
    """

    start: datetime
    end: datetime

    @property
    def is_empty(self) -> bool:
        return self.start > self.end

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end

    @classmethod
    def for_days(cls, first: DateLike, last: DateLike) -> "DateWindow":
        """Window from the start of ``first`` to the end of ``last``."""
        return cls(
            start=datetime.combine(_as_date(first), time.min),
            end=datetime.combine(_as_date(last), END_OF_DAY),
        )

    @classmethod
    def resolve(
        cls,
        period: Optional[str] = None,
        start_date: Optional[DateLike] = None,
        end_date: Optional[DateLike] = None,
        now: Optional[datetime] = None,
    ) -> Optional["DateWindow"]:
        """Resolve query parameters into a window.

        Explicit dates win over ``period``; a missing start means the epoch
        and a missing end means today. Unknown periods fall back to the
        current calendar month. Returns ``None`` when no parameter is given,
        meaning the query is not date-filtered at all.
        """
        if not (period or start_date or end_date):
            return None

        today = (now or datetime.utcnow()).date()

        if start_date or end_date:
            return cls.for_days(start_date or EPOCH, end_date or today)

        if period == StatsPeriod.WEEK.value:
            return cls.for_days(today - timedelta(days=6), today)
        if period == StatsPeriod.QUARTER.value:
            first_month = ((today.month - 1) // 3) * 3 + 1
            return cls.for_days(
                date(today.year, first_month, 1),
                _last_day_of_month(today.year, first_month + 2),
            )
        if period == StatsPeriod.YEAR.value:
            return cls.for_days(date(today.year, 1, 1), date(today.year, 12, 31))

        # "month" and anything unrecognised
        return cls.for_days(
            date(today.year, today.month, 1),
            _last_day_of_month(today.year, today.month),
        )


def _as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def _last_day_of_month(year: int, month: int) -> date:
    return date(year, month, calendar.monthrange(year, month)[1])
