"""New-moon epoch table and the lunar-day resolver built on top of it.

The lunar day of a calendar date is the number of whole days since the most
recent tabulated new moon, reduced modulo 30 so that long gaps past the end
of the table still map onto the 30-entry phase catalog. Both the date and the
epoch are reduced to their UTC calendar date before subtraction.
"""

from __future__ import annotations

from bisect import bisect_right
from datetime import date, datetime, timezone
from typing import Iterable, Iterator, Tuple, Union

from .errors import OutOfRangeError

LUNAR_DAYS = 30

DateLike = Union[date, datetime]

# Known new moons (UTC). Extend at the end; entries must stay strictly increasing.
NEW_MOON_UTC = (
    "2024-01-11T11:57Z", "2024-02-09T22:59Z", "2024-03-10T09:00Z", "2024-04-08T18:21Z",
    "2024-05-08T03:22Z", "2024-06-06T12:38Z", "2024-07-05T22:57Z", "2024-08-04T11:13Z",
    "2024-09-03T01:55Z", "2024-10-02T18:49Z", "2024-11-01T12:47Z", "2024-12-01T06:21Z",
    "2024-12-30T22:27Z", "2025-01-29T12:36Z", "2025-02-28T00:45Z", "2025-03-29T10:58Z",
    "2025-04-27T21:32Z", "2025-05-27T08:03Z", "2025-06-25T18:42Z", "2025-07-25T05:51Z",
    "2025-08-23T17:15Z", "2025-09-22T05:19Z", "2025-10-21T18:17Z", "2025-11-20T08:14Z",
    "2025-12-20T00:33Z",
    "2026-01-18T19:52Z", "2026-02-17T12:01Z", "2026-03-19T01:23Z", "2026-04-17T11:52Z",
    "2026-05-16T20:01Z", "2026-06-15T02:54Z", "2026-07-14T09:44Z", "2026-08-12T17:37Z",
    "2026-09-11T03:27Z", "2026-10-10T15:50Z", "2026-11-09T07:02Z", "2026-12-09T00:52Z",
)


def parse_utc(value: str) -> datetime:
    """Parse an ISO instant such as ``2024-01-11T11:57Z`` into an aware UTC datetime."""

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    moment = datetime.fromisoformat(text)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def utc_day(value: DateLike) -> date:
    """Reduce a date or datetime to the calendar date used for day counting."""

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value


class SynodicEpochTable:
    """Immutable, strictly increasing sequence of new-moon instants."""

    __slots__ = ("_epochs", "_days")

    def __init__(self, epochs: Iterable[datetime]) -> None:
        ordered = tuple(e if e.tzinfo else e.replace(tzinfo=timezone.utc) for e in epochs)
        if not ordered:
            raise ValueError("epoch table must not be empty")
        for previous, current in zip(ordered, ordered[1:]):
            if current <= previous:
                raise ValueError(f"epochs must be strictly increasing: {current.isoformat()}")
        self._epochs: Tuple[datetime, ...] = ordered
        self._days: Tuple[date, ...] = tuple(utc_day(e) for e in ordered)

    @classmethod
    def from_iso(cls, values: Iterable[str]) -> "SynodicEpochTable":
        return cls(parse_utc(v) for v in values)

    def __len__(self) -> int:
        return len(self._epochs)

    def __iter__(self) -> Iterator[datetime]:
        return iter(self._epochs)

    def __getitem__(self, index: int) -> datetime:
        return self._epochs[index]

    @property
    def first(self) -> datetime:
        return self._epochs[0]

    @property
    def last(self) -> datetime:
        return self._epochs[-1]

    def last_at_or_before(self, value: DateLike) -> datetime:
        """Return the latest epoch whose UTC date is not after ``value``."""

        day = utc_day(value)
        pos = bisect_right(self._days, day) - 1
        if pos < 0:
            raise OutOfRangeError(
                f"{day.isoformat()} precedes the first tabulated new moon "
                f"({self._epochs[0].isoformat()})"
            )
        return self._epochs[pos]


class LunarDayResolver:
    def __init__(self, table: SynodicEpochTable) -> None:
        self.table = table

    def resolve(self, value: DateLike) -> int:
        """Map a date onto its lunar-day index in ``[0, 29]``."""

        day = utc_day(value)
        epoch = self.table.last_at_or_before(day)
        elapsed = (day - utc_day(epoch)).days
        return elapsed % LUNAR_DAYS


NEW_MOON_EPOCHS = SynodicEpochTable.from_iso(NEW_MOON_UTC)
RESOLVER = LunarDayResolver(NEW_MOON_EPOCHS)


def lunar_day_index(value: DateLike) -> int:
    return RESOLVER.resolve(value)


__all__ = [
    "LUNAR_DAYS",
    "NEW_MOON_UTC",
    "NEW_MOON_EPOCHS",
    "SynodicEpochTable",
    "LunarDayResolver",
    "lunar_day_index",
    "parse_utc",
    "utc_day",
]
