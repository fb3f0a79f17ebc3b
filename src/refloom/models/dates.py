"""Crossref's ``date-parts`` encoding and the date records built on it.

Crossref encodes dates as ``{"date-parts": [[2019, 3, 1]]}``: a list of
``[year, month, day]`` tuples where month and day may be missing. One tuple is
a single date, two tuples form a range and more are a list of dates.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, RootModel, StrictInt, StrictStr, field_validator

from .base import CrossrefModel


def _complete(parts: list[int | None]) -> datetime.date:
    year, month, day = (list(parts) + [None, None])[:3]
    return datetime.date(year, month or 1, day or 1)


class SingleDate(BaseModel):
    date: datetime.date

    model_config = ConfigDict(frozen=True)

    def display(self) -> str:
        return self.date.isoformat()


class DateRange(BaseModel):
    from_: datetime.date
    to: datetime.date

    model_config = ConfigDict(frozen=True)

    def display(self) -> str:
        return f"{self.from_.isoformat()}-{self.to.isoformat()}"


class MultiDate(BaseModel):
    dates: list[datetime.date]

    model_config = ConfigDict(frozen=True)

    def display(self) -> str:
        return ", ".join(day.isoformat() for day in self.dates)


DateField = SingleDate | DateRange | MultiDate


class DateParts(RootModel[list[list[Optional[StrictInt]]]]):
    """The raw ``date-parts`` list.

    Tuples without a year carry no usable date and are dropped. A tuple with
    more than three components, or one that does not name a real calendar
    day, rejects the whole value.
    """

    @field_validator("root")
    @classmethod
    def _normalize(cls, value: list[list[int | None]]) -> list[list[int | None]]:
        normalized = []
        for parts in value:
            if len(parts) > 3:
                raise ValueError(f"date-parts entry has more than three components: {parts}")
            if not parts or parts[0] is None:
                continue
            try:
                _complete(parts)
            except ValueError as e:
                raise ValueError(f"date-parts entry is not a calendar date: {parts}") from e
            normalized.append(parts)
        return normalized

    def as_date(self) -> DateField | None:
        """Missing months and days default to ``1``; ``None`` if no tuple remains."""
        dates = [_complete(parts) for parts in self.root]
        if not dates:
            return None
        if len(dates) == 1:
            return SingleDate(date=dates[0])
        if len(dates) == 2:
            return DateRange(from_=dates[0], to=dates[1])
        return MultiDate(dates=dates)

    @property
    def year(self) -> int | None:
        if not self.root:
            return None
        return self.root[0][0]


class PartialDate(CrossrefModel):
    """A date that carries only ``date-parts`` (``issued``, ``published-print``, ...)."""

    date_parts: DateParts

    def as_date_field(self) -> DateField | None:
        return self.date_parts.as_date()

    @property
    def year(self) -> int | None:
        return self.date_parts.year


class Date(CrossrefModel):
    """A fully specified Crossref timestamp (``created``, ``indexed``, ``deposited``).

    Attributes:
        date_parts: The date parts of the event.
        timestamp: Milliseconds since the Unix epoch, kept verbatim.
        date_time: ISO 8601 string as sent by Crossref, kept verbatim.
    """

    date_parts: DateParts
    timestamp: StrictInt
    date_time: StrictStr

    def as_date_field(self) -> DateField | None:
        return self.date_parts.as_date()

    @property
    def year(self) -> int | None:
        return self.date_parts.year

    def to_display(self) -> str:
        date_field = self.as_date_field()
        if date_field is None:
            return ""
        return date_field.display()

    def __str__(self) -> str:
        return self.to_display()
