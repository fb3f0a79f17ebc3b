"""Query support for the ``/funders`` route."""

from enum import Enum
from typing import Any, ClassVar, Literal

from pydantic import Field

from .base import CommonQuery, Component, list_route
from .params import Filter
from .works import WorksCombiner


class FundersFilterKind(str, Enum):
    """Filters allowed on ``/funders``."""

    # Funders located in the given country (a GeoNames label, e.g. "Germany")
    LOCATION = "location"


class FundersFilter(Filter):
    kind: FundersFilterKind

    _argument_types: ClassVar[dict[Any, type | None]] = {
        FundersFilterKind.LOCATION: str,
    }

    @classmethod
    def location(cls, country: str) -> "FundersFilter":
        return cls(FundersFilterKind.LOCATION, country)


class FundersQuery(CommonQuery):
    filters: list[FundersFilter] = Field(default_factory=list)


class Funders(WorksCombiner):
    """Funders by id (e.g. ``501100000780``), funder search, or the works a funder funded."""

    component: ClassVar[Component] = Component.FUNDERS

    kind: Literal["identifier", "query", "works"]
    query: FundersQuery | None = None

    @classmethod
    def search(cls, query: FundersQuery | str) -> "Funders":
        if isinstance(query, str):
            query = FundersQuery.new(query)
        return cls(kind="query", query=query)

    def query_route(self) -> str:
        return list_route(self.component, self.query.query_string())
