"""Typed Crossref queries that compile to request routes."""

from .base import CommonQuery, Component, CrossrefQuery, CrossrefRoute
from .facet import Facet, FacetCount
from .funders import Funders, FundersFilter, FundersFilterKind, FundersQuery
from .journals import Journals
from .members import Members, MembersFilter, MembersFilterKind, MembersQuery
from .params import (
    Order,
    ParamFragment,
    QueryParam,
    ResultControl,
    Sort,
    format_queries,
    format_query,
)
from .prefixes import Prefixes
from .types import Types
from .works import (
    FieldQuery,
    QueryField,
    WorkElement,
    WorkListQuery,
    WorkResultControl,
    Works,
    WorksCombiner,
    WorksFilter,
    WorksFilterKind,
    WorksIdentQuery,
    WorksQuery,
)

# Every resource query a route can resolve to
ResourceComponent = Works | Journals | Funders | Members | Prefixes | Types

__all__ = [
    "CommonQuery",
    "Component",
    "CrossrefQuery",
    "CrossrefRoute",
    "Facet",
    "FacetCount",
    "FieldQuery",
    "Funders",
    "FundersFilter",
    "FundersFilterKind",
    "FundersQuery",
    "Journals",
    "Members",
    "MembersFilter",
    "MembersFilterKind",
    "MembersQuery",
    "Order",
    "ParamFragment",
    "Prefixes",
    "QueryField",
    "QueryParam",
    "ResourceComponent",
    "ResultControl",
    "Sort",
    "Types",
    "WorkElement",
    "WorkListQuery",
    "WorkResultControl",
    "Works",
    "WorksCombiner",
    "WorksFilter",
    "WorksFilterKind",
    "WorksIdentQuery",
    "WorksQuery",
    "format_queries",
    "format_query",
]
