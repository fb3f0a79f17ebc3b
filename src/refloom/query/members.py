"""Query support for the ``/members`` route."""

from enum import Enum
from typing import Any, ClassVar, Literal

from pydantic import Field

from ..constants import Visibility
from .base import CommonQuery, Component, list_route
from .params import Filter
from .works import WorksCombiner


class MembersFilterKind(str, Enum):
    """Filters allowed on ``/members``."""

    HAS_PUBLIC_REFERENCES = "has-public-references"
    REFERENCE_VISIBILITY = "reference-visibility"
    BACKFILE_DOI_COUNT = "backfile-doi-count"
    CURRENT_DOI_COUNT = "current-doi-count"


class MembersFilter(Filter):
    kind: MembersFilterKind

    _argument_types: ClassVar[dict[Any, type | None]] = {
        MembersFilterKind.HAS_PUBLIC_REFERENCES: None,
        MembersFilterKind.REFERENCE_VISIBILITY: Visibility,
        MembersFilterKind.BACKFILE_DOI_COUNT: int,
        MembersFilterKind.CURRENT_DOI_COUNT: int,
    }


class MembersQuery(CommonQuery):
    filters: list[MembersFilter] = Field(default_factory=list)


class Members(WorksCombiner):
    """Crossref members by id, member search, or the works deposited by a member."""

    component: ClassVar[Component] = Component.MEMBERS

    kind: Literal["identifier", "query", "works"]
    query: MembersQuery | None = None

    @classmethod
    def search(cls, query: MembersQuery | str) -> "Members":
        if isinstance(query, str):
            query = MembersQuery.new(query)
        return cls(kind="query", query=query)

    def query_route(self) -> str:
        return list_route(self.component, self.query.query_string())
