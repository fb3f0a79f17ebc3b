"""Query support for the ``/journals`` route."""

from typing import ClassVar, Literal

from pydantic import Field

from .base import Component, list_route
from .params import ResultControl, format_queries, join_params
from .works import WorksCombiner


class Journals(WorksCombiner):
    """Journals by ISSN, a free-form journal search, or the works of one journal."""

    component: ClassVar[Component] = Component.JOURNALS

    kind: Literal["identifier", "query", "works"]
    terms: list[str] = Field(default_factory=list)
    result_control: ResultControl | None = None

    @classmethod
    def search(
        cls, *terms: str, result_control: ResultControl | None = None
    ) -> "Journals":
        return cls(kind="query", terms=list(terms), result_control=result_control)

    def query_route(self) -> str:
        query = format_queries(self.terms)
        query_param = f"query={query}" if query else ""
        if self.result_control is None:
            return list_route(self.component, query_param)
        # Crossref answers this form with a trailing slash before the query string
        params = join_params([query_param, self.result_control.param()])
        return f"{self.component.route()}/?{params}"
