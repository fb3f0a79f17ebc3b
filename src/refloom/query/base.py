"""Route compilation shared by all Crossref resources."""

from collections.abc import Sequence
from enum import Enum
from typing import Any, ClassVar

from pydantic import Field

from ..exceptions import ConfigurationError
from ..log_config import logger
from .facet import FacetCount
from .params import (
    Order,
    QueryModel,
    ResultControl,
    Sort,
    format_queries,
    join_params,
    multi_value_param,
)


class Component(str, Enum):
    """Top-level Crossref resources."""

    WORKS = "works"
    FUNDERS = "funders"
    PREFIXES = "prefixes"
    MEMBERS = "members"
    TYPES = "types"
    JOURNALS = "journals"

    def route(self) -> str:
        return f"/{self.value}"


def identifier_route(component: Component, identifier: str) -> str:
    """Build ``/{component}/{identifier}``, rejecting identifiers that cannot form a path."""
    if not identifier or any(char.isspace() for char in identifier):
        raise ConfigurationError(
            f"Invalid identifier {identifier!r} for /{component.value}"
        )
    return f"{component.route()}/{identifier}"


def list_route(component: Component, query_string: str) -> str:
    if not query_string:
        return component.route()
    return f"{component.route()}?{query_string}"


class CrossrefRoute:
    """Anything that compiles to a Crossref request path plus query string."""

    def route(self) -> str:
        raise NotImplementedError


class CrossrefQuery(CrossrefRoute):
    """A route that also knows which top-level resource it addresses."""

    component: ClassVar[Component]

    def primary_component(self) -> Component:
        return self.component

    def resource_component(self) -> "CrossrefQuery":
        return self

    def to_url(self, base_path: str) -> str:
        """Join the compiled route onto a base URL such as ``https://api.crossref.org``."""
        route = self.route()
        logger.debug(f"Compiled {type(self).__name__} route: {route}")
        return f"{base_path.rstrip('/')}{route}"


class CommonQuery(QueryModel):
    """Free-form terms, filters, sorting, facets and pagination shared by list endpoints.

    Subclasses narrow ``filters`` to their resource's filter type.
    """

    queries: list[str] = Field(default_factory=list)
    filters: list[Any] = Field(default_factory=list)
    sort: Sort | None = None
    order: Order | None = None
    facets: list[FacetCount] = Field(default_factory=list)
    result_control: ResultControl | None = None

    @classmethod
    def new(cls, *terms: str):
        return cls(queries=list(terms))

    def with_query(self, term: str):
        return self.model_copy(update={"queries": [*self.queries, term]})

    def with_queries(self, terms: Sequence[str]):
        return self.model_copy(update={"queries": [*self.queries, *terms]})

    def with_filter(self, query_filter: Any):
        return self.model_copy(update={"filters": [*self.filters, query_filter]})

    def with_sort(self, sort: Sort):
        return self.model_copy(update={"sort": sort})

    def with_order(self, order: Order):
        return self.model_copy(update={"order": order})

    def order_asc(self):
        return self.with_order(Order.ASC)

    def order_desc(self):
        return self.with_order(Order.DESC)

    def with_facet(self, facet: FacetCount):
        return self.model_copy(update={"facets": [*self.facets, facet]})

    def with_result_control(self, result_control: ResultControl):
        return self.model_copy(update={"result_control": result_control})

    def query_string(self) -> str:
        params: list[str] = []
        query = format_queries(self.queries)
        if query:
            params.append(f"query={query}")
        if self.filters:
            params.append(multi_value_param("filter", self.filters))
        if self.facets:
            params.append(multi_value_param("facet", self.facets))
        if self.sort is not None:
            params.append(self.sort.param())
        if self.order is not None:
            params.append(self.order.param())
        if self.result_control is not None:
            params.append(self.result_control.param())
        return join_params(params)
