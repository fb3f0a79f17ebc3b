"""Query support for the ``/works`` route and for works listed under a parent resource."""

from collections.abc import Sequence
from datetime import date
from enum import Enum
from typing import Any, ClassVar, Literal

from pydantic import ConfigDict, Field, model_validator

from ..constants import Visibility, WorkType
from ..exceptions import ConfigurationError, InvalidResultControlError
from .base import (
    CommonQuery,
    Component,
    CrossrefQuery,
    CrossrefRoute,
    identifier_route,
    list_route,
)
from .params import (
    Filter,
    QueryModel,
    QueryParam,
    ResultControl,
    format_queries,
    format_query,
    join_params,
    multi_value_param,
    parse_pairs,
)


class WorksFilterKind(str, Enum):
    """Filters that can be applied to ``/works`` and combined works routes."""

    HAS_FUNDER = "has-funder"
    FUNDER = "funder"
    LOCATION = "location"
    PREFIX = "prefix"
    MEMBER = "member"
    FROM_INDEX_DATE = "from-index-date"
    UNTIL_INDEX_DATE = "until-index-date"
    FROM_DEPOSIT_DATE = "from-deposit-date"
    UNTIL_DEPOSIT_DATE = "until-deposit-date"
    FROM_UPDATE_DATE = "from-update-date"
    UNTIL_UPDATE_DATE = "until-update-date"
    FROM_CREATED_DATE = "from-created-date"
    UNTIL_CREATED_DATE = "until-created-date"
    FROM_PUB_DATE = "from-pub-date"
    UNTIL_PUB_DATE = "until-pub-date"
    FROM_ONLINE_PUB_DATE = "from-online-pub-date"
    UNTIL_ONLINE_PUB_DATE = "until-online-pub-date"
    FROM_PRINT_PUB_DATE = "from-print-pub-date"
    UNTIL_PRINT_PUB_DATE = "until-print-pub-date"
    FROM_POSTED_DATE = "from-posted-date"
    UNTIL_POSTED_DATE = "until-posted-date"
    FROM_ACCEPTED_DATE = "from-accepted-date"
    UNTIL_ACCEPTED_DATE = "until-accepted-date"
    HAS_LICENSE = "has-license"
    LICENSE_URL = "license.url"
    LICENSE_VERSION = "license.version"
    LICENSE_DELAY = "license.delay"
    HAS_FULL_TEXT = "has-full-text"
    FULL_TEXT_VERSION = "full-text.version"
    FULL_TEXT_TYPE = "full-text.type"
    FULL_TEXT_APPLICATION = "full-text.application"
    HAS_REFERENCES = "has-references"
    REFERENCE_VISIBILITY = "reference-visibility"
    HAS_ARCHIVE = "has-archive"
    ARCHIVE = "archive"
    HAS_ORCID = "has-orcid"
    HAS_AUTHENTICATED_ORCID = "has-authenticated-orcid"
    ORCID = "orcid"
    ISSN = "issn"
    ISBN = "isbn"
    TYPE = "type"
    DIRECTORY = "directory"
    DOI = "doi"
    UPDATES = "updates"
    IS_UPDATE = "is-update"
    HAS_UPDATE_POLICY = "has-update-policy"
    CONTAINER_TITLE = "container-title"
    CATEGORY_NAME = "category-name"
    TYPE_NAME = "type-name"
    AWARD_NUMBER = "award.number"
    AWARD_FUNDER = "award.funder"
    HAS_ASSERTION = "has-assertion"
    ASSERTION_GROUP = "assertion-group"
    ASSERTION = "assertion"
    HAS_AFFILIATION = "has-affiliation"
    ALTERNATIVE_ID = "alternative-id"
    ARTICLE_NUMBER = "article-number"
    HAS_ABSTRACT = "has-abstract"
    HAS_CLINICAL_TRIAL_NUMBER = "has-clinical-trial-number"
    CONTENT_DOMAIN = "content-domain"
    HAS_CONTENT_DOMAIN = "has-content-domain"
    HAS_DOMAIN_RESTRICTION = "has-domain-restriction"
    HAS_RELATION = "has-relation"
    RELATION_TYPE = "relation.type"
    RELATION_OBJECT = "relation.object"
    RELATION_OBJECT_TYPE = "relation.object-type"


_FLAGS = {
    WorksFilterKind.HAS_FUNDER,
    WorksFilterKind.HAS_LICENSE,
    WorksFilterKind.HAS_FULL_TEXT,
    WorksFilterKind.HAS_REFERENCES,
    WorksFilterKind.HAS_ARCHIVE,
    WorksFilterKind.HAS_ORCID,
    WorksFilterKind.HAS_AUTHENTICATED_ORCID,
    WorksFilterKind.IS_UPDATE,
    WorksFilterKind.HAS_UPDATE_POLICY,
    WorksFilterKind.HAS_ASSERTION,
    WorksFilterKind.HAS_AFFILIATION,
    WorksFilterKind.HAS_ABSTRACT,
    WorksFilterKind.HAS_CLINICAL_TRIAL_NUMBER,
    WorksFilterKind.HAS_CONTENT_DOMAIN,
    WorksFilterKind.HAS_DOMAIN_RESTRICTION,
    WorksFilterKind.HAS_RELATION,
}

_ARGUMENT_TYPES: dict[WorksFilterKind, type | None] = {}
for _kind in WorksFilterKind:
    if _kind in _FLAGS:
        _ARGUMENT_TYPES[_kind] = None
    elif _kind.value.endswith("-date"):
        _ARGUMENT_TYPES[_kind] = date
    else:
        _ARGUMENT_TYPES[_kind] = str
_ARGUMENT_TYPES[WorksFilterKind.LICENSE_DELAY] = int
_ARGUMENT_TYPES[WorksFilterKind.REFERENCE_VISIBILITY] = Visibility
_ARGUMENT_TYPES[WorksFilterKind.TYPE] = WorkType


class WorksFilter(Filter):
    """A single ``/works`` filter, e.g. ``WorksFilter(WorksFilterKind.MEMBER, "15")``.

    Flag filters such as ``has-funder`` take no argument and render ``true``,
    ``*-date`` filters take a `datetime.date`, ``license.delay`` an int,
    ``reference-visibility`` a `Visibility` and ``type`` a `WorkType`.
    """

    kind: WorksFilterKind

    _argument_types: ClassVar[dict[Any, type | None]] = _ARGUMENT_TYPES

    @classmethod
    def has_funder(cls) -> "WorksFilter":
        return cls(WorksFilterKind.HAS_FUNDER)

    @classmethod
    def funder(cls, funder_id: str) -> "WorksFilter":
        return cls(WorksFilterKind.FUNDER, funder_id)

    @classmethod
    def member(cls, member_id: str | int) -> "WorksFilter":
        return cls(WorksFilterKind.MEMBER, member_id)

    @classmethod
    def prefix(cls, owner_prefix: str) -> "WorksFilter":
        return cls(WorksFilterKind.PREFIX, owner_prefix)

    @classmethod
    def doi(cls, doi: str) -> "WorksFilter":
        return cls(WorksFilterKind.DOI, doi)

    @classmethod
    def issn(cls, issn: str) -> "WorksFilter":
        return cls(WorksFilterKind.ISSN, issn)

    @classmethod
    def orcid(cls, orcid: str) -> "WorksFilter":
        return cls(WorksFilterKind.ORCID, orcid)

    @classmethod
    def work_type(cls, work_type: WorkType | str) -> "WorksFilter":
        return cls(WorksFilterKind.TYPE, work_type)

    @classmethod
    def from_pub_date(cls, day: date) -> "WorksFilter":
        return cls(WorksFilterKind.FROM_PUB_DATE, day)

    @classmethod
    def until_pub_date(cls, day: date) -> "WorksFilter":
        return cls(WorksFilterKind.UNTIL_PUB_DATE, day)


class WorkElement(str, Enum):
    """Fields that can be returned via ``select=``."""

    DOI = "DOI"
    ISBN = "ISBN"
    ISSN = "ISSN"
    URL = "URL"
    ABSTRACT = "abstract"
    ACCEPTED = "accepted"
    ALTERNATIVE_ID = "alternative-id"
    APPROVED = "approved"
    ARCHIVE = "archive"
    ARTICLE_NUMBER = "article-number"
    ASSERTION = "assertion"
    AUTHOR = "author"
    CHAIR = "chair"
    CLINICAL_TRIAL_NUMBER = "clinical-trial-number"
    CONTAINER_TITLE = "container-title"
    CONTENT_CREATED = "content-created"
    CONTENT_DOMAIN = "content-domain"
    CREATED = "created"
    DEGREE = "degree"
    DEPOSITED = "deposited"
    EDITOR = "editor"
    EVENT = "event"
    FUNDER = "funder"
    GROUP_TITLE = "group-title"
    INDEXED = "indexed"
    IS_REFERENCED_BY_COUNT = "is-referenced-by-count"
    ISSN_TYPE = "issn-type"
    ISSUE = "issue"
    ISSUED = "issued"
    LICENSE = "license"
    LINK = "link"
    MEMBER = "member"
    ORIGINAL_TITLE = "original-title"
    PAGE = "page"
    POSTED = "posted"
    PREFIX = "prefix"
    PUBLISHED = "published"
    PUBLISHED_ONLINE = "published-online"
    PUBLISHED_PRINT = "published-print"
    PUBLISHER = "publisher"
    PUBLISHER_LOCATION = "publisher-location"
    REFERENCE = "reference"
    REFERENCES_COUNT = "references-count"
    RELATION = "relation"
    SCORE = "score"
    SHORT_CONTAINER_TITLE = "short-container-title"
    SHORT_TITLE = "short-title"
    STANDARDS_BODY = "standards-body"
    SUBJECT = "subject"
    SUBTITLE = "subtitle"
    TITLE = "title"
    TRANSLATOR = "translator"
    TYPE = "type"
    UPDATE_POLICY = "update-policy"
    UPDATE_TO = "update-to"
    UPDATED_BY = "updated-by"
    VOLUME = "volume"


class QueryField(str, Enum):
    """Metadata fields a ``query.<field>`` search can be scoped to."""

    TITLE = "title"
    CONTAINER_TITLE = "container-title"
    AUTHOR = "author"
    EDITOR = "editor"
    CHAIR = "chair"
    TRANSLATOR = "translator"
    CONTRIBUTOR = "contributor"
    BIBLIOGRAPHIC = "bibliographic"
    AFFILIATION = "affiliation"
    DEGREE = "degree"
    DESCRIPTION = "description"
    EVENT_NAME = "event-name"
    EVENT_THEME = "event-theme"
    EVENT_LOCATION = "event-location"
    EVENT_SPONSOR = "event-sponsor"
    EVENT_ACRONYM = "event-acronym"
    FUNDER_NAME = "funder-name"
    PUBLISHER_NAME = "publisher-name"
    PUBLISHER_LOCATION = "publisher-location"
    STANDARDS_BODY_NAME = "standards-body-name"
    STANDARDS_BODY_ACRONYM = "standards-body-acronym"


class FieldQuery(QueryParam, QueryModel):
    """A search restricted to one metadata field, rendered as ``query.<field>=<terms>``."""

    name: QueryField
    value: str

    model_config = ConfigDict(frozen=True)

    def param_key(self) -> str:
        return f"query.{self.name.value}"

    def param_value(self) -> str | None:
        return format_query(self.value)

    @classmethod
    def title(cls, value: str) -> "FieldQuery":
        return cls(name=QueryField.TITLE, value=value)

    @classmethod
    def container_title(cls, value: str) -> "FieldQuery":
        return cls(name=QueryField.CONTAINER_TITLE, value=value)

    @classmethod
    def author(cls, value: str) -> "FieldQuery":
        return cls(name=QueryField.AUTHOR, value=value)

    @classmethod
    def editor(cls, value: str) -> "FieldQuery":
        return cls(name=QueryField.EDITOR, value=value)

    @classmethod
    def chair(cls, value: str) -> "FieldQuery":
        return cls(name=QueryField.CHAIR, value=value)

    @classmethod
    def translator(cls, value: str) -> "FieldQuery":
        return cls(name=QueryField.TRANSLATOR, value=value)

    @classmethod
    def contributor(cls, value: str) -> "FieldQuery":
        return cls(name=QueryField.CONTRIBUTOR, value=value)

    @classmethod
    def bibliographic(cls, value: str) -> "FieldQuery":
        """Citation lookup: includes titles, authors, ISSNs and publication years."""
        return cls(name=QueryField.BIBLIOGRAPHIC, value=value)

    @classmethod
    def affiliation(cls, value: str) -> "FieldQuery":
        return cls(name=QueryField.AFFILIATION, value=value)


class WorkResultControl(QueryParam, QueryModel):
    """Pagination for ``/works``: either a standard `ResultControl` or deep paging with a cursor.

    A cursor without a token renders ``cursor=*`` and starts a new result
    set; subsequent requests carry the ``next-cursor`` token of the previous
    response.
    """

    standard: ResultControl | None = None
    cursor: bool = False
    token: str | None = None
    rows: int | None = Field(default=None, ge=0)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_shape(self) -> "WorkResultControl":
        if self.standard is not None and (self.cursor or self.token or self.rows is not None):
            raise ConfigurationError("a standard result control cannot carry cursor settings")
        if self.standard is None and not self.cursor:
            raise ConfigurationError("either a standard result control or a cursor is required")
        if self.token == "":
            raise ConfigurationError("a cursor token cannot be empty")
        return self

    @classmethod
    def from_standard(cls, result_control: ResultControl) -> "WorkResultControl":
        return cls(standard=result_control)

    @classmethod
    def new_cursor(cls, rows: int | None = None) -> "WorkResultControl":
        return cls(cursor=True, rows=rows)

    @classmethod
    def cursor_from(cls, token: str, rows: int | None = None) -> "WorkResultControl":
        return cls(cursor=True, token=token, rows=rows)

    @property
    def requested_rows(self) -> int | None:
        """Row limit that carries over to the next cursor request."""
        if self.cursor:
            return self.rows
        if self.standard.offset is None and self.standard.sample is None:
            return self.standard.rows
        return None

    def param_key(self) -> str:
        if self.standard is not None:
            return self.standard.param_key()
        return f"cursor={self.token or '*'}"

    def param_value(self) -> str | None:
        if self.standard is not None:
            return self.standard.param_value()
        if self.rows is None:
            return None
        return f"rows={self.rows}"

    def param(self) -> str:
        if self.standard is not None:
            return self.standard.param()
        value = self.param_value()
        if value is None:
            return self.param_key()
        return f"{self.param_key()}&{value}"

    @classmethod
    def parse(cls, raw: str) -> "WorkResultControl":
        if not raw.startswith("cursor="):
            return cls.from_standard(ResultControl.parse(raw))
        values = parse_pairs(raw, allowed={"cursor", "rows"})
        token = values["cursor"]
        if not token:
            raise InvalidResultControlError(f"empty cursor token in '{raw}'")
        return cls(cursor=True, token=None if token == "*" else token, rows=values.get("rows"))


class WorksQuery(CommonQuery):
    """Search parameters for ``/works``.

    Builders return modified copies, so partially configured queries can be
    reused:

        >>> base = WorksQuery.new("economic geography").with_filter(WorksFilter.has_funder())
        >>> base.with_result_control(ResultControl.with_rows(10)).route()
        '/works?query=economic+geography&filter=has-funder:true&rows=10'

    A set ``sample`` overrides every other parameter.
    """

    field_queries: list[FieldQuery] = Field(default_factory=list)
    filters: list[WorksFilter] = Field(default_factory=list)
    elements: list[WorkElement] = Field(default_factory=list)
    result_control: WorkResultControl | None = None
    sample: int | None = Field(default=None, ge=0)

    @classmethod
    def random(cls, sample: int) -> "WorksQuery":
        """Return ``sample`` random works."""
        return cls(sample=sample)

    def with_sample(self, sample: int) -> "WorksQuery":
        if sample < 0:
            raise ConfigurationError(f"sample must be non-negative, got {sample}")
        return self.model_copy(update={"sample": sample})

    def with_field_query(self, field_query: FieldQuery) -> "WorksQuery":
        return self.model_copy(update={"field_queries": [*self.field_queries, field_query]})

    def with_field_queries(self, field_queries: Sequence[FieldQuery]) -> "WorksQuery":
        return self.model_copy(
            update={"field_queries": [*self.field_queries, *field_queries]}
        )

    def with_elements(self, *elements: WorkElement) -> "WorksQuery":
        return self.model_copy(update={"elements": [*self.elements, *elements]})

    def with_result_control(
        self, result_control: ResultControl | WorkResultControl
    ) -> "WorksQuery":
        if isinstance(result_control, ResultControl):
            result_control = WorkResultControl.from_standard(result_control)
        return self.model_copy(update={"result_control": result_control})

    def new_cursor(self, rows: int | None = None) -> "WorksQuery":
        """Start deep paging; the first request renders ``cursor=*``."""
        return self.with_result_control(WorkResultControl.new_cursor(rows))

    def next_cursor(self, token: str) -> "WorksQuery":
        """Continue deep paging with the ``next-cursor`` token of the previous page."""
        rows = None
        if self.result_control is not None:
            rows = self.result_control.requested_rows
        return self.with_result_control(WorkResultControl.cursor_from(token, rows))

    def into_ident(self, identifier: str) -> "WorksIdentQuery":
        return WorksIdentQuery(id=identifier, query=self)

    def into_combined(
        self, combiner: type["WorksCombiner"], identifier: str
    ) -> "WorkListQuery":
        """List works of a parent resource, e.g. ``query.into_combined(Funders, "10.13039/100000001")``."""
        return WorkListQuery.combined(combiner.component, self.into_ident(identifier))

    def into_combined_query(
        self, combiner: type["WorksCombiner"], identifier: str
    ) -> "WorksCombiner":
        return combiner.ident_query(self.into_ident(identifier))

    def query_string(self) -> str:
        if self.sample is not None:
            return f"sample={self.sample}"
        params: list[str] = []
        query = format_queries(self.queries)
        if query:
            params.append(f"query={query}")
        params.extend(field_query.param() for field_query in self.field_queries)
        if self.filters:
            params.append(multi_value_param("filter", self.filters))
        if self.elements:
            params.append("select=" + ",".join(element.value for element in self.elements))
        if self.facets:
            params.append(multi_value_param("facet", self.facets))
        if self.sort is not None:
            params.append(self.sort.param())
        if self.order is not None:
            params.append(self.order.param())
        if self.result_control is not None:
            params.append(self.result_control.param())
        return join_params(params)

    def route(self) -> str:
        return list_route(Component.WORKS, self.query_string())


class WorksIdentQuery(QueryModel):
    """A works query scoped to one parent entity, e.g. a funder id."""

    id: str
    query: WorksQuery = Field(default_factory=WorksQuery)


class Works(CrossrefQuery, QueryModel):
    """Requests against ``/works``."""

    component: ClassVar[Component] = Component.WORKS

    kind: Literal["identifier", "agency", "query"]
    doi: str | None = None
    query: WorksQuery | None = None

    @model_validator(mode="after")
    def _check_payload(self) -> "Works":
        if self.kind in ("identifier", "agency") and self.doi is None:
            raise ConfigurationError(f"Works {self.kind} route requires a DOI")
        if self.kind == "query" and self.query is None:
            raise ConfigurationError("Works query route requires a query")
        return self

    @classmethod
    def identifier(cls, doi: str) -> "Works":
        """``/works/{doi}``: metadata for a single DOI."""
        return cls(kind="identifier", doi=doi)

    @classmethod
    def agency(cls, doi: str) -> "Works":
        """``/works/{doi}/agency``: the registration agency of a DOI."""
        return cls(kind="agency", doi=doi)

    @classmethod
    def search(cls, query: WorksQuery | str) -> "Works":
        if isinstance(query, str):
            query = WorksQuery.new(query)
        return cls(kind="query", query=query)

    def route(self) -> str:
        if self.kind == "identifier":
            return identifier_route(Component.WORKS, self.doi)
        if self.kind == "agency":
            return f"{identifier_route(Component.WORKS, self.doi)}/agency"
        return self.query.route()


_COMBINERS: dict[Component, type["WorksCombiner"]] = {}


class WorksCombiner(CrossrefQuery, QueryModel):
    """Parent resources that list their works at ``/{parent}/{id}/works``.

    Every subclass declaring a ``component`` is registered, which is how
    `WorkListQuery` maps a parent component back to its resource type.
    """

    kind: str
    id: str | None = None
    works: WorksIdentQuery | None = None

    def __init_subclass__(cls, **kwargs: Any):
        super().__init_subclass__(**kwargs)
        component = cls.__dict__.get("component")
        if component is not None:
            _COMBINERS[component] = cls

    @model_validator(mode="after")
    def _check_payload(self) -> "WorksCombiner":
        if self.kind == "identifier" and self.id is None:
            raise ConfigurationError(f"{type(self).__name__} identifier route requires an id")
        if self.kind == "works" and self.works is None:
            raise ConfigurationError(f"{type(self).__name__} works route requires a works query")
        if self.kind == "query" and getattr(self, "query", "") is None:
            raise ConfigurationError(f"{type(self).__name__} query route requires a query")
        return self

    @classmethod
    def identifier(cls, identifier: str):
        return cls(kind="identifier", id=identifier)

    @classmethod
    def ident_query(cls, ident: WorksIdentQuery):
        return cls(kind="works", works=ident)

    @classmethod
    def combined_route(cls, ident: WorksIdentQuery) -> str:
        return f"{identifier_route(cls.component, ident.id)}{ident.query.route()}"

    def route(self) -> str:
        if self.kind == "identifier":
            return identifier_route(self.component, self.id)
        if self.kind == "works":
            return self.combined_route(self.works)
        return self.query_route()

    def query_route(self) -> str:
        raise ConfigurationError(
            f"{type(self).__name__} does not support the '{self.kind}' route"
        )


class WorkListQuery(CrossrefRoute, QueryModel):
    """Any query that answers with a list of works.

    Either a plain ``/works`` query or a works query combined with a parent
    resource, such as all works of a member.
    """

    query: WorksQuery = Field(default_factory=WorksQuery)
    parent: Component | None = None
    id: str | None = None

    @model_validator(mode="after")
    def _check_parent(self) -> "WorkListQuery":
        if (self.parent is None) != (self.id is None):
            raise ConfigurationError("A combined works query needs both a parent component and an id")
        return self

    @classmethod
    def works(cls, query: WorksQuery) -> "WorkListQuery":
        return cls(query=query)

    @classmethod
    def combined(cls, parent: Component, ident: WorksIdentQuery) -> "WorkListQuery":
        return cls(query=ident.query, parent=parent, id=ident.id)

    @classmethod
    def coerce(cls, value: "WorkListQuery | WorksQuery | str") -> "WorkListQuery":
        if isinstance(value, WorkListQuery):
            return value
        if isinstance(value, str):
            value = WorksQuery.new(value)
        return cls.works(value)

    @property
    def ident(self) -> WorksIdentQuery | None:
        if self.id is None:
            return None
        return WorksIdentQuery(id=self.id, query=self.query)

    def primary_component(self) -> Component:
        return self.parent or Component.WORKS

    def resource_component(self) -> CrossrefQuery:
        """The tagged resource query this list query resolves to."""
        if self.parent is None or self.parent is Component.WORKS:
            return Works.search(self.query)
        combiner = _COMBINERS.get(self.parent)
        if combiner is None:
            raise ConfigurationError(f"/{self.parent.value} cannot list works")
        return combiner.ident_query(self.ident)

    def next_cursor(self, token: str) -> "WorkListQuery":
        return self.model_copy(update={"query": self.query.next_cursor(token)})

    def route(self) -> str:
        return self.resource_component().route()

    def to_url(self, base_path: str) -> str:
        return self.resource_component().to_url(base_path)
