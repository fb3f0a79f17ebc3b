"""Query-string building blocks shared by every Crossref route.

Two join characters are in play and must not be mixed up:

* a *fragment* is a ``key`` or ``key:value`` pair living inside a multi-value
  parameter such as ``filter=`` or ``facet=`` (fragments are joined with ``,``);
* a *param* is a top-level ``key=value`` pair of the query string (params are
  joined with ``&``).
"""

from collections.abc import Iterable, Sequence
from datetime import date
from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ..constants import WIRE_DATE_FORMAT
from ..exceptions import ConfigurationError, InvalidResultControlError


class ParamFragment:
    """A key with an optional value used inside a multi-value parameter."""

    def key(self) -> str:
        raise NotImplementedError

    def value(self) -> str | None:
        raise NotImplementedError

    def fragment(self) -> str:
        """Render as ``key`` or ``key:value``."""
        value = self.value()
        if value is None:
            return self.key()
        return f"{self.key()}:{value}"


class QueryParam:
    """A top-level parameter of the query string."""

    def param_key(self) -> str:
        raise NotImplementedError

    def param_value(self) -> str | None:
        raise NotImplementedError

    def param(self) -> str:
        """Render as ``key`` or ``key=value``."""
        value = self.param_value()
        if value is None:
            return self.param_key()
        return f"{self.param_key()}={value}"


def multi_value_param(key: str, fragments: Iterable[ParamFragment]) -> str:
    """Render fragments as one parameter, e.g. ``filter=has-funder:true,member:15``."""
    return f"{key}=" + ",".join(fragment.fragment() for fragment in fragments)


def join_params(params: Iterable[str]) -> str:
    return "&".join(param for param in params if param)


def format_query(term: str) -> str:
    """Collapse whitespace runs in a search term into ``+`` separators."""
    return "+".join(term.split())


def format_queries(terms: Sequence[str]) -> str:
    """Combine several search terms into a single ``+``-separated string."""
    return "+".join(formatted for formatted in map(format_query, terms) if formatted)


class QueryModel(BaseModel):
    """Base for query values; invalid arguments raise `ConfigurationError`."""

    def __init__(self, **data: Any):
        try:
            super().__init__(**data)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in error['loc']) or 'value'}: {error['msg']}"
                for error in e.errors()
            )
            raise ConfigurationError(f"Invalid {type(self).__name__}: {problems}") from e


class Order(QueryParam, str, Enum):
    """Determines how results should be sorted."""

    ASC = "asc"
    DESC = "desc"

    def param_key(self) -> str:
        return "order"

    def param_value(self) -> str | None:
        return self.value


class Sort(QueryParam, str, Enum):
    """Results from a list response can be sorted by applying the sort and order parameters."""

    SCORE = "score"
    RELEVANCE = "relevance"
    # Currently the same as `deposited`
    UPDATED = "updated"
    DEPOSITED = "deposited"
    INDEXED = "indexed"
    CREATED = "created"
    PUBLISHED = "published"
    PUBLISHED_PRINT = "published-print"
    PUBLISHED_ONLINE = "published-online"
    # Earliest known publication date
    ISSUED = "issued"
    IS_REFERENCED_BY_COUNT = "is-referenced-by-count"
    REFERENCE_COUNT = "reference-count"

    def param_key(self) -> str:
        return "sort"

    def param_value(self) -> str | None:
        return self.value


class ResultControl(QueryParam, QueryModel):
    """Tells Crossref how many items shall be returned or where to start.

    Exactly one of the following shapes is allowed:

    * ``rows`` only: limits the returned items per page;
    * ``offset`` only: where Crossref begins to retrieve items. High offsets
      (~10k) result in long response times, use a cursor instead;
    * ``rows`` and ``offset``;
    * ``sample`` only: return random results.
    """

    rows: int | None = Field(default=None, ge=0)
    offset: int | None = Field(default=None, ge=0)
    sample: int | None = Field(default=None, ge=0)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_shape(self) -> "ResultControl":
        if self.sample is not None and (self.rows is not None or self.offset is not None):
            raise ConfigurationError("sample cannot be combined with rows or offset")
        if self.rows is None and self.offset is None and self.sample is None:
            raise ConfigurationError("one of rows, offset or sample is required")
        return self

    @classmethod
    def with_rows(cls, rows: int) -> "ResultControl":
        return cls(rows=rows)

    @classmethod
    def with_offset(cls, offset: int) -> "ResultControl":
        return cls(offset=offset)

    @classmethod
    def rows_offset(cls, rows: int, offset: int) -> "ResultControl":
        return cls(rows=rows, offset=offset)

    @classmethod
    def with_sample(cls, sample: int) -> "ResultControl":
        return cls(sample=sample)

    def param_key(self) -> str:
        if self.sample is not None:
            return "sample"
        if self.rows is not None and self.offset is not None:
            return f"rows={self.rows}&offset={self.offset}"
        if self.rows is not None:
            return "rows"
        return "offset"

    def param_value(self) -> str | None:
        if self.sample is not None:
            return str(self.sample)
        if self.rows is not None and self.offset is not None:
            return None
        return str(self.rows if self.rows is not None else self.offset)

    @classmethod
    def parse(cls, raw: str) -> "ResultControl":
        """Read a rendered result control (``rows=10&offset=5``) back into a value."""
        values = parse_pairs(raw, allowed={"rows", "offset", "sample"})
        try:
            return cls(**values)
        except ConfigurationError as e:
            raise InvalidResultControlError(f"'{raw}': {e}") from e


def parse_pairs(raw: str, *, allowed: set[str]) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for pair in raw.split("&"):
        name, sep, value = pair.partition("=")
        if not sep or name not in allowed or name in values:
            raise InvalidResultControlError(f"unexpected parameter '{pair}' in '{raw}'")
        values[name] = value
    for name, value in values.items():
        if name == "cursor":
            continue
        if not (value.isascii() and value.isdigit()):
            raise InvalidResultControlError(
                f"'{name}' must be a non-negative integer, got '{value}' in '{raw}'"
            )
        values[name] = int(value)
    return values


class Filter(ParamFragment, QueryModel):
    """Base class for a closed family of filters.

    Subclasses narrow ``kind`` to their own enum of wire keys and declare the
    argument each kind takes in ``_argument_types`` (``None`` for flag filters
    that always render ``true``). Every member of the kind enum must appear in
    that mapping.
    """

    kind: Any
    argument: Any = None

    model_config = ConfigDict(frozen=True)

    _argument_types: ClassVar[dict[Any, type | None]] = {}

    def __init__(self, kind: Any, argument: Any = None, **data: Any):
        super().__init__(kind=kind, argument=argument, **data)

    @model_validator(mode="before")
    @classmethod
    def _check_argument(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        kind_type = cls.model_fields["kind"].annotation
        try:
            kind = kind_type(data.get("kind"))
        except ValueError as e:
            raise ConfigurationError(f"Unknown {cls.__name__} kind: {data.get('kind')!r}") from e
        if kind not in cls._argument_types:
            raise ConfigurationError(f"{cls.__name__} kind '{kind.value}' has no argument mapping")

        expected = cls._argument_types[kind]
        argument = data.get("argument")
        if expected is None:
            if argument not in (None, True):
                raise ConfigurationError(f"Filter '{kind.value}' does not take a value")
            return {**data, "kind": kind, "argument": None}
        if argument is None:
            raise ConfigurationError(f"Filter '{kind.value}' requires a value")
        argument = _coerce_argument(kind.value, argument, expected)
        return {**data, "kind": kind, "argument": argument}

    def key(self) -> str:
        return self.kind.value

    def value(self) -> str | None:
        argument = self.argument
        if argument is None:
            return "true"
        if isinstance(argument, date):
            return argument.strftime(WIRE_DATE_FORMAT)
        if isinstance(argument, Enum):
            return argument.value
        return str(argument)


def _coerce_argument(name: str, argument: Any, expected: type) -> Any:
    if isinstance(argument, expected) and not (expected is int and isinstance(argument, bool)):
        return argument
    try:
        if issubclass(expected, Enum):
            return expected(argument)
        if expected is date and isinstance(argument, str):
            return date.fromisoformat(argument)
        if expected is str and isinstance(argument, int) and not isinstance(argument, bool):
            return str(argument)
    except ValueError as e:
        raise ConfigurationError(f"Invalid value {argument!r} for filter '{name}'") from e
    raise ConfigurationError(
        f"Filter '{name}' expects {expected.__name__}, got {type(argument).__name__}"
    )
