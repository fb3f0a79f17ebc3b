"""Base Pydantic models and decoding helpers for Crossref responses.

Crossref messages are loosely typed: optional keys come and go, and fields
occasionally carry a value of an unexpected JSON type. The helpers here let
each model state per field how strict it is:

* plain annotations (``StrictStr``, nested models, ``list[StrictStr]``) are
  required and fail the whole record when missing or mistyped;
* `Lenient` fields fall back to ``None`` when absent or mistyped;
* `LenientList` fields decode element-wise and drop malformed elements.

`decode` is the single place where Pydantic's ``ValidationError`` is turned
into the library's decode errors.
"""

from typing import Annotated, Any, Generic, Optional, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    WrapValidator,
)

from ..exceptions import (
    DecodeError,
    InvalidMessageTypeError,
    InvalidTypeNameError,
    MissingFieldError,
)
from ..log_config import logger

T = TypeVar("T")
ModelType = TypeVar("ModelType", bound="CrossrefModel")
ItemType = TypeVar("ItemType", bound="CrossrefModel")


def to_wire_name(name: str) -> str:
    """Map a Python field name to its Crossref key (``is_referenced_by_count`` -> ``is-referenced-by-count``)."""
    return name.rstrip("_").replace("_", "-")


def _absent_on_error(
    value: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo
) -> Any:
    try:
        return handler(value)
    except ValidationError:
        logger.debug(f"Ignoring malformed optional field '{info.field_name}': {value!r}")
        return None


def _drop_malformed_items(
    value: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo
) -> Any:
    if value is None:
        return None
    if not isinstance(value, list):
        logger.debug(f"Ignoring non-list value for '{info.field_name}': {value!r}")
        return None
    try:
        return handler(value)
    except ValidationError as exc:
        malformed = {
            error["loc"][0]
            for error in exc.errors()
            if error["loc"] and isinstance(error["loc"][0], int)
        }
        if not malformed:
            return None
        logger.warning(
            f"Dropping {len(malformed)} malformed element(s) of '{info.field_name}' "
            f"at index {sorted(malformed)}"
        )
        return handler([item for index, item in enumerate(value) if index not in malformed])


Lenient = Annotated[Optional[T], WrapValidator(_absent_on_error)]
"""Optional field: absent, ``null`` or a value of the wrong type all decode to ``None``."""

LenientList = Annotated[Optional[list[T]], WrapValidator(_drop_malformed_items)]
"""Optional list: a non-list decodes to ``None``, malformed elements are dropped."""


class CrossrefModel(BaseModel):
    """Base model for every Crossref record.

    Field names are snake_case versions of the kebab-case wire keys; the
    handful of upper-case keys (``DOI``, ``URL``, ``ISSN``, ...) declare an
    explicit alias. Unknown keys are kept so schema additions survive a
    round trip.
    """

    model_config = ConfigDict(
        alias_generator=to_wire_name,
        populate_by_name=True,
        extra="allow",
    )

    @classmethod
    def from_json(cls: type[ModelType], value: Any) -> ModelType:
        """Decode an already parsed JSON value into this model."""
        return decode(cls, value)


def _describe(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "a boolean"
    if isinstance(value, (int, float)):
        return "a number"
    if isinstance(value, str):
        return "a string"
    if isinstance(value, list):
        return "an array"
    return type(value).__name__


def _to_decode_error(exc: ValidationError) -> DecodeError:
    error = exc.errors()[0]
    name = ".".join(str(part) for part in error["loc"])
    if error["type"] == "missing":
        return MissingFieldError(name)
    return InvalidTypeNameError(name)


def decode(model: type[ModelType], value: Any) -> ModelType:
    """Validate a JSON value against ``model``, raising the library's decode errors.

    Args:
        model: The `CrossrefModel` subclass to decode into.
        value: A parsed JSON value, expected to be an object.

    Returns:
        The validated model instance.

    Raises:
        InvalidMessageTypeError: If ``value`` is not a JSON object.
        MissingFieldError: If a required key is absent.
        InvalidTypeNameError: If a required key holds the wrong JSON type.
    """
    if not isinstance(value, dict):
        raise InvalidMessageTypeError(_describe(value))
    try:
        return model.model_validate(value)
    except ValidationError as exc:
        error = _to_decode_error(exc)
        logger.debug(f"Failed to decode {model.__name__}: {error}")
        raise error from exc


class QueryResponse(CrossrefModel):
    """The query Crossref echoes back in list responses.

    Attributes:
        start_index: Offset of the first returned item.
        search_terms: The free-form search terms, if any.
    """

    start_index: StrictInt
    search_terms: Lenient[str] = None


class FacetItem(CrossrefModel):
    """Counts for one requested facet.

    Attributes:
        value_count: Number of distinct values.
        values: Count of items per facet value.
    """

    value_count: StrictInt
    values: dict[str, StrictInt] = Field(default_factory=dict)


class ListEnvelope(CrossrefModel, Generic[ItemType]):
    """Common shape of Crossref list messages.

    Attributes:
        total_results: Total number of items matching the query.
        items_per_page: Requested page size.
        query: The echoed query.
        facets: Facet name to facet counts, empty unless facets were requested.
        items: The decoded items of this page. One malformed item fails the
            whole envelope.
    """

    total_results: StrictInt
    items_per_page: Lenient[StrictInt] = None
    query: Lenient[QueryResponse] = None
    facets: dict[str, FacetItem] = Field(default_factory=dict)
    items: list[ItemType]


__all__ = [
    "CrossrefModel",
    "FacetItem",
    "Lenient",
    "LenientList",
    "ListEnvelope",
    "QueryResponse",
    "decode",
    "to_wire_name",
]
