"""refloom: typed queries and resilient decoding for the Crossref REST API."""

__version__ = "0.1.0"

from .client import CrossrefClient
from .config import CrossrefSettings, get_settings
from .constants import Visibility, WorkType
from .exceptions import (
    APIError,
    ConfigurationError,
    DecodeError,
    InvalidMessageTypeError,
    InvalidResultControlError,
    InvalidTypeNameError,
    MissingFieldError,
    NetworkError,
    NotFoundError,
    RefloomError,
    TimeoutError,
)

# Re-export key models from the models subpackage
from .models import (
    Contributor,
    Date,
    DateField,
    DateParts,
    Journal,
    JournalList,
    PartialDate,
    Work,
    WorkList,
)
from .query import (
    Component,
    Facet,
    FacetCount,
    FieldQuery,
    Funders,
    Journals,
    Members,
    Order,
    Prefixes,
    ResourceComponent,
    ResultControl,
    Sort,
    Types,
    WorkElement,
    WorkListQuery,
    WorkResultControl,
    Works,
    WorksFilter,
    WorksFilterKind,
    WorksQuery,
)
from .unwrapper import CrossrefUnwrapper, decode_message, decode_stream

__all__ = [
    # Client
    "CrossrefClient",
    "CrossrefSettings",
    "get_settings",
    # Exceptions
    "RefloomError",
    "APIError",
    "ConfigurationError",
    "DecodeError",
    "InvalidMessageTypeError",
    "InvalidResultControlError",
    "InvalidTypeNameError",
    "MissingFieldError",
    "NetworkError",
    "NotFoundError",
    "TimeoutError",
    # Queries
    "Component",
    "Facet",
    "FacetCount",
    "FieldQuery",
    "Funders",
    "Journals",
    "Members",
    "Order",
    "Prefixes",
    "ResourceComponent",
    "ResultControl",
    "Sort",
    "Types",
    "Visibility",
    "WorkElement",
    "WorkListQuery",
    "WorkResultControl",
    "WorkType",
    "Works",
    "WorksFilter",
    "WorksFilterKind",
    "WorksQuery",
    # Decoding
    "Contributor",
    "CrossrefUnwrapper",
    "Date",
    "DateField",
    "DateParts",
    "Journal",
    "JournalList",
    "PartialDate",
    "Work",
    "WorkList",
    "decode_message",
    "decode_stream",
]
