"""Typed records decoded from Crossref messages."""

from .base import (
    CrossrefModel,
    FacetItem,
    Lenient,
    LenientList,
    ListEnvelope,
    QueryResponse,
    decode,
)
from .dates import (
    Date,
    DateField,
    DateParts,
    DateRange,
    MultiDate,
    PartialDate,
    SingleDate,
)
from .journal import IssnType, Journal, JournalCounts, JournalList, JournalSubject
from .work import (
    Affiliation,
    Agency,
    Assertion,
    AssertionGroup,
    ClinicalTrialNumber,
    ContentDomain,
    Contributor,
    FundingBody,
    Issn,
    Issue,
    License,
    Reference,
    Relation,
    ResourceLink,
    Review,
    Update,
    Work,
    WorkAgency,
    WorkList,
)

__all__ = [
    "Affiliation",
    "Agency",
    "Assertion",
    "AssertionGroup",
    "ClinicalTrialNumber",
    "ContentDomain",
    "Contributor",
    "CrossrefModel",
    "Date",
    "DateField",
    "DateParts",
    "DateRange",
    "FacetItem",
    "FundingBody",
    "Issn",
    "IssnType",
    "Issue",
    "Journal",
    "JournalCounts",
    "JournalList",
    "JournalSubject",
    "Lenient",
    "LenientList",
    "License",
    "ListEnvelope",
    "MultiDate",
    "PartialDate",
    "QueryResponse",
    "Reference",
    "Relation",
    "ResourceLink",
    "Review",
    "SingleDate",
    "Update",
    "Work",
    "WorkAgency",
    "WorkList",
    "decode",
]
