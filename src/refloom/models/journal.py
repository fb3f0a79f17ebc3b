"""Pydantic models for Crossref journals."""

from typing import Any

from pydantic import Field, StrictBool, StrictInt, StrictStr, model_validator

from .base import CrossrefModel, Lenient, LenientList, ListEnvelope


class JournalSubject(CrossrefModel):
    """A subject category; older records send a bare name string."""

    name: StrictStr
    asjc: Lenient[StrictInt] = Field(default=None, alias="ASJC")

    @model_validator(mode="before")
    @classmethod
    def accept_plain_name(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"name": data}
        return data


class JournalCounts(CrossrefModel):
    total_dois: Lenient[StrictInt] = None
    current_dois: Lenient[StrictInt] = None
    backfile_dois: Lenient[StrictInt] = None


class IssnType(CrossrefModel):
    value: StrictStr
    type_: StrictStr


class Journal(CrossrefModel):
    """A journal as returned by ``/journals/{issn}``.

    Attributes:
        title: Journal title.
        publisher: Publisher name.
        subjects: Subject categories.
        counts: DOI counts (total, current and backfile).
        flags: Metadata coverage flags, e.g. ``deposits-orcids-current``.
        issn: All ISSNs of the journal.
        issn_type: ISSNs with their kind.
        coverage: Coverage ratios, kept as sent.
        coverage_type: Coverage ratios per period and content type, kept as sent.
        breakdowns: DOI counts per year, kept as sent.
    """

    last_status_check_time: Lenient[StrictInt] = None
    counts: Lenient[JournalCounts] = None
    breakdowns: Lenient[dict[str, Any]] = None
    publisher: StrictStr
    coverage: Lenient[dict[str, Any]] = None
    title: StrictStr
    subjects: LenientList[JournalSubject] = None
    coverage_type: Lenient[dict[str, Any]] = None
    flags: Lenient[dict[str, StrictBool]] = None
    issn: LenientList[str] = Field(default=None, alias="ISSN")
    issn_type: LenientList[IssnType] = None


class JournalList(ListEnvelope[Journal]):
    """A page of journals."""
