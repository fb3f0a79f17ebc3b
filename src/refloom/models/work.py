# refloom/models/work.py
"""Pydantic models for Crossref works and their nested records.

A work is any registered scholarly object: an article, a book chapter, a
dataset, a peer review, ... Only ``publisher``, ``title``, ``DOI``,
``member``, ``type``, ``created`` and ``indexed`` are required; everything
else is optional and tolerates missing or malformed values.
Reference: https://api.crossref.org/swagger-ui/index.html
"""

from typing import Any

from pydantic import Field, StrictBool, StrictFloat, StrictInt, StrictStr

from ..constants import WorkType
from .base import CrossrefModel, Lenient, LenientList, ListEnvelope, decode
from .dates import Date, PartialDate

# Sub-models for nested structures


class Affiliation(CrossrefModel):
    name: StrictStr


class Contributor(CrossrefModel):
    """An author, editor, chair or translator of a work.

    Attributes:
        family: Family name.
        given: Given names.
        name: Full name for organizational contributors without given/family names.
        orcid: ORCID URL of the contributor.
        authenticated_orcid: Whether the ORCID was authenticated by its owner.
        affiliation: Affiliations of the contributor.
        sequence: ``first`` or ``additional``.
    """

    prefix: Lenient[str] = None
    suffix: Lenient[str] = None
    family: Lenient[str] = None
    given: Lenient[str] = None
    name: Lenient[str] = None
    orcid: Lenient[str] = Field(default=None, alias="ORCID")
    authenticated_orcid: Lenient[StrictBool] = None
    affiliation: LenientList[Affiliation] = None
    sequence: Lenient[str] = None

    @property
    def display_name(self) -> str | None:
        if self.given and self.family:
            return f"{self.given} {self.family}"
        return self.family or self.name or self.given


class FundingBody(CrossrefModel):
    name: StrictStr
    doi: Lenient[str] = Field(default=None, alias="DOI")
    award: LenientList[str] = None
    doi_asserted_by: Lenient[str] = None


class License(CrossrefModel):
    content_version: StrictStr
    delay_in_days: StrictInt
    start: PartialDate
    url: StrictStr = Field(alias="URL")


class ResourceLink(CrossrefModel):
    """A full-text link, e.g. for text mining or similarity checking."""

    intended_application: StrictStr
    content_version: StrictStr
    url: StrictStr = Field(alias="URL")
    content_type: Lenient[str] = None


class Reference(CrossrefModel):
    """One entry of a work's reference list, structured or unstructured."""

    key: StrictStr
    doi: Lenient[str] = Field(default=None, alias="DOI")
    doi_asserted_by: Lenient[str] = None
    issue: Lenient[str] = None
    first_page: Lenient[str] = None
    volume: Lenient[str] = None
    edition: Lenient[str] = None
    component: Lenient[str] = None
    standard_designator: Lenient[str] = None
    standards_body: Lenient[str] = None
    author: Lenient[str] = None
    year: Lenient[str] = None
    unstructured: Lenient[str] = None
    journal_title: Lenient[str] = None
    article_title: Lenient[str] = None
    series_title: Lenient[str] = None
    volume_title: Lenient[str] = None
    issn: Lenient[str] = Field(default=None, alias="ISSN")
    issn_type: Lenient[str] = None
    isbn: Lenient[str] = Field(default=None, alias="ISBN")
    isbn_type: Lenient[str] = None


class Issn(CrossrefModel):
    """An ISSN with its kind (``print`` or ``electronic``)."""

    value: StrictStr
    type_: StrictStr


class Update(CrossrefModel):
    """A notice that this work updates another one (correction, retraction, ...)."""

    updated: PartialDate
    doi: StrictStr = Field(alias="DOI")
    type_: StrictStr
    label: Lenient[str] = None


class AssertionGroup(CrossrefModel):
    name: StrictStr
    label: Lenient[str] = None


class Assertion(CrossrefModel):
    """Publisher supplied custom metadata, e.g. peer review or received dates."""

    name: StrictStr
    value: Lenient[str] = None
    url: Lenient[str] = Field(default=None, alias="URL")
    explanation: Lenient[dict[str, Any]] = None
    label: Lenient[str] = None
    order: Lenient[StrictInt] = None
    group: Lenient[AssertionGroup] = None


class Issue(CrossrefModel):
    published_print: Lenient[PartialDate] = None
    published_online: Lenient[PartialDate] = None
    issue: Lenient[str] = None


class ClinicalTrialNumber(CrossrefModel):
    clinical_trial_number: StrictStr
    registry: StrictStr
    type_: Lenient[str] = None


class ContentDomain(CrossrefModel):
    """Domains where Crossmark content is hosted."""

    domain: list[StrictStr]
    crossmark_restriction: StrictBool


class Relation(CrossrefModel):
    id_type: Lenient[str] = None
    id: Lenient[str] = None
    asserted_by: Lenient[str] = None


class Review(CrossrefModel):
    """Peer review metadata attached to works of type ``peer-review``."""

    running_number: Lenient[str] = None
    revision_round: Lenient[str] = None
    stage: Lenient[str] = None
    recommendation: Lenient[str] = None
    type_: StrictStr
    competing_interest_statement: Lenient[str] = None
    language: Lenient[str] = None


class Agency(CrossrefModel):
    id: StrictStr
    label: Lenient[str] = None


class WorkAgency(CrossrefModel):
    """The registration agency of a DOI, as returned by ``/works/{doi}/agency``."""

    doi: StrictStr = Field(alias="DOI")
    agency: Agency


class Work(CrossrefModel):
    """A Crossref work.

    Attributes:
        publisher: Name of the registrant.
        title: Work titles, including translated titles.
        doi: DOI of the work.
        member: Member identifier of the form ``http://id.crossref.org/member/MEMBER_ID``.
        type_: Work type id, e.g. ``journal-article``.
        created: Date on which the DOI was first registered.
        indexed: Date on which the work metadata was most recently indexed.
        issued: Earliest of ``published-print`` and ``published-online``.
        relation: Relation type to related objects. Values are single
            relation objects or lists of them, kept as sent.
        review: Peer review metadata, kept as sent. See `review_details`.
    """

    publisher: StrictStr
    title: list[StrictStr]
    original_title: LenientList[str] = None
    language: Lenient[str] = None
    short_title: LenientList[str] = None
    abstract_: Lenient[str] = None
    references_count: Lenient[StrictInt] = None
    is_referenced_by_count: Lenient[StrictInt] = None
    source: Lenient[str] = None
    journal_issue: Lenient[Issue] = None
    prefix: Lenient[str] = None
    doi: StrictStr = Field(alias="DOI")
    url: Lenient[str] = Field(default=None, alias="URL")
    member: StrictStr
    type_: StrictStr
    created: Date
    date: Lenient[Date] = None
    deposited: Lenient[Date] = None
    score: Lenient[StrictFloat] = None
    indexed: Date
    issued: Lenient[PartialDate] = None
    posted: Lenient[PartialDate] = None
    accepted: Lenient[PartialDate] = None
    subtitle: LenientList[str] = None
    container_title: LenientList[str] = None
    short_container_title: LenientList[str] = None
    group_title: Lenient[str] = None
    issue: Lenient[str] = None
    volume: Lenient[str] = None
    page: Lenient[str] = None
    article_number: Lenient[str] = None
    published_print: Lenient[PartialDate] = None
    published_online: Lenient[PartialDate] = None
    subject: LenientList[str] = None
    issn: LenientList[str] = Field(default=None, alias="ISSN")
    issn_type: LenientList[Issn] = None
    isbn: LenientList[str] = Field(default=None, alias="ISBN")
    archive: LenientList[str] = None
    license: LenientList[License] = None
    funder: LenientList[FundingBody] = None
    assertion: LenientList[Assertion] = None
    author: LenientList[Contributor] = None
    editor: LenientList[Contributor] = None
    chair: LenientList[Contributor] = None
    translator: LenientList[Contributor] = None
    update_to: LenientList[Update] = None
    update_policy: Lenient[str] = None
    link: LenientList[ResourceLink] = None
    clinical_trial_number: LenientList[ClinicalTrialNumber] = None
    alternative_id: LenientList[str] = None
    reference: LenientList[Reference] = None
    content_domain: Lenient[ContentDomain] = None
    relation: Lenient[dict[str, Any]] = None
    review: Lenient[dict[str, Any]] = None

    @property
    def work_type(self) -> WorkType | None:
        try:
            return WorkType(self.type_)
        except ValueError:
            return None

    def relations_of(self, relation_type: str) -> list[Relation]:
        """Typed relations of one kind, e.g. ``is-preprint-of``; malformed entries are skipped."""
        if not self.relation:
            return []
        entries = self.relation.get(relation_type)
        if entries is None:
            return []
        if not isinstance(entries, list):
            entries = [entries]
        return [Relation.model_validate(entry) for entry in entries if isinstance(entry, dict)]

    def review_details(self) -> Review | None:
        """Decode the ``review`` map, raising a decode error if it lacks a ``type``."""
        if not self.review:
            return None
        return decode(Review, self.review)

    def citekey(self) -> str | None:
        """Citation key from the authors' family names and the creation year.

        ``Smith2019`` for one author, ``Smith&Jones2019`` for two and
        ``SmithEtAl2019`` for more. ``None`` if no author has a family name.
        """
        names = [author.family for author in self.author or [] if author.family]
        if not names:
            return None
        year = self.created.year or ""
        if len(names) == 1:
            return f"{names[0]}{year}"
        if len(names) == 2:
            return f"{names[0]}&{names[1]}{year}"
        return f"{names[0]}EtAl{year}"


class WorkList(ListEnvelope[Work]):
    """A page of works, optionally with a cursor for the next page.

    Attributes:
        next_cursor: Token for the next request when deep paging with a cursor.
    """

    next_cursor: Lenient[str] = None
