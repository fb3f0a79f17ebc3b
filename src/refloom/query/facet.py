"""Facet counts that can be requested alongside list results."""

from enum import Enum

from pydantic import ConfigDict, Field

from .params import ParamFragment, QueryModel


class Facet(str, Enum):
    """Fields Crossref can count distinct values of."""

    AFFILIATION = "affiliation"
    FUNDER_NAME = "funder-name"
    FUNDER_DOI = "funder-doi"
    ORCID = "orcid"
    CONTAINER_TITLE = "container-title"
    ASSERTION = "assertion"
    ARCHIVE = "archive"
    UPDATE_TYPE = "update-type"
    ISSN = "issn"
    PUBLISHED = "published"
    TYPE_NAME = "type-name"
    LICENSE = "license"
    CATEGORY_NAME = "category-name"
    RELATION_TYPE = "relation-type"
    ASSERTION_GROUP = "assertion-group"
    PUBLISHER_NAME = "publisher-name"


class FacetCount(ParamFragment, QueryModel):
    """Request counts for a facet; ``count=None`` asks for all values (``*``)."""

    facet: Facet
    count: int | None = Field(default=None, ge=1)

    model_config = ConfigDict(frozen=True)

    def key(self) -> str:
        return self.facet.value

    def value(self) -> str | None:
        if self.count is None:
            return "*"
        return str(self.count)
