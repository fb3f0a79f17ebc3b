"""Constants used throughout the refloom library.

This module defines the Crossref base URL, default client settings and the
closed vocabularies shared by query parameters and decoded records.
"""

from enum import Enum

# Base URL
CROSSREF_API_BASE_URL = "https://api.crossref.org"

# Default settings
DEFAULT_TIMEOUT: int = 30
ITERATE_PAGE_SIZE: int = 100
MAX_ROWS: int = 1000

REFLOOM_VERSION: str = "0.1.0"
DEFAULT_USER_AGENT: str = f"refloom/{REFLOOM_VERSION}"
CLIENT_HEADERS: dict[str, str] = {
    "accept": "application/json",
    "User-Agent": DEFAULT_USER_AGENT,
}

# Date format used for every date-valued filter
WIRE_DATE_FORMAT = "%Y-%m-%d"


class Visibility(str, Enum):
    """Visibility of reference lists deposited with Crossref."""

    OPEN = "open"
    LIMITED = "limited"
    CLOSED = "closed"


class WorkType(str, Enum):
    """Work type ids as listed by the ``/types`` route."""

    BOOK_SECTION = "book-section"
    MONOGRAPH = "monograph"
    REPORT = "report"
    PEER_REVIEW = "peer-review"
    BOOK_TRACK = "book-track"
    JOURNAL_ARTICLE = "journal-article"
    BOOK_PART = "book-part"
    OTHER = "other"
    BOOK = "book"
    JOURNAL_VOLUME = "journal-volume"
    BOOK_SET = "book-set"
    REFERENCE_ENTRY = "reference-entry"
    PROCEEDINGS_ARTICLE = "proceedings-article"
    JOURNAL = "journal"
    COMPONENT = "component"
    BOOK_CHAPTER = "book-chapter"
    PROCEEDINGS_SERIES = "proceedings-series"
    REPORT_SERIES = "report-series"
    PROCEEDINGS = "proceedings"
    STANDARD = "standard"
    REFERENCE_BOOK = "reference-book"
    POSTED_CONTENT = "posted-content"
    JOURNAL_ISSUE = "journal-issue"
    DISSERTATION = "dissertation"
    GRANT = "grant"
    DATASET = "dataset"
    BOOK_SERIES = "book-series"
    EDITED_BOOK = "edited-book"
    STANDARD_SERIES = "standard-series"

    @property
    def label(self) -> str:
        """Human readable label, e.g. ``Journal Article``."""
        return self.value.replace("-", " ").title()
