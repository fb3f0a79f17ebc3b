# tests/conftest.py
import copy

import pytest
from dotenv import load_dotenv

from refloom.config import CrossrefSettings

# Load environment variables from .env file if it exists
# Useful for setting a polite-pool contact locally
load_dotenv()

WORK_JSON = {
    "indexed": {
        "date-parts": [[2024, 1, 30]],
        "date-time": "2024-01-30T15:19:32Z",
        "timestamp": 1706627972180,
    },
    "reference-count": 3,
    "publisher": "American Psychological Association (APA)",
    "issue": "1",
    "license": [
        {
            "start": {"date-parts": [[2004, 1, 1]]},
            "content-version": "vor",
            "delay-in-days": 0,
            "URL": "https://www.apa.org/pubs/journals/resources/open-access",
        }
    ],
    "funder": [
        {
            "DOI": "10.13039/100000001",
            "name": "National Science Foundation",
            "doi-asserted-by": "publisher",
            "award": ["BCS-0112275"],
        }
    ],
    "content-domain": {"domain": [], "crossmark-restriction": False},
    "short-container-title": ["American Psychologist"],
    "DOI": "10.1037/0003-066x.59.1.29",
    "type": "journal-article",
    "created": {
        "date-parts": [[2004, 1, 21]],
        "date-time": "2004-01-21T14:31:19Z",
        "timestamp": 1074695479000,
    },
    "page": "29-40",
    "source": "Crossref",
    "is-referenced-by-count": 84,
    "title": ["How the Mind Hurts and Heals the Body."],
    "prefix": "10.1037",
    "volume": "59",
    "author": [
        {
            "given": "Oakley",
            "family": "Ray",
            "sequence": "first",
            "affiliation": [{"name": "Vanderbilt University"}],
        }
    ],
    "member": "15",
    "published-print": {"date-parts": [[2004]]},
    "container-title": ["American Psychologist"],
    "link": [
        {
            "URL": "http://psycnet.apa.org/journals/amp/59/1/29.pdf",
            "content-type": "unspecified",
            "content-version": "vor",
            "intended-application": "similarity-checking",
        }
    ],
    "deposited": {
        "date-parts": [[2018, 4, 8]],
        "date-time": "2018-04-08T15:40:02Z",
        "timestamp": 1523202002000,
    },
    "score": 1.0,
    "issued": {"date-parts": [[2004]]},
    "references-count": 3,
    "journal-issue": {"issue": "1", "published-print": {"date-parts": [[2004]]}},
    "URL": "http://dx.doi.org/10.1037/0003-066x.59.1.29",
    "relation": {
        "is-preprint-of": [
            {"id-type": "doi", "id": "10.1037/a0000001", "asserted-by": "subject"}
        ]
    },
    "ISSN": ["1935-990X", "0003-066X"],
    "issn-type": [
        {"value": "0003-066X", "type": "print"},
        {"value": "1935-990X", "type": "electronic"},
    ],
    "subject": ["General Psychology"],
}

JOURNAL_JSON = {
    "last-status-check-time": 1706245620429,
    "counts": {"current-dois": 120, "backfile-dois": 3105, "total-dois": 3225},
    "breakdowns": {"dois-by-issued-year": [[2019, 48], [2020, 44]]},
    "publisher": "Informa UK Limited",
    "coverage": {"affiliations-current": 0.0, "orcids-backfile": 0.0},
    "title": "Economic Geography",
    "subjects": [{"ASJC": 3305, "name": "Geography, Planning and Development"}],
    "coverage-type": {"all": {"orcids": 0.0}},
    "flags": {"deposits-orcids-current": True, "deposits-articles": True},
    "ISSN": ["0013-0095", "1944-8287"],
    "issn-type": [
        {"value": "0013-0095", "type": "print"},
        {"value": "1944-8287", "type": "electronic"},
    ],
}


def _envelope(message_type: str, message) -> dict:
    return {
        "status": "ok",
        "message-type": message_type,
        "message-version": "1.0.0",
        "message": message,
    }


@pytest.fixture
def envelope():
    """Wrap a message in a Crossref response envelope."""
    return _envelope


@pytest.fixture
def work_json() -> dict:
    return copy.deepcopy(WORK_JSON)


@pytest.fixture
def journal_json() -> dict:
    return copy.deepcopy(JOURNAL_JSON)


@pytest.fixture
def work_list_json(work_json) -> dict:
    return {
        "facets": {},
        "total-results": 1,
        "items": [work_json],
        "items-per-page": 20,
        "query": {"start-index": 0, "search-terms": "mind body"},
        "next-cursor": "DnF1ZXJ5VGhlbkZldGNo",
    }


@pytest.fixture
def settings() -> CrossrefSettings:
    return CrossrefSettings(
        base_url="https://api.crossref.test",
        request_timeout=5,
        mailto=None,
        _env_file=None,
    )
