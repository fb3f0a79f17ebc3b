"""Tests for decoding Crossref works."""

import datetime

import pytest

from refloom.constants import WorkType
from refloom.exceptions import (
    InvalidMessageTypeError,
    InvalidTypeNameError,
    MissingFieldError,
)
from refloom.models import Relation, SingleDate, Work, WorkList
from refloom.models.base import to_wire_name


def test_wire_names():
    assert to_wire_name("is_referenced_by_count") == "is-referenced-by-count"
    assert to_wire_name("type_") == "type"
    assert to_wire_name("publisher") == "publisher"


class TestWorkDecoding:
    def test_required_fields(self, work_json):
        work = Work.from_json(work_json)
        assert work.doi == "10.1037/0003-066x.59.1.29"
        assert work.publisher == "American Psychological Association (APA)"
        assert work.title == ["How the Mind Hurts and Heals the Body."]
        assert work.member == "15"
        assert work.type_ == "journal-article"
        assert work.created.year == 2004
        assert work.indexed.timestamp == 1706627972180

    def test_optional_fields(self, work_json):
        work = Work.from_json(work_json)
        assert work.is_referenced_by_count == 84
        assert work.references_count == 3
        assert work.issn == ["1935-990X", "0003-066X"]
        assert work.issn_type[0].type_ == "print"
        assert work.container_title == ["American Psychologist"]
        assert work.url == "http://dx.doi.org/10.1037/0003-066x.59.1.29"
        assert work.issued.year == 2004
        assert work.journal_issue.issue == "1"
        assert work.content_domain.crossmark_restriction is False
        assert work.abstract_ is None
        assert work.editor is None

    def test_nested_records(self, work_json):
        work = Work.from_json(work_json)
        assert work.funder[0].doi == "10.13039/100000001"
        assert work.funder[0].award == ["BCS-0112275"]
        assert work.license[0].delay_in_days == 0
        assert work.license[0].start.year == 2004
        assert work.link[0].intended_application == "similarity-checking"
        author = work.author[0]
        assert author.display_name == "Oakley Ray"
        assert author.affiliation[0].name == "Vanderbilt University"
        assert author.sequence == "first"

    def test_work_type(self, work_json):
        assert Work.from_json(work_json).work_type is WorkType.JOURNAL_ARTICLE
        work_json["type"] = "something-new"
        assert Work.from_json(work_json).work_type is None

    def test_unknown_keys_are_kept(self, work_json):
        work_json["new-field"] = {"a": 1}
        work = Work.from_json(work_json)
        assert work.model_extra["new-field"] == {"a": 1}

    @pytest.mark.parametrize("key", ["DOI", "publisher", "member", "type", "created", "indexed"])
    def test_missing_required_field(self, work_json, key):
        del work_json[key]
        with pytest.raises(MissingFieldError) as exc_info:
            Work.from_json(work_json)
        assert exc_info.value.name == key

    def test_missing_nested_field_has_a_dotted_name(self, work_json):
        del work_json["created"]["timestamp"]
        with pytest.raises(MissingFieldError) as exc_info:
            Work.from_json(work_json)
        assert exc_info.value.name == "created.timestamp"

    def test_required_field_of_wrong_type(self, work_json):
        work_json["member"] = 15
        with pytest.raises(InvalidTypeNameError) as exc_info:
            Work.from_json(work_json)
        assert exc_info.value.name == "member"

    def test_required_date_with_string_parts(self, work_json):
        work_json["created"]["date-parts"] = [["2020", "1", "1"]]
        with pytest.raises(InvalidTypeNameError) as exc_info:
            Work.from_json(work_json)
        assert exc_info.value.name.startswith("created.date-parts")

    def test_title_must_be_a_list_of_strings(self, work_json):
        work_json["title"] = "How the Mind Hurts"
        with pytest.raises(InvalidTypeNameError):
            Work.from_json(work_json)

    @pytest.mark.parametrize("value", [None, [], 42, "text"])
    def test_not_an_object(self, value):
        with pytest.raises(InvalidMessageTypeError):
            Work.from_json(value)


class TestLenientFields:
    def test_optional_field_of_wrong_type_becomes_none(self, work_json):
        work_json["is-referenced-by-count"] = "many"
        work_json["volume"] = 59
        work = Work.from_json(work_json)
        assert work.is_referenced_by_count is None
        assert work.volume is None

    def test_optional_record_of_wrong_type_becomes_none(self, work_json):
        work_json["published-print"] = {"date-parts": [[2004, 13]]}
        work_json["content-domain"] = {"domain": []}
        work = Work.from_json(work_json)
        assert work.published_print is None
        assert work.content_domain is None

    def test_malformed_list_elements_are_dropped(self, work_json):
        work_json["author"].append({"given": "Ada", "family": "Lovelace", "affiliation": "x"})
        work_json["license"].append({"URL": "https://example.org"})
        work_json["ISSN"] = ["0003-066X", 1234]
        work = Work.from_json(work_json)
        assert len(work.author) == 2
        assert work.author[1].affiliation is None
        assert len(work.license) == 1
        assert work.issn == ["0003-066X"]

    def test_non_list_becomes_none(self, work_json):
        work_json["subject"] = "General Psychology"
        assert Work.from_json(work_json).subject is None

    def test_numeric_strings_are_not_counts(self, work_json):
        work_json["is-referenced-by-count"] = "84"
        work_json["references-count"] = 3.0
        work = Work.from_json(work_json)
        assert work.is_referenced_by_count is None
        assert work.references_count is None

    @pytest.mark.parametrize("value", ["yes", 1, "true"])
    def test_authenticated_orcid_must_be_a_boolean(self, work_json, value):
        work_json["author"][0]["authenticated-orcid"] = value
        assert Work.from_json(work_json).author[0].authenticated_orcid is None

    def test_boolean_is_not_a_count(self, work_json):
        work_json["is-referenced-by-count"] = True
        assert Work.from_json(work_json).is_referenced_by_count is None

    def test_contributor_fields_are_lenient(self, work_json):
        work_json["author"] = [{"family": 1, "name": "Consortium", "sequence": None}]
        author = Work.from_json(work_json).author[0]
        assert author.family is None
        assert author.display_name == "Consortium"


class TestRelationsAndReview:
    def test_relations_of(self, work_json):
        relations = Work.from_json(work_json).relations_of("is-preprint-of")
        assert relations == [Relation(id_type="doi", id="10.1037/a0000001", asserted_by="subject")]

    def test_single_relation_object(self, work_json):
        work_json["relation"] = {"cites": {"id-type": "doi", "id": "10.1/x", "asserted-by": "object"}}
        relations = Work.from_json(work_json).relations_of("cites")
        assert [relation.id for relation in relations] == ["10.1/x"]

    def test_absent_relation(self, work_json):
        assert Work.from_json(work_json).relations_of("has-review") == []
        del work_json["relation"]
        assert Work.from_json(work_json).relations_of("is-preprint-of") == []

    def test_review_details(self, work_json):
        work_json["review"] = {"type": "referee-report", "stage": "pre-publication"}
        review = Work.from_json(work_json).review_details()
        assert review.type_ == "referee-report"
        assert review.stage == "pre-publication"

    def test_review_without_type(self, work_json):
        work_json["review"] = {"stage": "pre-publication"}
        with pytest.raises(MissingFieldError):
            Work.from_json(work_json).review_details()

    def test_no_review(self, work_json):
        assert Work.from_json(work_json).review_details() is None


class TestCitekey:
    def test_single_author(self, work_json):
        assert Work.from_json(work_json).citekey() == "Ray2004"

    def test_two_authors(self, work_json):
        work_json["author"].append({"family": "Lovelace"})
        assert Work.from_json(work_json).citekey() == "Ray&Lovelace2004"

    def test_many_authors(self, work_json):
        work_json["author"] += [{"family": "Lovelace"}, {"family": "Babbage"}]
        assert Work.from_json(work_json).citekey() == "RayEtAl2004"

    def test_no_author(self, work_json):
        del work_json["author"]
        assert Work.from_json(work_json).citekey() is None


class TestWorkList:
    def test_decode(self, work_list_json):
        page = WorkList.from_json(work_list_json)
        assert page.total_results == 1
        assert page.items_per_page == 20
        assert page.query.start_index == 0
        assert page.query.search_terms == "mind body"
        assert page.next_cursor == "DnF1ZXJ5VGhlbkZldGNo"
        assert page.items[0].doi == "10.1037/0003-066x.59.1.29"

    def test_facets(self, work_list_json):
        work_list_json["facets"] = {
            "type-name": {"value-count": 2, "values": {"Journal Article": 10, "Book": 1}}
        }
        facet = WorkList.from_json(work_list_json).facets["type-name"]
        assert facet.value_count == 2
        assert facet.values["Book"] == 1

    def test_malformed_item_fails_the_page(self, work_list_json):
        del work_list_json["items"][0]["DOI"]
        with pytest.raises(MissingFieldError) as exc_info:
            WorkList.from_json(work_list_json)
        assert exc_info.value.name == "items.0.DOI"

    def test_missing_items(self, work_list_json):
        del work_list_json["items"]
        with pytest.raises(MissingFieldError):
            WorkList.from_json(work_list_json)

    def test_total_results_must_be_an_integer(self, work_list_json):
        work_list_json["total-results"] = "1"
        with pytest.raises(InvalidTypeNameError):
            WorkList.from_json(work_list_json)


def test_minimal_work():
    created = {"date-parts": [[2020, 1, 1]], "timestamp": 0, "date-time": "2020-01-01T00:00:00Z"}
    work = Work.from_json(
        {
            "title": ["T"],
            "DOI": "10.1/x",
            "member": "1",
            "type": "journal-article",
            "created": created,
            "indexed": dict(created),
            "publisher": "P",
        }
    )
    assert work.container_title is None
    assert work.created.as_date_field() == SingleDate(date=datetime.date(2020, 1, 1))
    assert work.citekey() is None
