import io
import json

import pytest

from refloom.exceptions import (
    APIError,
    InvalidMessageTypeError,
    MissingFieldError,
)
from refloom.models import Journal, Work, WorkAgency, WorkList
from refloom.unwrapper import CrossrefUnwrapper, decode_message, decode_stream


@pytest.fixture
def unwrapper():
    return CrossrefUnwrapper()


class TestCrossrefUnwrapper:
    def test_unwrap_message(self, unwrapper, envelope, work_json):
        assert unwrapper.unwrap_message(envelope("work", work_json)) == work_json

    def test_unwrap_results(self, unwrapper, envelope, work_list_json):
        items = unwrapper.unwrap_results(envelope("work-list", work_list_json))
        assert items[0]["DOI"] == "10.1037/0003-066x.59.1.29"

    def test_unwrap_results_without_items(self, unwrapper, envelope):
        assert unwrapper.unwrap_results(envelope("work-list", {"total-results": 0})) == []

    def test_unwrap_results_with_non_list_items(self, unwrapper, envelope):
        with pytest.raises(InvalidMessageTypeError):
            unwrapper.unwrap_results(envelope("work-list", {"items": {}}))

    def test_unwrap_single_item(self, unwrapper, envelope, journal_json):
        assert unwrapper.unwrap_single_item(envelope("journal", journal_json))["title"] == (
            "Economic Geography"
        )

    def test_failed_status(self, unwrapper):
        body = {"status": "failed", "message-type": "validation-failure", "message": []}
        with pytest.raises(APIError):
            unwrapper.unwrap_message(body)

    def test_missing_message(self, unwrapper):
        with pytest.raises(MissingFieldError) as exc_info:
            unwrapper.unwrap_message({"status": "ok"})
        assert exc_info.value.name == "message"

    @pytest.mark.parametrize("body", [[], "ok", None, {"status": "ok", "message": "Resource not found."}])
    def test_not_an_object(self, unwrapper, body):
        with pytest.raises(InvalidMessageTypeError):
            unwrapper.unwrap_message(body)

    def test_next_page_token(self, unwrapper, envelope, work_list_json):
        assert unwrapper.get_next_page_token(envelope("work-list", work_list_json)) == (
            "DnF1ZXJ5VGhlbkZldGNo"
        )

    @pytest.mark.parametrize("cursor", [None, "", "   ", 42])
    def test_no_next_page_token(self, unwrapper, envelope, work_list_json, cursor):
        work_list_json["next-cursor"] = cursor
        assert unwrapper.get_next_page_token(envelope("work-list", work_list_json)) is None

    def test_total_results(self, unwrapper, envelope, work_list_json):
        assert unwrapper.get_total_results(envelope("work-list", work_list_json)) == 1
        work_list_json["total-results"] = True
        assert unwrapper.get_total_results(envelope("work-list", work_list_json)) is None
        assert unwrapper.get_total_results([]) is None


class TestDecodeMessage:
    def test_model_from_message_type(self, envelope, work_json, work_list_json, journal_json):
        assert isinstance(decode_message(envelope("work", work_json)), Work)
        assert isinstance(decode_message(envelope("work-list", work_list_json)), WorkList)
        assert isinstance(decode_message(envelope("journal", journal_json)), Journal)

    def test_explicit_model(self, envelope):
        body = envelope("whatever", {"DOI": "10.5555/12345678", "agency": {"id": "crossref"}})
        agency = decode_message(body, WorkAgency)
        assert agency.agency.id == "crossref"
        assert agency.agency.label is None

    def test_unsupported_message_type(self, envelope):
        with pytest.raises(InvalidMessageTypeError):
            decode_message(envelope("member", {"id": 98}))

    def test_decode_error_propagates(self, envelope, work_json):
        del work_json["title"]
        with pytest.raises(MissingFieldError) as exc_info:
            decode_message(envelope("work", work_json))
        assert exc_info.value.name == "title"


class TestDecodeStream:
    def test_documents_split_across_chunks(self, work_json):
        document = json.dumps(work_json)
        text = f"{document}\n\n{document}\n"
        chunks = [text[:10], text[10:500], text[500:]]
        works = list(decode_stream(chunks, Work.from_json))
        assert [work.doi for work in works] == ["10.1037/0003-066x.59.1.29"] * 2

    def test_bytes_split_inside_a_character(self):
        data = json.dumps({"name": "Universität"}, ensure_ascii=False).encode("utf-8")
        split = data.index("ä".encode("utf-8")) + 1
        values = list(decode_stream([data[:split], data[split:]], lambda value: value))
        assert values == [{"name": "Universität"}]

    def test_last_document_without_newline(self):
        values = list(decode_stream(io.StringIO('{"a": 1}\n{"a": 2}'), lambda value: value["a"]))
        assert values == [1, 2]

    def test_malformed_document(self):
        stream = decode_stream(['{"a": 1}\n{"a": \n'], lambda value: value)
        assert next(stream) == {"a": 1}
        with pytest.raises(InvalidMessageTypeError):
            next(stream)

    def test_decoder_errors_propagate(self):
        with pytest.raises(InvalidMessageTypeError):
            list(decode_stream(["[1, 2]\n"], Work.from_json))

    def test_empty_input(self):
        assert list(decode_stream([], Work.from_json)) == []
