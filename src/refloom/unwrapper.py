# refloom/unwrapper.py
"""Crossref response envelope handling.

Every Crossref response wraps its payload in the same envelope:

```json
{
    "status": "ok",
    "message-type": "work-list",
    "message-version": "1.0.0",
    "message": {
        "total-results": 1000,
        "next-cursor": "DnF1ZXJ5VGhlbkZldGNo...",
        "items": [{"DOI": "10.1037/0003-066x.59.1.29", "title": ["..."]}]
    }
}
```

`CrossrefUnwrapper` pulls the payload out of that envelope and `decode_message`
turns it into the model matching its ``message-type``. `decode_stream` is a
sink for newline-delimited JSON documents, such as a file of saved works.
"""

import codecs
import json
from collections.abc import Callable, Iterable, Iterator
from typing import Any, Protocol, TypeVar

from .exceptions import APIError, InvalidMessageTypeError, MissingFieldError
from .log_config import logger
from .models import Journal, JournalList, Work, WorkAgency, WorkList, decode
from .models.base import CrossrefModel

T = TypeVar("T")

MESSAGE_MODELS: dict[str, type[CrossrefModel]] = {
    "work": Work,
    "work-list": WorkList,
    "work-agency": WorkAgency,
    "journal": Journal,
    "journal-list": JournalList,
}


class ResponseUnwrapper(Protocol):
    """Protocol for unwrapping API-specific response structures."""

    def unwrap_results(self, response_json: dict[str, Any]) -> list[dict[str, Any]]:
        """Extract the list of result items from an API response."""
        ...

    def unwrap_single_item(self, response_json: dict[str, Any]) -> dict[str, Any]:
        """Extract a single item from an API response."""
        ...

    def get_next_page_token(self, response_json: dict[str, Any]) -> str | None:
        """Extract the pagination token for the next page, if any."""
        ...

    def get_total_results(self, response_json: dict[str, Any]) -> int | None:
        """Extract the total count of results, if available."""
        ...


class CrossrefUnwrapper(ResponseUnwrapper):
    """Crossref implementation of the ResponseUnwrapper protocol."""

    def unwrap_message(self, response_json: Any) -> dict[str, Any]:
        """Return the ``message`` object of a Crossref envelope.

        Raises:
            InvalidMessageTypeError: If the envelope or its message is not a JSON object.
            MissingFieldError: If the envelope has no ``message``.
            APIError: If the envelope reports a failed request.
        """
        if not isinstance(response_json, dict):
            raise InvalidMessageTypeError(
                f"{type(response_json).__name__} instead of a response envelope"
            )
        status = response_json.get("status")
        if status is not None and status != "ok":
            raise APIError(f"Crossref reported status '{status}': {response_json.get('message')!r}")
        if "message" not in response_json:
            raise MissingFieldError("message")
        message = response_json["message"]
        if not isinstance(message, dict):
            raise InvalidMessageTypeError(f"{type(message).__name__} as message")
        return message

    def unwrap_results(self, response_json: dict[str, Any]) -> list[dict[str, Any]]:
        """Extract ``message.items``; an absent list means an empty page."""
        items = self.unwrap_message(response_json).get("items")
        if items is None:
            return []
        if not isinstance(items, list):
            raise InvalidMessageTypeError(f"{type(items).__name__} as message.items")
        return items

    def unwrap_single_item(self, response_json: dict[str, Any]) -> dict[str, Any]:
        return self.unwrap_message(response_json)

    def get_next_page_token(self, response_json: dict[str, Any]) -> str | None:
        """Extract ``message.next-cursor``.

        Returns None when the response carries no cursor; missing pagination
        info should not break the request flow.
        """
        if not isinstance(response_json, dict):
            return None
        message = response_json.get("message")
        if not isinstance(message, dict):
            return None
        next_cursor = message.get("next-cursor")
        if isinstance(next_cursor, str) and next_cursor.strip():
            return next_cursor.strip()
        return None

    def get_total_results(self, response_json: dict[str, Any]) -> int | None:
        if not isinstance(response_json, dict):
            return None
        message = response_json.get("message")
        if not isinstance(message, dict):
            return None
        total = message.get("total-results")
        if isinstance(total, int) and not isinstance(total, bool):
            return total
        return None

    def message_type(self, response_json: dict[str, Any]) -> str | None:
        if not isinstance(response_json, dict):
            return None
        return response_json.get("message-type")


def decode_message(
    response_json: Any,
    model: type[CrossrefModel] | None = None,
    unwrapper: CrossrefUnwrapper | None = None,
) -> CrossrefModel:
    """Decode a full Crossref response into a model.

    Args:
        response_json: The parsed response body, including the envelope.
        model: Model to decode into. Defaults to the model registered for the
            envelope's ``message-type``.
        unwrapper: Envelope handler, a `CrossrefUnwrapper` by default.

    Raises:
        DecodeError: If the envelope or its message cannot be decoded.
    """
    unwrapper = unwrapper or CrossrefUnwrapper()
    message = unwrapper.unwrap_message(response_json)
    if model is None:
        message_type = unwrapper.message_type(response_json)
        if message_type not in MESSAGE_MODELS:
            raise InvalidMessageTypeError(f"unsupported message-type {message_type!r}")
        model = MESSAGE_MODELS[message_type]
    return decode(model, message)


def decode_stream(
    chunks: Iterable[str | bytes], decoder: Callable[[Any], T]
) -> Iterator[T]:
    """Decode newline-delimited JSON documents as they arrive.

    Chunks may split documents at arbitrary points; blank lines are skipped.

    Args:
        chunks: Text or bytes, e.g. an open file or ``response.iter_text()``.
        decoder: Applied to every parsed document, e.g. ``Work.from_json``.

    Yields:
        The decoded value of each document, in input order.
    """
    utf8 = codecs.getincrementaldecoder("utf-8")()
    buffer = ""
    line_number = 0
    for chunk in chunks:
        if isinstance(chunk, bytes):
            chunk = utf8.decode(chunk)
        buffer += chunk
        *lines, buffer = buffer.split("\n")
        for line in lines:
            line_number += 1
            if line.strip():
                yield decoder(_parse_line(line, line_number))
    if buffer.strip():
        yield decoder(_parse_line(buffer, line_number + 1))


def _parse_line(line: str, line_number: int) -> Any:
    try:
        return json.loads(line)
    except json.JSONDecodeError as e:
        logger.warning(f"Malformed JSON document on line {line_number}: {e}")
        raise InvalidMessageTypeError(f"malformed JSON on line {line_number}") from e
