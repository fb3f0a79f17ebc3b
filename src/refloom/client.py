"""Asynchronous client for the Crossref REST API.

The client only sends the GET requests produced by the query compiler and
hands response bodies to the decoder. It has no retry, caching, rate limiting
or authentication logic; wrap or replace the ``httpx.AsyncClient`` for that.
"""

import ssl
from collections.abc import AsyncIterator
from http import HTTPStatus
from typing import Any, Self
from urllib.parse import quote

import certifi
import httpx

from .config import CrossrefSettings, get_settings
from .constants import CLIENT_HEADERS, ITERATE_PAGE_SIZE, MAX_ROWS
from .exceptions import (
    APIError,
    ConfigurationError,
    NetworkError,
    NotFoundError,
    RefloomError,
    TimeoutError,
)
from .log_config import logger
from .models import Journal, JournalList, Work, WorkAgency, WorkList
from .query import (
    CrossrefRoute,
    Journals,
    ResultControl,
    WorkListQuery,
    Works,
    WorksCombiner,
    WorksQuery,
)
from .unwrapper import CrossrefUnwrapper, decode_message


class CrossrefClient:
    """Asynchronous client for the Crossref REST API.

    Example:
        ```python
        async with CrossrefClient() as client:
            work = await client.work("10.1037/0003-066x.59.1.29")
            page = await client.works(WorksQuery.new("economic geography"))
        ```
    """

    def __init__(
        self,
        settings: CrossrefSettings | None = None,
        *,
        base_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize the CrossrefClient.

        Args:
            settings: Client settings. Loaded from the environment if omitted.
            base_url: Overrides ``settings.base_url``.
            http_client: Optional pre-configured httpx.AsyncClient instance.
        """
        self._settings = settings or get_settings()
        self._base_url = (base_url or self._settings.base_url).rstrip("/")
        self._unwrapper = CrossrefUnwrapper()

        self._should_close_client = http_client is None  # Close only if we created it
        self._http_client = http_client or self._create_default_http_client()
        logger.debug(f"CrossrefClient initialized for {self._base_url}")

    def _create_default_http_client(self) -> httpx.AsyncClient:
        try:
            verify_ssl: ssl.SSLContext | bool = ssl.create_default_context(
                cafile=certifi.where()
            )
            logger.debug("Using certifi SSL context.")
        except OSError:
            verify_ssl = True
            logger.warning("Failed to load certifi bundle. Using default SSL verification.")

        return httpx.AsyncClient(
            timeout=self._settings.request_timeout,
            verify=verify_ssl,
            headers={**CLIENT_HEADERS, "User-Agent": self._settings.user_agent},
        )

    def _url_for(self, route: str) -> str:
        url = f"{self._base_url}{route}"
        if self._settings.mailto:
            separator = "&" if "?" in route else "?"
            url = f"{url}{separator}mailto={quote(self._settings.mailto, safe='@')}"
        return url

    async def request(self, route: str | CrossrefRoute) -> dict[str, Any]:
        """Send a GET request for a compiled route and return the parsed JSON body.

        Args:
            route: A route string such as ``/works?rows=5`` or any query object.

        Raises:
            ConfigurationError: If the query cannot be compiled.
            NotFoundError: On a 404 response.
            APIError: On any other 4xx/5xx response or a non-JSON body.
            TimeoutError: If the request times out.
            NetworkError: For connection level failures.
        """
        if isinstance(route, CrossrefRoute):
            route = route.route()
        url = self._url_for(route)
        logger.debug(f"Sending request: GET {url}")
        try:
            response = await self._http_client.get(url)
        except httpx.TimeoutException as e:
            logger.error(f"Request timed out: {url}")
            raise TimeoutError("Request timed out", request=e.request) from e
        except httpx.NetworkError as e:
            logger.error(f"Network error occurred for {url}: {e}")
            raise NetworkError(f"Network error for {url}: {e}", request=e.request) from e
        except httpx.RequestError as e:
            logger.error(f"HTTP request error for {url}: {e}")
            raise RefloomError(f"HTTP request error for {url}: {e}", request=e.request) from e

        logger.debug(f"Received response: {response.status_code} for {url}")
        if response.status_code == HTTPStatus.NOT_FOUND:
            raise NotFoundError(f"Resource not found: {route}", response=response)
        if response.status_code >= HTTPStatus.BAD_REQUEST:
            raise APIError(
                f"API request failed with status {response.status_code}",
                response=response,
            )
        try:
            return response.json()
        except ValueError as e:
            raise APIError("Response body is not valid JSON", response=response) from e

    async def work(self, doi: str) -> Work:
        """Fetch the metadata of a single DOI."""
        body = await self.request(Works.identifier(doi))
        return decode_message(body, Work, self._unwrapper)

    async def work_agency(self, doi: str) -> WorkAgency:
        """Fetch the registration agency of a DOI."""
        body = await self.request(Works.agency(doi))
        return decode_message(body, WorkAgency, self._unwrapper)

    async def works(self, query: WorkListQuery | WorksQuery | str) -> WorkList:
        """Fetch one page of works for a plain or combined works query."""
        body = await self.request(WorkListQuery.coerce(query))
        return decode_message(body, WorkList, self._unwrapper)

    async def works_of(
        self,
        combiner: type[WorksCombiner],
        identifier: str,
        query: WorksQuery | None = None,
    ) -> WorkList:
        """Fetch works of a parent resource, e.g. ``works_of(Members, "98")``."""
        query = query or WorksQuery()
        return await self.works(query.into_combined(combiner, identifier))

    async def iterate_works(
        self,
        query: WorkListQuery | WorksQuery | str,
        rows: int = ITERATE_PAGE_SIZE,
    ) -> AsyncIterator[Work]:
        """Iterate over all works of a query using cursor based deep paging.

        Args:
            query: The works query. Its result control is replaced by a cursor.
            rows: Page size of each request.

        Yields:
            Work: Decoded works, page after page.
        """
        if not 0 < rows <= MAX_ROWS:
            raise ConfigurationError(f"rows must be between 1 and {MAX_ROWS}, got {rows}")
        list_query = WorkListQuery.coerce(query)
        list_query = list_query.model_copy(
            update={"query": list_query.query.new_cursor(rows)}
        )
        page_number = 0
        while True:
            page_number += 1
            page = await self.works(list_query)
            logger.debug(
                f"Fetched page {page_number} with {len(page.items)} of {page.total_results} works"
            )
            for item in page.items:
                yield item
            if not page.items or not page.next_cursor:
                logger.debug("Cursor exhausted.")
                break
            list_query = list_query.next_cursor(page.next_cursor)

    async def journal(self, issn: str) -> Journal:
        body = await self.request(Journals.identifier(issn))
        return decode_message(body, Journal, self._unwrapper)

    async def journals(
        self, *terms: str, result_control: ResultControl | None = None
    ) -> JournalList:
        body = await self.request(Journals.search(*terms, result_control=result_control))
        return decode_message(body, JournalList, self._unwrapper)

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this client created it."""
        if self._should_close_client and not self._http_client.is_closed:
            await self._http_client.aclose()
            logger.info("CrossrefClient HTTP client closed.")

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object | None,
    ) -> None:
        await self.aclose()
