"""Async HTTP client for the Linkup search API."""

from datetime import date
from typing import Any

import httpx

from linkup_client import __version__
from linkup_client.config import ApiConfig
from linkup_client.exceptions import LinkupError, LinkupUnknownError, UNKNOWN_ERROR_MESSAGE, refine_error
from linkup_client.logging import get_logger
from linkup_client.models import OutputType, SearchDepth, SearchRequest, SearchResult
from linkup_client.normalize import normalize

log = get_logger("linkup_client.client")

USER_AGENT = f"Linkup-Python-SDK/{__version__}"


class LinkupClient:
    """Client for the Linkup /search endpoint.

    Usage:
        async with LinkupClient() as client:
            answer = await client.search("Who won the 2024 Tour de France?", output_type="sourcedAnswer")

    Args:
        api_key: Linkup API key. Defaults to the LINKUP_API_KEY environment variable.
        base_url: API base URL. Defaults to LINKUP_BASE_URL or the public endpoint.
        timeout: Request timeout in seconds. Defaults to LINKUP_TIMEOUT or no timeout.
        http_client: Existing httpx client to send requests with. The caller keeps
            ownership and must close it.
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = ApiConfig.from_env(api_key=api_key, base_url=base_url, timeout=timeout)
        self._owns_http_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient(timeout=self.config.timeout)

    async def __aenter__(self) -> "LinkupClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying httpx client if this instance created it."""
        if self._owns_http_client:
            await self._http_client.aclose()

    @property
    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.api_key}",
            "User-Agent": USER_AGENT,
        }

    async def search(
        self,
        query: str,
        depth: SearchDepth | str = SearchDepth.STANDARD,
        output_type: OutputType | str = OutputType.SEARCH_RESULTS,
        *,
        structured_output_schema: Any = None,
        include_images: bool | None = None,
        include_domains: list[str] | None = None,
        exclude_domains: list[str] | None = None,
        from_date: date | None = None,
        to_date: date | None = None,
        include_inline_citations: bool | None = None,
        include_sources: bool | None = None,
        max_results: int | None = None,
    ) -> SearchResult:
        """Run a search and return the result shaped by `output_type`.

        Raises:
            pydantic.ValidationError: If the parameters are invalid, for instance a
                structured output type without a schema. Raised before any request.
            LinkupError: A typed subclass when the API rejects the request, or
                LinkupUnknownError on transport failures.
        """
        request = SearchRequest(
            query=query,
            depth=depth,
            output_type=output_type,
            structured_output_schema=structured_output_schema,
            include_images=include_images,
            include_domains=include_domains,
            exclude_domains=exclude_domains,
            from_date=from_date,
            to_date=to_date,
            include_inline_citations=include_inline_citations,
            include_sources=include_sources,
            max_results=max_results,
        )
        payload = await self._post("/search", request.to_payload())
        return normalize(request.output_type, payload, include_sources=bool(request.include_sources))

    async def _post(self, path: str, body: dict[str, Any]) -> Any:
        url = f"{self.config.base_url}{path}"
        log.debug("client.request", url=url, output_type=body.get("outputType"), depth=body.get("depth"))
        try:
            response = await self._http_client.post(url, json=body, headers=self._headers)
        except httpx.HTTPError as e:
            log.warning("client.transport_failed", url=url, error=str(e))
            raise LinkupUnknownError(f"{UNKNOWN_ERROR_MESSAGE}: {e}") from e

        if response.is_error:
            error = self._refine_response_error(response)
            log.warning(
                "client.request_failed",
                url=url,
                status_code=response.status_code,
                error_type=type(error).__name__,
            )
            raise error

        try:
            return response.json()
        except ValueError as e:
            log.warning("client.invalid_response", url=url, status_code=response.status_code, error=str(e))
            raise LinkupUnknownError(f"{UNKNOWN_ERROR_MESSAGE}: {e}", response.status_code) from e

    @staticmethod
    def _refine_response_error(response: httpx.Response) -> LinkupError:
        try:
            payload = response.json()
        except ValueError:
            if response.reason_phrase:
                return LinkupUnknownError(f"{UNKNOWN_ERROR_MESSAGE}: {response.reason_phrase}", response.status_code)
            return LinkupUnknownError(UNKNOWN_ERROR_MESSAGE, response.status_code)
        return refine_error(payload)
