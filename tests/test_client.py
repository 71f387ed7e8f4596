"""Tests for the Linkup HTTP client."""

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest
from pydantic import ValidationError

from linkup_client import __version__
from linkup_client.client import LinkupClient
from linkup_client.exceptions import (
    InvalidArgumentError,
    LinkupAuthenticationError,
    LinkupInsufficientCreditError,
    LinkupInvalidRequestError,
    LinkupNoResultError,
    LinkupTooManyRequestsError,
    LinkupUnknownError,
)
from linkup_client.models import OutputType, SearchDepth, SearchResults, SourcedAnswer, StructuredWithSources

Handler = Callable[[httpx.Request], httpx.Response]


def _make_client(handler: Handler, **kwargs: Any) -> LinkupClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return LinkupClient(api_key="1234", http_client=http_client, **kwargs)


def _json_handler(payload: Any, status_code: int = 200, requests: list[httpx.Request] | None = None) -> Handler:
    def handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        return httpx.Response(status_code, json=payload)

    return handler


class TestSearchRequestShape:
    """Tests for how search() builds the HTTP request."""

    @pytest.mark.asyncio
    async def test__posts_json_body_with_auth_headers(self) -> None:
        requests: list[httpx.Request] = []
        client = _make_client(_json_handler({"answer": "", "sources": []}, requests=requests))

        await client.search("foo", depth=SearchDepth.DEEP, output_type=OutputType.SOURCED_ANSWER)

        assert len(requests) == 1
        request = requests[0]
        assert request.method == "POST"
        assert str(request.url) == "https://api.linkup.so/v1/search"
        assert request.headers["Authorization"] == "Bearer 1234"
        assert request.headers["User-Agent"] == f"Linkup-Python-SDK/{__version__}"
        assert json.loads(request.content) == {"q": "foo", "depth": "deep", "outputType": "sourcedAnswer"}

    @pytest.mark.asyncio
    async def test__custom_base_url__used_for_requests(self) -> None:
        requests: list[httpx.Request] = []
        client = _make_client(_json_handler({"results": []}, requests=requests), base_url="http://foo.bar/baz/")

        await client.search("foo")

        assert str(requests[0].url) == "http://foo.bar/baz/search"

    @pytest.mark.asyncio
    async def test__filters__sent_in_body(self) -> None:
        requests: list[httpx.Request] = []
        client = _make_client(_json_handler({"results": []}, requests=requests))

        await client.search("foo", include_domains=["example.com"], max_results=3, include_images=False)

        body = json.loads(requests[0].content)
        assert body["includeDomains"] == ["example.com"]
        assert body["maxResults"] == 3
        assert body["includeImages"] is False

    @pytest.mark.asyncio
    async def test__structured_without_schema__fails_before_any_request(self) -> None:
        requests: list[httpx.Request] = []
        client = _make_client(_json_handler("foo", requests=requests))

        with pytest.raises(ValidationError):
            await client.search("foo", output_type=OutputType.STRUCTURED)

        assert requests == []


class TestSearchResponses:
    """Tests for response normalization through search()."""

    @pytest.mark.asyncio
    async def test__sourced_answer__returns_sourced_answer(self) -> None:
        client = _make_client(
            _json_handler(
                {
                    "answer": "foo",
                    "sources": [{"name": "foo", "snippet": "foo bar baz", "url": "http://foo.bar/baz"}],
                }
            )
        )

        result = await client.search("foo", output_type=OutputType.SOURCED_ANSWER)

        assert isinstance(result, SourcedAnswer)
        assert result.answer == "foo"
        assert result.sources[0].snippet == "foo bar baz"

    @pytest.mark.asyncio
    async def test__search_results__returns_search_results(self) -> None:
        client = _make_client(
            _json_handler({"results": [{"type": "text", "name": "a", "url": "http://a", "content": "c"}]})
        )

        result = await client.search("foo")

        assert isinstance(result, SearchResults)
        assert result.results[0].content == "c"

    @pytest.mark.asyncio
    async def test__structured__returns_raw_payload(self) -> None:
        client = _make_client(_json_handler({"company": "Linkup"}))

        result = await client.search("foo", output_type="structured", structured_output_schema={"type": "object"})

        assert result == {"company": "Linkup"}

    @pytest.mark.asyncio
    async def test__structured_with_sources__returns_data_and_sources(self) -> None:
        client = _make_client(
            _json_handler({"data": "foo", "sources": [{"name": "foo", "snippet": "s", "url": "http://foo.bar"}]})
        )

        result = await client.search(
            "foo",
            output_type=OutputType.STRUCTURED,
            structured_output_schema={"type": "string"},
            include_sources=True,
        )

        assert isinstance(result, StructuredWithSources)
        assert result.data == "foo"
        assert result.sources[0].name == "foo"


class TestSearchErrors:
    """Tests for error translation through search()."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status_code,code,error_type",
        [
            (400, "SEARCH_QUERY_NO_RESULT", LinkupNoResultError),
            (400, "VALIDATION_ERROR", LinkupInvalidRequestError),
            (401, "UNAUTHORIZED", LinkupAuthenticationError),
            (403, "FORBIDDEN", LinkupAuthenticationError),
            (429, "INSUFFICIENT_FUNDS_CREDITS", LinkupInsufficientCreditError),
            (429, "TOO_MANY_REQUESTS", LinkupTooManyRequestsError),
            (500, "INTERNAL", LinkupUnknownError),
        ],
    )
    async def test__error_envelope__raises_typed_error(
        self, status_code: int, code: str, error_type: type[Exception]
    ) -> None:
        envelope = {"statusCode": status_code, "error": {"code": code, "message": "msg", "details": []}}
        client = _make_client(_json_handler(envelope, status_code=status_code))

        with pytest.raises(error_type):
            await client.search("foo")

    @pytest.mark.asyncio
    async def test__unparseable_error_body__raises_unknown_error(self) -> None:
        client = _make_client(lambda request: httpx.Response(502, text="<html>Bad Gateway</html>"))

        with pytest.raises(LinkupUnknownError, match="An unknown error occurred: Bad Gateway"):
            await client.search("foo")

    @pytest.mark.asyncio
    async def test__non_json_success_body__raises_unknown_error(self) -> None:
        client = _make_client(lambda request: httpx.Response(200, text="<html>gateway</html>"))

        with pytest.raises(LinkupUnknownError, match="An unknown error occurred") as exc_info:
            await client.search("foo")

        assert exc_info.value.status_code == 200
        assert isinstance(exc_info.value.__cause__, ValueError)

    @pytest.mark.asyncio
    async def test__transport_failure__raises_unknown_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = _make_client(handler)

        with pytest.raises(LinkupUnknownError, match="connection refused") as exc_info:
            await client.search("foo")

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


class TestClientLifecycle:
    """Tests for configuration and resource handling."""

    def test__missing_api_key__raises_invalid_argument(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("LINKUP_API_KEY", raising=False)
        with pytest.raises(InvalidArgumentError):
            LinkupClient()

    @pytest.mark.asyncio
    async def test__injected_http_client__not_closed(self) -> None:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(_json_handler({"results": []})))

        async with LinkupClient(api_key="1234", http_client=http_client):
            pass

        assert not http_client.is_closed
        await http_client.aclose()

    @pytest.mark.asyncio
    async def test__owned_http_client__closed_on_exit(self) -> None:
        async with LinkupClient(api_key="1234") as client:
            http_client = client._http_client

        assert http_client.is_closed
