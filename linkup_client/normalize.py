"""Normalize raw /search payloads into the result model matching the requested output type."""

from typing import Any, assert_never

from linkup_client.models import OutputType, SearchResult, SearchResults, SourcedAnswer, StructuredWithSources


def normalize(output_type: OutputType, payload: Any, *, include_sources: bool = False) -> SearchResult:
    """Project a successful response body onto its result shape.

    The shape is decided by `output_type` alone. Fields are taken as the backend
    sent them; unknown fields on sources and results are preserved.

    Args:
        output_type: Output type the request was made with.
        payload: Decoded JSON body of the response.
        include_sources: Whether a structured request asked for sources.

    Returns:
        SourcedAnswer, SearchResults, StructuredWithSources, or the raw
        structured payload.
    """
    output_type = OutputType(output_type)
    if output_type is OutputType.SOURCED_ANSWER:
        return SourcedAnswer(answer=payload["answer"], sources=payload.get("sources", []))
    if output_type is OutputType.SEARCH_RESULTS:
        return SearchResults(results=payload["results"])
    if output_type is OutputType.STRUCTURED:
        if include_sources:
            return StructuredWithSources(data=payload["data"], sources=payload.get("sources", []))
        return payload
    assert_never(output_type)
