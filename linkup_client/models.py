"""Pydantic models for Linkup search requests, responses and error envelopes."""

import json
from collections.abc import Mapping
from datetime import date
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, field_serializer, model_validator
from pydantic.alias_generators import to_camel

from linkup_client.schema import is_model_schema, to_json_schema


class SearchDepth(str, Enum):
    """Search effort mode."""

    STANDARD = "standard"
    DEEP = "deep"


class OutputType(str, Enum):
    """Shape contract for a search response."""

    SOURCED_ANSWER = "sourcedAnswer"
    SEARCH_RESULTS = "searchResults"
    STRUCTURED = "structured"


# --- Request ---


class SearchRequest(BaseModel):
    """Parameters of a single /search call."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    query: str = Field(
        min_length=1,
        alias="q",
        description="Natural language search query",
        examples=["What is Microsoft's 2024 revenue?"],
    )
    depth: SearchDepth = Field(
        default=SearchDepth.STANDARD,
        description="standard for fast answers, deep for agentic multi-step search",
    )
    output_type: OutputType = Field(
        default=OutputType.SEARCH_RESULTS,
        description="Shape of the response",
    )
    structured_output_schema: Any = Field(
        default=None,
        description="Pydantic model class or JSON schema, required for structured output only",
    )
    include_images: bool | None = None
    include_domains: list[str] | None = None
    exclude_domains: list[str] | None = None
    from_date: date | None = None
    to_date: date | None = None
    include_inline_citations: bool | None = None
    include_sources: bool | None = None
    max_results: int | None = Field(default=None, ge=1)

    @model_validator(mode="after")
    def _check_structured_output_schema(self) -> "SearchRequest":
        if self.output_type is OutputType.STRUCTURED and self.structured_output_schema is None:
            raise ValueError("structured_output_schema is required when output_type is 'structured'")
        if self.output_type is not OutputType.STRUCTURED and self.structured_output_schema is not None:
            raise ValueError("structured_output_schema is only allowed when output_type is 'structured'")
        if self.structured_output_schema is not None and not (
            is_model_schema(self.structured_output_schema) or isinstance(self.structured_output_schema, Mapping)
        ):
            raise ValueError("structured_output_schema must be a pydantic model class or a JSON schema mapping")
        return self

    @field_serializer("structured_output_schema")
    def _serialize_schema(self, schema: Any) -> str | None:
        if schema is None:
            return None
        return json.dumps(to_json_schema(schema))

    def to_payload(self) -> dict[str, Any]:
        """Request body as sent to the API: camelCase keys, unset options omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# --- Results ---


class _Payload(BaseModel):
    """Backend objects keep any field the API adds."""

    model_config = ConfigDict(extra="allow")


class Source(_Payload):
    """Plain source cited by a sourced answer."""

    name: str
    url: str
    snippet: str = ""
    favicon: str | None = None


class TextSearchResult(_Payload):
    """Text document returned by a search."""

    type: Literal["text"] = "text"
    name: str
    url: str
    content: str = ""
    favicon: str | None = None


class ImageSearchResult(_Payload):
    """Image returned by a search."""

    type: Literal["image"] = "image"
    name: str
    url: str
    favicon: str | None = None


class OtherPayload(_Payload):
    """Source or result of a kind this client does not model; every field is kept as sent."""


def _source_kind(value: Any) -> str:
    if isinstance(value, Source):
        return "source"
    kind = value.get("type") if isinstance(value, dict) else getattr(value, "type", None)
    if kind in ("text", "image"):
        return kind
    if kind is None and isinstance(value, dict) and "name" in value and "url" in value:
        return "source"
    return "other"


def _result_kind(value: Any) -> str:
    kind = value.get("type") if isinstance(value, dict) else getattr(value, "type", None)
    return kind if kind in ("text", "image") else "other"


SourceItem = Annotated[
    Union[
        Annotated[Source, Tag("source")],
        Annotated[TextSearchResult, Tag("text")],
        Annotated[ImageSearchResult, Tag("image")],
        Annotated[OtherPayload, Tag("other")],
    ],
    Discriminator(_source_kind),
]

SearchResultItem = Annotated[
    Union[
        Annotated[TextSearchResult, Tag("text")],
        Annotated[ImageSearchResult, Tag("image")],
        Annotated[OtherPayload, Tag("other")],
    ],
    Discriminator(_result_kind),
]


class SourcedAnswer(_Payload):
    """Answer synthesized by the API with the sources it relied on."""

    answer: str
    sources: list[SourceItem] = Field(default_factory=list)


class SearchResults(_Payload):
    """Raw search results."""

    results: list[SearchResultItem] = Field(default_factory=list)


class StructuredWithSources(_Payload):
    """Structured output returned together with its sources."""

    data: Any
    sources: list[SourceItem] = Field(default_factory=list)


SearchResult = Union[SourcedAnswer, SearchResults, StructuredWithSources, Any]


# --- Errors ---


class ErrorDetail(BaseModel):
    """Per-field validation failure."""

    field: str = ""
    message: str


class ErrorBody(BaseModel):
    """Error description inside an API error envelope."""

    code: str
    message: str
    details: list[ErrorDetail] = Field(default_factory=list)


class LinkupApiError(BaseModel):
    """Error envelope returned by the API on a failed call."""

    model_config = ConfigDict(populate_by_name=True)

    status_code: int = Field(alias="statusCode")
    error: ErrorBody
