"""Linkup client - web search for Python applications and LLM tool loops"""

__version__ = "0.1.0"

from linkup_client.agents import (
    SearchDeps,
    clear_agent_cache,
    create_search_agent,
    get_search_agent,
)
from linkup_client.client import LinkupClient
from linkup_client.config import ApiConfig
from linkup_client.exceptions import (
    InvalidArgumentError,
    LinkupAuthenticationError,
    LinkupError,
    LinkupInsufficientCreditError,
    LinkupInvalidRequestError,
    LinkupNoResultError,
    LinkupTooManyRequestsError,
    LinkupUnknownError,
    UnsupportedConfigurationError,
    refine_error,
)
from linkup_client.models import (
    ImageSearchResult,
    LinkupApiError,
    OtherPayload,
    OutputType,
    SearchDepth,
    SearchRequest,
    SearchResults,
    Source,
    SourcedAnswer,
    StructuredWithSources,
    TextSearchResult,
)
from linkup_client.normalize import normalize
from linkup_client.openai_wrapper import OpenAILinkupWrapper, wrap
from linkup_client.tools import SEARCH_WEB_TOOL, ToolDefinition

__all__ = [
    # Client
    "LinkupClient",
    "ApiConfig",
    # Models
    "SearchDepth",
    "OutputType",
    "SearchRequest",
    "Source",
    "TextSearchResult",
    "ImageSearchResult",
    "OtherPayload",
    "SourcedAnswer",
    "SearchResults",
    "StructuredWithSources",
    "LinkupApiError",
    "normalize",
    # Exceptions
    "LinkupError",
    "LinkupInvalidRequestError",
    "LinkupNoResultError",
    "LinkupAuthenticationError",
    "LinkupInsufficientCreditError",
    "LinkupTooManyRequestsError",
    "LinkupUnknownError",
    "InvalidArgumentError",
    "UnsupportedConfigurationError",
    "refine_error",
    # LLM integrations
    "ToolDefinition",
    "SEARCH_WEB_TOOL",
    "OpenAILinkupWrapper",
    "wrap",
    "SearchDeps",
    "create_search_agent",
    "get_search_agent",
    "clear_agent_cache",
]
