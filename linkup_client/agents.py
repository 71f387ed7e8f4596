"""PydanticAI agent with Linkup web search as a tool."""

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from pydantic_ai import Agent, RunContext

from linkup_client.logging import get_logger
from linkup_client.models import OutputType, SearchDepth
from linkup_client.openai_wrapper import SearchFunction, _get, _result_to_dict

log = get_logger("linkup_client.agents")

DEFAULT_AGENT_MODEL = os.getenv("LINKUP_AGENT_MODEL", "openai:gpt-4o-mini")

DEFAULT_INSTRUCTIONS = """You are a helpful assistant with access to web search.
Use the search_web tool whenever the question needs current or factual
information you are not sure about. Base your answer on the search results
and cite the URLs you used."""


@dataclass
class SearchDeps:
    """Run dependencies: the search coroutine backing the search_web tool."""

    search: SearchFunction


async def search_web(ctx: RunContext[SearchDeps], query: str) -> list[dict[str, Any]]:
    """Search the web for current information. Returns comprehensive content from relevant sources.

    Args:
        query: The search query
    """
    response = await ctx.deps.search(
        query=query,
        depth=SearchDepth.STANDARD,
        output_type=OutputType.SEARCH_RESULTS,
    )
    results = _get(response, "results") or []
    log.info("agent.search.completed", query=query, result_count=len(results))
    return [_result_to_dict(result) for result in results]


def create_search_agent(model: Any = DEFAULT_AGENT_MODEL, *, instructions: str = DEFAULT_INSTRUCTIONS) -> Agent[SearchDeps, str]:
    """Uncached factory - use with TestModel for tests."""
    agent = Agent(
        model,
        deps_type=SearchDeps,
        instructions=instructions,
        output_type=str,
        name="search_agent",
    )
    agent.tool(search_web)
    return agent


@lru_cache(maxsize=1)
def get_search_agent(model: str = DEFAULT_AGENT_MODEL) -> Agent[SearchDeps, str]:
    """Cached getter for production."""
    return create_search_agent(model)


def clear_agent_cache() -> None:
    get_search_agent.cache_clear()
