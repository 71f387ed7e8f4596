"""Transparent Linkup web search for OpenAI models.

The wrapper exposes drop-in replacements for `responses.create` and
`chat.completions.create`. Each call advertises a single `search_web` tool,
runs every `search_web` call the model makes against Linkup, and asks the
model once more with the results in the conversation. Exactly one round of
tool execution happens: tool calls in the second reply are returned to the
caller unexecuted.
"""

import json
from collections.abc import Awaitable, Callable, Mapping, Sequence
from types import SimpleNamespace
from typing import Any
from uuid import uuid4

from openai import AsyncOpenAI, NotGiven, Omit
from pydantic import BaseModel

from linkup_client.client import LinkupClient
from linkup_client.exceptions import InvalidArgumentError, UnsupportedConfigurationError
from linkup_client.logging import get_logger, scoped_context_vars
from linkup_client.models import OutputType, SearchDepth
from linkup_client.tools import SEARCH_WEB_TOOL

log = get_logger("linkup_client.openai_wrapper")

SearchFunction = Callable[..., Awaitable[Any]]


def _get(item: Any, key: str, default: Any = None) -> Any:
    """Read a field from an OpenAI SDK object or from its plain dict form."""
    if isinstance(item, Mapping):
        return item.get(key, default)
    return getattr(item, key, default)


def _is_given(value: Any) -> bool:
    return value is not None and not isinstance(value, (NotGiven, Omit))


def _parse_query(arguments: str | None) -> str:
    """Extract `query` from a tool call's JSON arguments.

    Malformed JSON raises json.JSONDecodeError. A missing query is forwarded as "".
    """
    args = json.loads(arguments or "{}")
    if not isinstance(args, dict):
        return ""
    return args.get("query") or ""


def _result_to_dict(result: Any) -> Any:
    if isinstance(result, BaseModel):
        return result.model_dump(mode="json", exclude_none=True)
    return result


def format_results_as_text(results: Sequence[Any]) -> str:
    """Responses API tool output: text content of each result, one per line."""
    return "\n".join(_get(result, "content") or "" for result in results)


def format_results_as_json(results: Sequence[Any]) -> str:
    """Chat Completions tool output: the full result list as indented JSON."""
    return json.dumps([_result_to_dict(result) for result in results], indent=2)


class OpenAILinkupWrapper:
    """Wrap an AsyncOpenAI client so its models can search the web through Linkup.

    Args:
        openai_client: AsyncOpenAI client (or any object exposing the same
            `responses.create` and `chat.completions.create` coroutines).
        search: Coroutine function with the LinkupClient.search signature.
    """

    def __init__(self, openai_client: AsyncOpenAI, search: SearchFunction) -> None:
        self._openai = openai_client
        self._search = search

    @property
    def responses(self) -> SimpleNamespace:
        return SimpleNamespace(create=self._create_response)

    @property
    def chat(self) -> SimpleNamespace:
        return SimpleNamespace(completions=SimpleNamespace(create=self._create_chat_completion))

    async def _search_results(self, query: str) -> list[Any]:
        response = await self._search(
            query=query,
            depth=SearchDepth.STANDARD,
            output_type=OutputType.SEARCH_RESULTS,
        )
        results = _get(response, "results") or []
        log.info("wrapper.search.completed", query=query, result_count=len(results))
        return list(results)

    async def _create_response(
        self,
        *,
        model: str,
        input: str | list[Any] | None = None,
        tools: list[Any] | NotGiven | Omit | None = None,
        **params: Any,
    ) -> Any:
        if not input:
            raise InvalidArgumentError("Input is required for creating a response")
        if _is_given(tools):
            raise UnsupportedConfigurationError("User tools are not supported")

        conversation: list[Any] = list(input) if isinstance(input, list) else [{"content": input, "role": "user"}]

        with scoped_context_vars(correlation_id=str(uuid4())[:8]):
            first = await self._openai.responses.create(
                model=model,
                input=list(conversation),
                tools=[SEARCH_WEB_TOOL.to_response_tool()],
                **params,
            )

            output = _get(first, "output") or []
            tool_calls = [
                item
                for item in output
                if _get(item, "type") == "function_call" and _get(item, "name") == SEARCH_WEB_TOOL.name
            ]
            if not tool_calls:
                log.debug("wrapper.responses.no_tool_call", model=model)
                return first

            log.info("wrapper.responses.tool_calls", model=model, count=len(tool_calls))

            # Reasoning must precede the tool calls it produced
            reasoning = next((item for item in output if _get(item, "type") == "reasoning"), None)
            if reasoning is not None:
                conversation.append(reasoning)
            conversation.extend(tool_calls)

            for tool_call in tool_calls:
                query = _parse_query(_get(tool_call, "arguments"))
                results = await self._search_results(query)
                conversation.append(
                    {
                        "call_id": _get(tool_call, "call_id"),
                        "output": format_results_as_text(results),
                        "type": "function_call_output",
                    }
                )

            return await self._openai.responses.create(model=model, input=conversation, **params)

    async def _create_chat_completion(
        self,
        *,
        model: str,
        messages: list[Any],
        tools: list[Any] | NotGiven | Omit | None = None,
        **params: Any,
    ) -> Any:
        if _is_given(tools):
            raise UnsupportedConfigurationError("User tools are not supported")

        with scoped_context_vars(correlation_id=str(uuid4())[:8]):
            first = await self._openai.chat.completions.create(
                model=model,
                messages=list(messages),
                tools=[SEARCH_WEB_TOOL.to_chat_tool()],
                **params,
            )

            choices = _get(first, "choices") or []
            assistant_message = _get(choices[0], "message") if choices else None
            tool_calls = [
                tool_call
                for tool_call in _get(assistant_message, "tool_calls") or []
                if _get(tool_call, "type") == "function"
                and _get(_get(tool_call, "function"), "name") == SEARCH_WEB_TOOL.name
            ]
            if not tool_calls:
                log.debug("wrapper.chat.no_tool_call", model=model)
                return first

            log.info("wrapper.chat.tool_calls", model=model, count=len(tool_calls))

            # The assistant message keeps every tool call, including ones we do not run
            next_messages = [*messages, assistant_message]
            for tool_call in tool_calls:
                query = _parse_query(_get(_get(tool_call, "function"), "arguments"))
                results = await self._search_results(query)
                next_messages.append(
                    {
                        "content": format_results_as_json(results),
                        "role": "tool",
                        "tool_call_id": _get(tool_call, "id"),
                    }
                )

            return await self._openai.chat.completions.create(model=model, messages=next_messages, **params)


def wrap(
    openai_client: AsyncOpenAI,
    *,
    search: SearchFunction | None = None,
    linkup_client: LinkupClient | None = None,
) -> OpenAILinkupWrapper:
    """Return `openai_client` wrapped with Linkup web search.

    Args:
        openai_client: Client to wrap.
        search: Search coroutine to use. Takes precedence over `linkup_client`.
        linkup_client: Client whose `search` is used. Built from the environment
            when neither argument is given.
    """
    if search is None:
        search = (linkup_client or LinkupClient()).search
    return OpenAILinkupWrapper(openai_client, search)
