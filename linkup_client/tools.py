"""Definition of the search tool advertised to language models."""

from copy import deepcopy
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ToolDefinition(BaseModel):
    """Provider-agnostic function tool: name, description and JSON schema parameters."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Unique tool identifier")
    description: str = Field(..., description="What the tool does")
    parameters: dict[str, Any] = Field(..., description="JSON Schema for parameters")

    def to_response_tool(self) -> dict[str, Any]:
        """Responses API format (flat function tool)."""
        return {
            "type": "function",
            "name": self.name,
            "description": self.description,
            "parameters": deepcopy(self.parameters),
            "strict": False,
        }

    def to_chat_tool(self) -> dict[str, Any]:
        """Chat Completions API format (nested under "function")."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": deepcopy(self.parameters),
            },
        }


SEARCH_WEB_TOOL = ToolDefinition(
    name="search_web",
    description="Search the web for current information. Returns comprehensive content from relevant sources.",
    parameters={
        "type": "object",
        "properties": {
            "query": {
                "type": "string",
                "description": "The search query",
            },
        },
        "required": ["query"],
    },
)
