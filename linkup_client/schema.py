"""Structured output schema helpers."""

from collections.abc import Mapping
from typing import Any


def is_model_schema(schema: Any) -> bool:
    """Return True for pydantic model classes (anything exposing `model_json_schema` and `model_validate`)."""
    return callable(getattr(schema, "model_json_schema", None)) and callable(getattr(schema, "model_validate", None))


def to_json_schema(schema: Any) -> dict[str, Any]:
    """Convert a structured output schema to a plain JSON schema dict.

    Args:
        schema: A pydantic model class or a JSON schema mapping.

    Raises:
        TypeError: If the schema is neither.
    """
    if is_model_schema(schema):
        return schema.model_json_schema()
    if isinstance(schema, Mapping):
        return dict(schema)
    raise TypeError(f"Unsupported structured output schema: {type(schema).__name__}")
