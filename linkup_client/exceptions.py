"""Exceptions raised by the Linkup client and its LLM integrations."""

from typing import Any

from pydantic import ValidationError

from linkup_client.models import LinkupApiError

UNKNOWN_ERROR_MESSAGE = "An unknown error occurred"


class LinkupError(Exception):
    """Base exception for errors reported by the Linkup API."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class LinkupInvalidRequestError(LinkupError):
    """Raised when the API rejects the request parameters."""


class LinkupNoResultError(LinkupError):
    """Raised when the search query did not yield any result."""


class LinkupAuthenticationError(LinkupError):
    """Raised when the API key is missing, invalid or not allowed."""


class LinkupInsufficientCreditError(LinkupError):
    """Raised when the account has run out of credits."""


class LinkupTooManyRequestsError(LinkupError):
    """Raised when the account is rate limited."""


class LinkupUnknownError(LinkupError):
    """Raised for any failure that does not match a known status/code pair."""


class InvalidArgumentError(ValueError):
    """Raised when a required argument is missing or empty."""


class UnsupportedConfigurationError(ValueError):
    """Raised when the caller passes options the wrapper owns."""


def concat_error_and_details(api_error: LinkupApiError) -> str:
    """Join the envelope message with the message of every detail."""
    return " ".join([api_error.error.message, *(detail.message for detail in api_error.error.details)])


def _unknown_error(message: str | None = None, status_code: int | None = None) -> LinkupUnknownError:
    if message:
        return LinkupUnknownError(f"{UNKNOWN_ERROR_MESSAGE}: {message}", status_code)
    return LinkupUnknownError(UNKNOWN_ERROR_MESSAGE, status_code)


def _find_message(payload: Any) -> str | None:
    if not isinstance(payload, dict):
        return None
    error = payload.get("error")
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        return error["message"]
    if isinstance(payload.get("message"), str):
        return payload["message"]
    return None


def refine_error(payload: Any) -> LinkupError:
    """Translate an API error envelope into a typed LinkupError.

    Never raises: payloads that are not a valid envelope map to LinkupUnknownError.

    Args:
        payload: Decoded JSON body of a failed API call.

    Returns:
        The LinkupError subclass matching the envelope's status code and error code.
    """
    try:
        api_error = LinkupApiError.model_validate(payload)
    except ValidationError:
        return _unknown_error(_find_message(payload))

    status_code = api_error.status_code
    code = api_error.error.code
    message = api_error.error.message

    if status_code == 400:
        if code == "SEARCH_QUERY_NO_RESULT":
            return LinkupNoResultError(message, status_code)
        return LinkupInvalidRequestError(concat_error_and_details(api_error), status_code)
    if status_code in (401, 403):
        return LinkupAuthenticationError(message, status_code)
    if status_code == 429:
        if code == "INSUFFICIENT_FUNDS_CREDITS":
            return LinkupInsufficientCreditError(message, status_code)
        if code == "TOO_MANY_REQUESTS":
            return LinkupTooManyRequestsError(message, status_code)
    return _unknown_error(message, status_code)
