"""Client configuration."""

import os

from pydantic import BaseModel, Field

from linkup_client.exceptions import InvalidArgumentError

DEFAULT_BASE_URL = "https://api.linkup.so/v1"
API_KEY_ENV_VAR = "LINKUP_API_KEY"
BASE_URL_ENV_VAR = "LINKUP_BASE_URL"
TIMEOUT_ENV_VAR = "LINKUP_TIMEOUT"


class ApiConfig(BaseModel):
    """Connection settings for the Linkup API."""

    model_config = {"frozen": True}

    api_key: str = Field(
        min_length=1,
        description="Linkup API key, sent as a bearer token",
    )
    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Base URL of the API, without trailing slash",
        examples=[DEFAULT_BASE_URL],
    )
    timeout: float | None = Field(
        default=None,
        gt=0,
        description="Request timeout in seconds, None for no timeout",
        examples=[30.0],
    )

    @classmethod
    def from_env(
        cls,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> "ApiConfig":
        """Build a config, falling back to LINKUP_* environment variables for missing values.

        Raises:
            InvalidArgumentError: If no API key is given or set in the environment.
        """
        api_key = api_key or os.getenv(API_KEY_ENV_VAR)
        if not api_key:
            raise InvalidArgumentError(f"The Linkup API key was not provided; pass api_key or set {API_KEY_ENV_VAR}")

        base_url = base_url or os.getenv(BASE_URL_ENV_VAR) or DEFAULT_BASE_URL
        if timeout is None and os.getenv(TIMEOUT_ENV_VAR):
            timeout = float(os.environ[TIMEOUT_ENV_VAR])

        return cls(api_key=api_key, base_url=base_url.rstrip("/"), timeout=timeout)
