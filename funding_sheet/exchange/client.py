"""Authenticated HTTP client construction for the exchange API."""

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from funding_sheet.exceptions import ConfigurationError
from funding_sheet.exchange.signing import auth_headers, encode_query
from funding_sheet.infrastructure import http_client
from funding_sheet.infrastructure.http_client import DEFAULT_TIMEOUT, JsonValue
from funding_sheet.settings import DEFAULT_API_BASE_URL

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClientConfig:
    """Exchange credentials and connection options.

    The sub-account travels with the config instead of living in module state,
    so concurrent runs against different sub-accounts do not interfere.
    """

    api_key: str
    api_secret: str = field(repr=False)
    subaccount: str | None = None
    base_url: str = DEFAULT_API_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    transport: httpx.AsyncBaseTransport | None = field(default=None, repr=False, compare=False)

    def validate(self) -> None:
        if not self.api_key or not self.api_secret:
            raise ConfigurationError("Missing api key or secret!")

    def with_subaccount(self, subaccount: str | None) -> "ClientConfig":
        return ClientConfig(
            api_key=self.api_key,
            api_secret=self.api_secret,
            subaccount=subaccount,
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self.transport,
        )


def request_path(endpoint: str, params: dict[str, Any] | None = None) -> str:
    """Relative URL sent to the client; shares its query string with the signature."""
    return f"/{endpoint}{encode_query(params)}"


def build_client(
    config: ClientConfig,
    endpoint: str,
    params: dict[str, Any] | None = None,
) -> httpx.AsyncClient:
    """Create a client whose headers authenticate a single GET of endpoint with params.

    The signature embeds the current timestamp, so the client must be used for
    that one request only.
    """
    config.validate()

    headers = auth_headers(
        config.api_key,
        config.api_secret,
        endpoint,
        encode_query(params),
        subaccount=config.subaccount,
    )
    return http_client.create_client(
        config.base_url,
        headers=headers,
        timeout=config.timeout,
        transport=config.transport,
    )


async def signed_get(
    config: ClientConfig,
    endpoint: str,
    params: dict[str, Any] | None = None,
) -> JsonValue:
    """Signed GET of /api/<endpoint>; transport and HTTP errors propagate."""
    url = request_path(endpoint, params)
    logger.debug(f"GET {url}")

    async with build_client(config, endpoint, params) as client:
        return await http_client.get(client, url)
