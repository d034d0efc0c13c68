"""HTTP client helpers. No retries: transport errors propagate to the caller."""

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

# JSON can be any of these types
JsonValue = dict[str, Any] | list[Any] | str | int | float | bool | None

DEFAULT_TIMEOUT = 30.0


def create_client(
    base_url: str,
    headers: dict[str, str] | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=base_url,
        headers=headers,
        timeout=timeout,
        transport=transport,
    )


async def get(client: httpx.AsyncClient, url: str) -> JsonValue:
    """GET url on client; raises httpx.HTTPStatusError on non-2xx responses."""
    response = await client.get(url)
    response.raise_for_status()
    return response.json()
