"""Infrastructure layer providing reusable components.

This module contains shared infrastructure components used across funding sheet:
- HTTP client factory with the exchange request timeout
"""

from funding_sheet.infrastructure.http_client import DEFAULT_TIMEOUT, create_client, get

__all__ = ["DEFAULT_TIMEOUT", "create_client", "get"]
