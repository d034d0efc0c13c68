"""Request signing for the exchange REST API.

The exchange authenticates each request with an HMAC-SHA256 signature over the
canonical request string ``<ms timestamp><METHOD>/api/<endpoint>[?<query>]``.
The query part must be byte-identical to what is sent on the wire, so callers
build the request URL from ``encode_query`` as well.
"""

import hashlib
import hmac
import time
from typing import Any
from urllib.parse import quote, urlencode

API_PREFIX = "/api"

KEY_HEADER = "FTX-KEY"
TIMESTAMP_HEADER = "FTX-TS"
SIGNATURE_HEADER = "FTX-SIGN"
SUBACCOUNT_HEADER = "FTX-SUBACCOUNT"


def now_ms() -> int:
    return int(time.time() * 1000)


def encode_query(params: dict[str, Any] | None) -> str:
    """Return ``?a=1&b=2`` for params (insertion order kept), or "" if none."""
    if not params:
        return ""
    return f"?{urlencode(params)}"


def canonical_string(timestamp: int, method: str, path: str, query: str = "") -> str:
    return f"{timestamp}{method.upper()}{path}{query}"


def sign_request(secret: str, timestamp: int, method: str, path: str, query: str = "") -> str:
    """Hex HMAC-SHA256 of the canonical request string."""
    payload = canonical_string(timestamp, method, path, query)
    return hmac.new(secret.encode("utf-8"), payload.encode("utf-8"), hashlib.sha256).hexdigest()


def auth_headers(
    api_key: str,
    api_secret: str,
    endpoint: str,
    query: str = "",
    subaccount: str | None = None,
    timestamp: int | None = None,
) -> dict[str, str]:
    """Build the auth headers for a GET on /api/<endpoint><query>."""
    ts = timestamp if timestamp is not None else now_ms()
    signature = sign_request(api_secret, ts, "GET", f"{API_PREFIX}/{endpoint}", query)

    headers = {
        KEY_HEADER: api_key,
        TIMESTAMP_HEADER: str(ts),
        SIGNATURE_HEADER: signature,
    }
    if subaccount:
        headers[SUBACCOUNT_HEADER] = quote(subaccount)
    return headers
