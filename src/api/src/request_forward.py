"""Forwarding of proxy requests to the Pokemon TCG API.

Each inbound request maps to exactly one upstream GET. The call runs under a
hard deadline and every failure is raised as a ``ForwardError`` subclass so
route handlers can turn it into the fixed ``{error, message}`` body.
"""

import asyncio
import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from config import Settings

logger = logging.getLogger(__name__)

TIMEOUT_MESSAGE = "Request timeout - Pokemon TCG API took too long to respond"


class ForwardError(Exception):
    """Base class for every upstream failure surfaced to the caller."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UpstreamTimeout(ForwardError):
    pass


class UpstreamStatusError(ForwardError):
    def __init__(self, status_code: int, reason: str):
        super().__init__(f"Pokemon TCG API error: {status_code} {reason}")
        self.status_code = status_code
        self.reason = reason


class UpstreamTransportError(ForwardError):
    pass


class ResponseParseError(ForwardError):
    pass


def quote_query(raw: bytes) -> str:
    # Only bytes that cannot appear in a URL are escaped, existing %XX escapes
    # and raw UTF-8 keep their exact byte values.
    return quote(raw, safe="!$&'()*+,/:;=?@[]%")


def build_upstream_url(base_url: str, path: str, query_string: str = "") -> str:
    # The query string is passed through untouched, ids are already in `path`.
    if query_string:
        return f"{base_url}{path}?{query_string}"
    return f"{base_url}{path}"


def build_headers(api_key: Optional[str]) -> Dict[str, str]:
    headers = {"Content-Type": "application/json", "Accept": "application/json"}
    if api_key:
        headers["X-Api-Key"] = api_key
    return headers


async def forward(
    path: str,
    query_string: str = "",
    *,
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Any:
    """Fetch ``path`` from the upstream API and return its decoded JSON body.

    Raises:
        UpstreamTimeout: no response within ``settings.upstream_timeout``.
        UpstreamStatusError: upstream answered with a non-2xx status.
        UpstreamTransportError: the connection failed.
        ResponseParseError: a 2xx body that is not valid JSON.
    """
    url = build_upstream_url(settings.pokemon_tcg_api_url, path, query_string)
    headers = build_headers(settings.pokemon_tcg_api_key)
    logger.info(f"Fetching: {url}")

    async with httpx.AsyncClient(
        transport=transport, timeout=settings.upstream_timeout
    ) as client:
        try:
            # wait_for cancels the pending request once the deadline passes
            response = await asyncio.wait_for(
                client.get(url, headers=headers), timeout=settings.upstream_timeout
            )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            raise UpstreamTimeout(TIMEOUT_MESSAGE)
        except (httpx.RequestError, httpx.InvalidURL) as error:
            raise UpstreamTransportError(str(error) or type(error).__name__)

    if not response.is_success:
        logger.error(f"API error response: {response.text}")
        raise UpstreamStatusError(response.status_code, response.reason_phrase)

    try:
        return response.json()
    except ValueError as error:
        raise ResponseParseError(str(error))
