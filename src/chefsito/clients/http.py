"""Shared helpers for upstream HTTP calls."""

import logging
from typing import Any

import httpx

from chefsito.errors import ResponseParseError, UpstreamError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15.0


def upstream_message(response: httpx.Response) -> str | None:
    """Pull a human-readable error message out of an error response, if any."""
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        return text[:200] or None
    if isinstance(body, dict):
        for key in ("error", "message", "status"):
            if body.get(key):
                return str(body[key])
    return None


def check_response(response: httpx.Response, service: str) -> None:
    """Raise UpstreamError for any non-2xx response."""
    if response.is_success:
        return
    message = upstream_message(response)
    logger.warning(f"{service} returned HTTP {response.status_code}: {message}")
    raise UpstreamError(service, response.status_code, message)


def parse_json(response: httpx.Response, service: str) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise ResponseParseError(f"{service} returned a non-JSON body: {e}") from e
