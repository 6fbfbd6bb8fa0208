"""Shared HTTP helpers used by the registry clients.

Encapsulates request/timeout error handling so registry modules avoid
duplicating try/except blocks. Failures surface as TransportError or
DecodeError; nothing here retries or caches.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer
from versioning.errors import DecodeError, TransportError

logger = logging.getLogger(__name__)


def safe_get(url: str, *, context: str, **kwargs: Any) -> requests.Response:
    """Perform a single GET request with consistent error handling and DEBUG traces.

    Args:
        url: Target URL.
        context: Human-readable source tag for logs (e.g., "npm", "jsr").
        **kwargs: Passed through to requests.get.

    Returns:
        requests.Response: The HTTP response object, whatever its status.

    Raises:
        TransportError: On timeouts and connection failures.
    """
    safe_target = safe_url(url)
    with Timer() as t:
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP request",
                extra=extra_context(
                    event="http_request",
                    component="http_client",
                    action="GET",
                    target=safe_target,
                    context=context
                )
            )
        try:
            res = requests.get(url, timeout=Constants.REQUEST_TIMEOUT, **kwargs)
        except requests.Timeout as exc:
            logger.debug("%s request timed out after %s seconds", context, Constants.REQUEST_TIMEOUT)
            raise TransportError(
                f"request timed out after {Constants.REQUEST_TIMEOUT} seconds"
            ) from exc
        except requests.RequestException as exc:  # includes ConnectionError
            logger.debug("%s connection error: %s", context, exc)
            raise TransportError(f"connection error: {exc}") from exc

        if is_debug_enabled(logger):
            logger.debug(
                "HTTP response",
                extra=extra_context(
                    event="http_response",
                    component="http_client",
                    action="GET",
                    status_code=res.status_code,
                    duration_ms=t.duration_ms(),
                    target=safe_target,
                    context=context
                )
            )
        return res


def get_json(
    url: str,
    *,
    context: str,
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any
) -> Any:
    """Perform a GET request and parse a 2xx JSON body.

    Args:
        url: Target URL
        context: Source tag for logs
        headers: Optional request headers; defaults to Accept: application/json
        **kwargs: Additional requests.get parameters

    Returns:
        The decoded JSON document.

    Raises:
        TransportError: Connection failure, timeout or non-2xx status.
        DecodeError: Body is not valid JSON.
    """
    res = safe_get(url, context=context, headers=headers or dict(Constants.HEADERS_JSON), **kwargs)

    if not 200 <= res.status_code < 300:
        logger.debug(
            "HTTP non-2xx",
            extra=extra_context(
                event="http_response",
                component="http_client",
                action="get_json",
                outcome="non_2xx",
                status_code=res.status_code,
                target=safe_url(url)
            )
        )
        reason = getattr(res, "reason", None)
        status = f"{res.status_code} {reason}" if isinstance(reason, str) and reason else str(res.status_code)
        raise TransportError(f"{safe_url(url)}: status code {status}", status_code=res.status_code)

    try:
        return json.loads(res.text)
    except (json.JSONDecodeError, TypeError) as exc:
        logger.debug(
            "JSON decode error",
            extra=extra_context(
                event="parse",
                component="http_client",
                action="get_json",
                outcome="json_decode_error",
                status_code=res.status_code,
                target=safe_url(url)
            )
        )
        raise DecodeError(f"invalid JSON in response: {exc}") from exc
