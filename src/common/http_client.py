"""Shared HTTP helpers used by the repository client.

Encapsulates common request/timeout error handling so callers avoid
duplicating try/except blocks.
"""
from __future__ import annotations

import logging
import sys
import time
from typing import Any, Callable

import requests

from constants import Constants, ExitCodes
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)


def _default_headers(kwargs: dict) -> None:
    headers = dict(kwargs.pop("headers", None) or {})
    headers.setdefault("User-Agent", Constants.USER_AGENT)
    kwargs["headers"] = headers


def _send(method: str, sender: Callable[..., requests.Response], url: str, *,
          context: str, fatal: bool, **kwargs: Any) -> requests.Response:
    """Send a request with retries on connection errors and DEBUG traces.

    Timeouts and connection errors are retried up to HTTP_RETRY_MAX times with
    a linear backoff. When retries are exhausted, ``fatal`` decides between
    exiting the process and re-raising the last exception.
    """
    _default_headers(kwargs)
    safe_target = safe_url(url)
    last_exc: Exception = requests.RequestException("no attempt made")

    for attempt in range(Constants.HTTP_RETRY_MAX):
        with Timer() as t:
            if is_debug_enabled(logger):
                logger.debug(
                    "HTTP request",
                    extra=extra_context(
                        event="http_request",
                        component="http_client",
                        action=method,
                        target=safe_target,
                        context=context,
                        attempt=attempt + 1,
                    ),
                )
            try:
                res = sender(url, timeout=Constants.REQUEST_TIMEOUT, **kwargs)
            except (requests.Timeout, requests.ConnectionError) as exc:
                last_exc = exc
                if is_debug_enabled(logger):
                    logger.debug(
                        "HTTP request exception",
                        extra=extra_context(
                            event="http_exception",
                            component="http_client",
                            action=method,
                            outcome=type(exc).__name__,
                            attempt=attempt + 1,
                            target=safe_target,
                        ),
                    )
                if attempt < Constants.HTTP_RETRY_MAX - 1:
                    time.sleep(Constants.HTTP_RETRY_BASE_DELAY_SEC * (attempt + 1))
                continue
            except requests.RequestException as exc:
                last_exc = exc
                break
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP response",
                extra=extra_context(
                    event="http_response",
                    component="http_client",
                    action=method,
                    status_code=res.status_code,
                    duration_ms=t.duration_ms(),
                    target=safe_target,
                    context=context,
                ),
            )
        return res

    if not fatal:
        raise last_exc
    if isinstance(last_exc, requests.Timeout):
        logger.error(
            "%s request timed out after %s seconds",
            context,
            Constants.REQUEST_TIMEOUT,
        )
    else:
        logger.error("%s connection error: %s", context, last_exc)
    sys.exit(ExitCodes.CONNECTION_ERROR.value)


def safe_get(url: str, *, context: str, fatal: bool = True, **kwargs: Any) -> requests.Response:
    """Perform a GET request with consistent error handling.

    Args:
        url: Target URL.
        context: Human-readable source tag for logs (e.g. the repository name).
        fatal: Exit the process on transport failure instead of re-raising.
        **kwargs: Passed through to requests.get.

    Returns:
        requests.Response: The HTTP response object.
    """
    return _send("GET", requests.get, url, context=context, fatal=fatal, **kwargs)


def safe_put(url: str, *, context: str, data: Any = None, fatal: bool = True,
             **kwargs: Any) -> requests.Response:
    """Perform a PUT request with consistent error handling.

    Args:
        url: Target URL.
        context: Human-readable source tag for logs.
        data: Request body (bytes or a file object).
        fatal: Exit the process on transport failure instead of re-raising.
        **kwargs: Passed through to requests.put.

    Returns:
        requests.Response: The HTTP response object.
    """
    return _send("PUT", requests.put, url, context=context, fatal=fatal, data=data, **kwargs)
