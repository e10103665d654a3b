"""Shared HTTP helpers used by the registry client.

Encapsulates request/timeout error handling and the retry policy so the
registry module only deals with status codes and payloads.
"""
from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict, Optional, Tuple

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer
from errors import RegistryUnavailable

logger = logging.getLogger(__name__)


def robust_get(
    url: str,
    *,
    headers: Optional[Dict[str, str]] = None,
    timeout: Optional[float] = None,
    **kwargs: Any
) -> Tuple[int, Dict[str, str], str]:
    """Perform GET request with timeout and retries, with DEBUG traces.

    Connection errors and timeouts are retried up to HTTP_RETRY_MAX times.
    Any HTTP response, including 5xx, is returned to the caller.

    Raises:
        RegistryUnavailable: When every attempt failed at the transport level.
    """
    safe_target = safe_url(url)
    timeout = Constants.REQUEST_TIMEOUT if timeout is None else timeout
    last_exception = None

    for attempt in range(Constants.HTTP_RETRY_MAX):
        if attempt:
            time.sleep(Constants.HTTP_RETRY_BASE_DELAY_SEC * attempt)
        with Timer() as t:
            try:
                if is_debug_enabled(logger):
                    logger.debug(
                        "HTTP request",
                        extra=extra_context(
                            event="http_request",
                            component="http_client",
                            action="GET",
                            target=safe_target,
                            attempt=attempt + 1
                        )
                    )

                response = requests.get(url, timeout=timeout, headers=headers, **kwargs)

                if is_debug_enabled(logger):
                    logger.debug(
                        "HTTP response",
                        extra=extra_context(
                            event="http_response",
                            component="http_client",
                            action="GET",
                            status_code=response.status_code,
                            duration_ms=t.duration_ms(),
                            target=safe_target
                        )
                    )
                return response.status_code, dict(response.headers), response.text

            except requests.Timeout:
                last_exception = f"timed out after {timeout} seconds"
                logger.debug("HTTP timeout on attempt %d for %s", attempt + 1, safe_target)
            except requests.RequestException as exc:  # includes ConnectionError
                last_exception = str(exc)
                logger.debug(
                    "HTTP request exception on attempt %d for %s: %s",
                    attempt + 1, safe_target, exc,
                )

    raise RegistryUnavailable(
        f"Request to {safe_target} failed after {Constants.HTTP_RETRY_MAX} attempts: {last_exception}"
    )


def get_json(
    url: str,
    *,
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any
) -> Tuple[int, Dict[str, str], Optional[Any]]:
    """Perform GET request and parse a JSON response.

    Args:
        url: Target URL
        headers: Optional request headers
        **kwargs: Additional requests.get parameters

    Returns:
        Tuple of (status_code, headers_dict, parsed_json_or_none)
    """
    status_code, response_headers, text = robust_get(url, headers=headers, **kwargs)

    if status_code == 200 and text:
        try:
            return status_code, response_headers, json.loads(text)
        except json.JSONDecodeError:
            logger.debug("JSON decode error for %s", safe_url(url))
            return status_code, response_headers, None

    return status_code, response_headers, None
