"""Shared HTTP helpers used by web-backed storage tiers.

Encapsulates request/timeout/retry handling so tier readers avoid
duplicating try/except blocks. Responses are never cached: every tier
listing reflects the mirror at the time of the call.
"""
from __future__ import annotations

import json
import logging
import time
from typing import Any, Optional, Tuple

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Accept": "application/json"}


def _trace(message: str, target: str, **fields: Any) -> None:
    if is_debug_enabled(logger):
        logger.debug(
            message,
            extra=extra_context(event="http", component="http_client", target=target, **fields)
        )


def robust_get(url: str) -> Tuple[int, str]:
    """GET ``url`` as JSON with timeout and retries.

    Server errors (5xx), timeouts and connection failures are retried with
    exponential backoff; any other response is returned as is.

    Returns:
        Tuple of (status_code, text). A status code of 0 means every attempt
        failed; ``text`` then carries the last failure reason.
    """
    target = safe_url(url)
    reason = "no attempt made"

    for attempt in range(1, Constants.HTTP_RETRY_MAX + 1):
        if attempt > 1:
            time.sleep(Constants.HTTP_RETRY_BASE_DELAY_SEC * (2 ** (attempt - 2)))
        with Timer() as t:
            try:
                response = requests.get(url, timeout=Constants.REQUEST_TIMEOUT, headers=JSON_HEADERS)
            except requests.Timeout:
                reason = "timeout"
                _trace("HTTP timeout", target, outcome="timeout", attempt=attempt)
                continue
            except requests.RequestException as exc:
                reason = str(exc)
                _trace("HTTP request exception", target, outcome="request_exception", attempt=attempt)
                continue

        if response.status_code >= 500:
            reason = f"server error {response.status_code}"
            _trace("HTTP server error", target, outcome="server_error",
                   status_code=response.status_code, attempt=attempt)
            continue

        _trace("HTTP response", target, outcome="success",
               status_code=response.status_code, duration_ms=t.duration_ms())
        return response.status_code, response.text

    return 0, f"request failed after {Constants.HTTP_RETRY_MAX} attempts: {reason}"


def get_json(url: str) -> Tuple[int, Optional[Any], str]:
    """GET ``url`` and decode a JSON body.

    Returns:
        Tuple of (status_code, parsed_json_or_none, reason). ``reason`` is
        empty on success and explains why nothing was parsed otherwise.
    """
    status_code, text = robust_get(url)
    if status_code == 0:
        return status_code, None, text
    if status_code != 200:
        return status_code, None, f"unexpected status {status_code}"
    try:
        return status_code, json.loads(text), ""
    except json.JSONDecodeError as exc:
        _trace("JSON decode error", safe_url(url), outcome="json_decode_error")
        return status_code, None, f"invalid JSON: {exc}"
