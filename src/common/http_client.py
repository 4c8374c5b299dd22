"""HTTP transport for the remote API.

One entry point, :func:`post_json`, owns the whole request cycle: transport
failures end the run with ``ExitCodes.CONNECTION_ERROR``, while answers the
API did give but that cannot be used (non-2xx status, non-JSON body) raise
``ApiError`` for the caller to report.
"""
from __future__ import annotations

import logging
import sys
from typing import Any, Optional, Tuple

import requests

from constants import Constants, ExitCodes
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer
from errors import ApiError

logger = logging.getLogger(__name__)


def _decode(res: requests.Response) -> Any:
    if not 200 <= res.status_code < 300:
        raise ApiError(res.status_code, res.text)
    try:
        return res.json()
    except ValueError as exc:
        raise ApiError(res.status_code, res.text) from exc


def post_json(
    url: str,
    payload: Any,
    *,
    context: str,
    auth: Optional[Tuple[str, str]] = None,
) -> Any:
    """POST ``payload`` as JSON and return the decoded JSON answer.

    Args:
        url: Target URL.
        payload: JSON-serializable request body.
        context: Human-readable source tag for logs (e.g., "push").
        auth: Optional basic-auth pair.

    Raises:
        ApiError: On a non-2xx status or a body that is not JSON.
        SystemExit: On timeouts and connection errors.
    """
    safe_target = safe_url(url)
    with Timer() as t:
        try:
            res = requests.post(
                url,
                json=payload,
                auth=auth,
                headers={"Accept": "application/json"},
                timeout=Constants.REQUEST_TIMEOUT,
            )
        except requests.Timeout:
            logger.error(
                "%s request to %s timed out after %s seconds",
                context,
                safe_target,
                Constants.REQUEST_TIMEOUT,
            )
            sys.exit(ExitCodes.CONNECTION_ERROR.value)
        except requests.RequestException as exc:  # includes ConnectionError
            logger.error("%s connection error: %s", context, exc)
            sys.exit(ExitCodes.CONNECTION_ERROR.value)

    if is_debug_enabled(logger):
        logger.debug(
            "HTTP response",
            extra=extra_context(
                event="http_response",
                component="http_client",
                action="POST",
                outcome="success" if res.ok else "error",
                status_code=res.status_code,
                duration_ms=t.duration_ms(),
                target=safe_target,
                context=context,
            ),
        )
    return _decode(res)
