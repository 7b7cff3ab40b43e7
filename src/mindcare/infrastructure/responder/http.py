"""Shared HTTP plumbing for remote responders."""

from __future__ import annotations

from typing import Any

import httpx

from mindcare.domain.exceptions import (
    ChatResponderError,
    ChatResponderParseError,
    ChatResponderTimeoutError,
)
from mindcare.infrastructure.logging import get_logger

logger = get_logger(__name__)


async def post_json(
    client: httpx.AsyncClient,
    url: str,
    payload: dict[str, Any],
    timeout_seconds: float,
) -> Any:
    """POST a JSON payload and return the decoded JSON body.

    Response bodies are never logged; replies may contain user disclosures.

    Raises:
        ChatResponderTimeoutError: If the request times out.
        ChatResponderError: On transport errors or non-2xx status.
        ChatResponderParseError: If the body is not JSON.
    """
    try:
        response = await client.post(url, json=payload, timeout=timeout_seconds)
        response.raise_for_status()
    except httpx.TimeoutException as e:
        logger.error("Responder request timed out", url=url, timeout=timeout_seconds)
        raise ChatResponderTimeoutError(timeout_seconds) from e
    except httpx.HTTPStatusError as e:
        logger.error(
            "Responder request failed",
            url=url,
            status_code=e.response.status_code,
            response_length=len(e.response.text),
        )
        raise ChatResponderError(
            f"HTTP {e.response.status_code}: response body redacted"
        ) from e
    except httpx.RequestError as e:
        logger.error("Responder request error", url=url, error=str(e))
        raise ChatResponderError(f"Request failed: {e}") from e

    try:
        return response.json()
    except ValueError as e:
        logger.error("Responder returned non-JSON body", url=url, raw_length=len(response.text))
        raise ChatResponderParseError(response.text, str(e)) from e
