"""Client for the hosted chatbot model.

The model is served as a Gradio Space. Its ``respond`` endpoint takes the
positional inputs ``[message, history, max_tokens]`` and returns the reply
as the first element of ``data``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx

from mindcare.domain.exceptions import ChatResponderParseError
from mindcare.infrastructure.logging import get_logger
from mindcare.infrastructure.responder.http import post_json
from mindcare.infrastructure.responder.protocols import history_to_wire

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mindcare.config import HostedModelSettings
    from mindcare.infrastructure.responder.protocols import ChatTurn

logger = get_logger(__name__)


class HostedModelClient:
    """Chat responder backed by the hosted chatbot model.

    Example:
        >>> from mindcare.config import HostedModelSettings
        >>> async with HostedModelClient(HostedModelSettings()) as client:
        ...     reply = await client.respond("I can't sleep", [])
    """

    def __init__(self, settings: HostedModelSettings) -> None:
        self._predict_url = settings.predict_url
        self._max_tokens = settings.max_tokens
        self._timeout = settings.timeout_seconds
        self._client = httpx.AsyncClient(timeout=httpx.Timeout(self._timeout))

    async def __aenter__(self) -> HostedModelClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def respond(self, message: str, history: Sequence[ChatTurn]) -> str:
        """Ask the hosted model for a reply.

        Raises:
            ChatResponderTimeoutError: If the request times out.
            ChatResponderError: If the request fails.
            ChatResponderParseError: If the reply is missing or not text.
        """
        payload = {"data": [message, history_to_wire(history), self._max_tokens]}
        logger.debug("Sending hosted model request", history_turns=len(history))

        data = await post_json(self._client, self._predict_url, payload, self._timeout)

        try:
            reply = data["data"][0]
        except (KeyError, IndexError, TypeError) as e:
            raise ChatResponderParseError(str(data)[:200], f"missing data[0]: {e}") from e
        if not isinstance(reply, str):
            raise ChatResponderParseError(str(data)[:200], "data[0] is not a string")
        return reply
