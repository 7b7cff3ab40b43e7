"""Client for a MindCare chat proxy (``POST /api/chat``)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx

from mindcare.domain.exceptions import ChatResponderParseError
from mindcare.infrastructure.responder.http import post_json
from mindcare.infrastructure.responder.protocols import history_to_wire

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mindcare.config import ResponderSettings
    from mindcare.infrastructure.responder.protocols import ChatTurn


class ProxyChatResponder:
    """Chat responder that goes through the ``{message, history}`` -> ``{reply}`` proxy."""

    def __init__(self, settings: ResponderSettings) -> None:
        self._url = settings.proxy_url
        self._timeout = settings.timeout_seconds
        self._client = httpx.AsyncClient(timeout=httpx.Timeout(self._timeout))

    async def __aenter__(self) -> ProxyChatResponder:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def respond(self, message: str, history: Sequence[ChatTurn]) -> str:
        """Forward a message to the proxy and return its reply.

        Raises:
            ChatResponderTimeoutError: If the request times out.
            ChatResponderError: If the request fails (including proxy 500s).
            ChatResponderParseError: If ``reply`` is missing or not text.
        """
        payload = {"message": message, "history": history_to_wire(history)}
        data = await post_json(self._client, self._url, payload, self._timeout)

        reply = data.get("reply") if isinstance(data, dict) else None
        if not isinstance(reply, str):
            raise ChatResponderParseError(str(data)[:200], "missing 'reply' string")
        return reply
