"""Mock chat responder for testing.

Provides a test double that returns canned replies (or raises configured
errors) and records every request for assertions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from mindcare.infrastructure.responder.protocols import ChatTurn


class MockChatResponder:
    """Mock responder for testing.

    Example:
        >>> mock = MockChatResponder(replies=["Hello!"])
        >>> reply = await mock.respond("Hi", [])
        >>> assert reply == "Hello!"
        >>> assert mock.call_count == 1
    """

    def __init__(
        self,
        replies: list[str] | None = None,
        reply_function: Callable[[str, Sequence[ChatTurn]], str] | None = None,
        error: Exception | None = None,
    ) -> None:
        """Initialize mock responder.

        Args:
            replies: Replies to return in order.
            reply_function: Custom function to generate replies.
            error: Exception to raise on every call (takes precedence).
        """
        self._replies = list(replies or [])
        self._reply_function = reply_function
        self._error = error
        self._requests: list[tuple[str, tuple[ChatTurn, ...]]] = []
        self.closed = False

    @property
    def call_count(self) -> int:
        """Number of respond calls made."""
        return len(self._requests)

    @property
    def requests(self) -> list[tuple[str, tuple[ChatTurn, ...]]]:
        """Recorded ``(message, history)`` pairs."""
        return self._requests.copy()

    async def respond(self, message: str, history: Sequence[ChatTurn]) -> str:
        """Return the next mock reply."""
        self._requests.append((message, tuple(history)))
        if self._error is not None:
            raise self._error
        if self._reply_function is not None:
            return self._reply_function(message, history)
        if self._replies:
            return self._replies.pop(0)
        return "mock reply"

    async def close(self) -> None:
        """Mark as closed."""
        self.closed = True
