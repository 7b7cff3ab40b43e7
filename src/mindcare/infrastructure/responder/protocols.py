"""Abstract protocols for free-text chat responders.

A responder turns a user message plus prior conversation history into a
reply. Implementations are swapped via configuration (Strategy pattern):
the hosted model, the HTTP chat proxy, or local canned responses.
"""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence


@dataclass(frozen=True, slots=True)
class ChatTurn:
    """One exchange of the conversation history.

    Attributes:
        user: What the user said.
        bot: What the assistant replied.
    """

    user: str
    bot: str

    def as_pair(self) -> list[str]:
        """Wire format: ``[user, bot]``."""
        return [self.user, self.bot]

    @classmethod
    def from_pair(cls, pair: Sequence[str]) -> ChatTurn:
        """Build a turn from a ``[user, bot]`` pair.

        Raises:
            ValueError: If the pair does not have exactly two entries.
        """
        if len(pair) != 2:
            msg = f"History entries must be [user, bot] pairs, got {len(pair)} items"
            raise ValueError(msg)
        return cls(user=str(pair[0]), bot=str(pair[1]))


def history_to_wire(history: Iterable[ChatTurn]) -> list[list[str]]:
    """Serialize history for JSON payloads."""
    return [turn.as_pair() for turn in history]


@runtime_checkable
class ChatResponder(Protocol):
    """Protocol for free-text chat responders.

    Uses structural subtyping - no explicit inheritance required.
    """

    @abstractmethod
    async def respond(self, message: str, history: Sequence[ChatTurn]) -> str:
        """Generate a reply to a user message.

        Args:
            message: The user's message.
            history: Prior exchanges, oldest first.

        Returns:
            Reply text.

        Raises:
            ChatResponderError: If the reply cannot be obtained.
            ChatResponderTimeoutError: If the request times out.
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release responder resources."""
        ...
