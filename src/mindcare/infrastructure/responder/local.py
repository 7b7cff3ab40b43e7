"""Offline responder with canned, keyword-matched replies.

Used when no remote model is configured, and as the fallback when the
remote responder fails.
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from mindcare.config.domain_constants import CANNED_RESPONSES, TOPIC_KEYWORDS

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mindcare.infrastructure.responder.protocols import ChatTurn

GENERAL_TOPIC = "general"


def detect_topic(text: str) -> str:
    """Classify a message as anxiety, depression, stress, or general.

    Topics are checked in that order; the first keyword hit wins.
    """
    lowered = text.lower()
    for topic, keywords in TOPIC_KEYWORDS.items():
        if any(keyword in lowered for keyword in keywords):
            return topic
    return GENERAL_TOPIC


class LocalResponder:
    """Chat responder that picks a canned reply for the detected topic."""

    def __init__(self, rng: random.Random | None = None) -> None:
        """Initialize responder.

        Args:
            rng: Random source for picking among replies (seed it in tests).
        """
        self._rng = rng or random.Random()

    def reply_for(self, message: str) -> str:
        """Pick a canned reply for a message (synchronous helper)."""
        return self._rng.choice(CANNED_RESPONSES[detect_topic(message)])

    async def respond(self, message: str, history: Sequence[ChatTurn]) -> str:
        """Return a canned reply. History is not used."""
        del history
        return self.reply_for(message)

    async def close(self) -> None:
        """Nothing to release."""
