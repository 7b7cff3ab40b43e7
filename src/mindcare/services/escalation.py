"""Delayed escalation notices for high-risk assessment results.

Escalations are fire-and-forget: each one is an ``asyncio`` timer handle
that delivers a bot message after a fixed delay. Starting a new assessment
does not cancel pending escalations; closing the conversation does.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from mindcare.domain.value_objects import ConversationMessage
from mindcare.infrastructure.logging import get_logger
from mindcare.services.assessment import escalation_message

if TYPE_CHECKING:
    from collections.abc import Callable

    from mindcare.domain.value_objects import AssessmentResult

logger = get_logger(__name__)


class EscalationScheduler:
    """Schedules escalation messages on the running event loop."""

    def __init__(
        self,
        deliver: Callable[[ConversationMessage], None],
        delay_seconds: float = 2.0,
    ) -> None:
        """Initialize scheduler.

        Args:
            deliver: Callback that appends the escalation message to the log.
            delay_seconds: Delay between the result and the escalation notice.
        """
        if delay_seconds < 0:
            raise ValueError(f"delay_seconds {delay_seconds} must be >= 0")
        self._deliver = deliver
        self._delay_seconds = delay_seconds
        self._pending: set[asyncio.TimerHandle] = set()

    @property
    def delay_seconds(self) -> float:
        """Configured escalation delay."""
        return self._delay_seconds

    @property
    def pending_count(self) -> int:
        """Number of escalations scheduled but not yet delivered."""
        return len(self._pending)

    def schedule(self, result: AssessmentResult) -> asyncio.TimerHandle | None:
        """Schedule the escalation notice for a result, if its tier needs one.

        Must be called from within a running event loop.

        Returns:
            The timer handle, or None when no escalation is due.
        """
        text = escalation_message(result.tier)
        if text is None:
            return None

        loop = asyncio.get_running_loop()
        message = ConversationMessage.from_bot(text)
        handle: asyncio.TimerHandle

        def _fire() -> None:
            self._pending.discard(handle)
            logger.info("Escalation delivered", tier=str(result.tier), kind=str(result.kind))
            self._deliver(message)

        handle = loop.call_later(self._delay_seconds, _fire)
        self._pending.add(handle)
        logger.info(
            "Escalation scheduled",
            tier=str(result.tier),
            delay_seconds=self._delay_seconds,
        )
        return handle

    def cancel_all(self) -> int:
        """Cancel every pending escalation.

        Returns:
            Number of escalations cancelled.
        """
        cancelled = 0
        for handle in list(self._pending):
            handle.cancel()
            cancelled += 1
        self._pending.clear()
        if cancelled:
            logger.info("Pending escalations cancelled", count=cancelled)
        return cancelled
