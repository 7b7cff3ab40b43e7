"""Conversation controller.

Owns the per-conversation state (message log and AssessmentSession) and
routes each user message:

1. While a questionnaire is active, the message is an answer and goes to
   the AssessmentEngine.
2. Messages asking for an assessment ("phq", "gad", ...) start one.
3. Everything else goes to the configured chat responder, falling back to
   local canned replies if the responder fails.
"""

from __future__ import annotations

import asyncio
import uuid
from typing import TYPE_CHECKING

from mindcare.config.domain_constants import ASSESSMENT_TRIGGERS, GREETING
from mindcare.domain.entities import AssessmentSession
from mindcare.domain.exceptions import ChatResponderError, ConversationNotFoundError
from mindcare.domain.value_objects import ConversationMessage
from mindcare.infrastructure.logging import conversation_context, get_logger
from mindcare.infrastructure.responder.local import LocalResponder
from mindcare.infrastructure.responder.protocols import ChatTurn
from mindcare.services.assessment import AssessmentEngine
from mindcare.services.escalation import EscalationScheduler

if TYPE_CHECKING:
    from collections.abc import Callable

    from mindcare.domain.enums import QuestionnaireKind
    from mindcare.infrastructure.responder.protocols import ChatResponder

logger = get_logger(__name__)


def detect_assessment_request(text: str) -> QuestionnaireKind | None:
    """Return the questionnaire a message asks for, if any.

    PHQ-9 triggers are checked before GAD-7 triggers.
    """
    lowered = text.lower()
    for kind, triggers in ASSESSMENT_TRIGGERS.items():
        if any(trigger in lowered for trigger in triggers):
            return kind
    return None


class ConversationLog:
    """Ordered, append-only list of conversation messages.

    Listeners are called synchronously for every appended message,
    including escalation notices delivered later by timers.
    """

    def __init__(self) -> None:
        self._messages: list[ConversationMessage] = []
        self._listeners: list[Callable[[ConversationMessage], None]] = []

    def __len__(self) -> int:
        return len(self._messages)

    @property
    def messages(self) -> tuple[ConversationMessage, ...]:
        """Snapshot of all messages, oldest first."""
        return tuple(self._messages)

    def append(self, message: ConversationMessage) -> None:
        """Append a message and notify listeners."""
        self._messages.append(message)
        for listener in list(self._listeners):
            listener(message)

    def subscribe(self, listener: Callable[[ConversationMessage], None]) -> Callable[[], None]:
        """Register a listener.

        Returns:
            A callable that unregisters the listener.
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def history(self) -> list[ChatTurn]:
        """Pair each user message with the bot reply that directly follows it.

        Bot messages with no preceding user message (the greeting, delayed
        escalations) are skipped.
        """
        turns: list[ChatTurn] = []
        pending_user: str | None = None
        for message in self._messages:
            if message.is_user:
                pending_user = message.text
            elif pending_user is not None:
                turns.append(ChatTurn(user=pending_user, bot=message.text))
                pending_user = None
        return turns


class ConversationController:
    """Drives one conversation: assessments, free-text chat, and escalations."""

    def __init__(
        self,
        responder: ChatResponder,
        *,
        engine: AssessmentEngine | None = None,
        escalation_delay_seconds: float = 2.0,
        fallback: LocalResponder | None = None,
        conversation_id: str | None = None,
        greeting: str = GREETING,
    ) -> None:
        """Initialize a conversation and post the greeting.

        Args:
            responder: Responder for free-text messages.
            engine: Assessment engine (a default one is created if omitted).
            escalation_delay_seconds: Delay before escalation notices.
            fallback: Local responder used when ``responder`` fails.
            conversation_id: Identifier (random if omitted).
            greeting: First bot message.
        """
        self.conversation_id = conversation_id or uuid.uuid4().hex
        self.session = AssessmentSession()
        self.log = ConversationLog()
        self._responder = responder
        self._engine = engine or AssessmentEngine()
        self._fallback = fallback or LocalResponder()
        self._escalations = EscalationScheduler(self.log.append, escalation_delay_seconds)
        self._turn_lock = asyncio.Lock()
        self.log.append(ConversationMessage.from_bot(greeting))

    @property
    def pending_escalations(self) -> int:
        """Escalation notices scheduled but not yet delivered."""
        return self._escalations.pending_count

    def start_assessment(self, kind: QuestionnaireKind) -> ConversationMessage:
        """Start a questionnaire directly (e.g. from a quick-reply button).

        Any incomplete questionnaire is abandoned; pending escalations from
        earlier results still fire.
        """
        with conversation_context(self.conversation_id):
            reply = ConversationMessage.from_bot(self._engine.start(self.session, kind))
            self.log.append(reply)
        return reply

    async def send(self, text: str) -> list[ConversationMessage]:
        """Process one user message.

        Empty or whitespace-only messages are ignored.

        Returns:
            Messages appended during this turn (user message first).
        """
        if not text.strip():
            return []

        async with self._turn_lock:
            with conversation_context(self.conversation_id):
                return await self._handle(text)

    async def _handle(self, text: str) -> list[ConversationMessage]:
        history = self.log.history()
        user_message = ConversationMessage.from_user(text)
        self.log.append(user_message)

        if self.session.is_active:
            outcome = self._engine.submit_answer(self.session, text)
            reply = ConversationMessage.from_bot(outcome.reply, assessment=outcome.result)
            self.log.append(reply)
            if outcome.result is not None:
                self._escalations.schedule(outcome.result)
            return [user_message, reply]

        kind = detect_assessment_request(text)
        if kind is not None:
            reply = ConversationMessage.from_bot(self._engine.start(self.session, kind))
        else:
            reply = ConversationMessage.from_bot(await self._respond(text, history))
        self.log.append(reply)
        return [user_message, reply]

    async def _respond(self, text: str, history: list[ChatTurn]) -> str:
        try:
            return await self._responder.respond(text, history)
        except ChatResponderError as e:
            logger.warning("Chat responder failed, using local reply", error=str(e))
            return self._fallback.reply_for(text)

    async def close(self) -> None:
        """Cancel pending escalations. The responder is not closed here."""
        self._escalations.cancel_all()


class ConversationRegistry:
    """In-memory conversations keyed by id, sharing one responder."""

    def __init__(
        self,
        responder: ChatResponder,
        *,
        engine: AssessmentEngine | None = None,
        escalation_delay_seconds: float = 2.0,
    ) -> None:
        self._responder = responder
        self._engine = engine or AssessmentEngine()
        self._escalation_delay_seconds = escalation_delay_seconds
        self._conversations: dict[str, ConversationController] = {}

    def __len__(self) -> int:
        return len(self._conversations)

    def create(self) -> ConversationController:
        """Open a new conversation."""
        controller = ConversationController(
            self._responder,
            engine=self._engine,
            escalation_delay_seconds=self._escalation_delay_seconds,
        )
        self._conversations[controller.conversation_id] = controller
        logger.info("Conversation opened", conversation_id=controller.conversation_id)
        return controller

    def get(self, conversation_id: str) -> ConversationController:
        """Look up a conversation.

        Raises:
            ConversationNotFoundError: If the id is unknown.
        """
        try:
            return self._conversations[conversation_id]
        except KeyError:
            raise ConversationNotFoundError(conversation_id) from None

    async def close(self, conversation_id: str) -> None:
        """Close and forget a conversation.

        Raises:
            ConversationNotFoundError: If the id is unknown.
        """
        controller = self.get(conversation_id)
        await controller.close()
        del self._conversations[conversation_id]
        logger.info("Conversation closed", conversation_id=conversation_id)

    async def close_all(self) -> None:
        """Close every conversation (application shutdown)."""
        for conversation_id in list(self._conversations):
            await self.close(conversation_id)
