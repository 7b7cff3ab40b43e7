"""Immutable value objects for MindCare Assistant domain.

Value objects are immutable (frozen) dataclasses that represent domain
concepts without identity. They are equal if all their attributes are equal.

All value objects use:
- frozen=True: Makes instances immutable
- slots=True: Optimizes memory usage
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from mindcare.domain.enums import MessageSender, RiskTier

if TYPE_CHECKING:
    from collections.abc import Mapping

    from mindcare.domain.enums import QuestionnaireKind


@dataclass(frozen=True, slots=True)
class QuestionnaireDefinition:
    """A fixed, ordered questionnaire.

    Each question is answered with an integer score from 0 to 3.
    """

    kind: QuestionnaireKind
    """Which instrument this is."""

    questions: tuple[str, ...]
    """Question prompts in the order they are asked."""

    canonical_max_score: int
    """Maximum total of the full clinical instrument (shown next to results)."""

    result_messages: Mapping[RiskTier, str]
    """Message shown for each risk tier when the questionnaire completes."""

    def __post_init__(self) -> None:
        """Validate definition.

        Raises:
            ValueError: If there are no questions or a tier has no message.
        """
        if not self.questions:
            raise ValueError(f"{self.kind} must have at least one question")
        missing = [tier.value for tier in RiskTier if tier not in self.result_messages]
        if missing:
            raise ValueError(f"{self.kind} is missing result messages for: {missing}")

    @property
    def question_count(self) -> int:
        """Number of questions asked."""
        return len(self.questions)

    def prompt_for(self, index: int) -> str:
        """Format the prompt for a 0-indexed question as ``Question <n>: <text>``.

        Args:
            index: 0-indexed question position.

        Returns:
            Prompt text with the 1-indexed question number.
        """
        return f"Question {index + 1}: {self.questions[index]}"

    def result_message(self, tier: RiskTier) -> str:
        """Return the completion message for a risk tier."""
        return self.result_messages[tier]


@dataclass(frozen=True, slots=True)
class AssessmentResult:
    """Outcome of a completed questionnaire.

    Produced exactly once per completed session and never mutated.
    """

    kind: QuestionnaireKind
    scores: tuple[int, ...]
    total: int
    tier: RiskTier

    def __post_init__(self) -> None:
        """Validate result consistency.

        Raises:
            ValueError: If total does not equal the sum of scores.
        """
        if self.total != sum(self.scores):
            raise ValueError(f"Total {self.total} does not match sum of scores {self.scores}")

    @property
    def requires_escalation(self) -> bool:
        """Whether a follow-up escalation notice is due."""
        return self.tier.requires_escalation


@dataclass(frozen=True, slots=True)
class ConversationMessage:
    """A single entry in the conversation log."""

    text: str
    sender: MessageSender
    assessment: AssessmentResult | None = None
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def from_user(cls, text: str) -> ConversationMessage:
        """Create a user-authored message."""
        return cls(text=text, sender=MessageSender.USER)

    @classmethod
    def from_bot(cls, text: str, assessment: AssessmentResult | None = None) -> ConversationMessage:
        """Create a bot-authored message, optionally carrying an assessment result."""
        return cls(text=text, sender=MessageSender.BOT, assessment=assessment)

    @property
    def is_user(self) -> bool:
        """Whether the user wrote this message."""
        return self.sender == MessageSender.USER
