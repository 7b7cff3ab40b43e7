"""Domain enumerations for MindCare Assistant.

This module defines core enumerations used throughout the domain layer:
- QuestionnaireKind: The two screening instruments offered in chat
- ResponseOption: Frequency scores (0-3) shared by both instruments
- RiskTier: Risk classification derived from a questionnaire total
- MessageSender: Author of a conversation message
"""

from __future__ import annotations

from enum import IntEnum, StrEnum


class QuestionnaireKind(StrEnum):
    """Screening questionnaires the assistant can run.

    Values match the display names users type and see in the chat.
    """

    PHQ9 = "PHQ-9"
    """Patient Health Questionnaire (depression)."""

    GAD7 = "GAD-7"
    """Generalized Anxiety Disorder scale (anxiety)."""

    @property
    def topic(self) -> str:
        """Symptom domain screened by this questionnaire."""
        return "depression" if self is QuestionnaireKind.PHQ9 else "anxiety"


class ResponseOption(IntEnum):
    """Answer score for a single question (frequency over past 2 weeks)."""

    NOT_AT_ALL = 0
    """Not at all."""

    SEVERAL_DAYS = 1
    """Several days."""

    MORE_THAN_HALF = 2
    """More than half the days."""

    NEARLY_EVERY_DAY = 3
    """Nearly every day."""

    @property
    def label(self) -> str:
        """Human-readable label shown in the scale legend."""
        return _RESPONSE_LABELS[self]

    @classmethod
    def legend(cls) -> str:
        """Return the scale legend, e.g. ``0 = Not at all, 1 = Several days, ...``."""
        return ", ".join(f"{option.value} = {option.label}" for option in cls)


_RESPONSE_LABELS: dict[ResponseOption, str] = {
    ResponseOption.NOT_AT_ALL: "Not at all",
    ResponseOption.SEVERAL_DAYS: "Several days",
    ResponseOption.MORE_THAN_HALF: "More than half the days",
    ResponseOption.NEARLY_EVERY_DAY: "Nearly every day",
}


class RiskTier(StrEnum):
    """Risk tier derived from a questionnaire total score.

    Thresholds are shared by PHQ-9 and GAD-7:
    - Low (0-4)
    - Medium (5-9)
    - High (10-14)
    - Critical (15+)
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @classmethod
    def from_total_score(cls, total: int) -> RiskTier:
        """Determine the risk tier for a total score.

        Args:
            total: Sum of the collected answer scores.

        Returns:
            RiskTier corresponding to the total.
        """
        if total <= 4:
            return cls.LOW
        if total <= 9:
            return cls.MEDIUM
        if total <= 14:
            return cls.HIGH
        return cls.CRITICAL

    @property
    def requires_escalation(self) -> bool:
        """Whether this tier triggers a follow-up escalation notice."""
        return self in (RiskTier.HIGH, RiskTier.CRITICAL)


class MessageSender(StrEnum):
    """Author of a conversation message."""

    USER = "user"
    BOT = "bot"
