"""Tests for domain value objects."""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from mindcare.domain.enums import MessageSender, QuestionnaireKind, RiskTier
from mindcare.domain.value_objects import (
    AssessmentResult,
    ConversationMessage,
    QuestionnaireDefinition,
)

pytestmark = pytest.mark.unit


def _messages() -> dict[RiskTier, str]:
    return {tier: f"{tier} message" for tier in RiskTier}


class TestQuestionnaireDefinition:
    """Tests for QuestionnaireDefinition."""

    def test_question_count(self) -> None:
        definition = QuestionnaireDefinition(
            kind=QuestionnaireKind.GAD7,
            questions=("a?", "b?"),
            canonical_max_score=21,
            result_messages=_messages(),
        )
        assert definition.question_count == 2

    def test_prompt_is_one_indexed(self) -> None:
        definition = QuestionnaireDefinition(
            kind=QuestionnaireKind.GAD7,
            questions=("first?", "second?"),
            canonical_max_score=21,
            result_messages=_messages(),
        )
        assert definition.prompt_for(0) == "Question 1: first?"
        assert definition.prompt_for(1) == "Question 2: second?"

    def test_rejects_empty_questions(self) -> None:
        with pytest.raises(ValueError, match="at least one question"):
            QuestionnaireDefinition(
                kind=QuestionnaireKind.PHQ9,
                questions=(),
                canonical_max_score=27,
                result_messages=_messages(),
            )

    def test_rejects_missing_tier_message(self) -> None:
        messages = _messages()
        del messages[RiskTier.CRITICAL]
        with pytest.raises(ValueError, match="critical"):
            QuestionnaireDefinition(
                kind=QuestionnaireKind.PHQ9,
                questions=("q?",),
                canonical_max_score=27,
                result_messages=messages,
            )


class TestAssessmentResult:
    """Tests for AssessmentResult."""

    def test_is_immutable(self) -> None:
        result = AssessmentResult(
            kind=QuestionnaireKind.PHQ9, scores=(1, 2), total=3, tier=RiskTier.LOW
        )
        with pytest.raises(FrozenInstanceError):
            result.total = 4  # type: ignore[misc]

    def test_total_must_match_scores(self) -> None:
        with pytest.raises(ValueError, match="does not match"):
            AssessmentResult(
                kind=QuestionnaireKind.PHQ9, scores=(1, 2), total=4, tier=RiskTier.LOW
            )

    def test_requires_escalation_follows_tier(self) -> None:
        high = AssessmentResult(
            kind=QuestionnaireKind.GAD7, scores=(2, 2, 2, 2, 2), total=10, tier=RiskTier.HIGH
        )
        low = AssessmentResult(kind=QuestionnaireKind.GAD7, scores=(0,), total=0, tier=RiskTier.LOW)
        assert high.requires_escalation
        assert not low.requires_escalation


class TestConversationMessage:
    """Tests for ConversationMessage."""

    def test_from_user(self) -> None:
        message = ConversationMessage.from_user("hi")
        assert message.sender is MessageSender.USER
        assert message.is_user
        assert message.assessment is None

    def test_from_bot_with_assessment(self) -> None:
        result = AssessmentResult(kind=QuestionnaireKind.PHQ9, scores=(0,), total=0, tier=RiskTier.LOW)
        message = ConversationMessage.from_bot("done", assessment=result)
        assert message.sender is MessageSender.BOT
        assert not message.is_user
        assert message.assessment is result

    def test_ids_are_unique(self) -> None:
        assert ConversationMessage.from_user("a").id != ConversationMessage.from_user("a").id

    def test_timestamp_is_timezone_aware(self) -> None:
        assert ConversationMessage.from_bot("x").timestamp.tzinfo is not None
