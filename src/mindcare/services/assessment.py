"""Structured questionnaire assessment engine.

Drives a PHQ-9 or GAD-7 questionnaire one answer at a time and classifies
the completed total into a risk tier.

States:
    Idle                          session.kind is None
    AwaitingAnswer(kind, index)   session.kind is set, index = next question

The engine holds no conversation state of its own: callers own the
AssessmentSession and pass it into every call.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from mindcare.config.domain_constants import (
    CANONICAL_MAX_SCORES,
    ESCALATION_MESSAGES,
    QUESTIONS,
    RESULT_MESSAGES,
)
from mindcare.domain.enums import QuestionnaireKind, ResponseOption, RiskTier
from mindcare.domain.exceptions import InvalidAnswerFormatError
from mindcare.domain.value_objects import AssessmentResult, QuestionnaireDefinition
from mindcare.infrastructure.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Mapping

    from mindcare.domain.entities import AssessmentSession

logger = get_logger(__name__)

MIN_SCORE = int(ResponseOption.NOT_AT_ALL)
MAX_SCORE = int(ResponseOption.NEARLY_EVERY_DAY)

# Leading-integer parse: "2", " 3 ", "1 - several days", "+0", "003".
# ASCII digits only; leading zeros are split off so the digit run stays short.
_LEADING_INT = re.compile(r"^\s*([+-]?)0*([0-9]+)")

CLARIFICATION_PROMPT = (
    f"Please respond with a number from {MIN_SCORE}-{MAX_SCORE}: {ResponseOption.legend()}"
)


def build_questionnaires() -> Mapping[QuestionnaireKind, QuestionnaireDefinition]:
    """Build the read-only questionnaire table from domain constants."""
    return MappingProxyType(
        {
            kind: QuestionnaireDefinition(
                kind=kind,
                questions=QUESTIONS[kind],
                canonical_max_score=CANONICAL_MAX_SCORES[kind],
                result_messages=MappingProxyType(RESULT_MESSAGES[kind]),
            )
            for kind in QuestionnaireKind
        }
    )


DEFAULT_QUESTIONNAIRES = build_questionnaires()


def parse_answer(raw_input: str) -> int:
    """Parse a free-text answer into a score.

    Leading whitespace and a sign are allowed; anything after the leading
    integer is ignored.

    Args:
        raw_input: Text submitted by the user.

    Returns:
        The score, guaranteed to be within 0-3.

    Raises:
        InvalidAnswerFormatError: If no leading integer is present or it is
            outside 0-3.
    """
    match = _LEADING_INT.match(raw_input)
    if match is None:
        raise InvalidAnswerFormatError(raw_input, MIN_SCORE, MAX_SCORE)
    sign, digits = match.groups()
    if len(digits) > len(str(MAX_SCORE)):
        raise InvalidAnswerFormatError(raw_input, MIN_SCORE, MAX_SCORE)
    value = -int(digits) if sign == "-" else int(digits)
    if not MIN_SCORE <= value <= MAX_SCORE:
        raise InvalidAnswerFormatError(raw_input, MIN_SCORE, MAX_SCORE)
    return value


def classify(kind: QuestionnaireKind, total: int) -> RiskTier:
    """Classify a questionnaire total into a risk tier.

    Both instruments share the same cut-offs; ``kind`` only affects the
    wording chosen later.
    """
    del kind
    return RiskTier.from_total_score(total)


def escalation_message(tier: RiskTier) -> str | None:
    """Return the follow-up escalation text for a tier, or None if not needed."""
    return ESCALATION_MESSAGES.get(tier)


@dataclass(frozen=True, slots=True)
class AnswerOutcome:
    """What happened to a submitted answer.

    Attributes:
        reply: Text the assistant should say next.
        accepted: False if the answer was rejected and must be re-entered.
        result: Set only when the answer completed the questionnaire.
    """

    reply: str
    accepted: bool
    result: AssessmentResult | None = None

    @property
    def completed(self) -> bool:
        """Whether this answer finished the questionnaire."""
        return self.result is not None


class AssessmentEngine:
    """Runs questionnaires against a caller-owned AssessmentSession."""

    def __init__(
        self,
        questionnaires: Mapping[QuestionnaireKind, QuestionnaireDefinition] | None = None,
    ) -> None:
        self._questionnaires = questionnaires or DEFAULT_QUESTIONNAIRES

    def definition(self, kind: QuestionnaireKind) -> QuestionnaireDefinition:
        """Get the questionnaire definition for a kind."""
        return self._questionnaires[kind]

    def start(self, session: AssessmentSession, kind: QuestionnaireKind) -> str:
        """Start a questionnaire and return the intro with the first question.

        Any incomplete questionnaire in ``session`` is discarded.
        """
        if session.is_active:
            logger.info(
                "Abandoning incomplete assessment",
                kind=str(session.kind),
                answered=session.question_index,
            )
        definition = self.definition(kind)
        session.begin(kind)
        logger.info("Assessment started", kind=str(kind), questions=definition.question_count)
        return (
            f"Let's start the {kind} assessment. I'll ask you {definition.question_count} "
            f"questions. Please rate each on a scale of {MIN_SCORE}-{MAX_SCORE}: "
            f"{ResponseOption.legend()}.\n\n{definition.prompt_for(0)}"
        )

    def submit_answer(self, session: AssessmentSession, raw_input: str) -> AnswerOutcome:
        """Record one answer and advance the questionnaire.

        Invalid answers leave ``session`` untouched and return the
        clarification prompt. The final valid answer resets ``session`` to
        idle and returns the AssessmentResult.

        Raises:
            RuntimeError: If no questionnaire is active.
        """
        if session.kind is None:
            raise RuntimeError("No assessment in progress")

        try:
            score = parse_answer(raw_input)
        except InvalidAnswerFormatError:
            return AnswerOutcome(reply=CLARIFICATION_PROMPT, accepted=False)

        definition = self.definition(session.kind)
        session.record(score)

        if session.question_index < definition.question_count:
            return AnswerOutcome(reply=definition.prompt_for(session.question_index), accepted=True)

        result = self._complete(session, definition)
        return AnswerOutcome(
            reply=definition.result_message(result.tier),
            accepted=True,
            result=result,
        )

    def _complete(
        self,
        session: AssessmentSession,
        definition: QuestionnaireDefinition,
    ) -> AssessmentResult:
        scores = tuple(session.scores)
        total = sum(scores)
        result = AssessmentResult(
            kind=definition.kind,
            scores=scores,
            total=total,
            tier=classify(definition.kind, total),
        )
        session.reset()
        logger.info(
            "Assessment completed",
            kind=str(result.kind),
            total=result.total,
            tier=str(result.tier),
            escalate=result.requires_escalation,
        )
        return result
