"""Application services: assessment engine, escalations, and conversations."""

from mindcare.services.assessment import (
    AnswerOutcome,
    AssessmentEngine,
    classify,
    escalation_message,
    parse_answer,
)
from mindcare.services.conversation import (
    ConversationController,
    ConversationLog,
    ConversationRegistry,
    detect_assessment_request,
)
from mindcare.services.escalation import EscalationScheduler

__all__ = [
    "AnswerOutcome",
    "AssessmentEngine",
    "ConversationController",
    "ConversationLog",
    "ConversationRegistry",
    "EscalationScheduler",
    "classify",
    "detect_assessment_request",
    "escalation_message",
    "parse_answer",
]
