"""Domain models for structured mental-health screening conversations.

This module provides the core domain layer, containing pure Python objects
with no external dependencies.

Modules:
    enums: Domain enumerations (QuestionnaireKind, RiskTier, etc.)
    value_objects: Immutable value types (AssessmentResult, ConversationMessage, etc.)
    entities: Mutable entities (AssessmentSession)
    exceptions: Domain-specific exceptions

Example:
    >>> from mindcare.domain import RiskTier
    >>> RiskTier.from_total_score(12)
    <RiskTier.HIGH: 'high'>
"""

from mindcare.domain.entities import AssessmentSession
from mindcare.domain.enums import MessageSender, QuestionnaireKind, ResponseOption, RiskTier
from mindcare.domain.exceptions import (
    AssessmentError,
    ChatResponderError,
    ChatResponderParseError,
    ChatResponderTimeoutError,
    ConversationNotFoundError,
    DomainError,
    InvalidAnswerFormatError,
)
from mindcare.domain.value_objects import (
    AssessmentResult,
    ConversationMessage,
    QuestionnaireDefinition,
)

__all__ = [
    "AssessmentError",
    "AssessmentResult",
    "AssessmentSession",
    "ChatResponderError",
    "ChatResponderParseError",
    "ChatResponderTimeoutError",
    "ConversationMessage",
    "ConversationNotFoundError",
    "DomainError",
    "InvalidAnswerFormatError",
    "MessageSender",
    "QuestionnaireDefinition",
    "QuestionnaireKind",
    "ResponseOption",
    "RiskTier",
]
