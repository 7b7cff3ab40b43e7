"""Domain-specific exceptions for MindCare Assistant.

This module defines a hierarchical exception system for domain errors:

    DomainError (base)
    ├── AssessmentError
    │   └── InvalidAnswerFormatError
    ├── ConversationNotFoundError
    └── ChatResponderError
        ├── ChatResponderParseError
        └── ChatResponderTimeoutError
"""

from __future__ import annotations


class DomainError(Exception):
    """Base class for domain errors.

    All domain-specific exceptions should inherit from this class
    to allow for catching all domain errors with a single except clause.
    """


class AssessmentError(DomainError):
    """Errors during a structured questionnaire assessment."""


class InvalidAnswerFormatError(AssessmentError):
    """Raised when an answer is not an integer in the accepted range.

    Always recovered inside the assessment engine: the session is left
    untouched and the user is asked to answer again.
    """

    def __init__(self, raw_input: str, minimum: int = 0, maximum: int = 3) -> None:
        """Initialize with the rejected input and the accepted range.

        Args:
            raw_input: The text the user submitted.
            minimum: Lowest accepted score.
            maximum: Highest accepted score.
        """
        self.raw_input = raw_input
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(f"Answer must be an integer from {minimum} to {maximum}")


class ConversationNotFoundError(DomainError):
    """Raised when a conversation id is unknown."""

    def __init__(self, conversation_id: str) -> None:
        self.conversation_id = conversation_id
        super().__init__(f"Conversation not found: {conversation_id}")


class ChatResponderError(DomainError):
    """Errors from chat responder interactions.

    Base class for errors that occur while talking to the remote
    chatbot model or the chat proxy.
    """


class ChatResponderParseError(ChatResponderError):
    """Raised when a responder reply cannot be parsed.

    Indicates that the remote service answered, but not with the
    expected JSON shape.
    """

    def __init__(self, raw_response: str, parse_error: str) -> None:
        """Initialize with the raw response and parse error.

        Args:
            raw_response: The raw body returned by the remote service.
            parse_error: Description of the parsing failure.
        """
        self.raw_response = raw_response
        self.parse_error = parse_error
        super().__init__(f"Failed to parse responder reply: {parse_error}")


class ChatResponderTimeoutError(ChatResponderError):
    """Raised when a responder request times out."""

    def __init__(self, timeout_seconds: float) -> None:
        """Initialize with the timeout duration.

        Args:
            timeout_seconds: The timeout duration in seconds.
        """
        self.timeout_seconds = timeout_seconds
        super().__init__(f"Chat responder timed out after {timeout_seconds}s")
