"""Chat responder infrastructure.

Abstractions for generating free-text replies, with interchangeable
implementations: the hosted chatbot model, the HTTP chat proxy, local canned
responses, and a mock for tests.
"""

from mindcare.infrastructure.responder.factory import create_chat_responder
from mindcare.infrastructure.responder.hosted import HostedModelClient
from mindcare.infrastructure.responder.local import LocalResponder, detect_topic
from mindcare.infrastructure.responder.mock import MockChatResponder
from mindcare.infrastructure.responder.protocols import ChatResponder, ChatTurn, history_to_wire
from mindcare.infrastructure.responder.proxy import ProxyChatResponder

__all__ = [
    "ChatResponder",
    "ChatTurn",
    "HostedModelClient",
    "LocalResponder",
    "MockChatResponder",
    "ProxyChatResponder",
    "create_chat_responder",
    "detect_topic",
    "history_to_wire",
]
