"""Chat responder factory.

Creates a concrete responder based on configuration, keeping backend
selection out of the conversation logic.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mindcare.config import ResponderBackend, Settings
from mindcare.infrastructure.responder.hosted import HostedModelClient
from mindcare.infrastructure.responder.local import LocalResponder
from mindcare.infrastructure.responder.proxy import ProxyChatResponder

if TYPE_CHECKING:
    from mindcare.infrastructure.responder.protocols import ChatResponder


def create_chat_responder(settings: Settings) -> ChatResponder:
    """Create a chat responder based on settings.responder.backend."""
    backend = settings.responder.backend
    if backend == ResponderBackend.HOSTED:
        return HostedModelClient(settings.hosted_model)
    if backend == ResponderBackend.PROXY:
        return ProxyChatResponder(settings.responder)
    if backend == ResponderBackend.LOCAL:
        return LocalResponder()

    msg = f"Unsupported responder backend: {backend}"
    raise ValueError(msg)
