# server.py
"""MindCare API server.

Serves the chat proxy used by the web client (``POST /api/chat``) and the
conversation endpoints that run structured PHQ-9/GAD-7 assessments.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Annotated, Any, cast

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

import mindcare
from mindcare.config import Settings, get_settings
from mindcare.config.domain_constants import PROXY_ERROR_REPLY
from mindcare.domain.enums import QuestionnaireKind
from mindcare.domain.exceptions import ChatResponderError, ConversationNotFoundError
from mindcare.domain.value_objects import ConversationMessage
from mindcare.infrastructure.logging import get_logger, setup_logging
from mindcare.infrastructure.responder import (
    ChatResponder,
    ChatTurn,
    HostedModelClient,
    create_chat_responder,
)
from mindcare.services.assessment import DEFAULT_QUESTIONNAIRES
from mindcare.services.conversation import ConversationController, ConversationRegistry

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifecycle resources."""
    settings = get_settings()
    setup_logging(settings.logging)

    hosted_model = HostedModelClient(settings.hosted_model)
    responder = create_chat_responder(settings)
    registry = ConversationRegistry(
        responder,
        escalation_delay_seconds=settings.assessment.escalation_delay_seconds,
    )
    try:
        app.state.settings = settings
        app.state.hosted_model = hosted_model
        app.state.responder = responder
        app.state.registry = registry
        logger.info("Server started", responder_backend=settings.responder.backend.value)
        yield
    finally:
        await registry.close_all()
        await responder.close()
        await hosted_model.close()


app = FastAPI(
    title="MindCare Assistant",
    version=mindcare.__version__,
    description="Student mental-health support chatbot with structured screening",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().api.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Dependency Injection ---
def get_app_settings(request: Request) -> Settings:
    """Get initialized Settings."""
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        raise HTTPException(status_code=503, detail="Settings not initialized")
    return cast("Settings", settings)


def get_hosted_model(request: Request) -> ChatResponder:
    """Get the hosted model client used by the chat proxy."""
    client = getattr(request.app.state, "hosted_model", None)
    if client is None:
        raise HTTPException(status_code=503, detail="Hosted model client not initialized")
    return cast("ChatResponder", client)


def get_registry(request: Request) -> ConversationRegistry:
    """Get initialized ConversationRegistry."""
    registry = getattr(request.app.state, "registry", None)
    if registry is None:
        raise HTTPException(status_code=503, detail="Conversation registry not initialized")
    return cast("ConversationRegistry", registry)


def get_conversation(
    conversation_id: str,
    registry: Annotated[ConversationRegistry, Depends(get_registry)],
) -> ConversationController:
    """Resolve a conversation id from the path."""
    try:
        return registry.get(conversation_id)
    except ConversationNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


# --- Request/Response Models ---
class ChatProxyRequest(BaseModel):
    """Chat proxy request: the new message plus ``[user, bot]`` history pairs."""

    message: str = Field(min_length=1)
    history: list[list[str]] = Field(default_factory=list)


class ChatProxyResponse(BaseModel):
    """Chat proxy response."""

    reply: str


class AssessmentSummary(BaseModel):
    """Assessment result attached to a message."""

    type: QuestionnaireKind
    score: int
    max_score: int
    risk: str


class MessageOut(BaseModel):
    """A conversation message."""

    id: str
    text: str
    sender: str
    timestamp: datetime
    assessment: AssessmentSummary | None = None


class ConversationOut(BaseModel):
    """Conversation state."""

    conversation_id: str
    assessment_in_progress: QuestionnaireKind | None
    question_index: int
    messages: list[MessageOut]


class SendMessageRequest(BaseModel):
    """User message."""

    text: str


class StartAssessmentRequest(BaseModel):
    """Start a questionnaire by name (``PHQ-9`` or ``GAD-7``)."""

    kind: QuestionnaireKind


# --- Endpoints ---
@app.get("/health")
async def health_check(
    app_settings: Annotated[Settings, Depends(get_app_settings)],
    registry: Annotated[ConversationRegistry, Depends(get_registry)],
) -> dict[str, Any]:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": mindcare.__version__,
        "responder_backend": app_settings.responder.backend.value,
        "conversations": len(registry),
    }


@app.post("/api/chat", response_model=ChatProxyResponse)
async def chat_proxy(
    request: ChatProxyRequest,
    hosted_model: Annotated[ChatResponder, Depends(get_hosted_model)],
) -> ChatProxyResponse | JSONResponse:
    """Forward a message to the hosted chatbot model."""
    try:
        history = [ChatTurn.from_pair(pair) for pair in request.history]
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    try:
        reply = await hosted_model.respond(request.message, history)
    except ChatResponderError as e:
        logger.error("Chat proxy failed", error=str(e))
        return JSONResponse(status_code=500, content={"reply": PROXY_ERROR_REPLY})
    return ChatProxyResponse(reply=reply)


@app.post("/conversations", response_model=ConversationOut, status_code=201)
async def create_conversation(
    registry: Annotated[ConversationRegistry, Depends(get_registry)],
) -> ConversationOut:
    """Open a conversation; the greeting is its first message."""
    return _conversation_out(registry.create())


@app.get("/conversations/{conversation_id}/messages", response_model=ConversationOut)
async def list_messages(
    conversation: Annotated[ConversationController, Depends(get_conversation)],
) -> ConversationOut:
    """Full conversation log, including escalation notices delivered so far."""
    return _conversation_out(conversation)


@app.post("/conversations/{conversation_id}/messages", response_model=list[MessageOut])
async def send_message(
    request: SendMessageRequest,
    conversation: Annotated[ConversationController, Depends(get_conversation)],
) -> list[MessageOut]:
    """Send a user message; returns the messages added during the turn."""
    messages = await conversation.send(request.text)
    return [_message_out(message) for message in messages]


@app.post("/conversations/{conversation_id}/assessments", response_model=MessageOut)
async def start_assessment(
    request: StartAssessmentRequest,
    conversation: Annotated[ConversationController, Depends(get_conversation)],
) -> MessageOut:
    """Start a questionnaire, abandoning any incomplete one."""
    return _message_out(conversation.start_assessment(request.kind))


@app.delete("/conversations/{conversation_id}", status_code=204)
async def close_conversation(
    conversation_id: str,
    registry: Annotated[ConversationRegistry, Depends(get_registry)],
) -> None:
    """Close a conversation and cancel its pending escalations."""
    try:
        await registry.close(conversation_id)
    except ConversationNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


# --- Helper Functions ---
def _message_out(message: ConversationMessage) -> MessageOut:
    assessment = None
    if message.assessment is not None:
        result = message.assessment
        assessment = AssessmentSummary(
            type=result.kind,
            score=result.total,
            max_score=DEFAULT_QUESTIONNAIRES[result.kind].canonical_max_score,
            risk=result.tier.value,
        )
    return MessageOut(
        id=message.id,
        text=message.text,
        sender=message.sender.value,
        timestamp=message.timestamp,
        assessment=assessment,
    )


def _conversation_out(conversation: ConversationController) -> ConversationOut:
    return ConversationOut(
        conversation_id=conversation.conversation_id,
        assessment_in_progress=conversation.session.kind,
        question_index=conversation.session.question_index,
        messages=[_message_out(message) for message in conversation.log.messages],
    )


if __name__ == "__main__":
    import uvicorn

    api = get_settings().api
    uvicorn.run("server:app", host=api.host, port=api.port, reload=api.reload)
