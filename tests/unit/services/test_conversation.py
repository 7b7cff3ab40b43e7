"""Tests for the conversation controller and registry."""

from __future__ import annotations

import asyncio
import random

import pytest

from mindcare.config.domain_constants import (
    CANNED_RESPONSES,
    ESCALATION_MESSAGES,
    GREETING,
    RESULT_MESSAGES,
)
from mindcare.domain.enums import MessageSender, QuestionnaireKind, RiskTier
from mindcare.domain.exceptions import ChatResponderError, ConversationNotFoundError
from mindcare.infrastructure.responder.local import LocalResponder
from mindcare.infrastructure.responder.mock import MockChatResponder
from mindcare.infrastructure.responder.protocols import ChatTurn
from mindcare.services.assessment import CLARIFICATION_PROMPT
from mindcare.services.conversation import (
    ConversationController,
    ConversationLog,
    ConversationRegistry,
    detect_assessment_request,
)
from mindcare.domain.value_objects import ConversationMessage

pytestmark = pytest.mark.unit


@pytest.fixture
def responder() -> MockChatResponder:
    return MockChatResponder(replies=["remote reply 1", "remote reply 2"])


@pytest.fixture
def controller(responder: MockChatResponder) -> ConversationController:
    return ConversationController(responder, escalation_delay_seconds=0.02)


class TestDetectAssessmentRequest:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Start PHQ-9 assessment", QuestionnaireKind.PHQ9),
            ("can I do a depression assessment?", QuestionnaireKind.PHQ9),
            ("Start GAD-7 assessment", QuestionnaireKind.GAD7),
            ("I'd like an ANXIETY ASSESSMENT", QuestionnaireKind.GAD7),
            ("I'm feeling anxious", None),
            ("hello", None),
        ],
    )
    def test_detection(self, text: str, expected: QuestionnaireKind | None) -> None:
        assert detect_assessment_request(text) is expected


class TestConversationLog:
    def test_history_pairs_user_with_following_bot(self) -> None:
        log = ConversationLog()
        log.append(ConversationMessage.from_bot("greeting"))
        log.append(ConversationMessage.from_user("u1"))
        log.append(ConversationMessage.from_bot("b1"))
        log.append(ConversationMessage.from_bot("escalation"))
        log.append(ConversationMessage.from_user("u2"))

        assert log.history() == [ChatTurn(user="u1", bot="b1")]

    def test_subscribe_and_unsubscribe(self) -> None:
        log = ConversationLog()
        seen: list[str] = []
        unsubscribe = log.subscribe(lambda m: seen.append(m.text))

        log.append(ConversationMessage.from_bot("one"))
        unsubscribe()
        log.append(ConversationMessage.from_bot("two"))

        assert seen == ["one"]
        assert len(log) == 2


class TestConversationController:
    """Tests for message routing."""

    def test_greets_on_creation(self, controller: ConversationController) -> None:
        (greeting,) = controller.log.messages
        assert greeting.text == GREETING
        assert greeting.sender is MessageSender.BOT

    @pytest.mark.asyncio
    async def test_empty_message_is_ignored(
        self, controller: ConversationController, responder: MockChatResponder
    ) -> None:
        assert await controller.send("   ") == []
        assert len(controller.log) == 1
        assert responder.call_count == 0

    @pytest.mark.asyncio
    async def test_free_text_goes_to_responder_with_history(
        self, controller: ConversationController, responder: MockChatResponder
    ) -> None:
        first = await controller.send("I had a rough day")
        second = await controller.send("thanks")

        assert [m.text for m in first] == ["I had a rough day", "remote reply 1"]
        assert [m.text for m in second] == ["thanks", "remote reply 2"]
        assert responder.requests[0] == ("I had a rough day", ())
        assert responder.requests[1] == (
            "thanks",
            (ChatTurn(user="I had a rough day", bot="remote reply 1"),),
        )

    @pytest.mark.asyncio
    async def test_responder_failure_falls_back_to_local_reply(self) -> None:
        failing = MockChatResponder(error=ChatResponderError("boom"))
        controller = ConversationController(
            failing, fallback=LocalResponder(rng=random.Random(0))
        )

        _, reply = await controller.send("I'm so stressed about exams")

        assert reply.text in CANNED_RESPONSES["stress"]

    @pytest.mark.asyncio
    async def test_assessment_request_starts_questionnaire(
        self, controller: ConversationController, responder: MockChatResponder
    ) -> None:
        _, reply = await controller.send("Start PHQ-9 assessment")

        assert reply.text.startswith("Let's start the PHQ-9 assessment")
        assert controller.session.kind is QuestionnaireKind.PHQ9
        assert responder.call_count == 0

    @pytest.mark.asyncio
    async def test_answers_are_not_sent_to_responder(
        self, controller: ConversationController, responder: MockChatResponder
    ) -> None:
        await controller.send("gad")
        _, reply = await controller.send("I feel great")  # not a number

        assert reply.text == CLARIFICATION_PROMPT
        assert controller.session.question_index == 0
        assert responder.call_count == 0

    @pytest.mark.asyncio
    async def test_scenario_a_high_result_then_escalation(
        self, controller: ConversationController, all_twos: list[str]
    ) -> None:
        controller.start_assessment(QuestionnaireKind.PHQ9)
        for answer in all_twos:
            turn = await controller.send(answer)

        result_message = turn[-1]
        assert result_message.text == RESULT_MESSAGES[QuestionnaireKind.PHQ9][RiskTier.HIGH]
        assert result_message.assessment is not None
        assert result_message.assessment.total == 10
        assert controller.pending_escalations == 1
        assert controller.log.messages[-1] is result_message

        await asyncio.sleep(0.1)

        assert controller.log.messages[-1].text == ESCALATION_MESSAGES[RiskTier.HIGH]
        assert controller.pending_escalations == 0

    @pytest.mark.asyncio
    async def test_scenario_b_low_result_no_escalation(
        self, controller: ConversationController, all_zeros: list[str]
    ) -> None:
        controller.start_assessment(QuestionnaireKind.GAD7)
        for answer in all_zeros:
            await controller.send(answer)
        count = len(controller.log)

        await asyncio.sleep(0.1)

        assert controller.pending_escalations == 0
        assert len(controller.log) == count
        assert controller.log.messages[-1].assessment is not None
        assert controller.log.messages[-1].assessment.tier is RiskTier.LOW

    @pytest.mark.asyncio
    async def test_new_assessment_does_not_cancel_pending_escalation(
        self, controller: ConversationController
    ) -> None:
        controller.start_assessment(QuestionnaireKind.PHQ9)
        for answer in ["3"] * 5:
            await controller.send(answer)
        await controller.send("Start GAD-7 assessment")

        await asyncio.sleep(0.1)

        texts = [m.text for m in controller.log.messages]
        assert ESCALATION_MESSAGES[RiskTier.CRITICAL] in texts
        assert controller.session.kind is QuestionnaireKind.GAD7

    @pytest.mark.asyncio
    async def test_close_cancels_pending_escalations(
        self, controller: ConversationController, all_twos: list[str]
    ) -> None:
        controller.start_assessment(QuestionnaireKind.GAD7)
        for answer in all_twos:
            await controller.send(answer)

        await controller.close()
        await asyncio.sleep(0.1)

        assert ESCALATION_MESSAGES[RiskTier.HIGH] not in [m.text for m in controller.log.messages]


class TestConversationRegistry:
    """Tests for ConversationRegistry."""

    def test_create_and_get(self, responder: MockChatResponder) -> None:
        registry = ConversationRegistry(responder)
        controller = registry.create()

        assert registry.get(controller.conversation_id) is controller
        assert len(registry) == 1

    def test_get_unknown_raises(self, responder: MockChatResponder) -> None:
        with pytest.raises(ConversationNotFoundError):
            ConversationRegistry(responder).get("missing")

    @pytest.mark.asyncio
    async def test_close_forgets_conversation(self, responder: MockChatResponder) -> None:
        registry = ConversationRegistry(responder)
        controller = registry.create()

        await registry.close(controller.conversation_id)

        assert len(registry) == 0
        with pytest.raises(ConversationNotFoundError):
            registry.get(controller.conversation_id)

    @pytest.mark.asyncio
    async def test_close_all(self, responder: MockChatResponder) -> None:
        registry = ConversationRegistry(responder)
        registry.create()
        registry.create()

        await registry.close_all()

        assert len(registry) == 0
