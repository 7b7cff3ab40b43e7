"""Interactive console chat for MindCare Assistant."""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import TYPE_CHECKING

import mindcare
from mindcare.config import ResponderBackend, get_settings
from mindcare.infrastructure.logging import setup_logging
from mindcare.infrastructure.responder import create_chat_responder
from mindcare.services.assessment import DEFAULT_QUESTIONNAIRES
from mindcare.services.conversation import ConversationController

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mindcare.domain.value_objects import ConversationMessage

EXIT_COMMANDS = frozenset({"quit", "exit"})


def format_message(message: ConversationMessage) -> str:
    """Render a bot message for the console, including any assessment score."""
    text = f"bot> {message.text}"
    result = message.assessment
    if result is not None:
        max_score = DEFAULT_QUESTIONNAIRES[result.kind].canonical_max_score
        text += f"\n     [{result.kind} Score: {result.total}/{max_score} ({result.tier} risk)]"
    return text


async def main_async(args: argparse.Namespace) -> int:
    """Run the chat loop until EOF or an exit command."""
    settings = get_settings()
    setup_logging(settings.logging.model_copy(update={"level": args.log_level}))

    if args.backend is not None:
        settings = settings.model_copy(
            update={
                "responder": settings.responder.model_copy(
                    update={"backend": ResponderBackend(args.backend)}
                )
            }
        )

    delay = (
        args.escalation_delay
        if args.escalation_delay is not None
        else settings.assessment.escalation_delay_seconds
    )
    responder = create_chat_responder(settings)
    controller = ConversationController(responder, escalation_delay_seconds=delay)

    def _print_bot(message: ConversationMessage) -> None:
        if not message.is_user:
            print(format_message(message), flush=True)

    print(f"MindCare Assistant v{mindcare.__version__} (type 'quit' to leave)")
    for message in controller.log.messages:
        _print_bot(message)
    controller.log.subscribe(_print_bot)

    try:
        while True:
            try:
                text = await asyncio.to_thread(input, "you> ")
            except EOFError:
                break
            if text.strip().lower() in EXIT_COMMANDS:
                break
            await controller.send(text)
    finally:
        await controller.close()
        await responder.close()

    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Chat with the MindCare support assistant in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Chat using the configured responder
    mindcare-chat

    # Offline, canned replies only
    mindcare-chat --backend local

Environment Variables:
    RESPONDER_BACKEND: hosted, proxy, or local (default: hosted)
    RESPONDER_PROXY_URL: Chat proxy endpoint (default: http://127.0.0.1:3001/api/chat)
    ASSESSMENT_ESCALATION_DELAY_SECONDS: Delay before escalation notices (default: 2.0)
        """,
    )
    parser.add_argument(
        "--backend",
        choices=[backend.value for backend in ResponderBackend],
        default=None,
        help="Override responder backend",
    )
    parser.add_argument(
        "--escalation-delay",
        type=float,
        default=None,
        help="Override escalation delay in seconds",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Log level (logs share stdout with the chat)",
    )
    args = parser.parse_args(argv)

    return asyncio.run(main_async(args))


if __name__ == "__main__":
    sys.exit(main())
