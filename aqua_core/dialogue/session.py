"""
Dialogue Session — the assistant transcript as an explicit, append-only value.

Each turn takes the transcript so far and returns a new one with the user
message and the reply appended. The input transcript is never mutated and
earlier turns never influence routing.
"""

import asyncio
from typing import Optional, Sequence, Tuple

from aqua_core.dialogue import templates
from aqua_core.dialogue.router import IntentRouter
from aqua_core.models.dialogue import (
    DialogueRole,
    DialogueTurn,
    DialogueTurnResult,
    ResponseContext,
)

QUICK_ACTIONS = templates.QUICK_ACTIONS


def greeting_transcript() -> Tuple[DialogueTurn, ...]:
    """A fresh conversation: just the assistant's greeting."""
    return (DialogueTurn(role=DialogueRole.ASSISTANT, content=templates.GREETING),)


class DialogueSession:
    """Synchronous request → response over an explicit transcript."""

    def __init__(self, router: Optional[IntentRouter] = None):
        self.router = router or IntentRouter()

    def take_turn(
        self,
        transcript: Sequence[DialogueTurn],
        message: Optional[str],
        context: Optional[ResponseContext] = None,
    ) -> DialogueTurnResult:
        content = message or ""
        rule, reply = self.router.respond(content, context)
        extended = tuple(transcript) + (
            DialogueTurn(role=DialogueRole.USER, content=content),
            DialogueTurn(role=DialogueRole.ASSISTANT, content=reply),
        )
        return DialogueTurnResult(reply=reply, rule_name=rule.name, transcript=extended)


class DelayedResponder:
    """
    Adds the "assistant is typing" pause on top of a DialogueSession.

    The delay is presentation only; the reply is computed the same way
    with or without it.
    """

    def __init__(self, session: DialogueSession, delay_seconds: float = 1.0):
        self.session = session
        self.delay_seconds = delay_seconds

    async def reply(
        self,
        transcript: Sequence[DialogueTurn],
        message: Optional[str],
        context: Optional[ResponseContext] = None,
    ) -> DialogueTurnResult:
        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)
        return self.session.take_turn(transcript, message, context)
