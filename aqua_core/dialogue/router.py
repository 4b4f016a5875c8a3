"""
Intent Router — picks the assistant's reply from an ordered rule table.

Behavioral Contract:
- Lower-cases the input and tests rules in table order
- The first matching rule wins; no match selects the fallback rule
- Total: every input, including None and empty strings, gets a non-empty reply
- Deterministic and stateless; conversation history plays no part
"""

import logging
from typing import Optional, Sequence, Tuple

from aqua_core.dialogue.rules import DEFAULT_RULES, FALLBACK_RULE, IntentRule
from aqua_core.dialogue.templater import ResponseTemplater
from aqua_core.models.dialogue import ResponseContext

logger = logging.getLogger(__name__)


class IntentRouter:
    def __init__(
        self,
        rules: Sequence[IntentRule] = DEFAULT_RULES,
        fallback: IntentRule = FALLBACK_RULE,
        templater: Optional[ResponseTemplater] = None,
    ):
        self._rules: Tuple[IntentRule, ...] = tuple(rules)
        self._fallback = fallback
        self._templater = templater or ResponseTemplater()

    @property
    def rules(self) -> Tuple[IntentRule, ...]:
        return self._rules

    def select(self, text: Optional[str]) -> IntentRule:
        """The first rule whose trigger matches, or the fallback."""
        lowered = (text or "").lower()
        for rule in self._rules:
            if rule.matches(lowered):
                return rule
        return self._fallback

    def respond(
        self,
        text: Optional[str],
        context: Optional[ResponseContext] = None,
    ) -> Tuple[IntentRule, str]:
        """Select a rule and render its reply."""
        rule = self.select(text)
        reply = rule.respond(self._templater, context)
        if not reply:
            # A custom builder returned nothing; the fallback always has text
            rule = self._fallback
            reply = self._fallback.respond(self._templater, context)
        logger.debug("Routed message to rule %s", rule.name)
        return rule, reply
