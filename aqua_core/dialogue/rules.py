"""
Intent rule table for the assistant.

Each rule pairs a predicate over the lower-cased message with a response
builder. Order is priority: the first matching rule wins, so multi-keyword
rules sit above the single-keyword rules they would otherwise be shadowed by.
"""

from typing import Callable, Iterable, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from aqua_core.dialogue import templates
from aqua_core.dialogue.templater import ResponseTemplater
from aqua_core.models.dialogue import ResponseContext

ResponseBuilder = Callable[[ResponseTemplater, Optional[ResponseContext]], str]


class KeywordTrigger(BaseModel):
    """Substring trigger. `mode="any"` needs one keyword, `mode="all"` needs every one."""

    model_config = ConfigDict(frozen=True)

    keywords: Tuple[str, ...]
    mode: Literal["any", "all"] = "any"

    def __call__(self, text: str) -> bool:
        if self.mode == "all":
            return all(k in text for k in self.keywords)
        return any(k in text for k in self.keywords)


def any_of(*keywords: str) -> KeywordTrigger:
    return KeywordTrigger(keywords=tuple(k.lower() for k in keywords), mode="any")


def all_of(*keywords: str) -> KeywordTrigger:
    return KeywordTrigger(keywords=tuple(k.lower() for k in keywords), mode="all")


def static(text: str) -> ResponseBuilder:
    """Builder for a response that ignores context."""

    def build(templater: ResponseTemplater, context: Optional[ResponseContext]) -> str:
        return templater.render(text, templater.context_values(context))

    return build


class IntentRule:
    """One row of the decision table."""

    def __init__(
        self,
        name: str,
        predicate: Callable[[str], bool],
        respond: ResponseBuilder,
    ):
        self.name = name
        self.predicate = predicate
        self.respond = respond

    def matches(self, text: str) -> bool:
        return bool(self.predicate(text))

    def __repr__(self) -> str:
        return f"IntentRule({self.name!r})"


FALLBACK_RULE = IntentRule(
    name="fallback",
    predicate=lambda text: True,
    respond=static(templates.FALLBACK),
)


def _pollution_level(templater: ResponseTemplater, context: Optional[ResponseContext]) -> str:
    return templater.render_pollution_level(context)


def _complaint(templater: ResponseTemplater, context: Optional[ResponseContext]) -> str:
    return templater.render_complaint(context)


DEFAULT_RULES: Tuple[IntentRule, ...] = (
    IntentRule("pollution_level", all_of("pollution", "level"), _pollution_level),
    IntentRule("complaint_email", any_of("complaint", "email"), _complaint),
    IntentRule("safety", any_of("safety", "protection"), static(templates.SAFETY)),
    IntentRule("metrics", any_of("metric", "read"), static(templates.METRICS)),
    IntentRule("report_submission", any_of("report", "submit"), static(templates.REPORT_SUBMISSION)),
    IntentRule("prediction", any_of("predict", "forecast"), static(templates.PREDICTION)),
)


def rule_names(rules: Iterable[IntentRule]) -> Tuple[str, ...]:
    return tuple(rule.name for rule in rules)
