"""Tests for the intent router, templater and dialogue session."""

import asyncio
from datetime import datetime

import pytest
from pydantic import ValidationError

from aqua_core.dialogue import templates
from aqua_core.dialogue.router import IntentRouter
from aqua_core.dialogue.rules import (
    DEFAULT_RULES,
    IntentRule,
    KeywordTrigger,
    all_of,
    any_of,
    rule_names,
    static,
)
from aqua_core.dialogue.session import (
    QUICK_ACTIONS,
    DelayedResponder,
    DialogueSession,
    greeting_transcript,
)
from aqua_core.dialogue.templater import ResponseTemplater
from aqua_core.models.dialogue import DialogueRole, ResponseContext
from aqua_core.models.organization import Organization
from aqua_core.models.pollution import PollutionMetric


def _make_metric() -> PollutionMetric:
    now = datetime(2024, 6, 1, 8, 30)
    return PollutionMetric(
        id="metric_juhu",
        location_lat=19.0988,
        location_lng=72.8267,
        location_name="Juhu Beach",
        plastic_density_index=74,
        water_clarity_level="Poor",
        microplastic_count=2100,
        pollution_trend="Rising",
        last_updated=now,
        created_at=now,
    )


@pytest.fixture
def router():
    return IntentRouter()


class TestKeywordTriggers:
    def test_any_of(self):
        trigger = any_of("complaint", "email")
        assert trigger("send an email")
        assert trigger("i have a complaint")
        assert not trigger("hello")

    def test_all_of(self):
        trigger = all_of("pollution", "level")
        assert trigger("pollution level")
        assert not trigger("pollution only")
        assert not trigger("level only")

    def test_keywords_lowercased(self):
        assert any_of("Forecast")("forecast please")

    def test_unknown_mode_rejected(self):
        with pytest.raises(ValidationError):
            KeywordTrigger(keywords=("pollution", "level"), mode="ALL")


class TestIntentRouter:
    def test_pollution_level(self, router):
        rule, reply = router.respond("What's the pollution level here?")
        assert rule.name == "pollution_level"
        assert reply == templates.POLLUTION_LEVEL

    def test_complaint(self, router):
        rule, reply = router.respond("draft a complaint")
        assert rule.name == "complaint_email"
        assert "Subject: Urgent: Pollution Report at [Location]" in reply

    def test_fallback(self, router):
        rule, reply = router.respond("asdkjhasd")
        assert rule.name == "fallback"
        assert reply == templates.FALLBACK

    @pytest.mark.parametrize("text", ["", None, "   ", "\n"])
    def test_empty_input_gets_fallback(self, router, text):
        rule, reply = router.respond(text)
        assert rule.name == "fallback"
        assert reply

    def test_case_insensitive(self, router):
        assert router.select("SAFETY FIRST").name == "safety"

    @pytest.mark.parametrize("text,expected", [
        ("What safety measures should I take?", "safety"),
        ("How do I read the metrics?", "metrics"),
        ("How do I submit something?", "report_submission"),
        ("Show me the forecast", "prediction"),
        ("Explain my area's pollution level", "pollution_level"),
        ("Draft a complaint email", "complaint_email"),
    ])
    def test_default_table(self, router, text, expected):
        assert router.select(text).name == expected

    def test_earlier_rule_wins(self, router):
        # "email" (rule 2) and "safety" (rule 3) both present
        assert router.select("email me safety tips").name == "complaint_email"
        # "metric" (rule 4) and "report" (rule 5) both present
        assert router.select("report the metric").name == "metrics"

    def test_pollution_alone_does_not_match_level_rule(self, router):
        assert router.select("pollution report").name == "report_submission"

    def test_deterministic(self, router):
        replies = {router.respond("forecast for tomorrow")[1] for _ in range(5)}
        assert len(replies) == 1

    def test_custom_table_order(self):
        first = IntentRule("first", any_of("water"), static("first"))
        second = IntentRule("second", any_of("water"), static("second"))
        assert IntentRouter(rules=[first, second]).respond("water")[1] == "first"
        assert IntentRouter(rules=[second, first]).respond("water")[1] == "second"

    def test_empty_builder_falls_back(self):
        silent = IntentRule("silent", any_of("hush"), lambda templater, context: "")
        rule, reply = IntentRouter(rules=[silent]).respond("hush")
        assert rule.name == "fallback"
        assert reply == templates.FALLBACK

    def test_default_rule_order(self):
        assert rule_names(DEFAULT_RULES) == (
            "pollution_level",
            "complaint_email",
            "safety",
            "metrics",
            "report_submission",
            "prediction",
        )


class TestResponseTemplater:
    def test_bracket_placeholders_left_intact(self):
        templater = ResponseTemplater()
        text = templater.render(templates.COMPLAINT_EMAIL, {"location_name": "Juhu"})
        for placeholder in ("[Location]", "[Date]", "[Authority Name]", "[Your Name]", "[Report ID]"):
            assert placeholder in text

    def test_missing_slots_left_intact(self):
        assert ResponseTemplater().render("At $location_name") == "At $location_name"

    def test_location_summary_with_metric(self, router):
        context = ResponseContext(metric=_make_metric())
        _, reply = router.respond("pollution level at juhu?", context)
        assert reply.startswith("At Juhu Beach, the plastic density index is 74 (Critical risk).")
        assert "Water clarity is Poor and the pollution trend is Rising." in reply
        assert reply.endswith(templates.POLLUTION_LEVEL)

    def test_complaint_with_organization(self, router):
        org = Organization(
            id="org_1",
            name="Maharashtra Pollution Control Board",
            type="Authority",
            location_lat=19.06,
            location_lng=72.86,
            address="Sion, Mumbai",
            email="info@mpcb.example",
        )
        _, reply = router.respond("complaint", ResponseContext(organization=org))
        assert "[Authority Name]" in reply
        assert reply.endswith("You can send it to Maharashtra Pollution Control Board (info@mpcb.example).")

    def test_context_ignored_by_static_rules(self, router):
        _, reply = router.respond("safety", ResponseContext(metric=_make_metric()))
        assert reply == templates.SAFETY


class TestDialogueSession:
    def test_greeting(self):
        transcript = greeting_transcript()
        assert len(transcript) == 1
        assert transcript[0].role == DialogueRole.ASSISTANT
        assert transcript[0].content == templates.GREETING

    def test_quick_actions_route_to_rules(self, router):
        names = [router.select(action).name for action in QUICK_ACTIONS]
        assert names == ["pollution_level", "complaint_email", "safety", "metrics"]

    def test_take_turn_appends(self):
        session = DialogueSession()
        start = greeting_transcript()
        result = session.take_turn(start, "How do I submit a report?")
        assert result.rule_name == "report_submission"
        assert len(result.transcript) == 3
        assert result.transcript[1].role == DialogueRole.USER
        assert result.transcript[1].content == "How do I submit a report?"
        assert result.transcript[2].content == result.reply
        assert len(start) == 1

    def test_history_does_not_influence_routing(self):
        session = DialogueSession()
        first = session.take_turn(greeting_transcript(), "draft a complaint")
        second = session.take_turn(first.transcript, "asdkjhasd")
        assert second.rule_name == "fallback"
        assert len(second.transcript) == 5

    def test_empty_message_still_answered(self):
        result = DialogueSession().take_turn((), "")
        assert result.reply == templates.FALLBACK
        assert result.transcript[0].content == ""


class TestDelayedResponder:
    def test_reply_matches_synchronous_turn(self):
        session = DialogueSession()
        responder = DelayedResponder(session, delay_seconds=0)
        result = asyncio.run(responder.reply(greeting_transcript(), "forecast"))
        assert result == session.take_turn(greeting_transcript(), "forecast")

    def test_waits_before_replying(self):
        responder = DelayedResponder(DialogueSession(), delay_seconds=0.05)

        async def run():
            loop = asyncio.get_running_loop()
            started = loop.time()
            result = await responder.reply((), "safety")
            return result, loop.time() - started

        result, elapsed = asyncio.run(run())
        assert result.rule_name == "safety"
        assert elapsed >= 0.04
