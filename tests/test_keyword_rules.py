"""Tests for confirmation reply matching and fallback keyword routing."""

import pytest

from philview.conversation.keyword_rules import ReplyKind
from philview.schemas.action_schema import LogoutAction, NavigateAction, Section


class TestConfirmationMatcher:
    @pytest.mark.parametrize("text", ["yes", "Yes please", "confirm", "do it", "sure, go ahead"])
    def test_affirmative(self, matcher, text):
        assert matcher.classify_reply(text) == ReplyKind.AFFIRMATIVE

    @pytest.mark.parametrize("text", ["no", "No thanks", "cancel that", "stop"])
    def test_negative(self, matcher, text):
        assert matcher.classify_reply(text) == ReplyKind.NEGATIVE

    @pytest.mark.parametrize("text", ["what?", "maybe later", "tell me more"])
    def test_unclear(self, matcher, text):
        assert matcher.classify_reply(text) == ReplyKind.UNCLEAR

    def test_affirmative_checked_first(self, matcher):
        assert matcher.classify_reply("yes, no problem") == ReplyKind.AFFIRMATIVE

    @pytest.mark.parametrize("text", ["Confirmed.", "CONFIRMING now", "yesss"])
    def test_affirmative_by_containment(self, matcher, text):
        assert matcher.classify_reply(text) == ReplyKind.AFFIRMATIVE

    @pytest.mark.parametrize("text", ["nope", "not now", "Stop it"])
    def test_negative_by_containment(self, matcher, text):
        assert matcher.classify_reply(text) == ReplyKind.NEGATIVE


class TestFallbackRouter:
    @pytest.mark.parametrize("text,section", [
        ("show my appointments", Section.APPOINTMENTS),
        ("what is my balance", Section.BALANCE),
        ("any new inquiries?", Section.INQUIRIES),
        ("list my clients", Section.CLIENTS),
        ("upcoming events", Section.EVENTS),
        ("I want to browse", Section.PROPERTIES),
        ("property listings please", Section.PROPERTIES),
        ("take me to the dashboard", Section.DASHBOARD),
    ])
    def test_single_keyword_routes(self, router, text, section):
        match = router.route(text)
        assert match is not None
        assert match.action == NavigateAction(target=section)

    @pytest.mark.parametrize("text", ["logout", "please log out", "Sign out now"])
    def test_sign_out(self, router, text):
        match = router.route(text)
        assert match is not None
        assert isinstance(match.action, LogoutAction)

    def test_sign_out_beats_appointment(self, router):
        match = router.route("logout and check my appointment")
        assert isinstance(match.action, LogoutAction)

    def test_appointment_beats_balance(self, router):
        match = router.route("balance for my appointment")
        assert match.action.target == Section.APPOINTMENTS

    def test_client_beats_dashboard(self, router):
        match = router.route("client dashboard")
        assert match.action.target == Section.CLIENTS

    def test_reports_matched_keyword(self, router):
        assert router.route("Any Inquiries today?").keyword == "inquiries"

    def test_no_match(self, router):
        assert router.route("hello there") is None

    def test_deterministic(self, router):
        assert router.route("show my events") == router.route("show my events")
