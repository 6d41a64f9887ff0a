"""Tests for session change notifications."""

import asyncio

from app.auth.decisions import Decision
from app.auth.events import SessionEvents, get_session_events, reset_session_events
from app.services.auth_provider import AuthMode, ProviderError


class TestSessionEvents:
    """Tests for SessionEvents."""

    def test_publishes_success_to_all_subscribers(self):
        events = SessionEvents()
        first, second = events.subscribe(), events.subscribe()
        decision = Decision.success(AuthMode.SIGN_IN, "Signed in.")

        assert events.publish(decision) == 2
        assert first.get_nowait() == decision
        assert second.get_nowait() == decision

    def test_ignores_non_success(self):
        events = SessionEvents()
        queue = events.subscribe()

        delivered = events.publish(
            Decision.generic_failure(
                AuthMode.SIGN_IN, "Sign in failed.", ProviderError(message="nope")
            )
        )

        assert delivered == 0
        assert queue.empty()

    def test_unsubscribe(self):
        events = SessionEvents()
        queue = events.subscribe()
        events.unsubscribe(queue)

        assert events.subscriber_count == 0
        assert events.publish(Decision.success(AuthMode.SIGN_IN, "ok")) == 0

    def test_full_queue_is_skipped(self):
        events = SessionEvents(maxsize=1)
        queue = events.subscribe()
        decision = Decision.success(AuthMode.SIGN_IN, "ok")

        assert events.publish(decision) == 1
        assert events.publish(decision) == 0
        assert queue.qsize() == 1

    def test_queue_type(self):
        assert isinstance(SessionEvents().subscribe(), asyncio.Queue)

    def test_singleton(self):
        reset_session_events()
        assert get_session_events() is get_session_events()
        reset_session_events()
