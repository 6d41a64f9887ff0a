"""
PostHog analytics client for server-side event tracking.

Tracks the outcome of credential submissions. Analytics never affects the
outcome: when PostHog is not configured or a call fails, the event is dropped.
"""

import hashlib
from functools import lru_cache
from typing import Any

from posthog import Posthog

from app.auth.decisions import Decision, DecisionKind
from app.auth.normalizer import email_domain, normalize_email
from app.config import get_settings
from app.core.logging import get_logger
from app.services.auth_provider.models import AuthMode

logger = get_logger(__name__)


# Event name constants for type safety
class Events:
    AUTH_SUBMITTED = "auth_submitted"
    SIGNUP_COMPLETED = "signup_completed"
    SESSION_STARTED = "session_started"
    EMAIL_SUGGESTION_SHOWN = "email_suggestion_shown"
    EMAIL_SUGGESTION_ACCEPTED = "email_suggestion_accepted"
    EMAIL_REJECTED = "email_rejected"
    AUTH_FAILED = "auth_failed"


@lru_cache(maxsize=1)
def get_posthog_client() -> Posthog | None:
    """
    Get or create the singleton PostHog client.

    Returns None if POSTHOG_API_KEY is not configured.
    """
    settings = get_settings()

    if not settings.posthog_api_key:
        logger.bind(hint="Set POSTHOG_API_KEY to enable analytics").debug(
            "posthog_not_configured"
        )
        return None

    client = Posthog(
        api_key=settings.posthog_api_key,
        host=settings.posthog_host,
        debug=settings.debug,
    )

    logger.bind(host=settings.posthog_host).info("posthog_initialized")
    return client


def capture(
    distinct_id: str,
    event: str,
    properties: dict[str, Any] | None = None,
) -> None:
    """
    Capture an event for a user.

    Args:
        distinct_id: User ID, or anonymous_id(email) before an account exists
        event: Event name (use Events constants)
        properties: Additional event properties
    """
    client = get_posthog_client()
    if client is None:
        return

    try:
        client.capture(
            distinct_id=distinct_id,
            event=event,
            properties=properties or {},
        )
    except Exception as e:
        logger.bind(event=event, error=str(e)).error("posthog_capture_failed")


def anonymous_id(email: str) -> str:
    """Stable analytics id for a user without an account. Never the raw email."""
    return hashlib.sha256(normalize_email(email).encode()).hexdigest()[:32]


def _outcome_event(decision: Decision) -> str | None:
    if decision.kind == DecisionKind.SUCCESS:
        if decision.mode == AuthMode.SIGN_UP:
            return Events.SIGNUP_COMPLETED
        return Events.SESSION_STARTED
    return {
        DecisionKind.SHOW_SUGGESTION: Events.EMAIL_SUGGESTION_SHOWN,
        DecisionKind.REJECT_INVALID: Events.EMAIL_REJECTED,
        DecisionKind.SHOW_GENERIC_FAILURE: Events.AUTH_FAILED,
    }.get(decision.kind)


def track_auth_decision(email: str, mode: AuthMode, decision: Decision) -> None:
    """Track the submission and its outcome."""
    distinct_id = decision.user_id or anonymous_id(email)
    properties = {
        "mode": mode.value,
        "email_domain": email_domain(email),
        "decision": decision.kind.value,
    }

    capture(distinct_id, Events.AUTH_SUBMITTED, dict(properties))

    event = _outcome_event(decision)
    if event is None:
        return

    if decision.kind == DecisionKind.SHOW_SUGGESTION and decision.candidate:
        properties["suggested_domain"] = email_domain(decision.candidate)
    if decision.origin is not None:
        properties["origin"] = decision.origin.value
    if decision.provider_error is not None:
        properties["provider_code"] = decision.provider_error.code

    capture(distinct_id, event, properties)


def track_suggestion_accepted(original_email: str, suggestion: str) -> None:
    """Track when a user takes the suggested email."""
    capture(
        distinct_id=anonymous_id(suggestion),
        event=Events.EMAIL_SUGGESTION_ACCEPTED,
        properties={
            "original_domain": email_domain(original_email),
            "suggested_domain": email_domain(suggestion),
        },
    )


def shutdown() -> None:
    """Flush any pending events and shutdown the client."""
    client = get_posthog_client()
    if client is not None:
        client.shutdown()
