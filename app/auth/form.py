"""Caller-side state for an email/password form.

Holds what the user typed, the pending email suggestion and the in-flight
flag. ``AuthFlow`` assumes at most one submission per session at a time;
``AuthForm.submit`` enforces it.
"""

from app.auth.decisions import Decision, DecisionKind
from app.auth.errors import SubmissionInProgressError
from app.auth.events import SessionEvents
from app.auth.normalizer import normalize_email
from app.auth.resolver import AuthFlow, RawCredentials
from app.services.auth_provider.models import AuthMode
from app.services.posthog_client import track_auth_decision, track_suggestion_accepted


class AuthForm:
    """One user's sign-up / sign-in form."""

    def __init__(
        self,
        flow: AuthFlow,
        events: SessionEvents | None = None,
        mode: AuthMode = AuthMode.SIGN_IN,
    ) -> None:
        self._flow = flow
        self._events = events
        self.mode = mode
        self.email = ""
        self.password = ""
        self.pending_suggestion: str | None = None
        self.in_flight = False
        self.last_decision: Decision | None = None

    async def submit(self) -> Decision:
        """
        Submit the current email and password.

        Raises:
            SubmissionInProgressError: If a previous submission is unresolved
        """
        if self.in_flight:
            raise SubmissionInProgressError("A submission is already in progress")

        self.in_flight = True
        self.pending_suggestion = None
        mode = self.mode
        try:
            decision = await self._flow.resolve(
                RawCredentials(email=self.email, password=self.password), mode
            )
        finally:
            self.in_flight = False

        if decision.kind == DecisionKind.SHOW_SUGGESTION:
            self.pending_suggestion = decision.candidate
        elif decision.kind == DecisionKind.SUCCESS:
            if self._events is not None:
                self._events.publish(decision)
            if mode == AuthMode.SIGN_UP:
                # New accounts sign in next
                self.mode = AuthMode.SIGN_IN

        track_auth_decision(normalize_email(self.email), mode, decision)
        self.last_decision = decision
        return decision

    def accept_suggestion(self) -> Decision:
        """Replace the email with the pending suggestion."""
        if self.pending_suggestion:
            track_suggestion_accepted(self.email, self.pending_suggestion)
            self.email = self.pending_suggestion
            self.pending_suggestion = None
        return Decision.proceed()

    def dismiss_suggestion(self) -> Decision:
        """Drop the pending suggestion and keep the typed email."""
        self.pending_suggestion = None
        return Decision.proceed()

    def toggle_mode(self) -> AuthMode:
        """Switch between sign-up and sign-in."""
        self.mode = AuthMode.SIGN_IN if self.mode == AuthMode.SIGN_UP else AuthMode.SIGN_UP
        return self.mode
