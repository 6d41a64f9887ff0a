from pydantic import BaseModel, Field

from app.auth.decisions import Decision, DecisionKind, RejectOrigin
from app.services.auth_provider.models import AuthMode


class CredentialsRequest(BaseModel):
    """Request body for sign-up and sign-in.

    Kept permissive: credential rules are enforced by the auth flow so the
    user sees the first broken rule, not a 422.
    """

    email: str = Field(default="", max_length=1024)
    password: str = Field(default="", max_length=1024)


class DecisionResponse(BaseModel):
    """Outcome of a credential submission."""

    decision: DecisionKind
    message: str
    candidate: str | None = None
    origin: RejectOrigin | None = None
    field: str | None = None
    next_mode: AuthMode | None = None

    @classmethod
    def from_decision(cls, decision: Decision) -> "DecisionResponse":
        next_mode = None
        if decision.kind == DecisionKind.SUCCESS and decision.mode == AuthMode.SIGN_UP:
            next_mode = AuthMode.SIGN_IN
        return cls(
            decision=decision.kind,
            message=decision.message,
            candidate=decision.candidate,
            origin=decision.origin,
            field=decision.field,
            next_mode=next_mode,
        )
