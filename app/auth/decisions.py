"""Terminal outcomes of a credential submission."""

from enum import Enum

from pydantic import BaseModel, ConfigDict

from app.services.auth_provider.models import AuthMode, ProviderError


class DecisionKind(str, Enum):
    """What the caller must do next."""

    PROCEED = "proceed"  # Form is ready to be (re)submitted
    SHOW_SUGGESTION = "show_suggestion"  # Offer a corrected email
    REJECT_INVALID = "reject_invalid"  # Email/password refused, no correction
    SHOW_GENERIC_FAILURE = "show_generic_failure"  # Provider failed, nothing to add
    SUCCESS = "success"


class RejectOrigin(str, Enum):
    """Where a rejection came from. Presented differently."""

    VALIDATION = "validation"  # Local credential rules
    VERIFICATION = "verification"  # Remote email-verification service


class Decision(BaseModel):
    """The single outcome of one submission attempt."""

    model_config = ConfigDict(frozen=True)

    kind: DecisionKind
    message: str = ""
    mode: AuthMode | None = None
    candidate: str | None = None
    origin: RejectOrigin | None = None
    field: str | None = None
    user_id: str | None = None
    # Original provider failure, for logs only
    provider_error: ProviderError | None = None

    @classmethod
    def proceed(cls) -> "Decision":
        return cls(kind=DecisionKind.PROCEED)

    @classmethod
    def success(cls, mode: AuthMode, message: str, user_id: str | None = None) -> "Decision":
        return cls(kind=DecisionKind.SUCCESS, mode=mode, message=message, user_id=user_id)

    @classmethod
    def suggestion(cls, candidate: str, message: str, mode: AuthMode | None = None) -> "Decision":
        return cls(
            kind=DecisionKind.SHOW_SUGGESTION,
            mode=mode,
            candidate=candidate,
            message=message,
        )

    @classmethod
    def invalid_input(cls, message: str, field: str | None = None) -> "Decision":
        return cls(
            kind=DecisionKind.REJECT_INVALID,
            origin=RejectOrigin.VALIDATION,
            message=message,
            field=field,
        )

    @classmethod
    def rejected(cls, message: str, mode: AuthMode | None = None) -> "Decision":
        return cls(
            kind=DecisionKind.REJECT_INVALID,
            origin=RejectOrigin.VERIFICATION,
            mode=mode,
            message=message,
            field="email",
        )

    @classmethod
    def generic_failure(cls, mode: AuthMode, message: str, error: ProviderError) -> "Decision":
        return cls(
            kind=DecisionKind.SHOW_GENERIC_FAILURE,
            mode=mode,
            message=message,
            provider_error=error,
        )
