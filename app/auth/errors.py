"""Exceptions raised by the credential auth flow."""


class AuthFlowError(Exception):
    """Base class for auth flow errors."""


class CredentialValidationError(AuthFlowError):
    """Submitted credentials broke a local rule.

    ``message`` is the first violated rule, safe to show to the user as-is.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field


class RemoteValidationTransportError(AuthFlowError):
    """The email-verification service could not be reached or answered garbage."""

    def __init__(self, provider: str, reason: str) -> None:
        super().__init__(f"{provider}: {reason}")
        self.provider = provider
        self.reason = reason


class SubmissionInProgressError(AuthFlowError):
    """A submission was started while a previous one is unresolved."""
