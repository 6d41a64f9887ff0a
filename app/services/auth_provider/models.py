"""Auth provider models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class AuthMode(str, Enum):
    """Which provider operation a submission targets."""

    SIGN_UP = "sign_up"  # Account creation
    SIGN_IN = "sign_in"  # Session establishment


class ProviderError(BaseModel):
    """Failure returned by the auth provider. Read-only."""

    model_config = ConfigDict(frozen=True)

    code: str | None = None
    message: str
    details: str | None = None
    status: int | None = None


class AuthResult(BaseModel):
    """Outcome of one provider call."""

    mode: AuthMode
    provider: str
    error: ProviderError | None = None
    user_id: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
