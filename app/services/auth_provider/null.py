"""Null auth provider - used when no provider is configured."""

from app.auth.normalizer import Credentials

from .base import BaseAuthProvider
from .models import AuthMode, AuthResult, ProviderError


class NullAuthProvider(BaseAuthProvider):
    """Rejects every submission with a not-configured error."""

    provider_name = "null"

    async def sign_up(self, credentials: Credentials) -> AuthResult:
        return self._not_configured(AuthMode.SIGN_UP)

    async def sign_in(self, credentials: Credentials) -> AuthResult:
        return self._not_configured(AuthMode.SIGN_IN)

    def _not_configured(self, mode: AuthMode) -> AuthResult:
        return AuthResult(
            mode=mode,
            provider=self.provider_name,
            error=ProviderError(
                code="provider_not_configured",
                message="Auth provider is not configured",
            ),
        )
