"""Null verifier - used when email verification is disabled."""

from .base import BaseEmailVerifier
from .models import RemoteValidationResult


class NullVerifier(BaseEmailVerifier):
    """Verifier that never has any information."""

    provider_name = "null"

    async def verify(self, email: str) -> RemoteValidationResult | None:
        """Always return no data."""
        return None
