"""Abstract base class for auth providers."""

from abc import ABC, abstractmethod

from app.auth.normalizer import Credentials

from .models import AuthResult


class BaseAuthProvider(ABC):
    """Abstract base class for auth providers."""

    provider_name: str = "unknown"

    @abstractmethod
    async def sign_up(self, credentials: Credentials) -> AuthResult:
        """
        Create an account.

        Args:
            credentials: Normalized credentials

        Returns:
            AuthResult, carrying a ProviderError on rejection or transport failure
        """
        pass

    @abstractmethod
    async def sign_in(self, credentials: Credentials) -> AuthResult:
        """
        Establish a session with email and password.

        Args:
            credentials: Normalized credentials

        Returns:
            AuthResult, carrying a ProviderError on rejection or transport failure
        """
        pass
