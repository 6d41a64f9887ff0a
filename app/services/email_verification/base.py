"""Abstract base class for email verification providers."""

from abc import ABC, abstractmethod

from .models import RemoteValidationResult


class BaseEmailVerifier(ABC):
    """Abstract base class for email verification providers."""

    provider_name: str = "unknown"

    @abstractmethod
    async def verify(self, email: str) -> RemoteValidationResult | None:
        """
        Verify a single email address.

        Args:
            email: The normalized email address to verify

        Returns:
            RemoteValidationResult, or None when the service returned no data

        Raises:
            RemoteValidationTransportError: If the service could not be reached
        """
        pass
