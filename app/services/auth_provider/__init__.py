"""Auth provider clients."""

from app.config import get_settings

from .base import BaseAuthProvider
from .models import AuthMode, AuthResult, ProviderError
from .null import NullAuthProvider
from .supabase import SupabaseAuthProvider

__all__ = [
    "AuthMode",
    "AuthResult",
    "BaseAuthProvider",
    "NullAuthProvider",
    "ProviderError",
    "SupabaseAuthProvider",
    "get_auth_provider",
]

_provider_instance: BaseAuthProvider | None = None


def get_auth_provider() -> BaseAuthProvider:
    """
    Get the configured auth provider instance.

    Falls back to NullAuthProvider if Supabase is not configured.
    """
    global _provider_instance
    if _provider_instance is not None:
        return _provider_instance

    settings = get_settings()

    if not settings.supabase_url or not settings.supabase_anon_key:
        _provider_instance = NullAuthProvider()
    else:
        _provider_instance = SupabaseAuthProvider(
            url=settings.supabase_url,
            anon_key=settings.supabase_anon_key,
            redirect_to=f"{settings.base_url.rstrip('/')}/",
            timeout_seconds=settings.auth_timeout,
        )

    return _provider_instance


def reset_auth_provider() -> None:
    """Reset the provider instance. Useful for testing."""
    global _provider_instance
    _provider_instance = None
