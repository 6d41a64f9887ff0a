"""Email verification service with provider abstraction."""

from app.config import get_config

from .base import BaseEmailVerifier
from .models import RemoteValidationResult
from .null import NullVerifier
from .supabase_rpc import SupabaseRpcVerifier
from .zerobounce import ZeroBounceVerifier

__all__ = [
    "BaseEmailVerifier",
    "NullVerifier",
    "RemoteValidationResult",
    "SupabaseRpcVerifier",
    "ZeroBounceVerifier",
    "get_email_verifier",
]

_verifier_instance: BaseEmailVerifier | None = None


def get_email_verifier() -> BaseEmailVerifier:
    """
    Get the configured email verifier instance.

    Prefers a direct ZeroBounce key, then the Supabase RPC.
    Falls back to NullVerifier if neither is configured.
    """
    global _verifier_instance
    if _verifier_instance is not None:
        return _verifier_instance

    config = get_config()
    settings = config.settings

    if settings.zerobounce_api_key:
        _verifier_instance = ZeroBounceVerifier(
            api_key=settings.zerobounce_api_key,
            timeout_seconds=settings.verification_timeout,
        )
    elif settings.supabase_url and settings.supabase_anon_key:
        _verifier_instance = SupabaseRpcVerifier(
            url=settings.supabase_url,
            anon_key=settings.supabase_anon_key,
            function=config.recovery.verification_rpc,
            timeout_seconds=settings.verification_timeout,
        )
    else:
        # Verification disabled - the bridge always falls back
        _verifier_instance = NullVerifier()

    return _verifier_instance


def reset_email_verifier() -> None:
    """Reset the verifier instance. Useful for testing."""
    global _verifier_instance
    _verifier_instance = None
