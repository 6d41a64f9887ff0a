"""Extract a corrected email from a provider error.

Sources are tried in priority order and the first hit wins. Providers fill
either the message or the details field, not reliably both, and the message
form is the more common one.
"""

import re
from collections.abc import Callable

from app.auth.normalizer import is_valid_email, normalize_email
from app.services.auth_provider.models import ProviderError

# "Did you mean usr@gmail.com?" - candidate must look like an address and ends at
# whitespace or "?"
MESSAGE_PATTERN = re.compile(r"\bdid you mean:?\s+([^\s?@]+@[^\s?]+)(?=[\s?])", re.IGNORECASE)

# "did_you_mean=usr@gmail.com, other=x"
DETAILS_PATTERN = re.compile(r"\bdid_you_mean=([^,\s]+)", re.IGNORECASE)

SuggestionStep = Callable[[ProviderError], str | None]


def _match(pattern: re.Pattern[str], text: str | None) -> str | None:
    if not text:
        return None
    match = pattern.search(text)
    if not match:
        return None
    return normalize_email(match.group(1)) or None


def from_message(error: ProviderError) -> str | None:
    """Candidate from the human-readable message."""
    return _match(MESSAGE_PATTERN, error.message)


def from_details(error: ProviderError) -> str | None:
    """Candidate from the key=value details field."""
    return _match(DETAILS_PATTERN, error.details)


SUGGESTION_STEPS: tuple[SuggestionStep, ...] = (from_message, from_details)


def extract_suggestion(
    error: ProviderError,
    submitted_email: str,
    steps: tuple[SuggestionStep, ...] = SUGGESTION_STEPS,
) -> str | None:
    """
    Find a corrected email in a provider error.

    Args:
        error: Failure returned by the auth provider
        submitted_email: Normalized email that was submitted
        steps: Extraction steps, in priority order

    Returns:
        The normalized candidate, or None if there is none or it only
        restates the submitted email
    """
    for step in steps:
        candidate = step(error)
        if candidate:
            return differs_from(candidate, submitted_email)
    return None


def differs_from(candidate: str | None, submitted_email: str) -> str | None:
    """Return the normalized candidate only if it is a usable, real correction."""
    if not candidate:
        return None
    candidate = normalize_email(candidate)
    if not candidate or candidate == normalize_email(submitted_email):
        return None
    if not is_valid_email(candidate):
        return None
    return candidate
