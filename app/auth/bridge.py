"""Second-opinion email check for opaque provider failures.

Some provider failures hide a more specific cause. GoTrue, for one, reports a
rejected email as ``unexpected_failure`` / "Database error saving new user"
when a database trigger refuses it. For those, the email is re-checked with an
independent verification service. The check is best effort: whatever happens
here, the caller can always fall back to the original provider error.
"""

import re

from app.auth.decisions import Decision
from app.auth.errors import RemoteValidationTransportError
from app.auth.normalizer import email_domain
from app.auth.suggestions import differs_from
from app.config import MessagesConfig, RecoveryConfig
from app.core.logging import get_logger
from app.services.auth_provider.models import AuthMode, ProviderError
from app.services.email_verification import BaseEmailVerifier

logger = get_logger(__name__)


class RemoteValidatorBridge:
    """Classifies provider errors and turns verifier answers into decisions."""

    def __init__(
        self,
        verifier: BaseEmailVerifier,
        recovery: RecoveryConfig,
        messages: MessagesConfig,
    ) -> None:
        self._verifier = verifier
        self._messages = messages
        self._generic_codes = frozenset(recovery.generic_error_codes)
        self._remote_modes = frozenset(recovery.remote_check_modes)
        self._masked_patterns = [
            re.compile(re.escape(pattern), re.IGNORECASE)
            for pattern in recovery.masked_failure_patterns
        ]

    def is_generic(self, error: ProviderError) -> bool:
        """True if the error is known to mask a more specific failure."""
        if error.code and error.code in self._generic_codes:
            return True
        return any(pattern.search(error.message) for pattern in self._masked_patterns)

    def checks_remotely(self, mode: AuthMode) -> bool:
        """True if opaque failures in this mode are worth a verification call."""
        return mode.value in self._remote_modes

    async def recover(self, email: str, mode: AuthMode | None = None) -> Decision | None:
        """
        Ask the verification service about the submitted email.

        Args:
            email: Normalized submitted email
            mode: Submission mode, carried onto the decision

        Returns:
            SHOW_SUGGESTION or REJECT_INVALID decision, or None when the
            service confirmed the email or had nothing usable to say
        """
        log = logger.bind(
            email_domain=email_domain(email),
            provider=self._verifier.provider_name,
        )

        try:
            result = await self._verifier.verify(email)
        except RemoteValidationTransportError as e:
            log.bind(reason=e.reason).warning("remote_validation_unavailable")
            return None
        except Exception as e:
            log.bind(error=str(e)).error("remote_validation_unexpected_error")
            return None

        if result is None:
            log.info("remote_validation_no_data")
            return None

        candidate = differs_from(result.did_you_mean, email)
        if candidate:
            log.bind(status=result.status).info("remote_validation_suggestion")
            return Decision.suggestion(
                candidate,
                self._messages.suggestion.format(candidate=candidate),
                mode=mode,
            )

        if result.valid is False:
            log.bind(status=result.status, sub_status=result.sub_status).info(
                "remote_validation_rejected"
            )
            return Decision.rejected(self._messages.email_rejected, mode=mode)

        # Deliverable or undetermined: nothing better than the original error
        log.bind(status=result.status, valid=result.valid).info("remote_validation_inconclusive")
        return None
