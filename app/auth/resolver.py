"""Resolve one credential submission to a Decision.

Flow, evaluated once per attempt with no step revisited::

    normalize ─fail─> REJECT_INVALID (validation)
        │
    dispatch ─ok─> SUCCESS
        │
    extract suggestion ─hit─> SHOW_SUGGESTION
        │
    generic error in a remotely checked mode? ─no─> SHOW_GENERIC_FAILURE
        │
    remote verification ─> SHOW_SUGGESTION | REJECT_INVALID | SHOW_GENERIC_FAILURE
"""

from pydantic import BaseModel

from app.auth.bridge import RemoteValidatorBridge
from app.auth.decisions import Decision
from app.auth.dispatcher import AuthDispatcher
from app.auth.errors import CredentialValidationError
from app.auth.normalizer import DEFAULT_MIN_PASSWORD_LENGTH, normalize_credentials
from app.auth.suggestions import extract_suggestion
from app.config import AppConfig, MessagesConfig, get_config
from app.core.logging import get_logger
from app.services.auth_provider import (
    AuthMode,
    BaseAuthProvider,
    ProviderError,
    get_auth_provider,
)
from app.services.email_verification import BaseEmailVerifier, get_email_verifier

logger = get_logger(__name__)


class RawCredentials(BaseModel):
    """Credentials exactly as the user typed them."""

    email: str = ""
    password: str = ""


class AuthFlow:
    """Credential submission with email-correction recovery."""

    def __init__(
        self,
        dispatcher: AuthDispatcher,
        bridge: RemoteValidatorBridge,
        messages: MessagesConfig,
        min_password_length: int = DEFAULT_MIN_PASSWORD_LENGTH,
    ) -> None:
        self._dispatcher = dispatcher
        self._bridge = bridge
        self._messages = messages
        self._min_password_length = min_password_length

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        provider: BaseAuthProvider,
        verifier: BaseEmailVerifier,
    ) -> "AuthFlow":
        return cls(
            dispatcher=AuthDispatcher(provider),
            bridge=RemoteValidatorBridge(verifier, config.recovery, config.messages),
            messages=config.messages,
            min_password_length=config.settings.password_min_length,
        )

    async def resolve(self, raw: RawCredentials, mode: AuthMode) -> Decision:
        """
        Run one submission through validation, the provider and recovery.

        Never raises for provider or verification failures; every path ends in
        a Decision.
        """
        try:
            credentials = normalize_credentials(
                raw.email, raw.password, self._min_password_length
            )
        except CredentialValidationError as e:
            logger.bind(mode=mode.value, field=e.field).info("credentials_rejected")
            return Decision.invalid_input(e.message, field=e.field)

        result = await self._dispatcher.dispatch(credentials, mode)
        if result.error is None:
            return Decision.success(mode, self._success_message(mode), user_id=result.user_id)

        return await self._recover(result.error, credentials.email, mode)

    async def _recover(self, error: ProviderError, email: str, mode: AuthMode) -> Decision:
        candidate = extract_suggestion(error, email)
        if candidate:
            return Decision.suggestion(
                candidate, self._messages.suggestion.format(candidate=candidate), mode=mode
            )

        if self._bridge.is_generic(error) and self._bridge.checks_remotely(mode):
            decision = await self._bridge.recover(email, mode=mode)
            if decision is not None:
                return decision

        return Decision.generic_failure(mode, self._failure_message(mode), error)

    def _success_message(self, mode: AuthMode) -> str:
        if mode == AuthMode.SIGN_UP:
            return self._messages.sign_up_success
        return self._messages.sign_in_success

    def _failure_message(self, mode: AuthMode) -> str:
        if mode == AuthMode.SIGN_UP:
            return self._messages.sign_up_failed
        return self._messages.sign_in_failed


def get_auth_flow() -> AuthFlow:
    """Build an AuthFlow from the configured provider and verifier."""
    return AuthFlow.from_config(get_config(), get_auth_provider(), get_email_verifier())
