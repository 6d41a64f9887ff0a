"""Send normalized credentials to the auth provider."""

from app.auth.normalizer import Credentials, email_domain
from app.core.logging import get_logger
from app.services.auth_provider import AuthMode, AuthResult, BaseAuthProvider

logger = get_logger(__name__)


class AuthDispatcher:
    """Routes a submission to sign-up or sign-in.

    One provider call per dispatch. Failures go straight back to the caller,
    since the provider's error text is what recovery works from.
    """

    def __init__(self, provider: BaseAuthProvider) -> None:
        self._provider = provider

    async def dispatch(self, credentials: Credentials, mode: AuthMode) -> AuthResult:
        if mode == AuthMode.SIGN_UP:
            result = await self._provider.sign_up(credentials)
        else:
            result = await self._provider.sign_in(credentials)

        log = logger.bind(
            mode=mode.value,
            provider=self._provider.provider_name,
            email_domain=email_domain(credentials.email),
        )
        if result.ok:
            log.info("auth_dispatch_succeeded")
        else:
            log.bind(code=result.error.code, status=result.error.status).info(
                "auth_dispatch_failed"
            )
        return result
