"""Supabase (GoTrue) auth provider."""

from typing import Any

import aiohttp

from app.auth.normalizer import Credentials, email_domain
from app.core.logging import get_logger

from .base import BaseAuthProvider
from .models import AuthMode, AuthResult, ProviderError

logger = get_logger(__name__)


class SupabaseAuthProvider(BaseAuthProvider):
    """Email/password auth against the Supabase GoTrue REST API.

    Each call is a single request. Nothing is retried: a repeated sign-up
    would repeat the account-creation side effect.
    """

    provider_name = "supabase"

    def __init__(
        self,
        url: str,
        anon_key: str,
        redirect_to: str | None = None,
        timeout_seconds: int = 15,
    ) -> None:
        """
        Initialize Supabase auth provider.

        Args:
            url: Project URL, e.g. https://xyz.supabase.co
            anon_key: Public anon key sent as apikey header
            redirect_to: Where confirmation emails send the user after sign-up
            timeout_seconds: HTTP request timeout
        """
        self.base_url = url.rstrip("/")
        self.anon_key = anon_key
        self.redirect_to = redirect_to
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    async def sign_up(self, credentials: Credentials) -> AuthResult:
        """Create an account."""
        params = {"redirect_to": self.redirect_to} if self.redirect_to else None
        return await self._post(
            AuthMode.SIGN_UP,
            "/auth/v1/signup",
            {"email": credentials.email, "password": credentials.password},
            params=params,
        )

    async def sign_in(self, credentials: Credentials) -> AuthResult:
        """Establish a session with email and password."""
        return await self._post(
            AuthMode.SIGN_IN,
            "/auth/v1/token",
            {"email": credentials.email, "password": credentials.password},
            params={"grant_type": "password"},
        )

    def _headers(self) -> dict[str, str]:
        return {
            "apikey": self.anon_key,
            "Authorization": f"Bearer {self.anon_key}",
        }

    async def _post(
        self,
        mode: AuthMode,
        path: str,
        payload: dict[str, Any],
        params: dict[str, str] | None = None,
    ) -> AuthResult:
        log = logger.bind(mode=mode.value, email_domain=email_domain(payload["email"]))
        try:
            async with aiohttp.ClientSession(
                headers=self._headers(),
                timeout=self.timeout,
            ) as session:
                async with session.post(
                    f"{self.base_url}{path}",
                    json=payload,
                    params=params,
                ) as response:
                    body = await self._read_body(response)

                    if response.status in (200, 201):
                        return AuthResult(
                            mode=mode,
                            provider=self.provider_name,
                            user_id=self._user_id(body),
                        )

                    error = self._parse_error(response.status, body)
                    log.bind(status=response.status, code=error.code).warning(
                        "auth_provider_rejected"
                    )
                    return AuthResult(
                        mode=mode,
                        provider=self.provider_name,
                        error=error,
                    )

        except TimeoutError:
            log.warning("auth_provider_timeout")
            return self._transport_error(mode, "Request timed out")
        except aiohttp.ClientError as e:
            log.bind(error=str(e)).error("auth_provider_client_error")
            return self._transport_error(mode, f"Client error: {e}")

    async def _read_body(self, response: aiohttp.ClientResponse) -> dict[str, Any]:
        """Decode a JSON body, falling back to the raw text."""
        try:
            data = await response.json(content_type=None)
        except ValueError:
            return {"message": await response.text()}
        return data if isinstance(data, dict) else {}

    def _user_id(self, body: dict[str, Any]) -> str | None:
        user = body.get("user") if isinstance(body.get("user"), dict) else body
        user_id = user.get("id")
        return str(user_id) if user_id else None

    def _parse_error(self, status: int, body: dict[str, Any]) -> ProviderError:
        """Map the GoTrue error shapes (current and legacy) to a ProviderError."""
        code = body.get("error_code")
        if not code and isinstance(body.get("error"), str):
            code = body["error"]
        if not code and isinstance(body.get("code"), str):
            code = body["code"]

        message = (
            body.get("msg")
            or body.get("message")
            or body.get("error_description")
            or (body.get("error") if isinstance(body.get("error"), str) else None)
            or f"Auth provider returned HTTP {status}"
        )

        details = body.get("details") or body.get("hint")

        return ProviderError(
            code=code,
            message=str(message),
            details=str(details) if details else None,
            status=status,
        )

    def _transport_error(self, mode: AuthMode, reason: str) -> AuthResult:
        return AuthResult(
            mode=mode,
            provider=self.provider_name,
            error=ProviderError(message=f"Auth provider unreachable: {reason}"),
        )
