"""Email verification through a Supabase database function."""

from typing import Any

import aiohttp
from pydantic import ValidationError

from app.auth.errors import RemoteValidationTransportError
from app.auth.normalizer import email_domain
from app.core.logging import get_logger

from .base import BaseEmailVerifier
from .models import RemoteValidationResult

logger = get_logger(__name__)


class SupabaseRpcVerifier(BaseEmailVerifier):
    """Calls a PostgREST RPC that wraps ZeroBounce on the database side.

    The function takes ``p_email`` and returns a JSON object with
    ``valid``, ``status``, ``sub_status``, ``did_you_mean`` and ``message``.
    """

    provider_name = "supabase_rpc"

    def __init__(
        self,
        url: str,
        anon_key: str,
        function: str = "validate_email_with_zerobounce",
        timeout_seconds: int = 10,
    ) -> None:
        """
        Initialize the RPC verifier.

        Args:
            url: Supabase project URL
            anon_key: Public anon key
            function: Name of the database function to call
            timeout_seconds: HTTP request timeout
        """
        self.base_url = url.rstrip("/")
        self.anon_key = anon_key
        self.function = function
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    async def verify(self, email: str) -> RemoteValidationResult | None:
        """Call the RPC for one email."""
        try:
            async with aiohttp.ClientSession(
                headers={
                    "apikey": self.anon_key,
                    "Authorization": f"Bearer {self.anon_key}",
                },
                timeout=self.timeout,
            ) as session:
                async with session.post(
                    f"{self.base_url}/rest/v1/rpc/{self.function}",
                    json={"p_email": email},
                ) as response:
                    if response.status != 200:
                        logger.bind(status=response.status, function=self.function).warning(
                            "verification_rpc_error"
                        )
                        raise RemoteValidationTransportError(
                            self.provider_name, f"HTTP {response.status}"
                        )
                    data = await response.json(content_type=None)

        except TimeoutError:
            raise RemoteValidationTransportError(self.provider_name, "Request timed out") from None
        except aiohttp.ClientError as e:
            raise RemoteValidationTransportError(self.provider_name, f"Client error: {e}") from e
        except ValueError as e:
            raise RemoteValidationTransportError(self.provider_name, f"Bad JSON: {e}") from e

        return self._parse(email, data)

    def _parse(self, email: str, data: Any) -> RemoteValidationResult | None:
        if not data or not isinstance(data, dict):
            logger.bind(email_domain=email_domain(email)).info("verification_rpc_empty")
            return None

        try:
            return RemoteValidationResult.model_validate({**data, "provider": self.provider_name})
        except ValidationError as e:
            raise RemoteValidationTransportError(
                self.provider_name, f"Unexpected payload: {e.error_count()} errors"
            ) from e
