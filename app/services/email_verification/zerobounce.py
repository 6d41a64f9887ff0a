"""ZeroBounce email verification provider."""

from typing import Any

import aiohttp

from app.auth.errors import RemoteValidationTransportError
from app.auth.normalizer import email_domain
from app.core.logging import get_logger

from .base import BaseEmailVerifier
from .models import RemoteValidationResult

logger = get_logger(__name__)


class ZeroBounceVerifier(BaseEmailVerifier):
    """Email verification using the ZeroBounce v2 API."""

    provider_name = "zerobounce"
    BASE_URL = "https://api.zerobounce.net/v2"

    # ZeroBounce status -> deliverability verdict (None = undetermined)
    _VALIDITY_MAP: dict[str, bool | None] = {
        "valid": True,
        "catch-all": True,
        "invalid": False,
        "spamtrap": False,
        "abuse": False,
        "do_not_mail": False,
        "unknown": None,
    }

    def __init__(self, api_key: str, timeout_seconds: int = 10) -> None:
        """
        Initialize ZeroBounce verifier.

        Args:
            api_key: ZeroBounce API key
            timeout_seconds: HTTP request timeout
        """
        self.api_key = api_key
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    async def verify(self, email: str) -> RemoteValidationResult | None:
        """Validate a single email address."""
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.get(
                    f"{self.BASE_URL}/validate",
                    params={"api_key": self.api_key, "email": email, "ip_address": ""},
                ) as response:
                    if response.status != 200:
                        logger.bind(status=response.status).warning("zerobounce_http_error")
                        raise RemoteValidationTransportError(
                            self.provider_name, f"HTTP {response.status}"
                        )
                    data = await response.json(content_type=None)

        except TimeoutError:
            logger.bind(email_domain=email_domain(email)).warning("zerobounce_timeout")
            raise RemoteValidationTransportError(self.provider_name, "Request timed out") from None
        except aiohttp.ClientError as e:
            logger.bind(error=str(e)).error("zerobounce_client_error")
            raise RemoteValidationTransportError(self.provider_name, f"Client error: {e}") from e
        except ValueError as e:
            raise RemoteValidationTransportError(self.provider_name, f"Bad JSON: {e}") from e

        return self._parse(email, data)

    def _parse(self, email: str, data: Any) -> RemoteValidationResult | None:
        """Parse a ZeroBounce response to a RemoteValidationResult."""
        if not isinstance(data, dict) or not data:
            return None

        # Bad key / no credits come back as 200 with an "error" field
        if data.get("error"):
            logger.bind(error=data["error"]).error("zerobounce_api_error")
            raise RemoteValidationTransportError(self.provider_name, str(data["error"]))

        status = (data.get("status") or "").lower() or None

        return RemoteValidationResult(
            email=data.get("address") or email,
            valid=self._VALIDITY_MAP.get(status) if status else None,
            status=status,
            sub_status=data.get("sub_status") or None,
            did_you_mean=data.get("did_you_mean") or None,
            provider=self.provider_name,
        )
