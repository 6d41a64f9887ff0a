"""
Pytest configuration and fixtures for AuthFlow tests.

Provides:
- Mock auth provider and email verifier
- AuthFlow built from the mocks
- Test client for API testing
"""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.auth.events import SessionEvents, get_session_events
from app.auth.resolver import AuthFlow, get_auth_flow
from app.config import MessagesConfig, RecoveryConfig, Settings, get_settings
from app.main import app
from app.services.auth_provider import AuthMode, AuthResult, ProviderError
from app.services.email_verification import RemoteValidationResult


# Override settings for testing
class TestSettings(Settings):
    debug: bool = True
    base_url: str = "http://localhost:8000"
    # External services disabled in tests (Null provider / verifier)
    supabase_url: str = ""
    supabase_anon_key: str = ""
    zerobounce_api_key: str = ""
    posthog_api_key: str = ""


@pytest.fixture(autouse=True)
def disable_analytics(monkeypatch):
    """Never talk to PostHog from tests."""
    monkeypatch.setattr("app.services.posthog_client.get_posthog_client", lambda: None)


# ============================================================================
# Config Fixtures
# ============================================================================


@pytest.fixture
def recovery_config() -> RecoveryConfig:
    return RecoveryConfig({})


@pytest.fixture
def messages_config() -> MessagesConfig:
    return MessagesConfig({})


# ============================================================================
# Mock Fixtures
# ============================================================================


@pytest.fixture
def auth_success():
    """Factory for successful provider results."""

    def _create(mode: AuthMode = AuthMode.SIGN_UP, user_id: str | None = "user-123") -> AuthResult:
        return AuthResult(mode=mode, provider="mock", user_id=user_id)

    return _create


@pytest.fixture
def auth_failure():
    """Factory for failed provider results."""

    def _create(
        message: str = "Invalid login credentials",
        code: str | None = None,
        details: str | None = None,
        mode: AuthMode = AuthMode.SIGN_UP,
        status: int | None = 400,
    ) -> AuthResult:
        return AuthResult(
            mode=mode,
            provider="mock",
            error=ProviderError(code=code, message=message, details=details, status=status),
        )

    return _create


@pytest.fixture
def mock_auth_provider(auth_success) -> AsyncMock:
    """Auth provider that accepts everything unless told otherwise."""
    mock = AsyncMock()
    mock.provider_name = "mock"
    mock.sign_up.return_value = auth_success(AuthMode.SIGN_UP)
    mock.sign_in.return_value = auth_success(AuthMode.SIGN_IN)
    return mock


@pytest.fixture
def mock_email_verifier() -> AsyncMock:
    """Email verifier with no information unless told otherwise."""
    mock = AsyncMock()
    mock.provider_name = "mock"
    mock.verify.return_value = None
    return mock


@pytest.fixture
def remote_result():
    """Factory for verification service answers."""

    def _create(**fields) -> RemoteValidationResult:
        return RemoteValidationResult(provider="mock", **fields)

    return _create


@pytest.fixture
def auth_flow(mock_auth_provider, mock_email_verifier) -> AuthFlow:
    """AuthFlow wired to the mock provider and verifier."""
    from app.auth.bridge import RemoteValidatorBridge
    from app.auth.dispatcher import AuthDispatcher

    messages = MessagesConfig({})
    return AuthFlow(
        dispatcher=AuthDispatcher(mock_auth_provider),
        bridge=RemoteValidatorBridge(mock_email_verifier, RecoveryConfig({}), messages),
        messages=messages,
        min_password_length=6,
    )


@pytest.fixture
def session_events() -> SessionEvents:
    return SessionEvents()


# ============================================================================
# API Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def client(auth_flow, session_events) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client with the auth flow overridden."""
    from app.core.rate_limit import limiter

    def override_get_settings():
        return TestSettings()

    app.dependency_overrides[get_auth_flow] = lambda: auth_flow
    app.dependency_overrides[get_session_events] = lambda: session_events
    app.dependency_overrides[get_settings] = override_get_settings

    # Reset rate limiter storage before each test
    limiter.reset()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
