from fastapi import APIRouter, Request

from app.auth.decisions import Decision
from app.auth.events import SessionEvents
from app.auth.normalizer import normalize_email
from app.auth.resolver import AuthFlow, RawCredentials
from app.core.logging import get_logger
from app.core.rate_limit import AUTH_RATE_LIMIT, limiter
from app.dependencies import Events, Flow
from app.schemas.auth import CredentialsRequest, DecisionResponse
from app.services.auth_provider.models import AuthMode
from app.services.posthog_client import track_auth_decision

logger = get_logger(__name__)

router = APIRouter()


async def _submit(
    body: CredentialsRequest,
    mode: AuthMode,
    flow: AuthFlow,
    events: SessionEvents,
) -> DecisionResponse:
    decision: Decision = await flow.resolve(
        RawCredentials(email=body.email, password=body.password), mode
    )

    log = logger.bind(mode=mode.value, decision=decision.kind.value)
    if decision.provider_error is not None:
        log = log.bind(
            provider_code=decision.provider_error.code,
            provider_status=decision.provider_error.status,
        )
    log.info("auth_decision")

    events.publish(decision)
    track_auth_decision(normalize_email(body.email), mode, decision)

    return DecisionResponse.from_decision(decision)


@router.post("/sign-up", response_model=DecisionResponse)
@limiter.limit(AUTH_RATE_LIMIT)
async def sign_up(
    request: Request,
    body: CredentialsRequest,
    flow: Flow,
    events: Events,
) -> DecisionResponse:
    """
    Create an account with email and password.

    Always answers 200 with a decision; a rejected or misspelled email is a
    decision, not an HTTP error.
    """
    return await _submit(body, AuthMode.SIGN_UP, flow, events)


@router.post("/sign-in", response_model=DecisionResponse)
@limiter.limit(AUTH_RATE_LIMIT)
async def sign_in(
    request: Request,
    body: CredentialsRequest,
    flow: Flow,
    events: Events,
) -> DecisionResponse:
    """Sign in with email and password."""
    return await _submit(body, AuthMode.SIGN_IN, flow, events)
