"""Tests for AuthFlow.resolve."""

import pytest

from app.auth.decisions import DecisionKind, RejectOrigin
from app.auth.errors import RemoteValidationTransportError
from app.auth.resolver import RawCredentials
from app.services.auth_provider import AuthMode

pytestmark = pytest.mark.asyncio


def _raw(email: str = "usr@gmail.com", password: str = "123456") -> RawCredentials:
    return RawCredentials(email=email, password=password)


class TestValidation:
    """Local credential failures stop the flow."""

    async def test_invalid_email_never_reaches_provider(self, auth_flow, mock_auth_provider):
        decision = await auth_flow.resolve(_raw(email="nope"), AuthMode.SIGN_UP)

        assert decision.kind == DecisionKind.REJECT_INVALID
        assert decision.origin == RejectOrigin.VALIDATION
        assert decision.message == "Please enter a valid email address"
        mock_auth_provider.sign_up.assert_not_called()

    async def test_short_password(self, auth_flow, mock_auth_provider):
        decision = await auth_flow.resolve(_raw(password="123"), AuthMode.SIGN_IN)

        assert decision.kind == DecisionKind.REJECT_INVALID
        assert decision.field == "password"
        mock_auth_provider.sign_in.assert_not_called()


class TestDispatch:
    """Provider success and mode routing."""

    async def test_sign_in_success(self, auth_flow, mock_auth_provider):
        decision = await auth_flow.resolve(_raw(), AuthMode.SIGN_IN)

        assert decision.kind == DecisionKind.SUCCESS
        assert decision.mode == AuthMode.SIGN_IN
        mock_auth_provider.sign_in.assert_called_once()
        mock_auth_provider.sign_up.assert_not_called()

    async def test_sign_up_success(self, auth_flow, mock_auth_provider):
        decision = await auth_flow.resolve(_raw(), AuthMode.SIGN_UP)

        assert decision.kind == DecisionKind.SUCCESS
        assert decision.message == "Account created! You can now sign in."
        assert decision.user_id == "user-123"
        mock_auth_provider.sign_in.assert_not_called()

    async def test_provider_receives_normalized_email(self, auth_flow, mock_auth_provider):
        await auth_flow.resolve(_raw(email="  USR@Gmail.com "), AuthMode.SIGN_IN)

        credentials = mock_auth_provider.sign_in.call_args.args[0]
        assert credentials.email == "usr@gmail.com"

    async def test_failure_is_not_retried(self, auth_flow, mock_auth_provider, auth_failure):
        mock_auth_provider.sign_up.return_value = auth_failure("Auth provider unreachable")

        await auth_flow.resolve(_raw(), AuthMode.SIGN_UP)

        assert mock_auth_provider.sign_up.call_count == 1


class TestRecovery:
    """Failure classification and email-correction recovery."""

    async def test_end_to_end_typo_suggestion(self, auth_flow, mock_auth_provider, auth_failure):
        """usr@gmial.com + 'Did you mean usr@gmail.com?' -> ShowSuggestion."""
        mock_auth_provider.sign_up.return_value = auth_failure("Did you mean usr@gmail.com?")

        decision = await auth_flow.resolve(
            _raw(email="usr@gmial.com", password="123456"), AuthMode.SIGN_UP
        )

        assert decision.kind == DecisionKind.SHOW_SUGGESTION
        assert decision.candidate == "usr@gmail.com"
        assert decision.message == "Did you mean: usr@gmail.com?"

    async def test_suggestion_skips_remote_check(
        self, auth_flow, mock_auth_provider, mock_email_verifier, auth_failure
    ):
        mock_auth_provider.sign_up.return_value = auth_failure(
            "Did you mean usr@gmail.com?", code="unexpected_failure"
        )

        await auth_flow.resolve(_raw(email="usr@gmial.com"), AuthMode.SIGN_UP)

        mock_email_verifier.verify.assert_not_called()

    async def test_specific_error_is_generic_failure(
        self, auth_flow, mock_auth_provider, mock_email_verifier, auth_failure
    ):
        mock_auth_provider.sign_in.return_value = auth_failure(
            "Invalid login credentials", code="invalid_credentials", mode=AuthMode.SIGN_IN
        )

        decision = await auth_flow.resolve(_raw(), AuthMode.SIGN_IN)

        assert decision.kind == DecisionKind.SHOW_GENERIC_FAILURE
        assert decision.message == "Sign in failed. Please try again."
        assert decision.provider_error.code == "invalid_credentials"
        mock_email_verifier.verify.assert_not_called()

    async def test_generic_code_routes_to_remote_once(
        self, auth_flow, mock_auth_provider, mock_email_verifier, auth_failure
    ):
        mock_auth_provider.sign_up.return_value = auth_failure(
            "Unexpected failure", code="unexpected_failure", status=500
        )

        decision = await auth_flow.resolve(_raw(email="usr@gmial.com"), AuthMode.SIGN_UP)

        mock_email_verifier.verify.assert_called_once_with("usr@gmial.com")
        assert decision.kind == DecisionKind.SHOW_GENERIC_FAILURE

    async def test_remote_invalid_rejects(
        self, auth_flow, mock_auth_provider, mock_email_verifier, auth_failure, remote_result
    ):
        mock_auth_provider.sign_up.return_value = auth_failure("Database error saving new user")
        mock_email_verifier.verify.return_value = remote_result(valid=False)

        decision = await auth_flow.resolve(_raw(), AuthMode.SIGN_UP)

        assert decision.kind == DecisionKind.REJECT_INVALID
        assert decision.origin == RejectOrigin.VERIFICATION

    async def test_remote_suggestion(
        self, auth_flow, mock_auth_provider, mock_email_verifier, auth_failure, remote_result
    ):
        mock_auth_provider.sign_up.return_value = auth_failure(
            "Unexpected failure", code="unexpected_failure"
        )
        mock_email_verifier.verify.return_value = remote_result(didYouMean="a@b.com")

        decision = await auth_flow.resolve(_raw(), AuthMode.SIGN_UP)

        assert decision.kind == DecisionKind.SHOW_SUGGESTION
        assert decision.candidate == "a@b.com"

    async def test_remote_valid_keeps_original_error(
        self, auth_flow, mock_auth_provider, mock_email_verifier, auth_failure, remote_result
    ):
        mock_auth_provider.sign_up.return_value = auth_failure(
            "Database error saving new user", code="unexpected_failure"
        )
        mock_email_verifier.verify.return_value = remote_result(valid=True)

        decision = await auth_flow.resolve(_raw(), AuthMode.SIGN_UP)

        assert decision.kind == DecisionKind.SHOW_GENERIC_FAILURE
        assert decision.message == "Signup failed. Please try again."
        assert decision.provider_error.message == "Database error saving new user"

    async def test_remote_unavailable_keeps_original_error(
        self, auth_flow, mock_auth_provider, mock_email_verifier, auth_failure
    ):
        mock_auth_provider.sign_up.return_value = auth_failure(
            "Database error saving new user", code="unexpected_failure"
        )
        mock_email_verifier.verify.side_effect = RemoteValidationTransportError("mock", "down")

        decision = await auth_flow.resolve(_raw(), AuthMode.SIGN_UP)

        assert decision.kind == DecisionKind.SHOW_GENERIC_FAILURE
        assert decision.provider_error.code == "unexpected_failure"

    async def test_details_suggestion(self, auth_flow, mock_auth_provider, auth_failure):
        mock_auth_provider.sign_up.return_value = auth_failure(
            "Email address is invalid", details="did_you_mean=usr@gmail.com, other=x"
        )

        decision = await auth_flow.resolve(_raw(email="usr@gmial.com"), AuthMode.SIGN_UP)

        assert decision.kind == DecisionKind.SHOW_SUGGESTION
        assert decision.candidate == "usr@gmail.com"

    async def test_unterminated_candidate_is_not_offered(
        self, auth_flow, mock_auth_provider, auth_failure
    ):
        mock_auth_provider.sign_up.return_value = auth_failure("Did you mean usr@gmail.com.")

        decision = await auth_flow.resolve(_raw(email="usr@gmial.com"), AuthMode.SIGN_UP)

        assert decision.kind == DecisionKind.SHOW_GENERIC_FAILURE
        assert decision.candidate is None

    async def test_sign_in_opaque_failure_skips_remote_check(
        self, auth_flow, mock_auth_provider, mock_email_verifier, auth_failure
    ):
        mock_auth_provider.sign_in.return_value = auth_failure(
            "Unexpected failure", code="unexpected_failure", mode=AuthMode.SIGN_IN
        )

        decision = await auth_flow.resolve(_raw(), AuthMode.SIGN_IN)

        assert decision.kind == DecisionKind.SHOW_GENERIC_FAILURE
        assert decision.message == "Sign in failed. Please try again."
        mock_email_verifier.verify.assert_not_called()

    async def test_sign_in_still_offers_provider_suggestion(
        self, auth_flow, mock_auth_provider, auth_failure
    ):
        mock_auth_provider.sign_in.return_value = auth_failure(
            "Did you mean usr@gmail.com?", mode=AuthMode.SIGN_IN
        )

        decision = await auth_flow.resolve(_raw(email="usr@gmial.com"), AuthMode.SIGN_IN)

        assert decision.kind == DecisionKind.SHOW_SUGGESTION
        assert decision.candidate == "usr@gmail.com"
