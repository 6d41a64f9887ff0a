"""
AuthFlow CLI - run credential submissions from the command line.

Usage:
    authflow --help                                 Show all commands
    authflow sign-up --email a@b.com --password x   Create an account
    authflow sign-in --email a@b.com --password x   Sign in
    authflow verify-email a@b.com                   Ask the verification service
"""

import asyncio

import typer

app = typer.Typer(
    name="authflow",
    help="AuthFlow CLI - credential auth with email-correction recovery",
    no_args_is_help=True,
)


def _print_success(message: str) -> None:
    """Print a success message."""
    typer.echo(f"  ✅ {message}")


def _print_warning(message: str) -> None:
    """Print a warning message."""
    typer.echo(f"  ⚠️ {message}")


def _print_error(message: str) -> None:
    """Print an error message to stderr."""
    typer.echo(f"❌ {message}", err=True)


def _run_submission(email: str, password: str, sign_up: bool) -> None:
    from app.auth.decisions import DecisionKind
    from app.auth.resolver import RawCredentials, get_auth_flow
    from app.core.logging import setup_logging
    from app.services.auth_provider.models import AuthMode

    setup_logging()
    mode = AuthMode.SIGN_UP if sign_up else AuthMode.SIGN_IN

    decision = asyncio.run(
        get_auth_flow().resolve(RawCredentials(email=email, password=password), mode)
    )

    if decision.kind == DecisionKind.SUCCESS:
        _print_success(decision.message)
    elif decision.kind == DecisionKind.SHOW_SUGGESTION:
        _print_warning(decision.message)
        raise typer.Exit(2)
    else:
        _print_error(decision.message)
        raise typer.Exit(1)


@app.command("sign-up")
def sign_up(
    email: str = typer.Option(..., "--email", "-e", help="Email address"),
    password: str = typer.Option(..., "--password", "-p", prompt=True, hide_input=True),
):
    """Create an account."""
    _run_submission(email, password, sign_up=True)


@app.command("sign-in")
def sign_in(
    email: str = typer.Option(..., "--email", "-e", help="Email address"),
    password: str = typer.Option(..., "--password", "-p", prompt=True, hide_input=True),
):
    """Sign in to an existing account."""
    _run_submission(email, password, sign_up=False)


@app.command("verify-email")
def verify_email(email: str = typer.Argument(..., help="Email address to verify")):
    """Check an email with the configured verification service."""
    from app.auth.errors import RemoteValidationTransportError
    from app.auth.normalizer import normalize_email
    from app.core.logging import setup_logging
    from app.services.email_verification import get_email_verifier

    setup_logging()
    verifier = get_email_verifier()
    typer.echo(f"Provider: {verifier.provider_name}")

    try:
        result = asyncio.run(verifier.verify(normalize_email(email)))
    except RemoteValidationTransportError as e:
        _print_error(f"Verification unavailable: {e.reason}")
        raise typer.Exit(1)

    if result is None:
        _print_warning("No information returned")
        return

    typer.echo(f"  valid:        {result.valid}")
    typer.echo(f"  status:       {result.status}")
    typer.echo(f"  sub_status:   {result.sub_status}")
    typer.echo(f"  did_you_mean: {result.did_you_mean}")


if __name__ == "__main__":
    app()
