"""Credential validation and canonicalization.

The normalized email (trimmed, lower-cased) is the identity used for every
later comparison, e.g. whether a suggested correction differs from the input.
"""

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ValidationError, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from app.auth.errors import CredentialValidationError

MAX_EMAIL_LENGTH = 255
DEFAULT_MIN_PASSWORD_LENGTH = 6


def normalize_email(email: str) -> str:
    """Canonical form of an email address. Idempotent."""
    return email.strip().lower()


def email_domain(email: str) -> str:
    """Domain part of an email, for logs and analytics."""
    return email.rsplit("@", 1)[1] if "@" in email else "unknown"


def is_valid_email(email: str) -> bool:
    """True if the address is well-formed. No DNS lookups."""
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


class Credentials(BaseModel):
    """Validated credentials for one submission attempt.

    Rules are checked in field order and the first failure wins. Pass
    ``min_password_length`` through the validation context.
    """

    email: str
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def validate_email_address(cls, v: object) -> str:
        if not isinstance(v, str):
            raise PydanticCustomError("email_required", "Email is required")
        email = normalize_email(v)
        if not email:
            raise PydanticCustomError("email_required", "Email is required")
        if len(email) > MAX_EMAIL_LENGTH:
            raise PydanticCustomError(
                "email_too_long", "Email must be less than 255 characters"
            )
        if not is_valid_email(email):
            raise PydanticCustomError("email_invalid", "Please enter a valid email address")
        return email

    @field_validator("password", mode="before")
    @classmethod
    def validate_password(cls, v: object, info: ValidationInfo) -> str:
        if not isinstance(v, str) or not v:
            raise PydanticCustomError("password_required", "Password is required")
        min_length = (info.context or {}).get("min_password_length", DEFAULT_MIN_PASSWORD_LENGTH)
        if len(v) < min_length:
            raise PydanticCustomError(
                "password_too_short",
                "Password must be at least {min_length} characters",
                {"min_length": min_length},
            )
        return v


def normalize_credentials(
    email: str,
    password: str,
    min_password_length: int = DEFAULT_MIN_PASSWORD_LENGTH,
) -> Credentials:
    """
    Validate raw credentials and return them in canonical form.

    Args:
        email: Email as typed by the user
        password: Password as typed by the user
        min_password_length: Minimum accepted password length

    Returns:
        Credentials with a trimmed, lower-cased email

    Raises:
        CredentialValidationError: With the first violated rule's message
    """
    try:
        return Credentials.model_validate(
            {"email": email, "password": password},
            context={"min_password_length": min_password_length},
        )
    except ValidationError as e:
        first = e.errors()[0]
        field = str(first["loc"][0]) if first["loc"] else None
        raise CredentialValidationError(first["msg"], field=field) from None
