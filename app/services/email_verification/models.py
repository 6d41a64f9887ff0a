"""Email verification models."""

from pydantic import BaseModel, ConfigDict, Field


class RemoteValidationResult(BaseModel):
    """Structured answer of an email-verification service.

    Every field is optional: a missing field means the service had
    nothing to say about it.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    email: str | None = None
    valid: bool | None = None
    status: str | None = None
    sub_status: str | None = Field(default=None, alias="subStatus")
    did_you_mean: str | None = Field(default=None, alias="didYouMean")
    message: str | None = None
    provider: str = "unknown"
