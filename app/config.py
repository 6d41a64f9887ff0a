from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Auth provider (Supabase / GoTrue)
    supabase_url: str = Field(default="")
    supabase_anon_key: str = Field(default="")
    auth_timeout: int = Field(default=15)

    # Credential rules
    password_min_length: int = Field(default=6)

    # Email verification (ZeroBounce direct, otherwise the Supabase RPC)
    zerobounce_api_key: str = Field(default="")
    verification_timeout: int = Field(default=10)

    # Analytics
    posthog_api_key: str = Field(default="")
    posthog_host: str = Field(default="https://us.i.posthog.com")

    # Application
    base_url: str = Field(default="http://localhost:8000")
    debug: bool = Field(default=False)
    log_dir: str = Field(default="./logs")


class RecoveryConfig:
    """Email-correction recovery configuration from config.yml."""

    def __init__(self, data: dict[str, Any]) -> None:
        self.generic_error_codes: list[str] = data.get(
            "generic_error_codes", ["unexpected_failure"]
        )
        self.masked_failure_patterns: list[str] = data.get(
            "masked_failure_patterns", ["Database error saving new user"]
        )
        self.verification_rpc: str = data.get(
            "verification_rpc", "validate_email_with_zerobounce"
        )
        # Submission modes whose opaque failures get a paid verification call
        self.remote_check_modes: list[str] = data.get("remote_check_modes", ["sign_up"])


class MessagesConfig:
    """User-facing messages from config.yml."""

    def __init__(self, data: dict[str, Any]) -> None:
        self.sign_up_success: str = data.get(
            "sign_up_success", "Account created! You can now sign in."
        )
        self.sign_in_success: str = data.get("sign_in_success", "Signed in.")
        self.sign_up_failed: str = data.get("sign_up_failed", "Signup failed. Please try again.")
        self.sign_in_failed: str = data.get("sign_in_failed", "Sign in failed. Please try again.")
        self.email_rejected: str = data.get(
            "email_rejected", "We couldn't verify this email. Please check and try again."
        )
        self.suggestion: str = data.get("suggestion", "Did you mean: {candidate}?")


class AppConfig:
    """Combined application configuration from .env and config.yml."""

    def __init__(self, config_path: Path | None = None) -> None:
        self.settings = Settings()
        self._load_yaml(config_path or Path("config.yml"))

    def _load_yaml(self, config_path: Path) -> None:
        if config_path.exists():
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
        else:
            data = {}

        self.recovery = RecoveryConfig(data.get("recovery", {}))
        self.messages = MessagesConfig(data.get("messages", {}))


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


@lru_cache
def get_config() -> AppConfig:
    """Get cached full config instance."""
    return AppConfig()
