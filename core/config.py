"""
Console Configuration.

Manages environment variables for the HR admin console.
Uses prefix HR_ to avoid conflicts with other tools sharing the shell.

The bank transfer letter template is configurable as well, since the
recipient bank and the paying account differ between deployments.
"""

from functools import lru_cache
from typing import Annotated

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PAGE_SIZE_OPTIONS = (20, 50, 100)


class ConsoleSettings(BaseSettings):
    """
    HR console settings loaded from environment variables.

    All variables use the HR_ prefix.
    Sensitive values use SecretStr so they never end up in logs or reprs.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Remote API
    api_base_url: Annotated[
        str,
        Field(
            description="Base URL of the HR/payroll API",
            validation_alias="HR_API_BASE_URL",
        ),
    ] = "http://localhost:5000"

    api_token: Annotated[
        SecretStr,
        Field(
            description="Bearer token for protected endpoints",
            validation_alias="HR_API_TOKEN",
        ),
    ] = SecretStr("")

    request_timeout_seconds: Annotated[
        float,
        Field(
            description="HTTP client timeout applied to every request",
            validation_alias="HR_REQUEST_TIMEOUT_SECONDS",
        ),
    ] = 30.0

    # Listing behaviour
    search_debounce_ms: Annotated[
        int,
        Field(
            ge=0,
            description="Delay before a typed search is committed",
            validation_alias="HR_SEARCH_DEBOUNCE_MS",
        ),
    ] = 500

    default_page_size: Annotated[
        int,
        Field(
            description="Initial page size for list views",
            validation_alias="HR_DEFAULT_PAGE_SIZE",
        ),
    ] = 20

    # Exports
    export_fetch_limit: Annotated[
        int,
        Field(
            ge=1,
            description="Row limit used to fetch a full dataset for export",
            validation_alias="HR_EXPORT_FETCH_LIMIT",
        ),
    ] = 999999

    export_dir: Annotated[
        str,
        Field(
            description="Directory where exported files are written",
            validation_alias="HR_EXPORT_DIR",
        ),
    ] = "exports"

    # Logging
    log_level: Annotated[
        str,
        Field(
            validation_alias="HR_LOG_LEVEL",
        ),
    ] = "INFO"

    # Signed-in operator
    user_email: Annotated[
        str,
        Field(
            description="E-mail of the operator, sent as grantedBy/revokedBy",
            validation_alias="HR_USER_EMAIL",
        ),
    ] = ""

    user_role: Annotated[
        str,
        Field(
            description="Role of the operator (Admin, Developer, HR-ADMIN, client, employee)",
            validation_alias="HR_USER_ROLE",
        ),
    ] = "employee"

    # Bank transfer letter
    letter_recipient_title: Annotated[
        str, Field(validation_alias="HR_LETTER_RECIPIENT_TITLE")
    ] = "The Manager,"

    letter_bank_name: Annotated[
        str, Field(validation_alias="HR_LETTER_BANK_NAME")
    ] = "Dutch-Bangla Bank Limited"

    letter_bank_branch: Annotated[
        str, Field(validation_alias="HR_LETTER_BANK_BRANCH")
    ] = "Gaibandha Branch, Gaibandha."

    letter_account_name: Annotated[
        str, Field(validation_alias="HR_LETTER_ACCOUNT_NAME")
    ] = "Graphics Action"

    letter_account_number: Annotated[
        str, Field(validation_alias="HR_LETTER_ACCOUNT_NUMBER")
    ] = "2781100021682"

    letter_currency: Annotated[
        str, Field(validation_alias="HR_LETTER_CURRENCY")
    ] = "TAKA"

    @field_validator("default_page_size")
    @classmethod
    def _check_page_size(cls, value: int) -> int:
        if value not in PAGE_SIZE_OPTIONS:
            raise ValueError(f"default_page_size must be one of {PAGE_SIZE_OPTIONS}")
        return value

    @property
    def search_debounce_seconds(self) -> float:
        """Debounce delay expressed in seconds for asyncio timers."""
        return self.search_debounce_ms / 1000


@lru_cache
def get_settings() -> ConsoleSettings:
    """
    Get cached console settings.

    Uses LRU cache to ensure settings are loaded only once.

    Returns:
        ConsoleSettings: Console settings instance.
    """
    return ConsoleSettings()
