from pydantic import AliasChoices, AnyUrl, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=(".env", "../.env"), extra="ignore")

    whop_api_key: str | None = Field(
        default=None, validation_alias=AliasChoices("WHOP_API_KEY")
    )
    whop_product_id: str | None = Field(
        default=None, validation_alias=AliasChoices("WHOP_PRODUCT_ID")
    )
    whop_app_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("WHOP_APP_ID", "NEXT_PUBLIC_WHOP_APP_ID"),
    )
    whop_app_public_key: str | None = Field(
        default=None, validation_alias=AliasChoices("WHOP_APP_PUBLIC_KEY")
    )
    whop_api_base_url: AnyUrl = Field(
        default="https://api.whop.com",
        validate_default=True,
        validation_alias=AliasChoices("WHOP_API_BASE_URL"),
    )
    whop_request_timeout_seconds: float = Field(
        default=10.0, validation_alias=AliasChoices("WHOP_REQUEST_TIMEOUT_SECONDS")
    )
    environment: str = Field(
        default="production", validation_alias=AliasChoices("APP_ENV", "NODE_ENV")
    )
    sentry_dsn: str | None = Field(
        default=None, validation_alias=AliasChoices("SENTRY_DSN", "BACKEND_SENTRY_DSN")
    )
    sentry_traces_sample_rate: float = Field(
        default=0.0,
        validation_alias=AliasChoices(
            "SENTRY_TRACES_SAMPLE_RATE",
            "BACKEND_SENTRY_TRACES_SAMPLE_RATE",
        ),
    )

    @field_validator(
        "whop_api_key",
        "whop_product_id",
        "whop_app_id",
        "whop_app_public_key",
        "sentry_dsn",
        mode="before",
    )
    @classmethod
    def _blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("whop_app_public_key")
    @classmethod
    def _unescape_pem(cls, value):
        # single-line env files carry the PEM with literal \n
        if value and "\\n" in value:
            return value.replace("\\n", "\n")
        return value

    @field_validator("environment", mode="before")
    @classmethod
    def _normalize_environment(cls, value):
        if isinstance(value, str):
            return value.strip().lower() or "production"
        return value

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def whop_api_base(self) -> str:
        return self.whop_api_base_url.unicode_string().rstrip("/")


settings = Settings()
