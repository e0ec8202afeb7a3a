from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # API Keys
    anthropic_api_key: str = ""
    paystack_secret_key: str = ""

    # AI Models
    claude_model: str = "claude-sonnet-4-5-20250929"  # Obligation extraction model
    analysis_max_tokens: int = 8192
    analysis_temperature: float = 0.1

    # Payments
    paystack_base_url: str = "https://api.paystack.co"
    payment_currency: str = "ZAR"
    payment_amount: int = 90  # R90 (roughly $5 USD) for a single contract
    usd_to_zar_rate: int = 18

    @field_validator("paystack_base_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the gateway URL so paths can be appended directly."""
        return v.rstrip("/")

    # Result storage
    result_ttl_seconds: int = 3600  # Paid results are kept for 1 hour
    result_sweep_interval_seconds: int = 600  # 10 minutes

    # Upload limits
    max_upload_size_bytes: int = 10 * 1024 * 1024  # 10MB
    max_request_size_bytes: int = 11 * 1024 * 1024  # Upload plus multipart overhead

    # PostHog analytics
    posthog_api_key: str = ""
    posthog_host: str = "https://us.i.posthog.com"
    posthog_enabled: bool = True

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Rate limiting
    rate_limit_enabled: bool = False
    rate_limit_storage_uri: str = "memory://"
    rate_limit_extract_per_minute: int = 5
    rate_limit_payment_per_minute: int = 10
    rate_limit_general_per_minute: int = 100
    rate_limit_unauthenticated_per_minute: int = 30

    # Debug endpoints (never enable in production)
    debug_endpoints_enabled: bool = False

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
