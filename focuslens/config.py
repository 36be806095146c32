from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="FOCUSLENS_")

    app_name: str = "FocusLens"
    debug: bool = False

    # Provider adapter (OmniFocus via osascript)
    osascript_path: str = "osascript"
    provider_timeout_seconds: float = 30.0


settings = Settings()


# =============================================================================
# RESULT QUOTA SHARES
# =============================================================================

# Per-tier share of the result budget, in percent (high / medium / low).
# Each tier capacity is floor(budget * percent / 100), so capacities never
# sum past the budget.
HIGH_TIER_PERCENT = 40
MEDIUM_TIER_PERCENT = 40
LOW_TIER_PERCENT = 20

# Result budget when the caller does not supply one
DEFAULT_RESULT_BUDGET = 500
