from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "Shortfall"
    debug: bool = False

    database_url: str = "sqlite+aiosqlite:///./shortfall.db"

    archidekt_api_url: str = "https://archidekt.com/api"
    archidekt_user_agent: str = "Shortfall/1.0 (MTG deck conflict checker)"
    archidekt_timeout: float = 15.0

    # Per-IP limit for the Archidekt proxy endpoint
    rate_limit_max_requests: int = 30
    rate_limit_window_seconds: float = 60.0

    # Proxy responses are reused for this long to spare the Archidekt API
    archidekt_cache_ttl_seconds: float = 300.0
    archidekt_cache_max_entries: int = 512


settings = Settings()


# =============================================================================
# PERSISTENCE KEYS
# =============================================================================

COLLECTION_KEY = "mtg-collection"
DECKS_KEY = "mtg-decks"
