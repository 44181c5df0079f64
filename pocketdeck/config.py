from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "PocketDeck"
    debug: bool = False
    log_level: str = "INFO"

    card_site_url: str = "https://pocket.limitlesstcg.com"
    user_agent: str = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"

    # Seconds before an outbound page fetch is abandoned
    request_timeout: float = 10.0

    # When True, search resolves every hit through the card detail page
    # When False, search returns the partial records from the results grid
    search_fetch_details: bool = True


settings = Settings()


# =============================================================================
# DECK RULES
# =============================================================================

MAX_DECK_SIZE = 60

MAX_COPIES_PER_CARD = 4

# Fixed section order for deck exports
DECK_CATEGORIES = ("Pokémon", "Trainer", "Energy")


# =============================================================================
# BROWSE PAGING
# =============================================================================

DEFAULT_PAGE = 1

DEFAULT_PAGE_LIMIT = 20
