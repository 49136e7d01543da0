from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    app_name: str = "hearthstone-decks-server"
    debug: bool = False

    http_host: str = "localhost"
    http_port: int = 3000

    card_api_url: str = "https://api.hearthstonejson.com/v1/latest/zhCN/cards.json"
    card_image_url_template: str = (
        "https://art.hearthstonejson.com/v1/render/latest/zhCN/512x/{CARD_ID}.png"
    )

    # Hours before the cached card list is fetched again
    card_data_ttl_hours: float = Field(default=24, validation_alias="CARD_DATA_TTL")
    card_fetch_timeout: float = 30.0


settings = Settings()


# =============================================================================
# TOOL LIMITS
# =============================================================================

# Default and maximum number of cards returned by a name search
DEFAULT_SEARCH_LIMIT = 10
MAX_SEARCH_LIMIT = 50
