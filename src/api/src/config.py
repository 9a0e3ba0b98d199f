from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ALLOWED_ORIGINS = [
    "https://collection.summitcards.co.uk",
    "https://summitcards.co.uk",
    "https://www.summitcards.co.uk",
    "http://localhost:5173",
    "http://localhost:3000",
    "http://127.0.0.1:5173",
]


class Settings(BaseSettings):
    host: str = "0.0.0.0"
    port: int = 3001
    log_level: str = "INFO"

    # Pokemon TCG API. Without a key requests run under the default rate limits.
    pokemon_tcg_api_url: str = "https://api.pokemontcg.io/v2"
    pokemon_tcg_api_key: str = ""
    upstream_timeout: float = 30.0

    allowed_origins: list[str] = DEFAULT_ALLOWED_ORIGINS

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    @property
    def api_key_configured(self) -> bool:
        return bool(self.pokemon_tcg_api_key)


@lru_cache
def get_settings() -> Settings:
    return Settings()
