"""
Tests for environment driven settings
"""

from config import DEFAULT_ALLOWED_ORIGINS, Settings

ENV_VARS = [
    "PORT",
    "HOST",
    "POKEMON_TCG_API_KEY",
    "POKEMON_TCG_API_URL",
    "UPSTREAM_TIMEOUT",
    "ALLOWED_ORIGINS",
]


def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults(monkeypatch):
    clean_env(monkeypatch)
    settings = Settings(_env_file=None)

    assert settings.port == 3001
    assert settings.pokemon_tcg_api_key == ""
    assert not settings.api_key_configured
    assert settings.pokemon_tcg_api_url == "https://api.pokemontcg.io/v2"
    assert settings.upstream_timeout == 30
    assert settings.allowed_origins == DEFAULT_ALLOWED_ORIGINS


def test_values_from_environment(monkeypatch):
    clean_env(monkeypatch)
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("POKEMON_TCG_API_KEY", "my-key")
    monkeypatch.setenv("ALLOWED_ORIGINS", '["https://cards.example"]')

    settings = Settings(_env_file=None)

    assert settings.port == 8080
    assert settings.pokemon_tcg_api_key == "my-key"
    assert settings.api_key_configured
    assert settings.allowed_origins == ["https://cards.example"]
