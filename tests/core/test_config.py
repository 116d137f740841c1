"""Settings: environment-driven configuration defaults and URL normalisation."""

from sql_gateway.config import Settings
from sql_gateway.core.statement_builder import DEFAULT_HIDDEN_PREFIXES


def test_defaults():
    settings = Settings(_env_file=None, api_key="")
    assert settings.hidden_table_prefixes == ["sqlite_", "_cf_"]
    assert settings.cors_allow_origin == "*"
    assert settings.cors_allow_headers == ["Content-Type", "X-API-Key"]
    assert settings.api_key == ""


def test_plain_sqlite_url_gets_async_driver():
    settings = Settings(_env_file=None, database_url="sqlite:///./data.db")
    assert settings.database_url == "sqlite+aiosqlite:///./data.db"


def test_async_url_left_alone():
    url = "sqlite+aiosqlite:///./data.db"
    assert Settings(_env_file=None, database_url=url).database_url == url


def test_api_key_read_from_environment(monkeypatch):
    monkeypatch.setenv("API_KEY", "from-env")
    assert Settings(_env_file=None).api_key == "from-env"


def test_hidden_prefix_default_comes_from_statement_builder():
    settings = Settings(_env_file=None)
    assert settings.hidden_table_prefixes == list(DEFAULT_HIDDEN_PREFIXES)
