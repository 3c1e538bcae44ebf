"""Configuration — verifies env-driven settings and their guards."""

import pytest
from pydantic import ValidationError

from cleancrud.config import Settings


def test_postgres_url_normalized_for_asyncpg():
    settings = Settings(database_url="postgresql://u:p@host:5432/db")
    assert settings.database_url == "postgresql+asyncpg://u:p@host:5432/db"


def test_other_urls_untouched():
    assert Settings(database_url="sqlite+aiosqlite://").database_url == "sqlite+aiosqlite://"


def test_default_page_size_within_bounds():
    with pytest.raises(ValidationError):
        Settings(default_page_size=500)


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("TOKEN_TTL_MINUTES", "5")
    monkeypatch.setenv("BOOTSTRAP_ADMIN_EMAIL", "root@example.com")
    settings = Settings()
    assert settings.token_ttl_minutes == 5
    assert settings.bootstrap_admin_email == "root@example.com"
