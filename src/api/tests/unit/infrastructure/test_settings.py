"""Unit tests for infrastructure settings."""

import pytest
from pydantic import ValidationError

from infrastructure.settings import AuthSettings, DatabaseSettings, ImportSettings


class TestDatabaseSettingsPoolConfiguration:
    """Tests for connection pool configuration."""

    def test_default_pool_settings(self):
        settings = DatabaseSettings()
        assert settings.pool_min_connections >= 1
        assert settings.pool_max_connections >= settings.pool_min_connections

    def test_pool_max_must_be_greater_than_or_equal_to_min(self):
        with pytest.raises(ValidationError) as exc_info:
            DatabaseSettings(pool_min_connections=10, pool_max_connections=5)

        assert "pool_max_connections" in str(exc_info.value)

    def test_pool_max_equal_to_min_is_valid(self):
        settings = DatabaseSettings(pool_min_connections=5, pool_max_connections=5)
        assert settings.pool_max_connections == 5

    def test_pool_min_must_be_positive(self):
        with pytest.raises(ValidationError):
            DatabaseSettings(pool_min_connections=0)

    def test_connection_string_omits_password(self):
        settings = DatabaseSettings(
            host="db", port=5433, database="book", username="chef", password="s3cret"
        )

        assert settings.connection_string == "postgresql://chef@db:5433/book"
        assert "s3cret" not in settings.connection_string


class TestAuthSettings:
    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("RECIPEBOOK_AUTH_JWT_SECRET", "from-env")
        monkeypatch.setenv("RECIPEBOOK_AUTH_GROUP_ID_CLAIM", "tenant")

        settings = AuthSettings()

        assert settings.jwt_secret.get_secret_value() == "from-env"
        assert settings.group_id_claim == "tenant"
        assert settings.user_id_claim == "sub"


class TestImportSettings:
    def test_import_disabled_by_default(self, monkeypatch):
        monkeypatch.delenv("RECIPEBOOK_IMPORT_EXTRACTOR_URL", raising=False)

        settings = ImportSettings()

        assert settings.extractor_url is None
        assert settings.max_imports_per_window == 10
        assert settings.window_seconds == 3600

    def test_rejects_non_positive_allowance(self):
        with pytest.raises(ValidationError):
            ImportSettings(max_imports_per_window=0)
