"""Tests for environment-based settings."""

import pytest
from pydantic import ValidationError

from feed_sync.config.settings import Settings


class TestSettings:
    def test_defaults(self):
        settings = Settings()

        assert settings.articles_table == "news"
        assert settings.fetch_mode == "rss2json"
        assert settings.feed_max_items == 20
        assert settings.feed_test_items == 5
        assert settings.event_log_capacity == 100
        assert settings.default_author == "La Revue"
        assert settings.sources_file is None
        assert not settings.is_production

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("FEED_MAX_ITEMS", "7")
        monkeypatch.setenv("FETCH_MODE", "direct")
        monkeypatch.setenv("ENVIRONMENT", "production")

        settings = Settings()

        assert settings.feed_max_items == 7
        assert settings.fetch_mode == "direct"
        assert settings.is_production

    @pytest.mark.parametrize("table", ["news; DROP TABLE x", "News", "1news"])
    def test_rejects_unsafe_table_name(self, table):
        with pytest.raises(ValidationError):
            Settings(articles_table=table)

    def test_rejects_unknown_fetch_mode(self):
        with pytest.raises(ValidationError):
            Settings(fetch_mode="carrier-pigeon")

    def test_database_pool_defaults(self):
        """Should size the pool for one sync plus one API/health connection."""
        settings = Settings()

        assert settings.db_pool_min_size == 1
        assert settings.db_pool_max_size == 2
        assert settings.db_command_timeout == 15.0

    def test_rejects_non_positive_command_timeout(self):
        with pytest.raises(ValidationError):
            Settings(db_command_timeout=0)

    def test_debug_env_is_ignored(self, monkeypatch):
        monkeypatch.setenv("DEBUG", "true")

        assert not hasattr(Settings(), "debug")
