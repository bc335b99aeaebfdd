"""
Unit tests for Settings validation.
"""
import pytest
from pydantic import ValidationError

from dolet.config import Settings


class TestCandidateLists:
    def test_defaults_are_ordered(self):
        settings = Settings(_env_file=None)

        assert settings.recommendation_models[0] == "gemini-2.5-pro"
        assert settings.chat_models[0] == "gemini-2.0-flash-exp"

    def test_blank_entries_stripped(self):
        settings = Settings(_env_file=None, chat_models=[" gemini-1.5-flash ", ""])

        assert settings.chat_models == ["gemini-1.5-flash"]

    @pytest.mark.parametrize("models", [[], ["", "  "]])
    def test_empty_list_rejected(self, models):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, recommendation_models=models)

    def test_models_from_environment(self, monkeypatch):
        monkeypatch.setenv("CHAT_MODELS", '["custom-a", "custom-b"]')

        settings = Settings(_env_file=None)

        assert settings.chat_models == ["custom-a", "custom-b"]


class TestDefaults:
    def test_timeout_and_cache_defaults(self, monkeypatch):
        monkeypatch.delenv("VERTEX_TIMEOUT", raising=False)
        monkeypatch.delenv("VERTEX_TOKEN_CACHE_SECONDS", raising=False)

        settings = Settings(_env_file=None)

        assert settings.vertex_timeout == 1200
        assert settings.vertex_token_cache_seconds == 0
        assert settings.vertex_location
