"""
Unit Tests for Settings
"""
from app.core.config import Settings, parse_cors_origins


class TestSettings:
    """Test environment-driven settings"""

    def test_environment_overrides_defaults(self, monkeypatch):
        monkeypatch.setenv("MAX_PROMPT_LENGTH", "50")
        monkeypatch.setenv("AI_RATE_LIMIT", "5/minute")

        settings = Settings(_env_file=None)

        assert settings.MAX_PROMPT_LENGTH == 50
        assert settings.AI_RATE_LIMIT == "5/minute"

    def test_names_are_case_sensitive(self, monkeypatch):
        monkeypatch.delenv("MAX_PROMPT_LENGTH", raising=False)
        monkeypatch.setenv("max_prompt_length", "7")

        assert Settings(_env_file=None).MAX_PROMPT_LENGTH == 1000

    def test_unknown_entries_are_ignored(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("NOT_A_SETTING=1\nDEFAULT_ROOT_NAME=my-app\n", encoding="utf-8")

        settings = Settings(_env_file=str(env_file))

        assert settings.DEFAULT_ROOT_NAME == "my-app"
        assert not hasattr(settings, "NOT_A_SETTING")
        assert Settings.model_config["extra"] == "ignore"

    def test_ai_enabled_requires_non_blank_key(self, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "   ")
        assert Settings(_env_file=None).AI_ENABLED is False

        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-test")
        assert Settings(_env_file=None).AI_ENABLED is True


class TestParseCorsOrigins:
    """Test CORS origin parsing"""

    def test_comma_separated(self):
        assert parse_cors_origins("http://a, http://b,") == ["http://a", "http://b"]

    def test_json_list(self):
        assert parse_cors_origins('["http://a"]') == ["http://a"]

    def test_list_passthrough(self):
        assert parse_cors_origins(["http://a"]) == ["http://a"]
