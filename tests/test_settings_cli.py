"""Tests for settings loading and the translator-token CLI."""

from unittest.mock import patch

from click.testing import CliRunner

from translator_token.cli import cli
from translator_token.provider import GLOBAL_AUTHORIZATION_URL, TokenProvider
from translator_token.settings import TranslatorSettings
from translator_token.transport import TokenResponse


class TestSettings:
    """TranslatorSettings reads TRANSLATOR_* variables."""

    def test_defaults(self):
        s = TranslatorSettings(_env_file=None)
        assert s.subscription_key == ""
        assert s.region == ""
        assert s.timeout == 30.0

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("TRANSLATOR_SUBSCRIPTION_KEY", "env-key")
        monkeypatch.setenv("TRANSLATOR_REGION", "westus2")
        monkeypatch.setenv("TRANSLATOR_TIMEOUT", "7.5")
        s = TranslatorSettings(_env_file=None)
        assert s.subscription_key == "env-key"
        assert s.region == "westus2"
        assert s.timeout == 7.5

    def test_strips_whitespace(self):
        s = TranslatorSettings(subscription_key=" k ", region=" westus ", _env_file=None)
        assert s.subscription_key == "k"
        assert s.region == "westus"

    def test_reads_dotenv(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("TRANSLATOR_SUBSCRIPTION_KEY=file-key\n", encoding="utf-8")
        s = TranslatorSettings(_env_file=env_file)
        assert s.subscription_key == "file-key"


class TestCliIssue:
    """translator-token issue prints the Authorization value."""

    def test_prints_bearer_token(self, transport):
        def _from_settings(settings):
            assert settings.subscription_key == "cli-key"
            assert settings.region == "westus"
            return TokenProvider(settings.subscription_key, settings.region, transport=transport)

        with patch("translator_token.cli.TokenProvider.from_settings", side_effect=_from_settings):
            result = CliRunner().invoke(cli, ["issue", "--key", "cli-key", "--region", "westus"])

        assert result.exit_code == 0, result.output
        assert result.output.strip() == "Bearer abc123"

    def test_missing_key_exits_with_error(self):
        result = CliRunner().invoke(cli, ["issue"])
        assert result.exit_code == 1
        assert "subscription key is required" in result.output

    def test_service_error_exits_with_message(self, transport):
        transport.send.return_value = TokenResponse(
            status_code=401, text='{"error": {"message": "Invalid key"}}'
        )

        def _from_settings(settings):
            return TokenProvider(settings.subscription_key, transport=transport)

        with patch("translator_token.cli.TokenProvider.from_settings", side_effect=_from_settings):
            result = CliRunner().invoke(cli, ["issue", "--key", "bad"])

        assert result.exit_code == 1
        assert "Error: Invalid key" in result.output

    def test_key_from_environment(self, monkeypatch, transport):
        monkeypatch.setenv("TRANSLATOR_SUBSCRIPTION_KEY", "env-key")
        seen = {}

        def _from_settings(settings):
            seen["key"] = settings.subscription_key
            return TokenProvider(settings.subscription_key, transport=transport)

        with patch("translator_token.cli.TokenProvider.from_settings", side_effect=_from_settings):
            result = CliRunner().invoke(cli, ["issue"])

        assert result.exit_code == 0, result.output
        assert seen["key"] == "env-key"


class TestCliEndpoint:
    """translator-token endpoint prints the issuance URL."""

    def test_global(self):
        result = CliRunner().invoke(cli, ["endpoint"])
        assert result.exit_code == 0
        assert result.output.strip() == GLOBAL_AUTHORIZATION_URL

    def test_region(self):
        result = CliRunner().invoke(cli, ["endpoint", "--region", "westus"])
        assert result.output.strip() == (
            "https://westus.api.cognitive.microsoft.com/sts/v1.0/issueToken"
        )

    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "translator-token" in result.output
