"""Tests for configuration loading and validation."""

import pytest
from pydantic import ValidationError

from models.config_models import Config, CredentialsConfig
from utils.config_loader import load_config


class TestCredentialsConfig:
    """Test CredentialsConfig validation."""

    def test_valid_token(self):
        creds = CredentialsConfig(github_token="ghp_valid_token")
        assert creds.github_token == "ghp_valid_token"

    def test_token_is_optional(self):
        """Anonymous access is allowed."""
        assert CredentialsConfig().github_token is None
        assert CredentialsConfig(github_token="").github_token is None

    def test_rejects_placeholder_github_token(self):
        with pytest.raises(ValidationError) as exc_info:
            CredentialsConfig(github_token="ghp_your_token_here")
        assert "GitHub token must be set" in str(exc_info.value)


class TestConfig:
    """Test main Config model."""

    def test_defaults(self):
        config = Config()
        assert config.organization == "agrc"
        assert config.author == "dependabot[bot]"
        assert config.output_path == "dependabot-prs.html"
        assert config.user_agent == "dependabot-pr-dashboard"
        assert config.log_level == "INFO"
        assert config.credentials.github_token is None

    def test_log_level_case_insensitive(self):
        assert Config(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            Config(log_level="INVALID")
        assert "Log level must be one of" in str(exc_info.value)

    def test_empty_organization_rejected(self):
        with pytest.raises(ValidationError):
            Config(organization="")


class TestConfigLoader:
    """Test config_loader.load_config() function."""

    def test_load_valid_config(self, test_env):
        config = load_config()

        assert config.credentials.github_token == test_env["github_token"]
        assert config.organization == test_env["organization"]
        assert config.output_path == test_env["output_path"]
        assert config.log_level == test_env["log_level"]

    def test_unset_values_use_defaults(self, monkeypatch):
        for var in ("DASHBOARD_ORG", "DASHBOARD_AUTHOR", "DASHBOARD_OUTPUT", "DASHBOARD_USER_AGENT", "LOG_LEVEL"):
            monkeypatch.delenv(var, raising=False)
        monkeypatch.setattr("utils.config_loader.load_dotenv", lambda **kwargs: False)

        config = load_config()

        assert config.organization == "agrc"
        assert config.author == "dependabot[bot]"

    def test_load_config_with_invalid_values(self, invalid_env, capsys):
        """Invalid configuration exits with a readable message."""
        with pytest.raises(SystemExit) as exc_info:
            load_config()

        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert "Configuration validation failed" in err
        assert "organization" in err
        assert "log_level" in err
