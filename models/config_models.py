"""Configuration models for validation using Pydantic."""

from typing import Optional
from pydantic import BaseModel, Field, field_validator


class CredentialsConfig(BaseModel):
    """API credentials loaded from environment variables."""

    # Optional: unauthenticated search works, just with a lower rate limit
    github_token: Optional[str] = Field(None, description="GitHub personal access token")

    @field_validator("github_token")
    @classmethod
    def validate_github_token(cls, v: Optional[str]) -> Optional[str]:
        """Reject the placeholder token from .env.example."""
        if v == "ghp_your_token_here":
            raise ValueError("GitHub token must be set in .env file (or removed)")
        return v or None


class Config(BaseModel):
    """Application configuration."""

    credentials: CredentialsConfig = Field(default_factory=CredentialsConfig)
    organization: str = Field(default="agrc", min_length=1, description="GitHub organization to search")
    author: str = Field(default="dependabot[bot]", min_length=1, description="PR author to search for")
    output_path: str = Field(default="dependabot-prs.html", min_length=1, description="HTML report file")
    user_agent: str = Field(default="dependabot-pr-dashboard", min_length=1, description="User-Agent header value")
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard levels."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of: {', '.join(valid_levels)}")
        return v_upper
