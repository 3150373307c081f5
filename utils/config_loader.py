"""Configuration loader that reads from .env and validates with Pydantic."""

import os
import sys
from pathlib import Path
from dotenv import load_dotenv
from pydantic import ValidationError

from models.config_models import Config, CredentialsConfig


def load_config() -> Config:
    """
    Load and validate configuration from environment variables.

    Reads from .env file in the project root. Unset variables fall back
    to the defaults declared on the Config model.

    Returns:
        Config: Validated configuration object

    Raises:
        SystemExit: If configuration is invalid
    """
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    # Only pass what is set so model defaults apply
    settings = {
        field: os.getenv(env_var)
        for field, env_var in (
            ("organization", "DASHBOARD_ORG"),
            ("author", "DASHBOARD_AUTHOR"),
            ("output_path", "DASHBOARD_OUTPUT"),
            ("user_agent", "DASHBOARD_USER_AGENT"),
            ("log_level", "LOG_LEVEL"),
        )
        if os.getenv(env_var) is not None
    }

    try:
        config = Config(
            credentials=CredentialsConfig(
                github_token=os.getenv("GITHUB_TOKEN"),
            ),
            **settings,
        )

        return config

    except ValidationError as e:
        print("❌ Configuration validation failed:", file=sys.stderr)
        print("\nPlease check your .env file. Missing or invalid fields:", file=sys.stderr)

        for error in e.errors():
            field_path = " → ".join(str(x) for x in error["loc"])
            message = error["msg"]
            print(f"  • {field_path}: {message}", file=sys.stderr)

        print("\nHint: Copy .env.example to .env and adjust the values.", file=sys.stderr)
        sys.exit(1)
