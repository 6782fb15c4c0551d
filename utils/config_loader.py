"""Configuration loader that reads from .env and validates with Pydantic."""

import os
import sys
from typing import Any

from dotenv import find_dotenv, load_dotenv
from pydantic import ValidationError

from models.config_models import Config
from utils.errors import ConfigError


# Environment variable -> Config field
ENV_FIELDS = {
    "GITHUB_CLIENT_ID": "github_client_id",
    "GITHUB_OAUTH_SCOPE": "oauth_scope",
    "GITHUB_API_URL": "github_api_url",
    "GITHUB_OAUTH_URL": "github_oauth_url",
    "PR_GRAPH_SOURCE": "source",
    "PR_GRAPH_REMOTE": "git_remote",
    "PR_GRAPH_PER_PAGE": "per_page",
    "PR_GRAPH_CACHE_PATH": "credential_cache_path",
    "PR_GRAPH_OUTPUT_PATH": "output_path",
    "PR_GRAPH_DIRECTION": "diagram_direction",
    "PR_GRAPH_LABEL": "label_mode",
    "PR_GRAPH_ZOOM": "zoom",
    "LOG_LEVEL": "log_level",
}


def load_config(**overrides: Any) -> Config:
    """
    Load and validate configuration from environment variables.

    Reads the nearest .env file (searching upwards from the working
    directory), then the process environment, then applies ``overrides``
    (typically parsed CLI flags; ``None`` values are ignored).

    Args:
        **overrides: Config field values that take precedence over the environment

    Returns:
        Config: Validated configuration object

    Raises:
        ConfigError: If configuration is invalid or missing required fields
    """
    load_dotenv(dotenv_path=find_dotenv(usecwd=True))

    values: dict[str, Any] = {}
    for env_name, field_name in ENV_FIELDS.items():
        raw = os.getenv(env_name)
        if raw is not None and raw != "":
            values[field_name] = raw

    values.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return Config(**values)

    except ValidationError as e:
        print("❌ Configuration validation failed:", file=sys.stderr)
        print("\nPlease check your .env file. Missing or invalid fields:", file=sys.stderr)

        messages = []
        for error in e.errors():
            field_path = " → ".join(str(x) for x in error["loc"]) or "config"
            message = error["msg"]
            messages.append(f"{field_path}: {message}")
            print(f"  • {field_path}: {message}", file=sys.stderr)

        print("\nHint: Copy .env.example to .env and fill in GITHUB_CLIENT_ID.", file=sys.stderr)
        raise ConfigError("Invalid configuration: " + "; ".join(messages)) from e
