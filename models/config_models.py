"""Configuration models for validation using Pydantic."""

import os
from pathlib import Path
from typing import Literal, Optional
from pydantic import BaseModel, Field, field_validator, model_validator


PLACEHOLDER_CLIENT_ID = "YOUR_OAUTH_CLIENT_ID_HERE"


def default_config_dir() -> Path:
    """Per-user configuration directory (``$XDG_CONFIG_HOME/pr-graph``)."""
    base = os.getenv("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / "pr-graph"


class Config(BaseModel):
    """Application configuration."""

    # OAuth app used for the device flow (checked when the device flow starts)
    github_client_id: Optional[str] = Field(None, description="GitHub OAuth app client id")
    oauth_scope: str = Field(default="repo", description="OAuth scope requested by the device flow")
    github_api_url: str = Field(default="https://api.github.com", description="REST API base URL")
    github_oauth_url: str = Field(default="https://github.com", description="OAuth endpoints base URL")

    # Where pull requests come from: REST API (device flow) or the gh CLI
    source: Literal["api", "gh"] = Field(default="api", description="Pull request source")
    git_remote: str = Field(default="origin", min_length=1, description="Remote used to identify the repository")
    per_page: int = Field(default=100, ge=1, le=100, description="Page size of the single /pulls request")

    # Files
    credential_cache_path: Path = Field(
        default_factory=lambda: default_config_dir() / "token.json",
        description="Cached access token",
    )
    output_path: Path = Field(default=Path("dist/index.html"), description="Generated HTML page")

    # Rendering
    diagram_direction: Literal["LR", "RL"] = Field(default="LR", description="Mermaid graph direction")
    label_mode: Literal["number", "status"] = Field(default="number", description="Edge label style")
    zoom: bool = Field(default=True, description="Enable D3 zoom/pan on the diagram")
    open_browser: bool = Field(default=True, description="Open the page after writing it")

    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("github_client_id")
    @classmethod
    def validate_client_id(cls, v: Optional[str]) -> Optional[str]:
        """Reject placeholder client ids and normalize blanks to None."""
        if v is None or not v.strip():
            return None
        if PLACEHOLDER_CLIENT_ID in v:
            raise ValueError("GITHUB_CLIENT_ID must be set to your OAuth app's client id")
        return v.strip()

    @field_validator("github_api_url", "github_oauth_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Base URLs must be http(s) and are stored without a trailing slash."""
        if not v.startswith(("https://", "http://")):
            raise ValueError("URL must start with https:// or http://")
        return v.rstrip("/")

    @field_validator("diagram_direction", mode="before")
    @classmethod
    def normalize_direction(cls, v):
        return v.upper() if isinstance(v, str) else v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard levels."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of: {', '.join(valid_levels)}")
        return v_upper

    @model_validator(mode='after')
    def validate_output_path(self):
        """The page and the token cache must not be the same file."""
        if self.output_path.expanduser() == self.credential_cache_path.expanduser():
            raise ValueError("PR_GRAPH_OUTPUT_PATH must differ from PR_GRAPH_CACHE_PATH")
        return self
