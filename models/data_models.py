"""Data models for repository identity, credentials and pull requests."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RemoteDescriptor(BaseModel):
    """Owner and name of a GitHub repository, derived from a remote URL."""

    model_config = ConfigDict(frozen=True)

    owner: str
    repo_name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo_name}"


class Credential(BaseModel):
    """Bearer token plus the moment it was obtained.

    Stored in the cache file as ``{"access_token": ..., "created_at": ...}``.
    """

    model_config = ConfigDict(populate_by_name=True)

    token: str = Field(..., min_length=1, alias="access_token")
    obtained_at: datetime = Field(..., alias="created_at")


class DeviceCode(BaseModel):
    """Response of the device authorization endpoint.

    Form-encoded responses deliver every value as a string; pydantic coerces
    ``interval`` and ``expires_in`` to ints.
    """

    device_code: str
    user_code: str
    verification_uri: str
    interval: int = 5
    expires_in: int = 900


class ChangeRequest(BaseModel):
    """Snapshot of one open pull request."""

    model_config = ConfigDict(frozen=True)

    number: int
    source_branch: str
    target_branch: str
    title: str
    is_draft: bool = False
    url: str

    @classmethod
    def from_github_api(cls, data: dict[str, Any]) -> "ChangeRequest":
        """Build from a REST ``/pulls`` list item."""
        return cls(
            number=data["number"],
            source_branch=data["head"]["ref"],
            target_branch=data["base"]["ref"],
            title=data.get("title") or "",
            is_draft=bool(data.get("draft", False)),
            url=data["html_url"],
        )

    @classmethod
    def from_gh_cli(cls, data: dict[str, Any]) -> "ChangeRequest":
        """Build from an item of ``gh pr list --json ...`` output."""
        return cls(
            number=data["number"],
            source_branch=data["headRefName"],
            target_branch=data["baseRefName"],
            title=data.get("title") or "",
            is_draft=bool(data.get("isDraft", False)),
            url=data["url"],
        )
