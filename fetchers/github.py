"""GitHub API client for fetching open pull requests.

A single request against the list endpoint; no pagination and no retries.
"""

import logging
from typing import Optional

import requests

from models.data_models import ChangeRequest
from utils.errors import ApiError, RepositoryNotFoundError

logger = logging.getLogger(__name__)


class GitHubFetcher:
    """Fetch open pull requests from the GitHub REST API."""

    def __init__(self, token: str, base_url: str = "https://api.github.com"):
        """Initialize GitHub API client.

        Args:
            token: OAuth access token (from the device flow or the cache)
            base_url: REST API base URL (GitHub Enterprise installs differ)
        """
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.headers = {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {token}",
            "X-GitHub-Api-Version": "2022-11-28"
        }

    def _make_github_request(self, url: str, params: Optional[dict] = None) -> requests.Response:
        """Make a GitHub API GET request and log rate limit headers.

        Raises:
            ApiError: On transport errors (no HTTP status available)
        """
        try:
            response = requests.get(url, headers=self.headers, params=params)
        except requests.RequestException as e:
            logger.error(f"Request to {url} failed: {e}")
            raise ApiError(f"GitHub API request failed: {e}") from e

        remaining = response.headers.get("X-RateLimit-Remaining")
        limit = response.headers.get("X-RateLimit-Limit")
        if remaining and limit:
            logger.debug(f"Rate limit: {remaining}/{limit} remaining")

        return response

    def fetch_open_pull_requests(
        self,
        owner: str,
        repo: str,
        per_page: int = 100
    ) -> list[ChangeRequest]:
        """Fetch the open pull requests of a repository.

        Only the first page is requested; the platform's ``state=open``
        filter is trusted and results keep the API's order.

        Args:
            owner: Repository owner (e.g., "facebook")
            repo: Repository name (e.g., "react")
            per_page: Page size (max 100)

        Returns:
            List of ChangeRequest models in API order

        Raises:
            RepositoryNotFoundError: On 404 (typo in owner/repo or missing token scope)
            ApiError: On any other non-2xx response, or a body that is not a
                list of pull requests
        """
        logger.info(f"Fetching open PRs from {owner}/{repo}")

        url = f"{self.base_url}/repos/{owner}/{repo}/pulls"
        params = {"state": "open", "per_page": per_page}
        response = self._make_github_request(url, params=params)

        if response.status_code == 404:
            logger.error(f"Repository {owner}/{repo} not found (404)")
            raise RepositoryNotFoundError(
                f"Repository not found: {owner}/{repo} "
                "(check the remote URL and that the token has the 'repo' scope)",
                status_code=404,
                reason=response.reason,
            )

        if not 200 <= response.status_code < 300:
            if response.status_code in (401, 403):
                logger.error(
                    f"Authentication error: {response.status_code} - "
                    f"{response.text[:200]}"
                )
            raise ApiError(
                f"GitHub API failed: {response.status_code} {response.reason}",
                status_code=response.status_code,
                reason=response.reason,
            )

        try:
            prs = [ChangeRequest.from_github_api(pr) for pr in response.json()]
        except (ValueError, KeyError, TypeError) as e:
            logger.error(f"Unexpected response body from {url}: {response.text[:200]}")
            raise ApiError(
                f"Unexpected response from GitHub API for {owner}/{repo}: {e}",
                status_code=response.status_code,
                reason=response.reason,
            ) from e

        logger.info(f"Found {len(prs)} open PR(s) in {owner}/{repo}")

        return prs
