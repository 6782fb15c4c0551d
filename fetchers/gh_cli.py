"""gh CLI backed fetcher for open pull requests.

Parallel implementation to GitHubFetcher. The gh CLI already knows the
repository and holds its own credentials, so no device flow and no remote
URL parsing are needed.
"""

import json
import logging

from models.data_models import ChangeRequest
from utils.commands import run_capture
from utils.errors import ApiError

logger = logging.getLogger(__name__)

PR_FIELDS = "number,baseRefName,headRefName,title,isDraft,url"


class GhCliFetcher:
    """Fetch open pull requests through ``gh pr list``."""

    def __init__(self, limit: int = 100):
        """
        Args:
            limit: Maximum number of pull requests gh returns
        """
        self.limit = limit

    def fetch_open_pull_requests(self) -> list[ChangeRequest]:
        """List open pull requests of the current repository.

        Raises:
            ResolutionError: If gh is missing or exits non-zero (exit code propagated)
            ApiError: If gh prints something that is not a JSON list of PRs
        """
        logger.info("Fetching open PRs via gh CLI")
        output = run_capture([
            "gh", "pr", "list",
            "--state", "open",
            "--limit", str(self.limit),
            "--json", PR_FIELDS,
        ])

        try:
            prs = [ChangeRequest.from_gh_cli(pr) for pr in json.loads(output)]
        except (ValueError, KeyError, TypeError) as e:
            raise ApiError(f"Unexpected output from gh pr list: {output[:200]}") from e

        logger.info(f"Found {len(prs)} open PR(s)")
        return prs
