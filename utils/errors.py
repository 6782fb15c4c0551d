"""Error taxonomy for pr-graph.

Every fatal condition is a ``PRGraphError`` subclass. ``main()`` catches the
base class, logs the message and exits with ``exit_code``.
"""

from typing import Optional


class PRGraphError(Exception):
    """Base class for all pr-graph failures."""

    def __init__(self, message: str, exit_code: int = 1):
        super().__init__(message)
        self.exit_code = exit_code


class ConfigError(PRGraphError):
    """Required configuration is missing or invalid (e.g. OAuth client id)."""


class ResolutionError(PRGraphError):
    """Owner/repository could not be determined.

    When ``git`` or ``gh`` itself failed, ``exit_code`` carries its exit status.
    """


class AuthError(PRGraphError):
    """Device flow failed or the platform returned an explicit error."""


class AuthTimeoutError(AuthError):
    """The device code expired before the operator authorized it."""


class ApiError(PRGraphError):
    """Non-2xx response from the pull request listing."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        reason: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason


class RepositoryNotFoundError(ApiError):
    """HTTP 404 - usually a typo in owner/repo or a token without access."""


class StorageError(PRGraphError):
    """Reading or writing a local file failed."""
