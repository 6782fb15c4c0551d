"""On-disk cache for the OAuth access token.

Cache problems never abort a run: a missing, unreadable or malformed file is
a cache miss, and a failed write only costs the next run a new login.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from models.data_models import Credential

logger = logging.getLogger(__name__)

CACHE_FILE_MODE = 0o600


class CredentialStore:
    """Read and write a single cached Credential at a fixed path."""

    def __init__(self, path: Path):
        self.path = Path(path).expanduser()

    def load(self) -> Optional[Credential]:
        """Return the cached credential, or None on any kind of cache miss."""
        if not self.path.exists():
            logger.debug(f"No cached token at {self.path}")
            return None

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            credential = Credential.model_validate(data)
        except (OSError, ValueError, ValidationError) as e:
            logger.warning(f"Ignoring unreadable token cache {self.path}: {e}")
            return None

        logger.debug(f"Loaded cached token from {self.path} (created {credential.obtained_at})")
        return credential

    def save(self, credential: Credential) -> bool:
        """Persist ``credential``; returns False (and logs) if the write fails.

        The file is readable by its owner only.
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, CACHE_FILE_MODE)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(credential.model_dump(mode="json", by_alias=True), f, indent=2)
            # O_CREAT's mode does not apply to a file that already existed
            self.path.chmod(CACHE_FILE_MODE)
        except OSError as e:
            logger.warning(f"Could not cache token at {self.path}: {e}")
            return False

        logger.info(f"Token cached at {self.path}")
        return True

    def clear(self) -> bool:
        """Delete the cache file. Returns True if a file was removed."""
        try:
            self.path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.warning(f"Could not remove token cache {self.path}: {e}")
            return False

        logger.info(f"Removed cached token {self.path}")
        return True
