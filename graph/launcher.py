"""Write the generated page to disk and open it in the default browser."""

import logging
import webbrowser
from pathlib import Path
from typing import Callable, Optional

from utils.errors import StorageError

logger = logging.getLogger(__name__)


def write_document(document: str, path: Path) -> Path:
    """Write ``document`` to ``path`` (overwriting), creating parent directories.

    Returns:
        The absolute path written

    Raises:
        StorageError: If the file cannot be written
    """
    path = Path(path).expanduser().resolve()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(document, encoding="utf-8")
    except OSError as e:
        raise StorageError(f"Could not write {path}: {e}") from e

    logger.info(f"index.html written: {path}")
    return path


def file_url(path: Path) -> str:
    return Path(path).resolve().as_uri()


def open_in_browser(url: str, opener: Optional[Callable[[str], bool]] = None) -> bool:
    """Open ``url`` with the platform's default application.

    Never raises: a failure is logged and the caller falls back to printing
    the path.

    Args:
        url: URL to open (usually a file:// URL)
        opener: Callable taking the URL (default: webbrowser.open)
    """
    if opener is None:
        opener = webbrowser.open

    logger.info("Trying to open the page in your browser...")
    try:
        opened = opener(url)
    except Exception as e:
        # webbrowser.Error, OSError from a missing launcher, or a custom opener
        logger.warning(f"Could not open a browser: {e}")
        return False

    if not opened:
        logger.warning("No browser could be opened automatically")
        return False

    return True
