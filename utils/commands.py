"""Thin wrapper around subprocess for the git and gh invocations."""

import logging
import subprocess
from typing import Sequence

from utils.errors import ResolutionError

logger = logging.getLogger(__name__)


def run_capture(command: Sequence[str]) -> str:
    """Run an external command and return its stripped stdout.
    
    Args:
        command: Executable and arguments, e.g. ``["git", "remote", "get-url", "origin"]``
    
    Returns:
        Standard output of the command without surrounding whitespace
    
    Raises:
        ResolutionError: If the executable is missing (exit code 1) or the
            command exits non-zero (exit code propagated from the command)
    """
    logger.debug(f"Running: {' '.join(command)}")
    try:
        result = subprocess.run(list(command), capture_output=True, text=True)
    except FileNotFoundError as e:
        raise ResolutionError(f"Command not found: {command[0]} ({e})") from e
    
    if result.returncode != 0:
        stderr = result.stderr.strip() if result.stderr else ""
        raise ResolutionError(
            f"Command failed (exit_code={result.returncode}): {' '.join(command)}"
            + (f"\n{stderr}" if stderr else ""),
            exit_code=result.returncode,
        )
    
    return result.stdout.strip()
