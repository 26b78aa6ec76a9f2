"""Current git branch lookup."""

import logging
import subprocess

from .constants import GIT_TIMEOUT

logger = logging.getLogger(__name__)


def get_git_branch(cwd: str | None) -> str | None:
    """Return the checked-out branch name for ``cwd``, or None."""
    if not cwd:
        return None
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--abbrev-ref", "HEAD"],
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=GIT_TIMEOUT,
            check=False,
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug("git branch lookup failed for %s: %s", cwd, e)
        return None
    if result.returncode != 0:
        return None
    return result.stdout.strip() or None
