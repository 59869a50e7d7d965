"""Version-control queries for incremental scans."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

from keycheck.constants.scanner import GIT_DIFF_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


def changed_files(root: Path, base_ref: str, *, timeout: float = GIT_DIFF_TIMEOUT_SECONDS) -> set[str] | None:
    """Paths (relative to ``root``) changed since ``base_ref``.

    Returns ``None`` when git is unavailable, ``root`` is not inside a
    repository, the ref does not resolve, or the query times out.
    """
    git = shutil.which("git")
    if git is None:
        logger.warning("git executable not found; running a full scan")
        return None

    try:
        completed = subprocess.run(
            [git, "diff", "--name-only", "--relative", base_ref, "--"],
            cwd=root,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        logger.warning("git diff against %s timed out after %.1fs; running a full scan", base_ref, timeout)
        return None
    except OSError as exc:
        logger.warning("git diff against %s failed: %s; running a full scan", base_ref, exc)
        return None

    if completed.returncode != 0:
        logger.warning(
            "git diff against %s failed (exit %d): %s; running a full scan",
            base_ref,
            completed.returncode,
            completed.stderr.strip(),
        )
        return None

    return {line.strip() for line in completed.stdout.splitlines() if line.strip()}
