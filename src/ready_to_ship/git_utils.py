"""Fetch remote projects for validation.

A project is shallow-cloned into a scratch directory, validated, and removed.
Only the working tree matters to the validators, so the clone carries no
history beyond the requested branch tip.
"""

import logging
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

from git import Repo

logger = logging.getLogger(__name__)


def clone_repo(repo_url: str, branch: Optional[str] = None) -> Path:
    """Shallow-clone ``repo_url`` (optionally one branch) into a temp directory.

    A failed clone leaves nothing behind.
    """
    temp_path = Path(tempfile.mkdtemp(prefix="ready_to_ship_"))
    options = {"depth": 1, "single_branch": True}
    if branch:
        options["branch"] = branch

    try:
        repo = Repo.clone_from(repo_url, temp_path, **options)
    except Exception:
        cleanup_repo(temp_path)
        raise

    logger.info(f"Cloned {repo_url} at {repo.head.commit.hexsha[:12]} into {temp_path}")
    return temp_path


def cleanup_repo(repo_path: Path) -> None:
    if repo_path.exists():
        shutil.rmtree(repo_path, ignore_errors=True)


@contextmanager
def cloned_repo(repo_url: str, branch: Optional[str] = None) -> Generator[Path, None, None]:
    """Working tree of ``repo_url`` for the duration of a ``with`` block."""
    repo_path = clone_repo(repo_url, branch)
    try:
        yield repo_path
    finally:
        cleanup_repo(repo_path)
