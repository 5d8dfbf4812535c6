"""
Git client implementation for commit_body.

This module wraps the few Git operations the commit body builder needs:
finding the repository root, listing staged changes and reading the
current branch name. All subprocess calls go through :meth:`GitClient._run`
so that unit tests can mock them easily.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Dict, List, Optional

from commit_body.grouping.group_model import ChangeKind
from commit_body.vcs.base import FileChange


logger = logging.getLogger(__name__)
# Attach a null handler to avoid logging errors when the root logger is not
# configured. Logs will propagate to the root when configured by the CLI.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


# Index (staging) column of ``git status --porcelain``
_STATUS_KINDS: Dict[str, ChangeKind] = {
    "M": ChangeKind.MODIFIED,
    "A": ChangeKind.ADDED,
    "D": ChangeKind.DELETED,
    "R": ChangeKind.RENAMED,
    "C": ChangeKind.COPIED,
    "?": ChangeKind.UNTRACKED,
}


def status_to_kind(code: str) -> ChangeKind:
    """Map the index status letter of a porcelain entry to a ChangeKind.

    Anything not staged (a space) or not listed, such as unmerged or
    type changed entries, maps to ``ChangeKind.OTHER``.
    """
    return _STATUS_KINDS.get(code, ChangeKind.OTHER)


class GitError(Exception):
    """Raised when a Git command fails."""

    pass


class GitClient:
    """Client for reading changes from a Git repository."""

    def __init__(self, repo_root: Path) -> None:
        self.repo_root = repo_root

    # ------------------------------------------------------------------
    # Static helpers
    # ------------------------------------------------------------------
    @staticmethod
    def is_repo(path: Path) -> bool:
        """Return True if the given path is the root of a Git repository."""
        return (path / ".git").exists()

    @staticmethod
    def find_repo_root(start: Path) -> Optional[Path]:
        """Find the root of the Git repository starting from ``start``.

        Walk upwards until a ``.git`` entry is found or the filesystem
        root is reached.
        """
        current = start.resolve()
        while True:
            if (current / ".git").exists():
                return current
            if current.parent == current:
                # reached filesystem root
                return None
            current = current.parent

    # ------------------------------------------------------------------
    # Basic Git commands
    # ------------------------------------------------------------------
    def _run(self, args: List[str], check: bool = True) -> subprocess.CompletedProcess:
        """Run a Git command in the repository root.

        Raises
        ------
        GitError
            If git cannot be executed, or if the command exits with a
            non-zero status when ``check`` is True.
        """
        full_cmd = ["git"] + args
        logger.debug("Executing Git command: %s", " ".join(full_cmd))
        try:
            result = subprocess.run(
                full_cmd,
                cwd=self.repo_root,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",  # Replace invalid characters instead of failing
            )
        except OSError as e:
            logger.error("Unable to execute git: %s", e)
            raise GitError(f"Unable to execute git: {e}") from e

        if check and result.returncode != 0:
            logger.error(
                "Git command failed: %s\nSTDOUT: %s\nSTDERR: %s",
                " ".join(full_cmd),
                result.stdout,
                result.stderr,
            )
            raise GitError(result.stderr.strip() or result.stdout.strip())
        return result

    # ------------------------------------------------------------------
    # Status and change detection
    # ------------------------------------------------------------------
    def get_changes(self) -> List[FileChange]:
        """Get the list of changed files in the repository.

        The staged (index) status of every entry reported by
        ``git status --porcelain -z`` is converted to a :class:`ChangeKind`.
        Untracked and unstaged entries are returned as well, the message
        assembler filters them out. For renames and copies the new path
        is reported.

        Raises
        ------
        GitError
            If the git status command fails.
        """
        result = self._run(["status", "--porcelain", "-z"], check=True)
        changes: List[FileChange] = []

        entries = iter(result.stdout.split("\0"))
        for entry in entries:
            # Porcelain format: XY<space>path, X = index, Y = working tree
            if len(entry) < 4:
                continue
            code = entry[0]
            path = entry[3:]
            if code in ("R", "C"):
                # The original path follows as a separate NUL terminated field
                next(entries, None)
            changes.append(FileChange(path=path, kind=status_to_kind(code)))

        logger.debug("Found %d status entries", len(changes))
        return changes

    # ------------------------------------------------------------------
    # Branch operations
    # ------------------------------------------------------------------
    def get_current_branch(self) -> str:
        """Get the short name of the current branch.

        A repository without commits has no resolvable HEAD, in which case
        the branch HEAD points to is read instead.

        Raises
        ------
        GitError
            If unable to determine the current branch.
        """
        result = self._run(["rev-parse", "--abbrev-ref", "HEAD"], check=False)
        if result.returncode == 0:
            return result.stdout.strip()
        logger.debug("HEAD not resolvable, reading symbolic ref instead")
        result = self._run(["symbolic-ref", "--short", "HEAD"], check=True)
        return result.stdout.strip()
