"""
Version control system (VCS) integrations.

This package contains the interface the commit body builder expects from
a repository and a Git implementation of it. Each client exposes methods
for detecting repository roots, listing staged changes and reading the
current branch.
"""

from .base import ChangeEnumerator, FileChange  # noqa: F401
from .git_client import GitClient, GitError  # noqa: F401
