"""
Interface between the commit body builder and a version control system.

The grouping code only needs two things from a repository: the staged
changes as ``(path, kind)`` pairs and the short name of the current
branch. Any object providing them satisfies :class:`ChangeEnumerator`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Protocol

from commit_body.grouping.group_model import ChangeKind


@dataclass
class FileChange:
    """Representation of a single file change in the repository."""

    path: str
    kind: ChangeKind


class ChangeEnumerator(Protocol):
    def get_changes(self) -> List[FileChange]:
        ...

    def get_current_branch(self) -> str:
        ...
