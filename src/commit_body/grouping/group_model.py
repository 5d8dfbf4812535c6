"""
Data models for commit body grouping.

A :class:`ChangeRecord` describes one changed file together with the
kind of change staged for it and its Conventional Commit type. Records
sharing a ``(type, change kind)`` pair are collected into a
:class:`GroupedBody`, which the message assembler renders line by line.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Tuple


class ChangeKind(str, Enum):
    """Kind of change staged for a file."""

    MODIFIED = "modified"
    ADDED = "added"
    DELETED = "deleted"
    RENAMED = "renamed"
    COPIED = "copied"
    UNTRACKED = "untracked"
    OTHER = "other"

    def __str__(self) -> str:
        return self.value

    @property
    def is_committable(self) -> bool:
        """False for kinds that never appear in a commit body."""
        return self not in (ChangeKind.UNTRACKED, ChangeKind.OTHER)


@dataclass
class ChangeRecord:
    """A changed file and its classification.

    Attributes
    ----------
    file : str
        Repository relative path of the file.
    change_kind : ChangeKind
        What was staged for the file.
    conventional_type : str
        The Conventional Commit type (feat, fix, docs, etc.).
    extra : str
        Free form annotation, unused by the renderer.
    """

    file: str
    change_kind: ChangeKind
    conventional_type: str
    extra: str = ""

    @property
    def group_key(self) -> str:
        return f"{self.conventional_type}: {self.change_kind.value}"


@dataclass
class GroupedBody:
    """Files keyed by ``"<type>: <change kind>"``."""

    groups: Dict[str, List[str]] = field(default_factory=dict)

    def add(self, record: ChangeRecord) -> None:
        self.groups.setdefault(record.group_key, []).append(record.file)

    def items(self) -> Iterator[Tuple[str, List[str]]]:
        """Yield ``(key, files)`` with keys and files sorted."""
        for key in sorted(self.groups):
            yield key, sorted(self.groups[key])

    def __len__(self) -> int:
        return len(self.groups)
