"""
Assemble a commented commit message body from classified changes.

The body lists one line per ``(type, change kind)`` group::

    # docs: modified README.md
    # feat: added src/api.go, src/handler.go

Lines start with ``#`` so git strips them from the final message unless
the author keeps them. An optional header and footer are placed around
the group lines, each separated from them by a bare ``#`` line.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence

from commit_body.grouping.branch_resolver import resolve_branch_type
from commit_body.grouping.change_classifier import ChangeClassifier
from commit_body.grouping.group_model import ChangeRecord, GroupedBody
from commit_body.grouping.rules import UNKNOWN_TYPE, BranchRule

if TYPE_CHECKING:
    from commit_body.vcs.base import FileChange


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


def build_records(
    changes: Iterable[FileChange],
    classifier: Optional[ChangeClassifier] = None,
    max_workers: Optional[int] = None,
) -> List[ChangeRecord]:
    """Classify enumerated changes into :class:`ChangeRecord` objects.

    Every change is kept, including untracked ones; filtering happens in
    :func:`assemble`.
    """
    if classifier is None:
        classifier = ChangeClassifier()
    changes = list(changes)
    types = classifier.classify_many((change.path for change in changes), max_workers=max_workers)
    return [
        ChangeRecord(file=change.path, change_kind=change.kind, conventional_type=ctype)
        for change, ctype in zip(changes, types)
    ]


def group_records(records: Iterable[ChangeRecord]) -> GroupedBody:
    grouped = GroupedBody()
    for record in records:
        grouped.add(record)
    return grouped


def assemble(
    records: Iterable[ChangeRecord],
    branch_name: str = "",
    header: Optional[str] = None,
    footer: Optional[str] = None,
    branch_rules: Optional[Sequence[BranchRule]] = None,
) -> str:
    """Render the commit body for ``records``.

    Parameters
    ----------
    records : Iterable[ChangeRecord]
        Classified changes. Untracked and unrecognised changes are skipped.
    branch_name : str
        Short name of the current branch; its type replaces ``unknown``.
    header, footer : Optional[str]
        Text placed before / after the group lines. Empty values are
        treated as absent and produce no output at all.
    branch_rules : Optional[Sequence[BranchRule]]
        Branch table, defaults to the built-in one.

    Returns
    -------
    str
        Lines joined by ``\\n`` without a trailing newline.
    """
    branch_type = resolve_branch_type(branch_name, branch_rules)

    kept: List[ChangeRecord] = []
    for record in records:
        if not record.change_kind.is_committable:
            logger.debug("Skipping %s (%s)", record.file, record.change_kind)
            continue
        if record.conventional_type == UNKNOWN_TYPE:
            record = ChangeRecord(
                file=record.file,
                change_kind=record.change_kind,
                conventional_type=branch_type,
                extra=record.extra,
            )
        kept.append(record)
    grouped = group_records(kept)

    lines: List[str] = []
    if header:
        lines.append(header)
        lines.append("#")
    for key, files in grouped.items():
        lines.append(f"# {key} {', '.join(files)}")
    if footer:
        lines.append("#")
        lines.append(footer)
    logger.debug("Assembled %d group line(s)", len(grouped))
    return "\n".join(lines)
