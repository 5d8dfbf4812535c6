"""
Derive a fallback commit type from the current branch name.

Branches named after the Conventional Commits convention
(``feature/login``, ``fix/crash-on-start``) carry the intent of the work
in their first path segment. Files no rule can classify inherit that
type.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from commit_body.grouping.rules import DEFAULT_BRANCH_RULES, UNKNOWN_TYPE, BranchRule, find_branch_rule


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


def resolve_branch_type(branch_name: str, rules: Optional[Sequence[BranchRule]] = None) -> str:
    """Return the commit type for ``branch_name``.

    Only the part before the first ``/`` is considered and it must equal
    a rule prefix exactly; unlike file paths, branch names are matched
    case-sensitively. ``UNKNOWN_TYPE`` is returned when nothing matches.
    """
    if rules is None:
        rules = DEFAULT_BRANCH_RULES
    prefix = branch_name.split("/", 1)[0]
    rule = find_branch_rule(rules, prefix)
    if rule is None:
        logger.debug("No branch rule for %r", branch_name)
        return UNKNOWN_TYPE
    return rule.type
