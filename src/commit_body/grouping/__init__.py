"""
Classification and grouping logic for commit bodies.

This package maps changed files to Conventional Commit types and groups
them into the lines of a commit message body. See
:mod:`commit_body.grouping.change_classifier` and
:mod:`commit_body.grouping.message_assembler` for details.
"""

from .group_model import ChangeKind, ChangeRecord, GroupedBody  # noqa: F401
from .rules import DEFAULT_BRANCH_RULES, DEFAULT_RULES, UNKNOWN_TYPE, RuleTable  # noqa: F401
from .change_classifier import ChangeClassifier, LookupCache, classify_change  # noqa: F401
from .branch_resolver import resolve_branch_type  # noqa: F401
from .message_assembler import assemble, build_records  # noqa: F401
