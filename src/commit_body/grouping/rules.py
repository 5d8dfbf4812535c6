"""
Rule tables used to classify changed files into Conventional Commit types.

Two tables are defined here:

* the file table, an ordered sequence of :class:`ClassificationRule`
  objects. A pattern is either a literal path (``"readme.md"``), a
  directory wildcard (``"docs/*"``) or a file name glob (``"*.md"``,
  ``"*file"``);
* the branch table, an ordered sequence of :class:`BranchRule` objects
  keyed by the first segment of a branch name (``feature/login`` ->
  ``feature``).

Tables are immutable once built. When several rules of the same kind
match a path, the one listed first wins, so authors control priority by
ordering the table.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Sequence, Tuple


#: Type returned when no rule matches a path or branch.
UNKNOWN_TYPE = "unknown"

KIND_EXACT = "exact"
KIND_DIRECTORY = "directory"
KIND_GLOB = "glob"


@dataclass(frozen=True)
class ClassificationRule:
    """Map a path pattern to a Conventional Commit type.

    Attributes
    ----------
    pattern : str
        Literal path, ``dir/*`` wildcard or glob starting with ``*``.
        Stored lowercased since file matching is case-insensitive.
    type : str
        The Conventional Commit type assigned to matching files.
    """

    pattern: str
    type: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "pattern", self.pattern.lower())

    @property
    def kind(self) -> str:
        if self.pattern.endswith("/*"):
            return KIND_DIRECTORY
        if self.pattern.startswith("*"):
            return KIND_GLOB
        return KIND_EXACT

    @property
    def directory(self) -> str:
        """Directory prefix of a ``dir/*`` pattern (without the suffix)."""
        return self.pattern[: -len("/*")]


@dataclass(frozen=True)
class BranchRule:
    """Map the first segment of a branch name to a commit type."""

    prefix: str
    type: str


@dataclass(frozen=True)
class RuleTable:
    """Immutable, ordered collection of classification rules.

    The rules are split into the three precedence tiers on construction
    so the classifier does not have to inspect patterns on every lookup.
    """

    rules: Tuple[ClassificationRule, ...]
    exact: Dict[str, str] = field(init=False, repr=False, compare=False)
    directories: Tuple[ClassificationRule, ...] = field(init=False, repr=False, compare=False)
    globs: Tuple[ClassificationRule, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        rules = tuple(self.rules)
        exact: Dict[str, str] = {}
        for rule in rules:
            if rule.kind == KIND_EXACT:
                # first literal wins, same as the wildcard tiers
                exact.setdefault(rule.pattern, rule.type)
        object.__setattr__(self, "rules", rules)
        object.__setattr__(self, "exact", exact)
        object.__setattr__(
            self, "directories", tuple(r for r in rules if r.kind == KIND_DIRECTORY)
        )
        object.__setattr__(self, "globs", tuple(r for r in rules if r.kind == KIND_GLOB))

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, str]]) -> "RuleTable":
        """Build a table from ``(pattern, type)`` pairs, keeping their order."""
        return cls(tuple(ClassificationRule(pattern, ctype) for pattern, ctype in pairs))

    def __len__(self) -> int:
        return len(self.rules)


def build_branch_rules(pairs: Iterable[Tuple[str, str]]) -> Tuple[BranchRule, ...]:
    return tuple(BranchRule(prefix, ctype) for prefix, ctype in pairs)


def find_branch_rule(rules: Sequence[BranchRule], prefix: str) -> Optional[BranchRule]:
    """Return the first rule whose prefix equals ``prefix`` exactly."""
    for rule in rules:
        if rule.prefix == prefix:
            return rule
    return None


# ---------------------------------------------------------------------------
# Default tables
# ---------------------------------------------------------------------------

_DEFAULT_FILE_PAIRS = (
    # Literal paths
    ("readme.md", "docs"),
    ("readme", "docs"),
    ("changelog.md", "docs"),
    ("contributing.md", "docs"),
    ("license", "chore"),
    ("license.md", "chore"),
    ("codeowners", "chore"),
    (".gitignore", "chore"),
    (".gitattributes", "chore"),
    (".editorconfig", "style"),
    (".prettierrc", "style"),
    (".golangci.yml", "style"),
    (".pre-commit-config.yaml", "ci"),
    (".gitlab-ci.yml", "ci"),
    (".travis.yml", "ci"),
    ("jenkinsfile", "ci"),
    ("makefile", "build"),
    ("dockerfile", "build"),
    ("docker-compose.yml", "build"),
    ("go.mod", "build"),
    ("go.sum", "build"),
    ("package.json", "build"),
    ("package-lock.json", "build"),
    ("pyproject.toml", "build"),
    ("setup.py", "build"),
    ("setup.cfg", "build"),
    ("requirements.txt", "build"),
    # Directory wildcards
    (".github/*", "ci"),
    (".circleci/*", "ci"),
    ("docs/*", "docs"),
    ("doc/*", "docs"),
    ("tests/*", "test"),
    ("test/*", "test"),
    ("scripts/*", "chore"),
    ("build/*", "build"),
    # File name globs
    ("*_test.go", "test"),
    ("*_test.py", "test"),
    ("*.test.js", "test"),
    ("*.test.ts", "test"),
    ("*.spec.js", "test"),
    ("*.spec.ts", "test"),
    ("*.md", "docs"),
    ("*.rst", "docs"),
    ("*.adoc", "docs"),
    ("*.txt", "docs"),
    ("*.css", "style"),
    ("*.scss", "style"),
    ("*.yml", "chore"),
    ("*.yaml", "chore"),
    ("*.toml", "chore"),
    ("*.ini", "chore"),
    ("*.cfg", "chore"),
    ("*.json", "chore"),
    ("*.lock", "build"),
    ("*.go", "feat"),
    ("*.py", "feat"),
    ("*.js", "feat"),
    ("*.ts", "feat"),
    ("*.rs", "feat"),
    ("*.java", "feat"),
    ("*.c", "feat"),
    ("*.h", "feat"),
    ("*.sh", "chore"),
    ("*file", "build"),
)

_DEFAULT_BRANCH_PAIRS = (
    ("feature", "feat"),
    ("feat", "feat"),
    ("fix", "fix"),
    ("bugfix", "fix"),
    ("hotfix", "fix"),
    ("docs", "docs"),
    ("chore", "chore"),
    ("refactor", "refactor"),
    ("perf", "perf"),
    ("test", "test"),
    ("ci", "ci"),
    ("build", "build"),
    ("style", "style"),
    ("release", "chore"),
)

DEFAULT_RULES = RuleTable.from_pairs(_DEFAULT_FILE_PAIRS)
DEFAULT_BRANCH_RULES = build_branch_rules(_DEFAULT_BRANCH_PAIRS)
