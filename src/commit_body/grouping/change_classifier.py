"""
Rule based classification of changed files into Conventional Commit types.

:class:`ChangeClassifier` looks a path up in a :class:`RuleTable` using
three precedence tiers, the first success winning:

1. exact (literal) path,
2. directory wildcard (``docs/*`` matches anything below ``docs/``),
3. file name glob (``*.md`` is matched against the base name only).

Paths are compared lowercased. A path matching nothing classifies as
:data:`~commit_body.grouping.rules.UNKNOWN_TYPE`; callers substitute the
branch derived type for it. Results are memoized in a :class:`LookupCache`
owned by the classifier, which is safe to share between threads.
"""

from __future__ import annotations

import fnmatch
import logging
import posixpath
import threading
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from typing import Dict, Iterable, Iterator, List, Optional

from commit_body.grouping.rules import DEFAULT_RULES, UNKNOWN_TYPE, RuleTable


logger = logging.getLogger(__name__)
# Attach a null handler to prevent logging errors when no handlers are
# configured on the root logger. Logs will propagate when configured.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


class ReadWriteLock:
    """Lock allowing many concurrent readers or a single writer."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writing = False

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writing:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            while self._writing or self._readers:
                self._cond.wait()
            self._writing = True
        try:
            yield
        finally:
            with self._cond:
                self._writing = False
                self._cond.notify_all()


class LookupCache:
    """Thread-safe mapping from lowercased path to commit type.

    The cache is pure memoization: a stored value is always what a fresh
    classification of the same path would return, so concurrent writers
    racing on one key store identical values.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, str] = {}
        self._lock = ReadWriteLock()

    def get(self, key: str) -> Optional[str]:
        with self._lock.read():
            return self._entries.get(key)

    def put(self, key: str, value: str) -> None:
        with self._lock.write():
            self._entries[key] = value

    def clear(self) -> None:
        with self._lock.write():
            self._entries.clear()

    def __contains__(self, key: object) -> bool:
        with self._lock.read():
            return key in self._entries

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._entries)


class ChangeClassifier:
    """Classify file paths using a rule table and a lookup cache."""

    def __init__(self, rules: Optional[RuleTable] = None, cache: Optional[LookupCache] = None) -> None:
        self.rules = rules if rules is not None else DEFAULT_RULES
        self.cache = cache if cache is not None else LookupCache()

    def classify(self, path: str) -> str:
        """Return the Conventional Commit type for ``path``.

        Parameters
        ----------
        path : str
            Repository relative path using ``/`` separators.

        Returns
        -------
        str
            The type of the first matching rule, or ``UNKNOWN_TYPE``.
        """
        key = path.lower()
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        commit_type = self._match(key)
        logger.debug("Classified %s as %s", path, commit_type)
        self.cache.put(key, commit_type)
        return commit_type

    def _match(self, key: str) -> str:
        commit_type = self.rules.exact.get(key)
        if commit_type is not None:
            return commit_type

        for rule in self.rules.directories:
            if key.startswith(rule.directory + "/"):
                return rule.type

        base = posixpath.basename(key)
        for rule in self.rules.globs:
            # fnmatchcase: the key is already folded, and fnmatch would
            # normalise separators on Windows
            if fnmatch.fnmatchcase(base, rule.pattern):
                return rule.type

        return UNKNOWN_TYPE

    def classify_many(self, paths: Iterable[str], max_workers: Optional[int] = None) -> List[str]:
        """Classify ``paths``, optionally on a thread pool.

        The result preserves the order of ``paths``. With ``max_workers``
        unset (or 1) the paths are classified sequentially.
        """
        paths = list(paths)
        if not max_workers or max_workers <= 1 or len(paths) <= 1:
            return [self.classify(path) for path in paths]
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            return list(executor.map(self.classify, paths))


_default_classifier = ChangeClassifier()


def classify_change(file_path: str) -> str:
    """Classify ``file_path`` with the default rule table.

    Uses a module level :class:`ChangeClassifier`, so results are cached
    for the lifetime of the process.
    """
    return _default_classifier.classify(file_path)
