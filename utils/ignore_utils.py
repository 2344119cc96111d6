"""Ignore-set matching for safe copy.

This module provides IgnoreMatcher, which decides whether a fully-qualified
path produced during a copy walk should be skipped.
"""

import fnmatch
import logging
import os
from typing import Callable, Iterable, Optional, Set, Union

from utils.path_utils import SEPARATOR, basename

logger = logging.getLogger(__name__)

GLOB_CHARS = frozenset("*?[")

IgnoreEntry = Union[str, "os.PathLike[str]"]


class IgnoreMatcher:
    """Matcher for paths a copy should skip.

    Every entry is compared literally against the full child path (raw and
    expanded). Entries containing *, ? or [ are also used as glob patterns:
    a pattern with a separator is matched against the full path, one
    without against the basename only.

    Example:
        >>> matcher = IgnoreMatcher(["/src/site/.git", "*.pyc"])
        >>> matcher.matches("/src/site/.git")
        True
        >>> matcher.matches("/src/site/pkg/mod.pyc")
        True
        >>> matcher.matches("/src/site/pkg/mod.py")
        False
    """

    def __init__(
        self,
        entries: Optional[Iterable[IgnoreEntry]] = None,
        expand: Optional[Callable[[str], str]] = None
    ):
        """Initialize the matcher.

        Args:
            entries: Paths and/or glob patterns to ignore
            expand: Optional function turning a path into its absolute form,
                used so relative and absolute spellings of a path both match
        """
        self._expand = expand
        self.literals: Set[str] = set()
        self.patterns: Set[str] = set()
        self._expanded: Set[str] = set()

        for entry in entries or ():
            entry = os.fspath(entry)
            if len(entry) > 1:
                entry = entry.rstrip(SEPARATOR)
            if not entry:
                continue
            # A path such as "file[1].txt" must still match itself literally
            self.literals.add(entry)
            if expand is not None:
                self._expanded.add(expand(entry))
            if GLOB_CHARS.intersection(entry):
                self.patterns.add(entry)

    def __bool__(self) -> bool:
        return bool(self.literals or self.patterns)

    def matches(self, path: str) -> bool:
        """Check if a path matches any ignore entry.

        Args:
            path: Fully-qualified path of the entry being considered

        Returns:
            True if the entry should be skipped
        """
        if not self:
            return False

        if path in self.literals:
            return True
        if self._expanded and self._expand(path) in self._expanded:
            return True

        name = basename(path)
        for pattern in self.patterns:
            target = path if SEPARATOR in pattern else name
            if fnmatch.fnmatchcase(target, pattern):
                logger.debug("%s matched ignore pattern %s", path, pattern)
                return True

        return False
