"""Lexical path normalization.

Provides conservative (symlink-safe) and aggressive (purely lexical)
normalization of path strings.

Example:
    >>> from normalizer import normalize
    >>> normalize("a/./b//../c", "aggressive")
    'a/c'
    >>> normalize("a/./b//../c", "conservative")
    'a/b/../c'
"""

from normalizer.normalizer import (
    Segment,
    normalize,
    normalize_aggressive,
    normalize_conservative,
    split_segments,
)

__all__ = [
    "Segment",
    "normalize",
    "normalize_aggressive",
    "normalize_conservative",
    "split_segments",
]
