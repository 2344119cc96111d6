"""Lexical path normalization.

Two algorithms share one preprocessing step and differ only in how they
treat ".." segments:

- Aggressive: ".." cancels the name before it. Correct only when no
  component is a symlink, since "link/.." is not "." if link points
  elsewhere.
- Conservative: ".." is kept verbatim except directly under an absolute
  root, where nothing exists above it.

Neither touches the filesystem.
"""

import re
from dataclasses import dataclass
from typing import List, Literal, Tuple

from path_config import NORMALIZATION_MODES, NormalizationMode
from path_errors import ConfigurationError

SegmentKind = Literal["name", "current", "parent"]

# "c:\foo" style roots get their backslashes translated
DRIVE_LETTER_PATTERN = re.compile(r"^[A-Za-z]:\\")

SEPARATOR = "/"


@dataclass(frozen=True)
class Segment:
    """One component of a split path.

    Attributes:
        text: The raw component text
        kind: "current" for ".", "parent" for "..", "name" otherwise
    """
    text: str
    kind: SegmentKind

    @classmethod
    def parse(cls, text: str) -> "Segment":
        if text == ".":
            return cls(text, "current")
        if text == "..":
            return cls(text, "parent")
        return cls(text, "name")


def split_segments(path: str) -> Tuple[bool, List[Segment]]:
    """Split a raw path into segments, collapsing repeated separators.

    Args:
        path: Raw path string

    Returns:
        (is_absolute, segments). The root marker is reported through
        is_absolute rather than as an empty segment.
    """
    if DRIVE_LETTER_PATTERN.match(path):
        path = path.replace("\\", SEPARATOR)
    absolute = path.startswith(SEPARATOR)
    segments = [Segment.parse(part) for part in path.split(SEPARATOR) if part]
    return absolute, segments


def _assemble(absolute: bool, segments: List[Segment]) -> str:
    body = SEPARATOR.join(segment.text for segment in segments)
    if absolute:
        return SEPARATOR + body
    return body or "."


def normalize_aggressive(path: str) -> str:
    """Normalize assuming ".." always cancels the preceding name.

    Example:
        >>> normalize_aggressive("a/b/../../../../c/../d")
        '../../d'
        >>> normalize_aggressive("///a/../..")
        '/'
    """
    absolute, segments = split_segments(path)
    stack: List[Segment] = []

    for segment in segments:
        if segment.kind == "current":
            continue
        if segment.kind == "parent":
            if stack and stack[-1].kind == "name":
                stack.pop()
            elif absolute and not stack:
                continue
            else:
                stack.append(segment)
        else:
            stack.append(segment)

    return _assemble(absolute, stack)


def normalize_conservative(path: str) -> str:
    """Normalize without ever cancelling a name against a later "..".

    A trailing "." after a name is kept ("a/." stays "a/.") since callers
    use it to mean "the directory itself".

    Example:
        >>> normalize_conservative("a/b/../../../../c/../d")
        'a/b/../../../../c/../d'
        >>> normalize_conservative("//..//a/./b/")
        '/a/b'
    """
    absolute, segments = split_segments(path)
    kept: List[Segment] = []

    for segment in segments:
        if segment.kind == "current":
            continue
        if segment.kind == "parent" and absolute and not kept:
            continue
        kept.append(segment)

    if (
        kept
        and segments[-1].kind == "current"
        and kept[-1].kind != "parent"
    ):
        kept.append(segments[-1])

    return _assemble(absolute, kept)


def normalize(path: str, mode: NormalizationMode = "conservative") -> str:
    """Normalize a path string in the given mode.

    Args:
        path: Raw path string. An empty string means the current directory.
        mode: "conservative" (symlink-safe) or "aggressive" (purely lexical)

    Returns:
        The normalized path string

    Raises:
        ConfigurationError: If mode is not a known normalization mode
    """
    if mode == "conservative":
        return normalize_conservative(path)
    if mode == "aggressive":
        return normalize_aggressive(path)
    raise ConfigurationError(
        f"mode must be one of {NORMALIZATION_MODES}, got {mode!r}"
    )
