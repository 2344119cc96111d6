"""Path string helpers.

This module provides the purely syntactic primitives the rest of the
library builds on: splitting, joining, parent-of and extension handling.
None of these functions touch the filesystem.
"""

import posixpath
import re
from typing import List

SEPARATOR = "/"


def split_path(path: str) -> List[str]:
    """Split a path into its parts, keeping the leading blank of absolute paths.

    The blank part is intentionally left in place so the parts can be
    rejoined and compared index by index.

    Example:
        >>> split_path("/my/path")
        ['', 'my', 'path']
        >>> split_path("/")
        ['']
    """
    parts = path.split(SEPARATOR)
    while len(parts) > 1 and parts[-1] == "":
        parts.pop()
    return parts


def dirname(path: str) -> str:
    """Return the parent of ``path`` the way a shell ``dirname`` would.

    Trailing separators are ignored, a single relative segment yields ".",
    and the root is its own parent.
    """
    stripped = path.rstrip(SEPARATOR)
    if not stripped:
        return SEPARATOR if path else "."
    head = posixpath.dirname(stripped)
    if not head:
        return "."
    return head.rstrip(SEPARATOR) or SEPARATOR


def basename(path: str) -> str:
    stripped = path.rstrip(SEPARATOR)
    if not stripped:
        return SEPARATOR if path else ""
    return posixpath.basename(stripped)


def join(*parts: str) -> str:
    """Join parts with a single separator at every seam.

    Unlike ``os.path.join`` an absolute later part does not discard the
    earlier ones: ``join("/root", "/etc")`` is ``"/root/etc"``.
    """
    parts = tuple(part for part in parts if part != "")
    if not parts:
        return ""
    joined = parts[0]
    for part in parts[1:]:
        joined = joined.rstrip(SEPARATOR) + SEPARATOR + part.lstrip(SEPARATOR)
    return joined


def sub_ext(path: str, ext: str) -> str:
    """Replace the extension of the last component with ``ext``."""
    head, tail = posixpath.split(path)
    stem, _ = posixpath.splitext(tail)
    return posixpath.join(head, stem + ext) if head else stem + ext


def relative_path_from(path: str, base: str) -> str:
    """Strip ``base`` off the front of ``path``.

    Both arguments are expected to be expanded already. When ``path`` does
    not live under ``base`` it is returned unchanged.
    """
    base = base.rstrip(SEPARATOR)
    return re.sub(f"^{re.escape(base)}/", "", path, count=1)
