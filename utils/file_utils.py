"""File utility functions.

This module provides helpers for temporary file naming and size
formatting used by copy summaries.
"""

import os
import random
import tempfile
import time
from typing import List, Optional, Tuple, Union

NamePart = Union[str, List[str]]

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def _check_part(kind: str, value: object) -> None:
    if not isinstance(value, str):
        raise TypeError(f"unexpected {kind}: {value!r}")


def _tmpname_prefix(prefix: NamePart) -> Tuple[str, str]:
    """Split a prefix into (prefix, extension).

    A string prefix starting with "." is an extension only; for a list
    prefix the last element is the extension when it starts with ".".
    """
    ext = ""
    if isinstance(prefix, list):
        prefix = list(prefix)
        for part in prefix:
            _check_part("prefix", part)
        if prefix and prefix[-1].startswith("."):
            ext = prefix.pop()
        prefix = "-".join(prefix)
    else:
        _check_part("prefix", prefix)
        if prefix.startswith("."):
            ext, prefix = prefix, ""

    if prefix:
        prefix = prefix.rstrip("-") + "-"
    return prefix, ext


def _tmpname_suffix(suffix: Optional[NamePart]) -> Optional[str]:
    if suffix is None:
        return None
    if isinstance(suffix, list):
        for part in suffix:
            _check_part("suffix", part)
        suffix = "-".join(suffix)
    _check_part("suffix", suffix)
    return suffix.lstrip("-") or None


def make_tmpname(
    prefix: NamePart = "",
    suffix: Optional[NamePart] = None,
    root: Optional[str] = None
) -> str:
    """Make a temporary name suitable for temporary files and directories.

    The name is not created on disk, only generated.

    Args:
        prefix: Leading name part, or a list of parts joined with "-".
            A part starting with "." (the whole string, or the last list
            element) is used as the extension instead.
        suffix: Tag appended after the random part, or a list of tags
        root: Directory to place the name in (default: system temp dir)

    Returns:
        Full path of the form ``<root>/<prefix->YYYYMMDD-<pid>-<rand>[-suffix][.ext]``

    Raises:
        TypeError: If a prefix or suffix part is not a string

    Example:
        >>> make_tmpname(["build", ".tar"], "cache")
        '/tmp/build-20161012-4242-1x2y3z-cache.tar'
    """
    prefix, ext = _tmpname_prefix(prefix)
    suffix = _tmpname_suffix(suffix)

    name = "%s%s-%d-%s" % (
        prefix,
        time.strftime("%Y%m%d"),
        os.getpid(),
        _base36(random.getrandbits(32)),
    )
    if suffix:
        name += f"-{suffix}"
    name += ext

    return os.path.join(root or tempfile.gettempdir(), name)


def format_size(size_bytes: int) -> str:
    """Format bytes to human readable string.

    Args:
        size_bytes: Size in bytes

    Returns:
        Human readable string (e.g., "1.5MB", "256KB")
    """
    for unit in ['B', 'KB', 'MB', 'GB']:
        if size_bytes < 1024:
            return f"{size_bytes:.1f}{unit}"
        size_bytes /= 1024
    return f"{size_bytes:.1f}TB"
