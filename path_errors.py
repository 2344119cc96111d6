"""Exceptions raised by path normalization, containment and safe copy.

Every error derives from both PathutilError and the builtin exception a
caller would otherwise expect (ValueError, PermissionError,
FileNotFoundError), so existing ``except OSError`` handlers keep working.
"""

import errno
from typing import Optional


class PathutilError(Exception):
    """Base class for all library errors."""


class ConfigurationError(PathutilError, ValueError):
    """Raised when an operation is invoked with missing or invalid settings."""


class PermissionViolation(PathutilError, PermissionError):
    """Raised when a path lies outside the root a copy is confined to.

    Attributes:
        path: The offending path (after symlink resolution where applicable)
        root: The declared trust boundary
    """

    def __init__(self, path: str, root: str):
        super().__init__(errno.EPERM, f"{path} not in {root}")
        self.path = path
        self.root = root

    def __str__(self) -> str:
        return f"Operation not permitted - {self.path} not in {self.root}"


class NotFound(PathutilError, FileNotFoundError):
    """Raised when a path required by an operation does not exist."""

    def __init__(self, path: str, reason: Optional[str] = None):
        super().__init__(errno.ENOENT, reason or "No such file or directory", path)
        self.path = path


__all__ = ["PathutilError", "ConfigurationError", "PermissionViolation", "NotFound"]
