"""Host filesystem capability set.

Containment checks and safe copy never call ``os`` directly. They go
through a Filesystem object so tests (or callers) can substitute an
in-memory or mocked implementation.
"""

import logging
import os
import shutil
from typing import List, Protocol

from path_errors import NotFound

logger = logging.getLogger(__name__)


class Filesystem(Protocol):
    """Filesystem primitives consumed by ContainmentChecker and SafeCopyEngine."""

    def expand_path(self, path: str) -> str:
        """Return ``path`` as an absolute path (``~`` expanded, lexically cleaned)."""
        ...

    def exists(self, path: str) -> bool:
        ...

    def is_file(self, path: str) -> bool:
        """True for regular files, following symlinks."""
        ...

    def is_dir(self, path: str) -> bool:
        """True for directories, following symlinks."""
        ...

    def is_symlink(self, path: str) -> bool:
        ...

    def resolve_real_path(self, path: str) -> str:
        """Resolve every symlink in ``path``. Raises NotFound if it does not exist."""
        ...

    def list_children(self, path: str) -> List[str]:
        """Return entry names (not paths) of a directory in host order."""
        ...

    def make_dir(self, path: str) -> None:
        """Create ``path`` and any missing parents."""
        ...

    def copy_file(self, source: str, destination: str, preserve: bool = True) -> None:
        """Copy file contents (and metadata when ``preserve``) to ``destination``."""
        ...

    def file_size(self, path: str) -> int:
        ...


class HostFilesystem:
    """Filesystem implementation backed by ``os``, ``os.path`` and ``shutil``.

    Example:
        >>> fs = HostFilesystem()
        >>> fs.expand_path("~/notes/../todo.txt")
        '/home/user/todo.txt'
    """

    def expand_path(self, path: str) -> str:
        return os.path.abspath(os.path.expanduser(path))

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def is_file(self, path: str) -> bool:
        return os.path.isfile(path)

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def is_symlink(self, path: str) -> bool:
        return os.path.islink(path)

    def resolve_real_path(self, path: str) -> str:
        try:
            return os.path.realpath(path, strict=True)
        except FileNotFoundError as e:
            raise NotFound(path, "Cannot resolve real path") from e

    def list_children(self, path: str) -> List[str]:
        try:
            return os.listdir(path)
        except FileNotFoundError as e:
            raise NotFound(path) from e

    def make_dir(self, path: str) -> None:
        os.makedirs(path, exist_ok=True)
        logger.debug("Created directory %s", path)

    def copy_file(self, source: str, destination: str, preserve: bool = True) -> None:
        copy = shutil.copy2 if preserve else shutil.copyfile
        try:
            copy(source, destination)
        except FileNotFoundError as e:
            raise NotFound(e.filename or source) from e

    def file_size(self, path: str) -> int:
        return os.path.getsize(path)


__all__ = ["Filesystem", "HostFilesystem"]
