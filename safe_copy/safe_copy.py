"""Symlink-escape-safe recursive copy.

Every node visited during a copy must resolve to a location at or below a
caller-declared root. A symlink that points outside the root, whether it is
the source itself, a direct child or something nested deeper, aborts the
whole copy with PermissionViolation.

Known gaps:
- Files copied before a violation is found are left in place.
- Symlink cycles that stay inside the root are not detected and recurse
  until the interpreter's recursion limit is hit.
- The check and the copy are separate filesystem calls, so a concurrent
  writer can swap a node in between.
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Union

from containment import ContainmentChecker
from path_config import PATH_CONFIG_DEFAULT, PathConfig
from path_errors import ConfigurationError, PermissionViolation
from utils.file_utils import format_size
from utils.host_fs import Filesystem, HostFilesystem
from utils.ignore_utils import IgnoreEntry, IgnoreMatcher
from utils.path_utils import basename, join

logger = logging.getLogger(__name__)

PathInput = Union[str, "os.PathLike[str]"]


@dataclass
class CopyStats:
    """Counters collected during a safe copy.

    Attributes:
        files_copied: Number of regular files copied
        directories_created: Number of destination directories created
        ignored: Number of entries skipped because of the ignore set
        bytes_copied: Total size of copied files in bytes
    """
    files_copied: int = 0
    directories_created: int = 0
    ignored: int = 0
    bytes_copied: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary for JSON serialization."""
        return {
            "files_copied": self.files_copied,
            "directories_created": self.directories_created,
            "ignored": self.ignored,
            "bytes_copied": self.bytes_copied,
        }


class SafeCopyEngine:
    """Recursive copier confined to a trust boundary.

    Example:
        >>> engine = SafeCopyEngine()
        >>> stats = engine.safe_copy("/srv/site", "/tmp/site-copy", root="/srv")
        >>> stats.files_copied
        12

    Attributes:
        fs: Filesystem used for every read and write
        checker: Containment checker (always resolves symlinked leaves)
        config: Path configuration
    """

    def __init__(
        self,
        fs: Optional[Filesystem] = None,
        checker: Optional[ContainmentChecker] = None,
        config: Optional[PathConfig] = None
    ):
        """Initialize the engine.

        Args:
            fs: Filesystem implementation (default: host filesystem)
            checker: Containment checker. Built from ``fs`` if not provided.
            config: Path configuration (uses default if not provided)
        """
        self.config = config or PATH_CONFIG_DEFAULT
        self.fs = fs or HostFilesystem()
        self.checker = checker or ContainmentChecker(
            fs=self.fs,
            config=self.config,
            follow_leaf_symlinks=True
        )

    def safe_copy(
        self,
        source: PathInput,
        destination: PathInput,
        root: Optional[PathInput],
        ignore: Optional[Iterable[IgnoreEntry]] = None
    ) -> CopyStats:
        """Copy a file or directory tree, refusing anything outside ``root``.

        Args:
            source: File or directory to copy
            destination: Target path. For a file source that is an existing
                directory, the file is copied into it.
            root: Trust boundary every visited node must resolve under
            ignore: Fully-qualified child paths and/or glob patterns to skip

        Returns:
            CopyStats for the completed copy

        Raises:
            ConfigurationError: If root is not given (before any I/O)
            PermissionViolation: If any node resolves outside root
            NotFound: If a node disappears while it is being copied
        """
        if root is None:
            raise ConfigurationError("safe_copy requires a root")

        source = os.fspath(source)
        destination = os.fspath(destination)
        root = os.fspath(root)
        matcher = IgnoreMatcher(ignore, expand=self.fs.expand_path)
        stats = CopyStats()

        logger.info("Safe copy %s -> %s (root: %s)", source, destination, root)

        self._copy_node(source, destination, root, matcher, stats)

        logger.info(
            "Safe copy complete: %d file(s), %d dir(s) created, %d ignored, %s",
            stats.files_copied,
            stats.directories_created,
            stats.ignored,
            format_size(stats.bytes_copied)
        )
        return stats

    def _copy_node(
        self,
        source: str,
        destination: str,
        root: str,
        matcher: IgnoreMatcher,
        stats: CopyStats
    ) -> None:
        if self.fs.is_dir(source):
            self._copy_directory(source, destination, root, matcher, stats)
        else:
            self._copy_file(source, destination, root, stats)

    def _verify(self, path: str, root: str) -> None:
        if not self.checker.in_path(path, root):
            logger.warning("Refusing to copy %s: outside of %s", path, root)
            raise PermissionViolation(path, root)

    def _copy_file(self, source: str, destination: str, root: str, stats: CopyStats) -> None:
        self._verify(source, root)
        if self.fs.is_dir(destination):
            destination = join(destination, basename(source))
        self._transfer(source, destination, stats)

    def _transfer(self, source: str, destination: str, stats: CopyStats) -> None:
        self.fs.copy_file(source, destination, preserve=self.config.preserve_metadata)
        stats.files_copied += 1
        stats.bytes_copied += self.fs.file_size(destination)
        logger.debug("Copied %s -> %s", source, destination)

    def _copy_directory(
        self,
        source: str,
        destination: str,
        root: str,
        matcher: IgnoreMatcher,
        stats: CopyStats
    ) -> None:
        self._verify(source, root)

        if not self.fs.exists(destination):
            self.fs.make_dir(destination)
            stats.directories_created += 1

        for name in self.fs.list_children(source):
            child = join(source, name)
            if matcher.matches(child):
                stats.ignored += 1
                logger.debug("Ignoring %s", child)
                continue

            self._verify(child, root)
            target = join(destination, name)

            if self.fs.is_file(child):
                self._transfer(child, target, stats)
            else:
                real_child = self.fs.resolve_real_path(child)
                self._copy_node(real_child, target, root, matcher, stats)


def safe_copy(
    source: PathInput,
    destination: PathInput,
    root: Optional[PathInput],
    ignore: Optional[Iterable[IgnoreEntry]] = None,
    fs: Optional[Filesystem] = None,
    config: Optional[PathConfig] = None
) -> CopyStats:
    """Shortcut for SafeCopyEngine(fs, config=config).safe_copy(...)."""
    return SafeCopyEngine(fs=fs, config=config).safe_copy(source, destination, root, ignore)
