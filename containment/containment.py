"""Path containment checks.

A candidate is inside a root when the root's component list is a prefix of
the candidate's, after both are expanded to absolute paths. When the
candidate itself is a symlink its target is compared instead. Intermediate
directories of either path are not resolved.

Results are computed on every call. Nothing is cached since the filesystem
can change between two checks.
"""

import logging
import os
from typing import Optional, Union

from path_config import PATH_CONFIG_DEFAULT, PathConfig
from utils.host_fs import Filesystem, HostFilesystem
from utils.path_utils import split_path

logger = logging.getLogger(__name__)

PathInput = Union[str, "os.PathLike[str]"]


class ContainmentChecker:
    """Decides whether one path lies at or below another.

    Example:
        >>> checker = ContainmentChecker()
        >>> checker.in_path("/srv/site/index.html", "/srv")
        True
        >>> checker.strictly_within("/srv", "/srv")
        False

    Attributes:
        fs: Filesystem used for expansion and symlink resolution
        follow_leaf_symlinks: Whether a symlinked candidate is resolved
    """

    def __init__(
        self,
        fs: Optional[Filesystem] = None,
        config: Optional[PathConfig] = None,
        follow_leaf_symlinks: Optional[bool] = None
    ):
        """Initialize the checker.

        Args:
            fs: Filesystem implementation (default: host filesystem)
            config: Path configuration (uses default if not provided)
            follow_leaf_symlinks: Overrides config.follow_leaf_symlinks
        """
        config = config or PATH_CONFIG_DEFAULT
        self.fs = fs or HostFilesystem()
        self.follow_leaf_symlinks = (
            config.follow_leaf_symlinks
            if follow_leaf_symlinks is None
            else follow_leaf_symlinks
        )

    def _resolve_candidate(self, candidate: str) -> str:
        expanded = self.fs.expand_path(candidate)
        if self.follow_leaf_symlinks and self.fs.is_symlink(expanded):
            return self.fs.resolve_real_path(expanded)
        return expanded

    def in_path(self, candidate: PathInput, root: PathInput) -> bool:
        """Check if ``candidate`` is ``root`` or lies below it.

        Args:
            candidate: Path being checked. If it is a symlink, its real
                target is what gets compared.
            root: Path the candidate must live under

        Returns:
            True if every component of the expanded root matches the
            candidate's component at the same index
        """
        root_parts = split_path(self.fs.expand_path(os.fspath(root)))
        mine = split_path(self._resolve_candidate(os.fspath(candidate)))

        if len(mine) < len(root_parts):
            logger.debug("%s is above %s", candidate, root)
            return False
        for index, part in enumerate(root_parts):
            if mine[index] != part:
                logger.debug("%s diverges from %s at component %d", candidate, root, index)
                return False
        return True

    def within(self, candidate: PathInput, root: PathInput) -> bool:
        """Inclusive check: ``candidate`` is ``root`` or deeper inside it."""
        if self.fs.expand_path(os.fspath(candidate)) == self.fs.expand_path(os.fspath(root)):
            return True
        return self.in_path(candidate, root)

    def strictly_within(self, candidate: PathInput, root: PathInput) -> bool:
        """Strict check: ``candidate`` is deeper inside ``root`` but not ``root``."""
        if self.fs.expand_path(os.fspath(candidate)) == self.fs.expand_path(os.fspath(root)):
            return False
        return self.in_path(candidate, root)


def in_path(candidate: PathInput, root: PathInput) -> bool:
    """Host-backed shortcut for ContainmentChecker().in_path."""
    return ContainmentChecker().in_path(candidate, root)


def within(candidate: PathInput, root: PathInput) -> bool:
    return ContainmentChecker().within(candidate, root)


def strictly_within(candidate: PathInput, root: PathInput) -> bool:
    return ContainmentChecker().strictly_within(candidate, root)
