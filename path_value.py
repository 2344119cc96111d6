import contextlib
import fnmatch
import glob as globlib
import os
import re
from functools import total_ordering
from typing import Any, Callable, Iterable, Iterator, List, Optional, Pattern, Tuple, Union

from ascender import PathSequence, ascend, descend, search_backwards
from containment import ContainmentChecker
from normalizer import normalize
from path_config import PATH_CONFIG_DEFAULT, NormalizationMode, PathConfig
from safe_copy import CopyStats, SafeCopyEngine
from utils.file_utils import NamePart, make_tmpname
from utils.host_fs import Filesystem, HostFilesystem
from utils.ignore_utils import IgnoreEntry
from utils.path_utils import (
    SEPARATOR,
    basename,
    dirname,
    join,
    relative_path_from,
    split_path,
    sub_ext,
)


def _to_path_string(value: Any) -> str:
    if isinstance(value, str):
        return value
    if hasattr(value, "__fspath__"):
        path = os.fspath(value)
        return os.fsdecode(path) if isinstance(path, bytes) else path
    return str(value)


@total_ordering
class PathValue:
    """Immutable logical path with syntactic semantics.

    A PathValue wraps a path string and never rewrites it: normalization,
    joining and the like return new instances carrying the same config and
    filesystem. Equality, hashing and ordering are plain string comparisons;
    filesystem relationships are available through explicit methods
    (within, contains, ...).

    Example:
        >>> path = PathValue("/srv/site/../site/index.html")
        >>> path.normalize("aggressive")
        <PathValue:/srv/site/index.html>
        >>> path.split_path()
        ['', 'srv', 'site', '..', 'site', 'index.html']
        >>> list(PathValue("/srv/site").ascend())
        [<PathValue:/srv/site>, <PathValue:/srv>, <PathValue:/>]
    """

    __slots__ = ("_path", "config", "fs")

    def __init__(
        self,
        path: Any,
        config: Optional[PathConfig] = None,
        fs: Optional[Filesystem] = None
    ):
        """Initialize the path value.

        Args:
            path: A string, anything implementing ``__fspath__`` (including
                another PathValue), or any object convertible with str()
            config: Path configuration (uses default if not provided)
            fs: Filesystem for host operations (default: host filesystem)
        """
        if isinstance(path, PathValue):
            config = config or path.config
            fs = fs or path.fs
        self._path = _to_path_string(path)
        self.config = config or PATH_CONFIG_DEFAULT
        self.fs = fs or HostFilesystem()

    def _derive(self, path: str) -> "PathValue":
        return PathValue(path, config=self.config, fs=self.fs)

    @classmethod
    def tmpname(
        cls,
        prefix: NamePart = "",
        suffix: Optional[NamePart] = None,
        config: Optional[PathConfig] = None,
        fs: Optional[Filesystem] = None
    ) -> "PathValue":
        """Generate (but do not create) a temporary path under config.tmp_root."""
        config = config or PATH_CONFIG_DEFAULT
        return cls(make_tmpname(prefix, suffix, root=config.tmp_root), config=config, fs=fs)

    # String behaviour

    def __fspath__(self) -> str:
        return self._path

    def __str__(self) -> str:
        return self._path

    def __repr__(self) -> str:
        return f"<PathValue:{self._path}>"

    # Only str and PathValue compare equal, since both hash like the raw string
    def __eq__(self, other: object) -> bool:
        if isinstance(other, (str, PathValue)):
            return self._path == _to_path_string(other)
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, (str, PathValue)):
            return self._path < _to_path_string(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._path)

    def same_kind(self, other: object) -> bool:
        """Stricter equality that also requires ``other`` to be a PathValue."""
        return isinstance(other, PathValue) and self._path == other._path

    def __truediv__(self, other: Any) -> "PathValue":
        return self.join(other)

    # Syntax

    @property
    def is_absolute(self) -> bool:
        """True if the path starts with a separator. "./" counts as relative."""
        return self._path.startswith(SEPARATOR)

    @property
    def is_relative(self) -> bool:
        return not self.is_absolute

    @property
    def is_root(self) -> bool:
        return self._path == SEPARATOR

    def split_path(self) -> List[str]:
        """Split into parts, keeping the leading blank of absolute paths."""
        return split_path(self._path)

    def each_filename(self) -> Iterator[str]:
        """Yield each non-empty component of the path."""
        return (part for part in self._path.split(SEPARATOR) if part)

    @property
    def basename(self) -> "PathValue":
        return self._derive(basename(self._path))

    @property
    def dirname(self) -> "PathValue":
        return self._derive(dirname(self._path))

    @property
    def extname(self) -> str:
        return os.path.splitext(basename(self._path))[1]

    @property
    def parent(self) -> "PathValue":
        """Lexical parent. The root is its own parent; relative paths get "/..".

        Example:
            >>> PathValue("docs").parent
            <PathValue:docs/..>
        """
        if self.is_root:
            return self
        if self.is_absolute:
            return self.dirname
        return self._derive(join(self._path, ".."))

    def split(self) -> Tuple["PathValue", "PathValue"]:
        """Return (dirname, basename)."""
        return self.dirname, self.basename

    def join(self, *parts: Any) -> "PathValue":
        return self._derive(join(self._path, *(_to_path_string(part) for part in parts)))

    def sub_ext(self, ext: str) -> "PathValue":
        """Replace the extension of the last component."""
        return self._derive(sub_ext(self._path, ext))

    def fnmatch(self, matcher: Union[str, Pattern[str]]) -> bool:
        """Match against a glob pattern, or search with a compiled regex."""
        if isinstance(matcher, re.Pattern):
            return matcher.search(self._path) is not None
        return fnmatch.fnmatchcase(self._path, _to_path_string(matcher))

    def normalize(self, mode: Optional[NormalizationMode] = None) -> "PathValue":
        """Return a new, lexically normalized PathValue.

        Args:
            mode: "conservative" or "aggressive" (default: config.normalize_mode)
        """
        return self._derive(normalize(self._path, mode or self.config.normalize_mode))

    # Ancestors

    def ascend(self) -> PathSequence["PathValue"]:
        """This path, then each lexical parent up to the root."""
        return ascend(self._path).map(self._derive)

    def descend(self) -> PathSequence["PathValue"]:
        """Exact reverse of ascend()."""
        return descend(self._path).map(self._derive)

    def search_backwards(
        self,
        name: str,
        backwards: Optional[int] = None,
        predicate: Optional[Callable[["PathValue"], bool]] = None
    ) -> List["PathValue"]:
        """Look for ``name`` in this directory and each of its ancestors.

        Args:
            name: Entry name to look for
            backwards: Maximum number of directories to check
            predicate: Optional test run on each directory instead

        Returns:
            Every match found, nearest first
        """
        check = None
        if predicate is not None:
            def check(step: str) -> bool:
                return predicate(self._derive(step))
        found = search_backwards(self._path, name, backwards=backwards, predicate=check, fs=self.fs)
        return [self._derive(path) for path in found]

    # Containment

    def _checker(self) -> ContainmentChecker:
        return ContainmentChecker(fs=self.fs, config=self.config)

    def in_path(self, root: Any) -> bool:
        """True if this path (its target, when a symlink) is at or below ``root``."""
        return self._checker().in_path(self._path, _to_path_string(root))

    def within(self, root: Any) -> bool:
        return self._checker().within(self._path, _to_path_string(root))

    def strictly_within(self, root: Any) -> bool:
        return self._checker().strictly_within(self._path, _to_path_string(root))

    def contains(self, other: Any) -> bool:
        return self._checker().within(_to_path_string(other), self._path)

    def strictly_contains(self, other: Any) -> bool:
        return self._checker().strictly_within(_to_path_string(other), self._path)

    def enforce_root(self, root: Any) -> "PathValue":
        """Expand the path and left-join ``root`` onto it unless already inside.

        Example:
            >>> PathValue("/etc/passwd").enforce_root("/srv")
            <PathValue:/srv/etc/passwd>
        """
        current = self.expand_path()
        root = self._derive(_to_path_string(root)).expand_path()
        if current.in_path(root):
            return current
        return root.join(current)

    def relative_path_from(self, base: Any) -> "PathValue":
        """Strip ``base`` off the expanded path; the full path if not below it."""
        base = self.fs.expand_path(_to_path_string(base))
        return self._derive(relative_path_from(self.fs.expand_path(self._path), base))

    # Host delegation

    def expand_path(self) -> "PathValue":
        return self._derive(self.fs.expand_path(self._path))

    def realpath(self) -> "PathValue":
        return self._derive(self.fs.resolve_real_path(self._path))

    def exists(self) -> bool:
        return self.fs.exists(self._path)

    def is_file(self) -> bool:
        return self.fs.is_file(self._path)

    def is_dir(self) -> bool:
        return self.fs.is_dir(self._path)

    def is_symlink(self) -> bool:
        return self.fs.is_symlink(self._path)

    def mkdir_p(self) -> None:
        self.fs.make_dir(self._path)

    def children(self) -> List["PathValue"]:
        """All entries of this directory, hidden ones included."""
        return [self.join(name) for name in self.fs.list_children(self._path)]

    def glob(self, pattern: str, recursive: bool = False) -> PathSequence["PathValue"]:
        """Glob relative to this directory, yielding joined paths.

        Host only: matching runs through the glob module and ignores ``fs``.
        """
        return PathSequence(lambda: (
            self.join(match)
            for match in globlib.iglob(pattern, root_dir=self._path, recursive=recursive)
        ))

    def find(self) -> PathSequence["PathValue"]:
        """This path and everything below it, top-down.

        Symlinked directories are listed but not descended into.
        """
        def walk(directory: str) -> Iterator["PathValue"]:
            subdirs = []
            for name in self.fs.list_children(directory):
                child = join(directory, name)
                yield self._derive(child)
                if self.fs.is_dir(child) and not self.fs.is_symlink(child):
                    subdirs.append(child)
            for child in subdirs:
                yield from walk(child)

        def entries() -> Iterator["PathValue"]:
            yield self
            if self.fs.is_dir(self._path):
                yield from walk(self._path)
        return PathSequence(entries)

    @contextlib.contextmanager
    def chdir(self) -> Iterator["PathValue"]:
        """Temporarily change the working directory to this path."""
        previous = os.getcwd()
        os.chdir(self._path)
        try:
            yield self
        finally:
            os.chdir(previous)

    # Copying

    def safe_copy(
        self,
        destination: Any,
        root: Any,
        ignore: Optional[Iterable[IgnoreEntry]] = None
    ) -> CopyStats:
        """Copy this file or tree to ``destination`` without leaving ``root``.

        See SafeCopyEngine.safe_copy for the full contract.
        """
        engine = SafeCopyEngine(fs=self.fs, config=self.config)
        return engine.safe_copy(
            self._path,
            _to_path_string(destination),
            None if root is None else _to_path_string(root),
            ignore
        )
