"""Ancestor iteration over path strings.

ascend() yields a path followed by each of its lexical parents; descend()
yields the same chain in reverse. Both are computed from path syntax alone
and never consult realpath.
"""

import logging
import math
from typing import Callable, Iterable, Iterator, List, Optional, TypeVar

from utils.host_fs import Filesystem, HostFilesystem
from utils.path_utils import dirname, join

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")


class PathSequence(Iterable[T]):
    """Lazy, finite sequence that can be iterated any number of times.

    Every call to iter() invokes the factory again, so a sequence never
    ends up exhausted the way a plain generator does.

    Example:
        >>> seq = ascend("/hello/world")
        >>> list(seq)
        ['/hello/world', '/hello', '/']
        >>> list(seq)
        ['/hello/world', '/hello', '/']
    """

    def __init__(self, factory: Callable[[], Iterator[T]]):
        self._factory = factory

    def __iter__(self) -> Iterator[T]:
        return iter(self._factory())

    def __reversed__(self) -> Iterator[T]:
        return reversed(list(self._factory()))

    def map(self, func: Callable[[T], U]) -> "PathSequence[U]":
        return PathSequence(lambda: (func(item) for item in self._factory()))

    def to_list(self) -> List[T]:
        return list(self._factory())


def _ascend(path: str) -> Iterator[str]:
    yield path
    while True:
        parent = dirname(path)
        if parent == path or parent == ".":
            return
        path = parent
        yield path


def ascend(path: str) -> PathSequence[str]:
    """Return ``path`` and each of its parents, nearest first.

    Stops at the root, or at the last segment of a relative path.

    Example:
        >>> list(ascend("a/b"))
        ['a/b', 'a']
    """
    return PathSequence(lambda: _ascend(path))


def descend(path: str) -> PathSequence[str]:
    """Return the exact reverse of ascend(path), outermost first."""
    return PathSequence(lambda: reversed(list(_ascend(path))))


def search_backwards(
    path: str,
    name: str,
    backwards: Optional[int] = None,
    predicate: Optional[Callable[[str], bool]] = None,
    fs: Optional[Filesystem] = None
) -> List[str]:
    """Search ``path`` and its ancestors for ``name`` (like Rakefile lookup).

    Every match along the way is returned, not just the nearest one.

    Args:
        path: Directory to start from (usually already expanded)
        name: File or directory name to look for in each step
        backwards: Maximum number of steps to take, including ``path``
            itself (None = all the way to the root)
        predicate: Optional test applied to each step directory instead of
            an existence check. Matching steps themselves are returned.
        fs: Filesystem to check existence with (default: host)

    Returns:
        Matching paths, nearest first
    """
    fs = fs or HostFilesystem()
    limit = math.inf if backwards is None else backwards
    found: List[str] = []

    for index, step in enumerate(ascend(path), start=1):
        if index > limit:
            break
        if predicate is not None:
            if predicate(step):
                found.append(step)
        else:
            candidate = join(step, name)
            if fs.exists(candidate):
                found.append(candidate)

    logger.debug("search_backwards(%s, %s) found %d match(es)", path, name, len(found))
    return found
