"""Shared fixtures: an in-memory Filesystem for injection tests."""

import errno
import posixpath
from typing import Dict, List, Tuple

import pytest

from path_errors import NotFound

Node = Tuple[str, object]


class InMemoryFilesystem:
    """Dict-backed filesystem with directories, files and symlinks.

    Paths are POSIX strings. Relative paths are taken relative to ``cwd``.
    Children are listed in creation order.
    """

    def __init__(self, cwd: str = "/work"):
        self.cwd = cwd
        self.nodes: Dict[str, Node] = {"/": ("dir", None)}
        self.add_dir(cwd)

    # Setup helpers

    def add_dir(self, path: str) -> None:
        path = self.expand_path(path)
        parent = posixpath.dirname(path)
        if parent != path and parent not in self.nodes:
            self.add_dir(parent)
        self.nodes.setdefault(path, ("dir", None))

    def add_file(self, path: str, data: bytes = b"") -> None:
        path = self.expand_path(path)
        self.add_dir(posixpath.dirname(path))
        self.nodes[path] = ("file", data)

    def add_link(self, path: str, target: str) -> None:
        path = self.expand_path(path)
        self.add_dir(posixpath.dirname(path))
        self.nodes[path] = ("link", target)

    def read(self, path: str) -> bytes:
        kind, data = self.nodes[self._resolve(path)]
        assert kind == "file"
        return data

    # Filesystem protocol

    def expand_path(self, path: str) -> str:
        if not path.startswith("/"):
            path = posixpath.join(self.cwd, path)
        path = posixpath.normpath(path)
        return "/" + path.lstrip("/")

    def _resolve(self, path: str, follow_last: bool = True, depth: int = 0) -> str:
        if depth > 40:
            raise OSError(errno.ELOOP, "Too many levels of symbolic links", path)
        parts = [part for part in self.expand_path(path).split("/") if part]
        current = "/"
        for index, part in enumerate(parts):
            candidate = posixpath.join(current, part)
            node = self.nodes.get(candidate)
            is_last = index == len(parts) - 1
            if node is not None and node[0] == "link" and (follow_last or not is_last):
                target = node[1]
                if not target.startswith("/"):
                    target = posixpath.join(current, target)
                current = self._resolve(target, True, depth + 1)
            else:
                current = candidate
        return current

    def _kind(self, path: str) -> str:
        node = self.nodes.get(self._resolve(path))
        return node[0] if node else ""

    def exists(self, path: str) -> bool:
        return self._kind(path) != ""

    def is_file(self, path: str) -> bool:
        return self._kind(path) == "file"

    def is_dir(self, path: str) -> bool:
        return self._kind(path) == "dir"

    def is_symlink(self, path: str) -> bool:
        node = self.nodes.get(self._resolve(path, follow_last=False))
        return node is not None and node[0] == "link"

    def resolve_real_path(self, path: str) -> str:
        real = self._resolve(path)
        if real not in self.nodes:
            raise NotFound(path)
        return real

    def list_children(self, path: str) -> List[str]:
        real = self._resolve(path)
        if self.nodes.get(real, ("", None))[0] != "dir":
            raise NotFound(path)
        return [
            posixpath.basename(name)
            for name in self.nodes
            if name != real and posixpath.dirname(name) == real
        ]

    def make_dir(self, path: str) -> None:
        self.add_dir(path)

    def copy_file(self, source: str, destination: str, preserve: bool = True) -> None:
        real = self._resolve(source)
        node = self.nodes.get(real)
        if node is None or node[0] != "file":
            raise NotFound(source)
        self.nodes[self.expand_path(destination)] = ("file", node[1])

    def file_size(self, path: str) -> int:
        return len(self.read(path))


@pytest.fixture
def memory_fs() -> InMemoryFilesystem:
    """Provide an empty in-memory filesystem rooted at /work."""
    return InMemoryFilesystem()
