"""Utility modules shared by the path packages.

This package contains helpers that are not part of normalization,
containment or copying themselves but support them: path string handling,
the host filesystem capability set, ignore matching and temp names.
"""

from .file_utils import format_size, make_tmpname
from .host_fs import Filesystem, HostFilesystem
from .ignore_utils import IgnoreMatcher
from .path_utils import basename, dirname, join, split_path

__all__ = [
    "format_size",
    "make_tmpname",
    "Filesystem",
    "HostFilesystem",
    "IgnoreMatcher",
    "basename",
    "dirname",
    "join",
    "split_path",
]
