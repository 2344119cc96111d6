"""Symlink-escape-safe recursive copy.

Example:
    >>> from safe_copy import safe_copy
    >>> stats = safe_copy("/srv/site", "/tmp/site", root="/srv", ignore=["*.pyc"])
    >>> stats.to_dict()
    {'files_copied': 12, 'directories_created': 3, 'ignored': 2, 'bytes_copied': 48211}
"""

from safe_copy.safe_copy import CopyStats, SafeCopyEngine, safe_copy

__all__ = ["CopyStats", "SafeCopyEngine", "safe_copy"]
