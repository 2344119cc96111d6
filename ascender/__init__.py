"""Ascending and descending iteration over a path's ancestors.

Example:
    >>> from ascender import ascend, descend
    >>> list(ascend("/usr/local/bin"))
    ['/usr/local/bin', '/usr/local', '/usr', '/']
    >>> list(descend("/usr/local/bin"))
    ['/', '/usr', '/usr/local', '/usr/local/bin']
"""

from ascender.ascender import PathSequence, ascend, descend, search_backwards

__all__ = ["PathSequence", "ascend", "descend", "search_backwards"]
