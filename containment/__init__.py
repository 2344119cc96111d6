"""Containment checks between paths.

Example:
    >>> from containment import in_path, strictly_within
    >>> in_path("/var/www/index.html", "/var/www")
    True
    >>> strictly_within("/var/www", "/var/www")
    False
"""

from containment.containment import ContainmentChecker, in_path, strictly_within, within

__all__ = ["ContainmentChecker", "in_path", "strictly_within", "within"]
