"""Errors raised by the path grammars.

All of these indicate a programming or input error: the operations are deterministic, so retrying cannot help.
"""


class PathError(ValueError):
    """Base class for path-grammar errors."""


class InvalidUrlScheme(PathError):
    """A file URL was expected, but the URL has some other scheme."""


class NotAbsolutePath(PathError):
    """An absolute path was required, but a relative path was supplied."""


class CrossDeviceRelative(PathError):
    """No relative path exists between two paths on different drives or UNC shares."""


class InvalidDriveLetter(PathError):
    """A file URL names a drive that is not a single ASCII letter."""


class InvalidHostname(PathError):
    """A UNC server name cannot be used as the host of a file URL."""
