"""Path manipulation for POSIX and Windows path grammars.

The functions exported here use the grammar of the current platform. Both grammars are always available, as the
:mod:`posix` and :mod:`windows` modules, for code that needs a specific one irrespective of where it runs.
"""

import logging

from databricks.labs.pathkit import posix, windows
from databricks.labs.pathkit._platform import IS_WINDOWS
from databricks.labs.pathkit.common import common
from databricks.labs.pathkit.errors import (
    CrossDeviceRelative,
    InvalidDriveLetter,
    InvalidHostname,
    InvalidUrlScheme,
    NotAbsolutePath,
    PathError,
)
from databricks.labs.pathkit.glob import glob_to_regexp, is_glob, join_globs, normalize_glob
from databricks.labs.pathkit.parsed import FormatInputPathObject, ParsedPath
from databricks.labs.pathkit.separator import SEP, SEP_PATTERN

logger = logging.getLogger(__name__)

_path = windows if IS_WINDOWS else posix
logger.debug(f"Default path grammar: {_path.__name__}")

basename = _path.basename
delimiter = _path.delimiter
dirname = _path.dirname
extname = _path.extname
format = _path.format  # pylint: disable=redefined-builtin
from_file_url = _path.from_file_url
is_absolute = _path.is_absolute
join = _path.join
normalize = _path.normalize
parse = _path.parse
relative = _path.relative
resolve = _path.resolve
sep = _path.sep
to_file_url = _path.to_file_url
to_namespaced_path = _path.to_namespaced_path

__all__ = (
    "SEP",
    "SEP_PATTERN",
    "CrossDeviceRelative",
    "FormatInputPathObject",
    "InvalidDriveLetter",
    "InvalidHostname",
    "InvalidUrlScheme",
    "NotAbsolutePath",
    "ParsedPath",
    "PathError",
    "basename",
    "common",
    "delimiter",
    "dirname",
    "extname",
    "format",
    "from_file_url",
    "glob_to_regexp",
    "is_absolute",
    "is_glob",
    "join",
    "join_globs",
    "normalize",
    "normalize_glob",
    "parse",
    "posix",
    "relative",
    "resolve",
    "sep",
    "to_file_url",
    "to_namespaced_path",
    "windows",
)
