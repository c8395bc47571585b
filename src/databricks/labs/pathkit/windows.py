"""Windows path grammar, in the same vein as :module:`ntpath`.

Both ``\\`` and ``/`` are accepted as separators on input; output always uses ``\\``. A path may be anchored by a
device: either a drive (``C:``) or a UNC share (``\\\\server\\share``). Drive-relative paths such as ``C:foo`` have a
device but no root, and root-relative paths such as ``\\foo`` have a root but no device.

Devices are compared case-insensitively but their casing is never changed. As with the POSIX grammar nothing here
touches the filesystem, the environment or the current working directory.
"""

from __future__ import annotations

import enum
import logging
import os
import re
from dataclasses import dataclass
from urllib.parse import ParseResult, SplitResult, urlsplit

from databricks.labs.pathkit._common import (
    common_prefix_length,
    dirname_end,
    format_path,
    fspath,
    is_drive_letter,
    is_path_separator,
    iter_segments,
    last_segment,
    normalize_string,
    parse_from,
    quote_url_path,
    strip_suffix,
    unquote_url_path,
)
from databricks.labs.pathkit.errors import (
    CrossDeviceRelative,
    InvalidDriveLetter,
    InvalidHostname,
    InvalidUrlScheme,
    NotAbsolutePath,
)
from databricks.labs.pathkit.parsed import FormatInputPathObject, ParsedPath

logger = logging.getLogger(__name__)

sep = "\\"
delimiter = ";"

__all__ = (
    "basename",
    "delimiter",
    "dirname",
    "extname",
    "format",
    "from_file_url",
    "is_absolute",
    "join",
    "normalize",
    "parse",
    "relative",
    "resolve",
    "sep",
    "to_file_url",
    "to_namespaced_path",
)

# The server of a UNC path, provided it's followed by (the start of) a share.
_UNC_SERVER = re.compile(r"^[/\\]{2}([^/\\]+)(?=[/\\](?:[^/\\]|$))")

# Characters that cannot appear in the host of a URL.
_FORBIDDEN_HOST_CHARACTERS = frozenset("\0\t\n\r #%/:<>?@[\\]^|")


class _RootState(enum.Enum):
    START = enum.auto()
    DRIVE_LETTER_SEEN = enum.auto()
    FIRST_SEPARATOR_SEEN = enum.auto()
    UNC_SERVER = enum.auto()
    UNC_SHARE = enum.auto()


@dataclass(frozen=True)
class _Root:
    device: str = ""
    """The drive (``C:``) or UNC share (``\\\\server\\share``), with canonical separators."""

    end: int = 0
    """The index at which the root ends, including the separator that follows it (if present)."""

    is_absolute: bool = False

    is_unc_root: bool = False
    """Whether the path consists of nothing but a UNC share."""


def _parse_root(path: str) -> _Root:
    """Determine the root of a path by stepping through its first few characters."""
    length = len(path)
    state = _RootState.START
    i = 0
    server = ""
    while True:
        match state:
            case _RootState.START:
                if length == 0:
                    return _Root()
                if is_path_separator(path[0]):
                    state, i = _RootState.FIRST_SEPARATOR_SEEN, 1
                elif length >= 2 and is_drive_letter(path[0]) and path[1] == ":":
                    state, i = _RootState.DRIVE_LETTER_SEEN, 2
                else:
                    return _Root()
            case _RootState.DRIVE_LETTER_SEEN:
                if i < length and is_path_separator(path[i]):
                    return _Root(device=path[:2], end=3, is_absolute=True)
                return _Root(device=path[:2], end=2)
            case _RootState.FIRST_SEPARATOR_SEEN:
                if i < length and is_path_separator(path[i]):
                    state, i = _RootState.UNC_SERVER, 2
                else:
                    return _Root(end=1, is_absolute=True)
            case _RootState.UNC_SERVER:
                j = i
                while j < length and not is_path_separator(path[j]):
                    j += 1
                server = path[i:j]
                while j < length and is_path_separator(path[j]):
                    j += 1
                if not server or j == length:
                    # Not a complete UNC root: just a root-relative path.
                    return _Root(end=1, is_absolute=True)
                state, i = _RootState.UNC_SHARE, j
            case _RootState.UNC_SHARE:
                j = i
                while j < length and not is_path_separator(path[j]):
                    j += 1
                device = f"\\\\{server}\\{path[i:j]}"
                if j == length:
                    return _Root(device=device, end=j, is_absolute=True, is_unc_root=True)
                return _Root(device=device, end=j + 1, is_absolute=True)


def _same_device(left: str, right: str) -> bool:
    return left.lower() == right.lower()


def _merge_segment(path: str, device: str, tail: str, absolute: bool) -> tuple[str, str, bool, bool]:
    """Prepend a segment to a partial resolution, returning the new state and whether resolution is complete."""
    root = _parse_root(path)
    if root.device:
        if not device:
            device = root.device
        elif not _same_device(root.device, device):
            # A different drive can't contribute to the resolved path.
            return device, tail, absolute, False
    if absolute:
        return device, tail, absolute, bool(device)
    tail = f"{path[root.end:]}\\{tail}"
    return device, tail, root.is_absolute, root.is_absolute and bool(device)


def resolve(*segments: str | os.PathLike, cwd: str | os.PathLike | None = None) -> str:
    """Resolve a sequence of path segments into a single normalized path.

    Segments are considered from right to left until both a device and a root have been found. Drive-relative
    segments (``C:foo``) only combine with segments on the same drive. If the segments do not determine an absolute
    path then ``cwd`` (when supplied) is used as the base, unless it refers to a different drive in which case the
    root of that drive is used; without ``cwd`` the result may be relative.

    Args:
        segments: the path segments to resolve. Empty segments are ignored.
        cwd: the directory that relative results are resolved against, if any.
    Returns:
        The resolved path.
    """
    candidates = [fspath(segment) for segment in segments]
    device = ""
    tail = ""
    absolute = False
    done = False
    for path in reversed(candidates):
        if not path:
            continue
        device, tail, absolute, done = _merge_segment(path, device, tail, absolute)
        if done:
            break
    if not done and cwd is not None:
        base = fspath(cwd)
        if device and not absolute and not _same_device(_parse_root(base).device, device):
            base = f"{device}\\"
        device, tail, absolute, _ = _merge_segment(base, device, tail, absolute)
    tail = normalize_string(tail, not absolute, sep, is_path_separator)
    if absolute:
        return f"{device}\\{tail}"
    return f"{device}{tail}" or "."


def normalize(path: str | os.PathLike) -> str:
    """Normalize a path, collapsing redundant separators and resolving ``.`` and ``..`` segments.

    Separators are converted to ``\\``. The root is preserved as-is, except that a bare UNC share gains a trailing
    separator. A trailing separator on the path is preserved, and the empty path normalizes to ``.``.
    """
    path = fspath(path)
    if not path:
        return "."
    root = _parse_root(path)
    if root.is_unc_root:
        return f"{root.device}\\"
    tail = normalize_string(path[root.end :], not root.is_absolute, sep, is_path_separator)
    if not tail and not root.is_absolute:
        tail = "."
    if tail and is_path_separator(path[-1]):
        tail += sep
    if root.is_absolute:
        return f"{root.device}\\{tail}"
    return f"{root.device}{tail}"


def is_absolute(path: str | os.PathLike) -> bool:
    """Whether the path has a root: ``\\foo``, ``C:\\foo`` and ``\\\\server\\share`` are absolute; ``C:foo`` isn't."""
    path = fspath(path)
    return _parse_root(path).is_absolute


def join(*paths: str | os.PathLike | None) -> str:
    """Join path segments with the separator and normalize the result.

    Empty segments (and ``None``) are skipped; if nothing remains the result is ``.``. The result only starts with a
    UNC root if the first segment does.
    """
    usable = [joined for joined in (fspath(path) for path in paths if path is not None) if joined]
    if not usable:
        return "."
    joined = sep.join(usable)
    first = usable[0]
    looks_like_unc = len(first) > 2 and is_path_separator(first[0]) and is_path_separator(first[1])
    if not looks_like_unc or is_path_separator(first[2]):
        leading = 0
        while leading < len(joined) and is_path_separator(joined[leading]):
            leading += 1
        if leading >= 2:
            joined = f"\\{joined[leading:]}"
    return normalize(joined)


def relative(
    from_path: str | os.PathLike,
    to_path: str | os.PathLike,
    *,
    cwd: str | os.PathLike | None = None,
) -> str:
    """Compute the relative path from one path to another.

    Both paths are first resolved (against ``cwd``, if supplied). Devices and segments are compared
    case-insensitively; the segments of the result keep the casing of ``to_path``.

    Returns:
        The relative path, or the empty string if both paths resolve to the same location.
    Raises:
        CrossDeviceRelative: if the paths are on different drives or UNC shares.
        NotAbsolutePath: if the answer depends on a base directory that wasn't supplied: one path has a root and the
            other doesn't, or ``from_path`` climbs above what the two paths share.
    """
    resolved_from = resolve(from_path, cwd=cwd)
    resolved_to = resolve(to_path, cwd=cwd)
    if resolved_from == resolved_to:
        return ""
    from_root = _parse_root(resolved_from)
    to_root = _parse_root(resolved_to)
    if not _same_device(from_root.device, to_root.device):
        logger.debug(f"No relative path between devices: {from_root.device!r} and {to_root.device!r}")
        msg = f"Cannot express {resolved_to} relative to {resolved_from}: the paths are on different devices"
        raise CrossDeviceRelative(msg)
    from_segments = [s for s in iter_segments(resolved_from, is_path_separator, from_root.end) if s != "."]
    to_segments = [s for s in iter_segments(resolved_to, is_path_separator, to_root.end) if s != "."]
    common = common_prefix_length(from_segments, to_segments, key=str.lower)
    if from_root.is_absolute != to_root.is_absolute or ".." in from_segments[common:]:
        msg = f"Cannot express {resolved_to} relative to {resolved_from} without an absolute base directory"
        raise NotAbsolutePath(msg)
    return sep.join([".."] * (len(from_segments) - common) + to_segments[common:])


def to_namespaced_path(path: str | os.PathLike, *, cwd: str | os.PathLike | None = None) -> str:
    """Convert a path into its extended-length form, ``\\\\?\\C:\\...`` or ``\\\\?\\UNC\\server\\share\\...``.

    Paths that do not resolve to a drive or UNC path, including those that are already namespaced, are returned
    unchanged.
    """
    path = fspath(path)
    if not path:
        return path
    resolved = resolve(path, cwd=cwd)
    if len(resolved) >= 3:
        if resolved.startswith("\\\\"):
            if resolved[2] not in ("?", "."):
                return f"\\\\?\\UNC\\{resolved[2:]}"
        elif is_drive_letter(resolved[0]) and resolved[1:3] == ":\\":
            return f"\\\\?\\{resolved}"
    return path


def dirname(path: str | os.PathLike) -> str:
    """Return the directory portion of a path, ``.`` if there is none or the root if that's all there is."""
    path = fspath(path)
    end = dirname_end(path, _parse_root(path).end, is_path_separator)
    return path[:end] if end else "."


def basename(path: str | os.PathLike, suffix: str = "") -> str:
    """Return the final component of a path, ignoring trailing separators and the root.

    Args:
        path: the path from which to extract the final component.
        suffix: a suffix to remove from the final component, provided it is shorter than the component.
    """
    path = fspath(path)
    start, _, end = last_segment(path, _parse_root(path).end, is_path_separator)
    return strip_suffix(path[start:end], suffix)


def extname(path: str | os.PathLike) -> str:
    """Return the extension of the final component of a path, including its leading period. Roots have none."""
    path = fspath(path)
    _, dot, end = last_segment(path, _parse_root(path).end, is_path_separator)
    return path[dot:end] if dot != -1 else ""


def format(path_object: ParsedPath | FormatInputPathObject) -> str:  # pylint: disable=redefined-builtin
    """Build a path from its parts, joining ``dir`` and ``base`` with a backslash."""
    return format_path(sep, path_object)


def parse(path: str | os.PathLike) -> ParsedPath:
    """Split a path into its root, directory, base, name and extension. The root includes any device."""
    path = fspath(path)
    return parse_from(path, _parse_root(path).end, is_path_separator)


def _url_host(url: SplitResult | ParseResult) -> str:
    # Unlike SplitResult.hostname, this keeps the casing of the host.
    host = url.netloc.rpartition("@")[2]
    if host.startswith("["):
        return host.partition("]")[0] + "]"
    return host.partition(":")[0]


def from_file_url(url: str | SplitResult | ParseResult) -> str:
    """Convert a ``file:`` URL into a path.

    Three shapes are supported: ``file:///C:/foo`` (a drive path), ``file://server/share/foo`` (a UNC path) and
    ``file:///foo`` (a root-relative path).
    A drive path served from ``localhost`` is a local drive path. Other hosts keep the casing they were written with.

    Raises:
        InvalidUrlScheme: if the URL is not a file URL.
        InvalidDriveLetter: if the first segment of the URL path looks like a drive but isn't a single ASCII letter.
    """
    parsed = urlsplit(url) if isinstance(url, str) else url
    if parsed.scheme.lower() != "file":
        msg = f"Must be a file URL: {parsed.geturl()}"
        raise InvalidUrlScheme(msg)
    host = _url_host(parsed)
    # Separators are converted before decoding, so that an encoded '/' remains part of its segment.
    path = unquote_url_path(parsed.path.replace("/", "\\"))
    drive, _, rest = path.lstrip("\\").partition("\\")
    if drive.endswith(":"):
        if len(drive) != 2 or not is_drive_letter(drive[0]):
            msg = f"Invalid drive letter in file URL: {drive}"
            raise InvalidDriveLetter(msg)
        if not host or host.lower() == "localhost":
            return f"{drive}\\{rest}"
    if host:
        return f"\\\\{host}{path}"
    return path or sep


def to_file_url(path: str | os.PathLike) -> SplitResult:
    """Convert an absolute path into a ``file:`` URL.

    The server of a UNC path becomes the host of the URL.

    Raises:
        NotAbsolutePath: if the path is not absolute.
        InvalidHostname: if the server of a UNC path cannot be used as a URL host.
    """
    path = fspath(path)
    if not is_absolute(path):
        msg = f"Must be an absolute path: {path}"
        raise NotAbsolutePath(msg)
    hostname = ""
    pathname = path
    if match := _UNC_SERVER.match(path):
        hostname = match.group(1)
        pathname = path[match.end() :]
        if any(c in _FORBIDDEN_HOST_CHARACTERS for c in hostname):
            msg = f"Invalid hostname: {hostname}"
            raise InvalidHostname(msg)
    pathname = pathname.replace("\\", "/")
    if not pathname.startswith("/"):
        pathname = f"/{pathname}"
    quoted = quote_url_path(pathname, escaped_separator="%5C")
    return SplitResult(scheme="file", netloc=hostname, path=quoted, query="", fragment="")
