"""POSIX path grammar, in the same vein as :module:`posixpath`.

Paths are separated by ``/`` and a path is absolute if (and only if) it starts with ``/``. Unlike :module:`posixpath`
there is no special treatment of a leading ``//``, and nothing here ever consults the filesystem or the current working
directory: callers that need to resolve relative paths must supply the base themselves.
"""

from __future__ import annotations

import os
from urllib.parse import ParseResult, SplitResult, urlsplit

from databricks.labs.pathkit._common import (
    common_prefix_length,
    dirname_end,
    format_path,
    fspath,
    is_posix_separator,
    iter_segments,
    last_segment,
    normalize_string,
    parse_from,
    quote_url_path,
    strip_suffix,
    unquote_url_path,
)
from databricks.labs.pathkit.errors import InvalidUrlScheme, NotAbsolutePath
from databricks.labs.pathkit.parsed import FormatInputPathObject, ParsedPath

sep = "/"
delimiter = ":"

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


def resolve(*segments: str | os.PathLike, cwd: str | os.PathLike | None = None) -> str:
    """Resolve a sequence of path segments into a single normalized path.

    Segments are considered from right to left, prepending each to the result until an absolute path has been
    constructed. If no segment is absolute, ``cwd`` (when supplied) is used as the base; otherwise the result remains
    relative.

    Args:
        segments: the path segments to resolve. Empty segments are ignored.
        cwd: the directory that relative results are resolved against, if any.
    Returns:
        The resolved path, without any trailing separator unless it is the root.
    """
    candidates = [fspath(segment) for segment in segments]
    if cwd is not None:
        candidates.insert(0, fspath(cwd))
    resolved = ""
    resolved_absolute = False
    for path in reversed(candidates):
        if not path:
            continue
        resolved = f"{path}/{resolved}"
        if is_absolute(path):
            resolved_absolute = True
            break
    resolved = normalize_string(resolved, not resolved_absolute, sep, is_posix_separator)
    if resolved_absolute:
        return f"/{resolved}"
    return resolved or "."


def normalize(path: str | os.PathLike) -> str:
    """Normalize a path, collapsing redundant separators and resolving ``.`` and ``..`` segments.

    A ``..`` that would climb above the start of a relative path is preserved, and one that would climb above the
    root of an absolute path is dropped. A trailing separator is preserved. The empty path normalizes to ``.``.
    """
    path = fspath(path)
    if not path:
        return "."
    absolute = is_absolute(path)
    trailing_separator = is_posix_separator(path[-1])
    normalized = normalize_string(path, not absolute, sep, is_posix_separator)
    if not normalized and not absolute:
        normalized = "."
    if normalized and trailing_separator:
        normalized += sep
    return f"/{normalized}" if absolute else normalized


def is_absolute(path: str | os.PathLike) -> bool:
    path = fspath(path)
    return path.startswith(sep)


def join(*paths: str | os.PathLike | None) -> str:
    """Join path segments with the separator and normalize the result.

    Empty segments (and ``None``) are skipped; if nothing remains the result is ``.``.
    """
    usable = [joined for joined in (fspath(path) for path in paths if path is not None) if joined]
    if not usable:
        return "."
    return normalize(sep.join(usable))


def relative(
    from_path: str | os.PathLike,
    to_path: str | os.PathLike,
    *,
    cwd: str | os.PathLike | None = None,
) -> str:
    """Compute the relative path from one path to another.

    Both paths are first resolved (against ``cwd``, if supplied) and their segments compared exactly: this grammar is
    case-sensitive.

    Returns:
        The relative path, or the empty string if both paths resolve to the same location.
    Raises:
        NotAbsolutePath: if the answer depends on a base directory that wasn't supplied: one path is relative and the
            other isn't, or ``from_path`` climbs above what the two paths share.
    """
    resolved_from = resolve(from_path, cwd=cwd)
    resolved_to = resolve(to_path, cwd=cwd)
    if resolved_from == resolved_to:
        return ""
    from_segments = [s for s in iter_segments(resolved_from, is_posix_separator) if s != "."]
    to_segments = [s for s in iter_segments(resolved_to, is_posix_separator) if s != "."]
    common = common_prefix_length(from_segments, to_segments)
    if is_absolute(resolved_from) != is_absolute(resolved_to) or ".." in from_segments[common:]:
        msg = f"Cannot express {resolved_to} relative to {resolved_from} without an absolute base directory"
        raise NotAbsolutePath(msg)
    return sep.join([".."] * (len(from_segments) - common) + to_segments[common:])


def to_namespaced_path(path: str | os.PathLike) -> str:
    """POSIX has no path namespaces: the path is returned as-is."""
    return fspath(path)


def _root_end(path: str) -> int:
    return 1 if is_absolute(path) else 0


def dirname(path: str | os.PathLike) -> str:
    """Return the directory portion of a path, ``.`` if there is none or the root if that's all there is."""
    path = fspath(path)
    end = dirname_end(path, _root_end(path), is_posix_separator)
    return path[:end] if end else "."


def basename(path: str | os.PathLike, suffix: str = "") -> str:
    """Return the final component of a path, ignoring trailing separators.

    Args:
        path: the path from which to extract the final component.
        suffix: a suffix to remove from the final component, provided it is shorter than the component.
    """
    path = fspath(path)
    start, _, end = last_segment(path, _root_end(path), is_posix_separator)
    return strip_suffix(path[start:end], suffix)


def extname(path: str | os.PathLike) -> str:
    """Return the extension of the final component of a path, including its leading period.

    Leading periods do not start an extension, so the extension of ``.bashrc`` is empty.
    """
    path = fspath(path)
    _, dot, end = last_segment(path, _root_end(path), is_posix_separator)
    return path[dot:end] if dot != -1 else ""


def format(path_object: ParsedPath | FormatInputPathObject) -> str:  # pylint: disable=redefined-builtin
    """Build a path from its parts, the inverse of :func:`parse`."""
    return format_path(sep, path_object)


def parse(path: str | os.PathLike) -> ParsedPath:
    """Split a path into its root, directory, base, name and extension."""
    path = fspath(path)
    return parse_from(path, _root_end(path), is_posix_separator)


def from_file_url(url: str | SplitResult | ParseResult) -> str:
    """Convert a ``file:`` URL into a path.

    Raises:
        InvalidUrlScheme: if the URL is not a file URL.
    """
    parsed = urlsplit(url) if isinstance(url, str) else url
    if parsed.scheme.lower() != "file":
        msg = f"Must be a file URL: {parsed.geturl()}"
        raise InvalidUrlScheme(msg)
    return unquote_url_path(parsed.path) or sep


def to_file_url(path: str | os.PathLike) -> SplitResult:
    """Convert an absolute path into a ``file:`` URL, percent-encoding the characters that need it.

    Raises:
        NotAbsolutePath: if the path is relative.
    """
    path = fspath(path)
    if not is_absolute(path):
        msg = f"Must be an absolute path: {path}"
        raise NotAbsolutePath(msg)
    quoted = quote_url_path(path, escaped_separator="%2F")
    return SplitResult(scheme="file", netloc="", path=quoted, query="", fragment="")
