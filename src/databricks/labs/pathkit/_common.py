"""Primitives shared by the POSIX and Windows path grammars.

Everything here is parameterised by the grammar: a separator predicate, the canonical separator and (where relevant)
the index at which the root of a path ends. Segment boundaries are found by scanning indexes rather than with regular
expressions.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator, Sequence
from urllib.parse import quote, unquote

from databricks.labs.pathkit.parsed import FormatInputPathObject, ParsedPath

SeparatorPredicate = Callable[[str], bool]

# Characters that may appear unencoded in the path of a file URL, in addition to alphanumerics and '_.-~'.
_URL_PATH_SAFE = "/!$&'()*+,;=:@[]^|"


def is_posix_separator(char: str) -> bool:
    return char == "/"


def is_path_separator(char: str) -> bool:
    return char in ("/", "\\")


def is_drive_letter(char: str) -> bool:
    """Whether the character can name a Windows drive: a single ASCII letter."""
    return ("a" <= char <= "z") or ("A" <= char <= "Z")


def fspath(path: str | os.PathLike) -> str:
    """Convert a path argument into a string, rejecting anything that isn't a string or string-based path-like."""
    try:
        converted = os.fspath(path)
    except TypeError:
        converted = path
    if not isinstance(converted, str):
        msg = (
            f"argument should be a str or an os.PathLike object where __fspath__ returns a str, "
            f"not {type(converted).__name__!r}"
        )
        raise TypeError(msg)
    return converted


def iter_segments(path: str, is_separator: SeparatorPredicate, start: int = 0) -> Iterator[str]:
    """Yield the non-empty segments of a path, starting at the given index."""
    end = len(path)
    i = start
    while i < end:
        while i < end and is_separator(path[i]):
            i += 1
        segment_start = i
        while i < end and not is_separator(path[i]):
            i += 1
        if i > segment_start:
            yield path[segment_start:i]


def normalize_string(path: str, allow_above_root: bool, separator: str, is_separator: SeparatorPredicate) -> str:
    """Collapse the ``.`` and ``..`` segments of a (rootless) path.

    Args:
        path: the path to normalize, without its root.
        allow_above_root: whether a ``..`` that cannot be collapsed should be kept. This is false when the path is
            known to hang off a root, where ``..`` above the root refers to the root itself.
        separator: the canonical separator used to join the retained segments.
        is_separator: predicate identifying separator characters in the input.
    Returns:
        The retained segments joined by the separator, possibly empty. Any root has to be re-applied by the caller.
    """
    retained: list[str] = []
    for segment in iter_segments(path, is_separator):
        if segment == ".":
            continue
        if segment == "..":
            if retained and retained[-1] != "..":
                retained.pop()
            elif allow_above_root:
                retained.append(segment)
            continue
        retained.append(segment)
    return separator.join(retained)


def strip_trailing_separators(path: str, is_separator: SeparatorPredicate, root_end: int = 0) -> str:
    """Remove trailing separators, never shortening the path below its root (or to nothing)."""
    end = len(path)
    while end > max(root_end, 1) and is_separator(path[end - 1]):
        end -= 1
    return path[:end]


def dirname_end(path: str, root_end: int, is_separator: SeparatorPredicate) -> int:
    """Locate where the directory portion of a path ends.

    Trailing separators are skipped, then the last segment, then the separators preceding it. The scan never moves
    into the root, which ends at ``root_end``.
    """
    end = len(path)
    while end > root_end and is_separator(path[end - 1]):
        end -= 1
    while end > root_end and not is_separator(path[end - 1]):
        end -= 1
    while end > root_end and is_separator(path[end - 1]):
        end -= 1
    return end


def last_segment(path: str, root_end: int, is_separator: SeparatorPredicate) -> tuple[int, int, int]:
    """Locate the final segment of a path, ignoring trailing separators and never scanning into the root.

    Returns:
        A tuple ``(start, dot, end)``: the final segment is ``path[start:end]`` (empty when ``start == end``), and its
        extension starts at ``dot``, or ``dot`` is -1 if the segment has no extension.
    """
    end = len(path)
    while end > root_end and is_separator(path[end - 1]):
        end -= 1
    start = end
    while start > root_end and not is_separator(path[start - 1]):
        start -= 1
    dot = path.rfind(".", start, end)
    # Dot-files ('.bashrc') and the parent reference ('..') have no extension.
    if dot <= start or path[start:end] == "..":
        dot = -1
    return start, dot, end


def strip_suffix(name: str, suffix: str) -> str:
    """Remove a suffix from a name, but only if the suffix is strictly shorter than the name."""
    if not isinstance(suffix, str):
        msg = f"suffix should be a str, not {type(suffix).__name__!r}"
        raise TypeError(msg)
    if suffix and len(suffix) < len(name) and name.endswith(suffix):
        return name[: -len(suffix)]
    return name


def parse_from(path: str, root_end: int, is_separator: SeparatorPredicate) -> ParsedPath:
    """Decompose a path whose root (possibly empty) ends at ``root_end``."""
    root = path[:root_end]
    start, dot, end = last_segment(path, root_end, is_separator)
    base = path[start:end]
    if dot == -1:
        name, ext = base, ""
    else:
        name, ext = path[start:dot], path[dot:end]
    if start > root_end:
        directory = strip_trailing_separators(path[:start], is_separator, root_end)
    else:
        directory = root
    return ParsedPath(root=root, dir=directory, base=base, ext=ext, name=name)


def format_path(separator: str, path_object: ParsedPath | FormatInputPathObject) -> str:
    """Synthesize a path from its parts: ``base`` wins over ``name + ext`` and ``dir`` wins over ``root``."""
    if not isinstance(path_object, (ParsedPath, FormatInputPathObject)):
        msg = f"path object should be a ParsedPath or FormatInputPathObject, not {type(path_object).__name__!r}"
        raise TypeError(msg)
    root = path_object.root or ""
    directory = path_object.dir or root
    base = path_object.base or f"{path_object.name or ''}{path_object.ext or ''}"
    if not directory:
        return base
    if directory == root:
        return f"{directory}{base}"
    return f"{directory}{separator}{base}"


def common_prefix_length(left: Sequence[str], right: Sequence[str], key: Callable[[str], str] | None = None) -> int:
    """Count the leading segments that two segment sequences have in common."""
    count = 0
    for a, b in zip(left, right):
        if key is not None:
            a, b = key(a), key(b)
        if a != b:
            break
        count += 1
    return count


def quote_url_path(path: str, *, escaped_separator: str) -> str:
    """Percent-encode a path for use as the path of a file URL.

    Lone surrogates (undecodable bytes smuggled through :func:`os.fsdecode`) are encoded as the bytes they stand for.

    Args:
        path: the URL path, which starts with ``/``.
        escaped_separator: the escape written for the second character of a leading ``//``, which would otherwise
            turn the next segment into the host of the URL.
    """
    quoted = quote(path, safe=_URL_PATH_SAFE, errors="surrogateescape")
    if quoted.startswith("//"):
        quoted = f"/{escaped_separator}{quoted[2:]}"
    return quoted


def unquote_url_path(path: str) -> str:
    """Decode the percent-escapes of a URL path; malformed escapes are left as-is."""
    return unquote(path, errors="surrogateescape")
