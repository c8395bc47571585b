"""Helpers for path-like glob patterns, using the grammar of the current platform."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from databricks.labs.pathkit import posix, windows
from databricks.labs.pathkit._platform import IS_WINDOWS
from databricks.labs.pathkit.separator import SEP, SEP_PATTERN

_path = windows if IS_WINDOWS else posix

# Group 1 captures an escaped character; group 2 captures syntax that makes a pattern a glob.
_GLOB_SYNTAX = re.compile(
    r"\\(.)|(^!|\*|\?|[\].+)]\?|\[[^\\\]]+\]|\{[^\\}]+\}|\(\?[:!=][^\\)]+\)|\([^|]+\|[^\\)]+\))"
)
_CLOSING = {"{": "}", "(": ")", "[": "]"}

# A '..' that follows a globstar: normalization must not let it consume the '**'.
_SEPARATORS = SEP_PATTERN.pattern
_GLOBSTAR_PARENT = re.compile(rf"(^|{_SEPARATORS})(\*\*{_SEPARATORS})\.\.(?={_SEPARATORS}|$)")


def is_glob(text: str) -> bool:
    """Test whether a string contains glob syntax: wildcards, classes, braces or extglobs.

    Syntax escaped with a backslash doesn't count.
    """
    while text and (match := _GLOB_SYNTAX.search(text)):
        if match.group(2):
            return True
        index = match.end()
        opening = match.group(1)
        closing = _CLOSING.get(opening) if opening else None
        if closing:
            found = text.find(closing, index)
            if found != -1:
                index = found + 1
        text = text[index:]
    return False


def normalize_glob(glob: str, *, globstar: bool = False) -> str:
    """Normalize a glob pattern as a path.

    Args:
        glob: the pattern to normalize.
        globstar: if true, ``**`` is treated as matching any number of directories so ``**/..`` is left intact.
    Raises:
        ValueError: if the pattern contains a NUL character.
    """
    if "\0" in glob:
        msg = f'Glob contains invalid characters: "{glob}"'
        raise ValueError(msg)
    if not globstar:
        return _path.normalize(glob)
    protected = _GLOBSTAR_PARENT.sub(lambda m: f"{m.group(1)}{m.group(2)}\0", glob)
    return _path.normalize(protected).replace("\0", "..")


def join_globs(globs: Iterable[str], *, globstar: bool = False) -> str:
    """Join glob patterns and normalize the result, as per :func:`normalize_glob`."""
    globs = list(globs)
    if not globstar:
        return _path.join(*globs)
    joined = SEP.join(glob for glob in globs if glob)
    if not joined:
        return "."
    return normalize_glob(joined, globstar=True)


@dataclass(frozen=True, kw_only=True)
class _GlobSyntax:
    """The pieces of regular expression that depend on the path grammar."""

    separators: str
    escape: str
    sep: str
    sep_maybe: str
    globstar: str
    wildcard: str

    def is_boundary(self, char: str | None) -> bool:
        return char is None or char in self.separators


_POSIX_GLOB = _GlobSyntax(
    separators="/",
    escape="\\",
    sep="/+",
    sep_maybe="/*",
    globstar=r"(?:[^/]*(?:/|$)+)*",
    wildcard=r"[^/]*",
)
_WINDOWS_GLOB = _GlobSyntax(
    separators="\\/",
    escape="`",
    sep=r"(?:\\|/)+",
    sep_maybe=r"(?:\\|/)*",
    globstar=r"(?:[^\\/]*(?:\\|/|$)+)*",
    wildcard=r"[^\\/]*",
)

_REGEXP_SPECIAL = frozenset("!$()*+.=?[\\^{|")
# Within a class: the range syntax, plus characters that Python reserves for set operations.
_RANGE_SPECIAL = frozenset("-\\][&~|")
# Literal characters that still need a backslash within a class.
_RANGE_RESERVED = frozenset("\\[&~|")
_BRACE = "{"

_POSIX_CLASSES = {
    "alnum": r"\dA-Za-z",
    "alpha": "A-Za-z",
    "ascii": r"\x00-\x7f",
    "blank": r"\t ",
    "cntrl": r"\x00-\x1f\x7f",
    "digit": r"\d",
    "graph": r"\x21-\x7e",
    "lower": "a-z",
    "print": r"\x20-\x7e",
    "punct": r"!\"#$%\&'()*+,\-./:;<=>?@\[\\\]^_`{\|}\~",
    "space": r"\s",
    "upper": "A-Z",
    "word": r"\w",
    "xdigit": r"\dA-Fa-f",
}


def glob_to_regexp(
    glob: str,
    *,
    extended: bool = True,
    globstar: bool = True,
    grammar: str | None = None,
    case_insensitive: bool = False,
) -> re.Pattern[str]:
    """Compile a glob into a regular expression that matches whole paths.

    Supported syntax: ``*`` and ``?``; ``[a-z]`` and ``[!a-z]`` classes, including POSIX classes such as
    ``[[:digit:]]``; ``{a,b}`` alternatives; with ``extended``, the extglobs ``+(a|b)``, ``@(a|b)``, ``?(a|b)``,
    ``*(a|b)`` and ``!(a|b)``; and with ``globstar``, ``**`` as a whole segment matching any number of directories.
    A character is escaped with ``\\`` in the POSIX grammar and with a backtick in the Windows grammar, where ``\\`` is
    a separator. A segment that leaves a class, group or escape open is matched literally. Trailing separators are
    ignored, and a path matches with or without them.

    Args:
        glob: the pattern to compile. The empty pattern matches nothing.
        extended: whether extglob syntax is recognised.
        globstar: whether ``**`` spans directories. Otherwise it is the same as ``*``.
        grammar: ``posix`` or ``windows`` (also ``win32``); defaults to the grammar of the current platform.
        case_insensitive: whether the expression ignores case.
    Raises:
        ValueError: if the grammar isn't recognised.
    """
    syntax = _glob_syntax(grammar)
    if not glob:
        return re.compile("(?!)")
    end = len(glob)
    while end > 1 and glob[end - 1] in syntax.separators:
        end -= 1
    glob = glob[:end]
    parts = []
    start = 0
    while start < len(glob):
        segment, stop, ends_with_globstar = _translate_segment(glob, start, syntax, extended, globstar)
        parts.append(segment)
        if not ends_with_globstar:
            parts.append(syntax.sep if stop < len(glob) else syntax.sep_maybe)
        while stop < len(glob) and glob[stop] in syntax.separators:
            stop += 1
        start = stop
    return re.compile(f"^{''.join(parts)}$", re.IGNORECASE if case_insensitive else 0)


def _glob_syntax(grammar: str | None) -> _GlobSyntax:
    match (grammar or "").lower():
        case "":
            return _WINDOWS_GLOB if IS_WINDOWS else _POSIX_GLOB
        case "posix":
            return _POSIX_GLOB
        case "windows" | "win32":
            return _WINDOWS_GLOB
        case _:
            msg = f"Unknown path grammar: {grammar}"
            raise ValueError(msg)


def _posix_class(glob: str, start: int) -> tuple[str, int] | None:
    """Match ``[:name:]`` at ``start``, returning the name and the index of the closing bracket."""
    colon = glob.find(":", start + 2)
    if colon == -1 or glob[colon + 1 : colon + 2] != "]":
        return None
    return glob[start + 2 : colon], colon + 1


def _translate_segment(
    glob: str, start: int, syntax: _GlobSyntax, extended: bool, globstar: bool
) -> tuple[str, int, bool]:
    """Translate the segment of a glob that starts at ``start``.

    Returns:
        The expression for the segment, the index at which the segment ends, and whether the segment was a globstar.
        A globstar matches its own trailing separator, so none should be added after it.
    """

    def at(index: int) -> str | None:
        return glob[index] if 0 <= index < len(glob) else None

    out: list[str] = []
    groups: list[str] = []
    in_range = in_escape = is_globstar = False
    i = start
    while i < len(glob) and glob[i] not in syntax.separators:
        char = glob[i]
        if in_escape:
            in_escape = False
            special = _RANGE_SPECIAL if in_range else _REGEXP_SPECIAL
            out.append(f"\\{char}" if char in special else char)
        elif char == syntax.escape:
            in_escape = True
        elif char == "[" and not in_range:
            in_range = True
            out.append("[")
            if at(i + 1) == "!":
                i += 1
                out.append("^")
            elif at(i + 1) == "^":
                i += 1
                out.append("\\^")
        elif char == "[" and at(i + 1) == ":" and (posix_class := _posix_class(glob, i)):
            name, i = posix_class
            out.append(_POSIX_CLASSES.get(name, ""))
        elif char == "]" and in_range:
            in_range = False
            out.append("]")
        elif in_range:
            out.append(f"\\{char}" if char in _RANGE_RESERVED else char)
        elif char == ")" and groups and groups[-1] != _BRACE:
            out.append(")")
            kind = groups.pop()
            if kind == "!":
                out.append(syntax.wildcard)
            elif kind != "@":
                out.append(kind)
        elif char == "|" and groups and groups[-1] != _BRACE:
            out.append("|")
        elif extended and char in "+@?!*" and at(i + 1) == "(":
            i += 1
            groups.append(char)
            out.append("(?!" if char == "!" else "(?:")
        elif char == "?":
            out.append(".")
        elif char == "{":
            groups.append(_BRACE)
            out.append("(?:")
        elif char == "}" and groups and groups[-1] == _BRACE:
            groups.pop()
            out.append(")")
        elif char == "," and groups and groups[-1] == _BRACE:
            out.append("|")
        elif char == "*":
            previous = at(i - 1)
            stars = 1
            while at(i + 1) == "*":
                i += 1
                stars += 1
            if globstar and stars == 2 and syntax.is_boundary(previous) and syntax.is_boundary(at(i + 1)):
                out.append(syntax.globstar)
                is_globstar = True
            else:
                out.append(syntax.wildcard)
        else:
            out.append(f"\\{char}" if char in _REGEXP_SPECIAL else char)
        i += 1
    if groups or in_range or in_escape:
        literal = "".join(f"\\{c}" if c in _REGEXP_SPECIAL else c for c in glob[start:i])
        return literal, i, False
    return "".join(out), i, is_globstar
