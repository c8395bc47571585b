from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class ParsedPath:
    """The decomposition of a path, as produced by ``parse()``."""

    root: str = ""
    """The root of the path: ``/``, ``C:\\``, ``\\\\server\\share\\`` or empty for relative paths."""

    dir: str = ""
    """The directory portion of the path, which always starts with the root."""

    base: str = ""
    """The final path component: ``name + ext``."""

    ext: str = ""
    """The extension of the final component, including the leading period."""

    name: str = ""
    """The final component, without its extension."""


@dataclass(frozen=True, kw_only=True)
class FormatInputPathObject:
    """A partial path description, accepted by ``format()``.

    If ``base`` is set it takes precedence over ``name`` and ``ext``; if ``dir`` is not set then ``root`` is used in
    its place.
    """

    root: str | None = None
    dir: str | None = None
    base: str | None = None
    ext: str | None = None
    name: str | None = None
