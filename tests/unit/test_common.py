from pathlib import PurePosixPath

import pytest

from databricks.labs.pathkit import common
from databricks.labs.pathkit._common import (
    common_prefix_length,
    fspath,
    is_drive_letter,
    is_path_separator,
    is_posix_separator,
    iter_segments,
    normalize_string,
    strip_suffix,
    strip_trailing_separators,
)


@pytest.mark.parametrize(
    ("paths", "sep", "expected"),
    [
        (
            ["file://deno/cli/js/deno.ts", "file://deno/std/path/mod.ts", "file://deno/cli/js/main.ts"],
            "/",
            "file://deno/",
        ),
        (["file://deno/cli/js/deno.ts", "https://deno.land/std/path/mod.ts"], "/", ""),
        (["c:\\deno\\cli\\js\\deno.ts", "c:\\deno\\std\\path\\mod.ts", "c:\\deno\\cli\\js\\main.ts"], "\\", "c:\\deno\\"),
        (["/a/b/c", "/a/b/c/d"], "/", "/a/b/c/"),
        (["/a/b/", "/a/b/"], "/", "/a/b/"),
        (["/a/b/c"], "/", "/a/b/"),
        (["relative"], "/", ""),
        (["a/b", "c/d"], "/", ""),
        ([], "/", ""),
        (["", "/a"], "/", ""),
    ],
)
def test_common(paths: list[str], sep: str, expected: str) -> None:
    assert common(paths, sep) == expected


def test_common_does_not_normalize() -> None:
    assert common(["/a/./b/c", "/a/b/d"], "/") == "/a/"


def test_separator_predicates() -> None:
    assert is_posix_separator("/")
    assert not is_posix_separator("\\")
    assert is_path_separator("/")
    assert is_path_separator("\\")
    assert not is_path_separator(":")


@pytest.mark.parametrize(("char", "expected"), [("a", True), ("Z", True), ("1", False), (":", False), ("ü", False)])
def test_is_drive_letter(char: str, expected: bool) -> None:
    assert is_drive_letter(char) is expected


def test_fspath() -> None:
    assert fspath("a/b") == "a/b"
    assert fspath(PurePosixPath("/a/b")) == "/a/b"


@pytest.mark.parametrize("path", [None, 42, b"/a/b", ["a"]])
def test_fspath_rejects_non_strings(path) -> None:
    with pytest.raises(TypeError, match="argument should be a str or an os.PathLike object"):
        fspath(path)


@pytest.mark.parametrize(
    ("path", "start", "expected"),
    [
        ("", 0, []),
        ("///", 0, []),
        ("/a//b/", 0, ["a", "b"]),
        ("a\\b", 0, ["a\\b"]),
        ("C:\\x\\y", 3, ["x\\y"]),
    ],
)
def test_iter_segments_posix(path: str, start: int, expected: list[str]) -> None:
    assert list(iter_segments(path, is_posix_separator, start)) == expected


def test_iter_segments_windows() -> None:
    assert list(iter_segments("C:\\x/y\\\\z", is_path_separator, 3)) == ["x", "y", "z"]


@pytest.mark.parametrize(
    ("path", "allow_above_root", "expected"),
    [
        ("a/./b/../c", True, "a/c"),
        ("../a/..", True, ".."),
        ("../../a", True, "../../a"),
        ("../../a", False, "a"),
        ("a/b/../../..", True, ".."),
        ("a/b/../../..", False, ""),
        ("", True, ""),
        ("./.", True, ""),
    ],
)
def test_normalize_string(path: str, allow_above_root: bool, expected: str) -> None:
    assert normalize_string(path, allow_above_root, "/", is_posix_separator) == expected


def test_normalize_string_uses_canonical_separator() -> None:
    assert normalize_string("a/b\\c", True, "\\", is_path_separator) == "a\\b\\c"


@pytest.mark.parametrize(
    ("path", "root_end", "expected"),
    [
        ("a///", 0, "a"),
        ("///", 0, "/"),
        ("C:\\\\", 3, "C:\\"),
        ("", 0, ""),
    ],
)
def test_strip_trailing_separators(path: str, root_end: int, expected: str) -> None:
    assert strip_trailing_separators(path, is_path_separator, root_end) == expected


@pytest.mark.parametrize(
    ("name", "suffix", "expected"),
    [
        ("file.txt", ".txt", "file"),
        ("file.txt", "txt", "file."),
        ("file.txt", "file.txt", "file.txt"),
        ("file.txt", ".md", "file.txt"),
        ("file.txt", "", "file.txt"),
        ("", ".txt", ""),
    ],
)
def test_strip_suffix(name: str, suffix: str, expected: str) -> None:
    assert strip_suffix(name, suffix) == expected


def test_strip_suffix_requires_a_string() -> None:
    with pytest.raises(TypeError, match="suffix should be a str"):
        strip_suffix("file.txt", None)  # type: ignore[arg-type]


def test_common_prefix_length() -> None:
    assert common_prefix_length(["a", "b", "c"], ["a", "b", "d"]) == 2
    assert common_prefix_length(["a", "b"], ["a", "b", "c"]) == 2
    assert common_prefix_length(["A"], ["a"]) == 0
    assert common_prefix_length(["A", "B"], ["a", "b"], key=str.lower) == 2
    assert common_prefix_length([], ["a"]) == 0
