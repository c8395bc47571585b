import logging
import re

import pytest

import databricks.labs.pathkit as pathkit
from databricks.labs.pathkit import SEP, SEP_PATTERN, posix, windows
from databricks.labs.pathkit._platform import GRAMMAR_ENV_VAR, IS_WINDOWS, detect_windows

_GRAMMAR_OPERATIONS = (
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


@pytest.mark.parametrize(
    ("environ", "os_name", "expected"),
    [
        ({}, "posix", False),
        ({}, "nt", True),
        ({GRAMMAR_ENV_VAR: ""}, "nt", True),
        ({GRAMMAR_ENV_VAR: "posix"}, "nt", False),
        ({GRAMMAR_ENV_VAR: "windows"}, "posix", True),
        ({GRAMMAR_ENV_VAR: " Win32 "}, "posix", True),
        ({GRAMMAR_ENV_VAR: "POSIX"}, "posix", False),
    ],
)
def test_detect_windows(environ: dict[str, str], os_name: str, expected: bool) -> None:
    assert detect_windows(environ, os_name) is expected


def test_detect_windows_ignores_unrecognized_values(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="databricks.labs.pathkit"):
        assert detect_windows({GRAMMAR_ENV_VAR: "macos"}, "posix") is False

    assert f"Ignoring unrecognized {GRAMMAR_ENV_VAR} value: macos" in caplog.messages


@pytest.mark.parametrize("name", _GRAMMAR_OPERATIONS)
def test_facade_uses_platform_grammar(name: str) -> None:
    grammar = windows if IS_WINDOWS else posix

    assert getattr(pathkit, name) == getattr(grammar, name)


@pytest.mark.parametrize("grammar", [posix, windows], ids=["posix", "windows"])
def test_grammars_export_the_same_operations(grammar) -> None:
    assert set(grammar.__all__) == set(_GRAMMAR_OPERATIONS)


def test_separator_matches_platform_grammar() -> None:
    assert SEP == pathkit.sep
    assert SEP_PATTERN.fullmatch(SEP * 3)
    assert bool(SEP_PATTERN.fullmatch("\\")) is IS_WINDOWS


def test_facade_exports() -> None:
    assert {"posix", "windows", "common", "is_glob", "glob_to_regexp", "PathError", "ParsedPath"} <= set(pathkit.__all__)
    for name in pathkit.__all__:
        assert hasattr(pathkit, name), name


def test_errors_are_value_errors() -> None:
    with pytest.raises(ValueError, match=re.escape("Must be an absolute path: a/b")):
        posix.to_file_url("a/b")
    with pytest.raises(pathkit.PathError):
        windows.relative("C:\\a", "D:\\a")
