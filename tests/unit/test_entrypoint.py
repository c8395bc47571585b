import inspect
import logging
import os
from pathlib import Path
from unittest.mock import MagicMock

import pytest

import databricks.labs.pathkit.entrypoint as entrypoint
from databricks.labs.pathkit import cli
from databricks.labs.pathkit.entrypoint import (
    find_project_root,
    get_logger,
    is_in_debug,
    module_name,
    run_main,
)


def test_find_project_root():
    root = find_project_root(__file__)

    this_file = Path(__file__)
    assert Path(root) == this_file.parent.parent.parent


def test_find_project_root_in_tmp_dir_fails(tmp_path):
    with pytest.raises(NotADirectoryError, match="Cannot find project root"):
        find_project_root((tmp_path / "foo.py").as_posix())


def test_find_project_root_with_setup_py(tmp_path):
    (tmp_path / "setup.py").touch()
    (tmp_path / "pkg").mkdir()

    root = find_project_root((tmp_path / "pkg" / "mod.py").as_posix())

    assert Path(root) == tmp_path


def test_module_name_of_test() -> None:
    assert module_name(__file__) == "tests.unit.test_entrypoint"


def test_module_name_of_source_skips_src() -> None:
    assert module_name(inspect.getfile(entrypoint)) == "databricks.labs.pathkit.entrypoint"


def test_module_name_of_cli_is_its_package() -> None:
    assert module_name(inspect.getfile(cli)) == "databricks.labs.pathkit"


def test_module_name_outside_of_project(tmp_path) -> None:
    assert module_name((tmp_path / "script.py").as_posix()) == "script"


def test_run_main(monkeypatch):
    monkeypatch.setattr(entrypoint, "install_logger", MagicMock())
    monkeypatch.setattr("sys.argv", ["prog", '{"command": "x"}'])
    main = MagicMock(return_value=0)

    assert run_main(main) == 0

    main.assert_called_once_with('{"command": "x"}')


def test_get_logger_name() -> None:
    """The logger name is module-like, even though the file is a script/path."""
    logger = get_logger(__file__)

    assert logger.name == "tests.unit.test_entrypoint"


@pytest.fixture
def log_manager() -> logging.Manager:
    """Logging manager, independent of the system logging."""
    root = logging.RootLogger(logging.WARNING)
    return logging.Manager(root)


def test_get_logger_when_in_debug(monkeypatch, log_manager: logging.Manager) -> None:
    """When in debug mode, the logger is hardcoded to DEBUG level."""
    monkeypatch.setattr(entrypoint, "is_in_debug", lambda: True)

    logger = get_logger(__file__, manager=log_manager)

    assert logger.level == logging.DEBUG
    assert logger.propagate is True


def test_get_logger_when_not_in_debug(monkeypatch, log_manager: logging.Manager) -> None:
    """When not in debug mode, the logger simply propagates to its parent."""
    monkeypatch.setattr(entrypoint, "is_in_debug", lambda: False)

    logger = get_logger(__file__, manager=log_manager)

    assert logger.level == logging.NOTSET
    assert logger.propagate is True


def test_is_in_debug_under_ide(monkeypatch) -> None:
    monkeypatch.setenv("IDE_PROJECT_ROOTS", os.getcwd())

    assert is_in_debug()


@pytest.mark.parametrize(
    ("argv0", "expected"),
    [
        ("/opt/pycharm/plugins/python/helpers/pycharm/_jb_pytest_runner.py", True),
        ("/home/me/.vscode/extensions/ms-python/testlauncher.py", True),
        ("/usr/bin/pytest", False),
    ],
)
def test_is_in_debug_by_launcher(monkeypatch, argv0: str, expected: bool) -> None:
    monkeypatch.delenv("IDE_PROJECT_ROOTS", raising=False)
    monkeypatch.setattr("sys.argv", [argv0])

    assert is_in_debug() is expected
