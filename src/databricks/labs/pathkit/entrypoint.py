"""Entrypoint utilities for logging and project root detection"""

import logging
import os
import sys

from databricks.labs.pathkit import basename, dirname, extname, join, relative, resolve, sep
from databricks.labs.pathkit.logger import install_logger

_PROJECT_MARKERS = ("pyproject.toml", "setup.py")


def get_logger(__file: str, *, manager: logging.Manager | None = None) -> logging.Logger:
    """Used as `get_logger(__file__)` to return a relevant logger for a file"""
    if manager is None:
        manager = logging.root.manager
    logger = manager.getLogger(module_name(__file))
    if is_in_debug():
        logger.setLevel(logging.DEBUG)
    return logger


def module_name(__file: str) -> str:
    """Derive a module-like name for a source file, based on its location within the project.

    Files outside of a project (for example, those of an installed wheel) are named after the file alone.
    """
    path = resolve(__file, cwd=os.getcwd())
    try:
        name = relative(find_project_root(path), path)
    except NotADirectoryError:
        name = basename(path)
    name = name.removeprefix(f"src{sep}")
    if basename(name) in {"__main__.py", "__init__.py", "cli.py"} and dirname(name) != ".":
        name = dirname(name)
    elif extname(name) == ".py":
        name = name.removesuffix(".py")
    return name.replace(sep, ".")


def run_main(main):
    """Runs main function with a logger, returning whatever it returns"""
    install_logger()
    return main(*sys.argv[1:])


def find_project_root(__file: str) -> str:
    """Returns the nearest folder above a file that contains a pyproject.toml or setup.py file.

    Idiomatic usage is: find_project_root(__file__)
    """
    folder = dirname(resolve(__file, cwd=os.getcwd()))
    while True:
        if any(os.path.exists(join(folder, leaf)) for leaf in _PROJECT_MARKERS):
            return folder
        parent = dirname(folder)
        if parent == folder:
            msg = "Cannot find project root"
            raise NotADirectoryError(msg)
        folder = parent


def is_in_debug() -> bool:
    """Returns true if run from VSCode or IntelliJ"""
    if "IDE_PROJECT_ROOTS" in os.environ:
        return True
    return basename(sys.argv[0]) in {"_jb_pytest_runner.py", "testlauncher.py"}
