import types

import databricks.labs.pathkit as pathkit
from databricks.labs.pathkit import posix, windows
from databricks.labs.pathkit.cli import App
from databricks.labs.pathkit.entrypoint import get_logger
from databricks.labs.pathkit.parsed import FormatInputPathObject

app = App(__file__)
logger = get_logger(__file__)


def _grammar(name: str) -> types.ModuleType:
    """Select the path grammar requested by a command: the platform default unless one is named."""
    match name.lower():
        case "":
            return pathkit
        case "posix":
            return posix
        case "windows" | "win32":
            return windows
        case _:
            msg = f"Unknown path grammar: {name}"
            raise ValueError(msg)


def _split(paths: str, grammar: types.ModuleType) -> list[str]:
    """Split a list of paths that has been passed as a single flag, using the grammar's delimiter."""
    return paths.split(grammar.delimiter) if paths else []


@app.command
def resolve(paths: str, cwd: str = "", grammar: str = ""):
    """Resolves a delimiter-separated list of path segments into a single path"""
    path = _grammar(grammar)
    return path.resolve(*_split(paths, path), cwd=cwd or None)


@app.command
def normalize(path: str, grammar: str = ""):
    """Normalizes a path, resolving '.' and '..' segments"""
    return _grammar(grammar).normalize(path)


@app.command
def join(paths: str, grammar: str = ""):
    """Joins a delimiter-separated list of path segments and normalizes the result"""
    path = _grammar(grammar)
    return path.join(*_split(paths, path))


@app.command
def relative(from_path: str, to_path: str, cwd: str = "", grammar: str = ""):
    """Shows the relative path from one path to another"""
    return _grammar(grammar).relative(from_path, to_path, cwd=cwd or None)


@app.command
def dirname(path: str, grammar: str = ""):
    """Shows the directory portion of a path"""
    return _grammar(grammar).dirname(path)


@app.command
def basename(path: str, suffix: str = "", grammar: str = ""):
    """Shows the final component of a path, optionally without a suffix"""
    return _grammar(grammar).basename(path, suffix)


@app.command
def extname(path: str, grammar: str = ""):
    """Shows the extension of a path"""
    return _grammar(grammar).extname(path)


@app.command
def parse(path: str, grammar: str = ""):
    """Shows the root, directory, base, name and extension of a path as JSON"""
    return _grammar(grammar).parse(path)


@app.command
def format_path(root: str = "", directory: str = "", base: str = "", name: str = "", ext: str = "", grammar: str = ""):
    """Builds a path from its root, directory, base, name and extension"""
    path_object = FormatInputPathObject(root=root, dir=directory, base=base, name=name, ext=ext)
    return _grammar(grammar).format(path_object)


@app.command
def is_absolute(path: str, grammar: str = ""):
    """Shows whether a path is absolute"""
    return _grammar(grammar).is_absolute(path)


@app.command
def to_namespaced_path(path: str, grammar: str = ""):
    """Shows the extended-length form of a Windows path"""
    return _grammar(grammar).to_namespaced_path(path)


@app.command
def from_file_url(url: str, grammar: str = ""):
    """Converts a file URL into a path"""
    return _grammar(grammar).from_file_url(url)


@app.command
def to_file_url(path: str, grammar: str = ""):
    """Converts an absolute path into a file URL"""
    return _grammar(grammar).to_file_url(path)


@app.command
def common(paths: str, grammar: str = ""):
    """Shows the directory shared by a delimiter-separated list of paths"""
    path = _grammar(grammar)
    shared = pathkit.common(_split(paths, path), path.sep)
    logger.debug(f"Common directory of {paths!r}: {shared!r}")
    return shared


@app.command
def glob_to_regexp(
    glob: str, extended: bool = True, globstar: bool = True, case_insensitive: bool = False, grammar: str = ""
):
    """Shows the regular expression that matches the paths selected by a glob"""
    return pathkit.glob_to_regexp(
        glob, extended=extended, globstar=globstar, grammar=grammar or None, case_insensitive=case_insensitive
    )


if "__main__" == __name__:
    app()
