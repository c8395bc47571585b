"""Console logging for the pathkit CLI: a compact line per record, colored when the output is a terminal."""

import logging
import sys
from dataclasses import dataclass
from typing import TextIO

_RESET = "\033[0m"
_BOLD = "\033[1m"
_GRAY = "\033[90m"


@dataclass(frozen=True, kw_only=True)
class _Style:
    label: str
    """The level name, padded so that messages line up."""

    color: str
    """SGR code for the level label."""

    message: str
    """SGR prefix for the logger name and message text."""

    def render_label(self) -> str:
        return f"{_BOLD}{self.color}{self.label}{_RESET}"


_STYLES: dict[int, _Style] = {
    logging.DEBUG: _Style(label="   DEBUG", color="\033[36m", message=_GRAY),
    logging.INFO: _Style(label="    INFO", color="\033[32m", message=_BOLD),
    logging.WARNING: _Style(label=" WARNING", color="\033[33m", message=_BOLD),
    logging.ERROR: _Style(label="   ERROR", color="\033[31m", message=f"{_BOLD}\033[31m"),
    logging.CRITICAL: _Style(label="CRITICAL", color="\033[35m", message=f"{_BOLD}\033[31m"),
}


class NiceFormatter(logging.Formatter):
    """Formats records as ``H:M:S LEVEL [logger] message``.

    With colors enabled the level is highlighted, the message is tinted by level and logger names are shortened to
    keep lines narrow: ``databricks.labs.pathkit.windows`` becomes ``d.l.pathkit.windows``.
    """

    def __init__(self, *, colors: bool = False) -> None:
        super().__init__(fmt="%(asctime)s %(levelname)s [%(name)s] %(message)s", datefmt="%H:%M:%S")
        self.colors = colors

    @staticmethod
    def abbreviate(name: str) -> str:
        """Shorten all but the last two components of a dotted logger name to their first letter."""
        parts = name.rsplit(".", 2)
        if len(parts) < 3:
            return name
        parents, package, module = parts
        initials = ".".join(p[:1] for p in parents.split("."))
        return f"{initials}.{package}.{module}"

    def format(self, record: logging.LogRecord) -> str:
        if not self.colors:
            return super().format(record)
        style = _STYLES.get(record.levelno)
        label = style.render_label() if style else record.levelname
        tint = style.message if style else _BOLD
        origin = f"[{self.abbreviate(record.name)}]"
        if record.threadName != "MainThread":
            origin += f"[{record.threadName}]"
        text = record.getMessage()
        if record.exc_info:
            text = f"{text}\n{self.formatException(record.exc_info)}"
        return f"{_GRAY}{self.formatTime(record, self.datefmt)}{_RESET} {label} {tint}{origin} {text}{_RESET}"


def install_logger(
    level: int | str = logging.DEBUG, *, stream: TextIO = sys.stderr, root: logging.Logger = logging.root
) -> logging.StreamHandler:
    """Replace the handlers of the root logger with one console handler.

    The level of the root logger itself is left alone; the new handler filters at ``level``. Colors are used when
    ``stream`` is a terminal.

    Args:
        level: the level at which the console handler emits records.
        stream: where records are written.
        root: the logger to install the handler on, the system root logger unless a test supplies its own.
    Returns:
        The installed handler.
    """
    for handler in list(root.handlers):
        root.removeHandler(handler)
    console = logging.StreamHandler(stream)
    console.setFormatter(NiceFormatter(colors=stream.isatty()))
    console.setLevel(level)
    root.addHandler(console)
    return console
