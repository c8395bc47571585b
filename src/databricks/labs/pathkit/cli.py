"""Command routing for ``databricks labs pathkit``.

The Labs CLI invokes the entrypoint with a single JSON argument naming the command and its flags. Commands return
their result and :class:`App` prints it, so that every command renders paths, flags, URLs and parsed paths alike.
"""

import dataclasses
import functools
import inspect
import json
import logging
import re
import sys
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any
from urllib.parse import ParseResult, SplitResult

from databricks.labs.pathkit.entrypoint import get_logger, run_main
from databricks.labs.pathkit.errors import PathError

# Errors that are a consequence of the input rather than a defect: these are reported without a traceback.
_USER_ERRORS = (PathError, ValueError, TypeError)


@dataclass
class Command:
    name: str
    description: str
    fn: Callable[..., Any]

    def get_argument_type(self, argument_name: str) -> str | None:
        """The name of the annotated type of an argument, or None if the command doesn't take it."""
        parameter = inspect.signature(self.fn).parameters.get(argument_name)
        if parameter is None:
            return None
        annotation = parameter.annotation
        return annotation if isinstance(annotation, str) else getattr(annotation, "__name__", str(annotation))


def render(result: Any) -> str | None:
    """Turn the value returned by a command into the text printed for it."""
    match result:
        case None:
            return None
        case bool():
            return "true" if result else "false"
        case SplitResult() | ParseResult():
            return result.geturl()
        case re.Pattern():
            return result.pattern
        case _ if dataclasses.is_dataclass(result) and not isinstance(result, type):
            return json.dumps(dataclasses.asdict(result))
        case _:
            return str(result)


class App:
    def __init__(self, __file: str):
        self._mapping: dict[str, Command] = {}
        self._logger = get_logger(__file)

    @property
    def commands(self) -> dict[str, Command]:
        return dict(self._mapping)

    def command(self, fn=None):
        """Decorator to register a function as a command, named after the function with dashes for underscores."""

        def register(func):
            name = func.__name__.replace("_", "-")
            if not func.__doc__:
                raise SyntaxError(f"{func.__name__} must have some doc comment")
            self._mapping[name] = Command(name=name, description=func.__doc__, fn=func)
            return func

        if fn is None:
            return functools.partial(register)
        return register(fn)

    def _log_level(self, raw: str) -> int:
        """Map a log level from the Labs CLI onto a Python logging level."""
        match raw.upper():
            case "DISABLED":
                # The Labs CLI passes this when the user hasn't asked for a level.
                return logging.INFO
            case "TRACE":
                return logging.DEBUG
            case "WARN":
                return logging.WARNING
            case other:
                level = logging.getLevelName(other)
                if isinstance(level, int):
                    return level
                self._logger.warning(f"Assuming INFO-level logging due to unrecognized log-level: {raw}")
                return logging.INFO

    def _route(self, raw: str) -> int:
        """Run the command named by a JSON payload, print its result and return the exit code."""
        payload = json.loads(raw)
        name = payload["command"]
        if name not in self._mapping:
            msg = f"cannot find command: {name}"
            raise KeyError(msg)
        flags = dict(payload.get("flags", {}))
        log_level = self._log_level(flags.pop("log_level", "disabled"))
        logging.getLogger("databricks").setLevel(log_level)
        command = self._mapping[name]
        logger = self._logger.getChild(name)
        try:
            result = command.fn(**self._build_args(command, flags))
        except _USER_ERRORS as err:
            logger.error(f"{type(err).__name__}: {err}", exc_info=err if log_level <= logging.DEBUG else None)
            return 1
        except Exception as err:  # pylint: disable=broad-exception-caught
            logger.error(f"Failed to call {name}", exc_info=err)
            return 1
        text = render(result)
        if text is not None:
            print(text)
        return 0

    @staticmethod
    def _build_args(command: Command, flags: dict[str, str]) -> dict[str, str | bool]:
        """Turn flags into keyword arguments; empty flags fall back to the command's defaults."""
        kwargs: dict[str, str | bool] = {}
        for flag, value in flags.items():
            if value == "":
                continue
            argument = flag.replace("-", "_")
            if isinstance(value, str) and command.get_argument_type(argument) == "bool":
                kwargs[argument] = value.lower() in ("true", "yes", "1")
            else:
                kwargs[argument] = value
        return kwargs

    def __call__(self):
        sys.exit(run_main(self._route))
