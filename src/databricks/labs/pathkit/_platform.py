"""Selection of the default path grammar, resolved once at import time."""

import logging
import os
from collections.abc import Mapping

logger = logging.getLogger(__name__)

GRAMMAR_ENV_VAR = "PATHKIT_GRAMMAR"


def detect_windows(environ: Mapping[str, str] = os.environ, os_name: str = os.name) -> bool:
    """Decide whether the Windows grammar should be the default.

    The host is Windows when ``os.name`` is ``nt``, but this can be overridden by setting ``PATHKIT_GRAMMAR`` to
    either ``posix`` or ``windows``.
    """
    forced = environ.get(GRAMMAR_ENV_VAR, "")
    match forced.strip().lower():
        case "":
            return os_name == "nt"
        case "windows" | "win32":
            return True
        case "posix":
            return False
        case _:
            logger.warning(f"Ignoring unrecognized {GRAMMAR_ENV_VAR} value: {forced}")
            return os_name == "nt"


IS_WINDOWS = detect_windows()
