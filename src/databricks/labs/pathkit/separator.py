import re

from databricks.labs.pathkit._platform import IS_WINDOWS

SEP = "\\" if IS_WINDOWS else "/"
SEP_PATTERN = re.compile(r"[\\/]+") if IS_WINDOWS else re.compile(r"/+")

__all__ = ("SEP", "SEP_PATTERN")
