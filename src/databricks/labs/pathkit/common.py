from collections.abc import Sequence

from databricks.labs.pathkit._common import common_prefix_length
from databricks.labs.pathkit.separator import SEP


def common(paths: Sequence[str], sep: str = SEP) -> str:
    """Determine the directory that a set of paths share.

    The paths are compared segment by segment, exactly as given: they are not normalized first.

    Args:
        paths: the paths to compare.
        sep: the separator used by the paths, by default that of the current grammar.
    Returns:
        The shared leading directory, ending with the separator, or the empty string if the paths have nothing in
        common. For a single path this is its directory part.
    """
    first, *remaining = paths or [""]
    if not first or not remaining:
        return first[: first.rfind(sep) + 1]
    parts = first.split(sep)
    end_of_prefix = len(parts)
    for path in remaining:
        end_of_prefix = common_prefix_length(parts[:end_of_prefix], path.split(sep))
        if end_of_prefix == 0:
            return ""
    prefix = sep.join(parts[:end_of_prefix])
    return prefix if prefix.endswith(sep) else f"{prefix}{sep}"
