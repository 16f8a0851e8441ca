"""Regular-expression filtering of changed paths."""

import functools
import logging
import re
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)


@functools.lru_cache(maxsize=32)
def _compile(pattern: str) -> Optional[re.Pattern]:
    try:
        return re.compile(pattern)
    except re.error:
        return None


def should_ignore(path: Union[str, Path], pattern: Optional[str]) -> bool:
    """
    Check if a changed path matches the ignore pattern.

    The pattern is searched anywhere in the full path string, so
    ".*\\.git.*" matches "/repo/.git/HEAD". An empty pattern matches
    every path; a missing or malformed one never ignores anything.

    Args:
        path: Path of the changed file
        pattern: Regular expression source, or None

    Returns:
        True if the path should be ignored
    """
    if pattern is None:
        return False
    regex = _compile(pattern)
    if regex is None:
        return False
    return regex.search(str(path)) is not None


class PathFilter:
    """Ignore pattern compiled once for the lifetime of a watch session."""

    def __init__(self, pattern: Optional[str] = None):
        self.pattern = pattern
        self._regex: Optional[re.Pattern] = None

        if pattern is not None:
            try:
                self._regex = re.compile(pattern)
            except re.error as e:
                logger.warning(f"Invalid ignore pattern {pattern!r}, filtering disabled: {e}")

    @property
    def active(self) -> bool:
        """Whether a usable pattern is configured."""
        return self._regex is not None

    def should_ignore(self, path: Union[str, Path]) -> bool:
        if self._regex is None:
            return False
        return self._regex.search(str(path)) is not None
