"""Data models for the mlw package."""

import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple, Union

from .exceptions import WatchError


class ChangeKind(Enum):
    """Kinds of filesystem changes."""
    CREATE = "create"
    MODIFY = "modify"
    REMOVE = "remove"
    OTHER = "other"


# Kinds that can lead to a restart; anything else (access, open, close) is noise.
TRIGGER_KINDS = frozenset({ChangeKind.CREATE, ChangeKind.MODIFY, ChangeKind.REMOVE})


@dataclass(frozen=True)
class ChangeEvent:
    """
    A filesystem change reported by the watcher.

    Attributes:
        kind: What happened to the paths
        paths: Affected paths, in the order the watcher reported them
        timestamp: Monotonic time at which the watcher observed the change
    """
    kind: ChangeKind
    paths: Tuple[Path, ...] = ()
    timestamp: float = field(default_factory=time.monotonic)

    def __post_init__(self):
        # Accept any iterable of str/Path and normalize to a tuple of Paths
        object.__setattr__(self, "paths", tuple(Path(p) for p in self.paths))

    @property
    def first_path(self) -> Optional[Path]:
        """The first affected path, or None if the event carries none."""
        return self.paths[0] if self.paths else None

    @property
    def is_trigger(self) -> bool:
        """Whether this kind of change can cause a restart."""
        return self.kind in TRIGGER_KINDS


# A channel item is either an event or the error the watcher reported instead.
ChannelItem = Union[ChangeEvent, WatchError]
