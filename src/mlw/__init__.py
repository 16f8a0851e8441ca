"""
mlw: multi-language file watcher

Watches source paths and restarts a script whenever relevant files change.

Features:
- One watchdog observer per watched path
- Regex ignore pattern for paths such as .git
- Debounced restarts with a settle delay
- Graceful SIGTERM then SIGKILL shutdown of the old script
- Scripts for python, node, go, rust, lua, php and sh
"""

__version__ = "0.1.0"

from .models import (
    ChangeKind,
    ChangeEvent,
    TRIGGER_KINDS,
)

from .config import (
    WatchConfiguration,
    load_config,
    generate_default_config,
)

from .exceptions import (
    MlwError,
    ConfigError,
    UnsupportedScriptTypeError,
    SupervisorError,
    SpawnError,
    WatchError,
    WatchRegistrationError,
    ChannelError,
    ChannelClosedError,
    ChannelTimeoutError,
)

from .path_filter import PathFilter, should_ignore
from .debouncer import Debouncer, DebounceState, should_trigger
from .supervisor import ProcessSupervisor, SCRIPT_TYPES, build_args, resolve_command
from .channel import EventChannel
from .fs_watcher import FSWatcherPool, FSEventHandler
from .orchestrator import Orchestrator


__all__ = [
    # Models
    "ChangeKind",
    "ChangeEvent",
    "TRIGGER_KINDS",
    # Config
    "WatchConfiguration",
    "load_config",
    "generate_default_config",
    # Exceptions
    "MlwError",
    "ConfigError",
    "UnsupportedScriptTypeError",
    "SupervisorError",
    "SpawnError",
    "WatchError",
    "WatchRegistrationError",
    "ChannelError",
    "ChannelClosedError",
    "ChannelTimeoutError",
    # Components
    "PathFilter",
    "should_ignore",
    "Debouncer",
    "DebounceState",
    "should_trigger",
    "ProcessSupervisor",
    "SCRIPT_TYPES",
    "build_args",
    "resolve_command",
    "EventChannel",
    "FSWatcherPool",
    "FSEventHandler",
    # Main loop
    "Orchestrator",
]
