"""Configuration for the mlw package."""

import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "mlw.toml"

DEFAULT_CONFIG = r'''
# Default mlw configuration file
# Path(s) to watch
path = ["./src"]

# Delay (in seconds) between script restarts
delay = 2

# Verbose logging
verbose = true

# Pattern for files to ignore (optional)
ignore_pattern = ".*\\.git.*"

# Type of script to run (e.g. python, node, go)
script_type = "node"

# Seconds to wait for the script to exit before killing it (optional)
# stop_timeout = 5.0

# Additional arguments for the script (optional)
# script_args = ["--dev", "--watch"]
'''


@dataclass(frozen=True)
class WatchConfiguration:
    """
    Validated watcher configuration.

    Attributes:
        paths: Watch roots, in configured order
        script_type: Identifier of the interpreter/toolchain to launch
        script_args: Extra arguments appended after the watched path
        delay: Debounce window and settle delay, in seconds
        ignore_pattern: Regular expression of paths that never trigger
        verbose: Whether debug logging is enabled
        stop_timeout: Seconds to wait after SIGTERM before killing the child
    """
    paths: Tuple[str, ...]
    script_type: Optional[str] = None
    script_args: Tuple[str, ...] = ()
    delay: int = 2
    ignore_pattern: Optional[str] = None
    verbose: bool = False
    stop_timeout: float = 5.0

    def __post_init__(self):
        object.__setattr__(self, "paths", tuple(str(p) for p in self.paths))
        object.__setattr__(self, "script_args", tuple(self.script_args))
        if isinstance(self.delay, bool) or not isinstance(self.delay, int) or self.delay < 0:
            raise ConfigError(f"delay must be a non-negative integer, got {self.delay!r}")
        if self.stop_timeout <= 0:
            raise ConfigError(f"stop_timeout must be positive, got {self.stop_timeout!r}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WatchConfiguration":
        """
        Build a configuration from parsed TOML data.

        Args:
            data: Mapping of config keys to values

        Returns:
            The configuration

        Raises:
            ConfigError: If a key is missing or has the wrong type
        """
        paths = data.get("path")
        if isinstance(paths, str):
            paths = [paths]
        if not isinstance(paths, list) or not all(isinstance(p, str) for p in paths):
            raise ConfigError("path must be a list of strings")

        if "delay" not in data:
            raise ConfigError("Missing required key: delay")

        script_args = data.get("script_args") or []
        if not isinstance(script_args, list) or not all(isinstance(a, str) for a in script_args):
            raise ConfigError("script_args must be a list of strings")

        script_type = data.get("script_type")
        if script_type is not None and not isinstance(script_type, str):
            raise ConfigError("script_type must be a string")

        ignore_pattern = data.get("ignore_pattern")
        if ignore_pattern is not None and not isinstance(ignore_pattern, str):
            raise ConfigError("ignore_pattern must be a string")

        verbose = data.get("verbose", False)
        if not isinstance(verbose, bool):
            raise ConfigError("verbose must be a boolean")

        stop_timeout = data.get("stop_timeout", 5.0)
        if isinstance(stop_timeout, bool) or not isinstance(stop_timeout, (int, float)):
            raise ConfigError("stop_timeout must be a number")

        return cls(
            paths=tuple(paths),
            script_type=script_type,
            script_args=tuple(script_args),
            delay=data["delay"],
            ignore_pattern=ignore_pattern,
            verbose=verbose,
            stop_timeout=float(stop_timeout),
        )


def load_config(file_path: Path) -> WatchConfiguration:
    """
    Load and validate a TOML config file.

    Args:
        file_path: Path to the config file

    Returns:
        The validated configuration

    Raises:
        ConfigError: If the file cannot be read or parsed, or a watched
            path does not exist
    """
    file_path = Path(file_path)
    try:
        raw = tomllib.loads(file_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Failed to read config file {file_path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Failed to parse config file {file_path}: {e}") from e

    config = WatchConfiguration.from_dict(raw)

    if not config.paths or not all(Path(p).exists() for p in config.paths):
        raise ConfigError("One or more specified paths do not exist")

    logger.debug(f"Loaded config from {file_path}: {config}")
    return config


def generate_default_config(output_path: Path) -> None:
    """
    Write the default config file.

    Args:
        output_path: Where to write the file

    Raises:
        ConfigError: If a file already exists at output_path or cannot be written
    """
    output_path = Path(output_path)
    if output_path.exists():
        raise ConfigError(f"Config file already exists at {output_path}")

    try:
        output_path.write_text(DEFAULT_CONFIG, encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Failed to write config file {output_path}: {e}") from e
    logger.info(f"Default configuration file generated at {output_path}")
