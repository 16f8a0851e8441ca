"""Lifecycle management of the watched script's child processes."""

import logging
import subprocess
import threading
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .config import WatchConfiguration
from .exceptions import ConfigError, SpawnError, UnsupportedScriptTypeError

logger = logging.getLogger(__name__)


# script type -> (executable, default arguments placed before the path)
SCRIPT_TYPES: Dict[str, Tuple[str, Tuple[str, ...]]] = {
    # Interpreted languages
    "python": ("python3", ()),
    "python2": ("python2", ()),
    "node": ("node", ()),
    "lua": ("lua", ()),
    "php": ("php", ()),
    # Compiled languages
    "go": ("go", ("run",)),
    "rust": ("cargo", ("run", "--")),
    # Shell
    "sh": ("sh", ()),
}


def resolve_command(script_type: Optional[str]) -> Tuple[str, List[str]]:
    """
    Look up the executable and default arguments for a script type.

    Args:
        script_type: Configured script type identifier

    Returns:
        (executable, default_args)

    Raises:
        ConfigError: If no script type is configured
        UnsupportedScriptTypeError: If the script type is unknown
    """
    if not script_type:
        raise ConfigError("Missing script type in config")
    try:
        executable, default_args = SCRIPT_TYPES[script_type]
    except KeyError:
        raise UnsupportedScriptTypeError(f"Unsupported script type: {script_type}") from None
    return executable, list(default_args)


def build_args(default_args: Sequence[str], path: str, extra_args: Sequence[str] = ()) -> List[str]:
    """Compose the argument list: default args, the watched path, then extra args."""
    return [*default_args, path, *extra_args]


class ProcessSupervisor:
    """
    Owns the child processes launched for the watched paths.

    Each configured path is a slot running its own child. The supervisor is
    either Stopped (no children) or Running (one child per slot); `restart`
    always stops and reaps every existing child before spawning new ones.
    """

    def __init__(self, popen: Callable[..., subprocess.Popen] = subprocess.Popen):
        """
        Initialize the supervisor in the Stopped state.

        Args:
            popen: Factory used to spawn children
        """
        self._popen = popen
        self._children: Dict[str, subprocess.Popen] = {}
        self._stop_timeout = 5.0
        self._lock = threading.RLock()

    @property
    def is_running(self) -> bool:
        with self._lock:
            return bool(self._children)

    @property
    def children(self) -> Dict[str, subprocess.Popen]:
        """Current child handles keyed by watched path."""
        with self._lock:
            return dict(self._children)

    @property
    def pids(self) -> List[int]:
        with self._lock:
            return [child.pid for child in self._children.values()]

    def restart(self, config: WatchConfiguration) -> None:
        """
        Stop the running children and launch one per configured path.

        Args:
            config: Watcher configuration

        Raises:
            ConfigError: If the script type is missing or unsupported
            SpawnError: If a child could not be started; children started
                earlier in the same call are stopped again
        """
        with self._lock:
            self.stop()
            self._stop_timeout = config.stop_timeout

            executable, default_args = resolve_command(config.script_type)
            logger.info(f"Restarting script using: {executable}")

            started: Dict[str, subprocess.Popen] = {}
            for path in config.paths:
                args = build_args(default_args, path, config.script_args)
                logger.debug(f"Running command: {executable} with args: {args}")
                try:
                    # stdout/stderr are inherited so script output shares our console
                    started[path] = self._popen([executable, *args], stdout=None, stderr=None)
                except OSError as e:
                    for child in started.values():
                        self._terminate(child)
                    raise SpawnError(
                        f"Failed to start {config.script_type} script for {path}: {e}"
                    ) from e

            self._children = started

    def stop(self) -> None:
        """Terminate and reap all children. Does nothing when already stopped."""
        with self._lock:
            children, self._children = self._children, {}
            for child in children.values():
                self._terminate(child)

    def _terminate(self, child: subprocess.Popen) -> None:
        """Send SIGTERM, escalate to SIGKILL after the stop timeout, and reap."""
        if child.poll() is not None:
            logger.debug(f"Script (pid {child.pid}) already exited with code {child.returncode}")
            return

        try:
            child.terminate()
            try:
                child.wait(timeout=self._stop_timeout)
            except subprocess.TimeoutExpired:
                logger.warning(
                    f"Script (pid {child.pid}) did not exit within {self._stop_timeout}s, killing"
                )
                child.kill()
                # No timeout here: a child that survives SIGKILL stalls the watcher.
                child.wait()
        except OSError as e:
            logger.error(f"Failed to stop script (pid {child.pid}): {e}")
            return

        logger.debug(f"Script (pid {child.pid}) exited with code {child.returncode}")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
        return False
