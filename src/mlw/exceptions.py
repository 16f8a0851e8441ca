"""Custom exceptions for the mlw package."""


class MlwError(Exception):
    """Base exception for all mlw errors."""
    pass


class ConfigError(MlwError):
    """Configuration file is missing, malformed or invalid."""
    pass


class UnsupportedScriptTypeError(ConfigError):
    """Configured script type has no known command."""
    pass


class SupervisorError(MlwError):
    """Error related to the managed child process."""
    pass


class SpawnError(SupervisorError):
    """Child process could not be started."""
    pass


class WatchError(MlwError):
    """The filesystem watcher reported an internal failure."""
    pass


class WatchRegistrationError(WatchError):
    """A path could not be registered with the filesystem watcher."""
    pass


class ChannelError(MlwError):
    """Error related to the change notification channel."""
    pass


class ChannelClosedError(ChannelError):
    """Channel is closed and holds no more items."""
    pass


class ChannelTimeoutError(ChannelError):
    """No item arrived before the receive timeout expired."""
    pass
