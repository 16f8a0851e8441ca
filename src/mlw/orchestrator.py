"""Event loop turning change notifications into script restarts."""

import logging
import time
from typing import Callable, Optional

from .channel import EventChannel
from .config import WatchConfiguration
from .debouncer import Debouncer
from .exceptions import ChannelClosedError, MlwError, WatchError
from .models import ChangeEvent, ChannelItem
from .path_filter import PathFilter
from .supervisor import ProcessSupervisor

logger = logging.getLogger(__name__)


class Orchestrator:
    """
    Main loop of the watcher.

    Pulls items from the channel one at a time, drops ignored paths and
    events inside the debounce window, and restarts the script for the
    rest. Only one restart is ever in flight because the loop is the
    channel's sole consumer.
    """

    def __init__(
        self,
        config: WatchConfiguration,
        channel: EventChannel,
        supervisor: Optional[ProcessSupervisor] = None,
        debouncer: Optional[Debouncer] = None,
        path_filter: Optional[PathFilter] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize the orchestrator.

        Args:
            config: Watcher configuration
            channel: Source of change notifications
            supervisor: Owner of the script processes
            debouncer: Debouncer with a window of config.delay seconds
            path_filter: Filter built from config.ignore_pattern
            sleep: Used for the settle delay before each restart
        """
        self.config = config
        self.channel = channel
        self.supervisor = supervisor or ProcessSupervisor()
        self.debouncer = debouncer or Debouncer(config.delay)
        self.path_filter = path_filter or PathFilter(config.ignore_pattern)
        self._sleep = sleep
        self.restart_count = 0

    def start(self) -> None:
        """
        Launch the script for the first time.

        Raises:
            MlwError: If the script type is invalid or the script cannot be
                started; both are fatal at startup
        """
        self.supervisor.restart(self.config)
        for path in self.config.paths:
            logger.info(f"Watching path: {path}")

    def run(self) -> None:
        """
        Process channel items until the channel is closed.

        Raises:
            ChannelClosedError: When the channel is closed
        """
        while True:
            try:
                item = self.channel.recv()
            except ChannelClosedError:
                logger.debug("Event channel closed")
                raise
            self.handle_item(item)

    def handle_item(self, item: ChannelItem) -> bool:
        """
        Process one channel item.

        Args:
            item: A ChangeEvent or the WatchError reported in its place

        Returns:
            True if the item triggered a restart attempt
        """
        if isinstance(item, WatchError):
            logger.error(f"Change handling error: {item}")
            return False

        return self.handle_event(item)

    def handle_event(self, event: ChangeEvent) -> bool:
        path = event.first_path
        if path is None:
            return False

        if self.path_filter.should_ignore(path):
            logger.debug(f"Ignored file: {path}")
            return False

        if not event.is_trigger:
            return False

        if not self.debouncer.try_trigger(event.timestamp):
            logger.debug("Ignoring event due to debounce")
            return False

        try:
            self.handle_change()
        except MlwError as e:
            logger.error(f"Error handling change: {e}")
        return True

    def handle_change(self) -> None:
        """
        Wait for the settle delay, then restart the script.

        Raises:
            MlwError: If the restart failed
        """
        logger.info("File change detected. Restarting...")
        self._sleep(self.config.delay)
        self.supervisor.restart(self.config)
        self.restart_count += 1
        logger.info("Script restarted successfully.")
