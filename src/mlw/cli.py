#!/usr/bin/env python3
"""
Command line entry point for mlw.

Usage:
    mlw                      # watch using ./mlw.toml
    mlw --config dev.toml    # use another config file
    mlw --gen-config         # write a default mlw.toml
"""

import argparse
import logging
import os
import signal
import sys
import threading
from pathlib import Path
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv

from . import __version__
from .channel import EventChannel
from .config import DEFAULT_CONFIG_FILE, generate_default_config, load_config
from .exceptions import ChannelClosedError, ConfigError, MlwError
from .fs_watcher import FSWatcherPool
from .logging_setup import set_verbose, setup_logging
from .orchestrator import Orchestrator
from .supervisor import ProcessSupervisor

logger = logging.getLogger("mlw.cli")


class GracefulShutdown:
    """Close the event channel on SIGINT/SIGTERM so the loop ends cleanly."""

    def __init__(self, channel: EventChannel):
        self.channel = channel
        self.requested = False
        signal.signal(signal.SIGINT, self._handler)
        signal.signal(signal.SIGTERM, self._handler)

    def _handler(self, signum, frame):
        logger.info("Received shutdown signal, stopping...")
        self.requested = True
        # The main thread may hold the queue's mutex when the signal lands
        threading.Thread(
            target=self.channel.close,
            kwargs={"discard_pending": True},
            name="Shutdown",
            daemon=True,
        ).start()


def cmd_gen_config(args) -> int:
    """Write the default config file."""
    try:
        generate_default_config(Path(args.config))
    except ConfigError as e:
        logger.error(str(e))
        return 1
    return 0


def cmd_watch(args) -> int:
    """Run the script and restart it on every relevant change."""
    try:
        config = load_config(Path(args.config))
    except ConfigError as e:
        logger.error(str(e))
        return 1

    if config.verbose:
        set_verbose(True)
    logger.debug("Configuration loaded.")

    channel = EventChannel()
    pool = FSWatcherPool(channel.send, channel.send_error)
    shutdown = GracefulShutdown(channel)

    with ProcessSupervisor() as supervisor:
        orchestrator = Orchestrator(config, channel, supervisor)
        try:
            for path in config.paths:
                pool.start_watching(Path(path))
            orchestrator.start()
            orchestrator.run()
        except ChannelClosedError as e:
            if shutdown.requested:
                logger.info("Watcher stopped")
                return 0
            logger.error(f"Failed to receive file event: {e}")
            return 1
        except MlwError as e:
            logger.error(str(e))
            return 1
        finally:
            pool.stop_all()

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv(find_dotenv(usecwd=True))

    parser = argparse.ArgumentParser(
        prog="mlw",
        description="A file watcher for multi languages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Supported script types: python, python2, node, lua, php, go, rust, sh

Examples:
  # Create {DEFAULT_CONFIG_FILE} in the current directory
  mlw --gen-config

  # Watch with a specific config file
  mlw --config ./dev.toml
        """,
    )
    parser.add_argument(
        "-c", "--config",
        default=os.environ.get("MLW_CONFIG", DEFAULT_CONFIG_FILE),
        help=f"Path to config file (default: $MLW_CONFIG or {DEFAULT_CONFIG_FILE})",
    )
    parser.add_argument("-g", "--gen-config", action="store_true", help="Generate a default config file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose)

    if args.gen_config:
        return cmd_gen_config(args)
    return cmd_watch(args)


if __name__ == "__main__":
    sys.exit(main())
