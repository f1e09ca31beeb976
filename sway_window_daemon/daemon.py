"""Main daemon entry point.

Runs two tasks side by side: the window event loop and the signal
coordinator. Whichever finishes first decides the exit status. A
terminating signal exits 0 after the exit hook; the end of the event
stream or a lost connection exits 1.
"""

import asyncio
import logging
import os
import sys
from typing import Awaitable, Callable, Optional, Sequence

from i3ipc import Event

from .cli import parse_config
from .config import DaemonConfig
from .connection import EventStream, SwayConnection, connect
from .errors import EventStreamClosed, FatalError, UnexpectedSignalError
from .focus_tracker import FocusTracker
from .handlers import handle_window_event
from .hooks import HookDispatcher
from .models import WindowSnapshot
from .signals import SignalCoordinator

# Configure logging
logger = logging.getLogger(__name__)


class WindowEventDaemon:
    """Consumes window events and drives hooks, renaming and autolayout."""

    def __init__(
        self,
        config: DaemonConfig,
        connect_fn: Callable[[], Awaitable[SwayConnection]] = connect,
    ) -> None:
        """Initialize daemon.

        Args:
            config: Immutable daemon configuration
            connect_fn: Factory for new Sway connections
        """
        self.config = config
        self.tracker = FocusTracker()
        self.commands: Optional[SwayConnection] = None
        self.events: Optional[EventStream] = None
        self._connect = connect_fn

    async def connect(self) -> None:
        """Open the command connection and the window event subscription.

        Commands and events use separate connections so waiting for the
        next event never delays a command.
        """
        self.commands = await self._connect()
        subscription = await self._connect()
        self.events = await subscription.subscribe([Event.WINDOW])

    async def run_event_loop(self) -> None:
        """Handle window events until the stream ends.

        Raises:
            EventStreamClosed: When the subscription ends
            EventStreamError: When the subscription fails
            DaemonConnectionError: When a command round trip fails
        """
        if self.events is None:
            await self.connect()

        hooks = HookDispatcher(self.commands, self.config)
        logger.info("Starting window event loop...")

        try:
            async for event in self.events:
                window = WindowSnapshot.from_event(event)
                logger.debug(f"Window event: {window.change.value} on {window.container_id}")
                await handle_window_event(
                    window,
                    commands=self.commands,
                    hooks=hooks,
                    tracker=self.tracker,
                    config=self.config,
                )
        finally:
            await self.events.close()

        raise EventStreamClosed()


def setup_logging(log_level: str = "INFO") -> None:
    """Setup logging to stderr."""
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    handler = logging.StreamHandler(sys.stderr)
    formatter = logging.Formatter(
        "%(levelname)s [%(name)s] %(message)s"
    )
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    logger.info(f"Logging configured: level={log_level}")


async def main_async(
    config: DaemonConfig,
    connect_fn: Callable[[], Awaitable[SwayConnection]] = connect,
) -> int:
    """Async main function.

    Returns:
        Exit code (0 = shut down by signal, 1 = error)
    """
    daemon = WindowEventDaemon(config, connect_fn=connect_fn)
    coordinator = SignalCoordinator(config, connect_fn=connect_fn)
    coordinator.install()

    signal_task = asyncio.create_task(coordinator.wait(), name="signal-coordinator")
    event_task = asyncio.create_task(daemon.run_event_loop(), name="window-event-loop")

    try:
        done, pending = await asyncio.wait(
            [signal_task, event_task], return_when=asyncio.FIRST_COMPLETED
        )

        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)

        finished = signal_task if signal_task in done else event_task
        return finished.result()

    except UnexpectedSignalError:
        raise

    except FatalError as e:
        logger.error(f"Fatal error: {e} (code {e.code.value})", extra={"error": e.to_dict()})
        return 1

    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        return 1

    finally:
        coordinator.uninstall()


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point."""
    config = parse_config(argv)
    setup_logging(config.log_level)

    logger.info("Sway window event daemon starting...")
    logger.info(f"PID: {os.getpid()}")
    logger.info(f"Config: {config.describe()}")

    try:
        exit_code = asyncio.run(main_async(config))
        sys.exit(exit_code)

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(0)

    except Exception as e:
        logger.error(f"Unhandled exception: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
