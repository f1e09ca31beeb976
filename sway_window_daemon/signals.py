"""Signal-driven shutdown.

The coordinator runs as its own task next to the event loop. It owns its
own Sway connection and shares no state with the loop: on SIGHUP, SIGINT,
SIGQUIT or SIGTERM it sends the exit hook and returns exit status 0, and
the daemon ends the process. An event being handled at that moment is not
waited for.
"""

import asyncio
import logging
import signal
from enum import Enum
from typing import Awaitable, Callable, Optional

from .config import DaemonConfig
from .connection import SwayConnection, connect
from .errors import UnexpectedSignalError
from .hooks import HookDispatcher

logger = logging.getLogger(__name__)

TERMINATION_SIGNALS = (signal.SIGHUP, signal.SIGINT, signal.SIGQUIT, signal.SIGTERM)


class ShutdownState(str, Enum):
    """Lifecycle of the signal coordinator."""

    WAITING = "waiting"
    SHUTTING_DOWN = "shutting_down"
    TERMINATED = "terminated"


class SignalCoordinator:
    """Waits for a termination signal and runs the exit hook."""

    def __init__(
        self,
        config: DaemonConfig,
        connect_fn: Callable[[], Awaitable[SwayConnection]] = connect,
    ) -> None:
        self.config = config
        self.state = ShutdownState.WAITING
        self._connect = connect_fn
        self._signals: asyncio.Queue = asyncio.Queue()
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    def install(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        """Route the termination signals into this coordinator."""
        self._loop = loop or asyncio.get_running_loop()
        for sig in TERMINATION_SIGNALS:
            self._loop.add_signal_handler(sig, self.deliver, sig)
        logger.debug(f"Signal handlers installed: {', '.join(s.name for s in TERMINATION_SIGNALS)}")

    def uninstall(self) -> None:
        if self._loop is None:
            return
        for sig in TERMINATION_SIGNALS:
            self._loop.remove_signal_handler(sig)
        self._loop = None

    def deliver(self, signum: int) -> None:
        """Queue ``signum`` for the coordinator task."""
        self._signals.put_nowait(signum)

    async def wait(self) -> int:
        """Block until a signal arrives, then shut down.

        Returns:
            The process exit status
        """
        signum = await self._signals.get()
        return await self.handle_signal(signum)

    async def handle_signal(self, signum: int) -> int:
        if signum not in TERMINATION_SIGNALS:
            raise UnexpectedSignalError(signum)

        logger.info(f"Received {signal.Signals(signum).name}, shutting down")
        self.state = ShutdownState.SHUTTING_DOWN

        commands = await self._connect()
        await HookDispatcher(commands, self.config).run_exit()

        self.state = ShutdownState.TERMINATED
        return 0
