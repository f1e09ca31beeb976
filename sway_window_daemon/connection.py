"""Sway IPC connection layer.

Wraps ``i3ipc.aio`` behind the small contract the daemon needs: connect,
run a command, query the tree and workspaces, and pull window events one
at a time from a subscription. No reconnection or retries happen here; a
transport failure surfaces as a fatal ``DaemonConnectionError``.
"""

import asyncio
import logging
from typing import Any, List, Optional, Sequence

from i3ipc import Event, aio

from .errors import (
    CommandFailedError,
    DaemonConnectionError,
    EventStreamError,
)
from .models import TreeNode, WorkspaceState

logger = logging.getLogger(__name__)

# Queued after the subscription's main loop finishes
_STREAM_END = object()


class EventStream:
    """Async iterator over events delivered to a subscription connection.

    i3ipc.aio dispatches events through callbacks; this class turns them
    into a FIFO queue so the consumer handles one event completely before
    asking for the next. Iteration stops when the connection's main loop
    returns and raises ``EventStreamError`` if it failed.
    """

    def __init__(self, conn: aio.Connection, events: Sequence[Event]) -> None:
        self.conn = conn
        self.events = list(events)
        self._queue: asyncio.Queue = asyncio.Queue()
        self._main_task: Optional[asyncio.Task] = None

    async def start(self) -> "EventStream":
        """Register the event handler, subscribe and start reading."""
        for event in self.events:
            self.conn.on(event, self._enqueue)

        try:
            await self.conn.subscribe(self.events)
        except Exception as e:
            raise EventStreamError(f"subscribe failed: {e}") from e

        self._main_task = asyncio.create_task(self.conn.main())
        self._main_task.add_done_callback(self._on_main_done)
        logger.info(f"Subscribed to Sway events: {', '.join(e.value for e in self.events)}")
        return self

    def _enqueue(self, conn: aio.Connection, event: Any) -> None:
        self._queue.put_nowait(event)

    def _on_main_done(self, task: asyncio.Task) -> None:
        self._queue.put_nowait(_STREAM_END)

    def __aiter__(self) -> "EventStream":
        return self

    async def __anext__(self) -> Any:
        item = await self._queue.get()
        if item is not _STREAM_END:
            return item

        # Keep the stream exhausted for any later reader
        self._queue.put_nowait(_STREAM_END)
        task = self._main_task
        if task is not None and not task.cancelled() and task.exception() is not None:
            error = task.exception()
            raise EventStreamError(str(error)) from error
        raise StopAsyncIteration

    async def close(self) -> None:
        """Stop the subscription's main loop."""
        if self._main_task is None or self._main_task.done():
            return
        self.conn.main_quit()
        try:
            await self._main_task
        except Exception as e:
            logger.debug(f"Event stream closed with error: {e}")


class SwayConnection:
    """A single Sway IPC connection with the operations the daemon uses."""

    def __init__(self, conn: aio.Connection) -> None:
        self.conn = conn

    async def run_command(self, command: str, check: bool = True) -> List[Any]:
        """Run a Sway command.

        Args:
            command: Command string, possibly prefixed with criteria
            check: Raise ``CommandFailedError`` if Sway rejects the command

        Returns:
            The list of i3ipc ``CommandReply`` objects

        Raises:
            DaemonConnectionError: If the IPC round trip fails
            CommandFailedError: If ``check`` is set and a reply is unsuccessful
        """
        try:
            replies = await self.conn.command(command)
        except Exception as e:
            raise DaemonConnectionError("command", str(e)) from e

        logger.debug(f"Ran command: {command}")
        if check:
            for reply in replies or []:
                if not reply.success:
                    raise CommandFailedError(command, reply.error or "unknown error")
        return replies

    async def get_tree(self) -> TreeNode:
        """Fetch a fresh layout tree snapshot."""
        try:
            tree = await self.conn.get_tree()
        except Exception as e:
            raise DaemonConnectionError("get_tree", str(e)) from e
        return TreeNode.from_tree(tree)

    async def get_workspaces(self) -> List[WorkspaceState]:
        """Fetch the current workspaces."""
        try:
            replies = await self.conn.get_workspaces()
        except Exception as e:
            raise DaemonConnectionError("get_workspaces", str(e)) from e
        return [WorkspaceState.from_reply(reply) for reply in replies]

    async def subscribe(self, events: Sequence[Event]) -> EventStream:
        """Subscribe this connection to ``events`` and return the stream.

        The connection should be dedicated to the subscription; commands go
        through a separate ``SwayConnection``.
        """
        return await EventStream(self.conn, events).start()


async def connect(socket_path: Optional[str] = None) -> SwayConnection:
    """Open a new Sway IPC connection.

    Raises:
        DaemonConnectionError: If Sway is not reachable
    """
    try:
        conn = await aio.Connection(socket_path=socket_path, auto_reconnect=False).connect()
    except Exception as e:
        raise DaemonConnectionError("connect", str(e)) from e

    logger.info("Connected to Sway IPC")
    return SwayConnection(conn)
