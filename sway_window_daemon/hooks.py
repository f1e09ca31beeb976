"""User hook dispatch.

Hooks are Sway command templates configured on the command line. The
focus-leave hook is scoped to a single container with ``[con_id=N]``
criteria; that container may already be gone, in which case Sway rejects
the command and the rejection is only logged.
"""

import logging
from typing import Optional

from .config import DaemonConfig
from .connection import SwayConnection

logger = logging.getLogger(__name__)


def scoped_command(container_id: int, template: str) -> str:
    """Prefix ``template`` with criteria matching exactly ``container_id``.

    Example:
        >>> scoped_command(7, "mark --add _prev")
        '[con_id=7] mark --add _prev'
    """
    return f"[con_id={container_id}] {template}"


class HookDispatcher:
    """Sends the configured focus-enter, focus-leave and exit hooks."""

    def __init__(self, conn: SwayConnection, config: DaemonConfig) -> None:
        self.conn = conn
        self.config = config

    async def _send(self, command: str) -> bool:
        replies = await self.conn.run_command(command, check=False)
        failed = [r for r in replies or [] if not r.success]
        if failed:
            logger.debug(f"Hook '{command}' not applied: {failed[0].error}")
            return False
        return True

    async def run_focus_enter(self) -> bool:
        """Send the focus-enter hook unscoped. True if Sway applied it."""
        if not self.config.on_window_focus:
            return False
        return await self._send(self.config.on_window_focus)

    async def run_focus_leave(self, previous_id: Optional[int]) -> bool:
        """Send the focus-leave hook scoped to the previously focused container."""
        if not self.config.on_window_focus_leave or previous_id is None:
            return False
        return await self._send(scoped_command(previous_id, self.config.on_window_focus_leave))

    async def run_exit(self) -> bool:
        """Send the exit hook unscoped."""
        if not self.config.on_exit:
            return False
        logger.info(f"Running exit hook: {self.config.on_exit}")
        return await self._send(self.config.on_exit)
