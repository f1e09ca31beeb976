"""Window event handlers.

One handler per window change kind the daemon reacts to. Hooks are sent
first so the focus-leave hook always reaches the container focused before
this event; the tracker is only updated once everything else has run.

Autolayout and workspace renaming are best-effort: their failures are
logged and never stop the event loop. Hook failures at the connection
level propagate and end the daemon.
"""

import logging
from typing import Awaitable

from .autolayout import autolayout
from .config import DaemonConfig
from .connection import SwayConnection
from .errors import RecoverableError
from .focus_tracker import FocusTracker
from .hooks import HookDispatcher
from .models import WindowChange, WindowSnapshot
from .workspace_naming import rename_workspace

logger = logging.getLogger(__name__)


async def _best_effort(label: str, operation: Awaitable) -> None:
    try:
        await operation
    except RecoverableError as e:
        logger.warning(f"{label} err: {e}", extra={"error": e.to_dict()})
    except Exception as e:
        logger.error(f"{label} err: {e}", exc_info=True)


async def on_window_focus(
    window: WindowSnapshot,
    *,
    commands: SwayConnection,
    hooks: HookDispatcher,
    tracker: FocusTracker,
    config: DaemonConfig,
) -> None:
    """Handle window::focus."""
    await hooks.run_focus_leave(tracker.previous)
    await hooks.run_focus_enter()

    if config.workspace_renaming:
        await _best_effort("workspace rename", rename_workspace(commands, window))

    if config.autolayout:
        await _best_effort("autolayout", autolayout(commands))

    tracker.track_focus(window.container_id)


async def on_window_close(
    window: WindowSnapshot,
    *,
    commands: SwayConnection,
    hooks: HookDispatcher,
    tracker: FocusTracker,
    config: DaemonConfig,
) -> None:
    """Handle window::close."""
    await hooks.run_focus_leave(tracker.previous)

    if config.workspace_renaming:
        await _best_effort("workspace rename", rename_workspace(commands, window))

    tracker.track_close()


async def handle_window_event(
    window: WindowSnapshot,
    *,
    commands: SwayConnection,
    hooks: HookDispatcher,
    tracker: FocusTracker,
    config: DaemonConfig,
) -> None:
    """Dispatch a window event to its handler by change kind."""
    match window.change:
        case WindowChange.FOCUS:
            await on_window_focus(
                window, commands=commands, hooks=hooks, tracker=tracker, config=config
            )
        case WindowChange.CLOSE:
            await on_window_close(
                window, commands=commands, hooks=hooks, tracker=tracker, config=config
            )
        case WindowChange.IGNORED:
            pass
        case _:
            raise ValueError(f"Unhandled window change: {window.change!r}")
