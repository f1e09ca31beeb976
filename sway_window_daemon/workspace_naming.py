"""Automatic workspace renaming.

Workspaces are renamed to ``"<num>: <app>"`` where ``<num>`` is the part
of the current name before the first colon and ``<app>`` the focused
application's identity. Re-deriving ``<num>`` from the current name makes
the rename idempotent.
"""

import logging
from typing import Optional

from .connection import SwayConnection
from .errors import NoFocusedWorkspaceError
from .models import WindowSnapshot, WorkspaceState

logger = logging.getLogger(__name__)


def workspace_number(name: str) -> str:
    """Return the prefix of ``name`` before the first ``:``.

    Example:
        >>> workspace_number("3: firefox")
        '3'
        >>> workspace_number("mail")
        'mail'
    """
    return name.split(":", 1)[0]


def normalize_app_name(name: str) -> str:
    """Strip surrounding hyphens and lower-case an application identity."""
    return name.strip("-").lower()


def app_identity(window: WindowSnapshot) -> Optional[str]:
    """Prefer the Wayland app_id, fall back to the X11 window class."""
    if window.app_id is not None:
        return window.app_id
    if window.window_class is not None:
        return window.window_class
    return None


def compute_workspace_name(workspace: WorkspaceState, window: WindowSnapshot) -> Optional[str]:
    """Compute the new name for ``workspace`` after ``window``'s event.

    Returns:
        The bare workspace number when the workspace has no windows left,
        ``"<num>: <app>"`` otherwise, or None when the window carries no
        application identity.
    """
    ws_num = workspace_number(workspace.name)

    if workspace.is_empty:
        return ws_num

    app_name = app_identity(window)
    if app_name is None:
        return None

    return f"{ws_num}: {normalize_app_name(app_name)}"


async def get_focused_workspace(conn: SwayConnection) -> WorkspaceState:
    """Return the focused workspace.

    Raises:
        NoFocusedWorkspaceError: If no workspace is focused
    """
    for workspace in await conn.get_workspaces():
        if workspace.focused:
            return workspace
    raise NoFocusedWorkspaceError()


async def rename_workspace(conn: SwayConnection, window: WindowSnapshot) -> Optional[str]:
    """Rename the focused workspace after a focus or close event.

    Returns:
        The new workspace name, or None if nothing was sent

    Raises:
        NoFocusedWorkspaceError: If no workspace is focused
        CommandFailedError: If Sway rejects the rename
    """
    workspace = await get_focused_workspace(conn)

    new_name = compute_workspace_name(workspace, window)
    if new_name is None:
        logger.debug(f"No application identity for container {window.container_id}, keeping '{workspace.name}'")
        return None

    await conn.run_command(f"rename workspace to {new_name}")
    if new_name != workspace.name:
        logger.info(f"Renamed workspace '{workspace.name}' -> '{new_name}'")
    return new_name
