"""Automatic split direction.

Before a new window opens next to the focused container, split it along
its longer side: tall containers split vertically, wide ones
horizontally. Since every split halves the container along that side,
orientation alternates on its own and approximates a dwindle layout
without any per-workspace state.
"""

import logging
from typing import Optional

from .connection import SwayConnection
from .errors import NoFocusedNodeError, NoParentError
from .models import TreeNode

logger = logging.getLogger(__name__)

SPLIT_VERTICAL = "split v"
SPLIT_HORIZONTAL = "split h"

# Parent layouts where splitting would break the container's stacking
UNSPLITTABLE_LAYOUTS = frozenset({"stacked", "tabbed"})


def decide_split(focused: TreeNode, parent: TreeNode) -> Optional[str]:
    """Return the split command for ``focused``, or None to leave it alone.

    Args:
        focused: The focused container
        parent: The container whose tiling children include ``focused``

    Returns:
        ``"split v"`` if the container is taller than wide, ``"split h"``
        otherwise, or None for floating or fullscreen containers and
        stacked or tabbed parents.
    """
    if focused.is_floating or focused.is_fullscreen:
        return None
    if parent.layout in UNSPLITTABLE_LAYOUTS:
        return None
    if focused.rect.height > focused.rect.width:
        return SPLIT_VERTICAL
    return SPLIT_HORIZONTAL


async def autolayout(conn: SwayConnection) -> Optional[str]:
    """Apply the split decision to the currently focused container.

    Returns:
        The command sent, or None if the layout was left alone

    Raises:
        NoFocusedNodeError: If the tree has no focused node
        NoParentError: If the focused node has no tiling parent
        CommandFailedError: If Sway rejects the split command
    """
    tree = await conn.get_tree()

    focused = tree.find_focused()
    if focused is None:
        raise NoFocusedNodeError()

    parent = tree.find_focused_parent()
    if parent is None:
        raise NoParentError(focused.id)

    command = decide_split(focused, parent)
    if command is None:
        logger.debug(
            f"Autolayout skipped for {focused.id} ({focused.name}) "
            f"(type={focused.type}, percent={focused.percent}, parent layout={parent.layout})"
        )
        return None

    await conn.run_command(command)
    logger.debug(
        f"Autolayout: {command} on {focused.id} ({focused.name}, {focused.rect.width}x{focused.rect.height})"
    )
    return command
