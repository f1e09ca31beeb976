"""Previous-focus tracking for the focus-leave hook.

The tracker is owned by the event loop task and only changed between
events, so it needs no lock.
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)


class FocusTracker:
    """Remembers the container that held focus before the current event."""

    def __init__(self) -> None:
        self.previous: Optional[int] = None

    def track_focus(self, container_id: int) -> None:
        """Record ``container_id`` as the most recently focused container."""
        self.previous = container_id
        logger.debug(f"Tracked window focus: {container_id}")

    def track_close(self) -> None:
        """Forget the previous container after a window closes."""
        logger.debug(f"Cleared focus after close (was {self.previous})")
        self.previous = None
