"""
Error taxonomy for the Sway window event daemon.

Errors fall into three groups:
- Fatal: connection or event stream failures. They end the daemon with a
  non-zero exit status.
- Recoverable: a single automation decision could not be carried out
  (nothing focused, command rejected, ...). The event loop logs them and
  moves on to the next event.
- Unreachable: internal consistency faults such as an unregistered signal.
"""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorCode(Enum):
    """
    Error codes for the window event daemon.

    Codes (1000-1999):
    - 1000-1099: Sway IPC connection errors (fatal)
    - 1100-1199: Tree/workspace lookup errors (recoverable)
    - 1200-1299: Command errors (recoverable)
    - 1900-1999: Internal faults
    """

    # Sway IPC connection errors (1000-1099)
    SWAY_NOT_RUNNING = 1000
    SWAY_IPC_FAILED = 1001
    EVENT_STREAM_FAILED = 1002
    EVENT_STREAM_CLOSED = 1003

    # Lookup errors (1100-1199)
    NO_FOCUSED_NODE = 1100
    NO_PARENT = 1101
    NO_FOCUSED_WORKSPACE = 1102

    # Command errors (1200-1299)
    COMMAND_REJECTED = 1200

    # Internal faults (1900-1999)
    UNEXPECTED_SIGNAL = 1900


class DaemonError(Exception):
    """Base exception for window event daemon errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize daemon error.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            context: Additional context for debugging
        """
        self.code = code
        self.message = message
        self.context = context or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to a dictionary for structured logging."""
        result = {
            "code": self.code.value,
            "message": self.message
        }

        if self.context:
            result["context"] = self.context

        return result


class FatalError(DaemonError):
    """Error that terminates the daemon."""


class RecoverableError(DaemonError):
    """Error scoped to a single automation decision."""


class DaemonConnectionError(FatalError):
    """Sway IPC connection could not be established or was lost."""

    def __init__(self, operation: str, reason: str):
        super().__init__(
            code=ErrorCode.SWAY_IPC_FAILED,
            message=f"Sway IPC {operation} failed: {reason}",
            context={"operation": operation, "reason": reason}
        )


class EventStreamError(FatalError):
    """The window event subscription failed."""

    def __init__(self, reason: str):
        super().__init__(
            code=ErrorCode.EVENT_STREAM_FAILED,
            message=f"Window event stream failed: {reason}",
            context={"reason": reason}
        )


class EventStreamClosed(FatalError):
    """The window event subscription ended."""

    def __init__(self):
        super().__init__(
            code=ErrorCode.EVENT_STREAM_CLOSED,
            message="Window event stream ended"
        )


class NoFocusedNodeError(RecoverableError):
    """The layout tree has no focused node."""

    def __init__(self):
        super().__init__(
            code=ErrorCode.NO_FOCUSED_NODE,
            message="No focused node"
        )


class NoParentError(RecoverableError):
    """The focused node has no tiling parent."""

    def __init__(self, node_id: Optional[int] = None):
        super().__init__(
            code=ErrorCode.NO_PARENT,
            message="No parent",
            context={"node_id": node_id} if node_id is not None else None
        )


class NoFocusedWorkspaceError(RecoverableError):
    """No workspace reports itself as focused."""

    def __init__(self):
        super().__init__(
            code=ErrorCode.NO_FOCUSED_WORKSPACE,
            message="No focused workspace"
        )


class CommandFailedError(RecoverableError):
    """Sway rejected a command."""

    def __init__(self, command: str, reason: str):
        super().__init__(
            code=ErrorCode.COMMAND_REJECTED,
            message=f"Command '{command}' failed: {reason}",
            context={"command": command, "reason": reason}
        )


class UnexpectedSignalError(DaemonError):
    """A signal outside the registered set was delivered."""

    def __init__(self, signum: int):
        super().__init__(
            code=ErrorCode.UNEXPECTED_SIGNAL,
            message=f"Received unregistered signal {signum}",
            context={"signum": signum}
        )
