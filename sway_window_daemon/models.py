"""
Pydantic models for Sway IPC payloads consumed by the daemon.

The i3ipc objects are converted into these models from their raw
``ipc_data`` so the decision code works on plain, validated values and the
tests can describe trees and workspaces as dictionaries.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterator, List, Optional

from pydantic import BaseModel, Field, field_validator


class WindowChange(str, Enum):
    """Window event change kinds the daemon distinguishes."""

    FOCUS = "focus"
    CLOSE = "close"
    IGNORED = "ignored"

    @classmethod
    def from_ipc(cls, change: Optional[str]) -> "WindowChange":
        """Map a raw ``change`` string (``new``, ``title``, ...) onto a kind."""
        if change == "focus":
            return cls.FOCUS
        if change == "close":
            return cls.CLOSE
        return cls.IGNORED


class WindowSnapshot(BaseModel):
    """The part of a window event the daemon keeps for one iteration."""

    model_config = {"frozen": True}

    change: WindowChange
    container_id: int = Field(..., description="Sway container ID (con_id)")
    app_id: Optional[str] = Field(None, description="Wayland application ID")
    window_class: Optional[str] = Field(
        None, description="X11 class from window_properties (XWayland)"
    )

    @classmethod
    def from_ipc(cls, data: dict[str, Any]) -> "WindowSnapshot":
        """Build a snapshot from a raw ``window`` event payload."""
        container = data.get("container") or {}
        properties = container.get("window_properties") or {}
        return cls(
            change=WindowChange.from_ipc(data.get("change")),
            container_id=container["id"],
            app_id=container.get("app_id"),
            window_class=properties.get("class"),
        )

    @classmethod
    def from_event(cls, event: Any) -> "WindowSnapshot":
        """Build a snapshot from an ``i3ipc.WindowEvent``."""
        return cls.from_ipc(event.ipc_data)


class Rect(BaseModel):
    """Container geometry in pixels."""

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0


class TreeNode(BaseModel):
    """One node of a ``get_tree`` snapshot, with its children."""

    id: int
    type: str = "con"
    layout: str = "none"
    focused: bool = False
    focus: List[int] = Field(default_factory=list)
    percent: Optional[float] = None
    name: Optional[str] = None
    rect: Rect = Field(default_factory=Rect)
    nodes: List["TreeNode"] = Field(default_factory=list)
    floating_nodes: List["TreeNode"] = Field(default_factory=list)

    @property
    def is_floating(self) -> bool:
        return self.type == "floating_con"

    @property
    def is_fullscreen(self) -> bool:
        # Sway reports percent > 1.0 for fullscreen containers
        return self.percent is not None and self.percent > 1.0

    def focused_child(self) -> Optional["TreeNode"]:
        """Return the child this node's focus stack points at, if any."""
        if not self.focus:
            return None
        for child in (*self.nodes, *self.floating_nodes):
            if child.id == self.focus[0]:
                return child
        return None

    def focus_path(self) -> Iterator["TreeNode"]:
        """Walk from this node down the focus stack to the focused leaf."""
        node: Optional[TreeNode] = self
        while node is not None:
            yield node
            node = node.focused_child()

    def find_focused(self) -> Optional["TreeNode"]:
        """Return the focused node on the focus path."""
        for node in self.focus_path():
            if node.focused:
                return node
        return None

    def find_focused_parent(self) -> Optional["TreeNode"]:
        """Return the node whose tiling children include the focused node."""
        for node in self.focus_path():
            if any(child.focused for child in node.nodes):
                return node
        return None

    @classmethod
    def from_tree(cls, tree: Any) -> "TreeNode":
        """Build a snapshot from the root ``i3ipc.Con`` of ``get_tree``."""
        return cls.model_validate(tree.ipc_data)


class WorkspaceState(BaseModel):
    """A workspace as reported by ``get_workspaces``."""

    name: str
    focused: bool = False
    focus: List[int] = Field(
        default_factory=list,
        description="Focused descendant ids, empty when the workspace has no window",
    )

    @field_validator("focus", mode="before")
    @classmethod
    def none_focus_is_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    @property
    def is_empty(self) -> bool:
        return not self.focus

    @classmethod
    def from_reply(cls, reply: Any) -> "WorkspaceState":
        """Build a workspace from an ``i3ipc.WorkspaceReply``."""
        return cls.model_validate(reply.ipc_data)
