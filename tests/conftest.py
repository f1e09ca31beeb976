"""
Pytest configuration and fixtures for the Sway window event daemon tests.
"""

from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, Mock

import pytest

from sway_window_daemon.config import DaemonConfig
from sway_window_daemon.connection import SwayConnection
from sway_window_daemon.models import TreeNode, WindowChange, WindowSnapshot, WorkspaceState


def ok_reply() -> Mock:
    return Mock(success=True, error=None)


def failed_reply(error: str = "No matching node") -> Mock:
    return Mock(success=False, error=error)


def make_tree(
    width: int = 800,
    height: int = 1000,
    node_type: str = "con",
    percent: Optional[float] = 0.5,
    parent_layout: str = "splith",
    focused_id: int = 42,
) -> Dict[str, Any]:
    """Raw get_tree payload: root > output > workspace > focused window + sibling."""
    window = {
        "id": focused_id,
        "type": node_type,
        "layout": "none",
        "focused": True,
        "focus": [],
        "percent": percent,
        "rect": {"x": 0, "y": 0, "width": width, "height": height},
        "nodes": [],
        "floating_nodes": [],
    }
    sibling = {
        "id": focused_id + 1,
        "type": "con",
        "layout": "none",
        "focused": False,
        "focus": [],
        "percent": 0.5,
        "rect": {"x": width, "y": 0, "width": width, "height": height},
        "nodes": [],
        "floating_nodes": [],
    }
    workspace = {
        "id": 10,
        "type": "workspace",
        "name": "3",
        "layout": parent_layout,
        "focused": False,
        "focus": [focused_id, focused_id + 1],
        "rect": {"x": 0, "y": 0, "width": width * 2, "height": height},
        "nodes": [window, sibling],
        "floating_nodes": [],
    }
    output = {
        "id": 3,
        "type": "output",
        "name": "HEADLESS-1",
        "layout": "output",
        "focus": [10],
        "rect": {"x": 0, "y": 0, "width": width * 2, "height": height},
        "nodes": [workspace],
        "floating_nodes": [],
    }
    return {
        "id": 1,
        "type": "root",
        "name": "root",
        "layout": "splith",
        "focus": [3],
        "rect": {"x": 0, "y": 0, "width": width * 2, "height": height},
        "nodes": [output],
        "floating_nodes": [],
    }


def make_workspaces(name: str = "3", focus: Optional[List[int]] = None) -> List[WorkspaceState]:
    """Focused workspace ``name`` plus an unfocused one."""
    return [
        WorkspaceState(name="1: kitty", focused=False, focus=[5]),
        WorkspaceState(name=name, focused=True, focus=[42] if focus is None else focus),
    ]


def make_window(
    change: WindowChange = WindowChange.FOCUS,
    container_id: int = 42,
    app_id: Optional[str] = "Firefox",
    window_class: Optional[str] = None,
) -> WindowSnapshot:
    return WindowSnapshot(
        change=change,
        container_id=container_id,
        app_id=app_id,
        window_class=window_class,
    )


@pytest.fixture
def config() -> DaemonConfig:
    """Everything enabled with the hooks from the README examples."""
    return DaemonConfig(
        autolayout=True,
        workspace_renaming=True,
        on_window_focus="[tiling] opacity 0.8; opacity 1",
        on_window_focus_leave="mark --add _prev",
        on_exit="[tiling] opacity 1",
    )


@pytest.fixture
def mock_sway():
    """Mock SwayConnection used for commands."""
    conn = AsyncMock(spec=SwayConnection)
    conn.run_command.return_value = [ok_reply()]
    conn.get_tree.return_value = TreeNode.model_validate(make_tree())
    conn.get_workspaces.return_value = make_workspaces()
    return conn


def sent_commands(conn) -> List[str]:
    """Commands passed to a mock connection's run_command, in order."""
    return [c.args[0] for c in conn.run_command.call_args_list]
