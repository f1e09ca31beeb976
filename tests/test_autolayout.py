"""Tests for automatic split direction."""

import logging

import pytest

from sway_window_daemon.autolayout import SPLIT_HORIZONTAL, SPLIT_VERTICAL, autolayout, decide_split
from sway_window_daemon.errors import CommandFailedError, NoFocusedNodeError, NoParentError
from sway_window_daemon.models import Rect, TreeNode

from conftest import make_tree, sent_commands


def node(width=800, height=1000, node_type="con", percent=0.5, layout="none"):
    return TreeNode(
        id=42,
        type=node_type,
        percent=percent,
        layout=layout,
        rect=Rect(width=width, height=height),
    )


class TestDecideSplit:
    """The split decision rule."""

    def test_tall_window_splits_vertically(self):
        assert decide_split(node(800, 1000), node(layout="splith")) == SPLIT_VERTICAL

    def test_wide_window_splits_horizontally(self):
        assert decide_split(node(1000, 800), node(layout="splitv")) == SPLIT_HORIZONTAL

    def test_square_window_splits_horizontally(self):
        assert decide_split(node(900, 900), node(layout="splith")) == SPLIT_HORIZONTAL

    def test_floating_window_left_alone(self):
        assert decide_split(node(node_type="floating_con"), node(layout="splith")) is None

    def test_fullscreen_window_left_alone(self):
        assert decide_split(node(percent=1.5), node(layout="splith")) is None

    @pytest.mark.parametrize("layout", ["stacked", "tabbed"])
    def test_stacked_and_tabbed_parents_left_alone(self, layout):
        assert decide_split(node(), node(layout=layout)) is None

    def test_missing_percent_is_not_fullscreen(self):
        assert decide_split(node(percent=None), node(layout="splitv")) == SPLIT_VERTICAL


class TestAutolayout:
    """Autolayout against a fetched tree."""

    @pytest.mark.asyncio
    async def test_sends_split_v_for_tall_window(self, mock_sway):
        mock_sway.get_tree.return_value = TreeNode.model_validate(
            make_tree(width=800, height=1000, parent_layout="splith")
        )

        command = await autolayout(mock_sway)

        assert command == "split v"
        assert sent_commands(mock_sway) == ["split v"]

    @pytest.mark.asyncio
    async def test_debug_log_names_the_window(self, mock_sway, caplog):
        tree = make_tree(width=800, height=1000)
        tree["nodes"][0]["nodes"][0]["nodes"][0]["name"] = "vim README.md"
        mock_sway.get_tree.return_value = TreeNode.model_validate(tree)
        caplog.set_level(logging.DEBUG, logger="sway_window_daemon.autolayout")

        await autolayout(mock_sway)

        assert "Autolayout: split v on 42 (vim README.md, 800x1000)" in caplog.text

    @pytest.mark.asyncio
    async def test_sends_split_h_for_wide_window(self, mock_sway):
        mock_sway.get_tree.return_value = TreeNode.model_validate(
            make_tree(width=1200, height=700, parent_layout="splitv")
        )

        await autolayout(mock_sway)

        assert sent_commands(mock_sway) == ["split h"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("tree_kwargs", [
        {"parent_layout": "tabbed"},
        {"parent_layout": "stacked"},
        {"percent": 2.0},
    ])
    async def test_no_command_when_excluded(self, mock_sway, tree_kwargs):
        mock_sway.get_tree.return_value = TreeNode.model_validate(make_tree(**tree_kwargs))

        assert await autolayout(mock_sway) is None
        mock_sway.run_command.assert_not_called()

    @pytest.mark.asyncio
    async def test_no_focused_node(self, mock_sway):
        mock_sway.get_tree.return_value = TreeNode(id=1, type="root")

        with pytest.raises(NoFocusedNodeError):
            await autolayout(mock_sway)

    @pytest.mark.asyncio
    async def test_focused_root_has_no_parent(self, mock_sway):
        mock_sway.get_tree.return_value = TreeNode(id=1, type="root", focused=True)

        with pytest.raises(NoParentError):
            await autolayout(mock_sway)

        mock_sway.run_command.assert_not_called()

    @pytest.mark.asyncio
    async def test_rejected_split_propagates(self, mock_sway):
        mock_sway.run_command.side_effect = CommandFailedError("split v", "denied")

        with pytest.raises(CommandFailedError):
            await autolayout(mock_sway)

    @pytest.mark.asyncio
    async def test_fetches_fresh_tree_every_time(self, mock_sway):
        await autolayout(mock_sway)
        await autolayout(mock_sway)

        assert mock_sway.get_tree.await_count == 2
