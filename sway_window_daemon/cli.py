"""Command-line interface for the Sway window event daemon."""

import argparse
import os
from typing import Optional, Sequence

from pydantic import ValidationError

from .config import DaemonConfig

DESCRIPTION = """\
A small daemon that listens to Sway window events and persuades Sway to do
little things: alternate split directions, name workspaces after the
application in focus, and run commands when windows gain or lose focus.
"""

EPILOG = """\
examples:
  dim unfocused tiling windows:
    -f '[tiling] opacity 0.8; opacity 1'
  ...but keep firefox opaque:
    -f '[tiling] opacity 0.8; [app_id="firefox"] opacity 1; opacity 1'
  mark the previous window, then bind in the sway config
  'bindsym Mod1+tab [con_mark=_prev] focus':
    -l 'mark --add _prev'
  restore opacity when the daemon exits:
    -e '[tiling] opacity 1'
"""


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="sway-window-daemon",
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-a", "--autolayout",
        action="store_true",
        help="Alternate between horizontal and vertical splits based on the "
             "focused window's shape",
    )
    parser.add_argument(
        "-w", "--workspace-renaming",
        action="store_true",
        help="Rename workspaces after the application running in them "
             "(e.g. '3: firefox')",
    )
    parser.add_argument(
        "-f", "--on-window-focus",
        metavar="COMMAND",
        help="Sway command run when a window comes into focus (blank means unset)",
    )
    parser.add_argument(
        "-l", "--on-window-focus-leave",
        metavar="COMMAND",
        help="Sway command run on the window that just lost focus (blank means unset)",
    )
    parser.add_argument(
        "-e", "--on-exit",
        metavar="COMMAND",
        help="Sway command run when the daemon exits (blank means unset)",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("LOG_LEVEL", "INFO"),
        help="Logging level: debug, info [default], warning, error or critical "
             "(default from $LOG_LEVEL)",
    )
    return parser


def parse_config(argv: Optional[Sequence[str]] = None) -> DaemonConfig:
    """Parse ``argv`` into a ``DaemonConfig``.

    Exits with status 2 (via ``parser.error``) on invalid arguments.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        return DaemonConfig(
            autolayout=args.autolayout,
            workspace_renaming=args.workspace_renaming,
            on_window_focus=args.on_window_focus,
            on_window_focus_leave=args.on_window_focus_leave,
            on_exit=args.on_exit,
            log_level=args.log_level,
        )
    except ValidationError as e:
        messages = "; ".join(err["msg"] for err in e.errors())
        parser.error(messages)
