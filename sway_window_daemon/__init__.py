"""
Sway Window Event Daemon

Listens to Sway window events and reacts with automatic split directions,
application-named workspaces and user-defined focus/exit hooks.
"""

__version__ = "1.0.0"
