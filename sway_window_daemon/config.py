"""Daemon configuration.

Parsed once at startup from the command line and immutable afterwards.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class DaemonConfig(BaseModel):
    """Feature toggles and hook templates for the window event daemon."""

    model_config = {"frozen": True}

    autolayout: bool = Field(default=False, description="Alternate split direction automatically")
    workspace_renaming: bool = Field(default=False, description="Rename workspaces after the focused app")
    on_window_focus: Optional[str] = Field(default=None, description="Command run when a window gains focus")
    on_window_focus_leave: Optional[str] = Field(
        default=None, description="Command run on the window that lost focus"
    )
    on_exit: Optional[str] = Field(default=None, description="Command run when the daemon exits")
    log_level: str = Field(default="INFO")

    @field_validator("on_window_focus", "on_window_focus_leave", "on_exit")
    @classmethod
    def blank_hook_is_unset(cls, v: Optional[str]) -> Optional[str]:
        """Treat empty or whitespace-only templates as not configured."""
        if v is None or not v.strip():
            return None
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v} (expected one of {', '.join(LOG_LEVELS)})")
        return level

    def describe(self) -> str:
        """One-line summary for the startup log."""
        hooks = [
            name for name in ("on_window_focus", "on_window_focus_leave", "on_exit")
            if getattr(self, name)
        ]
        return (
            f"autolayout={self.autolayout} workspace_renaming={self.workspace_renaming} "
            f"hooks=[{', '.join(hooks)}]"
        )
