"""Option groups and result models for the peekaboo CLI."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

from agent_scripts.runner import build_flags

CaptureMode = Literal["auto", "screen", "window", "frontmost"]
CaptureEngine = Literal["auto", "classic", "cg", "modern", "sckit"]
ImageFormat = Literal["png", "jpg"]
ScrollDirection = Literal["up", "down", "left", "right"]
TypingProfile = Literal["linear", "human"]
WindowAction = Literal["close", "minimize", "maximize", "focus"]


class TargetOptions(BaseModel):
    """Which app or window a command acts on."""

    app: str | None = None
    pid: int | None = None
    window_id: int | None = None
    window_title: str | None = None
    window_index: int | None = None
    snapshot: str | None = None

    def flags(self) -> list[str]:
        return build_flags(
            [
                ("--snapshot", self.snapshot),
                ("--app", self.app),
                ("--pid", self.pid),
                ("--window-id", self.window_id),
                ("--window-title", self.window_title),
                ("--window-index", self.window_index),
            ]
        )


class FocusOptions(BaseModel):
    """How peekaboo brings the target to the front before acting."""

    no_auto_focus: bool = False
    space_switch: bool = False
    bring_to_current_space: bool = False
    focus_timeout_seconds: float | None = None
    focus_retry_count: int | None = None

    def flags(self) -> list[str]:
        return build_flags(
            [
                ("--no-auto-focus", self.no_auto_focus),
                ("--space-switch", self.space_switch),
                ("--bring-to-current-space", self.bring_to_current_space),
                ("--focus-timeout-seconds", self.focus_timeout_seconds),
                ("--focus-retry-count", self.focus_retry_count),
            ]
        )


def target_flags(target: TargetOptions | None, focus: FocusOptions | None = None) -> list[str]:
    args = target.flags() if target else []
    if focus:
        args.extend(focus.flags())
    return args


class Envelope(BaseModel):
    """The ``{"success", "data", "error"}`` object peekaboo prints with ``--json``."""

    model_config = ConfigDict(extra="allow")

    success: bool
    data: Any = None
    error: Any = None

    def error_message(self) -> str:
        if isinstance(self.error, dict):
            return str(self.error.get("message") or self.error)
        return str(self.error) if self.error else "Unknown error"


class UIElement(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    role: str = ""
    role_description: str | None = None
    label: str | None = None
    is_actionable: bool | None = None

    def matches(self, text: str) -> bool:
        """Case-insensitive substring match on the label."""
        return bool(self.label) and text.lower() in self.label.lower()


class DetectionResult(BaseModel):
    """Elements found by ``peekaboo see --annotate``."""

    elements: list[UIElement] = []
    element_count: int = 0
    screenshot_path: str | None = None
    annotated_path: str | None = None
    snapshot_id: str | None = None
    app_name: str | None = None
    window_title: str | None = None

    @classmethod
    def from_see(cls, data: dict[str, Any]) -> DetectionResult:
        return cls(
            elements=data.get("ui_elements") or [],
            element_count=data.get("element_count") or 0,
            screenshot_path=data.get("screenshot_raw"),
            annotated_path=data.get("screenshot_annotated"),
            snapshot_id=data.get("snapshot_id"),
            app_name=data.get("application_name"),
            window_title=data.get("window_title"),
        )
