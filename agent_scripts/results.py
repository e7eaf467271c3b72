"""Result contract shared by every tool wrapper."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class CommandError(Exception):
    """Raised by the convenience layer when a wrapped tool call fails."""

    def __init__(self, tool: str, operation: str, cause: Exception | str) -> None:
        self.tool = tool
        self.operation = operation
        super().__init__(f"{tool} {operation} failed: {cause}")
        if isinstance(cause, Exception):
            self.__cause__ = cause


class CommandResult(BaseModel):
    """Outcome of one tool invocation.

    Wrappers always return this instead of raising. ``data`` holds parsed JSON
    when the tool printed JSON, the raw text otherwise, and ``None`` when the
    tool printed nothing.
    """

    success: bool
    data: Any = None
    error: str | None = None

    @classmethod
    def ok(cls, data: Any = None) -> CommandResult:
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> CommandResult:
        return cls(success=False, error=error or "Unknown error")

    def unwrap(self, tool: str, operation: str) -> Any:
        """Return ``data`` or raise CommandError with the tool's error text."""
        if not self.success:
            raise CommandError(tool, operation, self.error or "Unknown error")
        return self.data
