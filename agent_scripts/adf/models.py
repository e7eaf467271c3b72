"""Pydantic models for Atlassian Document Format (ADF) output."""

from __future__ import annotations

import json
from typing import Any, Literal

from pydantic import BaseModel, Field


class AdfMark(BaseModel):
    """Inline formatting applied to a text node."""

    type: Literal["strong", "em", "strike", "code", "link"]
    attrs: dict[str, Any] | None = None


class AdfNode(BaseModel):
    """A block or inline node. Unused fields are omitted when serialized."""

    type: str
    attrs: dict[str, Any] | None = None
    content: list[AdfNode] | None = None
    marks: list[AdfMark] | None = None
    text: str | None = None


class AdfDocument(BaseModel):
    """Root ``doc`` node."""

    type: Literal["doc"] = "doc"
    version: Literal[1] = 1
    content: list[AdfNode] = Field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


# Node builders


def text_node(text: str, marks: list[AdfMark] | tuple[AdfMark, ...] = ()) -> AdfNode:
    return AdfNode(type="text", text=text, marks=list(marks) or None)


def paragraph(content: list[AdfNode]) -> AdfNode:
    return AdfNode(type="paragraph", content=content)


def link_mark(href: str, title: str | None = None) -> AdfMark:
    attrs: dict[str, Any] = {"href": href}
    if title:
        attrs["title"] = title
    return AdfMark(type="link", attrs=attrs)
