from __future__ import annotations

import re
from typing import Any, Literal

from pydantic import BaseModel

NavigationType = Literal["url", "back", "forward", "reload"]
ScreenshotFormat = Literal["png", "jpeg", "webp"]
NetworkCondition = Literal["No emulation", "Offline", "Slow 3G", "Fast 3G", "Slow 4G", "Fast 4G"]

_PAGE_LINE = re.compile(r"^\s*(\d+):\s*(\S*)", re.M)


class ToolImage(BaseModel):
    mime_type: str
    data: str  # base64


class ToolOutput(BaseModel):
    """Content returned by one chrome-devtools-mcp tool call.

    ``data`` is the structured payload when the server sends one, or the text
    parsed as JSON when it happens to be JSON.
    """

    text: str = ""
    data: Any = None
    images: list[ToolImage] = []


class Page(BaseModel):
    id: int
    url: str = ""
    title: str = ""


def parse_pages(output: ToolOutput) -> list[Page]:
    """Pages from a ``list_pages`` result, structured or as ``"<id>: <url>"`` lines."""
    if isinstance(output.data, dict) and isinstance(output.data.get("pages"), list):
        return [Page.model_validate(p) for p in output.data["pages"]]
    return [Page(id=int(m.group(1)), url=m.group(2)) for m in _PAGE_LINE.finditer(output.text)]
