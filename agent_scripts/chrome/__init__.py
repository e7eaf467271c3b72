from .convenience import (
    browser_session,
    close_all_pages,
    ensure_clean_state,
    navigate_and_screenshot,
    navigate_and_snapshot,
    quick_screenshot,
)
from .models import Page, ToolImage, ToolOutput, parse_pages
from .session import ChromeSession
from .tools import ChromeTools

__all__ = [
    "ChromeSession",
    "ChromeTools",
    "Page",
    "ToolImage",
    "ToolOutput",
    "browser_session",
    "close_all_pages",
    "ensure_clean_state",
    "navigate_and_screenshot",
    "navigate_and_snapshot",
    "quick_screenshot",
    "parse_pages",
]
