from .base import PeekabooClient
from .convenience import (
    click_element,
    click_text,
    detect_elements,
    find_element,
    find_elements,
    find_elements_by_role,
    launch_app,
    quick_app_screenshot,
    quit_app,
    screenshot,
    see_and_click,
    type_text,
    wait_for_element,
    with_app,
)
from .models import DetectionResult, FocusOptions, TargetOptions, UIElement

__all__ = [
    "DetectionResult",
    "FocusOptions",
    "PeekabooClient",
    "TargetOptions",
    "UIElement",
    "click_element",
    "click_text",
    "detect_elements",
    "find_element",
    "find_elements",
    "find_elements_by_role",
    "launch_app",
    "quick_app_screenshot",
    "quit_app",
    "screenshot",
    "see_and_click",
    "type_text",
    "wait_for_element",
    "with_app",
]
