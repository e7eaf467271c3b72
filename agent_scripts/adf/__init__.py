from .converter import MarkdownToAdf, markdown_to_adf, markdown_to_adf_string
from .models import AdfDocument, AdfMark, AdfNode

__all__ = [
    "AdfDocument",
    "AdfMark",
    "AdfNode",
    "MarkdownToAdf",
    "markdown_to_adf",
    "markdown_to_adf_string",
]
