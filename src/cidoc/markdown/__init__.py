"""Markdown formatting for cidoc.

This package provides:
- `Content`, the immutable UTF-8 safe value every component works on
- A linear fence / inline code scanner
- Code, link and table renderers
- The `MarkdownFormatter` façade used by section renderers
"""

from cidoc.markdown.code import CodeRenderer
from cidoc.markdown.content import REGEX_SAFE_MAX_BYTES, Content
from cidoc.markdown.fences import Fence, FenceScanner, InlineCodeSpan
from cidoc.markdown.formatter import (
    FormatterOptions,
    FormatterService,
    LinkFormat,
    MarkdownFormatter,
)
from cidoc.markdown.links import LinkRenderer
from cidoc.markdown.table import TableRenderer

__all__ = [
    # Content
    "Content",
    "REGEX_SAFE_MAX_BYTES",
    # Scanning
    "Fence",
    "FenceScanner",
    "InlineCodeSpan",
    # Renderers
    "CodeRenderer",
    "LinkRenderer",
    "TableRenderer",
    # Formatter
    "FormatterOptions",
    "FormatterService",
    "LinkFormat",
    "MarkdownFormatter",
]
