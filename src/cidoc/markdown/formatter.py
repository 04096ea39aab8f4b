"""Markdown formatter façade.

Each primitive applies the escaping rule of its Markdown construct and
returns a new `Content`. Tables and code are delegated to `TableRenderer`
and `CodeRenderer`, which are injected through the constructor.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from cidoc.exceptions import UnsupportedDestinationError
from cidoc.markdown.code import ITALIC_DELIMITER, CodeRenderer
from cidoc.markdown.content import REGEX_SAFE_MAX_BYTES, Content, ContentLike
from cidoc.markdown.fences import FenceScanner
from cidoc.markdown.links import LinkRenderer
from cidoc.markdown.table import TableRenderer

BOLD_DELIMITER = "**"
LINE_BREAK = "\n"
MARKDOWN_EXTENSIONS = (".md", ".markdown")

_INLINE_MARKDOWN = re.compile(r"^\s*!?\[[^\]]*\]\([^)]*\)\s*$")


class LinkFormat(str, Enum):
    """How bare URLs in paragraphs are rewritten."""

    AUTO = "auto"
    FULL = "full"
    NONE = "none"


class FormatterOptions(BaseModel):
    """Options affecting formatter output."""

    model_config = ConfigDict(frozen=True)

    link_format: LinkFormat = LinkFormat.AUTO


def _is_list_item(line: Content) -> bool:
    data = line.to_bytes()
    if len(data) >= 2 and data[0:1] in (b"-", b"*", b"+"):
        return data[1:2] in (b" ", b"\t")

    digits = 0
    while digits < len(data) and data[digits : digits + 1].isdigit():
        digits += 1
    return (
        digits > 0
        and data[digits : digits + 1] == b"."
        and data[digits + 1 : digits + 2] in (b" ", b"\t")
    )


class MarkdownFormatter:
    """Build Markdown fragments as `Content` values.

    Example:
        formatter = MarkdownFormatter(scanner, code, table, links)
        doc = formatter.heading(Content("Inputs"), 2).append(
            formatter.line_break(),
            formatter.table(headers, rows),
        )
    """

    def __init__(
        self,
        scanner: FenceScanner,
        code: CodeRenderer,
        table: TableRenderer,
        links: LinkRenderer,
        options: FormatterOptions | None = None,
    ) -> None:
        self.scanner = scanner
        self.code_renderer = code
        self.table_renderer = table
        self.link_renderer = links
        self.options = options or FormatterOptions()

    def with_options(self, options: FormatterOptions) -> MarkdownFormatter:
        """Return a formatter sharing the same collaborators with other options."""
        return MarkdownFormatter(
            self.scanner, self.code_renderer, self.table_renderer, self.link_renderer, options
        )

    def supports(self, destination: str | Path) -> bool:
        return Path(destination).suffix.lower() in MARKDOWN_EXTENSIONS

    # Block elements

    def heading(self, content: Content, level: int = 1) -> Content:
        hashes = "#" * max(1, min(6, level))
        return Content(f"{hashes} ").append(content, self.line_break())

    def paragraph(self, content: Content) -> Content:
        link_format = self.options.link_format
        if link_format != LinkFormat.NONE:
            content = self.link_renderer.transform_urls(content, link_format == LinkFormat.FULL)
        return self._indent_list_continuations(content).append(self.line_break())

    def center(self, content: Content) -> Content:
        """Center content inside an HTML container, indenting non-empty lines."""
        content = content.trim()
        if content.is_empty():
            return Content('<div align="center"></div>').append(self.line_break())

        result = Content('<div align="center">').append(self.line_break())
        for line in content.split_lines():
            if not line.trim().is_empty():
                result = result.append("  ", line.trim(), self.line_break())
        return result.append("</div>", self.line_break())

    def code(self, content: Content, language: Content | None = None) -> Content:
        return self.code_renderer.code_block(content, language)

    def table(self, headers: Sequence[Content], rows: Sequence[Sequence[Content]]) -> Content:
        return self.table_renderer.table(headers, rows)

    def list(self, items: Sequence[Content], ordered: bool = False) -> Content:
        result = Content.empty()
        for index, item in enumerate(items, 1):
            prefix = f"{index}. " if ordered else "- "
            result = result.append(prefix, item, self.line_break())
        return result

    def horizontal_rule(self) -> Content:
        return Content("---").append(self.line_break())

    def line_break(self) -> Content:
        return Content(LINE_BREAK)

    # Inline elements

    def bold(self, content: Content) -> Content:
        return Content(BOLD_DELIMITER).append(content.escape([BOLD_DELIMITER]), BOLD_DELIMITER)

    def italic(self, content: Content) -> Content:
        return Content(ITALIC_DELIMITER).append(content.escape(ITALIC_DELIMITER), ITALIC_DELIMITER)

    def inline_code(self, content: Content) -> Content:
        # Inline code cannot hold newlines; fall back to a fenced block.
        if content.is_multi_line():
            return self.code_renderer.code_block(content)
        return self.code_renderer.inline_code(content)

    def link(self, text: Content, url: Content) -> Content:
        label = text if self._is_inline_markdown(text) else text.escape("[]")
        return Content("[").append(label, "](", url.escape(")"), ")")

    def image(
        self,
        url: Content,
        alt_text: Content,
        width: str | None = None,
        align: str | None = None,
    ) -> Content:
        if width or align:
            return self._html_image(url, alt_text, width, align)
        return Content("![").append(alt_text.escape("[]"), "](", url.escape(")"), ")")

    def badge(
        self,
        label: Content,
        url: Content,
        width: str | None = None,
        align: str | None = None,
    ) -> Content:
        if width or align:
            return self._html_image(url, label, width, align)
        return Content("![").append(
            label.escape("[]" + ITALIC_DELIMITER + ")"),
            "](",
            url.escape(ITALIC_DELIMITER + ")"),
            ")",
        )

    # Section markers

    def section(self, section: ContentLike, content: Content) -> Content:
        """Wrap content in its section marker pair."""
        start = self.section_start(section)
        end = self.section_end(section)
        if content.trim().is_empty():
            return start.append(self.line_break(), end, self.line_break())

        return start.append(
            self.line_break(),
            self.line_break(),
            content.trim(),
            self.line_break(),
            self.line_break(),
            end,
            self.line_break(),
        )

    def section_start(self, section: ContentLike) -> Content:
        return Content("<!-- ").append(self._section_token(section), ":start -->")

    def section_end(self, section: ContentLike) -> Content:
        return Content("<!-- ").append(self._section_token(section), ":end -->")

    # Helpers

    @staticmethod
    def _section_token(section: ContentLike) -> Content:
        value = section.value if isinstance(section, Enum) else section
        return Content.of(value).escape(["<!--", "-->"])

    @staticmethod
    def _is_inline_markdown(content: Content) -> bool:
        """Check whether content is a single inline link or image, e.g. a badge."""
        if content.is_empty() or content.size() > REGEX_SAFE_MAX_BYTES:
            return False
        return content.test(_INLINE_MARKDOWN)

    @staticmethod
    def _html_image(url: Content, alt_text: Content, width: str | None, align: str | None) -> Content:
        result = Content('<img src="').append(url, '"')
        if width:
            result = result.append(f' width="{width}"')
        if align:
            result = result.append(f' align="{align}"')
        return result.append(' alt="', alt_text.escape("[]"), '" />')

    def _indent_list_continuations(self, content: Content) -> Content:
        """Indent non-indented lines that continue a list item by two spaces."""
        if content.is_empty():
            return content

        lines = []
        in_list = False
        in_fence = False
        for line in content.split_lines():
            trimmed = line.trim_start()
            if self.scanner.is_fence_line(trimmed):
                in_fence = not in_fence
            elif in_fence:
                pass
            elif _is_list_item(trimmed):
                in_list = True
            elif in_list and line.trim().is_empty():
                in_list = False
            elif in_list and not (line.starts_with(" ") or line.starts_with("\t")):
                line = Content("  ").append(line)
            lines.append(line)

        return Content(LINE_BREAK).join(lines)


class FormatterService:
    """Select the formatter able to write a destination file."""

    def __init__(self, formatters: Sequence[MarkdownFormatter]) -> None:
        self.formatters = list(formatters)

    def for_destination(self, destination: str | Path) -> MarkdownFormatter:
        for formatter in self.formatters:
            if formatter.supports(destination):
                return formatter
        raise UnsupportedDestinationError(str(destination))
