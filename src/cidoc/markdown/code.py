"""Code emission: fenced blocks, inline code and the HTML `<pre>` fallback."""

from __future__ import annotations

from cidoc.markdown.content import NEW_LINE, Content
from cidoc.markdown.fences import FenceScanner

TICK = "`"
ITALIC_DELIMITER = "*"
HTML_NEWLINE_ENTITY = "&#13;"
DEFAULT_LANGUAGE = Content("text")

_PRE_OPEN = "<!-- textlint-disable --><pre"
_PRE_CLOSE = "</pre><!-- textlint-enable -->"


def _strip_blank_lines(content: Content) -> Content:
    """Drop leading blank lines and trailing whitespace, keeping indentation."""
    content = content.trim_end()
    while True:
        line_end = content.search(NEW_LINE)
        if line_end == -1 or not content.slice_bytes(0, line_end).trim().is_empty():
            return content
        content = content.slice_bytes(line_end + 1)


class CodeRenderer:
    """Render code as Markdown fences, inline spans or HTML `<pre>` blocks."""

    def __init__(self, scanner: FenceScanner) -> None:
        self.scanner = scanner

    def code_block(self, content: Content, language: Content | None = None) -> Content:
        """Wrap content in a backtick fence that its own backtick runs cannot close."""
        resolved = language if language is not None and not language.is_empty() else DEFAULT_LANGUAGE
        body = _strip_blank_lines(content)
        fence = Content.empty().pad_end(self.scanner.fence_length_for(body), TICK)
        return fence.append(resolved, "\n", body, "\n", fence, "\n")

    def inline_code(self, content: Content) -> Content:
        escaped = content.escape(TICK + ITALIC_DELIMITER).html_escape()
        return Content(TICK).append(escaped, TICK)

    def html_code_block(self, content: Content, language: Content | None = None) -> Content:
        """Render code as a single-line `<pre>` element.

        Newlines become `&#13;` entities so the block fits on one physical
        line (a table row). Leading indentation collapses to one space.
        """
        resolved = language if language is not None and not language.is_empty() else DEFAULT_LANGUAGE

        lines = []
        for line in content.split_lines():
            stripped = line.trim_start()
            if stripped.is_empty():
                lines.append(Content.empty())
            elif stripped.size() != line.size():
                lines.append(Content(" ").append(stripped))
            else:
                lines.append(line)

        body = Content(HTML_NEWLINE_ENTITY).join(
            line.escape(TICK + ITALIC_DELIMITER).html_escape() for line in lines
        )
        return Content(_PRE_OPEN).append(
            ' lang="', resolved.html_escape(), '">', body, _PRE_CLOSE
        )
