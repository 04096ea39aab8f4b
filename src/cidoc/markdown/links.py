"""Rewriting of bare URLs into Markdown autolinks or full links."""

from __future__ import annotations

import re

from cidoc.markdown.content import REGEX_SAFE_MAX_BYTES, Content
from cidoc.markdown.fences import FenceScanner

# Existing links, images and autolinks are matched first so bare URLs
# inside them are left untouched. A link label may hold one nested image
# or link, as in a badge wrapped in a link. Quantifiers are bounded.
_URL_PATTERN = re.compile(
    r"(?P<link>!?\[(?:[^\[\]\n]|!?\[[^\]\n]{0,500}\]\([^)\n]{0,1000}\)){0,500}\]\([^)\n]{0,1000}\))"
    r"|(?P<autolink><https?://[^>\s]{1,1000}>)"
    r"|(?P<url>https?://[^\s)\]>]{1,1000})"
)
_TRAILING_PUNCTUATION = ".,;!?"


class LinkRenderer:
    """Turn bare `http(s)://` URLs in prose into links.

    URLs inside fenced blocks, inline code, existing Markdown links or
    images, and autolinks are preserved.
    """

    def __init__(self, scanner: FenceScanner) -> None:
        self.scanner = scanner

    def transform_urls(self, content: Content, full_link: bool = False) -> Content:
        if content.is_empty():
            return content

        parts = []
        last = 0
        for code in self.scanner.find_code_ranges(content):
            parts.append(self._transform_text(content.slice_bytes(last, code.start), full_link))
            parts.append(content.slice_bytes(code.start, code.end))
            last = code.end
        parts.append(self._transform_text(content.slice_bytes(last), full_link))
        return Content.empty().append(*parts)

    def link_url(self, url: str, full_link: bool = False) -> str:
        """Format a single URL, keeping trailing sentence punctuation outside the link."""
        clean = url.rstrip(_TRAILING_PUNCTUATION)
        trailing = url[len(clean) :]
        if not clean:
            return url
        if full_link:
            return f"[{clean}]({clean}){trailing}"
        return f"<{clean}>{trailing}"

    def _transform_text(self, text: Content, full_link: bool) -> Content:
        if text.is_empty() or not text.includes("://"):
            return text

        def replace(match: re.Match[str]) -> str:
            url = match.group("url")
            if url is None:
                return match.group(0)
            return self.link_url(url, full_link)

        # URLs never span lines, so each line is matched on its own. Lines too
        # large for the regex guard are kept as written.
        lines = text.to_bytes().split(b"\n")
        return Content(b"\n").join(
            Content(line).replace(_URL_PATTERN, replace) if self._rewritable(line) else line
            for line in lines
        )

    @staticmethod
    def _rewritable(line: bytes) -> bool:
        return b"://" in line and len(line) <= REGEX_SAFE_MAX_BYTES
