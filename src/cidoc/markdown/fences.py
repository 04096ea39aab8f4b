"""Linear scanner for fenced code blocks and inline code spans.

Detection walks the bytes of a `Content` value instead of running one large
regular expression, so adversarial input (deeply nested or unbalanced
backtick runs) cannot trigger catastrophic backtracking.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from cidoc.markdown.content import NEW_LINE, Content

BACKTICK = 0x60
TILDE = 0x7E
FENCE_MARKERS = (BACKTICK, TILDE)
MIN_FENCE_LENGTH = 3

_LINE_PADDING = b" \t\r"


class ByteRange(Protocol):
    start: int
    end: int


@dataclass(frozen=True)
class Fence:
    """A fenced code block found in a content value.

    Offsets are byte offsets into the scanned content. `end` is the block
    end: just past the closing fence line, including its LF when present.
    """

    marker: str
    length: int
    language: Content
    start: int
    content_start: int
    content_end: int
    end: int
    closing_has_newline: bool = True

    @property
    def line_end(self) -> int:
        """End of the closing fence line, excluding its LF."""
        return self.end - 1 if self.closing_has_newline else self.end


@dataclass(frozen=True)
class InlineCodeSpan:
    """A run of backticks matched with a closing run of the same length."""

    start: int
    end: int
    delimiter_length: int

    @property
    def content_start(self) -> int:
        return self.start + self.delimiter_length

    @property
    def content_end(self) -> int:
        return self.end - self.delimiter_length


def _run_length(data: bytes, position: int, marker: int) -> int:
    end = position
    size = len(data)
    while end < size and data[end] == marker:
        end += 1
    return end - position


def _containing(ranges: Sequence[ByteRange], position: int) -> ByteRange | None:
    for candidate in ranges:
        if candidate.start <= position < candidate.end:
            return candidate
    return None


class FenceScanner:
    """Find fenced blocks and inline code spans in content.

    Fences open with a run of at least three backticks or tildes at the
    start of a line and close with a run of the same character, at least
    as long, alone on its line. Unterminated fences and unmatched inline
    delimiters are plain text. Blocks never nest.
    """

    def find_fences(self, content: Content) -> list[Fence]:
        """Return every terminated fenced block in document order."""
        fences: list[Fence] = []
        data = content.to_bytes()
        size = len(data)
        position = 0

        while position < size:
            start = self._next_marker(data, position)
            if start == -1:
                break

            if start > 0 and data[start - 1] != NEW_LINE:
                position = start + 1
                continue

            marker = data[start]
            length = _run_length(data, start, marker)
            if length < MIN_FENCE_LENGTH:
                position = start + length
                continue

            info_end = data.find(b"\n", start + length)
            if info_end == -1:
                break

            fence = self._close(data, marker, start, length, info_end)
            if fence is None:
                position = start + length
                continue

            fences.append(fence)
            position = fence.end

        return fences

    def find_inline_code(
        self, content: Content, exclude: Sequence[ByteRange] = ()
    ) -> list[InlineCodeSpan]:
        """Return inline code spans outside the `exclude` ranges (usually fences)."""
        spans: list[InlineCodeSpan] = []
        data = content.to_bytes()
        size = len(data)
        position = 0

        while position < size:
            start = data.find(b"`", position)
            if start == -1:
                break

            skipped = _containing(exclude, start)
            if skipped is not None:
                position = skipped.end
                continue

            delimiter_length = _run_length(data, start, BACKTICK)
            close = self._find_closing_run(data, start + delimiter_length, delimiter_length, exclude)
            if close == -1:
                position = start + delimiter_length
                continue

            end = close + delimiter_length
            spans.append(InlineCodeSpan(start=start, end=end, delimiter_length=delimiter_length))
            position = end

        return spans

    def find_code_ranges(self, content: Content) -> list[Fence | InlineCodeSpan]:
        """Fences and inline spans together, ordered by start offset."""
        fences = self.find_fences(content)
        spans = self.find_inline_code(content, fences)
        ranges: list[Fence | InlineCodeSpan] = [*fences, *spans]
        return sorted(ranges, key=lambda item: item.start)

    def fence_length_for(self, content: Content, marker: str = "`") -> int:
        """Smallest fence length (>= 3) longer than any run of `marker` in content.

        A fence chosen this way cannot be closed early by the content it wraps.
        """
        data = content.to_bytes()
        needle = marker.encode("utf-8")[0]
        longest = 0
        position = data.find(needle)
        while position != -1:
            run = _run_length(data, position, needle)
            longest = max(longest, run)
            position = data.find(needle, position + run)
        return max(MIN_FENCE_LENGTH, longest + 1)

    def is_fence_line(self, line: Content) -> bool:
        """Check whether a (left-trimmed) line opens or closes a fence."""
        data = line.to_bytes()
        if not data or data[0] not in FENCE_MARKERS:
            return False
        return _run_length(data, 0, data[0]) >= MIN_FENCE_LENGTH

    @staticmethod
    def _next_marker(data: bytes, position: int) -> int:
        candidates = [
            found for found in (data.find(b"`", position), data.find(b"~", position)) if found != -1
        ]
        return min(candidates) if candidates else -1

    @staticmethod
    def _close(data: bytes, marker: int, start: int, length: int, info_end: int) -> Fence | None:
        size = len(data)
        content_start = info_end + 1
        line_start = content_start

        while line_start < size:
            line_end = data.find(b"\n", line_start)
            if line_end == -1:
                line_end = size

            run = _run_length(data, line_start, marker)
            rest = data[line_start + run : line_end]
            if run >= length and not rest.strip(_LINE_PADDING):
                has_newline = line_end < size
                return Fence(
                    marker=chr(marker),
                    length=length,
                    language=Content(data[start + length : info_end].strip(_LINE_PADDING)),
                    start=start,
                    content_start=content_start,
                    content_end=max(content_start, line_start - 1),
                    end=line_end + 1 if has_newline else line_end,
                    closing_has_newline=has_newline,
                )

            line_start = line_end + 1

        return None

    @staticmethod
    def _find_closing_run(
        data: bytes, position: int, delimiter_length: int, exclude: Sequence[ByteRange]
    ) -> int:
        size = len(data)
        while position < size:
            candidate = data.find(b"`", position)
            if candidate == -1:
                return -1

            skipped = _containing(exclude, candidate)
            if skipped is not None:
                position = skipped.end
                continue

            run = _run_length(data, candidate, BACKTICK)
            if run == delimiter_length:
                return candidate
            position = candidate + run
        return -1
