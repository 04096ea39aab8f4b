"""Markdown table layout with multi-line and code-bearing cells."""

from __future__ import annotations

from collections.abc import Sequence

from cidoc.markdown.code import CodeRenderer
from cidoc.markdown.content import Content
from cidoc.markdown.fences import FenceScanner

MIN_SEPARATOR_WIDTH = 3


class TableRenderer:
    """Render headers and rows as an aligned, pipe-delimited Markdown table.

    Cells are split into display lines. Plain text splits on LF; a fenced
    block or a multi-line inline code span stays on one display line and is
    rendered as an HTML `<pre>` element. Column widths are measured on the
    rendered, pipe-escaped lines so every `|` lines up.

    Example:
        renderer = TableRenderer(scanner, code)
        renderer.table([Content("A"), Content("B")], [[Content("1"), Content("22")]])
        # | A | B  |
        # | --- | --- |
        # | 1 | 22 |
    """

    def __init__(self, scanner: FenceScanner, code: CodeRenderer) -> None:
        self.scanner = scanner
        self.code = code

    def table(self, headers: Sequence[Content], rows: Sequence[Sequence[Content]]) -> Content:
        if not headers and not rows:
            return Content.empty()

        num_cols = max([len(headers), *(len(row) for row in rows)])
        if num_cols == 0:
            return Content.empty()
        header_cells = [self._cell_lines(self._cell(headers, c)) for c in range(num_cols)]
        row_cells = [[self._cell_lines(self._cell(row, c)) for c in range(num_cols)] for row in rows]

        widths = [0] * num_cols
        for cells in [header_cells, *row_cells]:
            for c, lines in enumerate(cells):
                for line in lines:
                    widths[c] = max(widths[c], self._normalize(line).char_length())

        output = [self._render_line(header_cells, 0, widths)]
        separator = " | ".join("-" * max(MIN_SEPARATOR_WIDTH, width) for width in widths)
        output.append(Content(f"| {separator} |\n"))

        max_header_lines = max(len(lines) for lines in header_cells)
        for index in range(1, max_header_lines):
            output.append(self._render_line(header_cells, index, widths))

        for cells in row_cells:
            for index in range(max(len(lines) for lines in cells)):
                output.append(self._render_line(cells, index, widths))

        return Content.empty().append(*output)

    @staticmethod
    def _cell(cells: Sequence[Content], column: int) -> Content:
        return cells[column] if column < len(cells) else Content.empty()

    @staticmethod
    def _normalize(line: Content) -> Content:
        return line.trim().escape("|")

    def _render_line(self, cells: list[list[Content]], index: int, widths: list[int]) -> Content:
        padded = []
        for lines, width in zip(cells, widths):
            line = lines[index] if index < len(lines) else Content.empty()
            padded.append(self._normalize(line).pad_end(width))
        return Content("| ").append(Content(" | ").join(padded), " |\n")

    def _cell_lines(self, cell: Content) -> list[Content]:
        """Split a cell into rendered display lines."""
        cell = cell.trim()
        if cell.is_empty():
            return [Content.empty()]

        lines = []
        for line in self._split_outside_code(cell):
            if line.is_multi_line():
                lines.append(self._render_code_line(line))
            else:
                lines.append(line.trim())
        return lines

    def _split_outside_code(self, cell: Content) -> list[Content]:
        """Split on LF, except inside fenced blocks and inline code spans."""
        fences = self.scanner.find_fences(cell)
        spans = self.scanner.find_inline_code(cell, fences)
        protected = sorted(
            [(fence.start, fence.line_end) for fence in fences]
            + [(span.start, span.end) for span in spans]
        )

        data = cell.to_bytes()
        lines = []
        line_start = 0
        position = 0
        for start, end in [*protected, (len(data), len(data))]:
            newline = data.find(b"\n", position, start)
            while newline != -1:
                lines.append(cell.slice_bytes(line_start, newline))
                line_start = newline + 1
                newline = data.find(b"\n", line_start, start)
            position = end
        lines.append(cell.slice_bytes(line_start))
        return lines

    def _render_code_line(self, line: Content) -> Content:
        """Render a display line holding multi-line code as text plus `<pre>` blocks."""
        fences = self.scanner.find_fences(line)
        if fences:
            segments = [
                (fence.start, fence.end, line.slice_bytes(fence.content_start, fence.content_end), fence.language)
                for fence in fences
            ]
        else:
            segments = [
                (span.start, span.end, line.slice_bytes(span.content_start, span.content_end), None)
                for span in self.scanner.find_inline_code(line)
            ]

        result = Content.empty()
        last = 0
        for start, end, code, language in segments:
            result = result.append(line.slice_bytes(last, start).trim().html_escape())
            result = result.append(self.code.html_code_block(code, language))
            last = end
        return result.append(line.slice_bytes(last).trim().html_escape())
