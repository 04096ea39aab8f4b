"""Idempotent merge of rendered sections into an existing document.

The existing bytes are scanned line by line. A line equal to a section
start marker opens a managed block that runs until the matching end
marker; everything else is literal and is written back unchanged.
Re-running a merge with the same sections is a no-op.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from cidoc.document.models import Block, Document, MergeResult, SectionIdentifier
from cidoc.markdown.content import Content, ContentLike
from cidoc.markdown.formatter import MarkdownFormatter

_LINE_PADDING = b" \t\r\n"


def _lines(data: bytes) -> list[tuple[int, int]]:
    """(start, end) byte offsets of each line, end including its LF."""
    lines = []
    start = 0
    size = len(data)
    while start < size:
        newline = data.find(b"\n", start)
        end = size if newline == -1 else newline + 1
        lines.append((start, end))
        start = end
    return lines


class SectionMergeEngine:
    """Parse documents into blocks and splice freshly rendered sections in.

    Markers are only recognized for known `SectionIdentifier` tokens and
    must sit alone on their line. Unknown markers stay literal text.
    """

    def __init__(self, formatter: MarkdownFormatter) -> None:
        self.formatter = formatter
        self._starts = {
            self.formatter.section_start(section).to_bytes(): section for section in SectionIdentifier
        }
        self._ends = {
            self.formatter.section_end(section).to_bytes(): section for section in SectionIdentifier
        }

    def parse(self, existing: ContentLike | None) -> Document:
        """Split existing bytes into literal and managed blocks.

        An unterminated section runs to the end of input and is reported
        in `Document.warnings`.
        """
        data = Content.of(existing if existing is not None else b"").to_bytes()
        blocks: list[Block] = []
        warnings: list[str] = []

        literal_start = 0
        current: SectionIdentifier | None = None
        section_start = 0

        for start, end in _lines(data):
            marker = data[start:end].strip(_LINE_PADDING)
            if current is None:
                opened = self._starts.get(marker)
                if opened is None:
                    continue
                if start > literal_start:
                    blocks.append(Block.literal(Content(data[literal_start:start])))
                current = opened
                section_start = start
            elif self._ends.get(marker) == current:
                blocks.append(Block.managed(current, Content(data[section_start:end])))
                current = None
                literal_start = end

        if current is not None:
            blocks.append(Block.managed(current, Content(data[section_start:]), terminated=False))
            warnings.append(
                f"Section '{current.value}' has no end marker; treating end of document as its end"
            )
        elif literal_start < len(data):
            blocks.append(Block.literal(Content(data[literal_start:])))

        return Document(blocks=tuple(blocks), warnings=tuple(warnings))

    def merge(
        self,
        existing: ContentLike | None,
        sections: Mapping[SectionIdentifier, Content],
        order: Sequence[SectionIdentifier] | None = None,
    ) -> MergeResult:
        """Merge rendered sections into an existing document.

        Args:
            existing: Current document bytes, or None when the file is absent
            sections: Rendered content per section; empty content removes the section
            order: Canonical section order, defaults to the order of `sections`

        Returns:
            MergeResult with the final bytes and what changed
        """
        document = self.parse(existing)
        canonical = [*(order or []), *(s for s in sections if s not in (order or []))]
        rank = {section: index for index, section in enumerate(canonical)}

        blocks: list[Block] = []
        present: set[SectionIdentifier] = set()
        replaced: list[SectionIdentifier] = []
        removed: list[SectionIdentifier] = []

        for block in document.blocks:
            if block.section is None or block.section not in sections:
                blocks.append(block)
                continue

            present.add(block.section)
            rendered = sections[block.section]
            if rendered.trim().is_empty():
                removed.append(block.section)
                continue

            blocks.append(self._managed(block.section, rendered))
            replaced.append(block.section)

        inserted: list[SectionIdentifier] = []
        for section in canonical:
            if section not in sections or section in present:
                continue
            rendered = sections[section]
            if rendered.trim().is_empty():
                continue

            position = self._insertion_point(blocks, rank[section], rank)
            if position == len(blocks) and blocks and not blocks[-1].content.ends_with("\n"):
                blocks.append(Block.literal(Content("\n")))
                position += 1
            blocks.insert(position, self._managed(section, rendered))
            inserted.append(section)

        merged = Document(blocks=tuple(blocks), warnings=document.warnings)
        return MergeResult(
            content=merged.to_content(),
            inserted=tuple(inserted),
            replaced=tuple(replaced),
            removed=tuple(removed),
            warnings=document.warnings,
        )

    def _managed(self, section: SectionIdentifier, rendered: Content) -> Block:
        return Block.managed(section, self.formatter.section(section, rendered))

    @staticmethod
    def _insertion_point(
        blocks: list[Block], own_rank: int, rank: Mapping[SectionIdentifier, int]
    ) -> int:
        """Index of the first managed block that canonically follows `own_rank`."""
        for index, block in enumerate(blocks):
            if block.section is not None and rank.get(block.section, -1) > own_rank:
                return index
        return len(blocks)
