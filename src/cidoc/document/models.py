"""Data model for generated documents: section identifiers, blocks and merge results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from cidoc.exceptions import UnknownSectionError
from cidoc.markdown.content import Content


class SectionIdentifier(str, Enum):
    """Stable token naming one region of a generated document.

    Declaration order is the default canonical section order.
    """

    HEADER = "header"
    BADGES = "badges"
    OVERVIEW = "overview"
    CONTENTS = "contents"
    QUICKSTART = "quickstart"
    USAGE = "usage"
    INPUTS = "inputs"
    OUTPUTS = "outputs"
    SECRETS = "secrets"
    EXAMPLES = "examples"
    CONTRIBUTING = "contributing"
    SECURITY = "security"
    LICENSE = "license"
    GENERATED = "generated"


def parse_section_identifier(value: str) -> SectionIdentifier:
    """Convert a user-supplied token into a SectionIdentifier."""
    try:
        return SectionIdentifier(value.strip().lower())
    except ValueError:
        raise UnknownSectionError(value) from None


class BlockKind(str, Enum):
    LITERAL = "literal"
    MANAGED = "managed"


@dataclass(frozen=True)
class Block:
    """A run of document bytes.

    Literal blocks are preserved verbatim. Managed blocks hold a whole
    marker-delimited section, markers included.
    """

    kind: BlockKind
    content: Content
    section: SectionIdentifier | None = None
    terminated: bool = True

    @classmethod
    def literal(cls, content: Content) -> Block:
        return cls(kind=BlockKind.LITERAL, content=content)

    @classmethod
    def managed(cls, section: SectionIdentifier, content: Content, terminated: bool = True) -> Block:
        return cls(kind=BlockKind.MANAGED, content=content, section=section, terminated=terminated)

    @property
    def is_managed(self) -> bool:
        return self.kind == BlockKind.MANAGED


@dataclass(frozen=True)
class Document:
    """An existing document parsed into literal and managed blocks."""

    blocks: tuple[Block, ...] = ()
    warnings: tuple[str, ...] = ()

    @property
    def sections(self) -> list[SectionIdentifier]:
        """Managed section identifiers in document order."""
        return [block.section for block in self.blocks if block.section is not None]

    def to_content(self) -> Content:
        return Content.empty().append(*(block.content for block in self.blocks))


@dataclass(frozen=True)
class MergeResult:
    """Outcome of merging rendered sections into a document."""

    content: Content
    inserted: tuple[SectionIdentifier, ...] = ()
    replaced: tuple[SectionIdentifier, ...] = ()
    removed: tuple[SectionIdentifier, ...] = ()
    warnings: tuple[str, ...] = field(default_factory=tuple)
