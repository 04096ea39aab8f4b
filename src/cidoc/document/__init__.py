"""Generated document model, section merge and file I/O."""

from cidoc.document.diff import unified_diff
from cidoc.document.io import (
    FileReader,
    FileWriter,
    InMemoryResources,
    ResourceReader,
    ResourceWriter,
)
from cidoc.document.merge import SectionMergeEngine
from cidoc.document.models import (
    Block,
    BlockKind,
    Document,
    MergeResult,
    SectionIdentifier,
    parse_section_identifier,
)

__all__ = [
    # Models
    "Block",
    "BlockKind",
    "Document",
    "MergeResult",
    "SectionIdentifier",
    "parse_section_identifier",
    # Merge
    "SectionMergeEngine",
    # I/O
    "FileReader",
    "FileWriter",
    "InMemoryResources",
    "ResourceReader",
    "ResourceWriter",
    "unified_diff",
]
