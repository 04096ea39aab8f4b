"""Protocols for section rendering.

Each documentation section is produced by a small renderer object that
receives a `RenderContext` and returns Markdown content. Renderers are
plain classes implementing `SectionRenderer`; shared behaviour lives in
module-level functions rather than base classes.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from cidoc.document.models import SectionIdentifier
from cidoc.markdown.content import Content
from cidoc.markdown.formatter import MarkdownFormatter


@dataclass(frozen=True)
class RenderContext:
    """Everything a section renderer may read.

    Attributes:
        manifest: Parsed CI manifest (platform specific model)
        formatter: Formatter for the destination document
        destination: Path of the document being generated
    """

    manifest: Any
    formatter: MarkdownFormatter
    destination: Path


@runtime_checkable
class SectionRenderer(Protocol):
    """Protocol for objects rendering one documentation section."""

    section: SectionIdentifier

    def render(self, context: RenderContext) -> Content:
        """Render the section body; empty content means the section is omitted."""
        ...
