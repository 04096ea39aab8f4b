"""Section rendering and document generation."""

from cidoc.generator.protocols import RenderContext, SectionRenderer
from cidoc.generator.service import DocumentGenerator, GenerationResult

__all__ = [
    "DocumentGenerator",
    "GenerationResult",
    "RenderContext",
    "SectionRenderer",
]
