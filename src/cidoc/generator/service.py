"""Document generation service.

Renders every registered section for a manifest, merges the result into
the existing destination document and writes it back (or only diffs it
on a dry run).
"""

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from cidoc.document.diff import unified_diff
from cidoc.document.io import ResourceReader, ResourceWriter
from cidoc.document.merge import SectionMergeEngine
from cidoc.document.models import SectionIdentifier
from cidoc.exceptions import SectionRenderError
from cidoc.generator.protocols import RenderContext, SectionRenderer
from cidoc.markdown.content import Content
from cidoc.markdown.formatter import MarkdownFormatter

logger = logging.getLogger(__name__)


class GenerationResult(BaseModel):
    """Outcome of generating one document.

    Frozen because results describe a finished generation.
    """

    model_config = ConfigDict(frozen=True)

    destination: Path
    changed: bool
    written: bool = False
    diff: str = ""
    inserted: list[SectionIdentifier] = Field(default_factory=list)
    replaced: list[SectionIdentifier] = Field(default_factory=list)
    removed: list[SectionIdentifier] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class DocumentGenerator:
    """Generate documentation for a manifest.

    All collaborators are injected; see `cidoc.container` for the default
    wiring.

    Example:
        generator = DocumentGenerator(formatter, renderers, FileReader(), FileWriter())
        result = generator.generate(manifest, Path("README.md"))
    """

    def __init__(
        self,
        formatter: MarkdownFormatter,
        renderers: Sequence[SectionRenderer],
        reader: ResourceReader,
        writer: ResourceWriter,
        merge_engine: SectionMergeEngine | None = None,
    ) -> None:
        self.formatter = formatter
        self.renderers = list(renderers)
        self.reader = reader
        self.writer = writer
        self.merge_engine = merge_engine or SectionMergeEngine(formatter)

    @property
    def sections(self) -> list[SectionIdentifier]:
        """Sections this generator renders, in canonical order."""
        return [renderer.section for renderer in self.renderers]

    def render_sections(
        self,
        manifest: Any,
        destination: Path,
        include: Iterable[SectionIdentifier] | None = None,
        exclude: Iterable[SectionIdentifier] | None = None,
    ) -> dict[SectionIdentifier, Content]:
        """Render the selected sections in registration order.

        Args:
            manifest: Parsed manifest passed to each renderer
            destination: Path of the document being generated
            include: Only render these sections (all when None)
            exclude: Never render these sections

        Returns:
            Mapping of section to rendered body (possibly empty)

        Raises:
            SectionRenderError: If a renderer fails on the manifest data
        """
        included = set(include) if include is not None else None
        excluded = set(exclude or ())
        context = RenderContext(manifest=manifest, formatter=self.formatter, destination=destination)

        rendered: dict[SectionIdentifier, Content] = {}
        for renderer in self.renderers:
            section = renderer.section
            if (included is not None and section not in included) or section in excluded:
                logger.debug("Skipping section %s", section.value)
                continue

            try:
                content = renderer.render(context)
            except (KeyError, TypeError, ValueError) as e:
                raise SectionRenderError(section.value, str(e)) from e

            logger.debug("Rendered section %s (%d bytes)", section.value, content.size())
            rendered[section] = content
        return rendered

    def generate(
        self,
        manifest: Any,
        destination: Path,
        dry_run: bool = False,
        include: Iterable[SectionIdentifier] | None = None,
        exclude: Iterable[SectionIdentifier] | None = None,
    ) -> GenerationResult:
        """Render, merge and write one destination document.

        Unchanged output is never rewritten. On a dry run nothing is
        written and the result carries a unified diff instead.
        """
        destination = Path(destination)
        sections = self.render_sections(manifest, destination, include, exclude)
        existing = self.reader.read_resource(destination)

        merged = self.merge_engine.merge(existing, sections, order=self.sections)
        for warning in merged.warnings:
            logger.warning("%s: %s", destination, warning)

        output = merged.content.to_bytes()
        changed = existing is None or existing != output

        diff = ""
        written = False
        if dry_run:
            diff = unified_diff(destination, existing, output)
        elif changed:
            self.writer.write_resource(destination, output)
            written = True
            logger.info("Updated %s", destination)
        else:
            logger.info("%s is up to date", destination)

        return GenerationResult(
            destination=destination,
            changed=changed,
            written=written,
            diff=diff,
            inserted=list(merged.inserted),
            replaced=list(merged.replaced),
            removed=list(merged.removed),
            warnings=list(merged.warnings),
        )
