"""Composition root for cidoc components.

Builds the formatter once from its collaborators and passes it down
through constructors. There is no global registry: every call returns a
new, independent object graph.

Usage:
    # Default usage (filesystem)
    container = create_container()
    result = container.generator.generate(manifest, Path("README.md"))

    # Testing with in-memory files
    resources = InMemoryResources()
    container = create_container(reader=resources, writer=resources)
"""

from dataclasses import dataclass

from cidoc.document.io import FileReader, FileWriter, ResourceReader, ResourceWriter
from cidoc.document.merge import SectionMergeEngine
from cidoc.generator.protocols import SectionRenderer
from cidoc.generator.service import DocumentGenerator
from cidoc.github_actions.sections import default_renderers
from cidoc.markdown.code import CodeRenderer
from cidoc.markdown.fences import FenceScanner
from cidoc.markdown.formatter import FormatterOptions, FormatterService, MarkdownFormatter
from cidoc.markdown.links import LinkRenderer
from cidoc.markdown.table import TableRenderer


@dataclass(frozen=True)
class Container:
    """Wired cidoc services."""

    formatter: MarkdownFormatter
    formatters: FormatterService
    merge_engine: SectionMergeEngine
    generator: DocumentGenerator


def create_formatter(options: FormatterOptions | None = None) -> MarkdownFormatter:
    """Build a Markdown formatter with its scanner and renderers."""
    scanner = FenceScanner()
    code = CodeRenderer(scanner)
    return MarkdownFormatter(
        scanner=scanner,
        code=code,
        table=TableRenderer(scanner, code),
        links=LinkRenderer(scanner),
        options=options,
    )


def create_container(
    options: FormatterOptions | None = None,
    reader: ResourceReader | None = None,
    writer: ResourceWriter | None = None,
    renderers: list[SectionRenderer] | None = None,
) -> Container:
    """Create the default object graph.

    Args:
        options: Formatter options (link format)
        reader: Document reader, defaults to the filesystem
        writer: Document writer, defaults to the filesystem
        renderers: Section renderers, defaults to the GitHub Actions ones

    Returns:
        Container holding the wired services
    """
    formatter = create_formatter(options)
    merge_engine = SectionMergeEngine(formatter)
    generator = DocumentGenerator(
        formatter=formatter,
        renderers=renderers if renderers is not None else default_renderers(),
        reader=reader or FileReader(),
        writer=writer or FileWriter(),
        merge_engine=merge_engine,
    )
    return Container(
        formatter=formatter,
        formatters=FormatterService([formatter]),
        merge_engine=merge_engine,
        generator=generator,
    )
