"""Generate command implementation - render documentation for a manifest."""

import logging
from pathlib import Path

from cidoc.config import load_config, merge_cli_overrides
from cidoc.container import create_container
from cidoc.display import print_generation_result
from cidoc.document.models import SectionIdentifier
from cidoc.generator.service import GenerationResult
from cidoc.github_actions.parser import default_destination, parse_manifest
from cidoc.github_actions.sections import default_renderers
from cidoc.markdown.formatter import FormatterOptions, LinkFormat

logger = logging.getLogger(__name__)


def generate_command(
    source: Path,
    output: Path | None = None,
    dry_run: bool = False,
    include: list[SectionIdentifier] | None = None,
    exclude: list[SectionIdentifier] | None = None,
    link_format: LinkFormat | None = None,
    ref: str | None = None,
    sha: str | None = None,
    project_root: Path | None = None,
) -> GenerationResult:
    """Generate or update the documentation of a manifest.

    This function contains the business logic for the generate command.
    The CLI layer (cli.py) handles argument parsing and delegates here.

    Args:
        source: Path to action.yml or a workflow file
        output: Destination document (defaults to config, then next to the manifest)
        dry_run: Only show the diff, never write
        include: Only generate these sections
        exclude: Never generate these sections
        link_format: How bare URLs are rewritten
        ref: Tag or branch pinned in usage examples
        sha: Commit sha pinned in usage examples
        project_root: Directory holding .cidoc.yaml (defaults to cwd)

    Raises:
        CidocError: On invalid configuration, manifest or destination
    """
    config = load_config(project_root)
    config = merge_cli_overrides(
        config,
        output=output,
        link_format=link_format,
        include=include,
        exclude=exclude,
        ref=ref,
        sha=sha,
    )

    manifest = parse_manifest(source, repository=config.repository)
    destination = config.output or default_destination(source)

    container = create_container(
        FormatterOptions(link_format=config.link_format),
        renderers=default_renderers(repository=config.repository, version=config.version),
    )
    # Validates the destination extension before anything is read or written.
    container.formatters.for_destination(destination)

    logger.debug("Generating %s from %s", destination, source)
    result = container.generator.generate(
        manifest,
        destination,
        dry_run=dry_run,
        include=config.sections.include,
        exclude=config.sections.exclude,
    )
    print_generation_result(result, dry_run=dry_run)
    return result
