"""Sections command implementation - list section identifiers."""

from cidoc.display import print_sections
from cidoc.document.models import SectionIdentifier
from cidoc.github_actions.sections import default_renderers


def sections_command() -> None:
    """List every section identifier in canonical order.

    Sections produced by the built-in renderers are flagged as generated;
    the others may still be maintained by hand between their markers.
    """
    supported = {renderer.section for renderer in default_renderers()}
    print_sections(list(SectionIdentifier), supported)
