"""GitHub Actions support: manifest parsing and section renderers."""

from cidoc.github_actions.models import (
    ActionInput,
    ActionOutput,
    GitHubAction,
    GitHubActionsManifest,
    GitHubWorkflow,
    WorkflowSecret,
    WorkflowTrigger,
)
from cidoc.github_actions.parser import default_destination, parse_manifest, uses_name
from cidoc.github_actions.sections import (
    HeaderSection,
    InputsSection,
    OutputsSection,
    OverviewSection,
    SecretsSection,
    UsageSection,
    default_renderers,
)

__all__ = [
    # Models
    "ActionInput",
    "ActionOutput",
    "GitHubAction",
    "GitHubActionsManifest",
    "GitHubWorkflow",
    "WorkflowSecret",
    "WorkflowTrigger",
    # Parsing
    "default_destination",
    "parse_manifest",
    "uses_name",
    # Sections
    "HeaderSection",
    "InputsSection",
    "OutputsSection",
    "OverviewSection",
    "SecretsSection",
    "UsageSection",
    "default_renderers",
]
