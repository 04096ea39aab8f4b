"""Project configuration schema and loading."""

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from cidoc.document.models import SectionIdentifier, parse_section_identifier
from cidoc.exceptions import ConfigurationError
from cidoc.markdown.formatter import LinkFormat

CONFIG_FILENAME = ".cidoc.yaml"


class RepositoryInfo(BaseModel):
    """Repository the documented manifest belongs to.

    Used to build `uses:` references such as `owner/name/path`.
    """

    model_config = ConfigDict(frozen=True)

    owner: str = Field(..., description="Repository owner or organization")
    name: str = Field(..., description="Repository name")
    url: str | None = Field(default=None, description="Repository web URL")

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


class ManifestVersion(BaseModel):
    """Version callers pin in `uses:`.

    A plain string in .cidoc.yaml is read as a ref, e.g. `version: v1`.
    When a sha is set it is pinned and the ref becomes a trailing comment.
    """

    model_config = ConfigDict(frozen=True)

    ref: str | None = Field(default=None, description="Tag or branch, e.g. v1.2.0")
    sha: str | None = Field(default=None, description="Commit sha")

    def pin(self, uses_name: str) -> str:
        """Reference with the version appended, e.g. `owner/repo@v1`."""
        if self.sha:
            pinned = f"{uses_name}@{self.sha}"
            return f"{pinned} # {self.ref}" if self.ref else pinned
        if self.ref:
            return f"{uses_name}@{self.ref}"
        return uses_name


class SectionsConfig(BaseModel):
    """Which sections to generate."""

    include: list[SectionIdentifier] | None = Field(
        default=None, description="Only generate these sections (all when unset)"
    )
    exclude: list[SectionIdentifier] = Field(
        default_factory=list, description="Never generate these sections"
    )

    @field_validator("include", "exclude", mode="before")
    @classmethod
    def _parse_identifiers(cls, value: object) -> object:
        if value is None:
            return value
        if isinstance(value, str):
            value = [value]
        if isinstance(value, list):
            return [parse_section_identifier(str(item)) for item in value]
        return value


class CidocConfig(BaseModel):
    """Complete cidoc configuration.

    Loaded from .cidoc.yaml in the project root.
    CLI flags override config values with precedence:
    1. CLI flags (highest)
    2. .cidoc.yaml
    3. Defaults (lowest)
    """

    output: Path | None = Field(default=None, description="Destination document path")
    link_format: LinkFormat = Field(
        default=LinkFormat.AUTO, description="How bare URLs in paragraphs are rewritten"
    )
    sections: SectionsConfig = Field(default_factory=SectionsConfig)
    repository: RepositoryInfo | None = Field(default=None)
    version: ManifestVersion | None = Field(
        default=None, description="Version shown in usage examples (`uses: name@version`)"
    )

    @field_validator("version", mode="before")
    @classmethod
    def _parse_version(cls, value: object) -> object:
        if isinstance(value, (str, int, float)) and not isinstance(value, bool):
            return {"ref": str(value)}
        return value


def load_config(project_root: Path | None = None) -> CidocConfig:
    """Load configuration from .cidoc.yaml.

    Args:
        project_root: Directory containing .cidoc.yaml. Defaults to cwd.

    Returns:
        CidocConfig with values from file or defaults

    Raises:
        ConfigurationError: If the file is not valid YAML or does not match the schema

    Example:
        config = load_config()
        print(f"Link format: {config.link_format.value}")
    """
    if project_root is None:
        project_root = Path.cwd()

    config_path = project_root / CONFIG_FILENAME

    if not config_path.exists():
        return CidocConfig()

    try:
        with open(config_path) as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if raw_config is None:
        return CidocConfig()
    if not isinstance(raw_config, dict):
        raise ConfigurationError(f"Invalid config in {config_path}: expected a mapping")

    try:
        return CidocConfig.model_validate(raw_config)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid config in {config_path}: {e}") from e


def merge_cli_overrides(
    config: CidocConfig,
    output: Path | None = None,
    link_format: LinkFormat | None = None,
    include: list[SectionIdentifier] | None = None,
    exclude: list[SectionIdentifier] | None = None,
    ref: str | None = None,
    sha: str | None = None,
) -> CidocConfig:
    """Merge CLI flag overrides into config.

    Args:
        config: Base configuration from file
        output: CLI override for the destination path
        link_format: CLI override for URL rewriting
        include: CLI sections to include (replaces the configured list)
        exclude: CLI sections to exclude (added to the configured list)
        ref: CLI override for the version ref
        sha: CLI override for the version sha

    Returns:
        New CidocConfig with overrides applied

    Example:
        config = load_config()
        config = merge_cli_overrides(config, link_format=LinkFormat.FULL)
    """
    updated = config.model_copy(deep=True)

    if output is not None:
        updated.output = output

    if link_format is not None:
        updated.link_format = link_format

    if include:
        updated.sections.include = list(include)

    if exclude:
        updated.sections.exclude = [
            *updated.sections.exclude,
            *(section for section in exclude if section not in updated.sections.exclude),
        ]

    if ref is not None or sha is not None:
        current = updated.version or ManifestVersion()
        updated.version = ManifestVersion(
            ref=ref if ref is not None else current.ref,
            sha=sha if sha is not None else current.sha,
        )

    return updated
