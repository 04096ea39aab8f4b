"""Pydantic models for GitHub Actions manifests.

Covers composite/JavaScript/Docker actions (`action.yml`) and workflows
(`.github/workflows/*.yml`). Only the fields used for documentation are
modelled; everything else is ignored.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _scalar_to_str(value: Any) -> Any:
    """YAML scalars such as `true` or `30` are documented as written."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return value


class _ManifestModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ActionInput(_ManifestModel):
    """An input accepted by an action or a workflow trigger."""

    description: str = ""
    required: bool = False
    default: str | None = None
    type: str | None = None
    options: list[str] = Field(default_factory=list)
    deprecation_message: str | None = Field(default=None, alias="deprecationMessage")

    @field_validator("description", mode="before")
    @classmethod
    def _description(cls, value: Any) -> Any:
        return "" if value is None else _scalar_to_str(value)

    @field_validator("default", mode="before")
    @classmethod
    def _default(cls, value: Any) -> Any:
        return _scalar_to_str(value)

    @field_validator("options", mode="before")
    @classmethod
    def _options(cls, value: Any) -> Any:
        if value is None:
            return []
        return [_scalar_to_str(option) for option in value]


class ActionOutput(_ManifestModel):
    description: str = ""
    value: str | None = None

    @field_validator("description", mode="before")
    @classmethod
    def _description(cls, value: Any) -> Any:
        return "" if value is None else _scalar_to_str(value)


class WorkflowSecret(_ManifestModel):
    description: str = ""
    required: bool = False

    @field_validator("description", mode="before")
    @classmethod
    def _description(cls, value: Any) -> Any:
        return "" if value is None else _scalar_to_str(value)


class WorkflowTrigger(_ManifestModel):
    """A `workflow_dispatch` or `workflow_call` trigger."""

    inputs: dict[str, ActionInput] = Field(default_factory=dict)
    outputs: dict[str, ActionOutput] = Field(default_factory=dict)
    secrets: dict[str, WorkflowSecret] = Field(default_factory=dict)

    @field_validator("inputs", "outputs", "secrets", mode="before")
    @classmethod
    def _mapping(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, dict):
            return {key: {} if item is None else item for key, item in value.items()}
        return value


class Branding(_ManifestModel):
    icon: str | None = None
    color: str | None = None


class ActionRuns(_ManifestModel):
    using: str


class GitHubAction(_ManifestModel):
    """A GitHub Action defined by `action.yml`."""

    uses_name: str
    name: str
    description: str | None = None
    author: str | None = None
    branding: Branding | None = None
    inputs: dict[str, ActionInput] = Field(default_factory=dict)
    outputs: dict[str, ActionOutput] = Field(default_factory=dict)
    runs: ActionRuns

    @field_validator("inputs", "outputs", mode="before")
    @classmethod
    def _mapping(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, dict):
            return {key: {} if item is None else item for key, item in value.items()}
        return value


class GitHubWorkflow(_ManifestModel):
    """A GitHub workflow, possibly reusable through `workflow_call`."""

    uses_name: str
    name: str
    on: dict[str, Any] = Field(default_factory=dict)
    permissions: dict[str, str] | None = None
    jobs: dict[str, Any] = Field(default_factory=dict)

    @field_validator("on", mode="before")
    @classmethod
    def _triggers(cls, value: Any) -> Any:
        # `on: push` and `on: [push, pull_request]` are shorthand for a mapping.
        if isinstance(value, str):
            return {value: None}
        if isinstance(value, list):
            return {str(event): None for event in value}
        return value

    @field_validator("permissions", mode="before")
    @classmethod
    def _permissions(cls, value: Any) -> Any:
        # `permissions: read-all` grants every scope at once.
        if isinstance(value, str):
            return {"all": value}
        return value

    @property
    def workflow_dispatch(self) -> WorkflowTrigger | None:
        return self._trigger("workflow_dispatch")

    @property
    def workflow_call(self) -> WorkflowTrigger | None:
        return self._trigger("workflow_call")

    @property
    def is_reusable(self) -> bool:
        return "workflow_call" in self.on

    def _trigger(self, event: str) -> WorkflowTrigger | None:
        if event not in self.on:
            return None
        return WorkflowTrigger.model_validate(self.on[event] or {})


GitHubActionsManifest = GitHubAction | GitHubWorkflow
