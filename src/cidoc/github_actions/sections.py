"""Section renderers for GitHub Actions manifests.

Renderers are registered in canonical order by `default_renderers()`.
Each returns empty content when it has nothing to document, which removes
the section from the generated document.
"""

from __future__ import annotations

import textwrap
from pathlib import PurePosixPath
from typing import Any

import yaml

from cidoc.config import ManifestVersion, RepositoryInfo
from cidoc.document.models import SectionIdentifier
from cidoc.generator.protocols import RenderContext, SectionRenderer
from cidoc.github_actions.models import (
    ActionInput,
    ActionOutput,
    GitHubAction,
    GitHubActionsManifest,
    GitHubWorkflow,
    WorkflowSecret,
)
from cidoc.markdown.content import Content
from cidoc.markdown.formatter import MarkdownFormatter

DISPATCH_EVENTS = ("workflow_call", "workflow_dispatch")
DEFAULT_TRIGGER = {"push": {"branches": ["main"]}}
GENERATED_NOTICE = "This documentation was automatically generated by cidoc."


class _IndentedDumper(yaml.SafeDumper):
    """Dumper indenting block sequences under their parent key."""

    def increase_indent(self, flow: bool = False, indentless: bool = False) -> None:
        return super().increase_indent(flow, False)


def _dump_yaml(data: Any) -> str:
    return yaml.dump(
        data,
        Dumper=_IndentedDumper,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
        width=1000,
    )


def _title(formatter: MarkdownFormatter, text: str, level: int = 2) -> Content:
    return formatter.heading(Content(text), level).append(formatter.line_break())


def _bold_code(formatter: MarkdownFormatter, name: str) -> Content:
    return formatter.bold(formatter.inline_code(Content(name)))


def _bool_cell(formatter: MarkdownFormatter, value: bool) -> Content:
    return formatter.bold(Content("true" if value else "false"))


class HeaderSection:
    """H1 title naming the kind of manifest and its name."""

    section = SectionIdentifier.HEADER

    def render(self, context: RenderContext) -> Content:
        manifest = context.manifest
        return context.formatter.heading(Content(f"{self._prefix(manifest)}{manifest.name}"), 1)

    @staticmethod
    def _prefix(manifest: GitHubActionsManifest) -> str:
        if isinstance(manifest, GitHubAction):
            return "GitHub Action: "
        if manifest.is_reusable:
            return "GitHub Reusable Workflow: "
        return "GitHub Workflow: "


class BadgesSection:
    """Linked shields.io badges, one per line.

    Needs the repository the manifest belongs to; without it nothing is
    rendered.
    """

    section = SectionIdentifier.BADGES

    def __init__(self, repository: RepositoryInfo | None = None) -> None:
        self.repository = repository

    def render(self, context: RenderContext) -> Content:
        if self.repository is None:
            return Content.empty()

        formatter = context.formatter
        lines = [
            formatter.link(formatter.badge(Content(label), Content(image)), Content(target))
            for label, image, target in self.badges(context.manifest, self.repository)
        ]
        return Content.empty().append(*(line.append(formatter.line_break()) for line in lines))

    @staticmethod
    def badges(manifest: GitHubActionsManifest, repository: RepositoryInfo) -> list[tuple[str, str, str]]:
        """(label, image URL, link URL) for each badge, in display order."""
        url = (repository.url or f"https://github.com/{repository.full_name}").rstrip("/")
        badges = []
        if isinstance(manifest, GitHubAction):
            slug = "-".join(manifest.name.lower().split())
            badges.append(
                (
                    "Marketplace",
                    f"https://img.shields.io/badge/Marketplace-{slug.replace('-', '--')}-blue?logo=github-actions",
                    f"https://github.com/marketplace/actions/{slug}",
                )
            )
        badges.append(
            ("Release", f"https://img.shields.io/github/v/release/{repository.full_name}", f"{url}/releases")
        )
        badges.append(
            (
                "Stars",
                f"https://img.shields.io/github/stars/{repository.full_name}?style=social",
                f"{url}/stargazers",
            )
        )
        return badges


class OverviewSection:
    """Description paragraph, followed by the permissions a workflow needs."""

    section = SectionIdentifier.OVERVIEW

    def render(self, context: RenderContext) -> Content:
        formatter = context.formatter
        description = getattr(context.manifest, "description", None)
        if not description or not description.strip():
            return Content.empty()

        content = _title(formatter, "Overview").append(
            formatter.paragraph(Content(description).trim())
        )

        permissions = self._permissions(context.manifest)
        if permissions:
            items = [
                _bold_code(formatter, name).append(": ", formatter.inline_code(Content(level)))
                for name, level in permissions
            ]
            content = content.append(
                formatter.line_break(),
                _title(formatter, "Permissions", 3),
                formatter.list(items),
            )
        return content

    @staticmethod
    def _permissions(manifest: GitHubActionsManifest) -> list[tuple[str, str]]:
        if not isinstance(manifest, GitHubWorkflow):
            return []

        merged = dict(manifest.permissions or {})
        for job in manifest.jobs.values():
            if isinstance(job, dict) and isinstance(job.get("permissions"), dict):
                merged.update({str(k): str(v) for k, v in job["permissions"].items()})
        return sorted(merged.items())


class UsageSection:
    """YAML snippet showing how to call the action or workflow."""

    section = SectionIdentifier.USAGE

    def __init__(self, version: ManifestVersion | None = None) -> None:
        self.version = version

    def uses(self, manifest: GitHubActionsManifest) -> str:
        """`uses:` value, pinned to the configured version when there is one."""
        if self.version is None:
            return manifest.uses_name
        return self.version.pin(manifest.uses_name)

    def render(self, context: RenderContext) -> Content:
        manifest = context.manifest
        if isinstance(manifest, GitHubAction):
            snippet = self.action_usage(manifest)
        else:
            snippet = self.workflow_usage(manifest)

        return _title(context.formatter, "Usage").append(
            context.formatter.code(Content(snippet), Content("yaml"))
        )

    def action_usage(self, manifest: GitHubAction) -> str:
        lines = [f"- uses: {self.uses(manifest)}"]
        if manifest.inputs:
            lines.append("  with:")
            lines.append(self._with_block(manifest.inputs, "    ", typed=False))
        return "\n".join(lines)

    def workflow_usage(self, manifest: GitHubWorkflow) -> str:
        triggers = {
            event: value or {} for event, value in manifest.on.items() if event not in DISPATCH_EVENTS
        }

        # `on` is dumped by hand: YAML 1.1 dumpers quote it as a boolean.
        parts = [
            _dump_yaml({"name": manifest.name}),
            "on:\n",
            textwrap.indent(_dump_yaml(triggers or DEFAULT_TRIGGER), "  "),
        ]
        if manifest.permissions:
            parts.append(_dump_yaml({"permissions": manifest.permissions}))

        job = [f"  {PurePosixPath(manifest.uses_name).stem}:", f"    uses: {self.uses(manifest)}"]

        call = manifest.workflow_call
        if call and call.secrets:
            job.append("    secrets:")
            job.append(self._with_block(call.secrets, "      ", typed=False))

        dispatch = manifest.workflow_dispatch
        inputs = (call.inputs if call and call.inputs else None) or (dispatch.inputs if dispatch else {})
        if inputs:
            job.append("    with:")
            job.append(self._with_block(inputs, "      ", typed=True))

        parts.append("jobs:\n")
        parts.append("\n".join(job))
        return "".join(parts)

    def _with_block(
        self, inputs: dict[str, ActionInput] | dict[str, WorkflowSecret], indent: str, typed: bool
    ) -> str:
        entries = []
        for name, item in inputs.items():
            lines = self._comment(item)
            value = self._value(item, typed) if isinstance(item, ActionInput) else ""
            lines.append(_dump_yaml({name: value}).rstrip("\n"))
            entries.append(textwrap.indent("\n".join(lines), indent))
        return "\n\n".join(entries)

    @staticmethod
    def _comment(item: ActionInput | WorkflowSecret) -> list[str]:
        lines = []
        description = item.description.strip()
        if description:
            for line in description.split("\n"):
                line = line.strip()
                lines.append(f"# {line}" if line else "#")
        if item.required:
            lines.append("# This input is required.")
        if isinstance(item, ActionInput):
            if item.default:
                lines.append(f"# Default: `{item.default}`")
            if item.options:
                lines.append("# Options:")
                lines.extend(f"# - `{option}`" for option in item.options)
        return lines

    @staticmethod
    def _value(item: ActionInput, typed: bool) -> Any:
        """Example value for an input: its default, converted to the declared type."""
        kind = (item.type or "string") if typed else "string"
        default = item.default
        if not default:
            if kind == "number":
                return 0
            if kind == "boolean":
                return False
            if kind == "choice":
                return item.options[0] if item.options else ""
            return ""

        if kind == "number":
            try:
                return int(default)
            except ValueError:
                return default
        if kind == "boolean":
            return default.lower() == "true"
        return default


class InputsSection:
    """Table of inputs; workflows get one table per dispatch/call trigger."""

    section = SectionIdentifier.INPUTS

    def render(self, context: RenderContext) -> Content:
        formatter = context.formatter
        manifest = context.manifest

        if isinstance(manifest, GitHubAction):
            if not manifest.inputs:
                return Content.empty()
            table = self._table(formatter, manifest.inputs, typed=False)
            return _title(formatter, "Inputs").append(table)

        tables = []
        for event, title in (
            ("workflow_dispatch", "Workflow Dispatch Inputs"),
            ("workflow_call", "Workflow Call Inputs"),
        ):
            trigger = getattr(manifest, event)
            if trigger and trigger.inputs:
                tables.append(
                    _title(formatter, title, 3).append(self._table(formatter, trigger.inputs, typed=True))
                )
        if not tables:
            return Content.empty()
        return _title(formatter, "Inputs").append(formatter.line_break().join(tables))

    def _table(self, formatter: MarkdownFormatter, inputs: dict[str, ActionInput], typed: bool) -> Content:
        names = ["Input", "Description", "Required", *(["Type"] if typed else []), "Default"]
        headers = [formatter.bold(Content(name)) for name in names]

        rows = []
        for name, item in inputs.items():
            row = [
                _bold_code(formatter, name),
                self.describe(item),
                _bool_cell(formatter, item.required),
            ]
            if typed:
                row.append(formatter.bold(Content(item.type or "string")))
            row.append(formatter.inline_code(Content(item.default)) if item.default else Content.empty())
            rows.append(row)
        return formatter.table(headers, rows)

    @staticmethod
    def describe(item: ActionInput) -> Content:
        """Description cell with deprecation notice and allowed options."""
        description = item.description.strip()
        if item.deprecation_message:
            notice = f"**Deprecated:** {item.deprecation_message.strip()}"
            description = " - ".join(part for part in (description, notice) if part)
        if item.options:
            options = ", ".join(f"`{option}`" for option in item.options)
            description = "\n".join(part for part in (description, f"Options: {options}") if part)
        return Content(description)


class OutputsSection:
    section = SectionIdentifier.OUTPUTS

    def render(self, context: RenderContext) -> Content:
        formatter = context.formatter
        outputs = self._outputs(context.manifest)
        if not outputs:
            return Content.empty()

        headers = [formatter.bold(Content("Output")), formatter.bold(Content("Description"))]
        rows = [[_bold_code(formatter, name), Content(output.description.strip())] for name, output in outputs.items()]
        return _title(formatter, "Outputs").append(formatter.table(headers, rows))

    @staticmethod
    def _outputs(manifest: GitHubActionsManifest) -> dict[str, ActionOutput]:
        if isinstance(manifest, GitHubAction):
            return manifest.outputs
        call = manifest.workflow_call
        return call.outputs if call else {}


class SecretsSection:
    section = SectionIdentifier.SECRETS

    def render(self, context: RenderContext) -> Content:
        manifest = context.manifest
        if not isinstance(manifest, GitHubWorkflow):
            return Content.empty()

        call = manifest.workflow_call
        if not call or not call.secrets:
            return Content.empty()

        formatter = context.formatter
        headers = [formatter.bold(Content(name)) for name in ("Secret", "Description", "Required")]
        rows = [
            [_bold_code(formatter, name), Content(secret.description.strip()), _bool_cell(formatter, secret.required)]
            for name, secret in call.secrets.items()
        ]
        return _title(formatter, "Secrets").append(formatter.table(headers, rows))


class ContentsSection:
    """Table of contents linking to the sections that have something to show."""

    section = SectionIdentifier.CONTENTS

    def __init__(self, renderers: list[SectionRenderer]) -> None:
        self.renderers = renderers

    def render(self, context: RenderContext) -> Content:
        formatter = context.formatter
        items = []
        for renderer in self.renderers:
            if renderer.render(context).trim().is_empty():
                continue
            title = renderer.section.value.title()
            items.append(formatter.link(Content(title), Content(f"#{renderer.section.value}")))

        if not items:
            return Content.empty()
        return _title(formatter, "Table of Contents").append(formatter.list(items))


class GeneratedSection:
    """Footer noting the document was generated."""

    section = SectionIdentifier.GENERATED

    def render(self, context: RenderContext) -> Content:
        formatter = context.formatter
        return formatter.horizontal_rule().append(
            formatter.line_break(),
            formatter.center(Content(GENERATED_NOTICE)),
        )


def default_renderers(
    repository: RepositoryInfo | None = None, version: ManifestVersion | None = None
) -> list[SectionRenderer]:
    """All GitHub Actions renderers in canonical section order.

    Args:
        repository: Repository used for badges
        version: Version pinned in usage examples
    """
    documented: list[SectionRenderer] = [
        OverviewSection(),
        UsageSection(version),
        InputsSection(),
        OutputsSection(),
        SecretsSection(),
    ]
    overview, *rest = documented
    return [
        HeaderSection(),
        BadgesSection(repository),
        overview,
        ContentsSection(documented),
        *rest,
        GeneratedSection(),
    ]
