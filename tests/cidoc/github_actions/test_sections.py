"""Tests for GitHub Actions section renderers."""

from pathlib import Path
from typing import Any

import pytest

from cidoc.config import ManifestVersion, RepositoryInfo
from cidoc.document.models import SectionIdentifier
from cidoc.generator.protocols import RenderContext, SectionRenderer
from cidoc.github_actions.models import ActionInput, GitHubAction, GitHubWorkflow
from cidoc.github_actions.sections import (
    BadgesSection,
    ContentsSection,
    GeneratedSection,
    HeaderSection,
    InputsSection,
    OutputsSection,
    OverviewSection,
    SecretsSection,
    UsageSection,
    default_renderers,
)
from cidoc.markdown.formatter import MarkdownFormatter

REPOSITORY = RepositoryInfo(owner="o", name="r")


def _action(**fields: Any) -> GitHubAction:
    data = {"uses_name": "owner/repo", "name": "Test Action", "runs": {"using": "composite"}}
    data.update(fields)
    return GitHubAction.model_validate(data)


def _workflow(**fields: Any) -> GitHubWorkflow:
    data = {"uses_name": "owner/repo/.github/workflows/deploy.yml", "name": "Deploy", "on": {"push": None}}
    data.update(fields)
    return GitHubWorkflow.model_validate(data)


@pytest.fixture
def render(formatter: MarkdownFormatter):
    """Render a section for a manifest and return the text."""

    def _render(renderer: SectionRenderer, manifest: Any) -> str:
        context = RenderContext(manifest=manifest, formatter=formatter, destination=Path("README.md"))
        return str(renderer.render(context))

    return _render


def test_default_renderers_are_in_canonical_order() -> None:
    sections = [renderer.section for renderer in default_renderers()]

    assert sections == sorted(sections, key=list(SectionIdentifier).index)
    assert [section.value for section in sections] == [
        "header",
        "badges",
        "overview",
        "contents",
        "usage",
        "inputs",
        "outputs",
        "secrets",
        "generated",
    ]
    assert all(isinstance(renderer, SectionRenderer) for renderer in default_renderers())


def test_default_renderers_receive_repository_and_version(render) -> None:
    renderers = {r.section: r for r in default_renderers(REPOSITORY, ManifestVersion(ref="v2"))}

    assert "- uses: owner/repo@v2\n" in render(renderers[SectionIdentifier.USAGE], _action())
    assert "https://github.com/o/r/releases" in render(renderers[SectionIdentifier.BADGES], _action())


class TestHeader:
    """Tests for HeaderSection."""

    def test_action(self, render) -> None:
        assert render(HeaderSection(), _action()) == "# GitHub Action: Test Action\n"

    def test_workflow(self, render) -> None:
        assert render(HeaderSection(), _workflow()) == "# GitHub Workflow: Deploy\n"

    def test_reusable_workflow(self, render) -> None:
        manifest = _workflow(on={"workflow_call": None})
        assert render(HeaderSection(), manifest) == "# GitHub Reusable Workflow: Deploy\n"


class TestBadges:
    """Tests for BadgesSection."""

    def test_without_repository(self, render) -> None:
        assert render(BadgesSection(), _action()) == ""

    def test_action(self, render) -> None:
        assert render(BadgesSection(REPOSITORY), _action()) == (
            "[![Marketplace](https://img.shields.io/badge/Marketplace-test--action-blue?logo=github-actions)]"
            "(https://github.com/marketplace/actions/test-action)\n"
            "[![Release](https://img.shields.io/github/v/release/o/r)](https://github.com/o/r/releases)\n"
            "[![Stars](https://img.shields.io/github/stars/o/r?style=social)](https://github.com/o/r/stargazers)\n"
        )

    def test_workflow_has_no_marketplace_badge(self, render) -> None:
        repository = RepositoryInfo(owner="o", name="r", url="https://git.example.com/o/r/")
        text = render(BadgesSection(repository), _workflow())

        assert "Marketplace" not in text
        assert text.startswith(
            "[![Release](https://img.shields.io/github/v/release/o/r)](https://git.example.com/o/r/releases)\n"
        )


class TestOverview:
    """Tests for OverviewSection."""

    def test_description(self, render) -> None:
        manifest = _action(description="  Does things. See https://example.com  \n")
        assert render(OverviewSection(), manifest) == "## Overview\n\nDoes things. See <https://example.com>\n"

    def test_no_description(self, render) -> None:
        assert render(OverviewSection(), _action()) == ""
        assert render(OverviewSection(), _action(description="   ")) == ""

    def test_workflow_permissions(self, render) -> None:
        manifest = _workflow(
            description="Deploys.",
            permissions={"contents": "read", "id-token": "write"},
            jobs={"deploy": {"permissions": {"deployments": "write", "contents": "write"}}},
        )

        assert render(OverviewSection(), manifest) == (
            "## Overview\n\n"
            "Deploys.\n\n"
            "### Permissions\n\n"
            "- **`contents`**: `write`\n"
            "- **`deployments`**: `write`\n"
            "- **`id-token`**: `write`\n"
        )


class TestUsage:
    """Tests for UsageSection."""

    def test_action_without_inputs(self, render) -> None:
        assert render(UsageSection(), _action()) == "## Usage\n\n```yaml\n- uses: owner/repo\n```\n"

    def test_action_pinned_to_ref(self, render) -> None:
        usage = UsageSection(ManifestVersion(ref="v1"))
        assert render(usage, _action()) == "## Usage\n\n```yaml\n- uses: owner/repo@v1\n```\n"

    def test_action_pinned_to_sha(self, render) -> None:
        usage = UsageSection(ManifestVersion(ref="v1.2.0", sha="0123abc"))
        assert render(usage, _action()) == "## Usage\n\n```yaml\n- uses: owner/repo@0123abc # v1.2.0\n```\n"

    def test_workflow_pinned_to_ref(self, render) -> None:
        text = render(UsageSection(ManifestVersion(ref="v1")), _workflow())

        assert "jobs:\n  deploy:\n    uses: owner/repo/.github/workflows/deploy.yml@v1" in text

    def test_workflow_pinned_to_sha_only(self, render) -> None:
        text = render(UsageSection(ManifestVersion(sha="0123abc")), _workflow())

        assert "    uses: owner/repo/.github/workflows/deploy.yml@0123abc\n" in text

    def test_action_with_inputs(self, render) -> None:
        manifest = _action(
            inputs={
                "compose-file": {"description": "Path to compose file", "default": "docker-compose.yml"},
                "services": {"description": "Services to start", "required": True},
                "mode": {"description": "Run mode\nin two lines", "options": ["fast", "safe"]},
            }
        )

        assert render(UsageSection(), manifest) == (
            "## Usage\n\n"
            "```yaml\n"
            "- uses: owner/repo\n"
            "  with:\n"
            "    # Path to compose file\n"
            "    # Default: `docker-compose.yml`\n"
            "    compose-file: docker-compose.yml\n"
            "\n"
            "    # Services to start\n"
            "    # This input is required.\n"
            "    services: ''\n"
            "\n"
            "    # Run mode\n"
            "    # in two lines\n"
            "    # Options:\n"
            "    # - `fast`\n"
            "    # - `safe`\n"
            "    mode: ''\n"
            "```\n"
        )

    def test_reusable_workflow(self, render) -> None:
        manifest = _workflow(
            on={
                "push": {"branches": ["main"]},
                "workflow_call": {
                    "inputs": {
                        "environment": {"description": "Target", "type": "string", "required": True},
                        "debug": {"type": "boolean", "default": False},
                        "retries": {"type": "number", "default": 3},
                    },
                    "secrets": {"DEPLOY_TOKEN": {"description": "Token", "required": True}},
                },
            },
            permissions={"contents": "read"},
        )

        assert render(UsageSection(), manifest) == (
            "## Usage\n\n"
            "```yaml\n"
            "name: Deploy\n"
            "on:\n"
            "  push:\n"
            "    branches:\n"
            "      - main\n"
            "permissions:\n"
            "  contents: read\n"
            "jobs:\n"
            "  deploy:\n"
            "    uses: owner/repo/.github/workflows/deploy.yml\n"
            "    secrets:\n"
            "      # Token\n"
            "      # This input is required.\n"
            "      DEPLOY_TOKEN: ''\n"
            "    with:\n"
            "      # Target\n"
            "      # This input is required.\n"
            "      environment: ''\n"
            "\n"
            "      # Default: `false`\n"
            "      debug: false\n"
            "\n"
            "      # Default: `3`\n"
            "      retries: 3\n"
            "```\n"
        )

    def test_workflow_default_trigger(self, render) -> None:
        manifest = _workflow(on={"workflow_dispatch": {"inputs": {"level": {"type": "choice", "options": ["a"]}}}})
        text = render(UsageSection(), manifest)

        assert "on:\n  push:\n    branches:\n      - main\n" in text
        assert "      level: a\n" in text
        assert "workflow_dispatch" not in text


class TestInputs:
    """Tests for InputsSection."""

    def test_action_table(self, render) -> None:
        manifest = _action(
            inputs={
                "compose-file": {"description": "Path to compose file", "default": "docker-compose.yml"},
                "services": {"description": "Services to start", "required": True},
            }
        )

        assert render(InputsSection(), manifest) == (
            "## Inputs\n\n"
            "| **Input**          | **Description**      | **Required** | **Default**          |\n"
            "| ------------------ | -------------------- | ------------ | -------------------- |\n"
            "| **`compose-file`** | Path to compose file | **false**    | `docker-compose.yml` |\n"
            "| **`services`**     | Services to start    | **true**     |                      |\n"
        )

    def test_action_without_inputs(self, render) -> None:
        assert render(InputsSection(), _action()) == ""

    def test_workflow_tables(self, render) -> None:
        manifest = _workflow(
            on={
                "workflow_dispatch": {"inputs": {"level": {"type": "choice", "options": ["a", "b"]}}},
                "workflow_call": {"inputs": {"environment": {"description": "Target", "required": True}}},
            }
        )
        text = render(InputsSection(), manifest)

        assert text.startswith("## Inputs\n\n### Workflow Dispatch Inputs\n\n")
        assert "\n\n### Workflow Call Inputs\n\n" in text
        assert text.count("**Type**") == 2
        assert "| **`level`** | Options: `a`, `b` | **false**    | **choice** |" in text
        assert "| **`environment`** | Target" in text

    def test_workflow_without_inputs(self, render) -> None:
        assert render(InputsSection(), _workflow()) == ""

    @pytest.mark.parametrize(
        ("fields", "expected"),
        [
            ({"description": " Plain "}, "Plain"),
            (
                {"description": "Old", "deprecationMessage": "Use new"},
                "Old - **Deprecated:** Use new",
            ),
            ({"deprecationMessage": "Gone"}, "**Deprecated:** Gone"),
            ({"description": "Pick", "options": ["x", "y"]}, "Pick\nOptions: `x`, `y`"),
        ],
    )
    def test_describe(self, fields: dict, expected: str) -> None:
        assert InputsSection.describe(ActionInput.model_validate(fields)) == expected


class TestOutputs:
    """Tests for OutputsSection."""

    def test_action_outputs(self, render) -> None:
        manifest = _action(outputs={"status": {"description": "Final status ", "value": "${{ steps.x.outputs.s }}"}})

        assert render(OutputsSection(), manifest) == (
            "## Outputs\n\n"
            "| **Output**   | **Description** |\n"
            "| ------------ | --------------- |\n"
            "| **`status`** | Final status    |\n"
        )

    def test_workflow_call_outputs(self, render) -> None:
        manifest = _workflow(on={"workflow_call": {"outputs": {"url": {"description": "Deployed URL"}}}})
        assert "| **`url`**" in render(OutputsSection(), manifest)

    def test_no_outputs(self, render) -> None:
        assert render(OutputsSection(), _action()) == ""
        assert render(OutputsSection(), _workflow()) == ""


class TestSecrets:
    """Tests for SecretsSection."""

    def test_workflow_secrets(self, render) -> None:
        manifest = _workflow(
            on={"workflow_call": {"secrets": {"TOKEN": {"description": "API token", "required": True}, "OPTIONAL": None}}}
        )

        assert render(SecretsSection(), manifest) == (
            "## Secrets\n\n"
            "| **Secret**     | **Description** | **Required** |\n"
            "| -------------- | --------------- | ------------ |\n"
            "| **`TOKEN`**    | API token       | **true**     |\n"
            "| **`OPTIONAL`** |                 | **false**    |\n"
        )

    def test_actions_have_no_secrets(self, render) -> None:
        assert render(SecretsSection(), _action()) == ""

    def test_workflow_without_call(self, render) -> None:
        assert render(SecretsSection(), _workflow()) == ""


class TestContents:
    """Tests for ContentsSection."""

    @pytest.fixture
    def contents(self) -> ContentsSection:
        return ContentsSection(
            [OverviewSection(), UsageSection(), InputsSection(), OutputsSection(), SecretsSection()]
        )

    def test_lists_sections_with_content(self, render, contents: ContentsSection) -> None:
        manifest = _action(description="Does things.", inputs={"name": {"description": "Who"}})

        assert render(contents, manifest) == (
            "## Table of Contents\n\n"
            "- [Overview](#overview)\n"
            "- [Usage](#usage)\n"
            "- [Inputs](#inputs)\n"
        )

    def test_workflow_secrets(self, render, contents: ContentsSection) -> None:
        manifest = _workflow(on={"workflow_call": {"secrets": {"TOKEN": None}}})
        text = render(contents, manifest)

        assert "- [Secrets](#secrets)\n" in text
        assert "#overview" not in text

    def test_nothing_to_list(self, render) -> None:
        assert render(ContentsSection([]), _action()) == ""


class TestGenerated:
    """Tests for GeneratedSection."""

    def test_footer(self, render) -> None:
        assert render(GeneratedSection(), _action()) == (
            "---\n\n"
            '<div align="center">\n'
            "  This documentation was automatically generated by cidoc.\n"
            "</div>\n"
        )
