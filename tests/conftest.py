"""Shared pytest fixtures for cidoc tests.

Provides a wired formatter, its collaborators and in-memory resources.
"""

from pathlib import Path

import pytest

from cidoc.container import create_container, create_formatter
from cidoc.document.io import InMemoryResources
from cidoc.document.merge import SectionMergeEngine
from cidoc.markdown.code import CodeRenderer
from cidoc.markdown.fences import FenceScanner
from cidoc.markdown.formatter import MarkdownFormatter
from cidoc.markdown.table import TableRenderer


@pytest.fixture
def scanner() -> FenceScanner:
    return FenceScanner()


@pytest.fixture
def code(scanner: FenceScanner) -> CodeRenderer:
    return CodeRenderer(scanner)


@pytest.fixture
def table(scanner: FenceScanner, code: CodeRenderer) -> TableRenderer:
    return TableRenderer(scanner, code)


@pytest.fixture
def formatter() -> MarkdownFormatter:
    """Formatter with default options (autolinks)."""
    return create_formatter()


@pytest.fixture
def merge_engine(formatter: MarkdownFormatter) -> SectionMergeEngine:
    return SectionMergeEngine(formatter)


@pytest.fixture
def resources() -> InMemoryResources:
    """In-memory reader/writer.

    Yields:
        InMemoryResources recording every write
    """
    resources = InMemoryResources()
    yield resources
    resources.reset()


@pytest.fixture
def container(resources: InMemoryResources):
    """Container wired to in-memory resources."""
    return create_container(reader=resources, writer=resources)


@pytest.fixture
def action_file(tmp_path: Path) -> Path:
    """A composite action with inputs and outputs."""
    path = tmp_path / "action.yml"
    path.write_text(
        """name: Compose Action
description: Run docker compose. See https://docs.docker.com/compose/ for details.
author: hoverkraft
branding:
  icon: anchor
  color: gray-dark
inputs:
  compose-file:
    description: Path to compose file
    required: false
    default: docker-compose.yml
  services:
    description: Services to start
    required: true
outputs:
  status:
    description: Final status
runs:
  using: composite
  steps:
    - run: docker compose up -d
      shell: bash
"""
    )
    return path


@pytest.fixture
def workflow_file(tmp_path: Path) -> Path:
    """A reusable workflow with inputs, secrets and permissions."""
    workflows = tmp_path / ".github" / "workflows"
    workflows.mkdir(parents=True)
    path = workflows / "deploy.yml"
    path.write_text(
        """name: Deploy Workflow
on:
  push:
    branches: [main]
  workflow_call:
    inputs:
      environment:
        description: Deployment environment
        type: string
        required: true
      debug:
        description: Enable debug mode
        type: boolean
        default: false
    secrets:
      DEPLOY_TOKEN:
        description: Token for deployment
        required: true
permissions:
  contents: read
jobs:
  deploy:
    runs-on: ubuntu-latest
    permissions:
      deployments: write
    steps:
      - run: echo deploy
"""
    )
    return path
