"""GitHub Actions manifest parsing."""

import logging
from pathlib import Path, PurePosixPath
from typing import Any

import yaml
from pydantic import ValidationError

from cidoc.config import RepositoryInfo
from cidoc.exceptions import ManifestNotFoundError, UnsupportedManifestError
from cidoc.github_actions.models import GitHubAction, GitHubActionsManifest, GitHubWorkflow

logger = logging.getLogger(__name__)

ACTION_FILENAMES = ("action.yml", "action.yaml")
WORKFLOWS_DIR = ".github/workflows/"


def is_action_file(path: Path) -> bool:
    return Path(path).name.lower() in ACTION_FILENAMES


def is_workflow_file(path: Path) -> bool:
    return WORKFLOWS_DIR in Path(path).as_posix()


def display_name(path: Path) -> str:
    """Title-cased name derived from a file stem, e.g. `docker-build` -> `Docker Build`."""
    words = Path(path).stem.replace("_", " ").replace("-", " ").split()
    return " ".join(word[:1].upper() + word[1:].lower() for word in words)


def uses_name(path: Path, repository: RepositoryInfo | None = None) -> str:
    """Reference used in `uses:` to call the manifest.

    Actions are referenced by their directory, workflows by their file path,
    both prefixed by `owner/name` when the repository is known.
    """
    relative = _relative_posix(path)
    if is_action_file(path):
        target = str(PurePosixPath(relative).parent)
    else:
        target = relative

    parts = [repository.owner, repository.name] if repository else []
    if target and target != ".":
        parts.append(target)
    return "/".join(parts) or target


def default_destination(path: Path) -> Path:
    """Documentation path for a manifest.

    README.md next to an action, `<stem>.md` next to a workflow.
    """
    path = Path(path)
    if is_action_file(path):
        return path.parent / "README.md"
    return path.with_suffix(".md")


def parse_manifest(path: Path, repository: RepositoryInfo | None = None) -> GitHubActionsManifest:
    """Parse an action or workflow file.

    Args:
        path: Path to action.yml or a workflow file
        repository: Repository info used to build the `uses:` reference

    Returns:
        GitHubAction or GitHubWorkflow

    Raises:
        ManifestNotFoundError: If the file does not exist
        UnsupportedManifestError: If the file is not a valid action or workflow
    """
    path = Path(path)
    if not path.is_file():
        raise ManifestNotFoundError(str(path))

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise UnsupportedManifestError(str(path), f"invalid YAML: {e}") from e

    if not isinstance(data, dict):
        raise UnsupportedManifestError(str(path), "expected a YAML mapping")

    data = _normalize_keys(data)
    if not data.get("name"):
        data["name"] = display_name(path)
    data["uses_name"] = uses_name(path, repository)

    try:
        if isinstance(data.get("runs"), dict) and "using" in data["runs"]:
            manifest: GitHubActionsManifest = GitHubAction.model_validate(data)
        elif "on" in data:
            manifest = GitHubWorkflow.model_validate(data)
        else:
            raise UnsupportedManifestError(
                str(path), "neither an action (runs.using) nor a workflow (on)"
            )
    except ValidationError as e:
        raise UnsupportedManifestError(str(path), str(e)) from e

    logger.debug("Parsed %s as %s", path, type(manifest).__name__)
    return manifest


def _normalize_keys(data: dict[Any, Any]) -> dict[str, Any]:
    # YAML 1.1 loads the bare key `on` as boolean True.
    return {("on" if key is True else str(key)): value for key, value in data.items()}


def _relative_posix(path: Path) -> str:
    path = Path(path)
    if not path.is_absolute():
        return path.as_posix()

    cwd = Path.cwd()
    if path.is_relative_to(cwd):
        return path.relative_to(cwd).as_posix()

    # Outside the working tree only the repository-relative tail is meaningful.
    posix = path.as_posix()
    marker = posix.find("/" + WORKFLOWS_DIR)
    if marker != -1:
        return posix[marker + 1 :]
    return path.name
