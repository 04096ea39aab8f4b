"""cidoc - Generate README documentation from CI/CD manifests.

Renders documentation sections for GitHub Actions and workflows and
merges them into existing Markdown files between section markers.
"""

from cidoc.exceptions import (
    CidocError,
    ConfigurationError,
    ContentError,
    ContentTooLargeError,
    GeneratorError,
    ManifestError,
    ManifestNotFoundError,
    SectionRenderError,
    UnknownSectionError,
    UnsupportedDestinationError,
    UnsupportedManifestError,
)

__version__ = "0.1.0"

__all__ = [
    # Base exception
    "CidocError",
    # Content
    "ContentError",
    "ContentTooLargeError",
    # Configuration
    "ConfigurationError",
    "UnknownSectionError",
    # Manifest
    "ManifestError",
    "ManifestNotFoundError",
    "UnsupportedManifestError",
    # Generator
    "GeneratorError",
    "SectionRenderError",
    "UnsupportedDestinationError",
    "__version__",
]
