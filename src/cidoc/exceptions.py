"""cidoc exception hierarchy.

Provides a unified exception hierarchy for the cidoc CLI and library.
This enables:
- User-friendly error messages in the CLI
- Programmatic error handling in library usage
- Clear distinction between user errors and internal bugs

Usage:
    from cidoc.exceptions import CidocError, ManifestNotFoundError

    try:
        generator.generate(manifest, destination)
    except ManifestNotFoundError as e:
        print(f"Manifest not found: {e.path}")
    except CidocError as e:
        print(f"cidoc error: {e}")
"""


class CidocError(Exception):
    """Base exception for all cidoc errors.

    All cidoc-specific exceptions inherit from this class, allowing
    callers to catch all cidoc errors with a single except clause.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


# Content Errors


class ContentError(CidocError):
    """Base class for content manipulation errors."""

    pass


class ContentTooLargeError(ContentError):
    """Content is too large for a regular expression operation.

    Raised instead of running a (possibly user-supplied) pattern against
    a large blob, where catastrophic backtracking could hang the process.
    """

    def __init__(self, size: int, limit: int) -> None:
        self.size = size
        self.limit = limit
        super().__init__(
            f"Regular expression called on content of {size} bytes "
            f"(limit: {limit} bytes); operation aborted"
        )


# Configuration Errors


class ConfigurationError(CidocError):
    """Error in cidoc configuration.

    Raised when .cidoc.yaml is invalid, references unknown sections,
    or contains incompatible settings.
    """

    pass


class UnknownSectionError(ConfigurationError):
    """Section identifier is not recognized."""

    def __init__(self, section: str) -> None:
        self.section = section
        super().__init__(f"Unknown section: {section}")


# Manifest Errors


class ManifestError(CidocError):
    """Base class for manifest-related errors."""

    pass


class ManifestNotFoundError(ManifestError):
    """Manifest file not found."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Manifest not found: {path}")


class UnsupportedManifestError(ManifestError):
    """Manifest cannot be parsed as a supported CI/CD definition."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Unsupported manifest '{path}': {reason}")


# Generator Errors


class GeneratorError(CidocError):
    """Base class for documentation generation errors."""

    pass


class UnsupportedDestinationError(GeneratorError):
    """No formatter is able to write the destination file.

    Raised when the destination extension is not a Markdown one.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"No formatter found for destination: {path}")


class SectionRenderError(GeneratorError):
    """A section renderer could not produce its content."""

    def __init__(self, section: str, reason: str) -> None:
        self.section = section
        self.reason = reason
        super().__init__(f"Failed to render section '{section}': {reason}")
