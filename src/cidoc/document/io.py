"""Reading and writing of destination documents.

Defines the reader/writer contracts used by the generator, a filesystem
implementation and an in-memory one for tests.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class ResourceReader(Protocol):
    """Protocol for loading an existing document."""

    def read_resource(self, path: Path) -> bytes | None:
        """Return the resource bytes, or None if it does not exist."""
        ...


@runtime_checkable
class ResourceWriter(Protocol):
    """Protocol for persisting a generated document."""

    def write_resource(self, path: Path, data: bytes) -> None:
        """Replace the resource with `data`."""
        ...


class FileReader:
    """Read documents from the local filesystem."""

    def read_resource(self, path: Path) -> bytes | None:
        path = Path(path)
        if not path.is_file():
            return None
        return path.read_bytes()


class FileWriter:
    """Write documents to the local filesystem.

    Data goes to a temporary file in the destination directory which is
    then renamed over the target, so readers never see a partial file.
    """

    def write_resource(self, path: Path, data: bytes) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_name, path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.debug("Wrote %d bytes to %s", len(data), path)


class InMemoryResources:
    """Reader and writer backed by a dict, for tests.

    Records every write without filesystem side effects.
    """

    def __init__(self, files: dict[Path, bytes] | None = None) -> None:
        self.files: dict[Path, bytes] = {Path(k): v for k, v in (files or {}).items()}
        self.writes: list[Path] = []

    def read_resource(self, path: Path) -> bytes | None:
        return self.files.get(Path(path))

    def write_resource(self, path: Path, data: bytes) -> None:
        self.files[Path(path)] = data
        self.writes.append(Path(path))

    def reset(self) -> None:
        """Forget all files and recorded writes."""
        self.files.clear()
        self.writes.clear()
