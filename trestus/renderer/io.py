"""I/O utilities for the renderer module.

Provides atomic file writing so a published status page is never seen
half written.
"""

import hashlib
from pathlib import Path

import structlog

from trestus.config.constants import COMPONENT_RENDERER
from trestus.renderer.models import GeneratedFile


logger = structlog.get_logger()


class AtomicWriter:
    """Writes files via a temporary sibling followed by a rename."""

    def __init__(self, base_dir: Path, run_id: str | None = None) -> None:
        """Initialize the atomic writer.

        Args:
            base_dir: Base directory for relative path calculation.
            run_id: Optional run ID for logging context.
        """
        self._base_dir = base_dir
        self._log = logger.bind(component=COMPONENT_RENDERER)
        if run_id:
            self._log = self._log.bind(run_id=run_id)

    def write(self, path: Path, content: str) -> GeneratedFile:
        """Write text content atomically.

        Args:
            path: Target file path.
            content: Content to write (encoded as UTF-8).

        Returns:
            GeneratedFile with path, checksum, and size information.
        """
        return self.write_bytes(path, content.encode("utf-8"))

    def write_bytes(self, path: Path, content: bytes) -> GeneratedFile:
        """Write binary content atomically.

        Args:
            path: Target file path.
            content: Bytes to write.

        Returns:
            GeneratedFile with path, checksum, and size information.
        """
        sha256 = hashlib.sha256(content).hexdigest()

        path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = path.with_suffix(path.suffix + ".tmp")
        temp_path.write_bytes(content)
        temp_path.replace(path)

        try:
            relative_path = str(path.relative_to(self._base_dir))
        except ValueError:
            relative_path = str(path)

        self._log.debug(
            "file_written",
            path=relative_path,
            bytes=len(content),
            sha256=sha256[:12],
        )

        return GeneratedFile(
            path=relative_path,
            absolute_path=str(path.resolve()),
            bytes_written=len(content),
            sha256=sha256,
        )
