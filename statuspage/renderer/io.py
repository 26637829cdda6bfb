"""Atomic page output.

A served or published page is replaced in one rename, so readers see either
the previous page or the new one.
"""

import hashlib
from pathlib import Path

import structlog

from statuspage.renderer.models import GeneratedFile


logger = structlog.get_logger()

TEMP_SUFFIX = ".tmp"


class AtomicWriter:
    """Writes a page to a temporary sibling, then renames it into place."""

    def __init__(self, base_dir: Path) -> None:
        """Initialize the writer.

        Args:
            base_dir: Directory that reported paths are made relative to.
        """
        self._base_dir = base_dir
        self._log = logger.bind(component="atomic_writer")

    def write(self, path: Path, content: str) -> GeneratedFile:
        """Replace ``path`` with ``content``.

        Missing parent directories are created. If writing the temporary
        file fails it is removed and the error is re-raised; the target is
        left untouched.

        Args:
            path: Destination file.
            content: Document text, stored as UTF-8.

        Returns:
            GeneratedFile with the reported path, size and SHA-256.
        """
        data = content.encode("utf-8")
        digest = hashlib.sha256(data).hexdigest()

        path.parent.mkdir(parents=True, exist_ok=True)
        staging = path.with_name(path.name + TEMP_SUFFIX)
        try:
            staging.write_bytes(data)
            staging.replace(path)
        except OSError:
            staging.unlink(missing_ok=True)
            raise

        reported = self._report_path(path)
        self._log.debug("file_written", path=reported, bytes=len(data), sha256=digest[:12])

        return GeneratedFile(
            path=reported,
            absolute_path=str(path),
            bytes_written=len(data),
            sha256=digest,
        )

    def _report_path(self, path: Path) -> str:
        if path.is_relative_to(self._base_dir):
            return str(path.relative_to(self._base_dir))
        return str(path)
