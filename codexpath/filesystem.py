"""Read-only filesystem probes used by binary resolution.

Responsibilities:
- Answer "is this an executable file?" and "what does this directory contain?".
- Keep resolution logic testable without touching the real filesystem.

Key types:
- `FileSystemProbe`: interface for the checks resolution depends on.
- `LocalFileSystem`: probe backed by `os`.
"""

from __future__ import annotations

import os


class FileSystemProbe:
    """Interface for read-only filesystem checks."""

    def is_executable(self, path: str) -> bool:
        """Return whether `path` is a regular file the process may execute."""

        raise NotImplementedError

    def list_directory(self, path: str) -> list[str]:
        """Return entry names of a directory; raise `OSError` when unreadable."""

        raise NotImplementedError


class LocalFileSystem(FileSystemProbe):
    """Probe that checks the host filesystem."""

    def is_executable(self, path: str) -> bool:
        return os.path.isfile(path) and os.access(path, os.X_OK)

    def list_directory(self, path: str) -> list[str]:
        return os.listdir(path)


def create_filesystem_probe() -> FileSystemProbe:
    """Create the default host filesystem probe."""

    return LocalFileSystem()
