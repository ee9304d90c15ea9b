"""Deterministic target-binary resolution.

Responsibilities:
- Resolve the absolute path of the target CLI through a fixed fallback order.
- Report the directory that must be on PATH for binary-aware purposes.

Resolution order (first executable hit wins):
1. Explicit override variable naming an absolute path.
2. Inherited `PATH`.
3. Login-shell `PATH`, only if already captured by the caller.
4. Conventional install locations (Homebrew, `/usr/local/bin`, user-local bins).
5. Version-manager roots, newest-looking version directory first.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
import posixpath

from .filesystem import FileSystemProbe, create_filesystem_probe
from .models import InvocationPurpose, requires_binary_directory
from .parsing import split_search_path
from .telemetry.logger import ResolutionLogger


DEFAULT_BINARY_NAME = "codex"
DEFAULT_OVERRIDE_ENV_KEY = "CODEX_CLI_PATH"


def candidate_directories(home: str) -> list[str]:
    """Return conventional install directories in lookup order."""

    return [
        "/opt/homebrew/bin",
        "/usr/local/bin",
        f"{home}/.local/bin",
        f"{home}/bin",
        f"{home}/.bun/bin",
        f"{home}/.npm-global/bin",
    ]


def version_manager_roots(home: str) -> list[str]:
    """Return version-manager roots whose children are installed runtime versions."""

    return [
        f"{home}/.nvm/versions/node",
        f"{home}/.local/share/fnm",
    ]


class BinaryLocator:
    """Find the target executable from environment, cached PATH, and heuristics."""

    def __init__(
        self,
        binary_name: str = DEFAULT_BINARY_NAME,
        override_env_key: str = DEFAULT_OVERRIDE_ENV_KEY,
        home: str | None = None,
        filesystem: FileSystemProbe | None = None,
        run_logger: ResolutionLogger | None = None,
    ) -> None:
        self.binary_name = binary_name
        self.override_env_key = override_env_key
        self.home = home if home is not None else str(Path.home())
        self.filesystem = filesystem or create_filesystem_probe()
        self._run_logger = run_logger

    def resolve(
        self,
        env: Mapping[str, str],
        login_path: Sequence[str] | None = None,
    ) -> str | None:
        """Return the absolute path of the target binary, or `None` on a miss.

        `login_path` is only consulted when the caller already holds a captured
        value; this method never waits for or starts a capture.
        """

        override = env.get(self.override_env_key)
        if override and posixpath.isabs(override) and self.filesystem.is_executable(override):
            return self._found("override", override)

        path_hit = self._find_in(split_search_path(env.get("PATH")))
        if path_hit is not None:
            return self._found("path", path_hit)

        if login_path is not None:
            login_hit = self._find_in(login_path)
            if login_hit is not None:
                return self._found("login-shell", login_hit)

        candidate_hit = self._find_in(candidate_directories(self.home))
        if candidate_hit is not None:
            return self._found("candidate", candidate_hit)

        for root in version_manager_roots(self.home):
            managed_hit = self._scan_managed_versions(root)
            if managed_hit is not None:
                return self._found("version-manager", managed_hit)

        return self._found("miss", None)

    def directories(
        self,
        purposes: Iterable[InvocationPurpose],
        env: Mapping[str, str],
        login_path: Sequence[str] | None = None,
    ) -> list[str]:
        """Return the resolved binary's directory when the purposes need it."""

        if not requires_binary_directory(purposes):
            return []
        binary_path = self.resolve(env, login_path)
        if binary_path is None:
            return []
        return [posixpath.dirname(binary_path)]

    def candidate_paths(self) -> list[str]:
        """Return the conventional candidate file paths checked in step 4."""

        return [self._join(directory) for directory in candidate_directories(self.home)]

    def version_manager_roots(self) -> list[str]:
        """Return the version-manager roots scanned in step 5."""

        return version_manager_roots(self.home)

    def _find_in(self, directories: Iterable[str]) -> str | None:
        for directory in directories:
            if not directory:
                continue
            candidate = self._join(directory)
            if self.filesystem.is_executable(candidate):
                return candidate
        return None

    def _scan_managed_versions(self, root: str) -> str | None:
        """Check `<root>/<version>/bin/<binary>` for immediate children only."""

        try:
            versions = self.filesystem.list_directory(root)
        except OSError:
            return None
        for version in sorted(versions, reverse=True):
            candidate = f"{root}/{version}/bin/{self.binary_name}"
            if self.filesystem.is_executable(candidate):
                return candidate
        return None

    def _join(self, directory: str) -> str:
        trimmed = directory[:-1] if directory.endswith("/") else directory
        return f"{trimmed}/{self.binary_name}"

    def _found(self, source: str, path: str | None) -> str | None:
        if self._run_logger is not None:
            self._run_logger.log_resolution(source, self.binary_name, path)
        return path
