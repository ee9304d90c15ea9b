"""Effective PATH assembly for spawning the target CLI.

Responsibilities:
- Merge inherited PATH, a static baseline, the resolved binary directory, and
  the already-captured login-shell PATH into one de-duplicated search path.
- Bundle the same inputs into a read-only diagnostics snapshot.

Assembly is pure: it never spawns a process and never waits on a capture.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
import os

from .locator import BinaryLocator
from .models import InvocationPurpose, PathDebugSnapshot
from .parsing import dedupe_preserving_order, join_search_path, split_search_path
from .shell_cache import LoginShellPathCache


DEFAULT_SYSTEM_DIRECTORIES = ("/usr/bin", "/bin", "/usr/sbin", "/sbin")


def baseline_directories(home: str) -> list[str]:
    """Return install directories appended after the inherited PATH."""

    return [
        "/opt/homebrew/bin",
        "/usr/local/bin",
        f"{home}/.local/bin",
        f"{home}/bin",
        f"{home}/.bun/bin",
        f"{home}/.npm-global/bin",
        f"{home}/.local/share/fnm",
        f"{home}/.fnm",
    ]


class PathBuilder:
    """Build the PATH string injected into subprocesses of the target CLI."""

    def __init__(self, locator: BinaryLocator, home: str | None = None) -> None:
        self._locator = locator
        self.home = home if home is not None else locator.home

    def effective_path(
        self,
        purposes: Iterable[InvocationPurpose],
        env: Mapping[str, str],
        login_path: Sequence[str] | None = None,
        resolved_binary_dirs: Sequence[str] | None = None,
    ) -> str:
        """Return the colon-joined, de-duplicated PATH for the given purposes.

        Merge order is inherited PATH (or the system default when blank), the
        static baseline, the binary directory, then the login-shell PATH.
        `resolved_binary_dirs`, when given, replaces binary resolution entirely.
        """

        parts: list[str] = []

        inherited = split_search_path(env.get("PATH"))
        parts.extend(inherited or DEFAULT_SYSTEM_DIRECTORIES)
        parts.extend(baseline_directories(self.home))

        if resolved_binary_dirs is None:
            resolved_binary_dirs = self._locator.directories(purposes, env, login_path)
        parts.extend(resolved_binary_dirs)

        if login_path is not None:
            parts.extend(login_path)

        return join_search_path(dedupe_preserving_order(parts))

    def environment_for(
        self,
        purposes: Iterable[InvocationPurpose],
        env: Mapping[str, str],
        login_path: Sequence[str] | None = None,
    ) -> dict[str, str]:
        """Return a copy of `env` with `PATH` replaced by the effective PATH."""

        prepared = dict(env)
        prepared["PATH"] = self.effective_path(purposes, env, login_path)
        return prepared

    def debug_snapshot(
        self,
        purposes: Iterable[InvocationPurpose],
        cache: LoginShellPathCache,
        env: Mapping[str, str] | None = None,
    ) -> PathDebugSnapshot:
        """Bundle binary, effective PATH, and login PATH for display."""

        env_map: Mapping[str, str] = dict(os.environ) if env is None else env
        purpose_set = frozenset(purposes)
        login = cache.current
        effective = self.effective_path(purpose_set, env_map, login)
        binary = self._locator.resolve(env_map, login)
        return PathDebugSnapshot(
            binary_path=binary,
            effective_path=effective,
            login_shell_path=join_search_path(login) if login is not None else None,
        )

