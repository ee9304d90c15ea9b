"""Login-shell PATH capture.

Responsibilities:
- Spawn the user's shell in login mode so it re-reads profile/startup files.
- Return that shell's PATH as ordered directory segments, or `None` on failure.

A GUI-launched process never sources the user's shell profile, so directories
added there (version managers, user-local installs) are missing from its own
PATH. The capture recovers them. It performs no caching; see `shell_cache`.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
import subprocess
from typing import Any, Callable, Mapping

from .models import LoginShellPath
from .parsing import normalize_optional_string, parse_positive_seconds, split_search_path
from .telemetry.logger import ResolutionLogger


DEFAULT_SHELL = "/bin/zsh"
DEFAULT_CAPTURE_TIMEOUT_SECONDS = 2.0
_PRINT_PATH_COMMAND = 'printf %s "$PATH"'


def resolve_shell(shell: str | None, env: Mapping[str, str]) -> str:
    """Pick the shell to spawn: explicit argument, then `SHELL`, then zsh."""

    return (
        normalize_optional_string(shell)
        or normalize_optional_string(env.get("SHELL"))
        or DEFAULT_SHELL
    )


@dataclass(slots=True)
class LoginShellPathCapturer:
    """Run one login shell per call and parse the PATH it reports."""

    popen_factory: Callable[..., Any] = subprocess.Popen
    run_logger: ResolutionLogger | None = None

    def capture(
        self,
        shell: str | None = None,
        timeout_seconds: float = DEFAULT_CAPTURE_TIMEOUT_SECONDS,
        env: Mapping[str, str] | None = None,
    ) -> LoginShellPath | None:
        """Capture the login shell's PATH.

        Args:
            shell: Shell executable; defaults to `SHELL`, then `/bin/zsh`.
            timeout_seconds: Upper bound on how long the shell may run.
            env: Environment snapshot used for `SHELL` lookup and as the child's env.

        Returns:
            Ordered non-empty PATH segments, or `None` when the shell could not be
            launched, outlived the timeout, or printed nothing.

        Raises:
            ValueError: If `timeout_seconds` is not positive.
        """

        timeout = parse_positive_seconds(timeout_seconds, "timeout_seconds")
        env_map: Mapping[str, str] = dict(os.environ) if env is None else env
        shell_path = resolve_shell(shell, env_map)
        self._log("start", shell=shell_path, timeout=timeout)

        try:
            process = self.popen_factory(
                [shell_path, "-l", "-c", _PRINT_PATH_COMMAND],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                env=dict(env_map),
            )
        except OSError as exc:
            self._log("launch-failed", shell=shell_path, error_type=type(exc).__name__)
            return None

        try:
            stdout, _ = process.communicate(timeout=timeout)
        except subprocess.TimeoutExpired:
            process.kill()
            process.wait()
            _close_streams(process)
            self._log("timeout", shell=shell_path, timeout=timeout)
            return None

        segments = split_search_path(_decode_output(stdout))
        if not segments:
            self._log("empty-output", shell=shell_path, returncode=process.returncode)
            return None

        self._log("complete", shell=shell_path, segments=len(segments))
        return tuple(segments)

    def _log(self, event: str, **context: object) -> None:
        if self.run_logger is not None:
            self.run_logger.log_capture_event(event, **context)


def _close_streams(process: Any) -> None:
    """Close pipes left open after a killed process was reaped."""

    for stream in (getattr(process, "stdout", None), getattr(process, "stderr", None)):
        if stream is not None:
            stream.close()


def _decode_output(stdout: bytes | None) -> str:
    """Decode shell output the way the OS decodes paths; undecodable bytes survive."""

    return os.fsdecode(stdout or b"").strip()
