"""CLI session assembly helpers.

This module isolates config precedence, component wiring, and purpose parsing
from the command wiring layer.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Mapping

from .config import ConfigLoader, LocatorConfig
from .errors import ResolutionStageError
from .locator import BinaryLocator
from .models import InvocationPurpose, LoginShellPath
from .path_builder import PathBuilder
from .shell_cache import LoginShellPathCache, create_login_shell_cache
from .telemetry.logger import ResolutionLogger


@dataclass(slots=True)
class ResolutionSession:
    """Components and inputs shared by one CLI command invocation."""

    config: LocatorConfig
    env: Mapping[str, str]
    cache: LoginShellPathCache
    locator: BinaryLocator
    builder: PathBuilder

    def capture_login_path(self) -> LoginShellPath | None:
        """Start the login-shell capture if needed and wait for its result."""

        self.cache.capture_once(
            shell=self.config.shell,
            timeout_seconds=self.config.capture_timeout_seconds,
            env=self.env,
        )
        return self.cache.wait()


def load_command_config(
    config_file: Path | None,
    env: Mapping[str, str],
    **overrides: object,
) -> LocatorConfig:
    """Resolve config from YAML and environment, then apply explicit CLI values."""

    try:
        loaded = ConfigLoader.load(config_file, env)
    except FileNotFoundError as exc:
        raise ResolutionStageError(
            stage="config",
            detail=f"Config file not found: `{config_file}`.",
            hint="Provide an existing path via `--config <path.yaml>`.",
        ) from exc
    except ValueError as exc:
        raise ResolutionStageError(
            stage="config",
            detail=f"Invalid configuration: {exc}",
            hint="Fix config file or `CODEXPATH_*` values and rerun.",
        ) from exc

    try:
        return loaded.with_overrides(**overrides)
    except ValueError as exc:
        raise ResolutionStageError(
            stage="config",
            detail=f"Invalid command option: {exc}",
            hint="Use `codexpath --help` to review accepted values.",
        ) from exc


def parse_purpose_options(
    raw_purposes: list[str] | None,
    default: tuple[InvocationPurpose, ...],
) -> frozenset[InvocationPurpose]:
    """Parse repeated `--purpose` values, falling back to configured defaults."""

    if not raw_purposes:
        return frozenset(default)
    try:
        return frozenset(InvocationPurpose.parse(token) for token in raw_purposes)
    except ValueError as exc:
        raise ResolutionStageError(
            stage="purposes",
            detail=str(exc),
            hint="Pass `--purpose rpc`, `--purpose tty`, or `--purpose nodeTooling`.",
        ) from exc


def build_session(
    config_file: Path | None = None,
    binary: str | None = None,
    shell: str | None = None,
    timeout: float | None = None,
    home: str | None = None,
    verbose: bool = False,
    env: Mapping[str, str] | None = None,
) -> ResolutionSession:
    """Wire config, cache, locator, and builder for one command invocation."""

    env_map: Mapping[str, str] = dict(os.environ) if env is None else env
    config = load_command_config(
        config_file,
        env_map,
        binary_name=binary,
        shell=shell,
        capture_timeout_seconds=timeout,
        home=home,
    )
    run_logger = ResolutionLogger(level="DEBUG") if verbose else None
    locator = BinaryLocator(
        binary_name=config.binary_name,
        override_env_key=config.override_env_key,
        home=config.home,
        run_logger=run_logger,
    )
    return ResolutionSession(
        config=config,
        env=env_map,
        cache=create_login_shell_cache(run_logger=run_logger),
        locator=locator,
        builder=PathBuilder(locator),
    )
