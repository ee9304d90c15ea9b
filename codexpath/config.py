"""Configuration model and loaders for codexpath.

Responsibilities:
- Define resolution settings as a typed dataclass.
- Provide loader entry points for file- and environment-based configuration.

Key types:
- `LocatorConfig`: normalized settings for binary lookup and shell capture.
- `ConfigLoader`: static construction helpers for `LocatorConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .locator import DEFAULT_BINARY_NAME, DEFAULT_OVERRIDE_ENV_KEY
from .models import InvocationPurpose
from .parsing import normalize_optional_string, parse_positive_seconds
from .shell_capture import DEFAULT_CAPTURE_TIMEOUT_SECONDS


@dataclass(frozen=True, slots=True)
class LocatorConfig:
    """Settings for one resolution session.

    Attributes:
        binary_name: File name of the target executable.
        override_env_key: Environment variable that may name the binary explicitly.
        shell: Shell used for login-PATH capture; `None` means `SHELL`, then zsh.
        capture_timeout_seconds: Upper bound on the login-shell run.
        home: Home directory used for candidate locations; `None` means current user.
        purposes: Invocation purposes assumed when a command does not pass any.
    """

    binary_name: str = DEFAULT_BINARY_NAME
    override_env_key: str = DEFAULT_OVERRIDE_ENV_KEY
    shell: str | None = None
    capture_timeout_seconds: float = DEFAULT_CAPTURE_TIMEOUT_SECONDS
    home: str | None = None
    purposes: tuple[InvocationPurpose, ...] = field(
        default_factory=lambda: (InvocationPurpose.RPC,)
    )

    def validate(self) -> None:
        """Validate settings before any lookup runs."""

        self._require_non_empty(self.binary_name, "binary_name")
        self._require_non_empty(self.override_env_key, "override_env_key")
        if "/" in self.binary_name:
            raise ValueError("`binary_name` must be a file name, not a path.")
        parse_positive_seconds(self.capture_timeout_seconds, "capture_timeout_seconds")
        if not self.purposes:
            raise ValueError("`purposes` must name at least one invocation purpose.")

    def with_overrides(self, **overrides: Any) -> LocatorConfig:
        """Return a validated copy with non-`None` overrides applied."""

        applied = {key: value for key, value in overrides.items() if value is not None}
        updated = replace(self, **applied)
        updated.validate()
        return updated

    @staticmethod
    def _require_non_empty(value: str, field_name: str) -> None:
        """Validate that string fields are not empty."""

        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"`{field_name}` must be a non-empty string.")


def parse_purposes(raw: object, source_label: str) -> tuple[InvocationPurpose, ...]:
    """Parse a comma-separated string or list of purpose tokens."""

    if isinstance(raw, str):
        tokens = [token for token in (part.strip() for part in raw.split(",")) if token]
    elif isinstance(raw, (list, tuple)):
        tokens = [str(item).strip() for item in raw if normalize_optional_string(item)]
    else:
        raise ValueError(
            f"{source_label} field `purposes` must be a list or comma-separated string."
        )

    try:
        parsed = tuple(InvocationPurpose.parse(token) for token in tokens)
    except ValueError as exc:
        raise ValueError(f"{source_label} field `purposes`: {exc}") from exc
    return tuple(dict.fromkeys(parsed))


class ConfigLoader:
    """Factory methods for creating `LocatorConfig` from external sources."""

    _SUPPORTED_YAML_KEYS = frozenset(
        {
            "binary_name",
            "override_env_key",
            "shell",
            "capture_timeout_seconds",
            "home",
            "purposes",
        }
    )
    _ENV_KEYS = {
        "binary_name": "CODEXPATH_BINARY",
        "override_env_key": "CODEXPATH_OVERRIDE_ENV",
        "shell": "CODEXPATH_SHELL",
        "capture_timeout_seconds": "CODEXPATH_CAPTURE_TIMEOUT",
        "home": "CODEXPATH_HOME",
        "purposes": "CODEXPATH_PURPOSES",
    }

    @staticmethod
    def load(
        config_path: Path | None = None, env: Mapping[str, str] | None = None
    ) -> LocatorConfig:
        """Create a validated config with YAML values layered over environment values."""

        payload = ConfigLoader._env_payload(env)
        source_label = "Environment"
        if config_path is not None:
            payload.update(ConfigLoader._yaml_payload(config_path))
            source_label = f"YAML `{config_path}`"
        return ConfigLoader._build_config(payload, source_label)

    @staticmethod
    def from_yaml(path: Path) -> LocatorConfig:
        """Create a validated config from a YAML file."""

        return ConfigLoader._build_config(ConfigLoader._yaml_payload(path), f"YAML `{path}`")

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> LocatorConfig:
        """Create a validated config from `CODEXPATH_*` environment variables."""

        return ConfigLoader._build_config(ConfigLoader._env_payload(env), "Environment")

    @staticmethod
    def _yaml_payload(path: Path) -> dict[str, Any]:
        """Parse a YAML file and enforce a mapping root with supported keys."""

        payload = yaml.safe_load(path.read_text(encoding="utf-8"))
        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping/object.")

        unknown = sorted(
            str(key) for key in set(payload).difference(ConfigLoader._SUPPORTED_YAML_KEYS)
        )
        if unknown:
            key_list = ", ".join(unknown)
            raise ValueError(f"YAML `{path}` includes unsupported key(s): {key_list}.")
        return dict(payload)

    @staticmethod
    def _env_payload(env: Mapping[str, str] | None) -> dict[str, Any]:
        """Collect non-blank `CODEXPATH_*` values keyed by config field name."""

        env_map: Mapping[str, str] = os.environ if env is None else env
        return {
            key: env_map[env_key]
            for key, env_key in ConfigLoader._ENV_KEYS.items()
            if normalize_optional_string(env_map.get(env_key)) is not None
        }

    @staticmethod
    def _build_config(payload: Mapping[str, Any], source_label: str) -> LocatorConfig:
        """Build a validated config from a normalized mapping payload."""

        defaults = LocatorConfig()
        values: dict[str, Any] = {}
        for key in ("binary_name", "override_env_key", "shell", "home"):
            value = ConfigLoader._optional_non_empty_string(payload, key)
            if value is not None:
                values[key] = value

        if "capture_timeout_seconds" in payload:
            try:
                values["capture_timeout_seconds"] = parse_positive_seconds(
                    payload["capture_timeout_seconds"], "capture_timeout_seconds"
                )
            except ValueError as exc:
                raise ValueError(f"{source_label}: {exc}") from exc

        if payload.get("purposes") is not None:
            values["purposes"] = parse_purposes(payload["purposes"], source_label)

        config = replace(defaults, **values)
        try:
            config.validate()
        except ValueError as exc:
            raise ValueError(f"{source_label}: {exc}") from exc
        return config

    @staticmethod
    def _optional_non_empty_string(payload: Mapping[str, Any], key: str) -> str | None:
        """Read an optional string field and normalize blank values to `None`."""

        if key not in payload:
            return None
        return normalize_optional_string(payload[key])
