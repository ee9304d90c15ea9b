"""Core datatypes shared across codexpath modules.

Responsibilities:
- Name the purposes a caller may declare when asking for an environment.
- Represent the read-only diagnostics record shown to users.

Key types:
- `InvocationPurpose`, `CaptureState`, and `PathDebugSnapshot`.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum


LoginShellPath = tuple[str, ...]


class InvocationPurpose(str, Enum):
    """Why a caller needs a resolved subprocess environment."""

    RPC = "rpc"
    INTERACTIVE_TERMINAL = "interactiveTerminal"
    NODE_TOOLING = "nodeTooling"

    @classmethod
    def parse(cls, token: str) -> InvocationPurpose:
        """Parse a purpose from its value, member name, or the `tty` alias."""

        normalized = token.strip().replace("-", "_").lower()
        if normalized == "tty":
            return cls.INTERACTIVE_TERMINAL
        for member in cls:
            if normalized in {member.value.lower(), member.name.lower()}:
                return member
        supported = ", ".join(member.value for member in cls)
        raise ValueError(f"Unknown invocation purpose `{token}`; supported: {supported}, tty.")


_BINARY_AWARE_PURPOSES = frozenset(
    {InvocationPurpose.RPC, InvocationPurpose.INTERACTIVE_TERMINAL}
)


def requires_binary_directory(purposes: Iterable[InvocationPurpose]) -> bool:
    """Return whether any purpose needs the resolved binary's directory on PATH."""

    return any(purpose in _BINARY_AWARE_PURPOSES for purpose in purposes)


class CaptureState(str, Enum):
    """Internal lifecycle of the login-shell capture, for diagnostics only."""

    IDLE = "idle"
    CAPTURING = "capturing"
    CAPTURED = "captured"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class PathDebugSnapshot:
    """Derived, display-only view of the current resolution state.

    Attributes:
        binary_path: Absolute path of the resolved binary, if any.
        effective_path: Colon-joined PATH that would be injected into a subprocess.
        login_shell_path: Colon-joined login-shell PATH, if one was captured.
    """

    binary_path: str | None
    effective_path: str
    login_shell_path: str | None

    @classmethod
    def empty(cls) -> PathDebugSnapshot:
        """Return a snapshot with nothing resolved."""

        return cls(binary_path=None, effective_path="", login_shell_path=None)

    def as_lines(self) -> list[str]:
        """Render deterministic `key: value` rows for display."""

        return [
            f"Binary: {self.binary_path or '(not found)'}",
            f"Effective PATH: {self.effective_path or '(empty)'}",
            f"Login shell PATH: {self.login_shell_path or '(not captured)'}",
        ]
