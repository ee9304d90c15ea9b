"""Structured resolution logging utilities.

Responsibilities:
- Emit concise, deterministic phase-level logs for capture and resolution.
- Route every line through `loguru` with a plain message-only format.
"""

from __future__ import annotations

import sys
from typing import TextIO

from loguru import logger as _loguru_logger


def _sanitize_context_value(value: object) -> str:
    """Convert context values into stable, shell-safe tokens."""

    raw = str(value).strip()
    if not raw:
        return "none"
    return "".join(
        character if character.isalnum() or character in {"-", "_", ".", ":", "/", "~"} else "_"
        for character in raw
    )


def _format_context(context: dict[str, object]) -> str:
    """Serialize context key/value pairs in deterministic key order."""

    if not context:
        return ""
    tokens = [
        f"{key}={_sanitize_context_value(context[key])}"
        for key in sorted(context.keys())
    ]
    return " " + " ".join(tokens)


class ResolutionLogger:
    """Emit deterministic phase logs for login-shell capture and binary lookup."""

    def __init__(self, sink: TextIO | None = None, level: str = "INFO") -> None:
        """Initialize logger sink and configure deterministic formatting."""

        self._sink = sink or sys.stderr
        _loguru_logger.remove()
        _loguru_logger.add(self._sink, format="{message}", level=level, colorize=False)

    def _emit(self, level: str, event: str, stage: str, **context: object) -> None:
        """Emit one structured runtime log line."""

        line = f"[phase] level={level} stage={stage} event={event}{_format_context(context)}"
        _loguru_logger.log(level, line)

    def log_capture_event(self, event: str, **context: object) -> None:
        """Emit a login-shell capture lifecycle event."""

        level = "WARNING" if event in {"timeout", "launch-failed", "error"} else "INFO"
        self._emit(level, event, "capture", **context)

    def log_resolution(self, source: str, binary: str, path: str | None) -> None:
        """Emit the strategy step that resolved (or missed) the binary."""

        event = "resolved" if path else "miss"
        self._emit("DEBUG", event, "resolve", binary=binary, source=source, path=path or "none")

    def log_callback_failure(self, error_type: str) -> None:
        """Emit a capture-callback failure without its payload."""

        self._emit("ERROR", "callback-failure", "capture", error_type=error_type)
