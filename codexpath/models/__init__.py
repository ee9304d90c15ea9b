"""Shared typed data models for codexpath.

This package contains enums and dataclasses used across resolution modules
to avoid cross-module coupling and circular imports.
"""

from .datatypes import (
    CaptureState,
    InvocationPurpose,
    LoginShellPath,
    PathDebugSnapshot,
    requires_binary_directory,
)

__all__ = [
    "CaptureState",
    "InvocationPurpose",
    "LoginShellPath",
    "PathDebugSnapshot",
    "requires_binary_directory",
]
